"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy import JSON, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[list[list[str]]] = mapped_column(JSON)
    round: Mapped[int]
    moves: Mapped[list[int]] = mapped_column(JSON)
    victory: Mapped[list[int]] = mapped_column(JSON)
    number_of_4: Mapped[list[int]] = mapped_column(JSON)
    current_player: Mapped[int]
    game_over: Mapped[bool] = mapped_column(default=False)
    winner: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )
