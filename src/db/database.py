"""Create the database engine and sessions"""

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base


def create_db_engine(settings: Settings) -> Engine:
    """
    SQLite needs `check_same_thread=False`: requests are served from a thread pool.
    An in-memory database only exists for a single connection, so that connection is shared through a StaticPool.
    """
    url = settings.database_url
    kwargs: dict = {"echo": settings.echo_sql}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def create_session(engine: Engine) -> Session:
    session_factory = sessionmaker(autoflush=False, bind=engine)
    return session_factory()
