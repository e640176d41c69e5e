"""
Deciding the overall winner once both rounds have been played.

Player 1 plays Order in round 1 and Player 2 plays Order in round 2.
"""

from typing import Sequence

from src.core.shared_types import Side, Winner

ROUND_PLAYERS: tuple[Winner, Winner] = (Winner.PLAYER_1, Winner.PLAYER_2)


def resolve_winner(
    round_outcomes: Sequence[Side],
    moves: Sequence[int],
    four_in_a_row: Sequence[int],
) -> Winner:
    """
    Compare the two rounds.
    ----

    1. The same side achieved its goal in both rounds --> the player with that number wins outright.
    2. Otherwise the round played in fewer moves wins, for the player number of that round.
    3. Equal number of moves --> the round with fewer four-in-a-rows wins, for the player number of that round.
    4. Still equal --> Draw.
    """
    first, second = round_outcomes
    if first == second:
        return Winner(f"Player {first.value}")

    if moves[0] != moves[1]:
        return _player_of_smaller(moves)

    if four_in_a_row[0] != four_in_a_row[1]:
        return _player_of_smaller(four_in_a_row)

    return Winner.DRAW


def _player_of_smaller(per_round: Sequence[int]) -> Winner:
    return ROUND_PLAYERS[0] if per_round[0] < per_round[1] else ROUND_PLAYERS[1]
