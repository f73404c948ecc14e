"""Game-over check: first to WIN_SCORE, win by WIN_BY."""

from typing import Optional

from scorer import rules
from scorer.types import Side


def evaluate(
    my_score: int,
    opponent_score: int,
    win_score: int = rules.WIN_SCORE,
    win_by: int = rules.WIN_BY,
) -> Optional[Side]:
    """Return the side that has clinched the game, or None while it goes on.

    A side wins once it has at least ``win_score`` points and leads by at
    least ``win_by``. At 10-10 play continues until someone is 2 clear.
    """
    if my_score >= win_score and my_score >= opponent_score + win_by:
        return Side.ME
    if opponent_score >= win_score and opponent_score >= my_score + win_by:
        return Side.OPPONENT
    return None
