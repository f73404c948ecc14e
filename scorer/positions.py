"""Server position resolver: which player on the serving team has the ball."""

from typing import Optional

from scorer.types import CourtSide, GameMode, MatchState, ScoringType

_RIGHT = 0
_LEFT = 1


def court_side_for(score: int) -> CourtSide:
    """Even score serves from the right court, odd from the left."""
    return CourtSide.RIGHT if score % 2 == 0 else CourtSide.LEFT


def active_server_id(state: MatchState) -> Optional[str]:
    """Identifier of the player currently serving, or None in singles.

    Rally doubles: the serving team's absolute score parity picks the slot.

    Side-out doubles: parity is counted from the score the team had when
    its service turn began. Server 1 serves from the right on even relative
    parity; server 2 is the partner, so the slots invert. During the opening
    sequence of a game the lone first server resolves like server 1.
    """
    if state.mode == GameMode.SINGLES:
        return None

    players = state.players_of(state.server)
    score = state.score_of(state.server)

    if state.scoring_type == ScoringType.RALLY:
        return players[_RIGHT] if score % 2 == 0 else players[_LEFT]

    relative = score - state.serving_team_start_score
    even = relative % 2 == 0

    if state.server_number == 2 and not state.is_first_server_exception:
        return players[_LEFT] if even else players[_RIGHT]
    return players[_RIGHT] if even else players[_LEFT]
