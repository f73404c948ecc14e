"""Core data types for the pickleball scorer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scorer import rules


class Side(str, Enum):
    """One of the two sides of the net."""
    ME = "me"
    OPPONENT = "opponent"

    def other(self) -> "Side":
        return Side.OPPONENT if self == Side.ME else Side.ME


class GameMode(str, Enum):
    SINGLES = "singles"
    DOUBLES = "doubles"


class ScoringType(str, Enum):
    RALLY = "rally"
    SIDEOUT = "sideout"


class CourtSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class MatchState:
    """Full state of one game.

    Transitions never mutate a state they receive; they build a copy and
    return it. ``history`` holds flattened snapshots (each with an empty
    history of its own), oldest first.
    """
    mode: GameMode = GameMode.SINGLES
    scoring_type: ScoringType = ScoringType.RALLY
    my_score: int = 0
    opponent_score: int = 0
    server: Side = Side.ME
    server_number: int = 1  # 1 or 2, only varies in side-out doubles
    my_players: tuple = rules.MY_PLAYERS  # (right, left)
    opponent_players: tuple = rules.OPPONENT_PLAYERS  # (right, left)
    my_court_side: CourtSide = CourtSide.RIGHT
    opponent_court_side: CourtSide = CourtSide.RIGHT
    is_first_server_exception: bool = False
    serving_team_start_score: int = 0
    winner: Optional[Side] = None
    history: list = field(default_factory=list)

    def score_of(self, side: Side) -> int:
        return self.my_score if side == Side.ME else self.opponent_score

    def players_of(self, side: Side) -> tuple:
        return self.my_players if side == Side.ME else self.opponent_players

    def copy(self) -> "MatchState":
        return MatchState(
            mode=self.mode,
            scoring_type=self.scoring_type,
            my_score=self.my_score,
            opponent_score=self.opponent_score,
            server=self.server,
            server_number=self.server_number,
            my_players=self.my_players,
            opponent_players=self.opponent_players,
            my_court_side=self.my_court_side,
            opponent_court_side=self.opponent_court_side,
            is_first_server_exception=self.is_first_server_exception,
            serving_team_start_score=self.serving_team_start_score,
            winner=self.winner,
            history=list(self.history),
        )

    def snapshot(self) -> "MatchState":
        """Copy of this state without its history, as stored on the stack."""
        snap = self.copy()
        snap.history = []
        return snap
