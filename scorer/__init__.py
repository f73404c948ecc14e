"""Pickleball scoring engine: rally and side-out rules, undo, server lookup."""

from scorer.history import can_undo, history_depth, undo
from scorer.positions import active_server_id, court_side_for
from scorer.referee import apply_rally_result, initialize, score_call
from scorer.session import MatchSession
from scorer.types import CourtSide, GameMode, MatchState, ScoringType, Side
from scorer.win import evaluate

__all__ = [
    "CourtSide",
    "GameMode",
    "MatchSession",
    "MatchState",
    "ScoringType",
    "Side",
    "active_server_id",
    "apply_rally_result",
    "can_undo",
    "court_side_for",
    "evaluate",
    "history_depth",
    "initialize",
    "score_call",
    "undo",
]
