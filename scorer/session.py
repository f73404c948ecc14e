import logging
import threading
from typing import Iterable, List, Optional

from scorer.history import undo as undo_state
from scorer.positions import active_server_id
from scorer.referee import apply_rally_result, initialize, score_call
from scorer.types import GameMode, MatchState, ScoringType, Side

log = logging.getLogger(__name__)


class MatchSession:
    """
    Single local game being scored.

    Responsibilities:
    - Own the one live MatchState and replace it atomically
    - Record rally winners (single or bulk, bulk is atomic)
    - Undo, reset, rematch, start a new game
    - Log serve changes and the end of the game
    """

    def __init__(self, mode=GameMode.DOUBLES, scoring_type=ScoringType.RALLY):
        self._lock = threading.Lock()
        self._state = initialize(mode, scoring_type)
        self._events: List[Side] = []

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._state.mode

    @property
    def scoring_type(self) -> ScoringType:
        return self._state.scoring_type

    @property
    def is_finished(self) -> bool:
        return self._state.winner is not None

    @property
    def events(self) -> List[Side]:
        return list(self._events)

    def active_server_id(self) -> Optional[str]:
        return active_server_id(self._state)

    def score_call(self) -> str:
        return score_call(self._state)

    # ---------------------------------------------------------
    # Core API
    # ---------------------------------------------------------

    def record(self, winner) -> MatchState:
        """Score one rally. Rallies after the game is decided are ignored."""
        winner = Side(winner)

        with self._lock:
            before = self._state
            after = apply_rally_result(before, winner)
            if before.winner is None:
                self._events.append(winner)
            self._state = after

        self._log_transition(before, after, winner)
        return after

    def record_many(self, winners: Iterable) -> MatchState:
        """
        Replay a sequence of rally winners.
        Atomic: if any winner is invalid -> no state mutation.
        """
        sides = [Side(w) for w in winners]

        with self._lock:
            state = self._state
            recorded = []
            for side in sides:
                after = apply_rally_result(state, side)
                if state.winner is None:
                    recorded.append(side)
                state = after

            self._state = state
            self._events.extend(recorded)

        log.info("Replayed %d rallies, score %s", len(recorded), score_call(state))
        return state

    def undo(self) -> MatchState:
        with self._lock:
            if not self._state.history:
                log.debug("Nothing to undo")
                return self._state
            self._state = undo_state(self._state)
            if self._events:
                self._events.pop()

        log.info("Undo, score back to %s", score_call(self._state))
        return self._state

    def reset(self) -> MatchState:
        """Restart the current game with the same mode and scoring."""
        return self.new_game(self.mode, self.scoring_type)

    def rematch(self) -> MatchState:
        return self.reset()

    def new_game(self, mode, scoring_type) -> MatchState:
        fresh = initialize(mode, scoring_type)
        with self._lock:
            self._state = fresh
            self._events = []

        log.info("New %s game, %s scoring", fresh.mode.value, fresh.scoring_type.value)
        return fresh

    # ---------------------------------------------------------
    # Logging
    # ---------------------------------------------------------

    def _log_transition(self, before: MatchState, after: MatchState, winner: Side):
        if before.winner is not None:
            log.debug("Game already won by %s, rally ignored", before.winner.value)
            return

        log.debug("Rally to %s: %s", winner.value, score_call(after))

        if after.server != before.server:
            log.info("Side out, %s to serve", after.server.value)
        elif after.server_number != before.server_number:
            log.info("Second server, %s", score_call(after))

        if after.winner is not None:
            log.info(
                "Game to %s, %d-%d",
                after.winner.value, after.my_score, after.opponent_score,
            )
