"""One-step undo over the snapshots carried in MatchState.history."""

from scorer.types import MatchState


def undo(state: MatchState) -> MatchState:
    """Return the state before the last scored rally.

    Snapshots are stored with empty histories, so the restored state gets
    the remaining stack (the current history minus its top) reattached.
    With nothing to undo the state is returned unchanged.
    """
    if not state.history:
        return state

    previous = state.history[-1].copy()
    previous.history = list(state.history[:-1])
    return previous


def can_undo(state: MatchState) -> bool:
    return bool(state.history)


def history_depth(state: MatchState) -> int:
    return len(state.history)
