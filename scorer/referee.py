"""Rules engine: turns a rally result into the next match state.

Implements both pickleball scoring regimes:
- Rally scoring: every rally scores, the winner serves next
- Side-out scoring: only the serving side scores
- Doubles side-out: two servers per team, but the team serving first in a
  game only gets one ("0-0-2" start)
- Game to 11, win by 2
"""

from scorer import rules
from scorer.positions import court_side_for
from scorer.types import GameMode, MatchState, ScoringType, Side
from scorer.win import evaluate


def initialize(mode, scoring_type) -> MatchState:
    """Create a new game at 0-0 with my side serving.

    Args:
        mode: GameMode or its value ("singles" / "doubles").
        scoring_type: ScoringType or its value ("rally" / "sideout").

    Raises:
        ValueError: if either argument is not a known value.
    """
    mode = GameMode(mode)
    scoring_type = ScoringType(scoring_type)

    first_server_exception = (
        mode == GameMode.DOUBLES and scoring_type == ScoringType.SIDEOUT
    )

    return MatchState(
        mode=mode,
        scoring_type=scoring_type,
        my_score=0,
        opponent_score=0,
        server=Side.ME,
        server_number=rules.FIRST_SERVER_NUMBER if first_server_exception else 1,
        my_players=rules.MY_PLAYERS,
        opponent_players=rules.OPPONENT_PLAYERS,
        is_first_server_exception=first_server_exception,
        serving_team_start_score=0,
        winner=None,
        history=[],
    )


def apply_rally_result(state: MatchState, winner) -> MatchState:
    """Score one rally won by ``winner`` and return the new state.

    The incoming state is never modified. The pre-rally state is pushed onto
    the returned state's history so the rally can be undone.

    Once a game has a winner further rallies are ignored: the returned copy
    is identical to the input, history included.

    Raises:
        ValueError: if ``winner`` is not a Side or side value.
    """
    winner = Side(winner)
    m = state.copy()

    if m.winner is not None:
        return m  # Game already over

    m.history.append(state.snapshot())

    if m.mode == GameMode.SINGLES:
        if m.scoring_type == ScoringType.RALLY:
            _singles_rally(m, winner)
        else:
            _singles_sideout(m, winner)
    else:
        if m.scoring_type == ScoringType.RALLY:
            _doubles_rally(m, winner)
        else:
            _doubles_sideout(m, winner)

    m.winner = evaluate(m.my_score, m.opponent_score)
    return m


def score_call(state: MatchState) -> str:
    """The score as called before a serve: server's score first.

    Side-out doubles appends the server number, e.g. "0 - 0 - 2".
    """
    serving = state.score_of(state.server)
    receiving = state.score_of(Side(state.server).other())

    if state.mode == GameMode.DOUBLES and state.scoring_type == ScoringType.SIDEOUT:
        return f"{serving} - {receiving} - {state.server_number}"
    return f"{serving} - {receiving}"


# =========================================================
# SCORING SUB-RULES (mutate the working copy in place)
# =========================================================

def _award_point(m: MatchState, side: Side):
    if side == Side.ME:
        m.my_score += 1
    else:
        m.opponent_score += 1


def _swap_players(m: MatchState, side: Side):
    """Serving team scored: partners switch right and left courts."""
    if side == Side.ME:
        right, left = m.my_players
        m.my_players = (left, right)
    else:
        right, left = m.opponent_players
        m.opponent_players = (left, right)


def _update_singles_positions(m: MatchState):
    m.my_court_side = court_side_for(m.my_score)
    m.opponent_court_side = court_side_for(m.opponent_score)


def _singles_rally(m: MatchState, winner: Side):
    _award_point(m, winner)
    if winner != m.server:
        m.server = winner
    _update_singles_positions(m)


def _singles_sideout(m: MatchState, winner: Side):
    if winner == m.server:
        _award_point(m, winner)
    else:
        m.server = winner
    _update_singles_positions(m)


def _doubles_rally(m: MatchState, winner: Side):
    _award_point(m, winner)
    if winner == m.server:
        # Same player keeps serving, now from the other court
        _swap_players(m, winner)
    else:
        m.server = winner
    m.server_number = 1


def _doubles_sideout(m: MatchState, winner: Side):
    if winner == m.server:
        _award_point(m, winner)
        _swap_players(m, winner)
        return

    # Serving team lost the rally: no point, no swap
    if m.server_number == 1:
        m.server_number = 2
        return

    m.server = winner
    m.server_number = 1
    m.is_first_server_exception = False
    m.serving_team_start_score = m.score_of(winner)
