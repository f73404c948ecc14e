"""Game simulation: random rally outcomes fed through the scoring engine.

Each rally is decided by a single weighted coin flip using the two teams'
skill ratings, with a small edge to the serving side. The engine does all the
scoring, so a simulated game follows exactly the same rules as a scored one:
- Rally or side-out scoring
- Singles or doubles (two servers per team in side-out doubles)
- Game to 11, win by 2
"""

import logging
import random
from dataclasses import dataclass, field

from scorer.referee import apply_rally_result, initialize, score_call
from scorer.positions import active_server_id
from scorer.types import GameMode, MatchState, ScoringType, Side

log = logging.getLogger(__name__)


# Team playstyle presets
PLAYSTYLES = {
    "aggressive": {
        "label": "Aggressive",
        "skill": 0.62,
        "serve_edge": 0.06,
    },
    "defensive": {
        "label": "Defensive",
        "skill": 0.58,
        "serve_edge": 0.02,
    },
    "allround": {
        "label": "All-Round",
        "skill": 0.60,
        "serve_edge": 0.04,
    },
    "beginner": {
        "label": "Beginner",
        "skill": 0.40,
        "serve_edge": 0.01,
    },
    "pro": {
        "label": "Professional",
        "skill": 0.80,
        "serve_edge": 0.05,
    },
}


class SimTeam:
    """A simulated player or doubles team."""

    def __init__(self, name: str, playstyle: str):
        """Create a team.

        Args:
            name: Display name.
            playstyle: Key from PLAYSTYLES.
        """
        self.name = name
        preset = PLAYSTYLES[playstyle]
        self.playstyle = playstyle
        self.label = preset["label"]
        self.skill = preset["skill"]
        self.serve_edge = preset["serve_edge"]

    def win_probability(self, opponent: "SimTeam", serving: bool) -> float:
        """Chance this team wins a rally against ``opponent``."""
        total = self.skill + opponent.skill
        p = self.skill / total if total > 0 else 0.5
        if serving:
            p += self.serve_edge
        else:
            p -= opponent.serve_edge
        return max(0.01, min(0.99, p))


@dataclass
class GameResult:
    """Full simulated game: final state plus every intermediate one."""
    state: MatchState
    rallies: list                                  # list[Side], rally winners
    timeline: list = field(default_factory=list)   # list[MatchState] after each rally
    me: SimTeam = None
    opponent: SimTeam = None
    stats: dict = field(default_factory=dict)


def simulate_rally(me: SimTeam, opponent: SimTeam, server: Side) -> Side:
    """Decide one rally. Returns the side that won it."""
    p_me = me.win_probability(opponent, serving=server == Side.ME)
    return Side.ME if random.random() < p_me else Side.OPPONENT


def simulate_game(
    me: SimTeam,
    opponent: SimTeam,
    mode=GameMode.DOUBLES,
    scoring_type=ScoringType.RALLY,
    max_rallies: int = 500,
) -> GameResult:
    """Simulate a full game to 11 points (win by 2).

    Raises:
        RuntimeError: if no winner emerges within ``max_rallies``.
    """
    state = initialize(mode, scoring_type)
    rallies: list[Side] = []
    timeline: list[MatchState] = []

    while state.winner is None:
        if len(rallies) >= max_rallies:
            raise RuntimeError(
                f"No winner after {max_rallies} rallies ({score_call(state)})"
            )

        winner = simulate_rally(me, opponent, state.server)
        rallies.append(winner)
        state = apply_rally_result(state, winner)
        timeline.append(state)

    log.info(
        "Simulated %s/%s game: %d-%d after %d rallies",
        state.mode.value, state.scoring_type.value,
        state.my_score, state.opponent_score, len(rallies),
    )

    return GameResult(
        state=state,
        rallies=rallies,
        timeline=timeline,
        me=me,
        opponent=opponent,
        stats=_compute_game_stats(state, rallies, timeline),
    )


def _compute_game_stats(state: MatchState, rallies: list, timeline: list) -> dict:
    """Compute single-game statistics from the rally-by-rally timeline."""
    side_outs = 0
    second_servers = 0
    longest_run = {Side.ME: 0, Side.OPPONENT: 0}
    run_side = None
    run = 0

    previous = initialize(state.mode, state.scoring_type)
    for current in timeline:
        if current.server != previous.server:
            side_outs += 1
        elif current.server_number > previous.server_number:
            second_servers += 1

        point_to = None
        if current.my_score > previous.my_score:
            point_to = Side.ME
        elif current.opponent_score > previous.opponent_score:
            point_to = Side.OPPONENT

        if point_to is not None:
            run = run + 1 if point_to == run_side else 1
            run_side = point_to
            longest_run[point_to] = max(longest_run[point_to], run)

        previous = current

    me_rallies = sum(1 for r in rallies if r == Side.ME)

    return {
        "total_rallies": len(rallies),
        "me_rallies_won": me_rallies,
        "opponent_rallies_won": len(rallies) - me_rallies,
        "me_points": state.my_score,
        "opponent_points": state.opponent_score,
        "side_outs": side_outs,
        "second_servers": second_servers,
        "me_longest_run": longest_run[Side.ME],
        "opponent_longest_run": longest_run[Side.OPPONENT],
        "winner": state.winner.value if state.winner else None,
        "final_call": score_call(state),
        "final_server_id": active_server_id(state),
    }
