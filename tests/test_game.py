"""Tests for the game simulation."""

import random

import pytest

from scorer.history import history_depth
from scorer.types import GameMode, ScoringType, Side
from sim.game import PLAYSTYLES, GameResult, SimTeam, simulate_game, simulate_rally


def test_all_playstyles_exist():
    """All documented playstyles should be available."""
    for key in ["aggressive", "defensive", "allround", "beginner", "pro"]:
        assert key in PLAYSTYLES, f"Missing playstyle: {key}"


def test_team_creation():
    team = SimTeam("Test", "pro")
    assert team.name == "Test"
    assert team.label == "Professional"
    assert 0 < team.skill <= 1.0


@pytest.mark.parametrize("style_a", list(PLAYSTYLES))
@pytest.mark.parametrize("style_b", ["beginner", "pro"])
def test_win_probability_bounded(style_a, style_b):
    a = SimTeam("A", style_a)
    b = SimTeam("B", style_b)
    for serving in (True, False):
        p = a.win_probability(b, serving)
        assert 0.0 < p < 1.0


def test_serving_helps():
    a = SimTeam("A", "allround")
    b = SimTeam("B", "allround")
    assert a.win_probability(b, serving=True) > a.win_probability(b, serving=False)


def test_rally_produces_side():
    random.seed(42)
    winner = simulate_rally(SimTeam("A", "allround"), SimTeam("B", "allround"), Side.ME)
    assert winner in (Side.ME, Side.OPPONENT)


@pytest.mark.parametrize("mode", list(GameMode))
@pytest.mark.parametrize("scoring_type", list(ScoringType))
def test_game_completes(mode, scoring_type):
    """A full game should always produce a legal winner."""
    random.seed(42)
    result = simulate_game(
        SimTeam("Me", "aggressive"), SimTeam("Opponent", "defensive"),
        mode, scoring_type,
    )
    assert isinstance(result, GameResult)
    state = result.state
    assert state.winner in (Side.ME, Side.OPPONENT)

    w_score = state.my_score if state.winner == Side.ME else state.opponent_score
    l_score = state.opponent_score if state.winner == Side.ME else state.my_score
    assert w_score >= 11
    assert w_score - l_score >= 2


def test_timeline_matches_rallies():
    random.seed(7)
    result = simulate_game(SimTeam("Me", "allround"), SimTeam("Opponent", "allround"))
    assert len(result.timeline) == len(result.rallies)
    assert result.timeline[-1] == result.state
    assert history_depth(result.state) == len(result.rallies)


def test_game_stats_populated():
    random.seed(42)
    result = simulate_game(
        SimTeam("Me", "allround"), SimTeam("Opponent", "allround"),
        "doubles", "sideout",
    )
    s = result.stats
    for key in ("total_rallies", "side_outs", "second_servers",
                "me_longest_run", "opponent_longest_run", "final_call"):
        assert key in s
    assert s["me_points"] == result.state.my_score
    assert s["opponent_points"] == result.state.opponent_score
    assert s["me_rallies_won"] + s["opponent_rallies_won"] == s["total_rallies"]
    assert s["winner"] == result.state.winner.value
    assert s["final_call"].count("-") == 2


def test_rally_scoring_every_rally_scores():
    random.seed(3)
    result = simulate_game(
        SimTeam("Me", "allround"), SimTeam("Opponent", "allround"),
        "singles", "rally",
    )
    s = result.stats
    assert s["me_points"] + s["opponent_points"] == s["total_rallies"]


def test_max_rallies_guard():
    random.seed(42)
    with pytest.raises(RuntimeError):
        simulate_game(SimTeam("Me", "allround"), SimTeam("Opponent", "allround"), max_rallies=1)


def test_deterministic_with_seed():
    random.seed(99)
    r1 = simulate_game(SimTeam("Me", "pro"), SimTeam("Opponent", "beginner"))
    random.seed(99)
    r2 = simulate_game(SimTeam("Me", "pro"), SimTeam("Opponent", "beginner"))
    assert r1.rallies == r2.rallies
    assert r1.state == r2.state
