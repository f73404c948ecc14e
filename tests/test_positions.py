"""Tests for the active-server resolver."""

from dataclasses import replace

import pytest

from scorer.positions import active_server_id, court_side_for
from scorer.referee import apply_rally_result, initialize
from scorer.types import CourtSide, Side


def _play(state, *winners):
    for w in winners:
        state = apply_rally_result(state, w)
    return state


@pytest.mark.parametrize("score, expected", [
    (0, CourtSide.RIGHT),
    (1, CourtSide.LEFT),
    (6, CourtSide.RIGHT),
    (11, CourtSide.LEFT),
])
def test_court_side_for(score, expected):
    assert court_side_for(score) == expected


@pytest.mark.parametrize("scoring_type", ["rally", "sideout"])
def test_singles_has_no_active_server(scoring_type):
    assert active_server_id(initialize("singles", scoring_type)) is None


def test_active_server_is_deterministic():
    state = _play(initialize("doubles", "sideout"), "opponent", "opponent", "me")
    assert active_server_id(state) == active_server_id(state)


# ---------- RALLY ----------

@pytest.mark.parametrize("my_score, expected", [
    (0, "A"), (1, "B"), (2, "A"), (7, "B"),
])
def test_rally_absolute_parity(my_score, expected):
    """Even score serves from the right slot, odd from the left."""
    state = replace(initialize("doubles", "rally"), my_score=my_score)
    assert active_server_id(state) == expected


def test_rally_server_follows_swap():
    """After scoring, the same player serves from the other court."""
    state = initialize("doubles", "rally")
    assert active_server_id(state) == "A"
    state = _play(state, "me")
    assert state.my_players == ("B", "A")
    assert active_server_id(state) == "A"


def test_rally_opponent_serving():
    state = _play(initialize("doubles", "rally"), "opponent")
    assert state.opponent_score == 1
    assert active_server_id(state) == "D"


# ---------- SIDE-OUT ----------

def test_sideout_opening_server_is_right_court():
    """0-0-2 start: the lone first server is in the right court."""
    assert active_server_id(initialize("doubles", "sideout")) == "A"


def test_sideout_opening_server_keeps_serving_after_points():
    state = initialize("doubles", "sideout")
    for _ in range(3):
        state = _play(state, "me")
        assert active_server_id(state) == "A"


def test_sideout_server_one_then_partner():
    """After a side-out, server 1 serves; after their loss, the partner does."""
    state = _play(initialize("doubles", "sideout"), "opponent")
    assert active_server_id(state) == "C"

    state = _play(state, "opponent")  # C scores and moves left
    assert state.opponent_players == ("D", "C")
    assert active_server_id(state) == "C"

    state = _play(state, "me")  # server 1 loses, server 2 up
    assert state.server_number == 2
    assert active_server_id(state) == "D"

    state = _play(state, "opponent")  # D scores and moves left
    assert state.opponent_players == ("C", "D")
    assert active_server_id(state) == "D"


def test_sideout_uses_relative_parity():
    """A turn starting on an odd score still begins from the right court."""
    state = _play(initialize("doubles", "sideout"), "opponent", "opponent", "me", "me")
    assert state.server == Side.ME
    state = _play(state, "me", "opponent", "opponent")
    assert state.server == Side.OPPONENT
    assert state.opponent_score == 1
    assert state.serving_team_start_score == 1
    assert active_server_id(state) == state.opponent_players[0]


def test_server_two_exception_cleared_inverts():
    state = replace(
        initialize("doubles", "sideout"),
        server_number=2,
        is_first_server_exception=False,
    )
    assert active_server_id(state) == "B"
    assert active_server_id(replace(state, my_score=1)) == "A"
