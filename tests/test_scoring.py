import pytest

from dropfour.components.game_rules import GameRules
from dropfour.constants import PLAYER_1, PLAYER_2
from dropfour.events.bus import EventBus
from dropfour.systems.scoring import award_round, calculate_round_points, reached_championship
from dropfour.systems.state_utils import get_match_state
from dropfour.world import create_world


@pytest.mark.parametrize(
    "move_count, expected",
    [
        (7, 30),
        (8, 30),
        (24, 26),
        (30, 20),
        (40, 10),
        (54, 10),
    ],
)
def test_round_points_follow_par_and_clamp(move_count, expected):
    assert calculate_round_points(move_count) == expected


def test_round_points_honour_custom_rules():
    rules = GameRules(min_round_points=5, max_round_points=50, par_player_moves=10, points_per_saved_move=3)
    # ceil(9 / 2) = 5 player moves, 5 under par.
    assert calculate_round_points(9, rules) == 20
    assert calculate_round_points(1, rules) == 32
    assert calculate_round_points(60, rules) == 5


def test_award_round_accumulates_points_and_wins():
    world = create_world(EventBus())
    assert award_round(world, PLAYER_2, 8) == 30
    assert award_round(world, PLAYER_2, 40) == 10
    state = get_match_state(world)
    assert state.scores == {PLAYER_1: 0, PLAYER_2: 40}
    assert state.round_wins == {PLAYER_1: 0, PLAYER_2: 2}


def test_championship_threshold_is_inclusive():
    world = create_world(EventBus(), rules=GameRules(championship_threshold=60))
    award_round(world, PLAYER_1, 7)
    assert not reached_championship(world, PLAYER_1)
    award_round(world, PLAYER_1, 7)
    assert reached_championship(world, PLAYER_1)
    assert not reached_championship(world, PLAYER_2)
