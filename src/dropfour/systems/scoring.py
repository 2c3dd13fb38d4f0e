import math

from esper import World

from dropfour.components.game_rules import GameRules
from dropfour.systems.state_utils import get_match_state, get_rules


def calculate_round_points(move_count: int, rules: GameRules | None = None) -> int:
    """Points for winning a round after move_count discs were placed.

    Each player move under par is worth a bonus; the result is clamped to the
    configured minimum and maximum.
    """
    rules = rules or GameRules()
    player_moves = math.ceil(move_count / 2)
    bonus = max(0, (rules.par_player_moves - player_moves) * rules.points_per_saved_move)
    return min(rules.max_round_points, max(rules.min_round_points, rules.min_round_points + bonus))


def award_round(world: World, winner: int, move_count: int) -> int:
    """Credit a round win and return the points awarded."""
    rules = get_rules(world)
    match_state = get_match_state(world)
    points = calculate_round_points(move_count, rules)
    match_state.scores[winner] = match_state.scores.get(winner, 0) + points
    match_state.round_wins[winner] = match_state.round_wins.get(winner, 0) + 1
    return points


def reached_championship(world: World, player: int) -> bool:
    match_state = get_match_state(world)
    return match_state.scores.get(player, 0) >= match_state.championship_threshold
