import random
from typing import Tuple, Type, TypeVar

from esper import World

from dropfour.components.active_mods import ActiveMods
from dropfour.components.board import Board
from dropfour.components.feature_placement import FeaturePlacement
from dropfour.components.game_rules import GameRules
from dropfour.components.match_state import MatchState
from dropfour.components.round_state import RoundState

C = TypeVar("C")


def _singleton(world: World, component_type: Type[C]) -> Tuple[int, C]:
    for entity, component in world.get_component(component_type):
        return entity, component
    raise RuntimeError(f"{component_type.__name__} component not found; was the world built with create_world?")


def get_board(world: World) -> Board:
    return _singleton(world, Board)[1]


def get_round_state(world: World) -> RoundState:
    return _singleton(world, RoundState)[1]


def get_match_state(world: World) -> MatchState:
    return _singleton(world, MatchState)[1]


def get_placement(world: World) -> FeaturePlacement:
    return _singleton(world, FeaturePlacement)[1]


def get_active_mods(world: World) -> ActiveMods:
    return _singleton(world, ActiveMods)[1]


def get_rules(world: World) -> GameRules:
    for _, rules in world.get_component(GameRules):
        return rules
    return GameRules()


def get_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if isinstance(rng, random.Random):
        return rng
    rng = random.Random()
    setattr(world, "random", rng)
    return rng


def replace_round_components(world: World) -> Board:
    """Swap in a fresh Board and FeaturePlacement for a new round."""
    rules = get_rules(world)
    entity, _ = _singleton(world, Board)
    board = Board(rows=rules.rows, cols=rules.cols)
    world.add_component(entity, board)
    world.add_component(entity, FeaturePlacement())
    return board
