import random

from esper import World

from .events.bus import EventBus
from dropfour.components.active_mods import ActiveMods
from dropfour.components.board import Board
from dropfour.components.feature_placement import FeaturePlacement
from dropfour.components.game_rules import GameRules
from dropfour.components.match_state import MatchState
from dropfour.components.round_state import RoundState
from dropfour.mods.factory import ensure_default_mods_registered


def create_world(
    event_bus: EventBus | None = None,
    *,
    rules: GameRules | None = None,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding the engine singletons.

    The board and feature placement are replaced at every round start; the
    match and rule entities live for the whole match.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    rules = rules or GameRules()

    # Register core mod definitions if not already present.
    ensure_default_mods_registered()

    world.create_entity(
        rules,
        MatchState(championship_threshold=rules.championship_threshold),
        ActiveMods(),
    )
    world.create_entity(
        Board(rows=rules.rows, cols=rules.cols),
        FeaturePlacement(),
        RoundState(),
    )
    return world
