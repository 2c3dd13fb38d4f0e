from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Mapping, Sequence

from esper import World

from dropfour.components.game_rules import GameRules
from dropfour.events.bus import EventBus
from dropfour.presentation.bridge import NullPresentation, PresentationBridge
from dropfour.systems.game_flow_system import GameFlowSystem
from dropfour.systems.mod_pipeline import ModPipeline
from dropfour.systems.turn_system import DropResult, TurnSystem
from dropfour.world import create_world


@dataclass(slots=True)
class GameSession:
    """The world plus the systems that drive it, wired together."""

    world: World
    event_bus: EventBus
    pipeline: ModPipeline
    flow: GameFlowSystem
    turns: TurnSystem

    async def drop(self, col: int) -> DropResult:
        return await self.turns.drop(col)


def create_session(
    mods: Sequence[str] | None = (),
    *,
    event_bus: EventBus | None = None,
    presentation: PresentationBridge | None = None,
    rules: GameRules | None = None,
    rng: random.Random | None = None,
    mod_metadata: Mapping[str, Mapping[str, object]] | None = None,
) -> GameSession:
    """Build a session and start a match; pass mods=None to stay in setup."""
    event_bus = event_bus or EventBus()
    world = create_world(event_bus, rules=rules, rng=rng)
    pipeline = ModPipeline(world, event_bus, presentation or NullPresentation())
    flow = GameFlowSystem(world, event_bus, pipeline)
    turns = TurnSystem(world, event_bus, pipeline)
    if mods is not None:
        flow.new_match(mods, mod_metadata=mod_metadata)
    return GameSession(world=world, event_bus=event_bus, pipeline=pipeline, flow=flow, turns=turns)
