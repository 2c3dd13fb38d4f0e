from __future__ import annotations

import logging
from typing import List, Mapping, Sequence

from esper import World

from dropfour.errors import MatchSetupError
from dropfour.events.bus import (
    EVENT_MOD_ACTIVATED,
    EVENT_MOD_TRIGGERED,
    EVENT_MOD_UNPLACED,
    EventBus,
)
from dropfour.mods.base import BoardMod, ModEffectResult
from dropfour.mods.factory import create_mod
from dropfour.presentation.bridge import NullPresentation, PresentationBridge
from dropfour.systems.board_handle import BoardHandle
from dropfour.systems.state_utils import get_active_mods, get_match_state, get_round_state, get_rules

logger = logging.getLogger(__name__)


class ModPipeline:
    """Owns the active mods and runs their hooks in selection order.

    Hooks run one at a time; each after-drop hook is awaited to completion
    before the next one sees the board.
    """

    def __init__(self, world: World, event_bus: EventBus, presentation: PresentationBridge | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self.presentation = presentation or NullPresentation()
        self.handle = BoardHandle(world)

    @property
    def mods(self) -> List[BoardMod]:
        return get_active_mods(self.world).mods

    def activate(
        self,
        slugs: Sequence[str],
        metadata: Mapping[str, Mapping[str, object]] | None = None,
    ) -> List[BoardMod]:
        """Replace the active mod set for the match."""
        rules = get_rules(self.world)
        slugs = list(slugs)
        if len(slugs) > rules.max_active_mods:
            raise MatchSetupError(f"At most {rules.max_active_mods} mods can be active, got {len(slugs)}")
        if len(set(slugs)) != len(slugs):
            raise MatchSetupError(f"Duplicate mod selection: {slugs}")
        metadata = metadata or {}
        # Build every instance before touching state so a bad slug leaves the old set intact.
        instances = [create_mod(slug, metadata.get(slug)) for slug in slugs]

        active = get_active_mods(self.world)
        active.mods = instances
        get_match_state(self.world).active_mod_slugs = list(slugs)
        for mod in instances:
            mod.on_activate(self.handle)
            logger.info("Activated mod %s", mod.display_name)
            self.event_bus.emit(EVENT_MOD_ACTIVATED, slug=mod.slug)
        return instances

    def start_round(self) -> None:
        """Let each mod claim its hidden features on the fresh board."""
        for mod in self.mods:
            mod.on_round_start(self.handle)
            placed = len(mod.claimed_positions(self.handle))
            logger.debug("%s claimed %d position(s)", mod.display_name, placed)
            if placed == 0:
                self.event_bus.emit(EVENT_MOD_UNPLACED, slug=mod.slug, placed=0)

    async def after_drop(
        self,
        row: int,
        col: int,
        player: int,
        *,
        generation: int | None = None,
    ) -> List[ModEffectResult]:
        """Run each mod's after-drop hook in order.

        When generation is given and the round is replaced while a hook is
        suspended, the remaining hooks are skipped and nothing more is reported.
        """
        results: List[ModEffectResult] = []
        for mod in list(self.mods):
            result = await mod.on_after_drop(self.handle, self.presentation, row, col, player)
            if generation is not None and get_round_state(self.world).generation != generation:
                logger.debug("Round replaced during %s effect; skipping remaining hooks", mod.display_name)
                break
            if result is None:
                continue
            results.append(result)
            self.event_bus.emit(EVENT_MOD_TRIGGERED, slug=mod.slug, result=result)
        return results

    def claims(self) -> dict[str, list[tuple[int, int]]]:
        return {mod.slug: sorted(mod.claimed_positions(self.handle)) for mod in self.mods}
