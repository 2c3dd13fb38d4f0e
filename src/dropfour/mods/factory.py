from __future__ import annotations

from typing import Mapping

from dropfour.mods.alien import AlienMod
from dropfour.mods.base import BoardMod
from dropfour.mods.bombs import BombsMod
from dropfour.mods.jackpot import JackpotMod
from dropfour.mods.registry import ModDefinition, ModRegistry, default_mod_registry

BUILT_IN_MODS = (
    ModDefinition(
        slug=BombsMod.slug,
        display_name="Bombs",
        mod_type=BombsMod,
        emoji="\N{BOMB}",
        description="Hidden bombs blow away some of your own discs.",
        default_metadata={
            "bomb_percentage": 0.15,
            "discs_to_remove": 2,
        },
    ),
    ModDefinition(
        slug=JackpotMod.slug,
        display_name="Jackpot",
        mod_type=JackpotMod,
        emoji="\N{SLOT MACHINE}",
        description="Find the jackpot and the whole column becomes yours.",
        default_metadata={
            "jackpot_count": 1,
        },
    ),
    ModDefinition(
        slug=AlienMod.slug,
        display_name="Aliens",
        mod_type=AlienMod,
        emoji="\N{EXTRATERRESTRIAL ALIEN}",
        description="A hidden UFO abducts discs from both players and drops them elsewhere.",
        default_metadata={
            "slot_count": 1,
            "min_abducted": 4,
            "max_abducted": 5,
        },
    ),
)


def ensure_default_mods_registered(registry: ModRegistry | None = None) -> None:
    """Add the built-in mods to registry once; later calls are no-ops."""
    if registry is None:
        registry = default_mod_registry
    for definition in BUILT_IN_MODS:
        if definition.slug not in registry:
            registry.add(definition)


def create_mod(
    slug: str,
    metadata: Mapping[str, object] | None = None,
    *,
    registry: ModRegistry | None = None,
) -> BoardMod:
    """Instantiate the mod registered under slug, applying metadata overrides."""
    if registry is None:
        ensure_default_mods_registered()
        registry = default_mod_registry
    return registry.lookup(slug).instantiate(metadata)


def available_mods(registry: ModRegistry | None = None) -> list[ModDefinition]:
    if registry is None:
        registry = default_mod_registry
    ensure_default_mods_registered(registry)
    return list(registry)
