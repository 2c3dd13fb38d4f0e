from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Mapping

if TYPE_CHECKING:
    from dropfour.mods.base import BoardMod


@dataclass(frozen=True, slots=True)
class ModDefinition:
    """Catalogue entry for one selectable mod.

    Carries the text a selection screen shows, the BoardMod subclass that
    implements the mod, and the tunables that class reads on construction.
    """

    slug: str
    display_name: str
    mod_type: type[BoardMod]
    emoji: str = ""
    description: str = ""
    default_metadata: Mapping[str, object] = field(default_factory=dict)

    def instantiate(self, overrides: Mapping[str, object] | None = None) -> BoardMod:
        return self.mod_type(self, overrides)


class ModRegistry:
    """Selectable mods keyed by slug, in registration order."""

    def __init__(self) -> None:
        self._by_slug: dict[str, ModDefinition] = {}

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def __iter__(self) -> Iterator[ModDefinition]:
        return iter(tuple(self._by_slug.values()))

    def add(self, definition: ModDefinition) -> None:
        if definition.mod_type.slug != definition.slug:
            raise ValueError(
                f"Mod '{definition.slug}' points at {definition.mod_type.__name__}, "
                f"which implements '{definition.mod_type.slug}'"
            )
        if definition.slug in self._by_slug:
            raise ValueError(f"Mod '{definition.slug}' already registered")
        self._by_slug[definition.slug] = definition

    def lookup(self, slug: str) -> ModDefinition:
        definition = self._by_slug.get(slug)
        if definition is None:
            known = ", ".join(self._by_slug) or "none"
            raise KeyError(f"Unknown mod '{slug}' (known: {known})")
        return definition


default_mod_registry = ModRegistry()
