from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from dropfour.mods.base import BoardMod


@dataclass(slots=True)
class ActiveMods:
    """Ordered mod instances for the match; order is selection order."""
    mods: List["BoardMod"] = field(default_factory=list)

    def slugs(self) -> list[str]:
        return [mod.slug for mod in self.mods]
