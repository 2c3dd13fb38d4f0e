from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, List, Mapping, Set, Tuple

if TYPE_CHECKING:
    from dropfour.mods.registry import ModDefinition
    from dropfour.presentation.bridge import PresentationBridge
    from dropfour.systems.board_handle import BoardHandle

Position = Tuple[int, int]


@dataclass(slots=True)
class ModEffectResult:
    """What a triggered mod did to the board."""

    slug: str
    kind: str
    origin: Position
    player: int
    removed: List[Position] = field(default_factory=list)
    filled: List[Position] = field(default_factory=list)
    relocated: List[Tuple[Position, Position, int]] = field(default_factory=list)
    lost: int = 0


class BoardMod(ABC):
    """A rule module with a hidden board feature and a triggered effect.

    Lifecycle: on_activate once per match, on_round_start after every fresh
    board, on_after_drop after every top-level drop. Hooks receive a
    BoardHandle; on_after_drop also receives the presentation bridge and must
    finish all board mutation before awaiting it.
    """

    slug: ClassVar[str] = ""
    effect_kind: ClassVar[str] = ""

    def __init__(self, definition: ModDefinition, metadata: Mapping[str, object] | None = None) -> None:
        self.definition = definition
        self.metadata: dict[str, object] = {**definition.default_metadata, **(metadata or {})}
        self.logger = logging.getLogger(f"dropfour.mods.{self.slug}")
        self.triggered = 0

    @property
    def display_name(self) -> str:
        return self.definition.display_name

    def on_activate(self, handle: BoardHandle) -> None:
        self.triggered = 0

    @abstractmethod
    def on_round_start(self, handle: BoardHandle) -> None:
        """Claim this round's hidden feature coordinates."""

    @abstractmethod
    async def on_after_drop(
        self,
        handle: BoardHandle,
        bridge: PresentationBridge,
        row: int,
        col: int,
        player: int,
    ) -> ModEffectResult | None:
        """Run the effect if (row, col) is one of this mod's claims."""

    def claimed_positions(self, handle: BoardHandle) -> Set[Position]:
        return handle.claimed(self.slug)

    def _claim_features(self, handle: BoardHandle, count: int) -> List[Position]:
        positions = handle.select_unclaimed(self.slug, count)
        handle.claim(self.slug, positions)
        if len(positions) < count:
            self.logger.warning(
                "%s placed %d of %d hidden features; board has no free cells left",
                self.display_name,
                len(positions),
                count,
            )
        return positions

    def _take_trigger(self, handle: BoardHandle, row: int, col: int) -> bool:
        if not handle.consume_claim(self.slug, (row, col)):
            return False
        self.triggered += 1
        return True
