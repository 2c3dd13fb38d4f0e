"""Contract between the engine and whatever animates the board.

The engine finishes every board mutation before calling into the bridge, and
awaits each call before the next mutation. Implementations decide how long an
animation takes; they must never touch engine state.
"""
from __future__ import annotations

import asyncio
from typing import Protocol, Sequence, Tuple, runtime_checkable

from dropfour.events.bus import EVENT_ANIMATION_START, EventBus

Position = Tuple[int, int]


@runtime_checkable
class PresentationBridge(Protocol):
    async def on_disc_placed(self, row: int, col: int, player: int) -> None: ...

    async def on_disc_removed(self, row: int, col: int) -> None: ...

    async def on_disc_relocated(self, source: Position, target: Position, player: int) -> None: ...

    async def on_column_filled(self, col: int, player: int, cells: Sequence[Position]) -> None: ...

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None: ...


class NullPresentation:
    """Headless bridge: every animation completes immediately."""

    async def on_disc_placed(self, row: int, col: int, player: int) -> None:
        return None

    async def on_disc_removed(self, row: int, col: int) -> None:
        return None

    async def on_disc_relocated(self, source: Position, target: Position, player: int) -> None:
        return None

    async def on_column_filled(self, col: int, player: int, cells: Sequence[Position]) -> None:
        return None

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None:
        return None


class EventBusPresentation:
    """Publishes each animation request as an EVENT_ANIMATION_START event.

    Subscribers run synchronously inside emit(); the bridge then yields once to
    the event loop so other tasks can observe the suspension point.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus

    async def _start(self, kind: str, items, **meta) -> None:
        self.event_bus.emit(EVENT_ANIMATION_START, kind=kind, items=items, meta=meta)
        await asyncio.sleep(0)

    async def on_disc_placed(self, row: int, col: int, player: int) -> None:
        await self._start("drop", [(row, col)], player=player)

    async def on_disc_removed(self, row: int, col: int) -> None:
        await self._start("remove", [(row, col)])

    async def on_disc_relocated(self, source: Position, target: Position, player: int) -> None:
        await self._start("relocate", [{"from": source, "to": target}], player=player)

    async def on_column_filled(self, col: int, player: int, cells: Sequence[Position]) -> None:
        await self._start("fill", list(cells), col=col, player=player)

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None:
        await self._start("effect", [(row, col)], effect=kind)
