from __future__ import annotations

import asyncio
import random
from typing import Any, List, Sequence, Tuple

from esper import World

from dropfour.components.board import Board
from dropfour.systems.board_ops import board_from_grid, board_to_grid, index_matches_board
from dropfour.systems.state_utils import get_board, get_round_state

Position = Tuple[int, int]

SYMBOLS = {".": 0, "X": 1, "O": 2}


def parse_grid(lines: Sequence[str]) -> List[List[int]]:
    """Turn rows of '.', 'X' and 'O' (top row first) into a grid of cell states."""
    return [[SYMBOLS[ch] for ch in line] for line in lines]


def load_grid(world: World, lines: Sequence[str], *, current_player: int | None = None) -> Board:
    """Replace the world's board with the pictured one.

    The move counter is set to the number of discs so the loaded position
    looks like it was reached by ordinary drops.
    """
    board = board_from_grid(parse_grid(lines))
    for entity, _ in world.get_component(Board):
        world.add_component(entity, board)
        break
    state = get_round_state(world)
    state.move_count = board.disc_count()
    if current_player is not None:
        state.current_player = current_player
    return board


def run(coro):
    return asyncio.run(coro)


class FixedColumnRandom(random.Random):
    """Seeded Random whose single-argument randrange always returns column % n.

    relocate_disc starts its column search with randrange(cols); everything
    else keeps ordinary seeded behaviour.
    """

    def __init__(self, column: int, seed: int = 0) -> None:
        super().__init__(seed)
        self.column = column

    def randrange(self, start, stop=None, step=1):
        if stop is None:
            return self.column % start
        return super().randrange(start, stop, step)


class RecordingPresentation:
    """Presentation double that records every call in order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def kinds(self) -> List[str]:
        return [name for name, _ in self.calls]

    def calls_named(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]

    async def on_disc_placed(self, row: int, col: int, player: int) -> None:
        self.calls.append(("placed", (row, col, player)))

    async def on_disc_removed(self, row: int, col: int) -> None:
        self.calls.append(("removed", (row, col)))

    async def on_disc_relocated(self, source: Position, target: Position, player: int) -> None:
        self.calls.append(("relocated", (source, target, player)))

    async def on_column_filled(self, col: int, player: int, cells: Sequence[Position]) -> None:
        self.calls.append(("filled", (col, player, list(cells))))

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None:
        self.calls.append(("effect", (kind, row, col)))


class GatedPresentation(RecordingPresentation):
    """Recording double that parks chosen bridge calls until their gate opens.

    Every call named in ``hold`` appends a fresh asyncio.Event to ``gates``
    and waits on it, so a test can interleave other engine calls while a drop
    is suspended mid-animation.
    """

    def __init__(self, hold: Sequence[str] = ("placed",)) -> None:
        super().__init__()
        self.hold = set(hold)
        self.gates: List[asyncio.Event] = []

    async def _park(self, name: str) -> None:
        if name not in self.hold:
            return
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()

    async def wait_until_parked(self, count: int = 1) -> None:
        while len(self.gates) < count:
            await asyncio.sleep(0)

    def open(self, index: int = -1) -> None:
        self.gates[index].set()

    async def on_disc_placed(self, row: int, col: int, player: int) -> None:
        await super().on_disc_placed(row, col, player)
        await self._park("placed")

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None:
        await super().on_effect_triggered(kind, row, col)
        await self._park("effect")


class SnapshotPresentation(RecordingPresentation):
    """Captures the board the first time any mod effect is announced.

    Attach the world after the session is built: ``presentation.world = session.world``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.world: World | None = None
        self.grid_at_effect: List[List[int]] | None = None
        self.index_ok_at_effect: bool | None = None

    async def on_effect_triggered(self, kind: str, row: int, col: int) -> None:
        await super().on_effect_triggered(kind, row, col)
        if self.grid_at_effect is None:
            board = get_board(self.world)
            self.grid_at_effect = board_to_grid(board)
            self.index_ok_at_effect = index_matches_board(board)
