from __future__ import annotations

import random
from typing import Iterable, List, Set, Tuple

from esper import World

from dropfour.systems import board_ops
from dropfour.systems.board_ops import FilledCell, RemovalResult
from dropfour.mods.placement import select_unclaimed_positions
from dropfour.systems.state_utils import get_board, get_placement, get_rng

Position = Tuple[int, int]


class BoardHandle:
    """Narrow view of the world handed to mods.

    Exposes board queries and the mutating board operations plus the mod's
    own feature claims. Turn order, scores and presentation stay out of reach.
    """

    def __init__(self, world: World) -> None:
        self._world = world

    # -- queries -----------------------------------------------------------

    @property
    def rows(self) -> int:
        return get_board(self._world).rows

    @property
    def cols(self) -> int:
        return get_board(self._world).cols

    @property
    def rng(self) -> random.Random:
        return get_rng(self._world)

    def player_cells(self, player: int) -> List[Position]:
        return list(get_board(self._world).player_cells.get(player, []))

    # -- mutations ---------------------------------------------------------

    def remove_discs(self, positions: Iterable[Position]) -> RemovalResult:
        return board_ops.remove_discs(self._world, positions)

    def relocate(self, player: int) -> Position:
        return board_ops.relocate_disc(self._world, player, self.rng)

    def fill_column(self, col: int, player: int) -> List[FilledCell]:
        return board_ops.fill_column(self._world, col, player)

    # -- feature claims ----------------------------------------------------

    def claimed(self, slug: str) -> Set[Position]:
        return get_placement(self._world).claimed_by(slug)

    def claim(self, slug: str, positions: Iterable[Position]) -> None:
        get_placement(self._world).claim(slug, positions)

    def consume_claim(self, slug: str, position: Position) -> bool:
        return get_placement(self._world).consume(slug, position)

    def select_unclaimed(self, slug: str, count: int) -> List[Position]:
        return select_unclaimed_positions(
            get_placement(self._world),
            slug,
            count,
            self.rows,
            self.cols,
            self.rng,
        )
