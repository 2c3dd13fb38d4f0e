from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from dropfour.constants import COLS, EMPTY, PLAYERS, ROWS
from dropfour.errors import InvalidCellError

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Grid of cell states plus the per-player index of occupied cells.

    cells[row][col] holds EMPTY or a player id; row 0 is the top row.
    player_cells keeps each player's coordinates in placement order and must
    mirror ``cells`` exactly once a board operation has completed.
    """

    rows: int = ROWS
    cols: int = COLS
    cells: List[List[int]] = field(default_factory=list)
    player_cells: Dict[int, List[Position]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]
        for player in PLAYERS:
            self.player_cells.setdefault(player, [])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def require_cell(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise InvalidCellError(row, col)

    def require_column(self, col: int) -> None:
        if not 0 <= col < self.cols:
            raise InvalidCellError(None, col)

    def get(self, row: int, col: int) -> int:
        self.require_cell(row, col)
        return self.cells[row][col]

    def occupied(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (row, col, player) for every non-empty cell in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                player = self.cells[row][col]
                if player != EMPTY:
                    yield row, col, player

    def disc_count(self) -> int:
        return sum(1 for _ in self.occupied())

    def is_full(self) -> bool:
        return all(cell != EMPTY for cell in self.cells[0])
