from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from esper import World

from dropfour.components.board import Board
from dropfour.constants import EMPTY, PLAYERS, opponent_of
from dropfour.errors import ColumnFullError, NoSpaceError
from dropfour.systems.state_utils import get_board, get_rng, get_round_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class GravityMove:
    source: Position
    target: Position
    player: int


@dataclass(frozen=True, slots=True)
class FilledCell:
    row: int
    col: int
    previous: int

    @property
    def overridden(self) -> bool:
        return self.previous != EMPTY


@dataclass(slots=True)
class RemovalResult:
    removed: List[Tuple[int, int, int]]
    gravity_moves: List[GravityMove]

    @property
    def positions(self) -> List[Position]:
        return [(row, col) for row, col, _ in self.removed]


def lowest_empty_row(board: Board, col: int) -> int | None:
    board.require_column(col)
    for row in range(board.rows - 1, -1, -1):
        if board.cells[row][col] == EMPTY:
            return row
    return None


def _index_remove(board: Board, player: int, position: Position) -> None:
    cells = board.player_cells.get(player)
    if cells and position in cells:
        cells.remove(position)


def _index_add(board: Board, player: int, position: Position) -> None:
    board.player_cells.setdefault(player, []).append(position)


def place_disc(world: World, col: int, player: int, *, count_move: bool = True) -> int:
    """Drop a disc into col and return the row it lands on."""
    board = get_board(world)
    row = lowest_empty_row(board, col)
    if row is None:
        raise ColumnFullError(col)
    board.cells[row][col] = player
    _index_add(board, player, (row, col))
    if count_move:
        get_round_state(world).move_count += 1
    logger.debug("Placed player %s disc at (%s, %s)", player, row, col)
    return row


def set_cell(world: World, row: int, col: int, player: int, *, count_move: bool = True) -> int:
    """Write player into a cell directly, overriding any opponent disc. Returns the previous state."""
    board = get_board(world)
    board.require_cell(row, col)
    previous = board.cells[row][col]
    if previous == player:
        return previous
    if previous != EMPTY:
        _index_remove(board, previous, (row, col))
    board.cells[row][col] = player
    _index_add(board, player, (row, col))
    if count_move:
        get_round_state(world).move_count += 1
    return previous


def clear_cell(world: World, row: int, col: int) -> int:
    """Empty a cell and drop it from its owner's index. Returns the previous state."""
    board = get_board(world)
    board.require_cell(row, col)
    previous = board.cells[row][col]
    if previous == EMPTY:
        return EMPTY
    board.cells[row][col] = EMPTY
    _index_remove(board, previous, (row, col))
    return previous


def apply_gravity(world: World, col: int) -> List[GravityMove]:
    """Pull discs down so the column is contiguous from the bottom row.

    Index entries are rewritten in place so each player's ordering survives.
    A column that is already compact produces no moves. A disc missing from
    its owner's index raises ValueError.
    """
    board = get_board(world)
    board.require_column(col)
    moves: List[GravityMove] = []
    for target_row in range(board.rows - 1, -1, -1):
        if board.cells[target_row][col] != EMPTY:
            continue
        for source_row in range(target_row - 1, -1, -1):
            player = board.cells[source_row][col]
            if player == EMPTY:
                continue
            cells = board.player_cells[player]
            slot = cells.index((source_row, col))
            cells[slot] = (target_row, col)
            board.cells[target_row][col] = player
            board.cells[source_row][col] = EMPTY
            moves.append(GravityMove(source=(source_row, col), target=(target_row, col), player=player))
            break
    if moves:
        logger.debug("Gravity moved %d disc(s) in column %s", len(moves), col)
    return moves


def remove_discs(world: World, positions: Iterable[Position]) -> RemovalResult:
    """Clear every position, then compact each affected column."""
    removed: List[Tuple[int, int, int]] = []
    for row, col in positions:
        previous = clear_cell(world, row, col)
        if previous != EMPTY:
            removed.append((row, col, previous))
    moves: List[GravityMove] = []
    for col in sorted({col for _, col, _ in removed}):
        moves.extend(apply_gravity(world, col))
    return RemovalResult(removed=removed, gravity_moves=moves)


def relocate_disc(
    world: World,
    player: int,
    rng: random.Random | None = None,
    *,
    count_move: bool = False,
) -> Position:
    """Place a disc for player in a random column with space.

    Starts at a random column and walks forward circularly, trying each
    column exactly once before giving up with NoSpaceError.
    """
    board = get_board(world)
    rng = rng or get_rng(world)
    start = rng.randrange(board.cols)
    for offset in range(board.cols):
        col = (start + offset) % board.cols
        if lowest_empty_row(board, col) is None:
            continue
        row = place_disc(world, col, player, count_move=count_move)
        return row, col
    raise NoSpaceError(player)


def fill_column(world: World, col: int, player: int) -> List[FilledCell]:
    """Give player every empty or opponent cell in col, top to bottom.

    The player's own discs are left alone. Each written cell counts as a move.
    """
    board = get_board(world)
    board.require_column(col)
    opponent = opponent_of(player)
    filled: List[FilledCell] = []
    for row in range(board.rows):
        current = board.cells[row][col]
        if current not in (EMPTY, opponent):
            continue
        previous = set_cell(world, row, col, player)
        filled.append(FilledCell(row=row, col=col, previous=previous))
    return filled


# ---------------------------------------------------------------------------
# Inspection and serialization
# ---------------------------------------------------------------------------

def is_column_contiguous(board: Board, col: int) -> bool:
    seen_empty_below = False
    for row in range(board.rows - 1, -1, -1):
        if board.cells[row][col] == EMPTY:
            seen_empty_below = True
        elif seen_empty_below:
            return False
    return True


def scan_player_cells(board: Board) -> Dict[int, List[Position]]:
    """Build a per-player index from the grid in row-major order."""
    index: Dict[int, List[Position]] = {player: [] for player in PLAYERS}
    for row, col, player in board.occupied():
        index.setdefault(player, []).append((row, col))
    return index


def index_matches_board(board: Board) -> bool:
    scanned = scan_player_cells(board)
    for player in set(scanned) | set(board.player_cells):
        indexed = board.player_cells.get(player, [])
        if len(indexed) != len(set(indexed)):
            return False
        if set(indexed) != set(scanned.get(player, [])):
            return False
    return True


def board_to_grid(board: Board) -> List[List[int]]:
    return [list(row) for row in board.cells]


def board_from_grid(grid: Sequence[Sequence[int]]) -> Board:
    """Rebuild a Board from a grid of cell states, deriving the index by scan."""
    if not grid or not grid[0]:
        raise ValueError("Grid must have at least one row and one column")
    cols = len(grid[0])
    if any(len(row) != cols for row in grid):
        raise ValueError("Grid rows must all have the same length")
    for row in grid:
        for value in row:
            if value != EMPTY and value not in PLAYERS:
                raise ValueError(f"Unknown cell state {value!r}")
    board = Board(rows=len(grid), cols=cols, cells=[list(row) for row in grid])
    board.player_cells = scan_player_cells(board)
    return board
