"""Four-in-a-row detection over the board grid."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from dropfour.components.board import Board
from dropfour.constants import EMPTY, WIN_LENGTH

Position = Tuple[int, int]

# Fixed axis order: horizontal, vertical, diagonal down-right, diagonal down-left.
AXES: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


@dataclass(frozen=True, slots=True)
class WinningRun:
    winner: int
    cells: Tuple[Position, ...]


def _run_along(board: Board, row: int, col: int, d_row: int, d_col: int, player: int) -> List[Position]:
    """Contiguous same-player cells through (row, col), ordered along the axis."""
    run: List[Position] = [(row, col)]
    r, c = row - d_row, col - d_col
    while board.in_bounds(r, c) and board.cells[r][c] == player:
        run.insert(0, (r, c))
        r -= d_row
        c -= d_col
    r, c = row + d_row, col + d_col
    while board.in_bounds(r, c) and board.cells[r][c] == player:
        run.append((r, c))
        r += d_row
        c += d_col
    return run


def scan_from_point(board: Board, row: int, col: int, *, length: int = WIN_LENGTH) -> Optional[List[Position]]:
    """Return the first axis run through (row, col) of at least length cells."""
    board.require_cell(row, col)
    player = board.cells[row][col]
    if player == EMPTY:
        return None
    for d_row, d_col in AXES:
        run = _run_along(board, row, col, d_row, d_col, player)
        if len(run) >= length:
            return run
    return None


def scan_full_board(
    board: Board,
    *,
    prefer: int | None = None,
    length: int = WIN_LENGTH,
) -> Optional[WinningRun]:
    """Find a winning run anywhere on the board.

    Cells are visited row-major, axes in AXES order, and the first run wins.
    When prefer is given and that player owns any run, their first run is
    returned instead of an earlier one belonging to the opponent.
    """
    first: Optional[WinningRun] = None
    for row, col, player in board.occupied():
        if first is not None and player != prefer:
            continue
        run = scan_from_point(board, row, col, length=length)
        if run is None:
            continue
        found = WinningRun(winner=player, cells=tuple(run))
        if prefer is None or player == prefer:
            return found
        if first is None:
            first = found
    return first


def find_winning_runs(board: Board, *, length: int = WIN_LENGTH) -> List[WinningRun]:
    """Every distinct run on the board, one entry per (axis, run) pair."""
    runs: List[WinningRun] = []
    seen: set[Tuple[Position, ...]] = set()
    for row, col, player in board.occupied():
        for d_row, d_col in AXES:
            run = tuple(_run_along(board, row, col, d_row, d_col, player))
            if len(run) < length or run in seen:
                continue
            seen.add(run)
            runs.append(WinningRun(winner=player, cells=run))
    return runs


def is_draw(board: Board, *, win_found: bool = False) -> bool:
    if win_found:
        return False
    return board.is_full()
