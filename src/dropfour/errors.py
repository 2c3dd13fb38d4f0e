"""Exception types raised by the move-resolution engine."""
from __future__ import annotations


class BoardError(Exception):
    """Base class for board-level failures."""


class ColumnFullError(BoardError):
    """Raised when a disc is dropped into a column with no empty cell."""

    def __init__(self, col: int) -> None:
        super().__init__(f"Column {col} is full")
        self.col = col


class NoSpaceError(BoardError):
    """Raised when a relocation finds no column with space left."""

    def __init__(self, player: int) -> None:
        super().__init__(f"No space left to relocate a disc for player {player}")
        self.player = player


class InvalidCellError(BoardError, IndexError):
    """Raised for coordinates outside the grid. Always a programming error."""

    def __init__(self, row: int | None, col: int) -> None:
        where = f"column {col}" if row is None else f"cell ({row}, {col})"
        super().__init__(f"{where} is outside the board")
        self.row = row
        self.col = col


class MatchSetupError(ValueError):
    """Raised when a match is configured with an illegal mod selection."""
