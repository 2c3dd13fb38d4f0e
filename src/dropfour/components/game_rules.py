from dataclasses import dataclass

from dropfour.constants import (
    COLS,
    MAX_ACTIVE_MODS,
    MAX_ROUND_POINTS,
    MAX_SCORE,
    MIN_ROUND_POINTS,
    PAR_PLAYER_MOVES,
    POINTS_PER_SAVED_MOVE,
    ROWS,
    WIN_LENGTH,
)


@dataclass(frozen=True, slots=True)
class GameRules:
    """Tunable rule set; defaults mirror the module constants."""
    rows: int = ROWS
    cols: int = COLS
    win_length: int = WIN_LENGTH
    championship_threshold: int = MAX_SCORE
    min_round_points: int = MIN_ROUND_POINTS
    max_round_points: int = MAX_ROUND_POINTS
    par_player_moves: int = PAR_PLAYER_MOVES
    points_per_saved_move: int = POINTS_PER_SAVED_MOVE
    max_active_mods: int = MAX_ACTIVE_MODS
