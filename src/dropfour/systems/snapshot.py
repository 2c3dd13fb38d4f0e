from __future__ import annotations

from typing import Any, Dict

from esper import World

from dropfour.systems.board_ops import board_to_grid
from dropfour.systems.state_utils import (
    get_active_mods,
    get_board,
    get_match_state,
    get_placement,
    get_round_state,
)


def snapshot(world: World) -> Dict[str, Any]:
    """JSON-friendly view of the whole engine state."""
    board = get_board(world)
    round_state = get_round_state(world)
    match_state = get_match_state(world)
    placement = get_placement(world)
    return {
        "board": {
            "rows": board.rows,
            "cols": board.cols,
            "grid": board_to_grid(board),
            "player_cells": {
                str(player): [list(pos) for pos in cells]
                for player, cells in board.player_cells.items()
            },
        },
        "round": {
            "number": round_state.round_number,
            "phase": round_state.phase.name,
            "current_player": round_state.current_player,
            "move_count": round_state.move_count,
            "winner": round_state.winner,
            "winning_cells": [list(pos) for pos in round_state.winning_cells],
        },
        "match": {
            "phase": match_state.phase.name,
            "scores": {str(player): score for player, score in match_state.scores.items()},
            "round_wins": {str(player): wins for player, wins in match_state.round_wins.items()},
            "threshold": match_state.championship_threshold,
            "champion": match_state.champion,
            "mods": get_active_mods(world).slugs(),
        },
        "claims": {
            slug: sorted(list(pos) for pos in positions)
            for slug, positions in placement.claims.items()
        },
    }
