import random

import pytest

from dropfour.constants import PLAYER_1, PLAYER_2
from dropfour.session import create_session
from dropfour.systems.board_ops import index_matches_board, is_column_contiguous
from dropfour.systems.random_ai_system import RandomAISystem
from dropfour.systems.state_utils import get_board, get_round_state
from dropfour.systems.win_scan import scan_full_board
from tests.helpers import run

MOD_SETS = [[], ["bombs"], ["jackpot"], ["alien"], ["bombs", "alien"], ["jackpot", "bombs"]]
# Mods whose effects never add or remove discs outside of a counted move.
COUNT_PRESERVING = ({"alien"}, set())


@pytest.mark.parametrize("mods", MOD_SETS)
@pytest.mark.parametrize("seed", [1, 7, 42])
def test_board_invariants_hold_after_every_drop(mods, seed):
    session = create_session(mods, rng=random.Random(seed))
    agent = RandomAISystem(session.world, session.event_bus, session.turns, rng=random.Random(seed * 31))

    for _ in range(3):
        for _ in range(60):
            result = run(agent.play_turn())
            if result is None:
                break
            board = get_board(session.world)
            state = get_round_state(session.world)
            assert index_matches_board(board)
            assert all(is_column_contiguous(board, col) for col in range(board.cols))
            assert all(board.get(r, c) in (PLAYER_1, PLAYER_2) for r, c, _ in board.occupied())
            if set(mods) in COUNT_PRESERVING:
                assert state.move_count == board.disc_count()
            if state.game_over and state.winner is not None:
                assert scan_full_board(board) is not None
            if state.game_over:
                break
        session.flow.continue_game()
