from __future__ import annotations

import random
from typing import List, Optional

from esper import World

from dropfour.events.bus import EventBus
from dropfour.systems.board_ops import lowest_empty_row
from dropfour.systems.state_utils import get_board, get_round_state
from dropfour.systems.turn_system import DropResult, TurnSystem


class RandomAISystem:
    """Plays random legal columns for the players it controls."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        turn_system: TurnSystem,
        *,
        players: tuple[int, ...] = (),
        rng: Optional[random.Random] = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.turn_system = turn_system
        self.players = set(players)
        self.random = rng or random.Random()

    def controls(self, player: int) -> bool:
        return not self.players or player in self.players

    def legal_columns(self) -> List[int]:
        board = get_board(self.world)
        return [col for col in range(board.cols) if lowest_empty_row(board, col) is not None]

    def choose_column(self) -> Optional[int]:
        columns = self.legal_columns()
        if not columns:
            return None
        return self.random.choice(columns)

    async def play_turn(self) -> Optional[DropResult]:
        if not self.turn_system.can_drop():
            return None
        if not self.controls(get_round_state(self.world).current_player):
            return None
        col = self.choose_column()
        if col is None:
            return None
        return await self.turn_system.drop(col)

    async def play_round(self, max_moves: int = 500) -> Optional[DropResult]:
        """Drop until the round ends; returns the final drop result."""
        last: Optional[DropResult] = None
        for _ in range(max_moves):
            result = await self.play_turn()
            if result is None:
                break
            last = result
            if not result.outcome.rejected and get_round_state(self.world).game_over:
                break
        return last
