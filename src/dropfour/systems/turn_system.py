from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from esper import World

from dropfour.components.match_state import MatchPhase
from dropfour.components.round_state import RoundPhase
from dropfour.constants import opponent_of
from dropfour.errors import ColumnFullError
from dropfour.events.bus import (
    EVENT_DISC_DROPPED,
    EVENT_DROP_REJECTED,
    EVENT_MATCH_OVER,
    EVENT_ROUND_DRAWN,
    EVENT_ROUND_WON,
    EVENT_TURN_ADVANCED,
    EventBus,
)
from dropfour.mods.base import ModEffectResult
from dropfour.presentation.bridge import PresentationBridge
from dropfour.systems.board_ops import place_disc
from dropfour.systems.mod_pipeline import ModPipeline
from dropfour.systems.scoring import award_round, reached_championship
from dropfour.systems.state_utils import get_board, get_match_state, get_round_state, get_rules
from dropfour.systems.win_scan import is_draw, scan_full_board

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class DropOutcome(Enum):
    REJECTED_BUSY = auto()
    REJECTED_ROUND_OVER = auto()
    COLUMN_FULL = auto()
    TURN_PASSED = auto()
    ROUND_WON = auto()
    ROUND_DRAWN = auto()
    MATCH_OVER = auto()
    # The round was replaced while this drop was suspended on the presentation.
    ABANDONED = auto()

    @property
    def rejected(self) -> bool:
        return self in (DropOutcome.REJECTED_BUSY, DropOutcome.REJECTED_ROUND_OVER, DropOutcome.COLUMN_FULL)


@dataclass(slots=True)
class DropResult:
    outcome: DropOutcome
    col: int
    player: int
    row: Optional[int] = None
    winner: Optional[int] = None
    winning_cells: List[Position] = field(default_factory=list)
    points: int = 0
    effects: List[ModEffectResult] = field(default_factory=list)


class TurnSystem:
    """Resolves one drop at a time: place, run mod hooks, scan, then hand over the turn.

    The RESOLVING phase doubles as the re-entrancy guard. A drop that arrives
    while another is suspended on the presentation layer is rejected rather
    than queued. Each drop remembers the round generation it started in; if a
    forced reset replaces the round mid-animation, the drop stops at its next
    resume point without touching the new round.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        pipeline: ModPipeline | None = None,
        presentation: PresentationBridge | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        if pipeline is None:
            pipeline = ModPipeline(world, event_bus, presentation)
        self.pipeline = pipeline
        self.presentation = presentation or pipeline.presentation

    @property
    def resolving(self) -> bool:
        return get_round_state(self.world).phase is RoundPhase.RESOLVING

    def can_drop(self) -> bool:
        state = get_round_state(self.world)
        if state.phase is not RoundPhase.AWAITING_MOVE:
            return False
        return get_match_state(self.world).phase is MatchPhase.PLAYING

    async def drop(self, col: int) -> DropResult:
        state = get_round_state(self.world)
        player = state.current_player
        if state.phase is RoundPhase.RESOLVING:
            return self._reject(DropOutcome.REJECTED_BUSY, col, player, "busy")
        if state.game_over or get_match_state(self.world).phase is not MatchPhase.PLAYING:
            return self._reject(DropOutcome.REJECTED_ROUND_OVER, col, player, "round_over")
        try:
            row = place_disc(self.world, col, player)
        except ColumnFullError:
            return self._reject(DropOutcome.COLUMN_FULL, col, player, "column_full")

        generation = state.generation
        state.phase = RoundPhase.RESOLVING
        try:
            return await self._resolve(row, col, player, generation)
        finally:
            # Only reached as RESOLVING when resolution raised; never leave the guard stuck.
            if state.generation == generation and state.phase is RoundPhase.RESOLVING:
                state.phase = RoundPhase.AWAITING_MOVE

    def _stale(self, generation: int) -> bool:
        return get_round_state(self.world).generation != generation

    async def _resolve(self, row: int, col: int, player: int, generation: int) -> DropResult:
        state = get_round_state(self.world)
        logger.debug("Player %s dropped into column %s (row %s)", player, col, row)
        self.event_bus.emit(EVENT_DISC_DROPPED, row=row, col=col, player=player)
        await self.presentation.on_disc_placed(row, col, player)
        if self._stale(generation):
            return self._abandon(col, player, row, [])

        effects = await self.pipeline.after_drop(row, col, player, generation=generation)
        if self._stale(generation):
            return self._abandon(col, player, row, effects)

        board = get_board(self.world)
        run = scan_full_board(board, prefer=player, length=get_rules(self.world).win_length)
        if run is not None:
            return self._finish_won(run.winner, list(run.cells), row, col, player, effects)
        if is_draw(board):
            state.phase = RoundPhase.ROUND_DRAWN
            get_match_state(self.world).rounds_played += 1
            logger.info("Round %s drawn after %d moves", state.round_number, state.move_count)
            self.event_bus.emit(EVENT_ROUND_DRAWN, move_count=state.move_count)
            return DropResult(DropOutcome.ROUND_DRAWN, col, player, row=row, effects=effects)

        previous = state.current_player
        state.current_player = opponent_of(previous)
        state.phase = RoundPhase.AWAITING_MOVE
        self.event_bus.emit(EVENT_TURN_ADVANCED, previous_player=previous, new_player=state.current_player)
        return DropResult(DropOutcome.TURN_PASSED, col, player, row=row, effects=effects)

    def _finish_won(
        self,
        winner: int,
        cells: List[Position],
        row: int,
        col: int,
        player: int,
        effects: List[ModEffectResult],
    ) -> DropResult:
        state = get_round_state(self.world)
        match_state = get_match_state(self.world)
        points = award_round(self.world, winner, state.move_count)
        state.phase = RoundPhase.ROUND_WON
        state.winner = winner
        state.winning_cells = cells
        state.last_points = points
        match_state.rounds_played += 1
        if winner != player:
            logger.info("Player %s wins a run completed by player %s's drop", winner, player)
        logger.info(
            "Round %s won by player %s (+%d, total %d)",
            state.round_number,
            winner,
            points,
            match_state.scores[winner],
        )
        self.event_bus.emit(
            EVENT_ROUND_WON,
            winner=winner,
            dropped_by=player,
            cells=list(cells),
            points=points,
            move_count=state.move_count,
        )
        outcome = DropOutcome.ROUND_WON
        if reached_championship(self.world, winner):
            match_state.phase = MatchPhase.MATCH_OVER
            match_state.champion = winner
            outcome = DropOutcome.MATCH_OVER
            logger.info("Player %s is champion with %d points", winner, match_state.scores[winner])
            self.event_bus.emit(EVENT_MATCH_OVER, champion=winner, scores=dict(match_state.scores))
        return DropResult(
            outcome,
            col,
            player,
            row=row,
            winner=winner,
            winning_cells=list(cells),
            points=points,
            effects=effects,
        )

    def _abandon(self, col: int, player: int, row: int, effects: List[ModEffectResult]) -> DropResult:
        logger.info("Drop into column %s abandoned: the round was replaced while it resolved", col)
        return DropResult(DropOutcome.ABANDONED, col, player, row=row, effects=effects)

    def _reject(self, outcome: DropOutcome, col: int, player: int, reason: str) -> DropResult:
        logger.debug("Drop into column %s rejected: %s", col, reason)
        self.event_bus.emit(EVENT_DROP_REJECTED, col=col, reason=reason)
        return DropResult(outcome, col, player)
