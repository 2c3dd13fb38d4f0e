"""Match and round lifecycle: mod selection, fresh boards, continue and reset."""
from __future__ import annotations

import logging
from typing import Mapping, Sequence

from esper import World

from dropfour.components.match_state import MatchPhase
from dropfour.components.round_state import RoundPhase
from dropfour.constants import PLAYER_1
from dropfour.events.bus import EVENT_MATCH_STARTED, EVENT_ROUND_STARTED, EventBus
from dropfour.systems.mod_pipeline import ModPipeline
from dropfour.systems.state_utils import (
    get_match_state,
    get_round_state,
    replace_round_components,
)

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Central coordinator for match setup and round transitions."""

    def __init__(self, world: World, event_bus: EventBus, pipeline: ModPipeline) -> None:
        self.world = world
        self.event_bus = event_bus
        self.pipeline = pipeline

    # ------------------------------------------------------------------
    # Match lifecycle
    # ------------------------------------------------------------------

    def new_match(
        self,
        mod_slugs: Sequence[str] = (),
        *,
        mod_metadata: Mapping[str, Mapping[str, object]] | None = None,
    ) -> bool:
        """Reset scores, activate the chosen mods and start the first round.

        The mod set is fixed until the next call to new_match. Returns False,
        changing nothing, while a drop is still resolving.
        """
        round_state = get_round_state(self.world)
        if round_state.phase is RoundPhase.RESOLVING:
            logger.debug("New match refused: a drop is still resolving")
            return False
        self.pipeline.activate(mod_slugs, mod_metadata)
        match_state = get_match_state(self.world)
        match_state.reset_scores()
        match_state.phase = MatchPhase.PLAYING
        round_state.current_player = PLAYER_1
        round_state.round_number = 0
        logger.info("New match with mods: %s", ", ".join(mod_slugs) or "none")
        self.event_bus.emit(
            EVENT_MATCH_STARTED,
            mods=list(mod_slugs),
            threshold=match_state.championship_threshold,
        )
        self._start_round()
        return True

    # ------------------------------------------------------------------
    # Round lifecycle
    # ------------------------------------------------------------------

    def continue_game(self) -> bool:
        """Start the next round after a win or draw. Returns False when not allowed."""
        round_state = get_round_state(self.world)
        match_state = get_match_state(self.world)
        if not round_state.game_over or match_state.phase is not MatchPhase.PLAYING:
            return False
        self._start_round()
        return True

    def reset_round(self, *, force: bool = False) -> bool:
        """Throw away the current board and start over, keeping scores.

        Refused while a drop is resolving unless force is set. A forced reset
        abandons the suspended drop: it finishes its animations but leaves the
        new round untouched.
        """
        round_state = get_round_state(self.world)
        match_state = get_match_state(self.world)
        if match_state.phase is not MatchPhase.PLAYING:
            return False
        if round_state.phase is RoundPhase.RESOLVING and not force:
            return False
        self._start_round()
        return True

    def _start_round(self) -> None:
        replace_round_components(self.world)
        round_state = get_round_state(self.world)
        round_state.phase = RoundPhase.AWAITING_MOVE
        round_state.move_count = 0
        round_state.winner = None
        round_state.winning_cells = []
        round_state.last_points = 0
        round_state.round_number += 1
        round_state.generation += 1
        self.pipeline.start_round()
        logger.info("Round %s begins; player %s to move", round_state.round_number, round_state.current_player)
        self.event_bus.emit(
            EVENT_ROUND_STARTED,
            round_number=round_state.round_number,
            current_player=round_state.current_player,
            claims=self.pipeline.claims(),
        )
