"""Entry point for the Drop Four engine.

Plays a headless match between two random agents with the chosen mods and
logs every round, mod effect and the final standings.
"""
from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Annotated

import cappa

from dropfour.components.match_state import MatchPhase
from dropfour.constants import PLAYER_NAMES
from dropfour.errors import MatchSetupError
from dropfour.events.bus import EVENT_MOD_TRIGGERED, EVENT_ROUND_DRAWN, EventBus
from dropfour.logging_setup import configure_logging
from dropfour.mods.factory import available_mods
from dropfour.presentation.bridge import EventBusPresentation
from dropfour.session import create_session
from dropfour.systems.random_ai_system import RandomAISystem
from dropfour.systems.state_utils import get_match_state

logger = logging.getLogger("dropfour.main")


def _validate_mods(values: list[str]) -> list[str]:
    known = {definition.slug for definition in available_mods()}
    unknown = [value for value in values if value not in known]
    if unknown:
        raise ValueError(f"Unknown mod(s): {', '.join(unknown)}. Choose from: {', '.join(sorted(known))}")
    return values


async def play_match(mods: list[str], seed: int, max_rounds: int) -> int:
    event_bus = EventBus()
    session = create_session(
        mods,
        event_bus=event_bus,
        presentation=EventBusPresentation(event_bus),
        rng=random.Random(seed),
    )
    agent = RandomAISystem(session.world, event_bus, session.turns, rng=random.Random(seed + 1))
    event_bus.subscribe(
        EVENT_MOD_TRIGGERED,
        lambda sender, **payload: logger.debug("Mod effect: %s", payload.get("result")),
    )
    event_bus.subscribe(
        EVENT_ROUND_DRAWN,
        lambda sender, **payload: logger.info("Nobody scores this round"),
    )

    match_state = get_match_state(session.world)
    for _ in range(max_rounds):
        await agent.play_round()
        if match_state.phase is MatchPhase.MATCH_OVER:
            break
        session.flow.continue_game()

    for player, score in match_state.scores.items():
        logger.info("%s: %d points, %d round(s) won", PLAYER_NAMES[player], score, match_state.round_wins[player])
    if match_state.champion is None:
        logger.info("No champion after %d round(s)", match_state.rounds_played)
        return 1
    logger.info("%s is the champion!", PLAYER_NAMES[match_state.champion])
    return 0


@dataclass
class Args:
    """Simulate a Drop Four match between two random players."""

    mods: Annotated[
        list[str] | None,
        cappa.Arg(
            short="-m",
            long="--mods",
            parse=_validate_mods,
            num_args=-1,
            help="Space separated list of mods (at most two).",
        ),
    ] = None
    seed: Annotated[
        int | None,
        cappa.Arg(short="-s", long="--seed", help="RNG seed."),
    ] = None
    max_rounds: Annotated[
        int,
        cappa.Arg(long="--max-rounds", help="Stop after this many rounds without a champion."),
    ] = 50
    verbose: Annotated[
        bool,
        cappa.Arg(short="-v", long="--verbose", help="Log every drop and gravity move."),
    ] = False

    def __call__(self) -> int:
        configure_logging(logging.DEBUG if self.verbose else logging.INFO)
        mods = self.mods or []
        seed = self.seed if self.seed is not None else random.randint(0, 1_000_000)
        logger.info("Seed %d", seed)
        try:
            return asyncio.run(play_match(mods, seed, self.max_rounds))
        except MatchSetupError as exc:
            raise cappa.Exit(str(exc), code=1) from exc


def main():
    return cappa.invoke(Args)


if __name__ == "__main__":
    main()
