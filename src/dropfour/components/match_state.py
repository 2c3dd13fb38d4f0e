"""Match-level state shared across rounds."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

from dropfour.constants import MAX_SCORE, PLAYERS


class MatchPhase(Enum):
    SETUP = auto()
    PLAYING = auto()
    MATCH_OVER = auto()


def _zero_per_player() -> Dict[int, int]:
    return {player: 0 for player in PLAYERS}


@dataclass(slots=True)
class MatchState:
    scores: Dict[int, int] = field(default_factory=_zero_per_player)
    round_wins: Dict[int, int] = field(default_factory=_zero_per_player)
    active_mod_slugs: List[str] = field(default_factory=list)
    championship_threshold: int = MAX_SCORE
    phase: MatchPhase = MatchPhase.SETUP
    champion: Optional[int] = None
    rounds_played: int = 0

    def reset_scores(self) -> None:
        self.scores = _zero_per_player()
        self.round_wins = _zero_per_player()
        self.champion = None
        self.rounds_played = 0
