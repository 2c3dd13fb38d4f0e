"""Per-round turn state."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from dropfour.constants import PLAYER_1


class RoundPhase(Enum):
    """Turn controller states for a single round."""
    AWAITING_MOVE = auto()
    RESOLVING = auto()
    ROUND_WON = auto()
    ROUND_DRAWN = auto()


@dataclass(slots=True)
class RoundState:
    """Singleton component tracking whose turn it is and how the round ended."""

    current_player: int = PLAYER_1
    phase: RoundPhase = RoundPhase.AWAITING_MOVE
    move_count: int = 0
    round_number: int = 0
    winner: Optional[int] = None
    winning_cells: List[Tuple[int, int]] = field(default_factory=list)
    last_points: int = 0
    # Bumped on every fresh board; a drop started under an older value is stale.
    generation: int = 0

    @property
    def game_over(self) -> bool:
        return self.phase in (RoundPhase.ROUND_WON, RoundPhase.ROUND_DRAWN)
