from dataclasses import dataclass, field
from typing import Dict, Iterable, Set, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class FeaturePlacement:
    """Hidden board features claimed by each active mod for the current round.

    A coordinate belongs to at most one mod; claim() refuses overlaps.
    """

    claims: Dict[str, Set[Position]] = field(default_factory=dict)

    def claimed_by(self, slug: str) -> Set[Position]:
        return set(self.claims.get(slug, ()))

    def claimed_by_others(self, slug: str) -> Set[Position]:
        taken: Set[Position] = set()
        for other, positions in self.claims.items():
            if other != slug:
                taken |= positions
        return taken

    def claim(self, slug: str, positions: Iterable[Position]) -> None:
        wanted = set(positions)
        overlap = wanted & self.claimed_by_others(slug)
        if overlap:
            raise ValueError(f"Mod '{slug}' cannot claim positions owned by another mod: {sorted(overlap)}")
        self.claims.setdefault(slug, set()).update(wanted)

    def consume(self, slug: str, position: Position) -> bool:
        """Drop a single claim, returning True when it was present."""
        owned = self.claims.get(slug)
        if not owned or position not in owned:
            return False
        owned.discard(position)
        return True

    def owner_of(self, position: Position) -> str | None:
        for slug, positions in self.claims.items():
            if position in positions:
                return slug
        return None
