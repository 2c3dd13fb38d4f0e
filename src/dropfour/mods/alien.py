from __future__ import annotations

from typing import TYPE_CHECKING, List, Tuple

from dropfour.constants import PLAYERS
from dropfour.errors import NoSpaceError
from dropfour.mods.base import BoardMod, ModEffectResult

if TYPE_CHECKING:
    from dropfour.presentation.bridge import PresentationBridge
    from dropfour.systems.board_handle import BoardHandle

Position = Tuple[int, int]


class AlienMod(BoardMod):
    """A hidden UFO abducts discs from both players and drops them in random columns.

    The number of discs on the board is unchanged unless the board is full
    when a disc comes back down, in which case that disc is lost.
    """

    slug = "alien"
    effect_kind = "alien"

    def on_round_start(self, handle: BoardHandle) -> None:
        self._claim_features(handle, int(self.metadata["slot_count"]))

    def abduction_size(self, handle: BoardHandle) -> int:
        low = int(self.metadata["min_abducted"])
        high = int(self.metadata["max_abducted"])
        return handle.rng.randint(low, max(low, high))

    def pick_abductees(self, handle: BoardHandle, trigger: Position) -> List[Tuple[Position, int]]:
        candidates = [
            (pos, player)
            for player in PLAYERS
            for pos in handle.player_cells(player)
            if pos != trigger
        ]
        if not candidates:
            return []
        size = min(self.abduction_size(handle), len(candidates))
        return handle.rng.sample(candidates, size)

    async def on_after_drop(
        self,
        handle: BoardHandle,
        bridge: PresentationBridge,
        row: int,
        col: int,
        player: int,
    ) -> ModEffectResult | None:
        if not self._take_trigger(handle, row, col):
            return None
        abductees = self.pick_abductees(handle, (row, col))
        removal = handle.remove_discs(pos for pos, _ in abductees)

        relocated: List[Tuple[Position, Position, int]] = []
        lost = 0
        for origin, owner in abductees:
            try:
                target = handle.relocate(owner)
            except NoSpaceError:
                lost += 1
                self.logger.warning("ALIEN could not return a disc for player %s; it is lost", owner)
                continue
            relocated.append((origin, target, owner))
        self.logger.info(
            "ALIEN at (%s, %s): abducted %d disc(s), returned %d",
            row,
            col,
            len(abductees),
            len(relocated),
        )

        await bridge.on_effect_triggered(self.effect_kind, row, col)
        for r, c in removal.positions:
            await bridge.on_disc_removed(r, c)
        for move in removal.gravity_moves:
            await bridge.on_disc_relocated(move.source, move.target, move.player)
        for origin, target, owner in relocated:
            await bridge.on_disc_relocated(origin, target, owner)

        return ModEffectResult(
            slug=self.slug,
            kind=self.effect_kind,
            origin=(row, col),
            player=player,
            removed=removal.positions,
            relocated=relocated,
            lost=lost,
        )
