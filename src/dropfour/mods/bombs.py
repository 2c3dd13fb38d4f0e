from __future__ import annotations

from typing import TYPE_CHECKING

from dropfour.mods.base import BoardMod, ModEffectResult
from dropfour.systems.board_ops import RemovalResult

if TYPE_CHECKING:
    from dropfour.presentation.bridge import PresentationBridge
    from dropfour.systems.board_handle import BoardHandle


class BombsMod(BoardMod):
    """Hidden bombs remove some of the triggering player's own discs."""

    slug = "bombs"
    effect_kind = "bomb"

    def bomb_count(self, handle: BoardHandle) -> int:
        return int(handle.rows * handle.cols * float(self.metadata["bomb_percentage"]))

    def on_round_start(self, handle: BoardHandle) -> None:
        self._claim_features(handle, self.bomb_count(handle))

    def detonate(self, handle: BoardHandle, player: int, trigger: tuple[int, int]) -> RemovalResult:
        eligible = [pos for pos in handle.player_cells(player) if pos != trigger]
        limit = int(self.metadata["discs_to_remove"])
        targets = handle.rng.sample(eligible, min(limit, len(eligible))) if eligible else []
        return handle.remove_discs(targets)

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
        removal = self.detonate(handle, player, (row, col))
        self.logger.info("BOOM at (%s, %s): player %s lost %d disc(s)", row, col, player, len(removal.removed))

        await bridge.on_effect_triggered(self.effect_kind, row, col)
        for r, c in removal.positions:
            await bridge.on_disc_removed(r, c)
        for move in removal.gravity_moves:
            await bridge.on_disc_relocated(move.source, move.target, move.player)

        return ModEffectResult(
            slug=self.slug,
            kind=self.effect_kind,
            origin=(row, col),
            player=player,
            removed=removal.positions,
            relocated=[(m.source, m.target, m.player) for m in removal.gravity_moves],
        )
