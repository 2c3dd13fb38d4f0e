from __future__ import annotations

from typing import TYPE_CHECKING

from dropfour.mods.base import BoardMod, ModEffectResult

if TYPE_CHECKING:
    from dropfour.presentation.bridge import PresentationBridge
    from dropfour.systems.board_handle import BoardHandle


class JackpotMod(BoardMod):
    """A hidden jackpot cell hands the whole column to whoever lands on it."""

    slug = "jackpot"
    effect_kind = "jackpot"

    def on_round_start(self, handle: BoardHandle) -> None:
        self._claim_features(handle, int(self.metadata["jackpot_count"]))

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
        filled = handle.fill_column(col, player)
        cells = [(cell.row, cell.col) for cell in filled]
        overridden = sum(1 for cell in filled if cell.overridden)
        self.logger.info(
            "JACKPOT in column %s: player %s took %d cell(s), %d from the opponent",
            col,
            player,
            len(cells),
            overridden,
        )

        await bridge.on_effect_triggered(self.effect_kind, row, col)
        if cells:
            await bridge.on_column_filled(col, player, cells)

        return ModEffectResult(
            slug=self.slug,
            kind=self.effect_kind,
            origin=(row, col),
            player=player,
            filled=cells,
        )
