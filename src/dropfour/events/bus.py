from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# MATCH FLOW
# ============================================================================
EVENT_MATCH_STARTED = "match_started"      # payload: mods=list[str], threshold=int
EVENT_MATCH_OVER = "match_over"            # payload: champion=int, scores=dict[int,int]
EVENT_ROUND_STARTED = "round_started"      # payload: round_number=int, current_player=int, claims=dict[str, list[(r,c)]]


# ============================================================================
# TURN SYSTEM
# ============================================================================
EVENT_DISC_DROPPED = "disc_dropped"        # payload: row, col, player
EVENT_DROP_REJECTED = "drop_rejected"      # payload: col, reason=str
EVENT_TURN_ADVANCED = "turn_advanced"      # payload: previous_player=int, new_player=int
EVENT_ROUND_WON = "round_won"              # payload: winner=int, dropped_by=int, cells=list[(r,c)], points=int, move_count=int
EVENT_ROUND_DRAWN = "round_drawn"          # payload: move_count=int


# ============================================================================
# MODS
# ============================================================================
EVENT_MOD_ACTIVATED = "mod_activated"      # payload: slug=str
EVENT_MOD_TRIGGERED = "mod_triggered"      # payload: slug=str, result=ModEffectResult
EVENT_MOD_UNPLACED = "mod_unplaced"        # payload: slug=str, placed=int


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"  # payload: kind=str, items=list/positions, meta=...
