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
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: None (one countdown unit elapsed)


# ============================================================================
# SESSION FLOW
# ============================================================================
EVENT_SESSION_START = "session_start"              # payload: mode=GameMode
EVENT_SESSION_STARTED = "session_started"          # payload: mode=GameMode, target=int, tile_ids=list[int]
EVENT_SESSION_END = "session_end"                  # payload: None (leave the session, back to READY)
EVENT_PAUSE = "pause"                              # payload: None
EVENT_RESUME = "resume"                            # payload: None
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous=SessionPhase, new=SessionPhase
EVENT_GAME_OVER = "game_over"                      # payload: score=int, best_score=int


# ============================================================================
# SELECTION
# ============================================================================
EVENT_TILE_TOGGLE = "tile_toggle"                  # payload: tile_id=int
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: tile_ids=list[int], total=int
EVENT_SELECTION_CLEARED = "selection_cleared"      # payload: reason=str, tile_ids=list[int], total=int
EVENT_SUM_MATCHED = "sum_matched"                  # payload: tile_ids=list[int], total=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_MATCH_RESOLVED = "match_resolved"            # payload: tile_ids=list[int], total=int, score=int, moves=list[GravityMove]
EVENT_TARGET_REQUEST = "target_request"            # payload: reason=str
EVENT_TARGET_CHANGED = "target_changed"            # payload: target=int, previous=int|None, reason=str
EVENT_ROW_INJECT_REQUEST = "row_inject_request"    # payload: reason=str ("clear" | "timer")
EVENT_ROW_INJECTED = "row_injected"                # payload: new_tiles=list[int], reason=str
EVENT_COUNTDOWN_CHANGED = "countdown_changed"      # payload: remaining=int, duration=int


ALL_EVENTS = (
    EVENT_TICK,
    EVENT_SESSION_START,
    EVENT_SESSION_STARTED,
    EVENT_SESSION_END,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_PHASE_CHANGED,
    EVENT_GAME_OVER,
    EVENT_TILE_TOGGLE,
    EVENT_SELECTION_CHANGED,
    EVENT_SELECTION_CLEARED,
    EVENT_SUM_MATCHED,
    EVENT_MATCH_RESOLVED,
    EVENT_TARGET_REQUEST,
    EVENT_TARGET_CHANGED,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_ROW_INJECTED,
    EVENT_COUNTDOWN_CHANGED,
)
