import itertools
from typing import Dict

from blinker import Signal

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}
        self._request_ids = itertools.count(1)

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)

    def next_request_id(self) -> int:
        """Allocate an id correlating an animation_start with its animation_complete."""
        return next(self._request_ids)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_OPTION_SELECTED = "option_selected"          # payload: slot=int
EVENT_OPTION_DESELECTED = "option_deselected"      # payload: slot=int|None


# ============================================================================
# PLACEMENT
# ============================================================================
EVENT_PLACEMENT_REQUEST = "placement_request"      # payload: cell=(q,r), units=list[Unit], slot=int|None
EVENT_PLACEMENT_ACCEPTED = "placement_accepted"    # payload: cell=(q,r), units=list[Unit], slot=int|None
EVENT_PLACEMENT_REJECTED = "placement_rejected"    # payload: cell=(q,r), slot=int|None, reason=str
EVENT_STACK_PLACED = "stack_placed"                # payload: cell=(q,r), units=list[Unit], slot=int|None
EVENT_OPTIONS_SPAWNED = "options_spawned"          # payload: slots=list[int]


# ============================================================================
# CASCADE (SORT & MERGE)
# ============================================================================
EVENT_CASCADE_REQUEST = "cascade_request"          # payload: cell=(q,r)
EVENT_CASCADE_STARTED = "cascade_started"          # payload: job_id=int, cell=(q,r)
EVENT_CASCADE_STEP = "cascade_step"                # payload: job_id, depth, target=(q,r), sources=list[(q,r)], color, moved=int, popped=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: job_id=int, steps=int
EVENT_MERGE_POPPED = "merge_popped"                # payload: cell=(q,r), units=list[Unit], run_length=int, points=int
EVENT_BOARD_RESET = "board_reset"                  # payload: reason=str


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, request_id=int, cell|source/target, units
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, request_id=int
EVENT_SOUND = "sound"                              # payload: kind=str, pitch=float, volume=float


# ============================================================================
# SCORE & LEVELS
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, progress_fraction=float
EVENT_LEVEL_COMPLETE = "level_complete"            # payload: level=int
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"    # payload: None
EVENT_LEVEL_STARTED = "level_started"              # payload: level=int, target=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
