from blinker import Signal
from typing import Dict

class EventBus:
    """Event bus the presentation layer listens on, built on blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced listeners alive.
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
# GAME FLOW
# ============================================================================
EVENT_GAME_START_REQUEST = "game_start_request"    # payload: none
EVENT_GAME_STARTED = "game_started"                # payload: target_score=int, moves_left=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_MOVES_CHANGED = "moves_changed"              # payload: moves_left=int
EVENT_OBJECTIVE_REACHED = "objective_reached"      # payload: score=int, target_score=int
EVENT_MOVES_EXHAUSTED = "moves_exhausted"          # payload: score=int
EVENT_GAME_OVER = "game_over"                      # payload: won=bool, score=int


# ============================================================================
# BOARD
# ============================================================================
EVENT_SHUFFLE_REQUEST = "shuffle_request"          # payload: none
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: cookies=set[Cookie], reason=str
EVENT_NO_MOVES = "no_moves"                        # payload: none


# ============================================================================
# SWAPS
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"                # payload: src=(c,r), dst=(c,r)
EVENT_SWAP_INVALID = "swap_invalid"                # payload: move=Move
EVENT_SWAP_APPLIED = "swap_applied"                # payload: move=Move, cookies=(Cookie, Cookie)


# ============================================================================
# CASCADE
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"              # payload: chains=set[Chain], depth=int, score_delta=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: columns=list[list[GravityMove]]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: columns=list[list[Cookie]]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
