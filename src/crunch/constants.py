# ============================================================================
# GRID
# ============================================================================
NUM_COLUMNS = 9
NUM_ROWS = 9


# ============================================================================
# COOKIES
# ============================================================================
NUM_COOKIE_TYPES = 6
# Display names indexed by cookie_type - 1.
COOKIE_NAMES = (
    "Croissant",
    "Cupcake",
    "Danish",
    "Donut",
    "Macaroon",
    "SugarCookie",
)


# ============================================================================
# MATCHING & SCORING
# ============================================================================
MIN_CHAIN_LENGTH = 3
# Chain score = BASE_CHAIN_SCORE * (length - 2) * combo multiplier
BASE_CHAIN_SCORE = 60


# ============================================================================
# SHUFFLE
# ============================================================================
# Whole-board regenerations allowed before giving up on a level layout.
MAX_SHUFFLE_ATTEMPTS = 100


# ============================================================================
# OBJECTIVE DEFAULTS
# ============================================================================
DEFAULT_TARGET_SCORE = 1000
DEFAULT_MAXIMUM_MOVES = 15
