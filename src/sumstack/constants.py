GRID_ROWS = 10
GRID_COLS = 7
# Rows of tiles present when a session starts (filled from the bottom).
INITIAL_ROWS = 1
# Ticks between forced row injections in timed mode.
TIMED_MODE_INTERVAL = 10

TILE_MIN_VALUE = 1
TILE_MAX_VALUE = 9

# Target generation: sum 2-4 random tiles, clamp into [TARGET_MIN, TARGET_MAX].
TARGET_MIN = 5
TARGET_MAX = 45
TARGET_FALLBACK = 10  # used when the board is empty
TARGET_MIN_TERMS = 2
TARGET_MAX_TERMS = 4

# Points awarded per unit of a matched sum.
SCORE_PER_POINT = 10
