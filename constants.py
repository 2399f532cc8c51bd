# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They are the
fallbacks used when config.json leaves a value out, plus rendering
properties that are not part of the experimental configuration.
"""

# Visualization settings
FPS = 60
CANVAS_WIDTH = 1200
CANVAS_HEIGHT = 700
WINDOW_TITLE = "Pointer Swarm"
BACKGROUND_COLOR = (26, 27, 38) # Night Blue

# --- Body Palette ---
# Any value pygame.Color understands works here: a name, a hex string
# or an (r, g, b) triple.
BODY_COLOR = "#bb9af7"      # Lavender
COLLIDED_COLOR = "#cfc9c2"  # Pale Stone
POINTER_COLOR = "#2ac3de"   # Sky Blue

# --- Population ---
# Inclusive bounds on how many bodies are created at startup.
BODY_COUNT_MIN = 30
BODY_COUNT_MAX = 50
# Half-open [low, high) ranges for body dimensions.
BODY_WIDTH_RANGE = (25.0, 35.0)
BODY_HEIGHT_RANGE = (20.0, 30.0)
# Each velocity component starts uniform in [-speed/2, speed/2].
INITIAL_SPEED = 5.0
POINTER_SIZE = (25.0, 25.0)

# --- Force Model ---
# Numerator of the inverse-square pointer force.
FORCE_STRENGTH = 150.0
# Distance exponent for the pull applied while the button is held.
ATTRACTION_EXPONENT = 2.0
# Distances below this are clamped before dividing.
MIN_DISTANCE = 1.0

# --- Scheduling (milliseconds) ---
TICK_INTERVAL_MS = 16
HOLD_INTERVAL_MS = 100
# Most physics steps a single late pass may replay before the backlog is dropped.
MAX_CATCHUP_TICKS = 30
