# constants.py

"""
Application Constants

This module defines static configuration values for the application's framework.
These are not expected to change between simulation runs. Values that tune a
single run (seed, spawn probability, window size) live in config.json instead.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable. "Tick" is one fixed
  simulation step; all per-tick values are in logical surface pixels.
"""

# Window Title
TITLE = "Pixel Fireworks"

# Timing
UPDATES_PER_SECOND = 60  # Fixed simulation ticks per second
REFRESH_LIMIT = 120      # Maximum rendered frames per second
MAX_CATCH_UP_TICKS = 10  # Ticks the driver may replay after a stall

# Default logical surface (pixels), scaled up by PIXEL_SCALE in the window.
WIDTH = 200
HEIGHT = 120
PIXEL_SCALE = 5

# Colors (RGB)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# --- Particle defaults ---
PARTICLE_LIFETIME = 1.0   # Fresh, fully opaque
PARTICLE_FADING = 0.01    # Lifetime lost per tick

# --- Rocket ---
ROCKET_DIMENSIONS = (1, 3)
ROCKET_COLOR = WHITE
GRAVITY = 0.02  # Downward acceleration, pixels/tick^2 (positive y is down)

# The rocket detonates once gravity has slowed its ascent past this
# vertical speed (pixels/tick, negative is upward).
DETONATION_SPEED = -0.3

# --- Burst ---
BURST_COUNT = 25
BURST_PARTICLE_DIMENSIONS = (1, 1)
BURST_SATURATION_JITTER = 20.0  # +/- HSL saturation points
BURST_LIGHTNESS_JITTER = 40.0   # +/- HSL lightness points
BURST_SPEED_SCALE = 1.5
BURST_X_BIAS = 0.5  # U - 0.5 spreads evenly left and right
BURST_Y_BIAS = 0.9  # U - 0.9 favours upward motion

# --- Spawn policy ---
SPAWN_PROBABILITY = 0.10   # One Bernoulli trial per tick
LAUNCH_SPEED_MIN = -1.0    # Slowest launch speed (pixels/tick, upward)
LAUNCH_SPEED_RANGE = -1.0  # Launch speed is LAUNCH_SPEED_MIN + U * LAUNCH_SPEED_RANGE

# Background color the surface is cleared to each frame
BACKGROUND_COLOR = BLACK
