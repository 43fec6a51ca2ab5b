"""Butterfly flocking and attractor constants."""

# Speed and steering caps (units per frame)
MAX_SPEED = 2.2
MAX_FORCE = 0.06

# Speed cap multiplier is MAX_SPEED * (DAY_SPEED_BASE + DAY_SPEED_GAIN * day_value)
DAY_SPEED_BASE = 0.8
DAY_SPEED_GAIN = 0.4

# Neighbourhood radii
SEP_RADIUS = 42.0
ALIGN_RADIUS = 70.0
COH_RADIUS = 95.0

# Force weights
W_SEP = 2.0
W_ALIGN = 0.6
W_COH = 0.45

# Initial speed range for freshly hatched butterflies
SPAWN_SPEED_RANGE = (0.6, 1.2)

# Air-current drift: noise sample rates per axis and amplitude
DRIFT_RATE_X = 0.003
DRIFT_RATE_Y = 0.004
DRIFT_AMPLITUDE = 0.1

# Agents may leave the canvas by this margin before wrapping
WRAP_MARGIN = 20.0

# Frame rate that a velocity of "units per frame" is calibrated against
REFERENCE_FPS = 60.0

# Attractors
NECTAR_LIFE = 12.0
NECTAR_PULL = 0.10
POINTER_PULL = 0.09
