"""Cocoon lifecycle and adult size constants."""

# Number of cocoons hanging from the branch
COCOON_COUNT = 6

# Thresholds in growth-seconds of local growth
CRACK_GROWTH = 10.0
HATCH_GROWTH = 20.0

# Start offset between consecutive cocoons, in growth-seconds of organism time
STAGGER_GROWTH = 20.0

# Horizontal span of the cocoons and the branch arc they hang from
COCOON_LEFT = 70.0
COCOON_RIGHT = 530.0
ARC_LEFT = 0.0
ARC_RIGHT = 600.0
ARC_BASE_Y = 265.0
ARC_AMPLITUDE = 60.0

# Per-slot vertical offsets so cocoons hang at the branch twigs
COCOON_Y_OFFSETS = (27.0, 25.0, 13.0, 8.0, 12.0, 5.0)

# Expected real development time range for size mapping, in seconds
DEV_REAL_MIN = 6.0
DEV_REAL_MAX = 50.0

# Adult size range and shaping
SIZE_MIN = 0.65
SIZE_MAX = 1.55
SIZE_JITTER = 0.12
SIZE_EXPONENT = 1.35
