"""Display and asset configuration constants."""

# Logical canvas size; every simulated position lives in this space
SCREEN_WIDTH = 600
SCREEN_HEIGHT = 600

# Target frame rate for the host loop, in frames per second
FRAME_RATE = 60

# Directory and filenames for the scene sprites
ASSET_DIR = "assets"
FILES = {
    "branch": "03_branch.png",
    "cocoon_default": "03_cocoon.png",
    "cocoon_cracked": "03_cracked.png",
    "cocoon_open": "03_shell.png",
    "butterfly": "03_butterfly.png",
}

# Sprite scale factors relative to the intrinsic image size
SCALE_BRANCH = 0.293
SCALE_COCOON = 0.15
SCALE_BUTTERFLY = 0.08

# Branch image is drawn from its top-left corner at this position
BRANCH_POS = (0, -10)

# The butterfly sprite points this many degrees off the flight heading
BUTTERFLY_SPRITE_ROTATION = 150.0

# Sky palette stops as (top, bottom) pairs
SKY_NIGHT = ((10, 20, 45), (18, 35, 70))
SKY_DAWN = ((255, 140, 90), (255, 200, 130))
SKY_DAY = ((120, 190, 255), (200, 230, 255))
SKY_DUSK = ((240, 120, 160), (110, 60, 120))

# Day value boundaries between the palette segments
SKY_SEGMENT_BOUNDS = (0.33, 0.66)

# Sun/moon arc: centred below the canvas so the body sweeps left to right
SUN_ARC_CX = 300
SUN_ARC_CY = 560
SUN_ARC_RADIUS = 320
SUN_THRESHOLD = 0.45
SUN_DIAMETER = 24
MOON_DIAMETER = 18
MOON_MASK_DIAMETER = 16
MOON_MASK_OFFSET = (5, -2)
SUN_COLOR = (255, 230, 120)
MOON_COLOR = (220, 230, 255)
MOON_MASK_COLOR = (10, 20, 45)

# Sky body halo: ring diameters from outer to inner, alpha grows inward
SKY_HALO_MAX_DIAMETER = 220
SKY_HALO_MIN_DIAMETER = 24
SKY_HALO_STEP = 22
SKY_HALO_ALPHA_RANGE = (10, 90)
SUN_HALO_COLOR = (255, 230, 150)
MOON_HALO_COLOR = (120, 160, 255)

# Pointer halo: (diameter, color, alpha) rings, scaled and gently pulsed
POINTER_HALO_SCALE = 0.55
POINTER_HALO_PULSE_AMPLITUDE = 0.06
POINTER_HALO_PULSE_SPEED = 2.1
POINTER_HALO_RINGS = (
    (110, (255, 240, 150), 58),
    (68, (255, 255, 200), 42),
    (36, (255, 255, 255), 30),
)

# Cracked cocoons shiver by up to this many units per axis
COCOON_JITTER = (1.2, 0.8)

# Vector fallbacks for missing assets
FALLBACK_BRANCH_RECT = (0, -10, 600, 50)
FALLBACK_BRANCH_RADIUS = 9
FALLBACK_BRANCH_COLOR = (120, 80, 50)
FALLBACK_COCOON_SIZE = (46, 76)
FALLBACK_COCOON_COLORS = {
    "default": (180, 200, 210),
    "cracked": (250, 205, 120),
    "open": (200, 255, 200),
}
FALLBACK_BUTTERFLY_COLOR = (100, 80, 220)
FALLBACK_BUTTERFLY_POINTS = ((0, -10), (-8, 8), (8, 8))

# Nectar drawing
NECTAR_OUTER_COLOR = (255, 200, 90)
NECTAR_INNER_COLOR = (255, 255, 180)

# Butterfly glow: (r, g, b, alpha) per light regime, drawn at two sizes
GLOW_DAY_COLOR = (255, 220, 120, 28)
GLOW_NIGHT_COLOR = (140, 170, 255, 26)
GLOW_DIAMETERS = (18, 36)
GLOW_OUTER_ALPHA = 12

# Full-frame tint overlay (r, g, b, alpha)
TINT_DAY = (255, 240, 150, 20)
TINT_NIGHT = (90, 120, 255, 32)

# Elapsed time readout
CLOCK_FONT_SIZE = 22
CLOCK_COLOR = (30, 30, 30)
CLOCK_MARGIN = (12, 10)
