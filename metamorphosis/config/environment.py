"""Light sensing and environment clock constants."""

# Camera frame is downscaled to this resolution before sampling
CAM_WIDTH = 64
CAM_HEIGHT = 48

# Luma weights (Rec. 709)
LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)

# Sample every Nth row and column of the frame
SAMPLE_STRIDE = 2

# Brightness starts mid-scale until the sensor reports
INITIAL_BRIGHTNESS = 128.0

# Exponential smoothing factor per frame (~1-2 s settling at 60 fps)
SMOOTH_FACTOR = 0.08

# Working band for brightness before mapping to day value / growth rate
BRIGHTNESS_FLOOR = 20.0
BRIGHTNESS_CEIL = 220.0

# Smoothed brightness above this reads as "day" for tint and glow
DAY_THRESHOLD = 110.0

# Growth rate in growth-seconds per real second
MIN_GROWTH = 0.6
MAX_GROWTH = 2.0

# Smallest real frame interval used for integration, in seconds
MIN_FRAME_DT = 0.001
