"""Scene configuration dataclasses.

Defaults come from the constants modules; a scene can be built with any of
them overridden, which is how tests pin down thresholds and rates.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from metamorphosis.config.display import ASSET_DIR, FRAME_RATE, SCREEN_HEIGHT, SCREEN_WIDTH
from metamorphosis.config.environment import (
    BRIGHTNESS_CEIL,
    BRIGHTNESS_FLOOR,
    CAM_HEIGHT,
    CAM_WIDTH,
    DAY_THRESHOLD,
    INITIAL_BRIGHTNESS,
    MAX_GROWTH,
    MIN_FRAME_DT,
    MIN_GROWTH,
    SMOOTH_FACTOR,
)
from metamorphosis.config.flocking import (
    ALIGN_RADIUS,
    COH_RADIUS,
    DAY_SPEED_BASE,
    DAY_SPEED_GAIN,
    MAX_FORCE,
    MAX_SPEED,
    NECTAR_LIFE,
    NECTAR_PULL,
    POINTER_PULL,
    REFERENCE_FPS,
    SEP_RADIUS,
    W_ALIGN,
    W_COH,
    W_SEP,
    WRAP_MARGIN,
)
from metamorphosis.config.lifecycle import (
    COCOON_COUNT,
    COCOON_LEFT,
    COCOON_RIGHT,
    COCOON_Y_OFFSETS,
    CRACK_GROWTH,
    DEV_REAL_MAX,
    DEV_REAL_MIN,
    HATCH_GROWTH,
    SIZE_EXPONENT,
    SIZE_JITTER,
    SIZE_MAX,
    SIZE_MIN,
    STAGGER_GROWTH,
)
from metamorphosis.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Canvas size, frame rate and asset location."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_rate: int = FRAME_RATE
    asset_dir: str = ASSET_DIR


@dataclass
class LightConfig:
    """Light sensing and environment clock tunables."""

    cam_width: int = CAM_WIDTH
    cam_height: int = CAM_HEIGHT
    initial_brightness: float = INITIAL_BRIGHTNESS
    smooth_factor: float = SMOOTH_FACTOR
    brightness_floor: float = BRIGHTNESS_FLOOR
    brightness_ceil: float = BRIGHTNESS_CEIL
    day_threshold: float = DAY_THRESHOLD
    min_growth: float = MIN_GROWTH
    max_growth: float = MAX_GROWTH
    min_frame_dt: float = MIN_FRAME_DT


@dataclass
class LifecycleConfig:
    """Cocoon placement, growth thresholds and adult size mapping."""

    cocoon_count: int = COCOON_COUNT
    crack_growth: float = CRACK_GROWTH
    hatch_growth: float = HATCH_GROWTH
    stagger_growth: float = STAGGER_GROWTH
    cocoon_left: float = COCOON_LEFT
    cocoon_right: float = COCOON_RIGHT
    y_offsets: Tuple[float, ...] = COCOON_Y_OFFSETS
    dev_real_min: float = DEV_REAL_MIN
    dev_real_max: float = DEV_REAL_MAX
    size_min: float = SIZE_MIN
    size_max: float = SIZE_MAX
    size_jitter: float = SIZE_JITTER
    size_exponent: float = SIZE_EXPONENT


@dataclass
class FlockingConfig:
    """Butterfly steering and attractor tunables.

    Attributes:
        frame_rate_independent: When False (default) velocities are applied
            once per frame, so motion speeds up with the frame rate. When True, position
            steps are scaled by ``dt * reference_fps``.
    """

    max_speed: float = MAX_SPEED
    max_force: float = MAX_FORCE
    day_speed_base: float = DAY_SPEED_BASE
    day_speed_gain: float = DAY_SPEED_GAIN
    sep_radius: float = SEP_RADIUS
    align_radius: float = ALIGN_RADIUS
    coh_radius: float = COH_RADIUS
    w_sep: float = W_SEP
    w_align: float = W_ALIGN
    w_coh: float = W_COH
    wrap_margin: float = WRAP_MARGIN
    nectar_life: float = NECTAR_LIFE
    nectar_pull: float = NECTAR_PULL
    pointer_pull: float = POINTER_PULL
    frame_rate_independent: bool = False
    reference_fps: float = REFERENCE_FPS


@dataclass
class SceneConfig:
    """Top-level scene configuration.

    Attributes:
        seed: Seed for the scene's random generator (None = nondeterministic)
        headless: Whether the scene runs without a window
    """

    seed: Optional[int] = None
    headless: bool = False
    display: DisplayConfig = field(default_factory=DisplayConfig)
    light: LightConfig = field(default_factory=LightConfig)
    lifecycle: LifecycleConfig = field(default_factory=LifecycleConfig)
    flocking: FlockingConfig = field(default_factory=FlockingConfig)

    def validate(self) -> "SceneConfig":
        """Check that the configuration is coherent.

        Returns:
            self, so construction and validation can be chained

        Raises:
            ConfigurationError: If a value would break the simulation
        """
        light = self.light
        if light.brightness_ceil <= light.brightness_floor:
            raise ConfigurationError(
                f"Brightness band is empty: [{light.brightness_floor}, {light.brightness_ceil}]"
            )
        if not 0.0 < light.smooth_factor <= 1.0:
            raise ConfigurationError(f"smooth_factor must be in (0, 1], got {light.smooth_factor}")
        if light.max_growth < light.min_growth:
            raise ConfigurationError("max_growth must not be below min_growth")
        if not 0.0 <= light.initial_brightness <= 255.0:
            raise ConfigurationError(
                f"initial_brightness must be in [0, 255], got {light.initial_brightness}"
            )
        if light.min_frame_dt <= 0:
            raise ConfigurationError("min_frame_dt must be positive")

        lifecycle = self.lifecycle
        if lifecycle.cocoon_count < 1:
            raise ConfigurationError("At least one cocoon is required")
        if lifecycle.hatch_growth <= lifecycle.crack_growth:
            raise ConfigurationError(
                f"hatch_growth ({lifecycle.hatch_growth}) must exceed "
                f"crack_growth ({lifecycle.crack_growth})"
            )
        if lifecycle.dev_real_max <= lifecycle.dev_real_min:
            raise ConfigurationError("dev_real_max must exceed dev_real_min")
        if not 0.0 <= lifecycle.size_jitter < 1.0:
            raise ConfigurationError("size_jitter must be in [0, 1)")

        flocking = self.flocking
        if flocking.nectar_life <= 0:
            raise ConfigurationError("nectar_life must be positive")
        if flocking.max_speed <= 0 or flocking.max_force <= 0:
            raise ConfigurationError("max_speed and max_force must be positive")
        return self
