"""Environment clock: brightness to day value, growth rate and organism time.

Architecture Notes:
- Runs in UpdatePhase.TIME_UPDATE, right after the light sensor
- Organism time ("world growth") integrates the growth rate over real time
  and only ever increases; it is the sole gate for cocoon starts
- Provides the day/night helpers the renderer uses (is_day, time string)
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict

from metamorphosis.config.scene_config import LightConfig
from metamorphosis.math_utils import clamp, lerp, normalize
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext

logger = logging.getLogger(__name__)


@dataclass
class EnvironmentState:
    """Process-wide light and time state, mutated once per frame.

    Attributes:
        raw_brightness: Latest sensor luma, 0..255
        smoothed_brightness: Low-pass filtered brightness
        day_value: 0 (night) .. 1 (day)
        growth_rate: Growth-seconds accrued per real second
        organism_time: Growth-seconds accumulated since scene start
        frame_growth: Growth-seconds added by the most recent tick
    """

    raw_brightness: float
    smoothed_brightness: float
    day_value: float = 0.0
    growth_rate: float = 0.0
    organism_time: float = 0.0
    frame_growth: float = 0.0

    @classmethod
    def initial(cls, config: LightConfig) -> "EnvironmentState":
        env = cls(
            raw_brightness=config.initial_brightness,
            smoothed_brightness=config.initial_brightness,
        )
        env.day_value = day_value_for(env.smoothed_brightness, config)
        env.growth_rate = growth_rate_for(env.smoothed_brightness, config)
        return env


def day_value_for(brightness: float, config: LightConfig) -> float:
    """Map brightness onto [0, 1] after clamping to the working band."""
    clamped = clamp(brightness, config.brightness_floor, config.brightness_ceil)
    return normalize(clamped, config.brightness_floor, config.brightness_ceil)


def growth_rate_for(brightness: float, config: LightConfig) -> float:
    """Growth-seconds per real second: MIN_GROWTH in the dark up to MAX_GROWTH in full light."""
    return lerp(config.min_growth, config.max_growth, day_value_for(brightness, config))


@runs_in_phase(UpdatePhase.TIME_UPDATE)
class EnvironmentClock(BaseSystem):
    """Smooths brightness and integrates organism time."""

    def __init__(self, state: "SceneState", config: LightConfig) -> None:
        super().__init__(state, "EnvironmentClock")
        self.config = config

    @property
    def environment(self) -> EnvironmentState:
        return self.state.environment

    def advance(self, dt: float) -> float:
        """Advance the clock by one frame of ``dt`` real seconds.

        Returns:
            Growth-seconds added this frame (growth_rate * floored dt)
        """
        env = self.environment
        dt = max(self.config.min_frame_dt, dt)

        env.smoothed_brightness += self.config.smooth_factor * (
            env.raw_brightness - env.smoothed_brightness
        )
        env.day_value = day_value_for(env.smoothed_brightness, self.config)
        env.growth_rate = growth_rate_for(env.smoothed_brightness, self.config)

        growth = env.growth_rate * dt
        env.organism_time += growth
        env.frame_growth = growth
        return growth

    def _do_update(self, context: "PhaseContext") -> SystemResult:
        growth = self.advance(context.dt)
        return SystemResult(
            details={
                "day_value": self.environment.day_value,
                "growth_rate": self.environment.growth_rate,
                "growth": growth,
            }
        )

    def is_day(self) -> bool:
        """True when smoothed brightness is above the day threshold."""
        return self.environment.smoothed_brightness > self.config.day_threshold

    def get_time_string(self) -> str:
        """Human-readable light regime: Night, Dawn, Day or Bright Day."""
        day_value = self.environment.day_value
        if day_value < 0.15:
            return "Night"
        elif day_value < 0.45:
            return "Dawn"
        elif day_value < 0.85:
            return "Day"
        else:
            return "Bright Day"

    def get_debug_info(self) -> Dict[str, Any]:
        env = self.environment
        return {
            **super().get_debug_info(),
            "raw_brightness": round(env.raw_brightness, 2),
            "smoothed_brightness": round(env.smoothed_brightness, 2),
            "day_value": round(env.day_value, 3),
            "growth_rate": round(env.growth_rate, 3),
            "organism_time": round(env.organism_time, 2),
            "time_string": self.get_time_string(),
            "is_day": self.is_day(),
        }
