"""Ambient light sensing.

The scene's pace follows the room's light. A frame source hands over a small
colour frame whenever one is ready; ``average_luma`` reduces it to a single
brightness in [0, 255]. Reads are best-effort: when no frame is ready, or the
source fails, the previous brightness is kept and the frame goes on.
"""

import logging
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

import numpy as np

from metamorphosis.config.environment import LUMA_WEIGHTS, SAMPLE_STRIDE
from metamorphosis.exceptions import SensorError
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext

logger = logging.getLogger(__name__)


def average_luma(pixels, stride: int = SAMPLE_STRIDE) -> Optional[float]:
    """Average Rec. 709 luma over every ``stride``-th row and column.

    Args:
        pixels: Array-like of shape (rows, cols, channels) with at least
            three colour channels in RGB order; extra channels are ignored
        stride: Subsampling step on both axes

    Returns:
        Mean luma in [0, 255], or None if the buffer is absent or empty
    """
    if pixels is None:
        return None
    frame = np.asarray(pixels, dtype=np.float64)
    if frame.size == 0:
        return None
    if frame.ndim != 3 or frame.shape[2] < 3:
        raise SensorError(f"Expected a (rows, cols, >=3) colour buffer, got shape {frame.shape}")

    sampled = frame[::stride, ::stride, :3]
    r_w, g_w, b_w = LUMA_WEIGHTS
    luma = sampled[..., 0] * r_w + sampled[..., 1] * g_w + sampled[..., 2] * b_w
    return float(luma.mean())


@runtime_checkable
class FrameSource(Protocol):
    """Anything that can hand over the latest low-resolution camera frame."""

    def poll(self):
        """Return the latest frame as a (rows, cols, 3) array, or None if not ready.

        Must never block waiting for the device.
        """
        ...

    def close(self) -> None: ...


class NullFrameSource:
    """A sensor that is never ready; brightness stays where it is."""

    def poll(self):
        return None

    def close(self) -> None:
        pass


class ConstantFrameSource:
    """Synthetic uniform grey frames at a fixed brightness.

    Used for headless runs and tests in place of a camera. ``brightness`` may
    be changed between frames to script light scenarios.
    """

    def __init__(self, brightness: float, width: int = 64, height: int = 48) -> None:
        self.brightness = brightness
        self.width = width
        self.height = height

    def poll(self):
        return np.full((self.height, self.width, 3), self.brightness, dtype=np.float64)

    def close(self) -> None:
        pass


@runs_in_phase(UpdatePhase.SENSE)
class LightSensor(BaseSystem):
    """Samples the frame source once per tick into ``environment.raw_brightness``."""

    def __init__(self, state: "SceneState", source: Optional[FrameSource] = None) -> None:
        super().__init__(state, "LightSensor")
        self.source: FrameSource = source if source is not None else NullFrameSource()
        self._samples = 0
        self._misses = 0
        self._warned = False

    def sample(self) -> Optional[float]:
        """Read one frame from the source and update raw brightness.

        Returns:
            The new raw brightness, or None if the previous value was kept
        """
        try:
            luma = average_luma(self.source.poll())
        except SensorError as e:
            if not self._warned:
                logger.warning("Light sensor unavailable, keeping last brightness: %s", e)
                self._warned = True
            luma = None

        if luma is None:
            self._misses += 1
            return None

        self._samples += 1
        self.state.environment.raw_brightness = luma
        return luma

    def _do_update(self, context: "PhaseContext") -> SystemResult:
        luma = self.sample()
        return SystemResult(
            entities_affected=0 if luma is None else 1,
            details={"brightness": self.state.environment.raw_brightness, "fresh": luma is not None},
        )

    def get_debug_info(self):
        return {
            **super().get_debug_info(),
            "source": type(self.source).__name__,
            "samples": self._samples,
            "misses": self._misses,
        }
