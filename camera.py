"""Webcam light source backed by ``pygame.camera``.

The camera is opened at a tiny resolution; ``poll`` only grabs a frame when
the device reports one ready, so the frame loop never waits on it.
"""

import logging
from typing import Optional, Tuple

import pygame
import pygame.camera

from metamorphosis.config.environment import CAM_HEIGHT, CAM_WIDTH
from metamorphosis.exceptions import SensorError
from metamorphosis.light_sensor import FrameSource, NullFrameSource

logger = logging.getLogger(__name__)


class PygameCameraSource:
    """Low-resolution webcam frames as (rows, cols, 3) arrays."""

    def __init__(self, width: int = CAM_WIDTH, height: int = CAM_HEIGHT, device: Optional[str] = None) -> None:
        self.size: Tuple[int, int] = (width, height)
        try:
            pygame.camera.init()
            devices = pygame.camera.list_cameras()
            if device is None:
                if not devices:
                    raise SensorError("No camera devices found")
                device = devices[0]
            self.device = device
            self._camera = pygame.camera.Camera(device, self.size)
            self._camera.start()
        except (pygame.error, SystemError, OSError) as e:
            raise SensorError(f"Couldn't open camera {device!r}: {e}") from e
        logger.info("Camera %s opened at %dx%d", device, width, height)

    def poll(self):
        try:
            if not self._camera.query_image():
                return None
            image = self._camera.get_image()
        except (pygame.error, SystemError) as e:
            raise SensorError(f"Camera read failed: {e}") from e
        if image.get_size() != self.size:
            image = pygame.transform.scale(image, self.size)
        # surfarray is column-major (x, y); swap to rows first
        return pygame.surfarray.array3d(image).swapaxes(0, 1)

    def close(self) -> None:
        try:
            self._camera.stop()
        except (pygame.error, SystemError) as e:
            logger.debug("Camera stop failed: %s", e)


def open_camera_source(device: Optional[str] = None) -> FrameSource:
    """Open the webcam, or fall back to a source that never delivers frames."""
    try:
        return PygameCameraSource(device=device)
    except SensorError as e:
        logger.warning("%s; light stays at its initial level", e)
        return NullFrameSource()
