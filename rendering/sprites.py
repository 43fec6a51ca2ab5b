"""Scene sprites with vector fallbacks.

Every asset is optional. When an image is missing the matching ``draw_*``
function paints a simple shape with the same meaning: a brown bar for the
branch, a coloured ellipse per cocoon state, a purple triangle for a
butterfly.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import pygame
from pygame.surface import Surface

from metamorphosis.config.display import (
    BRANCH_POS,
    BUTTERFLY_SPRITE_ROTATION,
    FALLBACK_BRANCH_COLOR,
    FALLBACK_BRANCH_RADIUS,
    FALLBACK_BRANCH_RECT,
    FALLBACK_BUTTERFLY_COLOR,
    FALLBACK_BUTTERFLY_POINTS,
    FALLBACK_COCOON_COLORS,
    FALLBACK_COCOON_SIZE,
    FILES,
    SCALE_BRANCH,
    SCALE_BUTTERFLY,
    SCALE_COCOON,
)
from rendering.image_loader import ImageLoader

COCOON_VISUALS = ("default", "cracked", "open")


@dataclass
class SceneAssets:
    """Loaded scene images; any of them may be None."""

    branch: Optional[Surface] = None
    cocoons: Dict[str, Optional[Surface]] = field(default_factory=dict)
    butterfly: Optional[Surface] = None

    @classmethod
    def load(cls, asset_dir: str) -> "SceneAssets":
        def path(key: str) -> str:
            return os.path.join(asset_dir, FILES[key])

        return cls(
            branch=ImageLoader.load_optional(path("branch")),
            cocoons={visual: ImageLoader.load_optional(path(f"cocoon_{visual}")) for visual in COCOON_VISUALS},
            butterfly=ImageLoader.load_optional(path("butterfly")),
        )

    def missing(self):
        """Names of assets that fell back to vector drawing."""
        names = []
        if self.branch is None:
            names.append("branch")
        names.extend(f"cocoon_{v}" for v in COCOON_VISUALS if self.cocoons.get(v) is None)
        if self.butterfly is None:
            names.append("butterfly")
        return names


_scaled_cache: Dict[Tuple[int, float], Surface] = {}


def scaled(image: Surface, scale: float) -> Surface:
    """Scale an image by a constant factor, cached per (image, scale)."""
    key = (id(image), scale)
    if key not in _scaled_cache:
        width = max(1, int(image.get_width() * scale))
        height = max(1, int(image.get_height() * scale))
        _scaled_cache[key] = pygame.transform.smoothscale(image, (width, height))
    return _scaled_cache[key]


def draw_branch(screen: Surface, image: Optional[Surface]) -> None:
    if image is not None:
        screen.blit(scaled(image, SCALE_BRANCH), BRANCH_POS)
    else:
        pygame.draw.rect(
            screen,
            FALLBACK_BRANCH_COLOR,
            pygame.Rect(FALLBACK_BRANCH_RECT),
            border_radius=FALLBACK_BRANCH_RADIUS,
        )


def draw_cocoon(screen: Surface, image: Optional[Surface], x: float, y: float, visual: str) -> None:
    """Draw a cocoon centred on (x, y)."""
    if image is not None:
        sprite = scaled(image, SCALE_COCOON)
        screen.blit(sprite, sprite.get_rect(center=(int(x), int(y))))
    else:
        width, height = FALLBACK_COCOON_SIZE
        rect = pygame.Rect(0, 0, width, height)
        rect.center = (int(x), int(y))
        pygame.draw.ellipse(screen, FALLBACK_COCOON_COLORS[visual], rect)


def draw_butterfly(screen: Surface, image: Optional[Surface], x: float, y: float, angle: float, size: float) -> None:
    """Draw a butterfly centred on (x, y), turned to its heading.

    Screen y points down, so a clockwise heading angle is a negative pygame
    rotation.
    """
    turn = math.degrees(angle) + BUTTERFLY_SPRITE_ROTATION
    if image is not None:
        sprite = pygame.transform.rotozoom(image, -turn, SCALE_BUTTERFLY * size)
        screen.blit(sprite, sprite.get_rect(center=(int(x), int(y))))
    else:
        cos_t = math.cos(math.radians(turn))
        sin_t = math.sin(math.radians(turn))
        points = [
            (x + px * cos_t - py * sin_t, y + px * sin_t + py * cos_t)
            for px, py in FALLBACK_BUTTERFLY_POINTS
        ]
        pygame.draw.polygon(screen, FALLBACK_BUTTERFLY_COLOR, points)
