"""Paints a FrameState onto a pygame surface.

This module handles all drawing: sky, sun/moon and halos, branch, nectar,
cocoons, butterflies with their glow, the day/night wash and the clock. It
reads only the ``FrameState`` it is handed.
"""

from typing import Iterable, Optional, Tuple

import pygame

from metamorphosis.config.display import (
    CLOCK_COLOR,
    CLOCK_MARGIN,
    GLOW_DIAMETERS,
    GLOW_OUTER_ALPHA,
    MOON_COLOR,
    MOON_DIAMETER,
    MOON_MASK_COLOR,
    MOON_MASK_DIAMETER,
    MOON_MASK_OFFSET,
    NECTAR_INNER_COLOR,
    NECTAR_OUTER_COLOR,
    SUN_COLOR,
    SUN_DIAMETER,
)
from metamorphosis.frame_state import FrameState, HaloRing
from metamorphosis.math_utils import lerp_color
from rendering.sprites import SceneAssets, draw_branch, draw_butterfly, draw_cocoon


class SceneRenderer:
    """Renders frames of the metamorphosis scene.

    Attributes:
        screen: Pygame surface to render to
        font: Font for the clock readout
        assets: Loaded sprites (missing ones are drawn as vector shapes)
    """

    def __init__(self, screen: pygame.Surface, font: pygame.font.Font, assets: Optional[SceneAssets] = None) -> None:
        self.screen = screen
        self.font = font
        self.assets = assets or SceneAssets()
        self._sky: Optional[pygame.Surface] = None
        self._sky_key: Optional[Tuple] = None

    def paint(self, frame: FrameState) -> None:
        """Draw one complete frame, back to front."""
        self.draw_sky(frame)
        self.draw_sky_body(frame)
        self.draw_additive_rings(frame.sky_halo, (frame.sky_body.x, frame.sky_body.y))
        self.draw_additive_rings(frame.pointer_halo, frame.pointer)
        draw_branch(self.screen, self.assets.branch)
        self.draw_nectar(frame)
        for cocoon in frame.cocoons:
            draw_cocoon(self.screen, self.assets.cocoons.get(cocoon.visual), cocoon.x, cocoon.y, cocoon.visual)
        self.draw_butterflies(frame)
        self.draw_tint(frame)
        self.draw_clock(frame)

    def draw_sky(self, frame: FrameState) -> None:
        """Vertical gradient from sky_top to sky_bottom (cached while unchanged)."""
        key = (frame.sky_top, frame.sky_bottom, frame.width, frame.height)
        if key != self._sky_key:
            sky = pygame.Surface((frame.width, frame.height))
            last = max(1, frame.height - 1)
            for y in range(frame.height):
                color = lerp_color(frame.sky_top, frame.sky_bottom, y / last)
                pygame.draw.line(sky, color, (0, y), (frame.width, y))
            self._sky = sky
            self._sky_key = key
        self.screen.blit(self._sky, (0, 0))

    def draw_sky_body(self, frame: FrameState) -> None:
        body = frame.sky_body
        center = (int(body.x), int(body.y))
        if body.is_sun:
            pygame.draw.circle(self.screen, SUN_COLOR, center, SUN_DIAMETER // 2)
        else:
            pygame.draw.circle(self.screen, MOON_COLOR, center, MOON_DIAMETER // 2)
            dx, dy = MOON_MASK_OFFSET
            pygame.draw.circle(self.screen, MOON_MASK_COLOR, (center[0] + dx, center[1] + dy), MOON_MASK_DIAMETER // 2)

    def draw_additive_rings(self, rings: Iterable[HaloRing], center: Tuple[float, float]) -> None:
        """Add each ring's colour, weighted by its alpha, onto the screen."""
        for ring in rings:
            self._add_circle(center, ring.diameter, ring.color, ring.alpha)

    def _add_circle(self, center, diameter: float, color, alpha: float) -> None:
        radius = max(1, int(diameter / 2))
        weight = max(0.0, min(1.0, alpha / 255.0))
        premultiplied = tuple(int(c * weight) for c in color[:3])
        patch = pygame.Surface((radius * 2, radius * 2))
        patch.fill((0, 0, 0))
        pygame.draw.circle(patch, premultiplied, (radius, radius), radius)
        self.screen.blit(
            patch,
            (int(center[0]) - radius, int(center[1]) - radius),
            special_flags=pygame.BLEND_RGB_ADD,
        )

    def _alpha_circle(self, center, diameter: float, color, alpha: float) -> None:
        radius = max(1, int(diameter / 2))
        patch = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(patch, (*color[:3], int(max(0, min(255, alpha)))), (radius, radius), radius)
        self.screen.blit(patch, (int(center[0]) - radius, int(center[1]) - radius))

    def draw_nectar(self, frame: FrameState) -> None:
        """Nectar fades and shrinks as it ages."""
        for drop in frame.nectar:
            center = (drop.x, drop.y)
            self._alpha_circle(center, drop.outer_diameter, NECTAR_OUTER_COLOR, drop.outer_alpha)
            self._alpha_circle(center, drop.inner_diameter, NECTAR_INNER_COLOR, drop.inner_alpha)

    def draw_butterflies(self, frame: FrameState) -> None:
        inner, outer = GLOW_DIAMETERS
        color = frame.glow_color[:3]
        for b in frame.butterflies:
            draw_butterfly(self.screen, self.assets.butterfly, b.x, b.y, b.angle, b.size)
            self._add_circle((b.x, b.y), inner, color, frame.glow_color[3])
            self._add_circle((b.x, b.y), outer, color, GLOW_OUTER_ALPHA)

    def draw_tint(self, frame: FrameState) -> None:
        """Translucent day/night wash over the whole frame."""
        wash = pygame.Surface((frame.width, frame.height), pygame.SRCALPHA)
        wash.fill(frame.tint)
        self.screen.blit(wash, (0, 0))

    def draw_clock(self, frame: FrameState) -> None:
        text_surface = self.font.render(frame.clock_label, True, CLOCK_COLOR)
        margin_x, margin_y = CLOCK_MARGIN
        rect = text_surface.get_rect(bottomright=(frame.width - margin_x, frame.height - margin_y))
        self.screen.blit(text_surface, rect)
