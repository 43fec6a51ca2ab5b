"""Pure per-frame render description.

``build_frame_state`` turns the current ``SceneState`` into plain data: the
colours, positions, sizes and alphas of everything on screen. The painter in
``rendering`` only reads this; nothing here touches pygame, and nothing
computed here flows back into the simulation.
"""

import math
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from metamorphosis.config.display import (
    COCOON_JITTER,
    GLOW_DAY_COLOR,
    GLOW_NIGHT_COLOR,
    MOON_HALO_COLOR,
    POINTER_HALO_PULSE_AMPLITUDE,
    POINTER_HALO_PULSE_SPEED,
    POINTER_HALO_RINGS,
    POINTER_HALO_SCALE,
    SKY_DAWN,
    SKY_DAY,
    SKY_DUSK,
    SKY_HALO_ALPHA_RANGE,
    SKY_HALO_MAX_DIAMETER,
    SKY_HALO_MIN_DIAMETER,
    SKY_HALO_STEP,
    SKY_NIGHT,
    SKY_SEGMENT_BOUNDS,
    SUN_ARC_CX,
    SUN_ARC_CY,
    SUN_ARC_RADIUS,
    SUN_HALO_COLOR,
    SUN_THRESHOLD,
    TINT_DAY,
    TINT_NIGHT,
)
from metamorphosis.math_utils import lerp, lerp_color, normalize

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class HaloRing:
    diameter: float
    color: RGB
    alpha: float


@dataclass(frozen=True)
class SkyBody:
    """Sun or moon on its arc."""

    x: float
    y: float
    is_sun: bool


@dataclass(frozen=True)
class CocoonDraw:
    x: float
    y: float
    visual: str  # "default", "cracked" or "open"


@dataclass(frozen=True)
class NectarDraw:
    x: float
    y: float
    life_fraction: float
    outer_diameter: float
    outer_alpha: float
    inner_diameter: float
    inner_alpha: float


@dataclass(frozen=True)
class ButterflyDraw:
    x: float
    y: float
    angle: float
    size: float


@dataclass
class FrameState:
    """Everything the painter needs for one frame."""

    width: int
    height: int
    day_value: float
    is_day: bool
    sky_top: RGB
    sky_bottom: RGB
    sky_body: SkyBody
    sky_halo: List[HaloRing]
    pointer: Tuple[float, float]
    pointer_halo: List[HaloRing]
    glow_color: RGBA
    tint: RGBA
    clock_label: str
    cocoons: List[CocoonDraw] = field(default_factory=list)
    nectar: List[NectarDraw] = field(default_factory=list)
    butterflies: List[ButterflyDraw] = field(default_factory=list)


def sky_gradient(day_value: float) -> Tuple[RGB, RGB]:
    """Top and bottom sky colours, blended night -> dawn -> day -> dusk."""
    low, high = SKY_SEGMENT_BOUNDS
    if day_value < low:
        t = normalize(day_value, 0.0, low)
        a, b = SKY_NIGHT, SKY_DAWN
    elif day_value < high:
        t = normalize(day_value, low, high)
        a, b = SKY_DAWN, SKY_DAY
    else:
        t = normalize(day_value, high, 1.0)
        a, b = SKY_DAY, SKY_DUSK
    return lerp_color(a[0], b[0], t), lerp_color(a[1], b[1], t)


def sky_body_for(day_value: float) -> SkyBody:
    """Position on the semicircular arc; the body rises left and sets right as light grows."""
    theta = math.pi + day_value * math.pi
    return SkyBody(
        x=SUN_ARC_CX + SUN_ARC_RADIUS * math.cos(theta),
        y=SUN_ARC_CY + SUN_ARC_RADIUS * math.sin(theta),
        is_sun=day_value >= SUN_THRESHOLD,
    )


def sky_halo_rings(is_sun: bool) -> List[HaloRing]:
    """Concentric additive rings, outermost first, brighter toward the centre."""
    color = SUN_HALO_COLOR if is_sun else MOON_HALO_COLOR
    far_alpha, near_alpha = SKY_HALO_ALPHA_RANGE
    rings = []
    diameter = SKY_HALO_MAX_DIAMETER
    while diameter >= SKY_HALO_MIN_DIAMETER:
        t = normalize(diameter, SKY_HALO_MIN_DIAMETER, SKY_HALO_MAX_DIAMETER)
        rings.append(HaloRing(diameter, color, lerp(near_alpha, far_alpha, t)))
        diameter -= SKY_HALO_STEP
    return rings


def pointer_halo_rings(seconds: float) -> List[HaloRing]:
    """Gently pulsing halo around the pointer light."""
    pulse = 1.0 + POINTER_HALO_PULSE_AMPLITUDE * math.sin(seconds * POINTER_HALO_PULSE_SPEED)
    return [
        HaloRing(diameter * pulse * POINTER_HALO_SCALE, color, alpha)
        for diameter, color, alpha in POINTER_HALO_RINGS
    ]


def format_clock(seconds: float) -> str:
    """Elapsed time as MM:SS."""
    seconds = max(0.0, seconds)
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


def nectar_draw(x: float, y: float, life_fraction: float) -> NectarDraw:
    return NectarDraw(
        x=x,
        y=y,
        life_fraction=life_fraction,
        outer_diameter=12 + 10 * life_fraction,
        outer_alpha=180 * life_fraction,
        inner_diameter=5 + 18 * life_fraction,
        inner_alpha=130 * life_fraction,
    )


def build_frame_state(state: "SceneState", is_day: bool, rng: Optional[random.Random] = None) -> FrameState:
    """Derive the frame description from the scene state.

    Args:
        state: Current scene state (read only)
        is_day: Light regime for tint and glow
        rng: Generator for the cracked-cocoon shiver; defaults to one seeded
            by the frame number so the simulation's own generator is untouched
    """
    rng = rng or random.Random(state.frame)
    env = state.environment
    display = state.config.display
    sky_top, sky_bottom = sky_gradient(env.day_value)
    body = sky_body_for(env.day_value)

    jitter_x, jitter_y = COCOON_JITTER
    cocoons = []
    for cocoon in state.cocoons:
        visual = cocoon.stage.visual
        x, y = cocoon.x, cocoon.hang_y
        if visual == "cracked":
            x += rng.uniform(-jitter_x, jitter_x)
            y += rng.uniform(-jitter_y, jitter_y)
        cocoons.append(CocoonDraw(x, y, visual))

    nectar = [nectar_draw(n.x, n.y, n.life_fraction(state.now)) for n in state.attractors.nectar]
    butterflies = [ButterflyDraw(b.pos.x, b.pos.y, b.angle, b.size) for b in state.butterflies]

    return FrameState(
        width=display.screen_width,
        height=display.screen_height,
        day_value=env.day_value,
        is_day=is_day,
        sky_top=sky_top,
        sky_bottom=sky_bottom,
        sky_body=body,
        sky_halo=sky_halo_rings(body.is_sun),
        pointer=state.attractors.pointer,
        pointer_halo=pointer_halo_rings(state.elapsed),
        glow_color=GLOW_DAY_COLOR if is_day else GLOW_NIGHT_COLOR,
        tint=TINT_DAY if is_day else TINT_NIGHT,
        clock_label=format_clock(state.elapsed),
        cocoons=cocoons,
        nectar=nectar,
        butterflies=butterflies,
    )
