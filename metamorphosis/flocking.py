"""Butterfly agents and the boids-style flocking update.

Each frame every butterfly steers by four influences:

- Separation: push away from neighbours inside ``sep_radius``, stronger when closer
- Alignment: match the mean velocity of neighbours inside ``align_radius``
- Cohesion: drift toward the mean position of neighbours inside ``coh_radius``
- Attraction: a fixed-strength pull toward the nearest nectar, or the pointer

plus a faint air-current drift from smooth noise. Velocity is never damped,
only clamped to a speed cap that rises with daylight. Agents leaving the
canvas reappear just past the opposite edge.

Neighbour search is O(n^2); populations are a handful of butterflies.
"""

import logging
import math
import random
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from metamorphosis.config.flocking import DRIFT_AMPLITUDE, DRIFT_RATE_X, DRIFT_RATE_Y, SPAWN_SPEED_RANGE
from metamorphosis.config.scene_config import FlockingConfig
from metamorphosis.math_utils import Vector2
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from metamorphosis.attractors import Attractor
    from metamorphosis.noise import ValueNoise
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext

logger = logging.getLogger(__name__)


class Butterfly:
    """A flocking agent hatched from a cocoon.

    Attributes:
        butterfly_id: Sequential id within the scene
        pos: Position in canvas units
        vel: Velocity in canvas units per frame
        angle: Heading in radians, derived from velocity
        fatigue: Reserved; always 0
    """

    def __init__(
        self,
        butterfly_id: int,
        x: float,
        y: float,
        vx: float,
        vy: float,
        size: float,
        angle: Optional[float] = None,
    ) -> None:
        self.butterfly_id = butterfly_id
        self.pos = Vector2(x, y)
        self.vel = Vector2(vx, vy)
        self.angle = self.vel.heading() if angle is None else angle
        self._size = float(size)
        self.fatigue = 0.0

    @property
    def size(self) -> float:
        """Adult size factor, fixed at hatch."""
        return self._size

    def speed(self) -> float:
        return self.vel.length()

    def __repr__(self) -> str:
        return (
            f"Butterfly(#{self.butterfly_id}, pos=({self.pos.x:.1f}, {self.pos.y:.1f}), "
            f"size={self._size:.2f})"
        )


def spawn_butterfly(
    butterfly_id: int,
    x: float,
    y: float,
    size: float,
    rng: random.Random,
    speed_range: Tuple[float, float] = SPAWN_SPEED_RANGE,
) -> Butterfly:
    """Create a butterfly at (x, y) flying off in a random direction."""
    angle = rng.uniform(0.0, 2.0 * math.pi)
    speed = rng.uniform(*speed_range)
    return Butterfly(
        butterfly_id,
        x,
        y,
        speed * math.cos(angle),
        speed * math.sin(angle),
        size,
        angle=angle,
    )


def neighbour_forces(
    agent: Butterfly, others: Sequence[Butterfly], config: FlockingConfig
) -> Tuple[Vector2, Vector2, Vector2]:
    """Separation, alignment and cohesion for one agent, each capped at max_force.

    ``others`` may include ``agent`` itself; it is skipped by identity.
    Neighbours at exactly zero distance are left out of separation.
    """
    sep = Vector2()
    ali = Vector2()
    coh = Vector2()
    count_ali = 0
    count_coh = 0

    for other in others:
        if other is agent:
            continue
        dx = other.pos.x - agent.pos.x
        dy = other.pos.y - agent.pos.y
        d = math.hypot(dx, dy)

        if 0 < d < config.sep_radius:
            sep.x -= dx / d
            sep.y -= dy / d
        if d < config.align_radius:
            ali += other.vel
            count_ali += 1
        if d < config.coh_radius:
            coh += other.pos
            count_coh += 1

    if count_ali > 0:
        ali = ali / count_ali
    if count_coh > 0:
        coh = coh / count_coh - agent.pos

    sep.limit_inplace(config.max_force)
    ali.limit_inplace(config.max_force)
    coh.limit_inplace(config.max_force)
    return sep, ali, coh


def attraction(agent: Butterfly, target: "Attractor") -> Vector2:
    """Pull of exactly ``target.pull`` toward the attractor (zero when on top of it)."""
    return Vector2(target.x - agent.pos.x, target.y - agent.pos.y).set_length_inplace(target.pull)


def drift(noise: "ValueNoise", frame: int, index: int) -> Vector2:
    """Air-current drift in [-DRIFT_AMPLITUDE, DRIFT_AMPLITUDE] per axis.

    The agent index offsets the noise lookup so agents drift independently.
    """
    span = 2.0 * DRIFT_AMPLITUDE
    return Vector2(
        noise(frame * DRIFT_RATE_X + index) * span - DRIFT_AMPLITUDE,
        noise(frame * DRIFT_RATE_Y - index) * span - DRIFT_AMPLITUDE,
    )


def max_speed_for(day_value: float, config: FlockingConfig) -> float:
    """Speed cap; butterflies fly faster in daylight."""
    return config.max_speed * (config.day_speed_base + config.day_speed_gain * day_value)


def wrap_position(pos: Vector2, width: float, height: float, margin: float) -> None:
    """Wrap pos in-place: past one edge by more than margin reappears past the other."""
    if pos.x < -margin:
        pos.x = width + margin
    elif pos.x > width + margin:
        pos.x = -margin
    if pos.y < -margin:
        pos.y = height + margin
    elif pos.y > height + margin:
        pos.y = -margin


@runs_in_phase(UpdatePhase.ENTITY_ACT)
class FlockingSystem(BaseSystem):
    """Advances every butterfly by one frame.

    Agents are updated in hatch order and in place, so later agents see
    their predecessors' new positions within the same frame.
    """

    def __init__(self, state: "SceneState", config: FlockingConfig) -> None:
        super().__init__(state, "Flocking")
        self.config = config

    def step_scale(self, dt: float) -> float:
        """Position step multiplier: 1 per frame, or dt-scaled when frame-rate independent."""
        if self.config.frame_rate_independent:
            return dt * self.config.reference_fps
        return 1.0

    def step_agent(self, index: int, agent: Butterfly, flock: List[Butterfly], context: "PhaseContext") -> None:
        state = self.state
        config = self.config

        sep, ali, coh = neighbour_forces(agent, flock, config)
        target = state.attractors.attractor_for(agent.pos.x, agent.pos.y, context.now)
        pull = attraction(agent, target)
        air = drift(state.noise, context.frame, index)

        acceleration = (
            sep * config.w_sep + ali * config.w_align + coh * config.w_coh + pull + air
        )
        agent.vel += acceleration
        agent.vel.limit_inplace(max_speed_for(state.environment.day_value, config))

        agent.pos += agent.vel * self.step_scale(context.dt)
        wrap_position(
            agent.pos,
            state.config.display.screen_width,
            state.config.display.screen_height,
            config.wrap_margin,
        )
        agent.angle = agent.vel.heading()

    def _do_update(self, context: "PhaseContext") -> SystemResult:
        flock = self.state.butterflies
        for index, agent in enumerate(flock):
            self.step_agent(index, agent, flock, context)
        return SystemResult(entities_affected=len(flock))
