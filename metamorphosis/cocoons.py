"""Cocoon lifecycle: staggered starts, cracking, hatching and adult size.

Cocoons hang along the branch arc. Each one waits until organism time
reaches its start threshold, then accumulates its own local growth at the
current growth rate (so a bright room speeds every cocoon up). Crossing
CRACK_GROWTH cracks the shell; crossing HATCH_GROWTH opens it and releases
exactly one butterfly.

Adult size comes from how long development took in *real* seconds. Bright
conditions raise the growth rate and so shorten real development time,
which yields smaller adults; dark, slow development yields larger ones.
"""

import logging
import math
import random
from typing import TYPE_CHECKING, List, Optional

from metamorphosis.config.lifecycle import ARC_AMPLITUDE, ARC_BASE_Y, ARC_LEFT
from metamorphosis.config.scene_config import LifecycleConfig
from metamorphosis.exceptions import LifecycleError
from metamorphosis.flocking import Butterfly, spawn_butterfly
from metamorphosis.math_utils import clamp, lerp
from metamorphosis.state_machine import CocoonStage, StateMachine, create_cocoon_state_machine
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext

logger = logging.getLogger(__name__)

# Real development time is floored here so an instant hatch still maps cleanly
MIN_DEV_REAL_SEC = 0.001


def arc_y(x: float, arc_right: float, arc_left: float = ARC_LEFT) -> float:
    """Baseline y of the branch arc at x: a raised-cosine sag between the ends."""
    u = clamp((x - arc_left) / (arc_right - arc_left), 0.0, 1.0)
    return ARC_BASE_Y + ARC_AMPLITUDE * (1.0 - math.cos(2.0 * math.pi * u)) * 0.5


def adult_size_for(dev_real_sec: float, config: LifecycleConfig, rng: random.Random) -> float:
    """Map real development time to an adult size factor.

    The time is normalised against [dev_real_min, dev_real_max], clamped,
    raised to size_exponent to favour large adults from slow development,
    mapped onto [size_min, size_max] and finally jittered by +/- size_jitter.
    """
    norm = clamp(
        (dev_real_sec - config.dev_real_min) / (config.dev_real_max - config.dev_real_min),
        0.0,
        1.0,
    )
    norm = norm**config.size_exponent
    base_size = lerp(config.size_min, config.size_max, norm)
    jitter = rng.uniform(1.0 - config.size_jitter, 1.0 + config.size_jitter)
    return base_size * jitter


class Cocoon:
    """One cocoon slot on the branch.

    Attributes:
        slot: Index along the branch, left to right
        x: Horizontal position
        y_base: Branch arc height at x
        offset_y: Extra drop so the cocoon hangs from its twig
        start_threshold: Organism time at which development may begin
        local_growth: Growth-seconds accumulated since this cocoon started
        started_at: Real time (seconds) at which development began
        spawned: Whether the butterfly has been released
    """

    def __init__(self, slot: int, x: float, y_base: float, offset_y: float, start_threshold: float) -> None:
        self.slot = slot
        self.x = x
        self.y_base = y_base
        self.offset_y = offset_y
        self.start_threshold = start_threshold
        self.local_growth = 0.0
        self.started_at: Optional[float] = None
        self.spawned = False
        self._lifecycle: StateMachine[CocoonStage] = create_cocoon_state_machine(track_history=True)

    @property
    def stage(self) -> CocoonStage:
        return self._lifecycle.state

    @property
    def started(self) -> bool:
        return self.stage is not CocoonStage.NOT_STARTED

    @property
    def cracked(self) -> bool:
        return self.stage in (CocoonStage.CRACKED, CocoonStage.OPEN)

    @property
    def open(self) -> bool:
        return self.stage is CocoonStage.OPEN

    @property
    def hang_y(self) -> float:
        """Where the cocoon (and its butterfly) actually sits."""
        return self.y_base + self.offset_y

    @property
    def history(self):
        return self._lifecycle.history

    def begin(self, now: float, frame: int = 0) -> None:
        self._lifecycle.transition(CocoonStage.STARTED, frame, "organism time reached threshold")
        self.started_at = now

    def grow(self, amount: float) -> None:
        """Accumulate local growth; only while developing."""
        if self.started and not self.open:
            self.local_growth += amount

    def crack(self, frame: int = 0) -> None:
        self._lifecycle.transition(CocoonStage.CRACKED, frame, "crack growth reached")

    def hatch(self, frame: int = 0) -> None:
        self._lifecycle.transition(CocoonStage.OPEN, frame, "hatch growth reached")

    def development_seconds(self, now: float) -> float:
        """Real seconds since this cocoon started (floored)."""
        started_at = now if self.started_at is None else self.started_at
        return max(MIN_DEV_REAL_SEC, now - started_at)

    def __repr__(self) -> str:
        return f"Cocoon(slot={self.slot}, stage={self.stage.name}, growth={self.local_growth:.2f})"


def build_cocoons(config: LifecycleConfig, arc_right: float) -> List[Cocoon]:
    """Create the fixed cocoon slots, evenly spaced along the branch."""
    count = config.cocoon_count
    cocoons = []
    for i in range(count):
        if count > 1:
            x = lerp(config.cocoon_left, config.cocoon_right, i / (count - 1))
        else:
            x = (config.cocoon_left + config.cocoon_right) / 2.0
        offset_y = config.y_offsets[i] if i < len(config.y_offsets) else 0.0
        cocoons.append(Cocoon(i, x, arc_y(x, arc_right), offset_y, i * config.stagger_growth))
    return cocoons


@runs_in_phase(UpdatePhase.LIFECYCLE)
class CocoonLifecycleSystem(BaseSystem):
    """Advances every cocoon through its stages and releases butterflies."""

    def __init__(self, state: "SceneState", config: LifecycleConfig) -> None:
        super().__init__(state, "CocoonLifecycle")
        self.config = config

    def advance(self, cocoon: Cocoon, growth: float, now: float, frame: int = 0) -> Optional[Butterfly]:
        """Advance one cocoon by one frame.

        Args:
            cocoon: The cocoon to advance
            growth: Growth-seconds added this frame (growth_rate * dt)
            now: Real time in seconds
            frame: Scene frame, for transition history

        Returns:
            The newly hatched butterfly, if this frame opened the cocoon
        """
        if not cocoon.started and self.state.environment.organism_time >= cocoon.start_threshold:
            cocoon.begin(now, frame)
            logger.debug("Cocoon %d started at organism time %.2f", cocoon.slot, cocoon.start_threshold)

        cocoon.grow(growth)

        if cocoon.stage is CocoonStage.STARTED and cocoon.local_growth >= self.config.crack_growth:
            cocoon.crack(frame)
        if cocoon.stage is CocoonStage.CRACKED and cocoon.local_growth >= self.config.hatch_growth:
            cocoon.hatch(frame)
            return self._release(cocoon, now)
        return None

    def _release(self, cocoon: Cocoon, now: float) -> Butterfly:
        if cocoon.spawned:
            raise LifecycleError(f"Cocoon {cocoon.slot} already released its butterfly")

        dev_real = cocoon.development_seconds(now)
        size = adult_size_for(dev_real, self.config, self.state.rng)
        butterfly = spawn_butterfly(
            len(self.state.butterflies), cocoon.x, cocoon.hang_y, size, self.state.rng
        )
        self.state.butterflies.append(butterfly)
        cocoon.spawned = True
        logger.info(
            "Cocoon %d hatched after %.1fs real development, adult size %.2f",
            cocoon.slot,
            dev_real,
            size,
        )
        return butterfly

    def _do_update(self, context: "PhaseContext") -> SystemResult:
        growth = self.state.environment.frame_growth
        hatched = []
        for cocoon in self.state.cocoons:
            if self.advance(cocoon, growth, context.now, context.frame) is not None:
                hatched.append(cocoon.slot)
        return SystemResult(
            entities_affected=sum(1 for c in self.state.cocoons if c.started and not c.open),
            entities_spawned=len(hatched),
            details={"hatched": hatched},
        )
