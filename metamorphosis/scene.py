"""Scene orchestration: explicit state plus the per-frame phase pipeline.

All mutable simulation state lives on one ``SceneState`` object that every
system receives at construction. ``Scene.tick`` runs one frame:

    sense light -> advance clock -> develop cocoons -> expire nectar -> fly butterflies

Rendering never feeds back: ``Scene.frame_state()`` derives a read-only
``FrameState`` for the painter.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from metamorphosis.attractors import AttractorField, Nectar
from metamorphosis.cocoons import Cocoon, CocoonLifecycleSystem, build_cocoons
from metamorphosis.config.scene_config import SceneConfig
from metamorphosis.environment import EnvironmentClock, EnvironmentState
from metamorphosis.flocking import Butterfly, FlockingSystem
from metamorphosis.frame_state import FrameState, build_frame_state
from metamorphosis.light_sensor import FrameSource, LightSensor
from metamorphosis.noise import ValueNoise
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import PhaseContext, PhaseRunner, UpdatePhase, runs_in_phase

logger = logging.getLogger(__name__)

SEPARATOR_WIDTH = 60


@dataclass
class SceneState:
    """Everything the simulation mutates, in one place.

    Attributes:
        config: Validated scene configuration
        environment: Light and organism-time state
        cocoons: Fixed cocoon slots, left to right
        butterflies: Hatched agents, in hatch order (only ever grows)
        rng: Seeded generator for spawn headings and size jitter
        noise: Seeded smooth noise for drift
        started_at: Real time the scene (re)started, in seconds
        now: Real time of the latest tick
        frame: Number of ticks run
        attractors: Nectar and pointer; attached once the field exists
    """

    config: SceneConfig
    environment: EnvironmentState
    cocoons: List[Cocoon]
    rng: random.Random
    noise: ValueNoise
    started_at: float
    now: float
    butterflies: List[Butterfly] = field(default_factory=list)
    frame: int = 0
    attractors: Optional[AttractorField] = None

    @property
    def elapsed(self) -> float:
        """Real seconds since the scene started."""
        return self.now - self.started_at


@runs_in_phase(UpdatePhase.FRAME_END)
class SceneStats(BaseSystem):
    """Running totals for the headless report and debug overlay."""

    def __init__(self, state: SceneState) -> None:
        super().__init__(state, "SceneStats")
        self.peak_nectar = 0
        self.first_hatch_at: Optional[float] = None

    def _do_update(self, context: PhaseContext) -> SystemResult:
        state = self.state
        self.peak_nectar = max(self.peak_nectar, len(state.attractors.nectar))
        if self.first_hatch_at is None and state.butterflies:
            self.first_hatch_at = state.elapsed
        return SystemResult.empty()

    def summary(self) -> Dict[str, Any]:
        state = self.state
        stages: Dict[str, int] = {}
        for cocoon in state.cocoons:
            stages[cocoon.stage.name] = stages.get(cocoon.stage.name, 0) + 1
        return {
            "frame_count": state.frame,
            "elapsed_real_time": state.elapsed,
            "organism_time": state.environment.organism_time,
            "day_value": state.environment.day_value,
            "growth_rate": state.environment.growth_rate,
            "cocoon_stages": stages,
            "butterflies": len(state.butterflies),
            "butterfly_sizes": [round(b.size, 3) for b in state.butterflies],
            "nectar": len(state.attractors.nectar),
            "peak_nectar": self.peak_nectar,
            "first_hatch_at": self.first_hatch_at,
        }


class Scene:
    """The metamorphosis scene: state, systems and the frame loop.

    Args:
        config: Scene configuration (defaults if omitted); validated here
        source: Light frame source; a scene without one keeps its initial
            brightness forever
        clock: Real-time clock in seconds, used when tick/press get no time
    """

    def __init__(
        self,
        config: Optional[SceneConfig] = None,
        source: Optional[FrameSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = (config or SceneConfig()).validate()
        self.source = source
        self._clock = clock
        self.reset()

    def reset(self, now: Optional[float] = None) -> None:
        """(Re)start the scene: fresh cocoons, no butterflies, no nectar."""
        now = self._clock() if now is None else now
        config = self.config
        rng = random.Random(config.seed)

        self.state = SceneState(
            config=config,
            environment=EnvironmentState.initial(config.light),
            cocoons=build_cocoons(config.lifecycle, config.display.screen_width),
            rng=rng,
            noise=ValueNoise(rng),
            started_at=now,
            now=now,
        )
        self.light_sensor = LightSensor(self.state, self.source)
        self.environment_clock = EnvironmentClock(self.state, config.light)
        self.lifecycle = CocoonLifecycleSystem(self.state, config.lifecycle)
        self.attractors = AttractorField(self.state, config.flocking)
        self.flocking = FlockingSystem(self.state, config.flocking)
        self.stats = SceneStats(self.state)
        self.state.attractors = self.attractors

        self.runner = PhaseRunner()
        for system in (
            self.light_sensor,
            self.environment_clock,
            self.lifecycle,
            self.attractors,
            self.flocking,
            self.stats,
        ):
            self.runner.register(system)

        self._last_time = now
        logger.info(
            "Scene started: %d cocoons, seed=%s", len(self.state.cocoons), config.seed
        )

    @property
    def systems(self) -> List[BaseSystem]:
        return [s for phase in UpdatePhase for s in self.runner.get_systems_in_phase(phase)]

    def tick(
        self, now: Optional[float] = None, pointer: Optional[Tuple[float, float]] = None
    ) -> Dict[str, SystemResult]:
        """Run one frame of the pipeline.

        Args:
            now: Real time in seconds (defaults to the scene clock)
            pointer: Current pointer position, if the host has one

        Returns:
            Map of system name -> result for this frame
        """
        now = self._clock() if now is None else now
        dt = max(self.config.light.min_frame_dt, now - self._last_time)
        self._last_time = now

        state = self.state
        state.frame += 1
        state.now = now
        if pointer is not None:
            self.attractors.set_pointer(*pointer)

        context = PhaseContext(frame=state.frame, now=now, dt=dt)
        return self.runner.run_all(context)

    def resync(self, now: Optional[float] = None) -> None:
        """Restart frame timing so the next tick does not count a pause."""
        self._last_time = self._clock() if now is None else now

    def press(self, x: float, y: float, now: Optional[float] = None) -> Nectar:
        """Handle a pointer press: drop one nectar attractor at (x, y)."""
        now = self._clock() if now is None else now
        return self.attractors.add_nectar(x, y, now)

    def frame_state(self) -> FrameState:
        """Describe the current frame for the painter."""
        return build_frame_state(self.state, self.environment_clock.is_day())

    def get_summary_stats(self) -> Dict[str, Any]:
        return {**self.stats.summary(), "time_string": self.environment_clock.get_time_string()}

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "systems": [s.get_debug_info() for s in self.systems],
            "runner": self.runner.get_debug_info(),
        }

    def run_headless(self, max_frames: int, dt: float, stats_interval: int = 0) -> Dict[str, Any]:
        """Run the scene on a synthetic clock, without a window.

        Args:
            max_frames: Number of frames to simulate
            dt: Simulated seconds per frame
            stats_interval: Log stats every N frames (0 disables)

        Returns:
            Final summary statistics
        """
        now = self.state.now
        for _ in range(max_frames):
            now += dt
            self.tick(now)
            if stats_interval and self.state.frame % stats_interval == 0:
                self.log_stats()
        self.log_stats()
        return self.get_summary_stats()

    def log_stats(self) -> None:
        stats = self.get_summary_stats()
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("Frame: %d", stats["frame_count"])
        logger.info("Scene Time: %.1fs (%s)", stats["elapsed_real_time"], stats["time_string"])
        logger.info("Organism Time: %.2f growth-s", stats["organism_time"])
        logger.info("Growth Rate: %.2fx, Day Value: %.2f", stats["growth_rate"], stats["day_value"])
        logger.info("-" * SEPARATOR_WIDTH)
        logger.info("Cocoons: %s", stats["cocoon_stages"])
        logger.info("Butterflies: %d %s", stats["butterflies"], stats["butterfly_sizes"])
        logger.info("Nectar: %d (peak %d)", stats["nectar"], stats["peak_nectar"])
        logger.info("=" * SEPARATOR_WIDTH)

    def close(self) -> None:
        """Release the light source."""
        if self.source is not None:
            self.source.close()
