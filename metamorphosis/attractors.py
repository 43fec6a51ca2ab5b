"""Nectar points and the pointer-as-light attractor.

Pointer presses drop nectar that lives for a fixed number of seconds. Every
butterfly is pulled toward exactly one attractor: the nearest nectar while
any exists, otherwise the pointer, which stands in for a movable sun.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from metamorphosis.config.scene_config import FlockingConfig
from metamorphosis.math_utils import clamp
from metamorphosis.systems.base import BaseSystem, SystemResult
from metamorphosis.update_phases import UpdatePhase, runs_in_phase

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Nectar:
    """A transient attractor dropped by a pointer press.

    Attributes:
        x, y: Position in canvas units
        born: Real time of creation, in seconds
        life: Lifetime in seconds
    """

    x: float
    y: float
    born: float
    life: float

    def age(self, now: float) -> float:
        return now - self.born

    def is_alive(self, now: float) -> bool:
        return self.age(now) < self.life

    def life_fraction(self, now: float) -> float:
        """Remaining fraction of life, 1 when fresh down to 0 at expiry."""
        return clamp(1.0 - self.age(now) / self.life, 0.0, 1.0)


@dataclass(frozen=True)
class Attractor:
    """The point a butterfly steers toward and how hard it pulls."""

    x: float
    y: float
    pull: float
    is_nectar: bool = False


@runs_in_phase(UpdatePhase.ATTRACTORS)
class AttractorField(BaseSystem):
    """Owns the nectar collection and the pointer position."""

    def __init__(self, state: "SceneState", config: FlockingConfig) -> None:
        super().__init__(state, "AttractorField")
        self.config = config
        self.nectar: List[Nectar] = []
        self.pointer: Tuple[float, float] = (0.0, 0.0)

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def add_nectar(self, x: float, y: float, now: float) -> Nectar:
        """Drop a nectar point at (x, y) born at ``now``."""
        drop = Nectar(float(x), float(y), now, self.config.nectar_life)
        self.nectar.append(drop)
        logger.debug("Nectar dropped at (%.0f, %.0f), %d active", x, y, len(self.nectar))
        return drop

    def expire(self, now: float) -> int:
        """Remove nectar whose age has reached its lifetime.

        Returns:
            Number of nectar points removed
        """
        before = len(self.nectar)
        self.nectar = [n for n in self.nectar if n.is_alive(now)]
        return before - len(self.nectar)

    def active_nectar(self, now: float) -> List[Nectar]:
        return [n for n in self.nectar if n.is_alive(now)]

    def nearest_nectar(self, x: float, y: float, now: Optional[float] = None) -> Optional[Nectar]:
        """Nectar closest to (x, y) by squared distance; earliest wins ties.

        When ``now`` is given, nectar that has already reached its lifetime
        is ignored even if it has not been expired yet this frame.
        """
        best = None
        best_d2 = float("inf")
        for n in self.nectar:
            if now is not None and not n.is_alive(now):
                continue
            d2 = (x - n.x) * (x - n.x) + (y - n.y) * (y - n.y)
            if d2 < best_d2:
                best_d2 = d2
                best = n
        return best

    def attractor_for(self, x: float, y: float, now: Optional[float] = None) -> Attractor:
        """Resolve the single strongest attractor for a position.

        Nectar always dominates the pointer while any is present.
        """
        nearest = self.nearest_nectar(x, y, now)
        if nearest is not None:
            return Attractor(nearest.x, nearest.y, self.config.nectar_pull, is_nectar=True)
        px, py = self.pointer
        return Attractor(px, py, self.config.pointer_pull)

    def reset(self) -> None:
        self.nectar.clear()

    def _do_update(self, context: "PhaseContext") -> SystemResult:
        removed = self.expire(context.now)
        return SystemResult(entities_removed=removed, details={"nectar": len(self.nectar)})

    def get_debug_info(self):
        return {**super().get_debug_info(), "nectar": len(self.nectar), "pointer": self.pointer}
