"""Shared plumbing for the per-frame scene systems.

A system owns exactly one job in the frame pipeline. It is handed the
``SceneState`` once, at construction, and afterwards only sees a
``PhaseContext`` per tick. What it changed comes back as a ``SystemResult``
so the scene can log or inspect a frame without reaching into systems.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, runtime_checkable

__all__ = ["SystemResult", "System", "BaseSystem"]

if TYPE_CHECKING:
    from metamorphosis.scene import SceneState
    from metamorphosis.update_phases import PhaseContext, UpdatePhase


@dataclass
class SystemResult:
    """What one system did during one tick.

    ``details`` is free-form per system; the lifecycle system reports the
    indices of cocoons that hatched, the sensor reports the sampled luma.
    """

    entities_affected: int = 0
    entities_spawned: int = 0
    entities_removed: int = 0
    skipped: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def empty() -> "SystemResult":
        return SystemResult()


@runtime_checkable
class System(Protocol):
    """Anything the phase runner can drive."""

    @property
    def name(self) -> str: ...

    @property
    def enabled(self) -> bool: ...

    def update(self, context: "PhaseContext") -> SystemResult: ...


class BaseSystem(ABC):
    """Common bookkeeping for scene systems.

    Subclasses put their work in ``_do_update``. A disabled system is still
    called by the runner but reports ``skipped`` without touching state.
    """

    _phase: Optional["UpdatePhase"] = None

    def __init__(self, state: "SceneState", name: str) -> None:
        self._state = state
        self._name = name
        self.enabled = True
        self._updates = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> "SceneState":
        return self._state

    @property
    def phase(self) -> Optional["UpdatePhase"]:
        return self._phase

    @property
    def update_count(self) -> int:
        """Ticks this system actually ran (skipped ticks not counted)."""
        return self._updates

    def update(self, context: "PhaseContext") -> SystemResult:
        if not self.enabled:
            return SystemResult(skipped=True)
        result = self._do_update(context)
        self._updates += 1
        return result if result is not None else SystemResult.empty()

    @abstractmethod
    def _do_update(self, context: "PhaseContext") -> Optional[SystemResult]:
        ...

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "enabled": self.enabled,
            "update_count": self._updates,
            "phase": None if self._phase is None else self._phase.name,
        }
