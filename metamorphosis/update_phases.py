"""Fixed ordering of the work done in one scene frame.

    SENSE -> TIME_UPDATE -> LIFECYCLE -> ATTRACTORS -> ENTITY_ACT -> FRAME_END

A system tags its class with ``@runs_in_phase``; the ``PhaseRunner`` then
calls it in that slot no matter when it was registered. Systems sharing a
phase keep their registration order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

__all__ = [
    "UpdatePhase",
    "PhaseContext",
    "PhaseRunner",
    "runs_in_phase",
    "get_system_phase",
]

if TYPE_CHECKING:
    from metamorphosis.systems.base import BaseSystem, SystemResult


class UpdatePhase(Enum):
    """Slots of a frame, in execution order.

    The clock must see this frame's brightness before cocoons consult
    organism time, and butterflies spawned in LIFECYCLE fly the same frame.
    """

    SENSE = 1  # read the camera
    TIME_UPDATE = 2  # smoothing, day value, growth, organism time
    LIFECYCLE = 3  # start, crack, hatch
    ATTRACTORS = 4  # nectar expiry
    ENTITY_ACT = 5  # flocking and movement
    FRAME_END = 6  # stats


@dataclass
class PhaseContext:
    """Per-tick values handed to every system.

    Attributes:
        frame: Scene frame number, 1 on the first tick
        now: Wall-clock seconds of this tick
        dt: Seconds since the previous tick (floored)
        phase: Slot currently running; set by the runner
    """

    frame: int
    now: float
    dt: float
    phase: UpdatePhase = UpdatePhase.SENSE


class PhaseRunner:
    """Calls registered systems slot by slot.

    Example:
        runner = PhaseRunner()
        runner.register(flocking)      # ENTITY_ACT
        runner.register(light_sensor)  # SENSE
        runner.run_all(context)        # sensor still goes first
    """

    def __init__(self) -> None:
        self._slots: Dict[UpdatePhase, List["BaseSystem"]] = {phase: [] for phase in UpdatePhase}

    def register(self, system: "BaseSystem", phase: Optional[UpdatePhase] = None) -> None:
        """Add ``system`` to ``phase``, or to the phase its class declares.

        Raises:
            ValueError: If neither is available
        """
        slot = phase if phase is not None else get_system_phase(system)
        if slot is None:
            raise ValueError(f"System {system.name} has no update phase; pass one explicitly")
        self._slots[slot].append(system)

    def run_all(self, context: PhaseContext) -> Dict[str, "SystemResult"]:
        """Run every slot once, returning results keyed by system name."""
        results: Dict[str, "SystemResult"] = {}
        for phase, systems in self._slots.items():
            context.phase = phase
            for system in systems:
                results[system.name] = system.update(context)
        return results

    def get_systems_in_phase(self, phase: UpdatePhase) -> List["BaseSystem"]:
        return list(self._slots[phase])

    def get_debug_info(self) -> Dict[str, Any]:
        return {
            "systems_per_phase": {
                phase.name: [s.name for s in systems] for phase, systems in self._slots.items() if systems
            }
        }


def runs_in_phase(phase: UpdatePhase) -> Callable:
    """Class decorator recording the slot a system belongs to.

    Example:
        @runs_in_phase(UpdatePhase.ENTITY_ACT)
        class FlockingSystem(BaseSystem):
            ...
    """

    def decorator(cls):
        cls._phase = phase
        return cls

    return decorator


def get_system_phase(system: "BaseSystem") -> Optional[UpdatePhase]:
    return getattr(system, "_phase", None)
