"""Guarded stage machines for things that only ever move forward.

A cocoon used to be four loose flags (started, cracked, open, spawned),
which allowed nonsense such as "open but never started". Here every valid
stage is enumerated and only forward transitions are legal:

    NOT_STARTED -> STARTED -> CRACKED -> OPEN

Usage:
    machine = create_cocoon_state_machine()
    machine.transition(CocoonStage.STARTED, frame=12)
    machine.transition(CocoonStage.OPEN)  # Raises! Must crack first
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, FrozenSet, Generic, Iterable, List, Mapping, TypeVar

from metamorphosis.result import Err, Ok, Result

S = TypeVar("S", bound=Enum)


@dataclass(frozen=True)
class StateTransition(Generic[S]):
    """One recorded stage change.

    Attributes:
        from_state: Stage left
        to_state: Stage entered
        frame: Scene frame of the change
        reason: Free-form note, e.g. which threshold was crossed
    """

    from_state: S
    to_state: S
    frame: int
    reason: str = ""


class StateMachine(Generic[S]):
    """Holds one current state and refuses moves not in its transition table.

    Args:
        initial_state: Starting state; must appear in ``valid_transitions``
        valid_transitions: For each state, the states it may move to
        track_history: Keep a record of accepted transitions
        max_history: How many records to keep (oldest dropped first)
    """

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Mapping[S, Iterable[S]],
        track_history: bool = False,
        max_history: int = 16,
    ) -> None:
        self._table: Dict[S, FrozenSet[S]] = {
            state: frozenset(targets) for state, targets in valid_transitions.items()
        }
        if initial_state not in self._table:
            known = ", ".join(s.name for s in self._table)
            raise ValueError(f"{initial_state.name} is not a known state (known: {known})")
        self._state = initial_state
        self._history: Deque[StateTransition[S]] = deque(maxlen=max_history)
        self._track_history = track_history

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Accepted transitions, oldest first (empty unless tracking)."""
        return list(self._history)

    def can_transition(self, target: S) -> bool:
        return target in self._table.get(self._state, frozenset())

    def try_transition(self, target: S, frame: int = 0, reason: str = "") -> Result[S, str]:
        """Move to ``target`` if the table allows it.

        Returns:
            Ok(target) when the move happened, Err(description) otherwise;
            the current state is unchanged on Err
        """
        if not self.can_transition(target):
            allowed = sorted(t.name for t in self._table.get(self._state, ()))
            return Err(
                f"Invalid transition: {self._state.name} -> {target.name} "
                f"(allowed: {', '.join(allowed) or 'none'})"
            )
        if self._track_history:
            self._history.append(StateTransition(self._state, target, frame, reason))
        self._state = target
        return Ok(target)

    def transition(self, target: S, frame: int = 0, reason: str = "") -> S:
        """Like ``try_transition`` but treats a refused move as a bug.

        Raises:
            ValueError: If ``target`` is not reachable from the current state
        """
        result = self.try_transition(target, frame, reason)
        if result.is_err():
            raise ValueError(result.error)
        return result.unwrap()

    def __repr__(self) -> str:
        return f"StateMachine({self._state.name})"


# ============================================================================
# Cocoon Lifecycle State Machine
# ============================================================================


class CocoonStage(Enum):
    """Development stages of a cocoon.

    Values double as the visual state names used by the renderer, except
    NOT_STARTED and STARTED which both look like an intact cocoon.
    """

    NOT_STARTED = "not_started"
    STARTED = "started"
    CRACKED = "cracked"
    OPEN = "open"

    @property
    def visual(self) -> str:
        """Sprite key for this stage: default, cracked or open."""
        if self is CocoonStage.CRACKED:
            return "cracked"
        if self is CocoonStage.OPEN:
            return "open"
        return "default"


COCOON_TRANSITIONS: Dict[CocoonStage, List[CocoonStage]] = {
    CocoonStage.NOT_STARTED: [CocoonStage.STARTED],
    CocoonStage.STARTED: [CocoonStage.CRACKED],
    CocoonStage.CRACKED: [CocoonStage.OPEN],
    CocoonStage.OPEN: [],  # Terminal; the shell stays on the branch
}


def create_cocoon_state_machine(track_history: bool = False) -> StateMachine[CocoonStage]:
    """Create a state machine for a cocoon's development."""
    return StateMachine(
        initial_state=CocoonStage.NOT_STARTED,
        valid_transitions=COCOON_TRANSITIONS,
        track_history=track_history,
    )
