"""Tests for the cocoon stage state machine and Result types."""

import pytest

from metamorphosis.result import Err, Ok
from metamorphosis.state_machine import (
    CocoonStage,
    StateMachine,
    create_cocoon_state_machine,
)


class TestCocoonStateMachine:
    def test_forward_path(self):
        machine = create_cocoon_state_machine()
        for stage in (CocoonStage.STARTED, CocoonStage.CRACKED, CocoonStage.OPEN):
            assert machine.transition(stage) is stage
        assert machine.state is CocoonStage.OPEN

    def test_cannot_skip_cracking(self):
        machine = create_cocoon_state_machine()
        machine.transition(CocoonStage.STARTED)
        with pytest.raises(ValueError, match="STARTED -> OPEN"):
            machine.transition(CocoonStage.OPEN)
        assert machine.state is CocoonStage.STARTED

    def test_cannot_go_backwards(self):
        machine = create_cocoon_state_machine()
        machine.transition(CocoonStage.STARTED)
        machine.transition(CocoonStage.CRACKED)
        result = machine.try_transition(CocoonStage.STARTED)
        assert result.is_err()
        assert "CRACKED" in result.error

    def test_open_is_terminal(self):
        machine = create_cocoon_state_machine()
        for stage in (CocoonStage.STARTED, CocoonStage.CRACKED, CocoonStage.OPEN):
            machine.transition(stage)
        assert not any(machine.can_transition(stage) for stage in CocoonStage)

    def test_history_is_tracked(self):
        machine = create_cocoon_state_machine(track_history=True)
        machine.transition(CocoonStage.STARTED, frame=3, reason="threshold")
        machine.transition(CocoonStage.CRACKED, frame=9)
        history = machine.history
        assert [(t.from_state, t.to_state, t.frame) for t in history] == [
            (CocoonStage.NOT_STARTED, CocoonStage.STARTED, 3),
            (CocoonStage.STARTED, CocoonStage.CRACKED, 9),
        ]
        assert history[0].reason == "threshold"

    def test_history_disabled_by_default(self):
        machine = create_cocoon_state_machine()
        machine.transition(CocoonStage.STARTED)
        assert machine.history == []

    def test_visual_names(self):
        assert CocoonStage.NOT_STARTED.visual == "default"
        assert CocoonStage.STARTED.visual == "default"
        assert CocoonStage.CRACKED.visual == "cracked"
        assert CocoonStage.OPEN.visual == "open"


def test_initial_state_must_be_known():
    with pytest.raises(ValueError):
        StateMachine(CocoonStage.OPEN, {CocoonStage.NOT_STARTED: []})


def test_history_is_bounded():
    machine = StateMachine(
        CocoonStage.NOT_STARTED,
        {
            CocoonStage.NOT_STARTED: [CocoonStage.STARTED],
            CocoonStage.STARTED: [CocoonStage.NOT_STARTED],
        },
        track_history=True,
        max_history=4,
    )
    for i in range(10):
        target = CocoonStage.STARTED if i % 2 == 0 else CocoonStage.NOT_STARTED
        machine.transition(target, frame=i)
    assert len(machine.history) == 4
    assert machine.history[-1].frame == 9


def test_result_helpers():
    ok = Ok(3)
    err = Err("nope")
    assert ok.is_ok() and not ok.is_err()
    assert err.is_err() and not err.is_ok()
    assert ok.unwrap() == 3
    assert err.unwrap_or(7) == 7
    assert ok.unwrap_or(7) == 3
    with pytest.raises(ValueError):
        err.unwrap()
