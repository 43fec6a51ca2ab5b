"""Tests for cocoon placement, development and hatching."""

import random

import pytest

from metamorphosis.cocoons import Cocoon, adult_size_for, arc_y, build_cocoons
from metamorphosis.config.lifecycle import SIZE_MAX, SIZE_MIN
from metamorphosis.config.scene_config import LifecycleConfig
from metamorphosis.exceptions import LifecycleError
from metamorphosis.state_machine import CocoonStage


def run_until(scene, frames, dt=0.25):
    """Tick a scene ``frames`` times on a fixed step and record stage changes per slot."""
    changes = {c.slot: [] for c in scene.state.cocoons}
    now = scene.state.now
    for _ in range(frames):
        before = [c.stage for c in scene.state.cocoons]
        now += dt
        scene.tick(now)
        for cocoon, old in zip(scene.state.cocoons, before):
            if cocoon.stage is not old:
                changes[cocoon.slot].append((cocoon.stage, scene.state.frame, now))
    return changes


class TestPlacement:
    def test_even_spacing_along_branch(self):
        cocoons = build_cocoons(LifecycleConfig(), 600)
        xs = [c.x for c in cocoons]
        assert xs[0] == pytest.approx(70.0)
        assert xs[-1] == pytest.approx(530.0)
        gaps = [b - a for a, b in zip(xs, xs[1:])]
        assert all(g == pytest.approx(92.0) for g in gaps)

    def test_hang_offsets_and_thresholds(self):
        cocoons = build_cocoons(LifecycleConfig(), 600)
        assert [c.offset_y for c in cocoons] == [27.0, 25.0, 13.0, 8.0, 12.0, 5.0]
        assert [c.start_threshold for c in cocoons] == [0.0, 20.0, 40.0, 60.0, 80.0, 100.0]
        for c in cocoons:
            assert c.hang_y == pytest.approx(c.y_base + c.offset_y)

    def test_arc_shape(self):
        assert arc_y(0, 600) == pytest.approx(265.0)
        assert arc_y(300, 600) == pytest.approx(325.0)
        assert arc_y(600, 600) == pytest.approx(265.0)
        assert arc_y(70, 600) == pytest.approx(arc_y(530, 600))

    def test_single_cocoon_is_centred(self):
        cocoons = build_cocoons(LifecycleConfig(cocoon_count=1), 600)
        assert len(cocoons) == 1
        assert cocoons[0].x == pytest.approx(300.0)

    def test_extra_slots_hang_without_offset(self):
        cocoons = build_cocoons(LifecycleConfig(cocoon_count=8), 600)
        assert cocoons[6].offset_y == 0.0
        assert cocoons[7].offset_y == 0.0


class TestDevelopment:
    def test_crack_and_hatch_timing_in_bright_light(self, bright_scene):
        """At growth rate 2.0 the first cocoon cracks after 5 s and opens after 10 s."""
        changes = run_until(bright_scene, 40)
        stages = [(stage, now) for stage, _, now in changes[0]]
        assert stages == [
            (CocoonStage.STARTED, 0.25),
            (CocoonStage.CRACKED, 5.0),
            (CocoonStage.OPEN, 10.0),
        ]
        assert len(bright_scene.state.butterflies) == 1

    def test_staggered_start(self, bright_scene):
        """The second cocoon waits for 20 growth-seconds of organism time."""
        changes = run_until(bright_scene, 40)
        assert changes[1] == [(CocoonStage.STARTED, 40, 10.0)]
        assert all(not changes[slot] for slot in range(2, 6))

    def test_every_cocoon_spawns_exactly_once(self, bright_scene):
        run_until(bright_scene, 400)
        cocoons = bright_scene.state.cocoons
        assert all(c.open and c.spawned for c in cocoons)
        butterflies = bright_scene.state.butterflies
        assert len(butterflies) == len(cocoons)
        assert [b.butterfly_id for b in butterflies] == list(range(len(cocoons)))

    def test_stage_order_is_monotone(self, bright_scene):
        run_until(bright_scene, 400)
        for cocoon in bright_scene.state.cocoons:
            assert [t.to_state for t in cocoon.history] == [
                CocoonStage.STARTED,
                CocoonStage.CRACKED,
                CocoonStage.OPEN,
            ]

    def test_crack_and_hatch_in_one_frame(self, scene):
        cocoon = scene.state.cocoons[0]
        butterfly = scene.lifecycle.advance(cocoon, 25.0, now=3.0)
        assert cocoon.stage is CocoonStage.OPEN
        assert butterfly is not None
        assert (butterfly.pos.x, butterfly.pos.y) == (cocoon.x, cocoon.hang_y)

    def test_growth_frozen_after_opening(self, scene):
        cocoon = scene.state.cocoons[0]
        scene.lifecycle.advance(cocoon, 25.0, now=3.0)
        frozen = cocoon.local_growth
        assert scene.lifecycle.advance(cocoon, 5.0, now=4.0) is None
        assert cocoon.local_growth == frozen

    def test_unstarted_cocoon_does_not_grow(self, scene):
        cocoon = scene.state.cocoons[3]
        assert scene.lifecycle.advance(cocoon, 5.0, now=1.0) is None
        assert cocoon.stage is CocoonStage.NOT_STARTED
        assert cocoon.local_growth == 0.0

    def test_second_release_is_an_error(self, scene):
        cocoon = scene.state.cocoons[0]
        scene.lifecycle.advance(cocoon, 25.0, now=3.0)
        with pytest.raises(LifecycleError):
            scene.lifecycle._release(cocoon, now=4.0)
        assert len(scene.state.butterflies) == 1

    def test_start_time_recorded(self):
        cocoon = Cocoon(0, 100.0, 280.0, 10.0, 0.0)
        assert cocoon.development_seconds(5.0) == pytest.approx(0.001)
        cocoon.begin(now=2.0)
        assert cocoon.started_at == 2.0
        assert cocoon.development_seconds(9.5) == pytest.approx(7.5)


class TestAdultSize:
    @pytest.fixture
    def exact(self):
        return LifecycleConfig(size_jitter=0.0)

    def test_fast_development_gives_smallest(self, exact, seeded_rng):
        assert adult_size_for(1.0, exact, seeded_rng) == pytest.approx(SIZE_MIN)
        assert adult_size_for(6.0, exact, seeded_rng) == pytest.approx(SIZE_MIN)

    def test_slow_development_gives_largest(self, exact, seeded_rng):
        assert adult_size_for(50.0, exact, seeded_rng) == pytest.approx(SIZE_MAX)
        assert adult_size_for(500.0, exact, seeded_rng) == pytest.approx(SIZE_MAX)

    def test_curve_favours_small_in_the_middle(self, exact, seeded_rng):
        mid = adult_size_for(28.0, exact, seeded_rng)
        assert mid == pytest.approx(SIZE_MIN + (SIZE_MAX - SIZE_MIN) * 0.5**1.35)
        assert mid < (SIZE_MIN + SIZE_MAX) / 2

    def test_darker_means_larger(self, exact, seeded_rng):
        sizes = [adult_size_for(t, exact, seeded_rng) for t in (8, 15, 25, 40)]
        assert sizes == sorted(sizes)

    def test_jitter_bounds(self):
        config = LifecycleConfig()
        rng = random.Random(7)
        for _ in range(200):
            size = adult_size_for(6.0, config, rng)
            assert SIZE_MIN * 0.88 - 1e-9 <= size <= SIZE_MIN * 1.12 + 1e-9

    def test_bright_hatch_is_small(self, bright_scene):
        run_until(bright_scene, 40)
        size = bright_scene.state.butterflies[0].size
        # 9.75 s of real development sits near the small end of the range
        assert size < 0.75 * 1.12
