"""Tests for the per-frame render description."""

import math

import pytest

from metamorphosis.config.display import (
    COCOON_JITTER,
    GLOW_DAY_COLOR,
    GLOW_NIGHT_COLOR,
    SKY_DAWN,
    SKY_DUSK,
    SKY_NIGHT,
    TINT_DAY,
    TINT_NIGHT,
)
from metamorphosis.frame_state import (
    build_frame_state,
    format_clock,
    nectar_draw,
    pointer_halo_rings,
    sky_body_for,
    sky_gradient,
    sky_halo_rings,
)
from metamorphosis.scene import Scene


class TestClock:
    @pytest.mark.parametrize(
        "seconds, label",
        [(0, "00:00"), (9.99, "00:09"), (65.9, "01:05"), (3599, "59:59"), (-3, "00:00")],
    )
    def test_format(self, seconds, label):
        assert format_clock(seconds) == label


class TestSky:
    def test_gradient_endpoints(self):
        assert sky_gradient(0.0) == SKY_NIGHT
        assert sky_gradient(0.33) == SKY_DAWN
        assert sky_gradient(1.0) == SKY_DUSK

    def test_body_rises_left_and_sets_right(self):
        dark = sky_body_for(0.0)
        noon = sky_body_for(0.5)
        bright = sky_body_for(1.0)
        assert dark.x == pytest.approx(-20.0)
        assert noon.x == pytest.approx(300.0)
        assert noon.y == pytest.approx(240.0)
        assert bright.x == pytest.approx(620.0)
        assert dark.y == pytest.approx(560.0)

    def test_sun_and_moon_switch(self):
        assert not sky_body_for(0.44).is_sun
        assert sky_body_for(0.45).is_sun

    def test_halo_rings_brighten_inward(self):
        rings = sky_halo_rings(True)
        diameters = [r.diameter for r in rings]
        assert diameters[0] == 220
        assert min(diameters) >= 24
        assert all(a > b for a, b in zip(diameters, diameters[1:]))
        alphas = [r.alpha for r in rings]
        assert alphas[0] == pytest.approx(10.0)
        assert all(a < b for a, b in zip(alphas, alphas[1:]))
        assert sky_halo_rings(False)[0].color != rings[0].color

    def test_pointer_halo_pulses(self):
        still = pointer_halo_rings(0.0)
        assert [r.diameter for r in still] == pytest.approx([110 * 0.55, 68 * 0.55, 36 * 0.55])
        peak = pointer_halo_rings(math.pi / (2 * 2.1))
        assert peak[0].diameter == pytest.approx(110 * 0.55 * 1.06)


class TestNectarDraw:
    def test_fresh_and_spent(self):
        fresh = nectar_draw(1, 2, 1.0)
        assert (fresh.outer_diameter, fresh.outer_alpha) == (22, 180)
        assert (fresh.inner_diameter, fresh.inner_alpha) == (23, 130)
        spent = nectar_draw(1, 2, 0.0)
        assert (spent.outer_diameter, spent.outer_alpha) == (12, 0)
        assert (spent.inner_diameter, spent.inner_alpha) == (5, 0)


class TestBuildFrameState:
    def test_only_cracked_cocoons_shiver(self, scene):
        cocoons = scene.state.cocoons
        scene.lifecycle.advance(cocoons[0], 12.0, now=1.0)
        assert cocoons[0].cracked and not cocoons[0].open

        frame = scene.frame_state()
        jx, jy = COCOON_JITTER
        shaking = frame.cocoons[0]
        assert shaking.visual == "cracked"
        assert abs(shaking.x - cocoons[0].x) <= jx
        assert abs(shaking.y - cocoons[0].hang_y) <= jy
        for drawn, cocoon in zip(frame.cocoons[1:], cocoons[1:]):
            assert drawn.visual == "default"
            assert (drawn.x, drawn.y) == (cocoon.x, cocoon.hang_y)

    def test_open_cocoon_is_still(self, scene):
        cocoon = scene.state.cocoons[0]
        scene.lifecycle.advance(cocoon, 25.0, now=1.0)
        drawn = scene.frame_state().cocoons[0]
        assert drawn.visual == "open"
        assert (drawn.x, drawn.y) == (cocoon.x, cocoon.hang_y)

    def test_does_not_touch_simulation_rng(self, scene):
        scene.lifecycle.advance(scene.state.cocoons[0], 12.0, now=1.0)
        before = scene.state.rng.getstate()
        scene.frame_state()
        assert scene.state.rng.getstate() == before

    def test_tint_and_glow_follow_day(self, make_config):
        day = Scene(make_config(255.0), clock=lambda: 0.0).frame_state()
        night = Scene(make_config(0.0), clock=lambda: 0.0).frame_state()
        assert (day.tint, day.glow_color) == (TINT_DAY, GLOW_DAY_COLOR)
        assert (night.tint, night.glow_color) == (TINT_NIGHT, GLOW_NIGHT_COLOR)
        assert day.is_day and not night.is_day
        assert day.sky_body.is_sun and not night.sky_body.is_sun

    def test_clock_label_tracks_elapsed(self, scene):
        scene.tick(75.5)
        assert scene.frame_state().clock_label == "01:15"

    def test_lists_nectar_and_butterflies(self, bright_scene):
        now = 0.0
        for _ in range(41):
            now += 0.25
            bright_scene.tick(now)
        bright_scene.press(100, 100, now=now)
        frame = bright_scene.frame_state()
        assert len(frame.butterflies) == 1
        assert frame.butterflies[0].size == bright_scene.state.butterflies[0].size
        assert len(frame.nectar) == 1
        assert frame.nectar[0].life_fraction == 1.0

    def test_explicit_rng_is_used(self, scene, seeded_rng):
        scene.lifecycle.advance(scene.state.cocoons[0], 12.0, now=1.0)
        a = build_frame_state(scene.state, True, rng=seeded_rng)
        b = build_frame_state(scene.state, True)
        assert a.width == b.width == 600
