"""Smoke tests for the pygame paint stage, run against the dummy video driver."""

import pygame
import pytest

from metamorphosis.config.display import FALLBACK_BRANCH_COLOR
from metamorphosis.exceptions import AssetError
from metamorphosis.scene import Scene
from rendering.image_loader import ImageLoader
from rendering.scene_renderer import SceneRenderer
from rendering.sprites import SceneAssets


@pytest.fixture
def screen():
    pygame.init()
    surface = pygame.display.set_mode((600, 600))
    yield surface
    pygame.quit()


@pytest.fixture
def renderer(screen):
    return SceneRenderer(screen, pygame.font.Font(None, 22), SceneAssets())


class TestSceneAssets:
    def test_missing_files_fall_back(self, tmp_path, caplog):
        assets = SceneAssets.load(str(tmp_path))
        assert assets.branch is None
        assert assets.butterfly is None
        assert set(assets.missing()) == {
            "branch",
            "cocoon_default",
            "cocoon_cracked",
            "cocoon_open",
            "butterfly",
        }
        assert any("vector placeholder" in r.getMessage() for r in caplog.records)

    def test_loader_raises_for_missing(self, tmp_path):
        with pytest.raises(AssetError):
            ImageLoader.load_image(str(tmp_path / "nope.png"))

    def test_loader_caches(self, tmp_path, screen):
        path = tmp_path / "dot.png"
        pygame.image.save(pygame.Surface((4, 4)), str(path))
        first = ImageLoader.load_image(str(path))
        assert ImageLoader.load_image(str(path)) is first


class TestPaint:
    def test_paints_fallback_scene(self, bright_scene, renderer, screen):
        now = 0.0
        for _ in range(45):
            now += 0.25
            bright_scene.tick(now, pointer=(300, 120))
        bright_scene.press(200, 150, now=now)
        bright_scene.lifecycle.advance(bright_scene.state.cocoons[1], 12.0, now=now)
        assert bright_scene.state.cocoons[1].cracked

        renderer.paint(bright_scene.frame_state())

        # Branch placeholder sits under the wash at the top-left corner
        r, g, b, _ = screen.get_at((20, 20))
        assert abs(r - FALLBACK_BRANCH_COLOR[0]) < 60
        assert abs(b - FALLBACK_BRANCH_COLOR[2]) < 60

    def test_night_frame(self, make_config, renderer):
        scene = Scene(make_config(0.0), clock=lambda: 0.0)
        scene.tick(0.5)
        frame = scene.frame_state()
        assert not frame.sky_body.is_sun
        renderer.paint(frame)

    def test_sky_cached_between_frames(self, scene, renderer):
        frame = scene.frame_state()
        renderer.draw_sky(frame)
        cached = renderer._sky
        renderer.draw_sky(frame)
        assert renderer._sky is cached
