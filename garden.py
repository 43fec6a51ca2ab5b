import logging
from typing import Optional

import pygame

from camera import open_camera_source
from metamorphosis.config.display import CLOCK_FONT_SIZE
from metamorphosis.config.scene_config import SceneConfig
from metamorphosis.light_sensor import FrameSource
from metamorphosis.scene import Scene
from rendering.scene_renderer import SceneRenderer
from rendering.sprites import SceneAssets

logger = logging.getLogger(__name__)


class MetamorphosisGarden:
    """Windowed host for the metamorphosis scene.

    Attributes:
        scene: The simulation being shown
        screen: Pygame display surface
        clock: Pygame clock for frame rate
        renderer: Paints each frame state
        paused: Whether the scene is frozen
    """

    def __init__(self, config: Optional[SceneConfig] = None, source: Optional[FrameSource] = None) -> None:
        """Initialize the garden."""
        self.config = config or SceneConfig()
        self.source = source
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.scene: Optional[Scene] = None
        self.screen: Optional[pygame.Surface] = None
        self.renderer: Optional[SceneRenderer] = None
        self.paused: bool = False

    def setup_game(self) -> bool:
        """Open the window, load assets and start the scene."""
        display = self.config.display
        try:
            self.screen = pygame.display.set_mode((display.screen_width, display.screen_height))
            pygame.display.set_caption("Time as Metamorphosis")
        except pygame.error as e:
            logger.error("Couldn't set the display mode: %s", e)
            return False

        font = pygame.font.Font(None, CLOCK_FONT_SIZE)
        assets = SceneAssets.load(display.asset_dir)
        missing = assets.missing()
        if missing:
            logger.info("Drawing placeholders for: %s", ", ".join(missing))
        self.renderer = SceneRenderer(self.screen, font, assets)
        self.scene = Scene(self.config, self.source)
        return True

    def handle_events(self) -> bool:
        """Handle user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.scene.press(*event.pos)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_p:
                    self.paused = not self.paused
                    if not self.paused:
                        self.scene.resync()
                    logger.info("Paused" if self.paused else "Resumed")
                elif event.key == pygame.K_r:
                    logger.info("Resetting scene")
                    self.scene.reset()
                elif event.key == pygame.K_ESCAPE:
                    return False
        return True

    def update(self) -> None:
        """Advance the scene by one frame."""
        if self.paused:
            return
        self.scene.tick(pointer=pygame.mouse.get_pos())

    def render(self) -> None:
        if self.screen is None:
            return
        self.renderer.paint(self.scene.frame_state())
        pygame.display.flip()

    def run(self) -> None:
        """Run the garden until the window closes."""
        if not self.setup_game():
            return

        logger.info("=" * 60)
        logger.info("TIME AS METAMORPHOSIS")
        logger.info("=" * 60)
        logger.info("Controls:")
        logger.info("  MOUSE  - Move the light / click to drop nectar")
        logger.info("  P      - Pause/Resume")
        logger.info("  R      - Reset the scene")
        logger.info("  ESC    - Quit")
        logger.info("=" * 60)

        try:
            while self.handle_events():
                self.update()
                self.render()
                self.clock.tick(self.config.display.frame_rate)
        finally:
            self.scene.log_stats()
            self.scene.close()


def main(config: Optional[SceneConfig] = None, use_camera: bool = True) -> None:
    """Entry point for the windowed garden."""
    pygame.init()
    source = open_camera_source() if use_camera else None
    game = MetamorphosisGarden(config, source)
    try:
        game.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
