"""Main entry point for Time as Metamorphosis.

This module provides command-line options to run the scene:
- Windowed mode (default): pygame window, webcam light, mouse nectar
- Headless mode: fixed brightness on a synthetic clock, stats only
"""

import argparse
import dataclasses
import logging
import sys

from metamorphosis.config.environment import INITIAL_BRIGHTNESS
from metamorphosis.config.scene_config import SceneConfig
from metamorphosis.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_config(args: argparse.Namespace) -> SceneConfig:
    """Turn parsed arguments into a validated scene configuration."""
    config = SceneConfig(seed=args.seed, headless=args.headless)
    config.display = dataclasses.replace(config.display, asset_dir=args.assets)
    config.flocking = dataclasses.replace(
        config.flocking, frame_rate_independent=args.frame_rate_independent
    )
    if args.headless:
        # Start the smoother at the fixed level so the run has no warm-up ramp
        config.light = dataclasses.replace(config.light, initial_brightness=args.brightness)
    return config.validate()


def run_windowed(config: SceneConfig, use_camera: bool) -> None:
    """Run the pygame window."""
    from garden import main as garden_main

    garden_main(config, use_camera=use_camera)


def run_headless(config: SceneConfig, frames: int, dt: float, brightness: float, stats_interval: int):
    """Run the scene without a window at a constant brightness.

    Args:
        config: Validated scene configuration
        frames: Number of frames to simulate
        dt: Simulated seconds per frame
        brightness: Constant camera brightness in [0, 255]
        stats_interval: Log stats every N frames (0 for final only)

    Returns:
        Final summary statistics
    """
    from metamorphosis.light_sensor import ConstantFrameSource
    from metamorphosis.scene import Scene

    scene = Scene(config, ConstantFrameSource(brightness), clock=lambda: 0.0)
    try:
        return scene.run_headless(max_frames=frames, dt=dt, stats_interval=stats_interval)
    finally:
        scene.close()


def main(argv=None):
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Time as Metamorphosis - light-paced cocoons and butterflies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the window with the webcam as the light source (default)
  python main.py

  # Window without a webcam; light stays at its initial level
  python main.py --no-camera

  # Headless: two simulated minutes in a bright room
  python main.py --headless --frames 7200 --brightness 220 --stats-interval 600

  # Reproducible dim run
  python main.py --headless --frames 3600 --brightness 40 --seed 42
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run without a window (stats only)"
    )
    parser.add_argument(
        "--frames", type=int, default=3600, help="Frames to simulate in headless mode (default: 3600)"
    )
    parser.add_argument(
        "--dt", type=float, default=1.0 / 60, help="Simulated seconds per headless frame (default: 1/60)"
    )
    parser.add_argument(
        "--brightness",
        type=float,
        default=INITIAL_BRIGHTNESS,
        help=f"Constant brightness 0-255 in headless mode (default: {INITIAL_BRIGHTNESS:g})",
    )
    parser.add_argument(
        "--stats-interval",
        type=int,
        default=600,
        help="Log stats every N frames in headless mode, 0 for final only (default: 600)",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )
    parser.add_argument(
        "--no-camera", action="store_true", help="Don't open the webcam in windowed mode"
    )
    parser.add_argument(
        "--assets", type=str, default="assets", metavar="DIR", help="Directory holding the sprite images"
    )
    parser.add_argument(
        "--frame-rate-independent",
        action="store_true",
        help="Scale butterfly motion by elapsed time instead of per frame",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        config = build_config(args)
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(2)

    if args.headless:
        logger.info("Starting headless scene...")
        logger.info(
            "Configuration: %d frames at %.4fs, brightness %.0f", args.frames, args.dt, args.brightness
        )
        run_headless(config, args.frames, args.dt, args.brightness, args.stats_interval)
    else:
        run_windowed(config, use_camera=not args.no_camera)


if __name__ == "__main__":
    main()
