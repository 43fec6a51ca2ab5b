"""Pytest configuration and fixtures for metamorphosis tests."""

import os
import random

import pytest

# Paint-stage tests need a display surface but never a real window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def scene_config():
    """Default configuration with a fixed seed, validated."""
    from metamorphosis.config.scene_config import SceneConfig

    return SceneConfig(seed=42, headless=True).validate()


@pytest.fixture
def scene(scene_config):
    """A scene at real time 0 with no light source."""
    from metamorphosis.scene import Scene

    return Scene(scene_config, clock=lambda: 0.0)


def bright_config(brightness: float = 255.0, seed: int = 42):
    """Configuration whose smoothed brightness starts at ``brightness``."""
    import dataclasses

    from metamorphosis.config.scene_config import SceneConfig

    config = SceneConfig(seed=seed, headless=True)
    config.light = dataclasses.replace(config.light, initial_brightness=brightness)
    return config.validate()


@pytest.fixture
def bright_scene():
    """A scene held above the brightness ceiling (growth rate exactly MAX_GROWTH)."""
    from metamorphosis.light_sensor import ConstantFrameSource
    from metamorphosis.scene import Scene

    return Scene(bright_config(255.0), ConstantFrameSource(255.0), clock=lambda: 0.0)


@pytest.fixture
def make_config():
    """Factory for seeded configs at a given starting brightness."""
    return bright_config
