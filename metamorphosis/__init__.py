"""Simulation core for the Time as Metamorphosis scene.

This package contains the pure simulation logic, with no UI dependencies.
Key modules include:

- light_sensor: Average luma sampling from a low-resolution frame source
- environment: Brightness smoothing, day value, growth rate, organism time
- cocoons: Cocoon lifecycle (start, crack, hatch) and adult size mapping
- attractors: Nectar points and the pointer-as-light attractor
- flocking: Butterfly agents and the boids-style flocking update
- frame_state: Pure per-frame render description consumed by ``rendering``
- scene: The explicit scene state and the per-frame phase pipeline

Design note: the host window (pygame) lives outside this package so the
whole simulation can be driven deterministically from tests.
"""

from .scene import Scene, SceneState

__all__ = [
    "Scene",
    "SceneState",
]
