"""Configuration package for the metamorphosis scene.

Constants are grouped by concern (display, environment, lifecycle, flocking)
and assembled into dataclasses by ``scene_config``.
"""
