"""Pygame paint stage: draws FrameState snapshots of the scene."""
