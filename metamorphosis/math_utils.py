"""Small numeric helpers shared by the clock, the flock and the renderer.

Everything here is plain Python; numpy is only used where whole frames
are reduced.
"""

from __future__ import annotations

import math


def clamp(value: float, low: float, high: float) -> float:
    """Constrain value to [low, high]."""
    return low if value < low else high if value > high else value


def lerp(a: float, b: float, t: float) -> float:
    """Linear blend; exact at both endpoints."""
    return a * (1.0 - t) + b * t


def normalize(value: float, low: float, high: float) -> float:
    """Map value from [low, high] onto [0, 1] (unclamped)."""
    return (value - low) / (high - low)


def lerp_color(a, b, t: float):
    """Blend two RGB(A) tuples component-wise, rounding to ints."""
    return tuple(int(round(lerp(ca, cb, t))) for ca, cb in zip(a, b))


class Vector2:
    """Mutable 2D vector used for butterfly steering.

    The ``*_inplace`` methods mutate and return ``self`` so steering code
    can chain them without allocating.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vector2:
        return Vector2(self.x / k, self.y / k)

    def __iadd__(self, other: Vector2) -> Vector2:
        self.x += other.x
        self.y += other.y
        return self

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def heading(self) -> float:
        """Angle in radians; y grows downward on screen."""
        return math.atan2(self.y, self.x)

    def copy(self) -> Vector2:
        return Vector2(self.x, self.y)

    def set_length_inplace(self, new_length: float) -> Vector2:
        """Rescale to ``new_length``; a zero vector stays zero."""
        length = self.length()
        if length > 0.0:
            k = new_length / length
            self.x *= k
            self.y *= k
        return self

    def limit_inplace(self, max_length: float) -> Vector2:
        """Shorten to ``max_length`` if longer; direction is kept."""
        if self.length() > max_length:
            self.set_length_inplace(max_length)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return math.isclose(self.x, other.x, abs_tol=1e-9) and math.isclose(self.y, other.y, abs_tol=1e-9)

    def __iter__(self):
        return iter((self.x, self.y))

    def __repr__(self) -> str:
        return f"Vector2({self.x:g}, {self.y:g})"


__all__ = ["Vector2", "clamp", "lerp", "lerp_color", "normalize"]
