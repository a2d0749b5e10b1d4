"""Pinhole camera intrinsics and the projections built on them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


def div_up(total: int, grain: int) -> int:
    """Return how many blocks of ``grain`` are needed to cover ``total`` items.

    Integer division truncates toward zero, so negative totals behave as the
    usual integer arithmetic of the solver does.
    """
    if grain == 0:
        raise ZeroDivisionError("grain must be non-zero")
    numerator = total + grain - 1
    quotient = abs(numerator) // abs(grain)
    return quotient if (numerator >= 0) == (grain > 0) else -quotient


@dataclass(frozen=True)
class Intrinsics:
    """Focal lengths and principal point of a pinhole camera."""

    fx: float = 0.0
    fy: float = 0.0
    cx: float = 0.0
    cy: float = 0.0

    def at_level(self, level_index: int) -> Intrinsics:
        """Return the intrinsics for a pyramid level, each level halving the image."""
        if level_index < 0:
            raise ValueError("level_index must be non-negative")
        div = 1 << level_index
        return Intrinsics(self.fx / div, self.fy / div, self.cx / div, self.cy / div)

    def __str__(self) -> str:
        return f"([f = {self.fx:g}, {self.fy:g}] [cp = {self.cx:g}, {self.cy:g}])"


@dataclass(frozen=True)
class Projector:
    """Projects camera-space points onto the image plane."""

    fx: float
    fy: float
    cx: float
    cy: float

    @property
    def f(self) -> tuple[float, float]:
        return (self.fx, self.fy)

    @property
    def c(self) -> tuple[float, float]:
        return (self.cx, self.cy)

    def __call__(self, p: Sequence[float]) -> tuple[float, float]:
        x, y, z = p[0], p[1], p[2]
        return (x * self.fx / z + self.cx, y * self.fy / z + self.cy)


@dataclass(frozen=True)
class Reprojector:
    """Lifts pixel coordinates with a depth back into camera space."""

    fx: float
    fy: float
    cx: float
    cy: float

    @property
    def finv(self) -> tuple[float, float]:
        return (1.0 / self.fx, 1.0 / self.fy)

    @property
    def c(self) -> tuple[float, float]:
        return (self.cx, self.cy)

    def __call__(self, u: float, v: float, z: float) -> tuple[float, float, float]:
        finv_x, finv_y = self.finv
        return (z * (u - self.cx) * finv_x, z * (v - self.cy) * finv_y, z)