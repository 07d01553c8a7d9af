"""Planar points and oriented poses with the arithmetic used by the mapper."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Callable

MAXDOUBLE = math.inf


@dataclass(frozen=True, order=True)
class Point:
    """A point in the plane; ordering is lexicographic on (x, y)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, value):
        if not isinstance(value, numbers.Real):
            return NotImplemented
        return Point(self.x * value, self.y * value)

    __rmul__ = __mul__

    def __matmul__(self, other):
        """Dot product of two points."""
        if not isinstance(other, Point):
            return NotImplemented
        return self.x * other.x + self.y * other.y


@dataclass(frozen=True)
class OrientedPoint(Point):
    """A pose: a point with a heading ``theta`` in radians."""

    theta: float = 0.0

    def __add__(self, other):
        if isinstance(other, OrientedPoint):
            return OrientedPoint(self.x + other.x, self.y + other.y, self.theta + other.theta)
        return super().__add__(other)

    def __sub__(self, other):
        if isinstance(other, OrientedPoint):
            return OrientedPoint(self.x - other.x, self.y - other.y, self.theta - other.theta)
        return super().__sub__(other)

    def __mul__(self, value):
        if not isinstance(value, numbers.Real):
            return NotImplemented
        return OrientedPoint(self.x * value, self.y * value, self.theta * value)

    __rmul__ = __mul__

    def normalize(self) -> OrientedPoint:
        """Return a copy whose heading lies in [-pi, pi)."""
        theta = self.theta
        if -math.pi <= theta < math.pi:
            return self
        multiplier = int(theta / (2 * math.pi))
        theta -= multiplier * 2 * math.pi
        if theta >= math.pi:
            theta -= 2 * math.pi
        if theta < -math.pi:
            theta += 2 * math.pi
        return replace(self, theta=theta)

    def rotate(self, alpha: float) -> OrientedPoint:
        """Rotate the pose about the origin by ``alpha``."""
        s, c = math.sin(alpha), math.cos(alpha)
        a = alpha + self.theta
        a = math.atan2(math.sin(a), math.cos(a))
        return OrientedPoint(c * self.x - s * self.y, s * self.x + c * self.y, a)


def absolute_difference(p1: OrientedPoint, p2: OrientedPoint) -> OrientedPoint:
    """Express ``p1`` in the frame of ``p2``."""
    dx, dy = p1.x - p2.x, p1.y - p2.y
    dtheta = p1.theta - p2.theta
    dtheta = math.atan2(math.sin(dtheta), math.cos(dtheta))
    s, c = math.sin(p2.theta), math.cos(p2.theta)
    return OrientedPoint(c * dx + s * dy, -s * dx + c * dy, dtheta)


def absolute_sum(p1: OrientedPoint, p2: Point) -> Point:
    """Map ``p2``, given in the frame of ``p1``, to the global frame."""
    s, c = math.sin(p1.theta), math.cos(p1.theta)
    if isinstance(p2, OrientedPoint):
        return OrientedPoint(c * p2.x - s * p2.y, s * p2.x + c * p2.y, p2.theta) + p1
    return Point(c * p2.x - s * p2.y + p1.x, s * p2.x + c * p2.y + p1.y)


def point_max(p1: Point, p2: Point) -> Point:
    """Component-wise maximum."""
    return Point(max(p1.x, p2.x), max(p1.y, p2.y))


def point_min(p1: Point, p2: Point) -> Point:
    """Component-wise minimum."""
    return Point(min(p1.x, p2.x), min(p1.y, p2.y))


def interpolate(p1: Point, t1: float, p2: Point, t2: float, t3: float) -> Point:
    """Interpolate between ``p1`` at time ``t1`` and ``p2`` at ``t2`` for time ``t3``."""
    gain = (t3 - t1) / (t2 - t1)
    if isinstance(p1, OrientedPoint) and isinstance(p2, OrientedPoint):
        s = math.sin(p1.theta) + math.sin(p2.theta) * gain
        c = math.cos(p1.theta) + math.cos(p2.theta) * gain
        return OrientedPoint(
            p1.x + (p2.x - p1.x) * gain,
            p1.y + (p2.y - p1.y) * gain,
            math.atan2(s, c),
        )
    return Point(p1.x + (p2.x - p1.x) * gain, p1.y + (p2.y - p1.y) * gain)


def euclidian_dist(p1: Point, p2: Point) -> float:
    """Planar distance between two points, ignoring any heading."""
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def radial_key(origin: Point) -> Callable[[Point], float]:
    """Sort key ordering points by their bearing as seen from ``origin``."""

    def key(p: Point) -> float:
        return math.atan2(p.y - origin.y, p.x - origin.x)

    return key