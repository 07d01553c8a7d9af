"""Oriented bounding boxes aligned with the principal axes of a point set."""

from __future__ import annotations

import math
from typing import Iterable

from gridmapping.geometry import Point


class OrientedBoundingBox:
    """Box around points, oriented along the eigenvectors of their covariance.

    Corners are ``ul``, ``ur``, ``ll`` and ``lr``.
    """

    def __init__(self, points: Iterable[Point]):
        points = list(points)
        if not points:
            raise ValueError("at least one point is needed")
        count = float(len(points))
        cx = sum(p.x for p in points) / count
        cy = sum(p.y for p in points) / count

        x1 = sum((p.x - cx) ** 2 for p in points) / count
        x2 = sum((p.x - cx) * (p.y - cy) for p in points) / count
        x4 = sum((p.y - cy) ** 2 for p in points) / count
        x3 = x2

        term = x4 * x4 - 2 * x1 * x4 + x1 * x1 + 4 * x2 * x3
        if x3 == 0 or x2 == 0 or term < 0:
            raise ValueError(
                f"cannot compute the eigenvectors: x3={x3}, x2={x2}, term={term}"
            )

        root = math.sqrt(term)
        axes = []
        for lamda in (0.5 * (x4 + x1 + root), 0.5 * (x4 + x1 - root)):
            vx = -(x4 - lamda) * (x4 - lamda) * (x1 - lamda) / (x2 * x3 * x3)
            vy = (x4 - lamda) * (x1 - lamda) / (x2 * x3)
            length = math.hypot(vx, vy)
            axes.append((vx / length, vy / length))
        (v1x, v1y), (v2x, v2y) = axes

        us = [(p.x - cx) * v1x + (p.y - cy) * v1y for p in points]
        vs = [(p.x - cx) * v2x + (p.y - cy) * v2y for p in points]
        umin, umax, vmin, vmax = min(us), max(us), min(vs), max(vs)

        def corner(u: float, v: float) -> Point:
            return Point(cx + u * v1x + v * v2x, cy + u * v1y + v * v2y)

        self.ul = corner(umin, vmin)
        self.ur = corner(umax, vmin)
        self.ll = corner(umin, vmax)
        self.lr = corner(umax, vmax)

    def area(self) -> float:
        """Area of the box."""
        return math.hypot(self.ul.x - self.ll.x, self.ul.y - self.ll.y) * math.hypot(
            self.ul.x - self.ur.x, self.ul.y - self.ur.y
        )