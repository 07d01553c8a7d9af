"""Occupancy cells that accumulate beam endpoints, and the scan-matching map."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from gridmapping.geometry import Point
from gridmapping.gridmap import GridMap
from gridmapping.harray2d import HierarchicalArray2D

SIGHT_INC = 1
DEFAULT_PATCH_MAGNITUDE = 5


def _f32_sum(a: float, b: float) -> float:
    return float(np.float32(a) + np.float32(b))


@dataclass
class PointAccumulator:
    """Hit statistics of one cell: summed endpoints, hits ``n`` and ``visits``."""

    acc: Point = field(default_factory=Point)
    n: int = 0
    visits: int = 0

    def update(self, value: bool, p: Point = Point()) -> None:
        """Record a beam ending in the cell at ``p`` (hit) or passing through it."""
        if value:
            self.acc = Point(_f32_sum(self.acc.x, p.x), _f32_sum(self.acc.y, p.y))
            self.n += 1
            self.visits += SIGHT_INC
        else:
            self.visits += 1

    def mean(self) -> Point:
        """Mean endpoint of the hits; NaN components when there are none."""
        factor = math.inf if self.n == 0 else 1.0 / self.n
        return Point(factor * self.acc.x, factor * self.acc.y)

    def __float__(self) -> float:
        """Occupancy probability, or -1 for a never-visited cell."""
        if not self.visits:
            return -1.0
        return self.n * SIGHT_INC / self.visits

    def add(self, other: PointAccumulator) -> None:
        """Merge the statistics of ``other`` into this cell."""
        self.acc = Point(_f32_sum(self.acc.x, other.acc.x), _f32_sum(self.acc.y, other.acc.y))
        self.n += other.n
        self.visits += other.visits

    def entropy(self) -> float:
        """Binary entropy of the occupancy probability."""
        if not self.visits:
            return -math.log(0.5)
        if self.n == self.visits or self.n == 0:
            return 0.0
        x = self.n * SIGHT_INC / self.visits
        return -(x * math.log(x) + (1 - x) * math.log(1 - x))


def make_scan_matcher_map(
    center: Point, xmin: float, ymin: float, xmax: float, ymax: float, delta: float
) -> GridMap:
    """A patch-allocated map of :class:`PointAccumulator` cells over the given bounds."""
    return GridMap.from_bounds(
        center,
        xmin,
        ymin,
        xmax,
        ymax,
        delta,
        storage_factory=lambda xs, ys: HierarchicalArray2D(
            xs, ys, DEFAULT_PATCH_MAGNITUDE, PointAccumulator
        ),
        unknown=PointAccumulator(),
    )