import math

import numpy as np
import pytest

from gridmapping.geometry import Point
from gridmapping.smmap import PointAccumulator, make_scan_matcher_map


def test_empty_accumulator():
    acc = PointAccumulator()
    assert float(acc) == -1.0
    assert acc.entropy() == pytest.approx(-math.log(0.5))


def test_hits_update_mean_and_occupancy():
    acc = PointAccumulator()
    acc.update(True, Point(1.0, 2.0))
    acc.update(True, Point(3.0, 4.0))
    assert acc.mean().x == pytest.approx(2.0)
    assert acc.mean().y == pytest.approx(3.0)
    assert float(acc) == 1.0
    assert acc.entropy() == 0.0


def test_miss_lowers_occupancy():
    acc = PointAccumulator()
    acc.update(True, Point(1.0, 1.0))
    acc.update(False)
    assert acc.n == 1
    assert float(acc) == 0.5
    assert acc.entropy() == pytest.approx(math.log(2))


def test_only_misses_have_zero_entropy():
    acc = PointAccumulator()
    acc.update(False)
    acc.update(False)
    assert float(acc) == 0.0
    assert acc.entropy() == 0.0


def test_accumulates_in_single_precision():
    acc = PointAccumulator()
    acc.update(True, Point(0.1, 0.2))
    assert acc.acc.x == float(np.float32(0.1))
    assert acc.acc.y == float(np.float32(0.2))


def test_mean_without_hits_is_nan():
    mean = PointAccumulator().mean()
    assert [math.isnan(mean.x), math.isnan(mean.y)] == [True, True]


def test_add_merges_statistics():
    first, second = PointAccumulator(), PointAccumulator()
    first.update(True, Point(1.0, 0.0))
    second.update(True, Point(0.0, 1.0))
    second.update(False)
    first.add(second)
    assert first.n == 2
    assert first.visits == 3
    assert first.acc == Point(1.0, 1.0)


def test_scan_matcher_map_allocates_on_write():
    grid = make_scan_matcher_map(Point(0.0, 0.0), -10.0, -10.0, 10.0, 10.0, 0.05)
    assert grid.storage.patch_magnitude == 5
    assert grid.map_size_x % 32 == 0
    target = Point(1.0, 1.0)
    assert grid.read(target) is grid.unknown
    assert float(grid.read(target)) == -1.0
    grid.cell(target).update(True, target)
    assert grid.storage.is_allocated(*grid.world2map(target))
    assert float(grid.read(target)) == 1.0
    assert float(grid.unknown) == -1.0