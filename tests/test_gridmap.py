from itertools import product

import pytest

from gridmapping.geometry import Point
from gridmapping.gridmap import GridMap
from gridmapping.harray2d import HierarchicalArray2D


def _small_map():
    return GridMap.from_bounds(Point(0.0, 0.0), -2.0, -2.0, 2.0, 2.0, 1.0)


def test_plain_map_sizes_and_center():
    grid = GridMap(10, 20, 0.5)
    assert (grid.map_size_x, grid.map_size_y) == (10, 20)
    assert grid.world2map(grid.center) == (5, 10)
    assert grid.map2world((0, 0)) == Point(0.0, 0.0)


def test_from_bounds_layout():
    grid = GridMap.from_bounds(Point(0.0, 0.0), -5.0, -5.0, 5.0, 5.0, 0.5)
    assert grid.map_size_x == grid.map_size_y
    assert grid.world2map(Point(0.0, 0.0)) == (grid.map_size_x // 2, grid.map_size_y // 2)
    xmin, ymin, _, _ = grid.size()
    assert (xmin, ymin) == (-5.0, -5.0)


def test_map_world_round_trip():
    grid = GridMap.from_bounds(Point(1.0, -1.0), -3.0, -4.0, 5.0, 2.0, 0.25)
    for ix, iy in product(range(0, grid.map_size_x, 5), range(0, grid.map_size_y, 5)):
        assert grid.world2map(grid.map2world((ix, iy))) == (ix, iy)


def test_world2map_rounds_half_away_from_zero():
    grid = _small_map()
    assert grid.world2map(Point(0.5, 0.5)) == grid.world2map(Point(1.0, 1.0))
    assert grid.world2map(Point(-0.5, -0.5)) == grid.world2map(Point(-1.0, -1.0))


def test_write_and_read_by_world_point_and_index():
    grid = _small_map()
    grid[Point(1.0, 0.0)] = 3.0
    assert grid.read(grid.world2map(Point(1.0, 0.0))) == 3.0
    assert grid.cell(Point(1.0, 0.0)) == 3.0


def test_outside_access():
    grid = _small_map()
    far = Point(50.0, 50.0)
    assert not grid.is_inside(far)
    assert grid.is_inside(Point(0.0, 0.0))
    assert grid.read(far) == -1.0
    with pytest.raises(IndexError):
        grid.cell(far)
    with pytest.raises(IndexError):
        grid[far] = 1.0


def test_grow_keeps_content_and_covers_bounds():
    grid = _small_map()
    grid[Point(1.0, 1.0)] = 3.0
    grid.grow(-6.0, -6.0, 6.0, 6.0)
    assert grid.is_inside(Point(-6.0, -6.0))
    assert grid.is_inside(Point(5.0, 5.0))
    assert grid.read(Point(1.0, 1.0)) == 3.0


def test_grow_inside_bounds_is_a_no_op():
    grid = _small_map()
    before = (grid.map_size_x, grid.map_size_y, grid.world2map(Point(0.0, 0.0)))
    grid.grow(-1.0, -1.0, 1.0, 1.0)
    assert (grid.map_size_x, grid.map_size_y, grid.world2map(Point(0.0, 0.0))) == before


def test_resize_shrinks_and_keeps_overlap():
    grid = _small_map()
    grid[Point(0.0, 0.0)] = 4.0
    grid.resize(-1.0, -1.0, 1.0, 1.0)
    assert grid.read(Point(0.0, 0.0)) == 4.0
    assert not grid.is_inside(Point(1.0, 1.0))


def test_hierarchical_storage_reports_unknown_until_allocated():
    grid = GridMap.from_bounds(
        Point(0.0, 0.0), -8.0, -8.0, 8.0, 8.0, 1.0,
        storage_factory=lambda xs, ys: HierarchicalArray2D(xs, ys, 2, float),
    )
    assert grid.map_size_x % 4 == 0
    origin = Point(0.0, 0.0)
    assert grid.read(origin) == -1.0
    assert grid.cell(origin) == 0.0
    assert grid.storage.is_allocated(*grid.world2map(origin))
    assert grid.read(origin) == 0.0


def test_to_double_array_copies_cells():
    grid = _small_map()
    grid[(1, 2)] = 0.25
    grid[(0, 0)] = 0.75
    array = grid.to_double_array()
    assert (array.xsize, array.ysize) == (grid.map_size_x - 1, grid.map_size_y - 1)
    for x, y in product(range(array.xsize), range(array.ysize)):
        assert array.cell(x, y) == grid.read((x, y))


def test_to_double_map_copies_cells():
    grid = _small_map()
    grid[(2, 1)] = 0.5
    plain = grid.to_double_map()
    assert plain.delta == grid.delta
    for x, y in product(range(grid.map_size_x - 1), range(grid.map_size_y - 1)):
        assert plain.read((x, y)) == grid.read((x, y))