from itertools import product

import pytest

from gridmapping.array2d import AccessibilityState, Array2D


def _filled(xsize, ysize):
    grid = Array2D(xsize, ysize)
    for x, y in product(range(xsize), range(ysize)):
        grid.set_cell(x, y, float(100 * x + y))
    return grid


def test_new_grid_has_requested_size_and_default_cells():
    grid = Array2D(3, 4)
    assert (grid.xsize, grid.ysize) == (3, 4)
    assert all(grid.cell(x, y) == 0.0 for x, y in product(range(3), range(4)))


@pytest.mark.parametrize("xsize, ysize", [(0, 5), (5, 0), (-2, 3)])
def test_non_positive_size_gives_empty_grid(xsize, ysize):
    grid = Array2D(xsize, ysize)
    assert (grid.xsize, grid.ysize) == (0, 0)
    assert not grid.is_inside(0, 0)


def test_is_inside_bounds():
    grid = Array2D(3, 4)
    assert grid.is_inside(0, 0)
    assert grid.is_inside(2, 3)
    assert not grid.is_inside(3, 0)
    assert not grid.is_inside(0, 4)
    assert not grid.is_inside(-1, 0)


def test_set_cell_round_trip():
    grid = _filled(3, 3)
    for x, y in product(range(3), range(3)):
        assert grid.cell(x, y) == float(100 * x + y)


def test_access_outside_raises():
    grid = Array2D(3, 3)
    with pytest.raises(IndexError):
        grid.cell(3, 0)
    with pytest.raises(IndexError):
        grid.set_cell(-1, 0, 1.0)


def test_cell_state():
    grid = Array2D(2, 2)
    assert grid.cell_state(1, 1) == AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
    assert grid.cell_state(2, 1) == AccessibilityState.OUTSIDE


def test_resize_enlarge_keeps_cells_at_shifted_indexes():
    grid = _filled(4, 4)
    original = grid.copy()
    grid.resize(-1, -2, 5, 6)
    assert (grid.xsize, grid.ysize) == (6, 8)
    for x, y in product(range(4), range(4)):
        assert grid.cell(x + 1, y + 2) == original.cell(x, y)
    assert grid.cell(0, 0) == 0.0


def test_resize_shrink_keeps_overlap():
    grid = _filled(4, 4)
    original = grid.copy()
    grid.resize(1, 1, 3, 3)
    assert grid.cell(0, 0) == original.cell(1, 1)
    assert grid.cell(1, 1) == original.cell(2, 2)
    assert not grid.is_inside(2, 0)


def test_resize_with_inverted_bounds_raises():
    grid = Array2D(2, 2)
    with pytest.raises(ValueError):
        grid.resize(3, 0, 1, 2)


def test_clear_empties_grid():
    grid = _filled(2, 2)
    grid.clear()
    assert (grid.xsize, grid.ysize) == (0, 0)
    assert not grid.is_inside(0, 0)


def test_copy_is_independent():
    grid = _filled(2, 2)
    clone = grid.copy()
    clone.set_cell(0, 0, -5.0)
    assert grid.cell(0, 0) == 0.0
    assert clone.cell(0, 0) == -5.0


def test_copy_copies_mutable_cells():
    grid = Array2D(1, 1, factory=list)
    grid.cell(0, 0).append(1)
    clone = grid.copy()
    clone.cell(0, 0).append(2)
    assert grid.cell(0, 0) == [1]
    assert clone.cell(0, 0) == [1, 2]