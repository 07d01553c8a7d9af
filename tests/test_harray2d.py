import pytest

from gridmapping.array2d import AccessibilityState
from gridmapping.harray2d import HierarchicalArray2D

MAG = 4
SIZE = 1 << MAG
BOTH = AccessibilityState.INSIDE | AccessibilityState.ALLOCATED


def test_patch_grid_dimensions():
    grid = HierarchicalArray2D(4 * SIZE, 2 * SIZE, MAG)
    assert (grid.xsize, grid.ysize) == (4, 2)
    assert grid.patch_magnitude == MAG
    assert grid.patch_size == SIZE


def test_patch_indexes():
    grid = HierarchicalArray2D(4 * SIZE, 4 * SIZE, MAG)
    assert grid.patch_indexes(SIZE + 1, SIZE - 1) == (1, 0)
    assert grid.patch_indexes(-1, 3) == (-1, -1)


def test_fresh_grid_is_inside_but_unallocated():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    assert not grid.is_allocated(0, 0)
    assert grid.cell_state(0, 0) == AccessibilityState.INSIDE


def test_set_cell_allocates_only_its_patch():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_cell(SIZE + 2, 3, 7.0)
    assert grid.is_allocated(SIZE, 0)
    assert grid.cell_state(SIZE + 2, 3) == BOTH
    assert not grid.is_allocated(0, 0)
    assert grid.cell(SIZE + 2, 3) == 7.0
    assert grid.cell(SIZE + 3, 3) == 0.0


def test_cells_outside_the_grid():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    assert grid.cell_state(2 * SIZE, 0) == AccessibilityState.OUTSIDE
    assert grid.cell_state(-1, 0) == AccessibilityState.OUTSIDE
    assert not grid.is_allocated(-1, 0)
    with pytest.raises(IndexError):
        grid.cell(2 * SIZE, 0)


def test_copy_shares_patches_until_detached():
    original = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    original.set_cell(1, 1, 1.0)
    clone = original.copy()
    clone.set_cell(2, 2, 2.0)
    assert original.cell(2, 2) == 2.0

    clone.set_active_area({(0, 0)}, patch_coords=True)
    clone.alloc_active_area()
    clone.set_cell(3, 3, 3.0)
    assert original.cell(3, 3) == 0.0
    assert clone.cell(3, 3) == 3.0
    assert clone.cell(1, 1) == 1.0


def test_set_active_area_converts_cell_coordinates():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_active_area([(SIZE + 1, 1), (SIZE + 5, 2), (0, SIZE)])
    assert grid.active_area == {(1, 0), (0, 1)}


def test_alloc_active_area_creates_missing_patches():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_active_area([(SIZE, SIZE)])
    grid.alloc_active_area()
    assert grid.is_allocated(SIZE, SIZE)
    assert not grid.is_allocated(0, 0)


def test_alloc_active_area_outside_raises():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_active_area([(5, 5)], patch_coords=True)
    with pytest.raises(IndexError):
        grid.alloc_active_area()


def test_copy_has_empty_active_area():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_active_area([(0, 0)], patch_coords=True)
    assert grid.copy().active_area == frozenset()
    assert grid.active_area == {(0, 0)}


def test_resize_moves_patches():
    grid = HierarchicalArray2D(2 * SIZE, 2 * SIZE, MAG)
    grid.set_cell(1, 1, 5.0)
    grid.resize(-1, -1, 3, 3)
    assert grid.xsize == 4
    assert grid.cell(SIZE + 1, SIZE + 1) == 5.0
    assert not grid.is_allocated(0, 0)