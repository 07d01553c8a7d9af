"""Dense two-dimensional grids of cells indexed by integer coordinates."""

from __future__ import annotations

import copy as _copy
from enum import IntFlag
from typing import Any, Callable, List


class AccessibilityState(IntFlag):
    """Whether a cell lies inside a grid and whether its storage exists."""

    OUTSIDE = 0x0
    INSIDE = 0x1
    ALLOCATED = 0x2


class Array2D:
    """A grid of ``xsize`` by ``ysize`` cells, each made by ``factory``."""

    patch_magnitude = 0

    def __init__(self, xsize: int = 0, ysize: int = 0, factory: Callable[[], Any] = float):
        self._factory = factory
        if xsize > 0 and ysize > 0:
            self.xsize, self.ysize = xsize, ysize
        else:
            self.xsize = self.ysize = 0
        self._cells: List[List[Any]] = self._new_cells(self.xsize, self.ysize)

    def _new_cells(self, xsize: int, ysize: int) -> List[List[Any]]:
        return [[self._factory() for _ in range(ysize)] for _ in range(xsize)]

    def clear(self) -> None:
        """Drop every cell, leaving an empty grid."""
        self._cells = []
        self.xsize = self.ysize = 0

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reframe the grid to cover [xmin, xmax) x [ymin, ymax) of the old indexes.

        Cells in the overlap keep their content; old cell (x, y) becomes
        (x - xmin, y - ymin). New cells are made by the factory.
        """
        xsize, ysize = xmax - xmin, ymax - ymin
        if xsize < 0 or ysize < 0:
            raise ValueError(f"invalid resize bounds ({xmin}, {ymin}, {xmax}, {ymax})")
        cells = self._new_cells(xsize, ysize)
        x0, x1 = max(xmin, 0), min(xmax, self.xsize)
        y0, y1 = max(ymin, 0), min(ymax, self.ysize)
        if y0 < y1:
            for x in range(x0, x1):
                cells[x - xmin][y0 - ymin:y1 - ymin] = self._cells[x][y0:y1]
        self._cells = cells
        self.xsize, self.ysize = xsize, ysize

    def is_inside(self, x: int, y: int) -> bool:
        """True when (x, y) is a valid index."""
        return 0 <= x < self.xsize and 0 <= y < self.ysize

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside a {self.xsize}x{self.ysize} grid")

    def cell(self, x: int, y: int) -> Any:
        """The cell at (x, y)."""
        self._check(x, y)
        return self._cells[x][y]

    def set_cell(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at (x, y)."""
        self._check(x, y)
        self._cells[x][y] = value

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        """Inside cells of a dense grid are always allocated."""
        if self.is_inside(x, y):
            return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
        return AccessibilityState.OUTSIDE

    def copy(self) -> Array2D:
        """A copy whose cells are copies of this grid's cells."""
        clone = _copy.copy(self)
        clone._cells = [[_copy.copy(c) for c in column] for column in self._cells]
        return clone