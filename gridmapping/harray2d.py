"""A grid split into square patches that are allocated and shared lazily."""

from __future__ import annotations

import copy as _copy
from typing import Any, Callable, FrozenSet, Iterable, Tuple

from gridmapping.array2d import AccessibilityState, Array2D

IntPair = Tuple[int, int]

# Calling the type of None yields None: an empty slot for an unallocated patch.
_EMPTY_PATCH: Callable[[], None] = type(None)


class HierarchicalArray2D(Array2D):
    """A grid of patches of ``2**patch_magnitude`` cells per side.

    Patches are created on first write. Copies share patches with the
    original until the patches in the active area are detached with
    :meth:`alloc_active_area`.
    """

    def __init__(
        self,
        xsize: int,
        ysize: int,
        patch_magnitude: int = 5,
        cell_factory: Callable[[], Any] = float,
    ):
        super().__init__(xsize >> patch_magnitude, ysize >> patch_magnitude, factory=_EMPTY_PATCH)
        self.patch_magnitude = patch_magnitude
        self.patch_size = 1 << patch_magnitude
        self._cell_factory = cell_factory
        self._active_area: set = set()

    @property
    def active_area(self) -> FrozenSet[IntPair]:
        """Patch indexes selected for detaching."""
        return frozenset(self._active_area)

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reframe the patch grid; bounds are in patch indexes, new patches are unallocated."""
        super().resize(xmin, ymin, xmax, ymax)

    def patch_indexes(self, x: int, y: int) -> IntPair:
        """Index of the patch holding cell (x, y); (-1, -1) for negative cells."""
        if x >= 0 and y >= 0:
            return x >> self.patch_magnitude, y >> self.patch_magnitude
        return -1, -1

    def _create_patch(self) -> Array2D:
        return Array2D(self.patch_size, self.patch_size, self._cell_factory)

    def is_allocated(self, x: int, y: int) -> bool:
        """True when the patch holding cell (x, y) exists."""
        px, py = self.patch_indexes(x, y)
        return self.is_inside(px, py) and self._cells[px][py] is not None

    def _locate(self, x: int, y: int) -> Tuple[Array2D, int, int]:
        px, py = self.patch_indexes(x, y)
        if not self.is_inside(px, py):
            raise IndexError(f"cell ({x}, {y}) is outside the grid")
        patch = self._cells[px][py]
        if patch is None:
            patch = self._create_patch()
            self._cells[px][py] = patch
        return patch, x - (px << self.patch_magnitude), y - (py << self.patch_magnitude)

    def cell(self, x: int, y: int) -> Any:
        """The cell at (x, y), allocating its patch when needed."""
        patch, lx, ly = self._locate(x, y)
        return patch.cell(lx, ly)

    def set_cell(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at (x, y), allocating its patch when needed."""
        patch, lx, ly = self._locate(x, y)
        patch.set_cell(lx, ly, value)

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        if self.is_inside(*self.patch_indexes(x, y)):
            if self.is_allocated(x, y):
                return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
            return AccessibilityState.INSIDE
        return AccessibilityState.OUTSIDE

    def set_active_area(self, area: Iterable[IntPair], patch_coords: bool = False) -> None:
        """Select the patches to detach, given as cell or patch coordinates."""
        self._active_area = {
            (x, y) if patch_coords else self.patch_indexes(x, y) for x, y in area
        }

    def alloc_active_area(self) -> None:
        """Give every active patch storage of its own: new if missing, else a private copy."""
        for px, py in self._active_area:
            if not self.is_inside(px, py):
                raise IndexError(f"patch ({px}, {py}) is outside the grid")
            patch = self._cells[px][py]
            self._cells[px][py] = self._create_patch() if patch is None else patch.copy()

    def copy(self) -> HierarchicalArray2D:
        """A copy sharing every patch with this grid, with an empty active area."""
        clone = _copy.copy(self)
        clone._cells = [list(column) for column in self._cells]
        clone._active_area = set()
        return clone