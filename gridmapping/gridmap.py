"""A grid placed in world coordinates with a fixed resolution."""

from __future__ import annotations

import math
from typing import Any, Callable, Optional, Tuple, Union

from gridmapping.array2d import AccessibilityState, Array2D
from gridmapping.geometry import Point

IntPair = Tuple[int, int]
StorageFactory = Callable[[int, int], Any]
Location = Union[Point, IntPair]


def _cround(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(0.5 - value)


class GridMap:
    """Cells of a storage grid addressed by world points or map indexes.

    A location given as a :class:`Point` is a world position; a pair of
    ints is a map index.
    """

    def __init__(
        self,
        map_size_x: int,
        map_size_y: int,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ):
        storage = storage_factory(map_size_x, map_size_y)
        self._setup(
            storage,
            Point(0.5 * map_size_x * delta, 0.5 * map_size_y * delta),
            map_size_x * delta,
            map_size_y * delta,
            delta,
            unknown,
        )

    def _setup(
        self,
        storage: Any,
        center: Point,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        unknown: Any,
        half: Optional[IntPair] = None,
    ) -> None:
        self.storage = storage
        self.center = center
        self.world_size_x = world_size_x
        self.world_size_y = world_size_y
        self.delta = delta
        self.unknown = unknown
        self.map_size_x = storage.xsize << storage.patch_magnitude
        self.map_size_y = storage.ysize << storage.patch_magnitude
        if half is None:
            half = (self.map_size_x >> 1, self.map_size_y >> 1)
        self._half_x, self._half_y = half

    @classmethod
    def from_world_size(
        cls,
        center: Point,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ) -> GridMap:
        """A map of the given world extent centred on ``center``."""
        storage = storage_factory(math.ceil(world_size_x / delta), math.ceil(world_size_y / delta))
        grid = cls.__new__(cls)
        grid._setup(storage, center, world_size_x, world_size_y, delta, unknown)
        return grid

    @classmethod
    def from_bounds(
        cls,
        center: Point,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ) -> GridMap:
        """A map covering the given world bounds, with ``center`` as reference point."""
        storage = storage_factory(math.ceil((xmax - xmin) / delta), math.ceil((ymax - ymin) / delta))
        grid = cls.__new__(cls)
        half = (_cround((center.x - xmin) / delta), _cround((center.y - ymin) / delta))
        grid._setup(storage, center, xmax - xmin, ymax - ymin, delta, unknown, half)
        return grid

    def _reframe(self, imin: IntPair, imax: IntPair, xmin, ymin, xmax, ymax) -> None:
        step = 1 << self.storage.patch_magnitude
        pxmin = math.floor(imin[0] / step)
        pxmax = math.ceil(imax[0] / step)
        pymin = math.floor(imin[1] / step)
        pymax = math.ceil(imax[1] / step)
        self.storage.resize(pxmin, pymin, pxmax, pymax)
        self.map_size_x = self.storage.xsize << self.storage.patch_magnitude
        self.map_size_y = self.storage.ysize << self.storage.patch_magnitude
        self.world_size_x = xmax - xmin
        self.world_size_y = ymax - ymin
        self._half_x -= pxmin * step
        self._half_y -= pymin * step

    def resize(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Reframe the map to the given world bounds, keeping overlapping cells."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        self._reframe(imin, imax, xmin, ymin, xmax, ymax)

    def grow(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Enlarge the map so that it also covers the given world bounds."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        if self.is_inside(imin) and self.is_inside(imax):
            return
        imin = (min(imin[0], 0), min(imin[1], 0))
        imax = (max(imax[0], self.map_size_x - 1), max(imax[1], self.map_size_y - 1))
        self._reframe(imin, imax, xmin, ymin, xmax, ymax)

    def world2map(self, p: Point) -> IntPair:
        """Map index of the world point ``p``."""
        return (
            _cround((p.x - self.center.x) / self.delta) + self._half_x,
            _cround((p.y - self.center.y) / self.delta) + self._half_y,
        )

    def map2world(self, p: IntPair) -> Point:
        """World position of the map index ``p``."""
        ix, iy = p
        return Point((ix - self._half_x) * self.delta, (iy - self._half_y) * self.delta) + self.center

    def size(self) -> Tuple[float, float, float, float]:
        """World bounds (xmin, ymin, xmax, ymax) of the first and last cells."""
        low = self.map2world((0, 0))
        high = self.map2world((self.map_size_x - 1, self.map_size_y - 1))
        return low.x, low.y, high.x, high.y

    def _index(self, p: Location) -> IntPair:
        if isinstance(p, Point):
            return self.world2map(p)
        ix, iy = p
        return ix, iy

    def _inside_index(self, p: Location) -> IntPair:
        ix, iy = self._index(p)
        if not self.storage.cell_state(ix, iy) & AccessibilityState.INSIDE:
            raise IndexError(f"location {p!r} is outside the map")
        return ix, iy

    def cell(self, p: Location) -> Any:
        """The cell at ``p``, allocating its storage if needed."""
        return self.storage.cell(*self._inside_index(p))

    def __setitem__(self, p: Location, value: Any) -> None:
        self.storage.set_cell(*self._inside_index(p), value)

    def read(self, p: Location) -> Any:
        """The cell at ``p`` if allocated, else the map's unknown value."""
        ix, iy = self._index(p)
        if self.storage.cell_state(ix, iy) & AccessibilityState.ALLOCATED:
            return self.storage.cell(ix, iy)
        return self.unknown

    def is_inside(self, p: Location) -> bool:
        """True when ``p`` lies inside the map."""
        return bool(self.storage.cell_state(*self._index(p)) & AccessibilityState.INSIDE)

    def to_double_array(self) -> Array2D:
        """The cells as floats, without the last row and column."""
        result = Array2D(self.map_size_x - 1, self.map_size_y - 1)
        for x in range(self.map_size_x - 1):
            for y in range(self.map_size_y - 1):
                result.set_cell(x, y, float(self.read((x, y))))
        return result

    def to_double_map(self) -> GridMap:
        """A plain float map with the same resolution and the cells as floats."""
        pmin = self.map2world((0, 0))
        pmax = self.map2world((self.map_size_x - 1, self.map_size_y - 1))
        extent = pmax - pmin
        plain = GridMap.from_world_size((pmax + pmin) * 0.5, extent.x, extent.y, self.delta)
        for x in range(self.map_size_x - 1):
            for y in range(self.map_size_y - 1):
                plain[(x, y)] = float(self.read((x, y)))
        return plain