# gridmapping

Building blocks for grid-based mapping with a particle filter: planar poses and
motions, occupancy grids placed in world coordinates, scan-matching cells,
resampling of weighted particles, and some statistics helpers.

## Modules

- `gridmapping.geometry`: frozen dataclasses `Point` and `OrientedPoint`
  (`x`, `y`, `theta`). Points add, subtract and scale; `a @ b` is the dot
  product. `OrientedPoint.normalize()` returns a copy with the heading in
  [-pi, pi), `OrientedPoint.rotate(alpha)` rotates about the origin. Free
  functions: `absolute_difference`, `absolute_sum`, `interpolate`,
  `euclidian_dist`, `point_min`, `point_max`, and `radial_key(origin)`, a sort
  key ordering points by bearing from `origin`.
- `gridmapping.movement`: `FSRMovement`, a forward/sideward/rotate motion with
  `normalize`, `invert`, `compose` and `move`, and the static helpers
  `move_point`, `compose_moves`, `between_points`, `invert_move` and
  `frame_transformation`.
- `gridmapping.stat`: `sample_gaussian(sigma, seed=0)` (polar Box-Muller; a
  nonzero seed reseeds the module's generator), `sample_uniform_double`,
  `sample_uniform_int`, `eval_log_gaussian`; `Covariance3`,
  `EigenCovariance3` (`from_covariance`, `rotate`, `sample`), `Gaussian3`
  (`eval`, `compute_from_samples`) and `compute_gaussian_from_samples`. Without
  weights the sums are divided by the number of poses plus one.
- `gridmapping.array2d`: the `AccessibilityState` flags and `Array2D`, a dense
  grid with `cell`, `set_cell`, `is_inside`, `cell_state`, `resize`, `clear`
  and `copy`.
- `gridmapping.harray2d`: `HierarchicalArray2D`, a grid of square patches that
  are created on first access. `copy()` shares patches with the original;
  `set_active_area` and `alloc_active_area` give selected patches storage of
  their own.
- `gridmapping.gridmap`: `GridMap`, which addresses storage cells by world
  `Point` or by `(ix, iy)` index. Build it from map sizes, `from_world_size` or
  `from_bounds`; convert with `world2map` and `map2world`; extend with `grow`
  or reframe with `resize`. `cell` raises `IndexError` outside the map, `read`
  returns the map's unknown value for unallocated cells, and `to_double_array`
  / `to_double_map` give float copies without the last row and column.
- `gridmapping.smmap`: `PointAccumulator` cells (`update`, `mean`, `add`,
  `entropy`, and `float(cell)` for the occupancy probability, -1 when never
  visited) and `make_scan_matcher_map`, a patch-allocated map of such cells.
- `gridmapping.particlefilter`: `to_normal_form`, `to_log_form`, `normalize`,
  `neff`, `rle`, systematic `resample` and `repeat_indexes`; the
  `UniformResampler` class; `Evolver` and `AuxiliaryEvolver`, which drive
  user-supplied evolution and likelihood models.
- `gridmapping.icp`: `icp_step` and `icp_nonlinear_step`, each returning the
  transform taking the first points of the pairs onto the second and the
  summed squared residual.
- `gridmapping.dmatrix`: `DMatrix` with `det`, `inv`, `transpose`, `identity`,
  `from_rows`, `+`, `-`, `*`; errors `NotInvertibleMatrixError`,
  `IncompatibleMatrixError` and `NotSquareMatrixError`.
- `gridmapping.boundingbox`: `OrientedBoundingBox`, a box along the principal
  axes of a point set, with corners `ul`, `ur`, `ll`, `lr` and `area()`.
  Raises `ValueError` when the covariance gives no usable axes (for example
  for points on an axis-parallel line).
- `gridmapping.datasmoother`: `DataSmoother`, a Parzen-window density over
  weighted one-dimensional samples, with integration, sampling, a Gaussian
  fit (`approx_gauss`), distances to a normal density and text dumps.
- `gridmapping.pgm`: `write_pgm(stream, xsize, ysize, matrix)` writes a binary
  P5 image where a value `v` becomes `255*|1-v|`.
- `gridmapping.memusage`: `read_mem_usage` reads `VmData` and `VmSize` from a
  proc status file; `print_mem_usage` prints them (Linux only; prints nothing
  when the file cannot be read).

## Installation

```
pip install .
```

## Example

```python
from gridmapping.geometry import OrientedPoint, Point
from gridmapping.movement import FSRMovement
from gridmapping.smmap import make_scan_matcher_map

start = OrientedPoint(0.0, 0.0, 0.0)
goal = OrientedPoint(1.0, 2.0, 0.5)
move = FSRMovement.between_points(start, goal)
print(move.move(start))

grid = make_scan_matcher_map(Point(0.0, 0.0), -10.0, -10.0, 10.0, 10.0, 0.05)
cell = grid.cell(grid.world2map(Point(1.0, 1.0)))
cell.update(True, Point(1.0, 1.0))
print(cell.mean(), float(cell))
```

## What it does not do

This is a library of parts. It has no scan matcher that optimises a pose
against a map, no complete mapping loop that feeds odometry and laser readings
through the particle filter, no motion model, no reader for sensor logs and no
command-line program. Those are left to the code that uses these parts.

## Tests

```
pip install .[test]
pytest
```