"""Parts for grid-based particle-filter mapping: geometry, grids, scan-matching cells, resampling and statistics."""

__version__ = "0.1.0"