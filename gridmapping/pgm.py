"""Writing grids of occupancy values as binary PGM images."""

from __future__ import annotations

from typing import Any, BinaryIO


def write_pgm(stream: BinaryIO, xsize: int, ysize: int, matrix: Any) -> BinaryIO:
    """Write ``matrix[x][y]`` as a P5 image, top row first; a value v becomes 255*|1-v|."""
    header = f"P5\n{xsize}\n{ysize}\n255\n".encode("ascii")
    pixels = bytearray()
    for y in range(ysize - 1, -1, -1):
        for x in range(xsize):
            pixels.append(int(255 * abs(1.0 - float(matrix[x][y]))) & 0xFF)
    stream.write(header)
    stream.write(bytes(pixels))
    return stream