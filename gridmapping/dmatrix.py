"""Small dense matrices with Gauss-Jordan inversion and determinants."""

from __future__ import annotations

import numbers
from typing import Iterable, List, Sequence, Tuple


class NotInvertibleMatrixError(ArithmeticError):
    """The matrix is singular or not square."""


class IncompatibleMatrixError(ValueError):
    """The operand shapes do not fit the operation."""


class NotSquareMatrixError(ValueError):
    """The operation needs a square matrix."""


class DMatrix:
    """A ``rows`` x ``columns`` matrix, at least 1x1, initialised to zero."""

    def __init__(self, rows: int = 0, columns: int = 0):
        self._rows = max(rows, 1)
        self._columns = max(columns, 1)
        self._data: List[List] = [[0.0] * self._columns for _ in range(self._rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence]) -> DMatrix:
        """A matrix holding the given rows."""
        rows = [list(r) for r in rows]
        if not rows or any(len(r) != len(rows[0]) for r in rows):
            raise ValueError("rows must be non-empty and of equal length")
        m = cls(len(rows), len(rows[0]))
        m._data = rows
        return m

    @classmethod
    def identity(cls, n: int) -> DMatrix:
        """The n x n identity matrix."""
        m = cls(n, n)
        for i in range(m._rows):
            m._data[i][i] = 1.0
        return m

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    def to_list(self) -> List[List]:
        """The elements as a list of rows."""
        return [list(r) for r in self._data]

    def __getitem__(self, index: Tuple[int, int]):
        i, j = index
        return self._data[i][j]

    def __setitem__(self, index: Tuple[int, int], value) -> None:
        i, j = index
        self._data[i][j] = value

    def __eq__(self, other) -> bool:
        if not isinstance(other, DMatrix):
            return NotImplemented
        return self._data == other._data

    def _copy_rows(self) -> List[List]:
        return [list(r) for r in self._data]

    def det(self):
        """The determinant."""
        if self._rows != self._columns:
            raise NotSquareMatrixError()
        n = self._rows
        aux = self._copy_rows()
        d = 1
        for i in range(n):
            k = next((k for k in range(i, n) if aux[k][i] != 0), None)
            if k is None:
                return 0
            val = aux[k][i]
            aux[k] = [v / val for v in aux[k]]
            d = d * val
            if k != i:
                aux[k], aux[i] = aux[i], aux[k]
                d = -d
            for j in range(i + 1, n):
                factor = aux[j][i]
                if factor != 0:
                    aux[j] = [a - factor * b for a, b in zip(aux[j], aux[i])]
        return d

    def inv(self) -> DMatrix:
        """The inverse matrix."""
        if self._rows != self._columns:
            raise NotInvertibleMatrixError()
        n = self._rows
        left = self._copy_rows()
        right = DMatrix.identity(n)._data
        for i in range(n):
            k = next((k for k in range(i, n) if left[k][i] != 0), None)
            if k is None:
                raise NotInvertibleMatrixError()
            val = left[k][i]
            left[k] = [v / val for v in left[k]]
            right[k] = [v / val for v in right[k]]
            if k != i:
                left[k], left[i] = left[i], left[k]
                right[k], right[i] = right[i], right[k]
            for j in range(n):
                if j != i:
                    factor = left[j][i]
                    left[j] = [a - factor * b for a, b in zip(left[j], left[i])]
                    right[j] = [a - factor * b for a, b in zip(right[j], right[i])]
        return DMatrix.from_rows(right)

    def transpose(self) -> DMatrix:
        """The transposed matrix."""
        return DMatrix.from_rows([list(col) for col in zip(*self._data)])

    def _same_shape(self, other: DMatrix) -> None:
        if self._rows != other._rows or self._columns != other._columns:
            raise IncompatibleMatrixError()

    def __add__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        self._same_shape(other)
        return DMatrix.from_rows(
            [[a + b for a, b in zip(r, s)] for r, s in zip(self._data, other._data)]
        )

    def __sub__(self, other):
        if not isinstance(other, DMatrix):
            return NotImplemented
        self._same_shape(other)
        return DMatrix.from_rows(
            [[a - b for a, b in zip(r, s)] for r, s in zip(self._data, other._data)]
        )

    def __mul__(self, other):
        if isinstance(other, DMatrix):
            if self._columns != other._rows:
                raise IncompatibleMatrixError()
            columns = list(zip(*other._data))
            return DMatrix.from_rows(
                [[sum(a * b for a, b in zip(r, c)) for c in columns] for r in self._data]
            )
        if isinstance(other, numbers.Number):
            return DMatrix.from_rows([[v * other for v in r] for r in self._data])
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self * other
        return NotImplemented

    def __str__(self) -> str:
        def fmt(v) -> str:
            return format(v, "g") if isinstance(v, numbers.Real) else str(v)

        return "{" + ",".join("{" + ",".join(fmt(v) for v in r) + "}" for r in self._data) + "}"

    def __repr__(self) -> str:
        return f"DMatrix.from_rows({self._data!r})"