"""Immutable 2-by-2 matrices stored in row-major order."""

from __future__ import annotations

import math
import numbers
from typing import Iterator, Sequence

Vec2 = tuple[float, float]


class Mat2:
    """A 2-by-2 matrix; the default is the identity."""

    __slots__ = ("_data",)

    def __init__(
        self, m00: float = 1.0, m01: float = 0.0, m10: float = 0.0, m11: float = 1.0
    ) -> None:
        self._data = (m00, m01, m10, m11)

    @staticmethod
    def identity() -> Mat2:
        """Return the identity matrix."""
        return Mat2(1.0, 0.0, 0.0, 1.0)

    @staticmethod
    def zero() -> Mat2:
        """Return the zero matrix."""
        return Mat2(0.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_rows(r0: Sequence[float], r1: Sequence[float]) -> Mat2:
        """Build a matrix from two row vectors."""
        return Mat2(r0[0], r0[1], r1[0], r1[1])

    @staticmethod
    def from_cols(c0: Sequence[float], c1: Sequence[float]) -> Mat2:
        """Build a matrix from two column vectors."""
        return Mat2(c0[0], c1[0], c0[1], c1[1])

    @staticmethod
    def rot_mat(theta: float) -> Mat2:
        """Return the rotation matrix for angle ``theta`` in radians."""
        ct = math.cos(theta)
        st = math.sin(theta)
        return Mat2(ct, -st, st, ct)

    @staticmethod
    def outer(a: Sequence[float], b: Sequence[float]) -> Mat2:
        """Return the outer product of two vectors."""
        return Mat2(a[0] * b[0], a[0] * b[1], a[1] * b[0], a[1] * b[1])

    @property
    def data(self) -> tuple[float, float, float, float]:
        """The elements in row-major order."""
        return self._data

    def transpose(self) -> Mat2:
        """Return the transposed matrix."""
        m00, m01, m10, m11 = self._data
        return Mat2(m00, m10, m01, m11)

    def determinant(self) -> float:
        """Return the determinant."""
        m00, m01, m10, m11 = self._data
        return m00 * m11 - m01 * m10

    def inverse(self) -> Mat2:
        """Return the inverse; raises ZeroDivisionError for a singular matrix."""
        det = self.determinant()
        if det == 0:
            raise ZeroDivisionError("matrix is singular")
        inv = 1.0 / det
        m00, m01, m10, m11 = self._data
        return Mat2(m11 * inv, -m01 * inv, -m10 * inv, m00 * inv)

    def __getitem__(self, key: int | tuple[int, int]) -> float:
        if isinstance(key, tuple):
            row, col = key
            if not (0 <= row < 2 and 0 <= col < 2):
                raise IndexError("matrix subscript out of range")
            return self._data[row * 2 + col]
        return self._data[key]

    def __iter__(self) -> Iterator[float]:
        return iter(self._data)

    def __len__(self) -> int:
        return 4

    def __mul__(self, other):
        if isinstance(other, Mat2):
            a, b = self._data, other._data
            return Mat2(
                a[0] * b[0] + a[1] * b[2],
                a[0] * b[1] + a[1] * b[3],
                a[2] * b[0] + a[3] * b[2],
                a[2] * b[1] + a[3] * b[3],
            )
        if isinstance(other, numbers.Real):
            return Mat2(*(v * other for v in self._data))
        if isinstance(other, Sequence) and len(other) == 2:
            m00, m01, m10, m11 = self._data
            x, y = other
            return (x * m00 + y * m01, x * m10 + y * m11)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Real):
            return Mat2(*(v * other for v in self._data))
        return NotImplemented

    def __add__(self, other):
        if not isinstance(other, Mat2):
            return NotImplemented
        return Mat2(*(a + b for a, b in zip(self._data, other._data)))

    def __sub__(self, other):
        if not isinstance(other, Mat2):
            return NotImplemented
        return Mat2(*(a - b for a, b in zip(self._data, other._data)))

    def __neg__(self) -> Mat2:
        return Mat2(*(-v for v in self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mat2):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return "Mat2({}, {}, {}, {})".format(*self._data)

    def __str__(self) -> str:
        m00, m01, m10, m11 = self._data
        return f"{m00:>10} {m01:>10} \n{m10:>10} {m11:>10} \n"