"""Small non-negative integer vectors used as grid sizes and subscripts."""

from __future__ import annotations

import operator
from dataclasses import astuple, dataclass
from typing import Iterator


def _check_non_negative(values: tuple[int, ...]) -> None:
    for v in values:
        if not isinstance(v, int):
            raise TypeError("components must be integers")
        if v < 0:
            raise ValueError("components must be non-negative")


@dataclass(frozen=True, order=True)
class Vec2u:
    """A pair of non-negative integers, ordered lexically."""

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(astuple(self))

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.y))

    def __getitem__(self, d: int) -> int:
        return (self.x, self.y)[d]

    def __len__(self) -> int:
        return 2

    def prod(self) -> int:
        """Product of the components."""
        return self.x * self.y

    def min(self) -> int:
        """Smallest component."""
        return min(self.x, self.y)

    def max(self) -> int:
        """Largest component."""
        return max(self.x, self.y)

    @staticmethod
    def elementwise_min(a: Vec2u, b: Vec2u) -> Vec2u:
        """Componentwise minimum of two vectors."""
        return Vec2u(*map(min, a, b))

    @staticmethod
    def elementwise_max(a: Vec2u, b: Vec2u) -> Vec2u:
        """Componentwise maximum of two vectors."""
        return Vec2u(*map(max, a, b))

    @staticmethod
    def sub2ind(d: Vec2u, s: Vec2u) -> int:
        """Linear index of subscript ``s`` in a grid of dimensions ``d``."""
        return s[1] * d[0] + s[0]

    @staticmethod
    def ind2sub(d: Vec2u, idx: int) -> Vec2u:
        """Subscript of linear index ``idx`` in a grid of dimensions ``d``."""
        return Vec2u(idx % d[0], idx // d[0])

    def __add__(self, other: Vec2u) -> Vec2u:
        if not isinstance(other, Vec2u):
            return NotImplemented
        return Vec2u(*map(operator.add, self, other))

    def __sub__(self, other: Vec2u) -> Vec2u:
        if not isinstance(other, Vec2u):
            return NotImplemented
        return Vec2u(*map(operator.sub, self, other))

    def __mul__(self, s: int) -> Vec2u:
        if not isinstance(s, int):
            return NotImplemented
        return Vec2u(self.x * s, self.y * s)

    def __rmul__(self, s: int) -> Vec2u:
        return self.__mul__(s)

    def __str__(self) -> str:
        return f"[{self.x}, {self.y}]"


@dataclass(frozen=True, order=True)
class Vec3u:
    """A triple of non-negative integers, ordered lexically."""

    x: int = 0
    y: int = 0
    z: int = 0

    def __post_init__(self) -> None:
        _check_non_negative(astuple(self))

    def __iter__(self) -> Iterator[int]:
        return iter((self.x, self.y, self.z))

    def __getitem__(self, d: int) -> int:
        return (self.x, self.y, self.z)[d]

    def __len__(self) -> int:
        return 3

    def prod(self) -> int:
        """Product of the components."""
        return self.x * self.y * self.z

    def min(self) -> int:
        """Smallest component."""
        return min(self.x, self.y, self.z)

    def max(self) -> int:
        """Largest component."""
        return max(self.x, self.y, self.z)

    @staticmethod
    def elementwise_min(a: Vec3u, b: Vec3u) -> Vec3u:
        """Componentwise minimum of two vectors."""
        return Vec3u(*map(min, a, b))

    @staticmethod
    def elementwise_max(a: Vec3u, b: Vec3u) -> Vec3u:
        """Componentwise maximum of two vectors."""
        return Vec3u(*map(max, a, b))

    @staticmethod
    def sub2ind(d: Vec3u, s: Vec3u) -> int:
        """Linear index of subscript ``s`` in a grid of dimensions ``d``."""
        return ((s[2] * d[1]) + s[1]) * d[0] + s[0]

    @staticmethod
    def ind2sub(d: Vec3u, idx: int) -> Vec3u:
        """Subscript of linear index ``idx`` in a grid of dimensions ``d``."""
        xy = d[0] * d[1]
        rem = idx % xy
        return Vec3u(rem % d[0], rem // d[0], idx // xy)

    def __add__(self, other: Vec3u) -> Vec3u:
        if not isinstance(other, Vec3u):
            return NotImplemented
        return Vec3u(*map(operator.add, self, other))

    def __sub__(self, other: Vec3u) -> Vec3u:
        if not isinstance(other, Vec3u):
            return NotImplemented
        return Vec3u(*map(operator.sub, self, other))

    def __mul__(self, s: int) -> Vec3u:
        if not isinstance(s, int):
            return NotImplemented
        return Vec3u(self.x * s, self.y * s, self.z * s)

    def __rmul__(self, s: int) -> Vec3u:
        return self.__mul__(s)

    def __str__(self) -> str:
        return f"[{self.x}, {self.y}, {self.z}]"