"""Quaternions and rigid 3D transforms made of a rotation and a translation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Vec3 = tuple[float, float, float]
Mat3 = tuple[Vec3, Vec3, Vec3]
Mat4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

_ZERO: Vec3 = (0.0, 0.0, 0.0)


def _mat_vec(m: Mat3, v: Sequence[float]) -> Vec3:
    return tuple(row[0] * v[0] + row[1] * v[1] + row[2] * v[2] for row in m)  # type: ignore[return-value]


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _neg(a: Sequence[float]) -> Vec3:
    return (-a[0], -a[1], -a[2])


@dataclass(frozen=True)
class Quat:
    """A quaternion stored as (x, y, z, w); the default is the identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    @staticmethod
    def from_axis_angle(axis: Sequence[float], angle: float) -> Quat:
        """Rotation of ``angle`` radians about ``axis``."""
        n = math.sqrt(sum(a * a for a in axis))
        if n == 0:
            raise ValueError("rotation axis must be non-zero")
        s = math.sin(0.5 * angle) / n
        return Quat(axis[0] * s, axis[1] * s, axis[2] * s, math.cos(0.5 * angle))

    @staticmethod
    def from_matrix(m: Sequence[Sequence[float]]) -> Quat:
        """Rotation from the upper-left 3x3 block of a 3x3 or 4x4 matrix."""
        m00, m01, m02 = m[0][0], m[0][1], m[0][2]
        m10, m11, m12 = m[1][0], m[1][1], m[1][2]
        m20, m21, m22 = m[2][0], m[2][1], m[2][2]
        trace = m00 + m11 + m22
        if trace > 0:
            s = 0.5 / math.sqrt(trace + 1.0)
            return Quat((m21 - m12) * s, (m02 - m20) * s, (m10 - m01) * s, 0.25 / s)
        if m00 > m11 and m00 > m22:
            s = 2.0 * math.sqrt(1.0 + m00 - m11 - m22)
            return Quat(0.25 * s, (m01 + m10) / s, (m02 + m20) / s, (m21 - m12) / s)
        if m11 > m22:
            s = 2.0 * math.sqrt(1.0 + m11 - m00 - m22)
            return Quat((m01 + m10) / s, 0.25 * s, (m12 + m21) / s, (m02 - m20) / s)
        s = 2.0 * math.sqrt(1.0 + m22 - m00 - m11)
        return Quat((m02 + m20) / s, (m12 + m21) / s, 0.25 * s, (m10 - m01) / s)

    @staticmethod
    def slerp(a: Quat, b: Quat, u: float) -> Quat:
        """Spherical interpolation from ``a`` (u=0) to ``b`` (u=1)."""
        dot = a.x * b.x + a.y * b.y + a.z * b.z + a.w * b.w
        if dot < 0:
            b = Quat(-b.x, -b.y, -b.z, -b.w)
            dot = -dot
        if dot > 0.9995:
            q = Quat(*(p + u * (r - p) for p, r in zip(a, b)))
            return q.normalized()
        theta = math.acos(min(dot, 1.0))
        st = math.sin(theta)
        wa = math.sin((1.0 - u) * theta) / st
        wb = math.sin(u * theta) / st
        return Quat(*(wa * p + wb * r for p, r in zip(a, b)))

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x**2 + self.y**2 + self.z**2 + self.w**2)

    def normalized(self) -> Quat:
        """Unit quaternion with the same direction."""
        n = self.norm()
        return Quat(self.x / n, self.y / n, self.z / n, self.w / n)

    def inverse(self) -> Quat:
        """Multiplicative inverse."""
        n2 = self.x**2 + self.y**2 + self.z**2 + self.w**2
        return Quat(-self.x / n2, -self.y / n2, -self.z / n2, self.w / n2)

    def to_matrix(self) -> Mat3:
        """3x3 rotation matrix, rows first."""
        x, y, z, w = self
        return (
            (1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)),
            (2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)),
            (2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)),
        )

    def __mul__(self, other: Quat) -> Quat:
        if not isinstance(other, Quat):
            return NotImplemented
        ax, ay, az, aw = self
        bx, by, bz, bw = other
        return Quat(
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        )


class Transform3:
    """A rigid transform: rotate by a quaternion, then translate."""

    def __init__(
        self, rotation: Quat | None = None, translation: Sequence[float] | None = None
    ) -> None:
        self._rotation = rotation if rotation is not None else Quat()
        self._translation: Vec3 = tuple(translation) if translation is not None else _ZERO  # type: ignore[assignment]
        self._rot_fwd: Mat3 | None = None
        self._rot_inv: Mat3 | None = None

    @property
    def rotation(self) -> Quat:
        return self._rotation

    @rotation.setter
    def rotation(self, q: Quat) -> None:
        self._rotation = q
        self._rot_fwd = self._rot_inv = None

    @property
    def translation(self) -> Vec3:
        return self._translation

    @translation.setter
    def translation(self, t: Sequence[float]) -> None:
        self._translation = tuple(t)  # type: ignore[assignment]

    @staticmethod
    def rx(theta: float, tx: Sequence[float] = _ZERO) -> Transform3:
        """Rotation about the x axis followed by translation ``tx``."""
        return Transform3(Quat.from_axis_angle((1.0, 0.0, 0.0), theta), tx)

    @staticmethod
    def ry(theta: float, tx: Sequence[float] = _ZERO) -> Transform3:
        """Rotation about the y axis followed by translation ``tx``."""
        return Transform3(Quat.from_axis_angle((0.0, 1.0, 0.0), theta), tx)

    @staticmethod
    def rz(theta: float, tx: Sequence[float] = _ZERO) -> Transform3:
        """Rotation about the z axis followed by translation ``tx``."""
        return Transform3(Quat.from_axis_angle((0.0, 0.0, 1.0), theta), tx)

    @staticmethod
    def from_matrix(m: Sequence[Sequence[float]]) -> Transform3:
        """Transform from a 4x4 homogeneous matrix."""
        return Transform3(Quat.from_matrix(m), (m[0][3], m[1][3], m[2][3]))

    def _update(self) -> None:
        fwd = self._rotation.to_matrix()
        self._rot_fwd = fwd
        self._rot_inv = tuple(zip(*fwd))  # type: ignore[assignment]

    def rot_fwd(self) -> Mat3:
        """Rotation matrix of this transform."""
        if self._rot_fwd is None:
            self._update()
        return self._rot_fwd  # type: ignore[return-value]

    def rot_inv(self) -> Mat3:
        """Inverse (transposed) rotation matrix."""
        if self._rot_inv is None:
            self._update()
        return self._rot_inv  # type: ignore[return-value]

    def transform_fwd(self, p: Sequence[float]) -> Vec3:
        """Apply the transform to a point."""
        return _add(_mat_vec(self.rot_fwd(), p), self._translation)

    def transform_inv(self, p: Sequence[float]) -> Vec3:
        """Apply the inverse transform to a point."""
        return _mat_vec(self.rot_inv(), _sub(p, self._translation))

    def inverse(self) -> Transform3:
        """The inverse transform."""
        return Transform3(self._rotation.inverse(), self.transform_inv(_ZERO))

    def matrix(self) -> Mat4:
        """4x4 homogeneous matrix."""
        r = self.rot_fwd()
        t = self._translation
        return (
            (r[0][0], r[0][1], r[0][2], t[0]),
            (r[1][0], r[1][1], r[1][2], t[1]),
            (r[2][0], r[2][1], r[2][2], t[2]),
            (0.0, 0.0, 0.0, 1.0),
        )

    def _assign(self, other: Transform3) -> None:
        self.rotation = other.rotation
        self._translation = other.translation

    def pre_translate(self, t: Sequence[float]) -> None:
        """Translate in the outer frame."""
        self._translation = _add(self._translation, t)

    def post_translate(self, t: Sequence[float]) -> None:
        """Translate in the local frame."""
        self._translation = _add(self._translation, _mat_vec(self.rot_fwd(), t))

    def pre_rotate(self, q: Quat, p: Sequence[float] = _ZERO) -> None:
        """Rotate by ``q`` about point ``p`` in the outer frame."""
        pivot = Transform3(None, p) * Transform3(q) * Transform3(None, _neg(p))
        self._assign(pivot * self)

    def post_rotate(self, q: Quat, p: Sequence[float] = _ZERO) -> None:
        """Rotate by ``q`` about point ``p`` in the local frame."""
        pivot = Transform3(None, p) * Transform3(q) * Transform3(None, _neg(p))
        self._assign(self * pivot)

    @staticmethod
    def lerp(a: Transform3, b: Transform3, u: float) -> Transform3:
        """Interpolate rotation spherically and translation linearly."""
        ta, tb = a.translation, b.translation
        return Transform3(
            Quat.slerp(a.rotation, b.rotation, u),
            tuple(p + u * (r - p) for p, r in zip(ta, tb)),
        )

    def __mul__(self, other):
        if isinstance(other, Transform3):
            return Transform3(
                self._rotation * other.rotation, self.transform_fwd(other.translation)
            )
        if isinstance(other, Quat):
            return self._rotation * other
        if isinstance(other, Sequence) and len(other) == 3:
            return self.transform_fwd(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Transform3({self._rotation!r}, {self._translation!r})"