"""Triangle meshes with primitive builders, transforms and spatial splitting."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Sequence, Union

from .transform3 import Transform3

Vec3 = tuple[float, float, float]
Vec2 = tuple[float, float]
Box3 = tuple[Vec3, Vec3]
Matrix4 = Sequence[Sequence[float]]
MeshTransform = Union[Transform3, Matrix4]
NormalIndices = tuple[Union[int, None], Union[int, None], Union[int, None]]

_NO_NORMALS: NormalIndices = (None, None, None)


def _vec(v: Sequence[float]) -> Vec3:
    x, y, z = v
    return (float(x), float(y), float(z))


def _normalize(v: Vec3) -> Vec3:
    n = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if n == 0:
        return v
    return (v[0] / n, v[1] / n, v[2] / n)


def _mult3d(m: Matrix4, v: Vec3) -> Vec3:
    """Multiply a homogeneous matrix by a point, dividing by w when needed."""
    x, y, z = v
    out = [row[0] * x + row[1] * y + row[2] * z + row[3] for row in m]
    if len(out) > 3 and out[3] not in (0.0, 1.0):
        w = out[3]
        return (out[0] / w, out[1] / w, out[2] / w)
    return (out[0], out[1], out[2])


def _strip_translation(m: Matrix4) -> Matrix4:
    return tuple(
        (row[0], row[1], row[2], 0.0) if r < 3 else tuple(row)
        for r, row in enumerate(m)
    )


def _contains(lo: Sequence[float], hi: Sequence[float], p: Vec3) -> bool:
    return all(a <= c <= b for a, b, c in zip(lo, hi, p))


@dataclass(frozen=True)
class Tri:
    """A triangle: three vertex indices, optional normal indices and user data."""

    vidx: tuple[int, int, int]
    nidx: NormalIndices = _NO_NORMALS
    fdata: int | None = None

    @property
    def has_normals(self) -> bool:
        return all(n is not None for n in self.nidx)

    def _offset(self, voffs: int, noffs: int) -> Tri:
        return replace(
            self,
            vidx=tuple(v + voffs for v in self.vidx),  # type: ignore[arg-type]
            nidx=tuple(None if n is None else n + noffs for n in self.nidx),  # type: ignore[arg-type]
        )


@dataclass
class SplitInfo:
    """Group assignment of each face produced by :meth:`TriMesh3.split_xy`."""

    fmask: list[int] = field(default_factory=list)
    ngroups: int = 0


class TriMesh3:
    """A triangle mesh of vertices, normals and faces."""

    def __init__(self) -> None:
        self.verts: list[Vec3] = []
        self.normals: list[Vec3] = []
        self.faces: list[Tri] = []

    def clear(self) -> None:
        """Remove all vertices, normals and faces."""
        self.verts.clear()
        self.normals.clear()
        self.faces.clear()

    def centroid(self, faceidx: int) -> Vec3:
        """Average of the three vertices of a face."""
        return self._face_centroid(self.faces[faceidx])

    def _face_centroid(self, face: Tri) -> Vec3:
        a, b, c = (self.verts[i] for i in face.vidx)
        return ((a[0] + b[0] + c[0]) / 3, (a[1] + b[1] + c[1]) / 3, (a[2] + b[2] + c[2]) / 3)

    def is_empty(self) -> bool:
        """True if the mesh has no vertices or no faces."""
        return not self.verts or not self.faces

    def add_vertex(self, v: Sequence[float]) -> int:
        """Append a vertex and return its index."""
        self.verts.append(_vec(v))
        return len(self.verts) - 1

    def add_normal(self, n: Sequence[float]) -> int:
        """Append a normal and return its index."""
        self.normals.append(_vec(n))
        return len(self.normals) - 1

    def add_mesh(self, other: TriMesh3, xform: MeshTransform | None = None) -> None:
        """Append another mesh, optionally transformed, re-indexing its faces.

        ``xform`` is a :class:`Transform3` or a 4x4 homogeneous matrix.
        """
        voffs = len(self.verts)
        noffs = len(self.normals)
        if xform is None:
            self.verts.extend(other.verts)
            self.normals.extend(other.normals)
        elif isinstance(xform, Transform3):
            rot = Transform3(xform.rotation)
            self.verts.extend(xform.transform_fwd(v) for v in other.verts)
            self.normals.extend(rot.transform_fwd(n) for n in other.normals)
        else:
            linear = _strip_translation(xform)
            self.verts.extend(_mult3d(xform, v) for v in other.verts)
            self.normals.extend(_mult3d(linear, n) for n in other.normals)
        self.faces.extend(f._offset(voffs, noffs) for f in other.faces)

    def add_triangle(
        self,
        i: int,
        j: int,
        k: int,
        normals: Sequence[int] | None = None,
        flip: bool = False,
        fdata: int | None = None,
    ) -> int:
        """Append a face and return its index; ``flip`` reverses its winding."""
        a, b, c = normals if normals is not None else _NO_NORMALS
        if flip:
            tri = Tri((k, j, i), (c, b, a), fdata)
        else:
            tri = Tri((i, j, k), (a, b, c), fdata)
        self.faces.append(tri)
        return len(self.faces) - 1

    # ------------------------------------------------------------------
    # primitives

    @staticmethod
    def box(length: float, width: float, height: float) -> TriMesh3:
        """An axis-aligned box centred at the origin."""
        g = TriMesh3()
        l2, w2, h2 = length * 0.5, width * 0.5, height * 0.5
        for v in (
            (l2, w2, h2), (-l2, w2, h2), (l2, w2, -h2), (-l2, w2, -h2),
            (l2, -w2, h2), (-l2, -w2, h2), (l2, -w2, -h2), (-l2, -w2, -h2),
        ):
            g.add_vertex(v)
        for tri in (
            (1, 0, 2), (1, 2, 3), (0, 4, 6), (0, 6, 2), (7, 4, 5), (7, 6, 4),
            (3, 5, 1), (3, 7, 5), (5, 0, 1), (5, 4, 0), (6, 7, 3), (6, 3, 2),
        ):
            g.add_triangle(*tri)
        return g

    @staticmethod
    def capped_box(
        length: float, width: float, height: float, slices: int = 2
    ) -> TriMesh3:
        """A box whose front and rear ends are half cylinders along the y axis."""
        g = TriMesh3()
        l2, w2, h2 = length * 0.5, width * 0.5, height * 0.5
        slices = max(slices, 2)

        for sy in (1, -1):
            y = sy * w2
            mf = g.add_vertex((l2, y, 0))
            mr = g.add_vertex((-l2, y, 0))
            uf = g.add_vertex((l2, y, h2))
            ur = g.add_vertex((-l2, y, h2))
            for i in range(1, slices):
                angle = i * math.pi / slices
                g.add_vertex((-l2 - h2 * math.sin(angle), y, h2 * math.cos(angle)))
            lr = g.add_vertex((-l2, y, -h2))
            lf = g.add_vertex((l2, y, -h2))
            for i in range(1, slices):
                angle = i * math.pi / slices
                g.add_vertex((l2 + h2 * math.sin(angle), y, -h2 * math.cos(angle)))

            flip = sy == -1
            g.add_triangle(ur, uf, mf, flip=flip)
            g.add_triangle(ur, mf, mr, flip=flip)
            g.add_triangle(mr, mf, lf, flip=flip)
            g.add_triangle(mr, lf, lr, flip=flip)
            for i in range(slices):
                g.add_triangle(mr, ur + i + 1, ur + i, flip=flip)
                if i == slices - 1:
                    g.add_triangle(mf, uf, lf + i, flip=flip)
                else:
                    g.add_triangle(mf, lf + i + 1, lf + i, flip=flip)

        g._stitch_sides(first=2)
        return g

    @staticmethod
    def turn_box(
        length: float,
        extra: float,
        width: float,
        height: float,
        slices1: int = 2,
        slices2: int = 2,
    ) -> TriMesh3:
        """A box with a rounded front and a quarter-elliptic rear sweep."""
        g = TriMesh3()
        l2, w2, h2 = length * 0.5, width * 0.5, height * 0.5
        slices1 = max(slices1, 2)
        slices2 = max(slices2, 2)

        for sy in (1, -1):
            y = sy * w2
            mf = g.add_vertex((l2, y, 0))
            uf = g.add_vertex((l2, y, h2))
            ur = g.add_vertex((-l2, y, h2))
            for i in range(1, slices2 + 1):
                angle = i * math.pi * 0.5 / slices2
                g.add_vertex(
                    (-l2 - extra * math.sin(angle), y, -h2 + height * math.cos(angle))
                )
            lr = g.add_vertex((-l2, y, -h2))
            lf = g.add_vertex((l2, y, -h2))
            for i in range(1, slices1):
                angle = i * math.pi / slices1
                g.add_vertex((l2 + h2 * math.sin(angle), y, -h2 * math.cos(angle)))

            flip = sy == -1
            g.add_triangle(mf, ur, uf, flip=flip)
            g.add_triangle(mf, lr, ur, flip=flip)
            g.add_triangle(mf, lf, lr, flip=flip)
            for i in range(slices2):
                g.add_triangle(lr, ur + i + 1, ur + i, flip=flip)
            for i in range(slices1):
                if i == slices1 - 1:
                    g.add_triangle(mf, uf, lf + i, flip=flip)
                else:
                    g.add_triangle(mf, lf + i + 1, lf + i, flip=flip)

        g._stitch_sides(first=1)
        return g

    def _stitch_sides(self, first: int) -> None:
        """Join two mirrored boundary rings starting at index ``first``."""
        nv = len(self.verts) // 2
        ring = nv - first
        for i in range(ring):
            nxt = (i + 1) % ring
            self.add_triangle(first + i, first + nxt, first + i + nv)
            self.add_triangle(first + nxt, first + nxt + nv, first + i + nv)

    @staticmethod
    def cylinder(r: float, h: float, slices: int = 4) -> TriMesh3:
        """A closed cylinder along z from 0 to ``h``."""
        g = TriMesh3()
        slices = max(slices, 4)
        for sz in (0, 1):
            ctr = g.add_vertex((0, 0, sz * h))
            for i in range(slices):
                angle = i * 2 * math.pi / slices
                vidx = g.add_vertex((r * math.cos(angle), r * math.sin(angle), sz * h))
                nxt = ctr + 1 if i == slices - 1 else vidx + 1
                g.add_triangle(ctr, vidx, nxt, flip=not sz)
        g._stitch_sides(first=1)
        return g

    @staticmethod
    def sphere(r: float, slices: int = 3, stacks: int = 2) -> TriMesh3:
        """A UV sphere centred at the origin with poles on the z axis."""
        g = TriMesh3()
        slices = max(slices, 3)
        stacks = max(stacks, 2)

        g.add_vertex((0, 0, r))
        for i in range(1, stacks):
            phi = i * math.pi / stacks
            cp, sp = math.cos(phi), math.sin(phi)
            for j in range(slices):
                theta = j * 2.0 * math.pi / slices
                vi = g.add_vertex((r * sp * math.cos(theta), r * sp * math.sin(theta), r * cp))
                offs = 1 if j < slices - 1 else -(slices - 1)
                if i == 1:
                    g.add_triangle(0, vi, vi + offs)
                else:
                    g.add_triangle(vi, vi - slices + offs, vi - slices)
                    g.add_triangle(vi, vi + offs, vi - slices + offs)

        end = g.add_vertex((0, 0, -r))
        for j in range(slices):
            v0 = end - slices + j
            offs = 1 if j < slices - 1 else -(slices - 1)
            g.add_triangle(end, v0 + offs, v0)
        return g

    @staticmethod
    def extrude(
        points: Sequence[Sequence[float]],
        dist: float,
        centroid: Sequence[float] | None = None,
    ) -> TriMesh3:
        """Extrude a counter-clockwise xy polygon, fanned about ``centroid``.

        The centroid defaults to the mean of the points.
        """
        pts = [(float(p[0]), float(p[1])) for p in points]
        n_ext = len(pts)
        if centroid is None:
            centroid = (
                sum(p[0] for p in pts) / n_ext,
                sum(p[1] for p in pts) / n_ext,
            )
        pts.append((float(centroid[0]), float(centroid[1])))
        indices: list[int] = []
        for i in range(n_ext):
            indices.extend((i, (i + 1) % n_ext, n_ext))
        return TriMesh3.extrude_indexed(pts, indices, list(range(n_ext)), dist)

    @staticmethod
    def extrude_indexed(
        points: Sequence[Sequence[float]],
        indices: Sequence[int],
        exterior: Sequence[int],
        dist: float,
    ) -> TriMesh3:
        """Extrude a triangulated xy region symmetrically about z = 0.

        The first ``len(exterior)`` points form the outer boundary in order.
        """
        dist = abs(dist)
        rval = TriMesh3()
        npts = len(points)
        for layer, z in enumerate((-0.5 * dist, 0.5 * dist)):
            for p in points:
                rval.add_vertex((p[0], p[1], z))
            base = layer * npts
            for a, b, c in zip(indices[0::3], indices[1::3], indices[2::3]):
                rval.add_triangle(a + base, b + base, c + base, flip=(layer == 0))

        n_ext = len(exterior)
        for e in range(n_ext):
            i00 = e
            i01 = (e + 1) % n_ext
            i10 = i00 + npts
            i11 = i01 + npts
            rval.add_triangle(i00, i01, i10)
            rval.add_triangle(i01, i11, i10)
        return rval

    @staticmethod
    def lathe(points: Sequence[Sequence[float]], slices: int) -> TriMesh3:
        """Revolve an (x, y) profile about the y axis.

        A profile starting and ending on the axis gives a closed surface.
        """
        g = TriMesh3()
        if len(points) < 2:
            return g

        closed = points[0][0] == 0 and points[-1][0] == 0
        vs = js = 0
        np_ = len(points)
        if closed:
            g.add_vertex((points[0][0], points[0][1], 0))
            g.add_vertex((points[-1][0], points[-1][1], 0))
            vs, js, np_ = 2, 1, np_ - 2

        for i in range(slices):
            ii = (i + 1) % slices
            t = Transform3.ry(2 * math.pi * i / slices)
            if closed:
                g.add_triangle(0, vs + np_ * ii, vs + np_ * i)
            for j in range(np_):
                jj = (j + 1) % np_
                p = points[j + js]
                g.add_vertex(t.transform_fwd((p[0], p[1], 0)))
                v00 = vs + i * np_ + j
                v01 = vs + i * np_ + jj
                v10 = vs + ii * np_ + j
                v11 = vs + ii * np_ + jj
                if closed and j == np_ - 1:
                    continue
                g.add_triangle(v00, v10, v11)
                g.add_triangle(v00, v11, v01)
            if closed:
                g.add_triangle(1, vs + np_ * i + np_ - 1, vs + np_ * ii + np_ - 1)
        return g

    # ------------------------------------------------------------------
    # transforms and queries

    def transformed(self, xform: MeshTransform) -> TriMesh3:
        """Return a transformed copy of this mesh."""
        dst = TriMesh3()
        dst.add_mesh(self, xform)
        return dst

    def apply_transform(self, xform: MeshTransform) -> None:
        """Transform the mesh in place.

        With a matrix, normals are re-normalised after the linear part is applied.
        """
        if isinstance(xform, Transform3):
            rot = Transform3(xform.rotation)
            self.verts = [xform.transform_fwd(v) for v in self.verts]
            self.normals = [rot.transform_fwd(n) for n in self.normals]
        else:
            linear = _strip_translation(xform)
            self.verts = [_mult3d(xform, v) for v in self.verts]
            self.normals = [_normalize(_mult3d(linear, n)) for n in self.normals]

    def compute_bbox(self) -> Box3 | None:
        """Return ``(min corner, max corner)`` of the vertices, or None if there are none."""
        if not self.verts:
            return None
        xs, ys, zs = zip(*self.verts)
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def split_xy(
        self, max_tris: int, max_splits: int, bbox: Box3 | None = None
    ) -> SplitInfo:
        """Group faces by recursively halving the box in x, then y, alternately.

        A group is split while it holds more than ``max_tris`` faces and fewer
        than ``max_splits`` levels have been made.
        """
        if self.is_empty():
            return SplitInfo()
        if bbox is None:
            bbox = self.compute_bbox()
        assert bbox is not None

        fmask = [0] * len(self.faces)
        counts = [len(self.faces)]
        centroids = [self._face_centroid(f) for f in self.faces]

        def recurse(lo: Vec3, hi: Vec3, axis: int, depth: int, which: int) -> None:
            if depth >= max_splits or counts[which] <= max_tris:
                return
            mid = 0.5 * (lo[axis] + hi[axis])
            left_hi = tuple(mid if a == axis else c for a, c in enumerate(hi))
            right_lo = tuple(mid if a == axis else c for a, c in enumerate(lo))

            nw = len(counts)
            counts.append(0)
            for idx, (group, c) in enumerate(zip(fmask, centroids)):
                if group == which and _contains(right_lo, hi, c):
                    counts[which] -= 1
                    counts[nw] += 1
                    fmask[idx] = nw

            recurse(lo, left_hi, 1 - axis, depth + 1, which)  # type: ignore[arg-type]
            recurse(right_lo, hi, 1 - axis, depth + 1, nw)  # type: ignore[arg-type]

        recurse(bbox[0], bbox[1], 0, 0, 0)
        return SplitInfo(fmask, len(counts))

    def compact(self) -> None:
        """Drop vertices and normals no face uses, renumbering in order of first use."""
        new_vidx: dict[int, int] = {}
        new_nidx: dict[int, int] = {}
        new_verts: list[Vec3] = []
        new_normals: list[Vec3] = []

        def remap_vertex(old: int) -> int:
            if old not in new_vidx:
                new_vidx[old] = len(new_verts)
                new_verts.append(self.verts[old])
            return new_vidx[old]

        def remap_normal(old: int | None) -> int | None:
            if old is None:
                return None
            if old not in new_nidx:
                new_nidx[old] = len(new_normals)
                new_normals.append(self.normals[old])
            return new_nidx[old]

        new_faces = []
        for face in self.faces:
            vidx = []
            nidx = []
            for v, n in zip(face.vidx, face.nidx):
                vidx.append(remap_vertex(v))
                nidx.append(remap_normal(n))
            new_faces.append(replace(face, vidx=tuple(vidx), nidx=tuple(nidx)))

        self.faces = new_faces
        self.verts = new_verts
        self.normals = new_normals