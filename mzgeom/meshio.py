"""Reading and writing triangle meshes as OBJ, VRML 2.0 and binary STL."""

from __future__ import annotations

import os
import re
import string
import struct
from typing import BinaryIO, TextIO, Union

from .strutils import lower
from .trimesh import TriMesh3, Tri

PathOrStream = Union[str, "os.PathLike[str]", TextIO]


class MeshFormatError(ValueError):
    """Raised when mesh data cannot be parsed."""


# ----------------------------------------------------------------------
# OBJ

# Patterns follow scanf semantics: leading whitespace is skipped before a
# number, a blank in the format matches any run of whitespace, and trailing
# text is ignored.  The lookaheads stop the regex from splitting a number.
_SEP = r"\s*"
_INT = r"\s*([+-]?\d+)(?!\d)"
_FLOAT = (
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))"
    r"(?![0-9.])"
)

_VEC_RE = re.compile(_SEP.join([_FLOAT] * 3), re.IGNORECASE)
_FACE_VN_RE = re.compile(_SEP.join([_INT + "//" + _INT] * 3))
_FACE_VT_RE = re.compile(_SEP.join([_INT + "/" + _INT] * 3))
_FACE_VTN_RE = re.compile(_SEP.join([_INT + "/" + _INT + "/" + _INT] * 3))
_FACE_V_RE = re.compile(_SEP.join([_INT] * 3))


def _zero_based(values: tuple[str, ...]) -> tuple[int, int, int]:
    indices = tuple(int(v) - 1 for v in values)
    if any(i < 0 for i in indices):
        raise MeshFormatError("face index out of range")
    return indices  # type: ignore[return-value]


def _parse_face(rest: str) -> tuple[tuple[int, int, int], tuple[int, int, int] | None]:
    if m := _FACE_VN_RE.match(rest):
        i, a, j, b, k, c = m.groups()
        return _zero_based((i, j, k)), _zero_based((a, b, c))
    if m := _FACE_VT_RE.match(rest):
        i, _, j, _, k, _ = m.groups()
        return _zero_based((i, j, k)), None
    if m := _FACE_VTN_RE.match(rest):
        i, _, a, j, _, b, k, _, c = m.groups()
        return _zero_based((i, j, k)), _zero_based((a, b, c))
    if m := _FACE_V_RE.match(rest):
        return _zero_based(m.groups()), None
    raise MeshFormatError("error parsing shape!")


def parse_obj(stream: TextIO) -> TriMesh3:
    """Read vertices, normals and triangular faces from OBJ text.

    Texture coordinates, comments and other statements are skipped.
    """
    mesh = TriMesh3()
    for line in stream.read().split("\n"):
        tag = line[:1]
        if tag == "v":
            kind = line[1:2]
            if kind == " ":
                is_normal, rest = False, line[2:]
            elif kind == "n":
                if line[2:3] != " ":
                    raise MeshFormatError("error parsing normal!")
                is_normal, rest = True, line[3:]
            else:
                continue
            m = _VEC_RE.match(rest)
            if m is None:
                raise MeshFormatError("error parsing vertex/normal data!")
            vec = tuple(float(g) for g in m.groups())
            if is_normal:
                mesh.add_normal(vec)
            else:
                mesh.add_vertex(vec)
        elif tag == "f":
            if line[1:2] != " ":
                raise MeshFormatError("error parsing face!")
            vidx, nidx = _parse_face(line[2:])
            mesh.add_triangle(*vidx, normals=nidx)
    return mesh


def _face_line(face: Tri) -> str:
    if face.has_normals:
        corners = (f"{v + 1}//{n + 1}" for v, n in zip(face.vidx, face.nidx))  # type: ignore[operator]
        return "f " + " ".join(corners) + "\n"
    return "f " + " ".join(str(v + 1) for v in face.vidx) + "\n"


def _write_obj(mesh: TriMesh3, stream: TextIO) -> None:
    for v in mesh.verts:
        stream.write("v %f %f %f\n" % v)
    stream.write("\n")
    for n in mesh.normals:
        stream.write("vn %f %f %f\n" % n)
    stream.write("\n")
    for face in mesh.faces:
        stream.write(_face_line(face))


def save_obj(mesh: TriMesh3, stream: PathOrStream) -> None:
    """Write ``mesh`` as OBJ text to a stream or to a file path."""
    if isinstance(stream, (str, os.PathLike)):
        with open(stream, "w", encoding="ascii") as out:
            _write_obj(mesh, out)
    else:
        _write_obj(mesh, stream)


# ----------------------------------------------------------------------
# VRML 2.0

_VRML_HEADER = "#VRML V2.0 utf8"
_WS = " \t\n\v\f\r"
_IDENT_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_MAX_IDENT = 1023
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_LONG_RE = re.compile(r"[+-]?\d+")


def _is_digit(ch: str) -> bool:
    return ch != "" and ch in string.digits


class _VrmlParser:
    """Recursive-descent reader for the IndexedFaceSet subset of VRML 2.0."""

    def __init__(self, text: str, mesh: TriMesh3) -> None:
        self._text = text
        self._pos = 0
        self._mesh = mesh

    def parse(self) -> None:
        self._parse_header()
        while self._parse_node():
            pass

    def _peek(self) -> str:
        return self._text[self._pos:self._pos + 1]

    def _skip_ws(self) -> None:
        text, n = self._text, len(self._text)
        while self._pos < n and text[self._pos] in _WS:
            self._pos += 1

    def _parse_header(self) -> None:
        end = self._text.find("\n")
        if end < 0:
            line, self._pos = self._text, len(self._text)
        else:
            line, self._pos = self._text[:end], end + 1
        if line != _VRML_HEADER:
            raise MeshFormatError(f"Bad vrml header: {line}")

    def _parse_identifier(self) -> str:
        self._skip_ws()
        m = _IDENT_RE.match(self._text, self._pos)
        if m is None:
            return ""
        if m.end() - m.start() >= _MAX_IDENT:
            raise MeshFormatError("identifier too long")
        self._pos = m.end()
        return m.group()

    def _match_identifier(self, ident: str) -> None:
        if self._parse_identifier() != ident:
            raise MeshFormatError(f"Expected {ident}")

    def _parse_token(self, c: str) -> None:
        self._skip_ws()
        ch = self._peek()
        if ch != c:
            raise MeshFormatError(f"Expected {c} but got {ch or 'EOF'}")
        self._pos += 1

    def _read(self, pattern: re.Pattern[str]) -> str | None:
        self._skip_ws()
        m = pattern.match(self._text, self._pos)
        if m is None:
            return None
        self._pos = m.end()
        return m.group()

    def _ignore(self, open_: str, close: str) -> None:
        self._parse_token(open_)
        depth = 1
        while depth:
            if self._pos >= len(self._text):
                raise MeshFormatError(f"EOF waiting for closing {close}")
            ch = self._text[self._pos]
            self._pos += 1
            if ch == open_:
                depth += 1
            elif ch == close:
                depth -= 1

    def _parse_transform(self) -> None:
        self._parse_token("{")
        self._match_identifier("children")
        self._parse_token("[")
        while self._parse_node():
            pass
        self._parse_token("]")
        self._parse_token("}")

    def _parse_shape(self) -> None:
        self._parse_token("{")
        while True:
            field_name = self._parse_identifier()
            if not field_name:
                break
            if field_name in ("appearance", "geometry"):
                self._parse_node()
        self._parse_token("}")

    def _parse_points(self) -> None:
        self._match_identifier("Coordinate")
        self._parse_token("{")
        self._match_identifier("point")
        self._parse_token("[")
        while True:
            self._skip_ws()
            ch = self._peek()
            if ch not in ("-", ".") and not _is_digit(ch):
                break
            coords = [self._read(_NUMBER_RE) for _ in range(3)]
            if any(c is None for c in coords):
                raise MeshFormatError("Error parsing coordinates")
            self._parse_token(",")
            self._mesh.add_vertex(tuple(float(c) for c in coords))  # type: ignore[arg-type]
        self._parse_token("]")
        self._parse_token("}")

    def _parse_coord_index(self, offset: int) -> None:
        self._parse_token("[")
        while True:
            self._skip_ws()
            if not _is_digit(self._peek()):
                break
            indices: list[int] = []
            for i in range(4):
                token = self._read(_LONG_RE)
                if token is None:
                    break
                self._parse_token(",")
                value = int(token)
                indices.append(value + offset if i != 3 else value)
            if len(indices) != 4:
                raise MeshFormatError("Error parsing indices")
            if indices[3] != -1:
                raise MeshFormatError("Non-triangular geometry")
            self._mesh.add_triangle(*indices[:3])
        self._parse_token("]")

    def _parse_indexed_face_set(self) -> None:
        self._parse_token("{")
        offset = len(self._mesh.verts)
        while True:
            field_name = self._parse_identifier()
            if not field_name:
                break
            if field_name == "coord":
                self._parse_points()
            elif field_name == "coordIndex":
                self._parse_coord_index(offset)
        self._parse_token("}")

    def _parse_node(self) -> bool:
        kind = self._parse_identifier()
        if not kind:
            return False
        if kind == "DEF":
            self._parse_identifier()
            kind = self._parse_identifier()
        if kind == "Transform":
            self._parse_transform()
        elif kind == "Shape":
            self._parse_shape()
        elif kind in ("IndexedFaceSet", "Coordinate"):
            self._parse_indexed_face_set()
        elif kind == "Appearance":
            self._ignore("{", "}")
        else:
            raise MeshFormatError(f"Invalid node type: {kind}")
        return True


def parse_wrl(stream: TextIO) -> TriMesh3:
    """Read the triangular IndexedFaceSet geometry of a VRML 2.0 file."""
    mesh = TriMesh3()
    _VrmlParser(stream.read(), mesh).parse()
    return mesh


# ----------------------------------------------------------------------
# binary STL

_STL_ASCII_MAGIC = b"solid "
_COUNT = struct.Struct("<I")
_FACET = struct.Struct("<12f")


def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise MeshFormatError(f"error reading {what}!")
    return data


def parse_stl(stream: BinaryIO) -> TriMesh3:
    """Read a binary STL file, merging vertices with identical coordinates.

    ASCII STL files are rejected.
    """
    first = _read_exact(stream, 6, "first 6 bytes of STL file")
    if first == _STL_ASCII_MAGIC:
        raise MeshFormatError("can't parse ASCII STL files yet!")
    _read_exact(stream, 80 - 6, "binary header")
    (count,) = _COUNT.unpack(_read_exact(stream, _COUNT.size, "count"))

    mesh = TriMesh3()
    lookup: dict[tuple[float, ...], int] = {}
    for _ in range(count):
        values = _FACET.unpack(_read_exact(stream, _FACET.size, "vertex"))
        corners = []
        for p in range(1, 4):
            vert = values[3 * p:3 * p + 3]
            if vert not in lookup:
                lookup[vert] = mesh.add_vertex(vert)
            corners.append(lookup[vert])
        mesh.add_triangle(*corners)
        _read_exact(stream, 2, "attribute bytes")
    return mesh


# ----------------------------------------------------------------------


def load(filename: str | os.PathLike[str]) -> TriMesh3:
    """Read a mesh, choosing the format from the file extension (case-insensitive)."""
    name = os.fspath(filename)
    pos = name.rfind(".")
    if pos < 0:
        raise MeshFormatError(f"no extension in mesh file name {name}")
    extension = lower(name[pos + 1:])
    if extension == "obj":
        with open(name, encoding="utf-8", errors="replace") as text:
            return parse_obj(text)
    if extension == "wrl":
        with open(name, encoding="utf-8", errors="replace") as text:
            return parse_wrl(text)
    if extension == "stl":
        with open(name, "rb") as binary:
            return parse_stl(binary)
    raise MeshFormatError(f"bad extension '{extension}'")