import io
import struct

import pytest

from mzgeom.meshio import (
    MeshFormatError,
    load,
    parse_obj,
    parse_stl,
    parse_wrl,
    save_obj,
)
from mzgeom.trimesh import TriMesh3

WRL = """#VRML V2.0 utf8
DEF Obj Transform {
  children [
    Shape {
      appearance Appearance { material Material { diffuseColor 1 0 0 } }
      geometry IndexedFaceSet {
        coord Coordinate {
          point [
            0 0 0,
            1 0 0,
            0 1 0,
            0 0 1,
          ]
        }
        coordIndex [
          0, 1, 2, -1,
          0, 2, 3, -1,
        ]
      }
    }
  ]
}
"""

A = (0.0, 0.0, 0.0)
B = (1.0, 0.0, 0.0)
C = (0.0, 1.0, 0.0)
D = (1.0, 1.0, 0.0)


def _stl(triangles, header=b"binary" + b"\0" * 74):
    out = header + struct.pack("<I", len(triangles))
    for tri in triangles:
        coords = [c for v in tri for c in v]
        out += struct.pack("<12f", 0.0, 0.0, 1.0, *coords) + b"\0\0"
    return out


def test_parse_obj_vertices_and_plain_faces():
    text = "# comment\nv 0 0 0\nv 1 0 0\nv 0 1 0\nvt 0.5 0.5\n\nf 1 2 3\n"
    mesh = parse_obj(io.StringIO(text))
    assert mesh.verts == [A, B, C]
    assert [f.vidx for f in mesh.faces] == [(0, 1, 2)]
    assert mesh.faces[0].nidx == (None, None, None)


def test_parse_obj_number_forms():
    mesh = parse_obj(io.StringIO("v -1.5e1 .25 +2\n"))
    assert mesh.verts == [(-15.0, 0.25, 2.0)]


@pytest.mark.parametrize(
    "line, vidx, nidx",
    [
        ("f 1//3 2//2 3//1", (0, 1, 2), (2, 1, 0)),
        ("f 1/1 2/2 3/3", (0, 1, 2), (None, None, None)),
        ("f 1/5/3 2/6/2 3/7/1", (0, 1, 2), (2, 1, 0)),
        ("f 3 1 2", (2, 0, 1), (None, None, None)),
    ],
)
def test_parse_obj_face_forms(line, vidx, nidx):
    text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nvn 0 0 1\nvn 0 1 0\nvn 1 0 0\n" + line + "\n"
    mesh = parse_obj(io.StringIO(text))
    assert mesh.normals == [(0.0, 0.0, 1.0), (0.0, 1.0, 0.0), (1.0, 0.0, 0.0)]
    assert mesh.faces[0].vidx == vidx
    assert mesh.faces[0].nidx == nidx


@pytest.mark.parametrize(
    "text, message",
    [
        ("vn1 2 3\n", "error parsing normal"),
        ("v 1 2\n", "error parsing vertex/normal data"),
        ("fx 1 2 3\n", "error parsing face"),
        ("f a b c\n", "error parsing shape"),
        ("f 0 1 2\n", "face index out of range"),
    ],
)
def test_parse_obj_errors(text, message):
    with pytest.raises(MeshFormatError, match=message):
        parse_obj(io.StringIO(text))


def test_save_obj_exact_text():
    mesh = TriMesh3()
    for v in (A, B, C):
        mesh.add_vertex(v)
    mesh.add_normal((0.0, 0.0, 1.0))
    mesh.add_triangle(0, 1, 2, normals=(0, 0, 0))
    out = io.StringIO()
    save_obj(mesh, out)
    assert out.getvalue() == (
        "v 0.000000 0.000000 0.000000\n"
        "v 1.000000 0.000000 0.000000\n"
        "v 0.000000 1.000000 0.000000\n"
        "\n"
        "vn 0.000000 0.000000 1.000000\n"
        "\n"
        "f 1//1 2//1 3//1\n"
    )


def test_obj_round_trip_box():
    box = TriMesh3.box(1.0, 2.0, 3.0)
    out = io.StringIO()
    save_obj(box, out)
    back = parse_obj(io.StringIO(out.getvalue()))
    assert back.verts == box.verts
    assert [f.vidx for f in back.faces] == [f.vidx for f in box.faces]
    assert back.normals == []


def test_obj_round_trip_through_file(tmp_path):
    mesh = TriMesh3()
    for v in (A, B, C, D):
        mesh.add_vertex(v)
    mesh.add_normal((0.0, 0.0, 1.0))
    mesh.add_triangle(0, 1, 2, normals=(0, 0, 0))
    mesh.add_triangle(1, 3, 2)
    path = tmp_path / "mesh.obj"
    save_obj(mesh, path)
    back = load(path)
    assert back.verts == mesh.verts
    assert back.normals == mesh.normals
    assert [(f.vidx, f.nidx) for f in back.faces] == [
        (f.vidx, f.nidx) for f in mesh.faces
    ]


def test_parse_wrl_sample():
    mesh = parse_wrl(io.StringIO(WRL))
    assert mesh.verts == [A, B, C, (0.0, 0.0, 1.0)]
    assert [f.vidx for f in mesh.faces] == [(0, 1, 2), (0, 2, 3)]


def test_parse_wrl_offsets_second_face_set():
    body = WRL.split("\n", 1)[1]
    mesh = parse_wrl(io.StringIO("#VRML V2.0 utf8\n" + body + body))
    assert len(mesh.verts) == 8
    assert [f.vidx for f in mesh.faces] == [
        (0, 1, 2),
        (0, 2, 3),
        (4, 5, 6),
        (4, 6, 7),
    ]


@pytest.mark.parametrize(
    "text, message",
    [
        ("#VRML V1.0 ascii\n", "Bad vrml header"),
        ("#VRML V2.0 utf8\nSphere { }\n", "Invalid node type: Sphere"),
        ("#VRML V2.0 utf8\nAppearance { material {\n", "EOF waiting for closing"),
        (
            "#VRML V2.0 utf8\nIndexedFaceSet { coord Coordinate { point [ 0 0 0 ] } }\n",
            "Expected ,",
        ),
        (
            "#VRML V2.0 utf8\nIndexedFaceSet { coordIndex [ 0, 1, 2, 3, ] }\n",
            "Non-triangular geometry",
        ),
        (
            "#VRML V2.0 utf8\nIndexedFaceSet { coordIndex [ 0, 1, ] }\n",
            "Error parsing indices",
        ),
        ("#VRML V2.0 utf8\nTransform { kids [ ] }\n", "Expected children"),
    ],
)
def test_parse_wrl_errors(text, message):
    with pytest.raises(MeshFormatError, match=message):
        parse_wrl(io.StringIO(text))


def test_parse_stl_merges_shared_vertices():
    data = _stl([(A, B, C), (B, D, C)])
    mesh = parse_stl(io.BytesIO(data))
    assert mesh.verts == [A, B, C, D]
    assert [f.vidx for f in mesh.faces] == [(0, 1, 2), (1, 3, 2)]


def test_parse_stl_empty():
    mesh = parse_stl(io.BytesIO(_stl([])))
    assert mesh.is_empty()
    assert mesh.verts == []


def test_parse_stl_rejects_ascii():
    with pytest.raises(MeshFormatError, match="ASCII"):
        parse_stl(io.BytesIO(b"solid cube\nendsolid cube\n" + b"\0" * 80))


@pytest.mark.parametrize("cut", [3, 40, 82, 100, 5])
def test_parse_stl_truncated(cut):
    data = _stl([(A, B, C)])
    with pytest.raises(MeshFormatError, match="error reading"):
        parse_stl(io.BytesIO(data[: len(data) - cut] if cut != 5 else data[:5]))


def test_load_dispatches_on_extension(tmp_path):
    (tmp_path / "a.OBJ").write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\n")
    (tmp_path / "b.wrl").write_text(WRL)
    (tmp_path / "c.stl").write_bytes(_stl([(A, B, C)]))
    assert load(tmp_path / "a.OBJ").verts == [A, B, C]
    assert len(load(tmp_path / "b.wrl").faces) == 2
    assert [f.vidx for f in load(tmp_path / "c.stl").faces] == [(0, 1, 2)]


def test_load_bad_extension(tmp_path):
    path = tmp_path / "mesh.ply"
    path.write_text("ply\n")
    with pytest.raises(MeshFormatError, match="bad extension 'ply'"):
        load(path)


def test_load_without_extension():
    with pytest.raises(MeshFormatError, match="no extension"):
        load("mesh")