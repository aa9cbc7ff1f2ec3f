from mzgeom.cli import OUTPUT_NAME, main
from mzgeom.meshio import load, parse_wrl

WRL = """#VRML V2.0 utf8
Shape {
  geometry IndexedFaceSet {
    coord Coordinate { point [ 0 0 0, 1 0 0, 0 1 0, ] }
    coordIndex [ 0, 1, 2, -1, ]
  }
}
"""


def test_main_converts_wrl_to_obj(tmp_path, monkeypatch):
    src = tmp_path / "mesh.wrl"
    src.write_text(WRL)
    monkeypatch.chdir(tmp_path)
    assert main([str(src)]) == 0
    written = load(tmp_path / OUTPUT_NAME)
    with open(src) as stream:
        expected = parse_wrl(stream)
    assert written.verts == expected.verts
    assert [f.vidx for f in written.faces] == [f.vidx for f in expected.faces]


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_too_many_arguments(capsys):
    assert main(["a.wrl", "b.wrl"]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_bad_file(tmp_path, monkeypatch, capsys):
    src = tmp_path / "bad.wrl"
    src.write_text("not vrml\n")
    monkeypatch.chdir(tmp_path)
    assert main([str(src)]) == 1
    assert "Bad vrml header" in capsys.readouterr().err
    assert not (tmp_path / OUTPUT_NAME).exists()


def test_main_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([str(tmp_path / "missing.wrl")]) == 1
    assert not (tmp_path / OUTPUT_NAME).exists()