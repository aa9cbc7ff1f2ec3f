# mzgeom

A small toolkit for 3D geometry work, written in plain Python with no
third-party dependencies.

## Modules

- `mzgeom.trimesh` – `TriMesh3`, an indexed triangle mesh of `verts`,
  `normals` and `faces` (`Tri` records). It has primitive builders
  (`box`, `capped_box`, `turn_box`, `cylinder`, `sphere`, `extrude`,
  `extrude_indexed`, `lathe`), `add_vertex`, `add_normal`,
  `add_triangle` and `add_mesh`, transforms by a `Transform3` or a 4×4
  matrix (`transformed`, `apply_transform`), `compute_bbox`,
  `split_xy` (groups faces into a `SplitInfo` by halving the bounding
  box in x and y alternately) and `compact` (drops unused vertices and
  normals).
- `mzgeom.meshio` – reading Wavefront OBJ (`parse_obj`), VRML 2.0
  (`parse_wrl`, triangular `IndexedFaceSet` geometry only) and binary STL
  (`parse_stl`, merging vertices with identical coordinates), `load`
  which picks the reader from the file extension, and `save_obj` which
  writes OBJ to a stream or a path. Malformed input raises
  `MeshFormatError`.
- `mzgeom.transform3` – `Quat` quaternions and `Transform3` rigid
  transforms (rotation then translation), with `rx`/`ry`/`rz`,
  `from_matrix`, `inverse`, `matrix`, pre/post translation and
  rotation, and `lerp`.
- `mzgeom.mat2` – `Mat2`, an immutable 2×2 matrix with products,
  transpose, determinant and inverse.
- `mzgeom.intvec` – non-negative integer vectors `Vec2u` and `Vec3u`
  with `sub2ind` / `ind2sub` for grid indexing.
- `mzgeom.gradient` – `Gradient` colour ramps defined by stops, with
  `rainbow`, `jet`, `bone`, `summer`, `hot` and `bw`.
- `mzgeom.mersenne` – `MersenneTwister`, the MT19937 generator with the
  reference seeding (`init_genrand`, `init_by_array`), state
  `capture`/`restore` and the `genrand_*` output functions.
- `mzgeom.gauss` – `gauss_ziggurat(sigma, rng)` draws a normally
  distributed sample using a `MersenneTwister`.
- `mzgeom.simpleconfig` – `SimpleConfig`, a `key = value` file reader
  with `#` comments, `include` lines, comma-separated overrides, typed
  getters (`get_as`, `get_bool`, `get_enum`) and `check_used`, which
  reports keys that were set but never read. Errors raise `ConfigError`.
- `mzgeom.strutils` and `mzgeom.mathutil` – file-name and whitespace
  helpers, and `pwr2` (smallest power of two not below a number).

## Installation

```
pip install .
```

## Example

```python
from mzgeom.trimesh import TriMesh3
from mzgeom.transform3 import Transform3
from mzgeom import meshio

mesh = TriMesh3.sphere(1.0, 16, 8)
mesh.apply_transform(Transform3.rz(0.5, (0.0, 0.0, 2.0)))
print(mesh.compute_bbox())

with open("sphere.obj", "w") as out:
    meshio.save_obj(mesh, out)

again = meshio.load("sphere.obj")
```

## Command line

Convert a VRML mesh into `foo.obj` in the current directory:

```
mzgeom-wrl2obj mesh.wrl
```

The command prints a usage message and exits with status 1 when it is
not given exactly one file, and prints the error and exits with status 1
when the file cannot be read or parsed.

## What it does not do

- There is no rendering or display of meshes; the package only builds,
  transforms, reads and writes them.
- OBJ is the only format that can be written. STL and VRML are read
  only, and ASCII STL files are rejected.
- The VRML reader understands only `Transform`, `Shape`, `Appearance`
  (skipped) and triangular `IndexedFaceSet` nodes.

## Tests

```
pip install .[test]
pytest
```