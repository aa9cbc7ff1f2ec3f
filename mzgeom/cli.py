"""Command that reads a VRML 2.0 mesh and writes it to foo.obj."""

from __future__ import annotations

import sys
from typing import Sequence

from .meshio import MeshFormatError, parse_wrl, save_obj

OUTPUT_NAME = "foo.obj"


def main(argv: Sequence[str] | None = None) -> int:
    """Convert the VRML file named in ``argv`` to OBJ; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("usage: mzgeom mesh.wrl", file=sys.stderr)
        return 1

    try:
        with open(args[0], encoding="utf-8", errors="replace") as stream:
            mesh = parse_wrl(stream)
        save_obj(mesh, OUTPUT_NAME)
    except (MeshFormatError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())