"""Triangle meshes, mesh file I/O, rigid transforms and small geometry utilities."""

__version__ = "0.1.0"