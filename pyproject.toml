[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "mzgeom"
version = "0.1.0"
description = "Triangle meshes, rigid transforms, small vector types, colour gradients, random numbers and simple config files for 3D geometry work"
requires-python = ">=3.10"
dependencies = []
keywords = ["geometry", "mesh", "obj", "stl", "vrml", "transform", "quaternion", "mersenne-twister"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mzgeom-wrl2obj = "mzgeom.cli:main"

[tool.setuptools.packages.find]
include = ["mzgeom*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
