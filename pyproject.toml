[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "sobfusion"
version = "0.1.0"
description = "Volumetric fusion building blocks: TSDF volumes, marching cubes tables, field interpolation and projective ICP helpers"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["tsdf", "marching cubes", "icp", "3d reconstruction", "volumetric fusion"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["sobfusion*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
