"""Volumetric fusion building blocks: camera models, TSDF volumes, marching cubes tables, field interpolation and ICP helpers."""

__version__ = "0.1.0"