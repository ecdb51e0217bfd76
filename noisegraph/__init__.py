"""Noise generator graphs: fractal and domain-warp fractal nodes, node metadata, texture preview state, settings, BMP export and camera control."""

__version__ = "0.1.0"