"""Procedural solar-system textures and Kepler orbits."""

__version__ = "0.1.0"
