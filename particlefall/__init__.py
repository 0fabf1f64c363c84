"""Falling-particle demo: emission, camera transforms, Targa textures and pygame rendering."""

__version__ = "0.1.0"