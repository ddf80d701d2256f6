"""Cartesian grid surface with annotated circles and click-to-read coordinates."""

__version__ = "0.1.0"
