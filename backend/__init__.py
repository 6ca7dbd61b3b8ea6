"""Isometric SVG rendering of z = sin(r)/r served over HTTP."""
__version__ = "0.1.0"
