"""Crop-region selection over a scaled, letterboxed image display."""

__version__ = "0.1.0"
