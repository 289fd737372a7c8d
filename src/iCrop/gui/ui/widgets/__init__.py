"""Reusable Qt widgets for the iCrop GUI."""

from .crop_overlay import CropOverlay

__all__ = ["CropOverlay"]
