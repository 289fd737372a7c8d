"""
Crop interaction module.

This package provides the crop-region engine used by the image viewer: the
region model and its invariants, corner hit testing, and the move/resize
state machine built from interchangeable strategies.
"""

from .controller import CropInteractionController
from .hit_tester import HitTester
from .model import CropRegionModel, clamp_region, create_default_region
from .utils import (
    Corner,
    CropHandle,
    CropTuning,
    CursorKind,
    Idle,
    InteractionState,
    Moving,
    ResizingCorner,
    cursor_for_handle,
    cursor_shape_for,
)

__all__ = [
    "Corner",
    "CropHandle",
    "CropInteractionController",
    "CropRegionModel",
    "CropTuning",
    "CursorKind",
    "HitTester",
    "Idle",
    "InteractionState",
    "Moving",
    "ResizingCorner",
    "clamp_region",
    "create_default_region",
    "cursor_for_handle",
    "cursor_shape_for",
]
