"""
Move strategy for dragging the whole crop box.
"""

from __future__ import annotations

from PySide6.QtCore import QPointF

from ......core.geometry import CropRegion, ImageGeometry
from .abstract import InteractionStrategy


class PanStrategy(InteractionStrategy):
    """Strategy for moving the crop box without changing its size."""

    def candidate(self, delta_image: QPointF, image: ImageGeometry) -> CropRegion:
        anchor = self._anchor_region
        max_x = max(0.0, float(image.width) - anchor.width)
        max_y = max(0.0, float(image.height) - anchor.height)
        x = max(0.0, min(anchor.x + delta_image.x(), max_x))
        y = max(0.0, min(anchor.y + delta_image.y(), max_y))
        return CropRegion(x, y, anchor.width, anchor.height)
