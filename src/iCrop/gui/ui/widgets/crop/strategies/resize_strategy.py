"""
Resize strategy for crop box corner dragging.
"""

from __future__ import annotations

from PySide6.QtCore import QPointF

from ......core.geometry import CropRegion, ImageGeometry
from ..utils import Corner
from .abstract import InteractionStrategy


class ResizeStrategy(InteractionStrategy):
    """Strategy for resizing the crop box from its NW or SE corner."""

    def __init__(self, *, corner: Corner, anchor_region: CropRegion) -> None:
        """Initialize resize strategy.

        Parameters
        ----------
        corner:
            The corner being dragged; the opposite corner stays fixed.
        anchor_region:
            Crop region captured when the gesture started.
        """
        super().__init__(anchor_region)
        self._corner = corner

    @property
    def corner(self) -> Corner:
        return self._corner

    def candidate(self, delta_image: QPointF, image: ImageGeometry) -> CropRegion:
        anchor = self._anchor_region
        dx = float(delta_image.x())
        dy = float(delta_image.y())

        if self._corner is Corner.NW:
            # The dragged corner stops at the image edge so the SE corner does
            # not drift when the pointer leaves the image.
            left = max(0.0, anchor.x + dx)
            top = max(0.0, anchor.y + dy)
            return CropRegion(left, top, anchor.right - left, anchor.bottom - top)

        right = min(float(image.width), anchor.right + dx)
        bottom = min(float(image.height), anchor.bottom + dy)
        return CropRegion(anchor.x, anchor.y, right - anchor.x, bottom - anchor.y)
