"""
Hit testing logic for crop handles.

This module contains pure geometric functions for deciding whether a pointer
(already mapped into image pixels) is over a corner handle, inside the crop
box or outside it, with no dependencies on Qt events or UI state.
"""

from __future__ import annotations

from .....config import HANDLE_RADIUS_PX
from .....core.geometry import CropRegion, PointLike, point_xy
from .utils import CropHandle


class HitTester:
    """Pure-function hit tester for the two crop corner handles."""

    def __init__(self, handle_radius: float = HANDLE_RADIUS_PX) -> None:
        """Initialize hit tester.

        Parameters
        ----------
        handle_radius:
            Handle hit distance in viewport pixels.
        """
        self._handle_radius = float(handle_radius)

    @property
    def handle_radius(self) -> float:
        return self._handle_radius

    def radius_in_image(self, scale: float) -> float:
        """Convert the viewport-pixel handle radius into image pixels."""
        return self._handle_radius * float(scale)

    @staticmethod
    def _near(px: float, py: float, cx: float, cy: float, radius: float) -> bool:
        # Square hit area, matching the square handles drawn on screen.
        return abs(px - cx) <= radius and abs(py - cy) <= radius

    def test(self, point: PointLike, region: CropRegion, radius: float) -> CropHandle:
        """Classify *point* against *region*.

        Parameters
        ----------
        point:
            Pointer position in image pixels.
        region:
            Current crop region in image pixels.
        radius:
            Handle radius in image pixels (see :meth:`radius_in_image`).

        Returns
        -------
        CropHandle:
            ``NW`` is tested first, then ``SE``, then the interior, so a pointer
            near a handle always resolves to the handle.
        """
        px, py = point_xy(point)
        if self._near(px, py, region.x, region.y, radius):
            return CropHandle.NW
        if self._near(px, py, region.right, region.bottom, radius):
            return CropHandle.SE
        if region.contains(px, py):
            return CropHandle.INSIDE
        return CropHandle.NONE
