"""
Abstract base class for crop interaction strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from PySide6.QtCore import QPointF

from ......core.geometry import CropRegion, ImageGeometry


class InteractionStrategy(ABC):
    """Base class for crop interaction strategies (move, corner resize)."""

    def __init__(self, anchor_region: CropRegion) -> None:
        self._anchor_region = anchor_region

    @property
    def anchor_region(self) -> CropRegion:
        return self._anchor_region

    @abstractmethod
    def candidate(self, delta_image: QPointF, image: ImageGeometry) -> CropRegion:
        """Return the region implied by *delta_image*.

        Parameters
        ----------
        delta_image:
            Pointer movement since the gesture started, in image pixels.
        image:
            Size of the image the region must stay inside.
        """
