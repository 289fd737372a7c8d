"""
Crop region model and default-region policy.

This module owns the crop rectangle and enforces its invariants (inside the
image, never smaller than the minimum size) without any UI interaction.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QPointF

from .....core.geometry import (
    CropRegion,
    ImageGeometry,
    Viewport,
    compute_transform,
    screen_to_image,
)
from .....errors import DegenerateDragError, InvalidGeometryError
from .utils import CropTuning

_LOGGER = logging.getLogger(__name__)


def _min_extent(image: ImageGeometry, min_size: float) -> tuple[float, float]:
    # Images smaller than the floor can only be cropped to their full size.
    return min(min_size, float(image.width)), min(min_size, float(image.height))


def clamp_region(
    region: CropRegion,
    image: ImageGeometry,
    *,
    previous: CropRegion | None = None,
    min_size: float = CropTuning.min_size,
    strict: bool = False,
) -> CropRegion | None:
    """Return *region* forced inside *image*.

    ``x``/``y`` are clamped to ``[0, image - min_size]`` and the size is
    shortened so the far edges stay inside the image.  A request whose width or
    height is below ``min_size`` (or not finite) is not grown to fit: it is
    rejected and *previous* is returned instead, or :class:`DegenerateDragError`
    is raised when *strict* is set.
    """

    if not image.is_valid():
        raise InvalidGeometryError(f"invalid image size {image.width}x{image.height}")
    min_w, min_h = _min_extent(image, min_size)
    if not region.is_finite() or region.width < min_w or region.height < min_h:
        if strict:
            raise DegenerateDragError(
                f"crop {region.width:g}x{region.height:g} is below the minimum of {min_size:g}"
            )
        return previous

    image_w = float(image.width)
    image_h = float(image.height)
    x = max(0.0, min(float(region.x), image_w - min_w))
    y = max(0.0, min(float(region.y), image_h - min_h))
    width = min(float(region.width), image_w - x)
    height = min(float(region.height), image_h - y)
    return CropRegion(x, y, width, height)


def create_default_region(
    image: ImageGeometry,
    viewport: Viewport,
    tuning: CropTuning | None = None,
) -> CropRegion:
    """Return the centred region shown when crop mode starts.

    The box covers ``default_fraction`` of the displayed image on each axis,
    bounded to ``[default_min_px, min(default_max_px, default_max_fraction *
    shorter displayed edge)]`` viewport pixels and never larger than the
    displayed image.  It is centred in viewport space, letterbox included, and
    then mapped into image pixels.
    """

    tuning = tuning or CropTuning()
    transform = compute_transform(image, viewport)
    shown_w = transform.displayed_width
    shown_h = transform.displayed_height

    max_px = min(tuning.default_max_px, min(shown_w, shown_h) * tuning.default_max_fraction)
    box_w = max(shown_w * tuning.default_fraction, tuning.default_min_px)
    box_h = max(shown_h * tuning.default_fraction, tuning.default_min_px)
    box_w = min(box_w, max_px, shown_w)
    box_h = min(box_h, max_px, shown_h)

    top_left = screen_to_image(
        QPointF(
            transform.offset_x + (shown_w - box_w) / 2.0,
            transform.offset_y + (shown_h - box_h) / 2.0,
        ),
        transform,
    )
    image_w = float(image.width)
    image_h = float(image.height)
    min_w, min_h = _min_extent(image, tuning.min_size)
    width = min(max(box_w * transform.scale, min_w), image_w)
    height = min(max(box_h * transform.scale, min_h), image_h)
    x = max(0.0, min(top_left.x(), image_w - width))
    y = max(0.0, min(top_left.y(), image_h - height))
    return CropRegion(x, y, width, height)


class CropRegionModel:
    """Holds the committed crop region for one image-display session."""

    def __init__(self, tuning: CropTuning | None = None) -> None:
        self._tuning = tuning or CropTuning()
        self._image: ImageGeometry | None = None
        self._region: CropRegion | None = None

    @property
    def tuning(self) -> CropTuning:
        return self._tuning

    def set_tuning(self, tuning: CropTuning) -> None:
        self._tuning = tuning

    def get_region(self) -> CropRegion | None:
        """Return the current region, ``None`` before initialisation."""
        return self._region

    def get_image(self) -> ImageGeometry | None:
        return self._image

    def initialise(self, image: ImageGeometry, viewport: Viewport) -> CropRegion:
        """Start a session on *image* with the default region."""
        region = create_default_region(image, viewport, self._tuning)
        self._image = image
        self._region = region
        _LOGGER.debug("Default crop region %s for image %sx%s", region, image.width, image.height)
        return region

    def clear(self) -> None:
        """Discard the region and the image it belonged to."""
        self._image = None
        self._region = None

    def apply_candidate(self, candidate: CropRegion) -> bool:
        """Clamp *candidate* and commit it.

        Returns
        -------
        bool:
            True if the committed region changed, False when the candidate was
            rejected or clamped to the current region.
        """
        if self._image is None or self._region is None:
            return False
        clamped = clamp_region(
            candidate,
            self._image,
            previous=self._region,
            min_size=self._tuning.min_size,
        )
        if clamped is None or not self.has_changed(clamped):
            return False
        self._region = clamped
        return True

    def has_changed(self, other: CropRegion) -> bool:
        """Return True when *other* differs from the current region."""
        if self._region is None:
            return True
        return any(
            abs(a - b) > 1e-9
            for a, b in zip(self._region.as_tuple(), other.as_tuple(), strict=True)
        )
