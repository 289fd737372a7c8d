"""Coordinate mapping between source-image pixels and a letterboxed viewport.

The viewer shows the image with "contain" fit: the image is scaled uniformly
until it touches the viewport on one axis and is centred on the other, leaving
empty margins (the letterbox).  All crop geometry is stored in image pixels;
these helpers convert pointer positions into that space and map regions back
to viewport percentages for rendering.

The transform is recomputed from the current image and viewport sizes on
every call; nothing is cached between pointer events.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from PySide6.QtCore import QPointF

from ..errors import InvalidGeometryError

PointLike = Union[QPointF, tuple[float, float]]


@dataclass(frozen=True)
class ImageGeometry:
    """Intrinsic pixel size of the loaded image."""

    width: float
    height: float

    def is_valid(self) -> bool:
        return _positive(self.width) and _positive(self.height)


@dataclass(frozen=True)
class Viewport:
    """On-screen size of the element displaying the image."""

    width: float
    height: float

    def is_valid(self) -> bool:
        return _positive(self.width) and _positive(self.height)


@dataclass(frozen=True)
class DisplayTransform:
    """Derived mapping from viewport pixels to image pixels.

    ``scale`` is the number of image pixels per viewport pixel; ``offset_x`` and
    ``offset_y`` are the letterbox margins in viewport pixels.
    """

    scale: float
    offset_x: float
    offset_y: float
    displayed_width: float
    displayed_height: float


@dataclass(frozen=True)
class DisplayBox:
    """Crop region expressed as percentages of the viewport."""

    left_pct: float
    top_pct: float
    width_pct: float
    height_pct: float


@dataclass(frozen=True)
class CropRegion:
    """Axis-aligned crop rectangle in image pixels, origin top-left."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Return ``True`` when ``(x, y)`` lies inside or on the border."""

        return self.x <= x <= self.right and self.y <= y <= self.bottom

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height))

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def normalised(self, image: ImageGeometry) -> "NormalisedCrop":
        """Return the region as fractions of the image size."""

        if not image.is_valid():
            raise InvalidGeometryError(f"invalid image size {image.width}x{image.height}")
        return NormalisedCrop(
            x=self.x / image.width,
            y=self.y / image.height,
            width=self.width / image.width,
            height=self.height / image.height,
        )


@dataclass(frozen=True)
class NormalisedCrop:
    """Crop rectangle as fractions of the image size, the form handed to the backend."""

    x: float
    y: float
    width: float
    height: float

    def to_pixel_box(self, image_width: int, image_height: int) -> tuple[int, int, int, int]:
        """Return ``(left, top, width, height)`` in whole pixels.

        Each fraction is scaled and rounded half-up; the right and bottom edges
        are clamped to the image so the box never extends past it.
        """

        left = int(self.x * image_width + 0.5)
        top = int(self.y * image_height + 0.5)
        width = int(self.width * image_width + 0.5)
        height = int(self.height * image_height + 0.5)
        left = min(max(left, 0), image_width)
        top = min(max(top, 0), image_height)
        if left + width > image_width:
            width = image_width - left
        if top + height > image_height:
            height = image_height - top
        return (left, top, max(0, width), max(0, height))


def _positive(value: float) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0.0


def point_xy(point: PointLike) -> tuple[float, float]:
    """Return ``point`` as a plain ``(x, y)`` float pair."""

    if isinstance(point, QPointF):
        return float(point.x()), float(point.y())
    x, y = point
    return float(x), float(y)


def compute_transform(image: ImageGeometry, viewport: Viewport) -> DisplayTransform:
    """Return the contain-fit transform for *image* shown inside *viewport*.

    Raises
    ------
    InvalidGeometryError
        If either size has a zero, negative or non-finite dimension.
    """

    if not image.is_valid():
        raise InvalidGeometryError(f"invalid image size {image.width}x{image.height}")
    if not viewport.is_valid():
        raise InvalidGeometryError(f"invalid viewport size {viewport.width}x{viewport.height}")

    image_w = float(image.width)
    image_h = float(image.height)
    view_w = float(viewport.width)
    view_h = float(viewport.height)
    image_aspect = image_w / image_h
    viewport_aspect = view_w / view_h

    if viewport_aspect > image_aspect:
        # Viewport is relatively wider: the image fills the height.
        displayed_h = view_h
        displayed_w = view_h * image_aspect
    else:
        displayed_w = view_w
        displayed_h = view_w / image_aspect

    return DisplayTransform(
        scale=image_w / displayed_w,
        offset_x=(view_w - displayed_w) / 2.0,
        offset_y=(view_h - displayed_h) / 2.0,
        displayed_width=displayed_w,
        displayed_height=displayed_h,
    )


def screen_to_image(pointer: PointLike, transform: DisplayTransform) -> QPointF:
    """Map a viewport-relative pointer position into image pixels.

    No clamping is applied; positions in the letterbox map outside the image.
    """

    x, y = point_xy(pointer)
    return QPointF(
        (x - transform.offset_x) * transform.scale,
        (y - transform.offset_y) * transform.scale,
    )


def image_to_screen(point: PointLike, transform: DisplayTransform) -> QPointF:
    """Inverse of :func:`screen_to_image`."""

    x, y = point_xy(point)
    return QPointF(
        x / transform.scale + transform.offset_x,
        y / transform.scale + transform.offset_y,
    )


def image_to_display_percent(
    region: CropRegion,
    transform: DisplayTransform,
    viewport: Viewport,
) -> DisplayBox:
    """Return *region* as percentages of *viewport* for positioning the overlay box."""

    if not viewport.is_valid():
        raise InvalidGeometryError(f"invalid viewport size {viewport.width}x{viewport.height}")
    view_w = float(viewport.width)
    view_h = float(viewport.height)
    left = transform.offset_x + region.x / transform.scale
    top = transform.offset_y + region.y / transform.scale
    return DisplayBox(
        left_pct=left / view_w * 100.0,
        top_pct=top / view_h * 100.0,
        width_pct=region.width / transform.scale / view_w * 100.0,
        height_pct=region.height / transform.scale / view_h * 100.0,
    )


__all__ = [
    "CropRegion",
    "DisplayBox",
    "DisplayTransform",
    "ImageGeometry",
    "NormalisedCrop",
    "PointLike",
    "Viewport",
    "compute_transform",
    "image_to_display_percent",
    "image_to_screen",
    "point_xy",
    "screen_to_image",
]
