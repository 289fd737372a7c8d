"""
Crop-related data structures and small helpers.

This module contains the enums, interaction state variants and tuning values
shared by the hit tester, the strategies and the controller.  Nothing here
touches widgets or Qt event handling.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from PySide6.QtCore import QPointF, Qt

from .....config import (
    DEFAULT_REGION_FRACTION,
    DEFAULT_REGION_MAX_FRACTION,
    DEFAULT_REGION_MAX_PX,
    DEFAULT_REGION_MIN_PX,
    HANDLE_RADIUS_PX,
    MIN_CROP_SIZE,
)
from .....core.geometry import CropRegion


class Corner(enum.Enum):
    """The two draggable corners of the crop box."""

    NW = "nw"
    SE = "se"


class CropHandle(enum.IntEnum):
    """Result of hit testing a pointer against the crop box."""

    NONE = 0
    NW = 1
    SE = 2
    INSIDE = -1

    @property
    def corner(self) -> Corner | None:
        return {CropHandle.NW: Corner.NW, CropHandle.SE: Corner.SE}.get(self)


class CursorKind(str, enum.Enum):
    """Cursor hint reported to the host for visual feedback."""

    DEFAULT = "default"
    MOVE = "move"
    RESIZE_NW = "resize-nw"
    RESIZE_SE = "resize-se"


def cursor_for_handle(handle: CropHandle) -> CursorKind:
    """Return the cursor hint for a given hit-test result."""
    return {
        CropHandle.NW: CursorKind.RESIZE_NW,
        CropHandle.SE: CursorKind.RESIZE_SE,
        CropHandle.INSIDE: CursorKind.MOVE,
    }.get(handle, CursorKind.DEFAULT)


def cursor_shape_for(kind: CursorKind) -> Qt.CursorShape:
    """Return the Qt cursor shape used to render a cursor hint."""
    return {
        CursorKind.RESIZE_NW: Qt.CursorShape.SizeFDiagCursor,
        CursorKind.RESIZE_SE: Qt.CursorShape.SizeFDiagCursor,
        CursorKind.MOVE: Qt.CursorShape.SizeAllCursor,
    }.get(kind, Qt.CursorShape.ArrowCursor)


# ---------------------------------------------------------------------------
# Interaction state variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Idle:
    """No gesture in progress."""


@dataclass(frozen=True)
class Moving:
    """The whole box follows the pointer."""

    anchor_pointer: QPointF
    anchor_region: CropRegion


@dataclass(frozen=True)
class ResizingCorner:
    """One corner follows the pointer while the opposite corner stays put."""

    corner: Corner
    anchor_pointer: QPointF
    anchor_region: CropRegion


InteractionState = Union[Idle, Moving, ResizingCorner]

IDLE = Idle()


@dataclass(frozen=True)
class CropTuning:
    """Product-tuning values for the crop engine.

    The defaults reproduce the constants in :mod:`iCrop.config`; the settings
    file can override every one of them.
    """

    min_size: float = MIN_CROP_SIZE
    handle_radius: float = HANDLE_RADIUS_PX
    default_fraction: float = DEFAULT_REGION_FRACTION
    default_min_px: float = DEFAULT_REGION_MIN_PX
    default_max_px: float = DEFAULT_REGION_MAX_PX
    default_max_fraction: float = DEFAULT_REGION_MAX_FRACTION

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "CropTuning":
        """Build tuning values from the ``crop`` section of the settings file."""
        if not values:
            return cls()
        defaults = cls()
        return cls(
            min_size=float(values.get("min_size", defaults.min_size)),
            handle_radius=float(values.get("handle_radius", defaults.handle_radius)),
            default_fraction=float(values.get("default_fraction", defaults.default_fraction)),
            default_min_px=float(values.get("default_min_px", defaults.default_min_px)),
            default_max_px=float(values.get("default_max_px", defaults.default_max_px)),
            default_max_fraction=float(
                values.get("default_max_fraction", defaults.default_max_fraction)
            ),
        )
