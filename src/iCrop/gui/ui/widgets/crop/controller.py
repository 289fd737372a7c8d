"""
Crop interaction controller (coordinator).

This module drives the crop state machine: it classifies pointer presses with
the hit tester, creates the matching interaction strategy, converts pointer
positions into image space on every event and commits clamped regions to the
model.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PySide6.QtCore import QPointF

from .....core.geometry import (
    CropRegion,
    DisplayBox,
    DisplayTransform,
    ImageGeometry,
    PointLike,
    Viewport,
    compute_transform,
    image_to_display_percent,
    screen_to_image,
)
from .....errors import InvalidGeometryError
from .hit_tester import HitTester
from .model import CropRegionModel
from .strategies import InteractionStrategy, PanStrategy, ResizeStrategy
from .utils import (
    IDLE,
    CropHandle,
    CropTuning,
    CursorKind,
    Idle,
    InteractionState,
    Moving,
    ResizingCorner,
    cursor_for_handle,
)

_LOGGER = logging.getLogger(__name__)


class CropInteractionController:
    """Owns the crop region and interaction state for one image-display session."""

    def __init__(
        self,
        *,
        tuning: CropTuning | None = None,
        on_region_changed: Callable[[CropRegion], None] | None = None,
        on_cursor_change: Callable[[CursorKind], None] | None = None,
        on_request_update: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the crop interaction controller.

        Parameters
        ----------
        tuning:
            Minimum size, handle radius and default-region constants.
        on_region_changed:
            Called with the new region whenever the committed region changes.
        on_cursor_change:
            Called with the new cursor hint whenever it changes.
        on_request_update:
            Called after every processed pointer event that may need a repaint.
        """
        tuning = tuning or CropTuning()
        self._model = CropRegionModel(tuning)
        self._hit_tester = HitTester(handle_radius=tuning.handle_radius)
        self._on_region_changed = on_region_changed
        self._on_cursor_change = on_cursor_change
        self._on_request_update = on_request_update

        self._active: bool = False
        self._viewport: Viewport | None = None
        self._state: InteractionState = IDLE
        self._strategy: InteractionStrategy | None = None
        self._cursor: CursorKind = CursorKind.DEFAULT

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def is_active(self) -> bool:
        """Return True if crop mode is currently active."""
        return self._active

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def tuning(self) -> CropTuning:
        return self._model.tuning

    def set_callbacks(
        self,
        *,
        on_region_changed: Callable[[CropRegion], None] | None = None,
        on_cursor_change: Callable[[CursorKind], None] | None = None,
        on_request_update: Callable[[], None] | None = None,
    ) -> None:
        """Replace the host callbacks; callbacks left as ``None`` are kept."""
        if on_region_changed is not None:
            self._on_region_changed = on_region_changed
        if on_cursor_change is not None:
            self._on_cursor_change = on_cursor_change
        if on_request_update is not None:
            self._on_request_update = on_request_update

    def set_tuning(self, tuning: CropTuning) -> None:
        """Replace the tuning values; the current region is kept as is."""
        self._model.set_tuning(tuning)
        self._hit_tester = HitTester(handle_radius=tuning.handle_radius)

    def get_region(self) -> CropRegion | None:
        return self._model.get_region()

    def get_image(self) -> ImageGeometry | None:
        return self._model.get_image()

    def get_viewport(self) -> Viewport | None:
        return self._viewport

    def get_cursor_hint(self) -> CursorKind:
        return self._cursor

    def get_transform(self) -> DisplayTransform | None:
        """Return the transform for the current image and viewport, or None."""
        image = self._model.get_image()
        if image is None or self._viewport is None:
            return None
        try:
            return compute_transform(image, self._viewport)
        except InvalidGeometryError:
            return None

    def get_display_box(self) -> DisplayBox | None:
        """Return the region as viewport percentages, or None when it cannot be shown."""
        region = self._model.get_region()
        transform = self.get_transform()
        if region is None or transform is None or self._viewport is None:
            return None
        return image_to_display_percent(region, transform, self._viewport)

    def enter_crop_mode(self, image: ImageGeometry, viewport: Viewport) -> CropRegion:
        """Activate crop mode with the default region.

        Raises
        ------
        InvalidGeometryError
            If the image or viewport has a zero dimension.  Crop mode stays off.
        """
        region = self._model.initialise(image, viewport)
        self._viewport = viewport
        self._active = True
        self._reset_gesture()
        self._set_cursor(CursorKind.DEFAULT)
        _LOGGER.debug("Crop mode entered with region %s", region)
        self._emit_region_changed()
        self._request_update()
        return region

    def exit_crop_mode(self) -> None:
        """Deactivate crop mode and discard the region."""
        if not self._active and self._model.get_region() is None:
            return
        self._active = False
        self._reset_gesture()
        self._model.clear()
        self._set_cursor(CursorKind.DEFAULT)
        _LOGGER.debug("Crop mode exited")
        self._request_update()

    def set_viewport(self, viewport: Viewport) -> None:
        """Record a new viewport size reported by the layout."""
        self._viewport = viewport
        self._request_update()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_pointer_down(
        self,
        pos: PointLike,
        image: ImageGeometry | None = None,
        viewport: Viewport | None = None,
    ) -> bool:
        """Start a gesture at *pos* (viewport pixels).

        Returns
        -------
        bool:
            True if a move or resize gesture started.
        """
        if not self._active or self._model.get_region() is None:
            return False
        if not isinstance(self._state, Idle):
            # The first gesture's anchor stays authoritative.
            return False
        if image is not None and image != self._model.get_image():
            _LOGGER.debug("Ignoring press for image %s outside the crop session", image)
            return False
        if viewport is not None:
            self._viewport = viewport

        transform = self.get_transform()
        if transform is None:
            _LOGGER.debug("Ignoring press: no valid geometry")
            return False

        anchor_pointer = screen_to_image(pos, transform)
        region = self._model.get_region()
        handle = self._hit_test(anchor_pointer, region, transform)
        self._set_cursor(cursor_for_handle(handle))

        if handle == CropHandle.NONE:
            return False

        if handle == CropHandle.INSIDE:
            self._state = Moving(anchor_pointer=anchor_pointer, anchor_region=region)
            self._strategy = PanStrategy(region)
        else:
            corner = handle.corner
            self._state = ResizingCorner(
                corner=corner, anchor_pointer=anchor_pointer, anchor_region=region
            )
            self._strategy = ResizeStrategy(corner=corner, anchor_region=region)
        _LOGGER.debug("Gesture started: %s", self._state)
        return True

    def on_pointer_move(self, pos: PointLike, viewport: Viewport | None = None) -> None:
        """Process a pointer move anywhere on screen (viewport-relative position)."""
        if viewport is not None:
            self._viewport = viewport
        if not self._active or self._model.get_region() is None:
            return

        transform = self.get_transform()
        if transform is None:
            self._set_cursor(CursorKind.DEFAULT)
            return

        pointer = screen_to_image(pos, transform)
        if self._strategy is not None and isinstance(self._state, (Moving, ResizingCorner)):
            anchor = self._state.anchor_pointer
            delta = QPointF(pointer.x() - anchor.x(), pointer.y() - anchor.y())
            candidate = self._strategy.candidate(delta, self._model.get_image())
            if self._model.apply_candidate(candidate):
                self._emit_region_changed()

        handle = self._hit_test(pointer, self._model.get_region(), transform)
        self._set_cursor(cursor_for_handle(handle))
        self._request_update()

    def on_pointer_up(self) -> None:
        """End the current gesture.  Safe to call from a global release listener."""
        if not isinstance(self._state, Idle):
            _LOGGER.debug("Gesture finished with region %s", self._model.get_region())
        self._reset_gesture()

    def on_pointer_cancel(self) -> None:
        """Abort the current gesture, keeping the last committed region."""
        self.on_pointer_up()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _hit_test(
        self, pointer: QPointF, region: CropRegion, transform: DisplayTransform
    ) -> CropHandle:
        radius = self._hit_tester.radius_in_image(transform.scale)
        return self._hit_tester.test(pointer, region, radius)

    def _reset_gesture(self) -> None:
        self._state = IDLE
        self._strategy = None

    def _set_cursor(self, kind: CursorKind) -> None:
        if kind == self._cursor:
            return
        self._cursor = kind
        if self._on_cursor_change is not None:
            self._on_cursor_change(kind)

    def _emit_region_changed(self) -> None:
        region = self._model.get_region()
        if region is not None and self._on_region_changed is not None:
            self._on_region_changed(region)

    def _request_update(self) -> None:
        if self._on_request_update is not None:
            self._on_request_update()
