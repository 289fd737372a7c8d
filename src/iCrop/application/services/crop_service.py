from typing import Optional

from ...core.geometry import CropRegion, DisplayBox, ImageGeometry, Viewport
from ...errors import CropModeInactiveError, InvalidGeometryError
from ...errors.handler import CropErrorContext, ErrorHandler, ErrorSeverity
from ...events import (
    CropCancelledEvent,
    CropConfirmedEvent,
    CropModeEnteredEvent,
    CropRegionChangedEvent,
    EventBus,
)
from ...gui.ui.widgets.crop import CropInteractionController, CropTuning, CursorKind
from ...utils.logging import get_logger
from ..dtos import CropRequest


class CropService:
    """
    Application facade for one image-display session.
    Wraps the interaction engine, publishes crop events and turns the final
    region into a backend request.
    """
    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        tuning: Optional[CropTuning] = None,
        controller: Optional[CropInteractionController] = None,
    ):
        self._logger = get_logger()
        self._events = event_bus or EventBus(self._logger)
        self._errors = error_handler or ErrorHandler(self._events, self._logger)
        self._controller = controller or CropInteractionController(
            tuning=tuning,
            on_region_changed=self._publish_region,
        )
        self._image: Optional[ImageGeometry] = None
        self._source_path: Optional[str] = None

    @property
    def controller(self) -> CropInteractionController:
        return self._controller

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def image(self) -> Optional[ImageGeometry]:
        return self._image

    def load_image(self, image: ImageGeometry, source_path: Optional[str] = None) -> None:
        """Replace the displayed image; any crop in progress is discarded."""
        if self._controller.is_active():
            self._controller.exit_crop_mode()
        self._image = image
        self._source_path = source_path

    def enter_crop_mode(self, viewport: Viewport) -> CropRegion:
        if self._image is None:
            error = InvalidGeometryError("no image loaded")
            self._errors.handle(
                error, CropErrorContext("enter_crop_mode", viewport=viewport), ErrorSeverity.WARNING
            )
            raise error
        try:
            region = self._controller.enter_crop_mode(self._image, viewport)
        except InvalidGeometryError as exc:
            self._errors.handle(
                exc, CropErrorContext("enter_crop_mode", image=self._image, viewport=viewport)
            )
            raise
        self._events.publish(CropModeEnteredEvent(source="crop_service", image=self._image, region=region))
        return region

    def is_cropping(self) -> bool:
        return self._controller.is_active()

    def region(self) -> Optional[CropRegion]:
        return self._controller.get_region()

    def display_box(self) -> Optional[DisplayBox]:
        return self._controller.get_display_box()

    def cursor_hint(self) -> CursorKind:
        return self._controller.get_cursor_hint()

    def confirm(self) -> CropRequest:
        """Finish crop mode and return the request for the backend."""
        region = self._controller.get_region()
        if not self._controller.is_active() or region is None or self._image is None:
            error = CropModeInactiveError("crop mode is not active")
            self._errors.handle(error, CropErrorContext("confirm", image=self._image))
            raise error
        normalised = region.normalised(self._image)
        request = CropRequest(
            image=self._image,
            region=region,
            normalised=normalised,
            source_path=self._source_path,
        )
        self._controller.exit_crop_mode()
        self._logger.info("Crop confirmed: %s -> %s", region, normalised)
        self._events.publish(CropConfirmedEvent(source="crop_service", region=region, normalised=normalised))
        return request

    def cancel(self) -> None:
        if not self._controller.is_active():
            return
        self._controller.exit_crop_mode()
        self._events.publish(CropCancelledEvent(source="crop_service"))

    def _publish_region(self, region: CropRegion) -> None:
        self._events.publish(CropRegionChangedEvent(source="crop_service", region=region))
