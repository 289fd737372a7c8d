"""Interactive overlay that hosts the crop engine on top of the image view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from PySide6.QtCore import QEvent, QObject, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QApplication, QWidget

from ....core.geometry import CropRegion, ImageGeometry, Viewport
from ....errors import InvalidGeometryError
from .crop import CropInteractionController, CropTuning, CursorKind, cursor_shape_for

if TYPE_CHECKING:
    from ....settings.manager import SettingsManager


class CropOverlay(QWidget):
    """Translucent overlay exposing the two corner handles for cropping.

    The overlay covers the widget that displays the image with contain fit, so
    its own size is the viewport handed to the engine.  While a drag is in
    progress an application-wide event filter forwards every move and release,
    which keeps the gesture alive (and lets it end) when the pointer leaves
    the overlay.
    """

    cropChanged = Signal(object)
    """Emitted with the new :class:`CropRegion` whenever the region changes."""

    HANDLE_SIZE = 10.0

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        *,
        tuning: CropTuning | None = None,
        controller: CropInteractionController | None = None,
    ) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, False)
        self.setMouseTracking(True)
        # The overlay owns the host callbacks, also of an injected controller.
        self._controller = controller or CropInteractionController(tuning=tuning)
        self._controller.set_callbacks(
            on_region_changed=self._handle_region_changed,
            on_cursor_change=self._handle_cursor_change,
            on_request_update=self.update,
        )
        self._image: ImageGeometry | None = None
        self._capturing = False
        self._show_size_label = True
        self._settings: SettingsManager | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def controller(self) -> CropInteractionController:
        return self._controller

    def viewport(self) -> Viewport:
        return Viewport(float(self.width()), float(self.height()))

    def set_image(self, image: ImageGeometry | None) -> None:
        """Attach the geometry of a newly loaded image; any crop is discarded."""

        self.exit_crop_mode()
        self._image = image

    def show_size_label(self) -> bool:
        return self._show_size_label

    def set_show_size_label(self, enabled: bool) -> None:
        self._show_size_label = bool(enabled)
        self.update()

    def bind_settings(self, settings: SettingsManager) -> None:
        """Follow the `ui.show_size_label` flag and the `crop` tuning of *settings*."""

        if self._settings is not None:
            self._settings.settingsChanged.disconnect(self._handle_setting_changed)
        self._settings = settings
        settings.settingsChanged.connect(self._handle_setting_changed)
        self._apply_settings(ui=True, crop=True)

    def enter_crop_mode(self) -> CropRegion:
        """Start cropping the current image with the default region."""

        if self._image is None:
            raise InvalidGeometryError("no image attached to the overlay")
        return self._controller.enter_crop_mode(self._image, self.viewport())

    def exit_crop_mode(self) -> None:
        self._stop_capture()
        self._controller.exit_crop_mode()
        self.unsetCursor()

    # ------------------------------------------------------------------
    # Event handling
    # ------------------------------------------------------------------
    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._controller.set_viewport(self.viewport())

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        started = self._controller.on_pointer_down(
            event.position(), self._image, self.viewport()
        )
        if started:
            self._start_capture()
            event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self._capturing:
            # The application filter already forwarded this move.
            return
        self._controller.on_pointer_move(event.position())

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self._controller.on_pointer_up()
            self._stop_capture()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if not self._capturing:
            return False
        event_type = event.type()
        if event_type == QEvent.Type.MouseMove:
            self._controller.on_pointer_move(self._local_position(watched, event))
        elif event_type == QEvent.Type.MouseButtonRelease:
            if event.button() == Qt.MouseButton.LeftButton:
                self._controller.on_pointer_up()
                self._stop_capture()
        elif event_type == QEvent.Type.ApplicationDeactivate:
            self._controller.on_pointer_cancel()
            self._stop_capture()
        return False

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------
    def paintEvent(self, _event) -> None:  # type: ignore[override]
        box = self._controller.get_display_box()
        if box is None:
            return
        width = float(self.width())
        height = float(self.height())
        selection = QRectF(
            box.left_pct / 100.0 * width,
            box.top_pct / 100.0 * height,
            box.width_pct / 100.0 * width,
            box.height_pct / 100.0 * height,
        )

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 96))
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
        painter.fillRect(selection, QColor(0, 0, 0, 0))
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

        painter.setPen(QPen(QColor(255, 255, 255, 220), 2.0))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(selection.adjusted(0.5, 0.5, -0.5, -0.5))

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(255, 255, 255))
        half = self.HANDLE_SIZE / 2.0
        for point in (selection.topLeft(), selection.bottomRight()):
            painter.drawRect(
                QRectF(point.x() - half, point.y() - half, self.HANDLE_SIZE, self.HANDLE_SIZE)
            )

        region = self._controller.get_region()
        if self._show_size_label and region is not None:
            painter.setPen(QColor(255, 255, 255))
            label = f"{round(region.width)} × {round(region.height)}"
            painter.drawText(
                selection.adjusted(4.0, 4.0, -4.0, -4.0),
                Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop,
                label,
            )
        painter.end()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _local_position(self, watched: QObject, event: QEvent) -> QPointF:
        if watched is self:
            return event.position()
        return self.mapFromGlobal(event.globalPosition())

    def _start_capture(self) -> None:
        app = QApplication.instance()
        if app is None or self._capturing:
            return
        app.installEventFilter(self)
        self._capturing = True

    def _stop_capture(self) -> None:
        if not self._capturing:
            return
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self)
        self._capturing = False

    def _handle_setting_changed(self, key: str, _value: Any) -> None:
        section = key.split(".", 1)[0]
        self._apply_settings(ui=section == "ui", crop=section == "crop")

    def _apply_settings(self, *, ui: bool, crop: bool) -> None:
        if self._settings is None:
            return
        if ui:
            self.set_show_size_label(bool(self._settings.get("ui.show_size_label", True)))
        if crop:
            self._controller.set_tuning(self._settings.crop_tuning())

    def _handle_region_changed(self, region: CropRegion) -> None:
        self.cropChanged.emit(region)

    def _handle_cursor_change(self, kind: CursorKind) -> None:
        if kind == CursorKind.DEFAULT:
            self.unsetCursor()
        else:
            self.setCursor(cursor_shape_for(kind))
