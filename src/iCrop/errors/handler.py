"""Reporting of crop-session failures.

Failures raised while driving a crop session are logged once and announced on
the event bus as :class:`ErrorOccurredEvent`, so a host can show them without
catching every exception itself.  The caller still decides whether to re-raise.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core.geometry import CropRegion, ImageGeometry, Viewport
from ..events.bus import Event, EventBus
from . import CropModeInactiveError, DomainError, InvalidGeometryError, SettingsError


class ErrorSeverity(Enum):
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


# First match wins; subclasses come before their bases.
_SEVERITIES: tuple[tuple[type[Exception], ErrorSeverity], ...] = (
    (CropModeInactiveError, ErrorSeverity.INFO),
    (InvalidGeometryError, ErrorSeverity.ERROR),
    (DomainError, ErrorSeverity.WARNING),
    (SettingsError, ErrorSeverity.ERROR),
)


def severity_for(error: Exception) -> ErrorSeverity:
    """Return the default severity for *error*.

    Confirming with nothing to confirm is routine, an unusable image or
    viewport blocks crop mode entirely, and anything outside the package
    hierarchy is treated as critical.
    """
    for error_type, severity in _SEVERITIES:
        if isinstance(error, error_type):
            return severity
    return ErrorSeverity.CRITICAL


@dataclass(frozen=True)
class CropErrorContext:
    """Session state captured when a crop operation failed."""

    operation: str
    image: Optional[ImageGeometry] = None
    viewport: Optional[Viewport] = None
    region: Optional[CropRegion] = None

    def describe(self) -> str:
        """Return the captured geometry as `key=value` pairs."""
        parts = []
        if self.image is not None:
            parts.append(f"image={self.image.width:g}x{self.image.height:g}")
        if self.viewport is not None:
            parts.append(f"viewport={self.viewport.width:g}x{self.viewport.height:g}")
        if self.region is not None:
            parts.append("region=({:g}, {:g}, {:g}, {:g})".format(*self.region.as_tuple()))
        return " ".join(parts)


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: CropErrorContext


class ErrorHandler:
    def __init__(self, event_bus: EventBus, logger: Optional[logging.Logger] = None):
        self._events = event_bus
        self._logger = logger or logging.getLogger(__name__)

    def handle(
        self,
        error: Exception,
        context: CropErrorContext,
        severity: Optional[ErrorSeverity] = None,
    ) -> ErrorOccurredEvent:
        """Log *error* and publish it; returns the published event."""
        severity = severity or severity_for(error)
        self._logger.log(
            severity.value,
            "%s failed: %s [%s]",
            context.operation,
            error,
            context.describe() or "no geometry",
            extra={"crop_context": context},
        )
        event = ErrorOccurredEvent(error=error, severity=severity, context=context)
        self._events.publish(event)
        return event
