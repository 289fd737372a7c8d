"""Custom exception hierarchy for iCrop."""

from __future__ import annotations


class ICropError(Exception):
    """Base class for all custom errors raised by iCrop."""


class DomainError(ICropError):
    """Base class for domain-level errors."""


# --- Domain errors ---

class InvalidGeometryError(DomainError):
    """Raised when the image or viewport has a zero (or unusable) dimension."""


class DegenerateDragError(DomainError):
    """Raised when a candidate crop region falls below the minimum size."""


class CropModeInactiveError(DomainError):
    """Raised when an operation needs an active crop region and none exists."""


# --- Settings errors ---

class SettingsError(ICropError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be read."""


class SettingsValidationError(SettingsError):
    """Raised when the settings payload fails schema validation."""


__all__ = [
    "CropModeInactiveError",
    "DegenerateDragError",
    "DomainError",
    "ICropError",
    "InvalidGeometryError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
