"""Default configuration values for iCrop."""

from __future__ import annotations

from typing import Final

# Smallest edge, in source-image pixels, a crop region may have.  Resize
# gestures that would go below it are discarded for that pointer event.
MIN_CROP_SIZE: Final[float] = 10.0

# Handle hit area in viewport pixels, converted into image pixels with the
# current display scale.
HANDLE_RADIUS_PX: Final[float] = 15.0

# ---------------------------------------------------------------------------
# Default region tuning
# ---------------------------------------------------------------------------

# The initial region covers this fraction of the displayed image on each axis,
# bounded to [DEFAULT_REGION_MIN_PX, min(DEFAULT_REGION_MAX_PX,
# DEFAULT_REGION_MAX_FRACTION * shorter displayed edge)] viewport pixels.
DEFAULT_REGION_FRACTION: Final[float] = 0.5
DEFAULT_REGION_MIN_PX: Final[float] = 100.0
DEFAULT_REGION_MAX_PX: Final[float] = 800.0
DEFAULT_REGION_MAX_FRACTION: Final[float] = 0.8

SETTINGS_DIR_NAME: Final[str] = "iCrop"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
