import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Widget tests run without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from iCrop.core.geometry import ImageGeometry, Viewport  # noqa: E402
from iCrop.gui.ui.widgets.crop import CropInteractionController  # noqa: E402


@pytest.fixture
def image() -> ImageGeometry:
    return ImageGeometry(800, 600)


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(400, 300)


@pytest.fixture
def controller(image, viewport) -> CropInteractionController:
    """Controller in crop mode on an 800x600 image shown at half size."""
    ctrl = CropInteractionController()
    ctrl.enter_crop_mode(image, viewport)
    return ctrl
