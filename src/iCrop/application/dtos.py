from dataclasses import dataclass
from typing import Optional

from ..core.geometry import CropRegion, ImageGeometry, NormalisedCrop


@dataclass
class CropRequest:
    """Crop confirmed by the user, ready for the image-processing backend."""
    image: ImageGeometry
    region: CropRegion
    normalised: NormalisedCrop
    source_path: Optional[str] = None

    def pixel_box(self) -> tuple[int, int, int, int]:
        """Return the ``(left, top, width, height)`` box the backend will cut."""
        return self.normalised.to_pixel_box(int(self.image.width), int(self.image.height))
