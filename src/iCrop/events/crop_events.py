from dataclasses import dataclass
from typing import Optional

from ..core.geometry import CropRegion, ImageGeometry, NormalisedCrop
from .domain_events import DomainEvent


@dataclass(frozen=True)
class CropModeEnteredEvent(DomainEvent):
    image: Optional[ImageGeometry] = None
    region: Optional[CropRegion] = None


@dataclass(frozen=True)
class CropRegionChangedEvent(DomainEvent):
    region: Optional[CropRegion] = None


@dataclass(frozen=True)
class CropConfirmedEvent(DomainEvent):
    region: Optional[CropRegion] = None
    normalised: Optional[NormalisedCrop] = None


@dataclass(frozen=True)
class CropCancelledEvent(DomainEvent):
    pass
