from .bus import Event, EventBus, Subscription
from .domain_events import DomainEvent
from .crop_events import (
    CropCancelledEvent,
    CropConfirmedEvent,
    CropModeEnteredEvent,
    CropRegionChangedEvent,
)

__all__ = [
    "CropCancelledEvent",
    "CropConfirmedEvent",
    "CropModeEnteredEvent",
    "CropRegionChangedEvent",
    "DomainEvent",
    "Event",
    "EventBus",
    "Subscription",
]
