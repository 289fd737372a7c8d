"""
Interaction strategies for crop mode.

Each strategy turns a pointer delta, measured from the gesture anchor, into a
candidate crop region: moving the whole box or dragging one of its corners.
"""

from .abstract import InteractionStrategy
from .pan_strategy import PanStrategy
from .resize_strategy import ResizeStrategy

__all__ = [
    "InteractionStrategy",
    "PanStrategy",
    "ResizeStrategy",
]
