"""Geographic primitives - Pure data structures.

The feed query is constrained to a fixed bounding box around the target
region; finer membership decisions are made by the text classifier.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """Geographic bounding box.

    Attributes:
        min_latitude: Southern boundary
        max_latitude: Northern boundary
        min_longitude: Western boundary
        max_longitude: Eastern boundary
    """
    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


# Rectangle enclosing Ethiopia and its immediate borders
ETHIOPIA_BOUNDS = BoundingBox(
    min_latitude=3.4,
    max_latitude=14.9,
    min_longitude=32.9,
    max_longitude=48.3,
)
