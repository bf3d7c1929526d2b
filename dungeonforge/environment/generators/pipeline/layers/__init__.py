"""Generation layers for the pipeline layout generator.

Each layer transforms the GenerationContext in a specific way, and they run in
this order:
- Room layer: Stamp room candidates and pick doors for accepted rooms
- Smoothing layer: Grow corridors, reclassify isolated tiles, seed pillars
- Wall layer: Derive boundary walls, room walls and doors
- Feature layer: Scatter props, resolving them against pillars
"""

from .features import FeaturePlacementLayer
from .rooms import RoomPlacementLayer
from .smoothing import SmoothingLayer, count_adjacent, count_diagonal
from .walls import WallDerivationLayer

__all__ = [
    "FeaturePlacementLayer",
    "RoomPlacementLayer",
    "SmoothingLayer",
    "WallDerivationLayer",
    "count_adjacent",
    "count_diagonal",
]
