"""Layout generation for dungeonforge.

This package provides:
- DungeonParameters / RoomParameters: validated generation settings
- PipelineGenerator: Layered pipeline architecture for dungeon layouts
- create_dungeon_pipeline / generate_dungeon: the standard configuration

The dungeon pipeline is composed of four layers, run in order:
RoomPlacementLayer + SmoothingLayer + WallDerivationLayer + FeaturePlacementLayer
"""

from .base import BaseLayoutGenerator
from .parameters import DungeonParameters, InvalidConfigurationError, RoomParameters
from .pipeline import (
    FeaturePlacementLayer,
    GenerationContext,
    GenerationLayer,
    PipelineGenerator,
    RoomPlacementLayer,
    SmoothingLayer,
    WallDerivationLayer,
    create_dungeon_pipeline,
    create_pipeline,
    generate_dungeon,
)

__all__ = [
    "BaseLayoutGenerator",
    "DungeonParameters",
    "FeaturePlacementLayer",
    "GenerationContext",
    "GenerationLayer",
    "InvalidConfigurationError",
    "PipelineGenerator",
    "RoomParameters",
    "RoomPlacementLayer",
    "SmoothingLayer",
    "WallDerivationLayer",
    "create_dungeon_pipeline",
    "create_pipeline",
    "generate_dungeon",
]
