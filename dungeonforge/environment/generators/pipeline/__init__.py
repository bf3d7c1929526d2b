"""Pipeline-based layout generation system.

This package provides a layered architecture for dungeon layout generation.
Each layer transforms a shared GenerationContext, and the pipeline outputs a
read-only DungeonLayout.

Example usage:
    from dungeonforge.environment.generators.pipeline import create_pipeline

    generator = create_pipeline("dungeon", DungeonParameters(width=40, length=30))
    layout = generator.generate()

The pipeline can also be assembled manually for custom configurations:
    from dungeonforge.environment.generators.pipeline import (
        PipelineGenerator,
        RoomPlacementLayer,
        SmoothingLayer,
    )

    generator = PipelineGenerator(
        layers=[RoomPlacementLayer(), SmoothingLayer(passes=2)],
        params=DungeonParameters(width=40, length=30, seed=7),
    )
"""

from .context import GenerationContext
from .factory import create_dungeon_pipeline, create_pipeline, generate_dungeon
from .layer import GenerationLayer
from .layers import (
    FeaturePlacementLayer,
    RoomPlacementLayer,
    SmoothingLayer,
    WallDerivationLayer,
)
from .pipeline import PipelineGenerator

__all__ = [
    "FeaturePlacementLayer",
    "GenerationContext",
    "GenerationLayer",
    "PipelineGenerator",
    "RoomPlacementLayer",
    "SmoothingLayer",
    "WallDerivationLayer",
    "create_dungeon_pipeline",
    "create_pipeline",
    "generate_dungeon",
]
