"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to create common pipeline
configurations without needing to manually assemble layers.

Currently implemented:
- "dungeon": rooms, smoothing automaton, walls and doors, pillars and props
"""

from __future__ import annotations

from typing import Any

from dungeonforge.environment.layout import DungeonLayout

from ..parameters import DungeonParameters, RoomParameters
from .layers import (
    FeaturePlacementLayer,
    RoomPlacementLayer,
    SmoothingLayer,
    WallDerivationLayer,
)
from .pipeline import PipelineGenerator


def create_pipeline(name: str, params: DungeonParameters) -> PipelineGenerator:
    """Create a pre-configured pipeline by name.

    Available pipelines:
    - "dungeon": The full room/corridor dungeon layout

    Args:
        name: Name of the pipeline configuration to use.
        params: Generation parameters.

    Returns:
        A configured PipelineGenerator ready to generate layouts.

    Raises:
        ValueError: If the pipeline name is not recognized.
        InvalidConfigurationError: If params cannot produce a layout.
    """
    if name == "dungeon":
        return create_dungeon_pipeline(params)
    raise ValueError(f"Unknown pipeline name: {name!r}")


def create_dungeon_pipeline(params: DungeonParameters) -> PipelineGenerator:
    """Create the dungeon pipeline.

    The dungeon pipeline generates:
    1. Room candidates and doors (RoomPlacementLayer)
    2. Corridors, enviro blocks and pillars (SmoothingLayer)
    3. Boundary walls, room walls and doors (WallDerivationLayer)
    4. Decorative props (FeaturePlacementLayer)

    Args:
        params: Generation parameters.

    Returns:
        A configured PipelineGenerator.
    """
    layers = [
        # 1. Stamp rooms; doors only for accepted rooms
        RoomPlacementLayer(),
        # 2. Cellular automaton over the floor grid
        SmoothingLayer(),
        # 3. Walls from the finished floor classification
        WallDerivationLayer(),
        # 4. Props, never on a pillar
        FeaturePlacementLayer(),
    ]

    return PipelineGenerator(layers=layers, params=params)


def generate_dungeon(
    width: int,
    length: int,
    min_room_size: int | None = None,
    max_room_size: int | None = None,
    **kwargs: Any,
) -> DungeonLayout:
    """Validate parameters and generate one dungeon layout.

    Args:
        width: Grid size along x.
        length: Grid size along z.
        min_room_size: Smallest room side. Defaults to RoomParameters default.
        max_room_size: Exclusive upper bound on room sides.
        **kwargs: Any other DungeonParameters field (number_of_rooms, seed, ...).

    Returns:
        A freshly generated DungeonLayout.
    """
    room_defaults = RoomParameters()
    room_params = RoomParameters(
        min_size=room_defaults.min_size if min_room_size is None else min_room_size,
        max_size=room_defaults.max_size if max_room_size is None else max_room_size,
    )
    params = DungeonParameters(
        width=width, length=length, room_params=room_params, **kwargs
    )
    return create_dungeon_pipeline(params).generate()
