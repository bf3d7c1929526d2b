"""Generation context for the pipeline layout generator.

The GenerationContext is a mutable container that holds all state during one
generation. Each layer in the pipeline receives the same context and modifies
it in place. A new context is built for every generation, so no state carries
over from a previous layout.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from dungeonforge.environment.grid import Grid
from dungeonforge.environment.layout import DungeonLayout, Room, WallSegment
from dungeonforge.environment.tile_types import TileType
from dungeonforge.util.rng import RNGProvider

from ..parameters import DungeonParameters


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        params: The validated parameters for this generation.
        floor: Floor classification. Starts EMPTY everywhere.
        walls: Wall markers. Room placement stamps ROOM/DOOR here; the wall
            layer replaces it with the derived wall grid.
        features: Pillar/prop markers. Starts EMPTY everywhere.
        prop_flags: Boolean array of prop rolls that came up, before pillars
            are taken into account. Shape: (width, length).
        rooms: Every attempted room, in placement order.
        wall_segments: Wall edges emitted by the wall layer.
        rng: Provider of the per-stage random streams.
    """

    params: DungeonParameters
    floor: Grid
    walls: Grid
    features: Grid
    prop_flags: np.ndarray
    rooms: list[Room] = field(default_factory=list)
    wall_segments: list[WallSegment] = field(default_factory=list)
    rng: RNGProvider = field(default_factory=RNGProvider)

    @classmethod
    def create_empty(
        cls,
        params: DungeonParameters,
        rng: RNGProvider | None = None,
    ) -> GenerationContext:
        """Create an empty generation context for params.

        Args:
            params: Validated generation parameters.
            rng: Random stream provider. Defaults to one seeded from params.seed.

        Returns:
            A new GenerationContext ready for layer processing.
        """
        width, length = params.width, params.length
        prop_flags = np.zeros((width, length), dtype=bool, order="F")

        return cls(
            params=params,
            floor=Grid(width, length, fill=TileType.EMPTY),
            walls=Grid(width, length, fill=TileType.EMPTY),
            features=Grid(width, length, fill=TileType.EMPTY),
            prop_flags=prop_flags,
            rooms=[],
            wall_segments=[],
            rng=rng if rng is not None else RNGProvider(params.seed),
        )

    @property
    def width(self) -> int:
        return self.params.width

    @property
    def length(self) -> int:
        return self.params.length

    def to_layout(self) -> DungeonLayout:
        """Freeze this context into the read-only result handed to consumers."""
        return DungeonLayout.from_grids(
            floor=self.floor,
            walls=self.walls,
            features=self.features,
            rooms=self.rooms,
            wall_segments=self.wall_segments,
            seed=self.rng.master_seed,
        )
