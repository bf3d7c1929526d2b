"""Pipeline generator that orchestrates layer-based layout generation.

The PipelineGenerator runs a sequence of GenerationLayers, each transforming
a shared GenerationContext. Every call to generate() starts from a brand new
context and returns a brand new DungeonLayout.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from dungeonforge.environment.tile_types import TileType
from dungeonforge.util.rng import RNGProvider

from ..base import BaseLayoutGenerator
from .context import GenerationContext

if TYPE_CHECKING:
    from dungeonforge.environment.layout import DungeonLayout

    from ..parameters import DungeonParameters
    from .layer import GenerationLayer

logger = logging.getLogger(__name__)


class PipelineGenerator(BaseLayoutGenerator):
    """Layout generator that runs layers sequentially on a shared context.

    The pipeline creates an empty GenerationContext and passes it through
    each layer in order. Layers modify the context in place, building up
    the final layout.

    Example:
        generator = PipelineGenerator(
            layers=[
                RoomPlacementLayer(),
                SmoothingLayer(),
                WallDerivationLayer(),
                FeaturePlacementLayer(),
            ],
            params=DungeonParameters(width=40, length=30, seed=12345),
        )
        layout = generator.generate()

    Generation holds a lock for its whole run, so concurrent callers each get a
    complete layout and never observe a half-built one.

    Attributes:
        layers: List of GenerationLayer instances to apply.
        params: Validated generation parameters.
    """

    def __init__(
        self,
        layers: list[GenerationLayer],
        params: DungeonParameters,
    ) -> None:
        """Initialize the pipeline generator.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            params: Generation parameters. Validated here.

        Raises:
            InvalidConfigurationError: If params cannot produce a layout.
        """
        super().__init__(params)
        self.layers = layers
        self._lock = threading.Lock()

    def generate(self, rng: RNGProvider | None = None) -> DungeonLayout:
        """Generate a layout by running all layers in sequence.

        Args:
            rng: Optional random stream provider. By default a fresh provider
                seeded from params.seed is used, so repeated calls with a fixed
                seed produce identical layouts.

        Returns:
            A new DungeonLayout with floor, wall and feature grids.
        """
        with self._lock:
            ctx = GenerationContext.create_empty(
                self.params,
                rng=rng if rng is not None else RNGProvider(self.params.seed),
            )

            for layer in self.layers:
                layer.apply(ctx)
                logger.debug(f"Applied {type(layer).__name__}")

            layout = ctx.to_layout()

        logger.info(
            f"Generated {layout.width}x{layout.length} dungeon: "
            f"{len(layout.accepted_rooms)}/{len(layout.rooms)} rooms accepted, "
            f"{len(layout.door_positions())} doors, "
            f"{ctx.features.count(TileType.PILLAR)} pillars, "
            f"{ctx.features.count(TileType.FLOOR_PROP)} props"
        )
        return layout
