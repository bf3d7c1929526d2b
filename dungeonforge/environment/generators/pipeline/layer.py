"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way - placing rooms, reclassifying
floor tiles, deriving walls or scattering features.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for layout generation layers.

    Layers are applied sequentially by the PipelineGenerator. Each layer
    receives a GenerationContext and modifies it in place, and must finish
    completely before the next one starts.
    """

    @abstractmethod
    def apply(self, ctx: GenerationContext) -> None:
        """Apply this layer's generation logic to the context.

        This method should modify the context in place. It may:
        - Modify grids (ctx.floor, ctx.walls, ctx.features)
        - Append rooms or wall segments (ctx.rooms, ctx.wall_segments)
        - Draw from ctx.rng streams for random decisions

        Args:
            ctx: The generation context to modify.
        """
        raise NotImplementedError
