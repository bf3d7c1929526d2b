"""Feature placement layer for pillars and decorative props.

Every ROOM floor tile rolls once for a prop. Pillars were already marked by
the smoothing pass; a pillar cell never also gets a prop.
"""

from __future__ import annotations

import logging

from dungeonforge.environment.generators.pipeline.context import GenerationContext
from dungeonforge.environment.generators.pipeline.layer import GenerationLayer
from dungeonforge.environment.tile_types import TileType
from dungeonforge.util.rng import PROPS_DOMAIN

logger = logging.getLogger(__name__)


class FeaturePlacementLayer(GenerationLayer):
    """Rolls props on room tiles and resolves them against pillars."""

    def __init__(self, prop_chance: float | None = None) -> None:
        """Initialize the feature layer.

        Args:
            prop_chance: Probability of a prop on each room tile.
                Defaults to params.prop_chance.
        """
        self.prop_chance = prop_chance

    def apply(self, ctx: GenerationContext) -> None:
        chance = self.prop_chance
        if chance is None:
            chance = ctx.params.prop_chance
        props_rng = ctx.rng.get(PROPS_DOMAIN)

        # Every room tile rolls, pillar or not
        for x, z, tile in ctx.floor.cells():
            if tile == TileType.ROOM and props_rng.random() < chance:
                ctx.prop_flags[x, z] = True

        suppressed = 0
        for x, z, feature in ctx.features.cells():
            if not ctx.prop_flags[x, z]:
                continue
            if feature == TileType.PILLAR:
                suppressed += 1
                continue
            ctx.features.set(x, z, TileType.FLOOR_PROP)

        logger.debug(
            f"Placed {ctx.features.count(TileType.FLOOR_PROP)} props, "
            f"{suppressed} suppressed by pillars"
        )
