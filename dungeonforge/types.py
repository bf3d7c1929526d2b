from __future__ import annotations

from typing import Literal, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# Grid coordinates - (x, z) cell on the dungeon floor plan
GridTileCoord: TypeAlias = TileCoord  # Example: x=5, z=3
GridTilePos: TypeAlias = tuple[GridTileCoord, GridTileCoord]  # Example: (5, 3)

# Directions - discrete grid steps
UnitStep: TypeAlias = Literal[-1, 0, 1]
Direction: TypeAlias = tuple[UnitStep, UnitStep]  # Example: (-1, 0) = step towards x=0

# =============================================================================
# RANDOMNESS
# =============================================================================

# Master seed for deterministic generation. None means system entropy.
RandomSeed: TypeAlias = int | str | None
