"""
Configuration constants.

Centralizes all magic numbers and tuning values used by the dungeon generator.
Organized by pipeline stage for easy maintenance.
"""

from dungeonforge.types import RandomSeed

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "burrow1"
RANDOM_SEED: RandomSeed = None

# =============================================================================
# DUNGEON DIMENSIONS
# =============================================================================

DEFAULT_DUNGEON_WIDTH = 10
DEFAULT_DUNGEON_LENGTH = 10

# Smallest grid that still fits the 1-tile margin plus a minimum room
MIN_DUNGEON_SIZE = 5

# =============================================================================
# ROOM PLACEMENT
# =============================================================================

# Room sizes are drawn from [MIN, MAX) in both dimensions
DEFAULT_ROOM_MIN_SIZE = 3
DEFAULT_ROOM_MAX_SIZE = 5

# Area-driven room count: one room per this many tiles
TILES_PER_ROOM = 30

# Empty tiles required between two accepted rooms
DEFAULT_MIN_DISTANCE_BETWEEN_ROOMS = 1

# Rooms never touch the outer boundary row/column
ROOM_BORDER_MARGIN = 1

# =============================================================================
# SMOOTHING AUTOMATON
# =============================================================================

SMOOTHING_PASSES = 5

# Eligible cells skipped after each pillar, per pass
PILLAR_COOLDOWN = 2

# =============================================================================
# FEATURES
# =============================================================================

# Chance that a room floor tile receives a decorative prop
FLOOR_PROP_CHANCE = 0.10
