"""Generation parameters and their validation.

Parameters are checked once, before any grid is allocated. Bad values raise
InvalidConfigurationError instead of being clamped into range.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dungeonforge import config
from dungeonforge.types import RandomSeed


class InvalidConfigurationError(ValueError):
    """Raised when generation parameters cannot produce a layout."""


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; True rooms or a False width are always mistakes
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {value!r}"
        )
    return value


@dataclass(frozen=True)
class RoomParameters:
    """Bounds for the uniform room-size draw, half-open: [min_size, max_size)."""

    min_size: int = config.DEFAULT_ROOM_MIN_SIZE
    max_size: int = config.DEFAULT_ROOM_MAX_SIZE

    def validate(self) -> None:
        min_size = _require_int("room min_size", self.min_size)
        max_size = _require_int("room max_size", self.max_size)
        if min_size < 1:
            raise InvalidConfigurationError(
                f"room min_size must be at least 1, got {min_size}"
            )
        if min_size >= max_size:
            raise InvalidConfigurationError(
                f"room min_size ({min_size}) must be less than max_size ({max_size})"
            )

    @property
    def largest(self) -> int:
        """The biggest side a room can be drawn with."""
        return self.max_size - 1


@dataclass(frozen=True)
class DungeonParameters:
    """Everything the pipeline needs to derive one layout.

    Attributes:
        width: Grid size along x.
        length: Grid size along z.
        room_params: Room-size draw range.
        number_of_rooms: Room candidates to attempt. None derives the count
            from the grid area (one room per config.TILES_PER_ROOM tiles).
        min_distance_between_rooms: Empty tiles required between two
            accepted rooms.
        smoothing_passes: Cellular automaton passes to run.
        pillar_cooldown: Eligible cells skipped after each pillar in a pass.
        prop_chance: Probability that a room floor tile gets a prop.
        seed: Master seed for every random stream. None is non-deterministic.
    """

    width: int = config.DEFAULT_DUNGEON_WIDTH
    length: int = config.DEFAULT_DUNGEON_LENGTH
    room_params: RoomParameters = field(default_factory=RoomParameters)
    number_of_rooms: int | None = None
    min_distance_between_rooms: int = config.DEFAULT_MIN_DISTANCE_BETWEEN_ROOMS
    smoothing_passes: int = config.SMOOTHING_PASSES
    pillar_cooldown: int = config.PILLAR_COOLDOWN
    prop_chance: float = config.FLOOR_PROP_CHANCE
    seed: RandomSeed = config.RANDOM_SEED

    @property
    def room_count(self) -> int:
        """Room candidates to attempt, resolving the area-driven default."""
        if self.number_of_rooms is None:
            return self.width * self.length // config.TILES_PER_ROOM
        return self.number_of_rooms

    def validate(self) -> None:
        """Check every parameter; the first bad one raises InvalidConfigurationError."""
        width = _require_int("width", self.width)
        length = _require_int("length", self.length)
        if width < config.MIN_DUNGEON_SIZE or length < config.MIN_DUNGEON_SIZE:
            raise InvalidConfigurationError(
                f"Dungeon must be at least {config.MIN_DUNGEON_SIZE}x"
                f"{config.MIN_DUNGEON_SIZE}, got {width}x{length}"
            )

        self.room_params.validate()

        # Room cells live in [1, size - 2]; the outer row/column is the margin.
        interior_width = width - 2 * config.ROOM_BORDER_MARGIN
        interior_length = length - 2 * config.ROOM_BORDER_MARGIN
        largest = self.room_params.largest
        if largest > interior_width or largest > interior_length:
            raise InvalidConfigurationError(
                f"Rooms up to {largest} tiles do not fit inside a "
                f"{width}x{length} dungeon with a "
                f"{config.ROOM_BORDER_MARGIN}-tile margin"
            )

        if self.number_of_rooms is not None:
            rooms = _require_int("number_of_rooms", self.number_of_rooms)
            if rooms < 0:
                raise InvalidConfigurationError(
                    f"number_of_rooms must be non-negative, got {rooms}"
                )

        distance = _require_int(
            "min_distance_between_rooms", self.min_distance_between_rooms
        )
        if distance < 0:
            raise InvalidConfigurationError(
                f"min_distance_between_rooms must be non-negative, got {distance}"
            )

        passes = _require_int("smoothing_passes", self.smoothing_passes)
        if passes < 0:
            raise InvalidConfigurationError(
                f"smoothing_passes must be non-negative, got {passes}"
            )

        cooldown = _require_int("pillar_cooldown", self.pillar_cooldown)
        if cooldown < 0:
            raise InvalidConfigurationError(
                f"pillar_cooldown must be non-negative, got {cooldown}"
            )

        if (
            isinstance(self.prop_chance, bool)
            or not isinstance(self.prop_chance, int | float)
            or not 0.0 <= self.prop_chance <= 1.0
        ):
            raise InvalidConfigurationError(
                f"prop_chance must be within [0, 1], got {self.prop_chance}"
            )
