"""Tests for the pipeline infrastructure.

Covers:
- GenerationContext
- PipelineGenerator
- Pipeline factory
"""

from __future__ import annotations

import threading
from typing import ClassVar

import numpy as np
import pytest

from dungeonforge.environment.generators import (
    DungeonParameters,
    InvalidConfigurationError,
    RoomParameters,
)
from dungeonforge.environment.generators.pipeline import (
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
from dungeonforge.environment.layout import DungeonLayout, Room
from dungeonforge.environment.tile_types import TileType
from dungeonforge.util.rng import RNGProvider, ROOMS_DOMAIN

# =============================================================================
# GenerationContext
# =============================================================================


class TestGenerationContext:
    """Tests for GenerationContext dataclass."""

    def test_create_empty_initializes_grids(self) -> None:
        """All three grids start EMPTY with the requested shape."""
        ctx = GenerationContext.create_empty(DungeonParameters(width=12, length=8))

        for grid in (ctx.floor, ctx.walls, ctx.features):
            assert grid.tiles.shape == (12, 8)
            assert grid.tiles.dtype == np.uint8
            assert np.all(grid.tiles == TileType.EMPTY)

        assert ctx.prop_flags.shape == (12, 8)
        assert not ctx.prop_flags.any()
        assert ctx.rooms == []
        assert ctx.wall_segments == []
        assert ctx.width == 12
        assert ctx.length == 8

    def test_create_empty_seeds_rng_from_params(self) -> None:
        ctx = GenerationContext.create_empty(DungeonParameters(seed=42))
        assert ctx.rng.master_seed == 42

    def test_create_empty_uses_given_rng(self) -> None:
        provider = RNGProvider("custom")
        ctx = GenerationContext.create_empty(DungeonParameters(seed=42), rng=provider)
        assert ctx.rng is provider

    def test_to_layout_snapshots_state(self) -> None:
        """Output is a read-only DungeonLayout detached from the context."""
        ctx = GenerationContext.create_empty(DungeonParameters(seed=9))
        ctx.floor.tiles[:, :] = TileType.STANDARD
        ctx.rooms.append(Room(2, 2, 3, 3))

        layout = ctx.to_layout()
        ctx.floor.set(1, 1, TileType.ENVIRO)

        assert isinstance(layout, DungeonLayout)
        assert layout.floor_at(1, 1) == TileType.STANDARD
        assert layout.rooms == (Room(2, 2, 3, 3),)
        assert layout.seed == 9
        assert not layout.floor.flags.writeable


# =============================================================================
# PipelineGenerator
# =============================================================================


class RecordingLayer(GenerationLayer):
    """Test layer that records when it was applied."""

    call_order: ClassVar[list[str]] = []

    def __init__(self, name: str) -> None:
        self.name = name

    def apply(self, ctx: GenerationContext) -> None:
        RecordingLayer.call_order.append(self.name)
        ctx.floor.set(0, 0, TileType.STANDARD)


class CheckerLayer(GenerationLayer):
    """Layer that records what the context looked like when it ran."""

    def __init__(self) -> None:
        self.seen_floor: list[TileType] = []

    def apply(self, ctx: GenerationContext) -> None:
        self.seen_floor.append(ctx.floor.get(0, 0))


class TestPipelineGenerator:
    """Tests for PipelineGenerator."""

    def test_layers_applied_in_order(self) -> None:
        RecordingLayer.call_order = []

        generator = PipelineGenerator(
            layers=[RecordingLayer("first"), RecordingLayer("second")],
            params=DungeonParameters(),
        )
        generator.generate()

        assert RecordingLayer.call_order == ["first", "second"]

    def test_context_passed_between_layers(self) -> None:
        """Mutations from layer N are visible to layer N+1."""
        checker = CheckerLayer()
        generator = PipelineGenerator(
            layers=[RecordingLayer("mark"), checker],
            params=DungeonParameters(),
        )
        generator.generate()

        assert checker.seen_floor == [TileType.STANDARD]

    def test_each_generate_starts_from_a_fresh_context(self) -> None:
        """Nothing from a previous call leaks into the next one."""
        checker = CheckerLayer()
        generator = PipelineGenerator(
            layers=[checker, RecordingLayer("mark")],
            params=DungeonParameters(),
        )

        generator.generate()
        generator.generate()

        assert checker.seen_floor == [TileType.EMPTY, TileType.EMPTY]

    def test_each_generate_returns_a_new_layout(self) -> None:
        generator = create_dungeon_pipeline(DungeonParameters(seed=5))

        first = generator.generate()
        second = generator.generate()

        assert first is not second
        np.testing.assert_array_equal(first.floor, second.floor)
        assert first.rooms == second.rooms

    def test_empty_pipeline(self) -> None:
        layout = PipelineGenerator(layers=[], params=DungeonParameters()).generate()

        assert layout.floor.shape == (10, 10)
        assert np.all(layout.floor == TileType.EMPTY)

    def test_constructor_validates_params(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            PipelineGenerator(layers=[], params=DungeonParameters(width=3))

    def test_map_dimensions(self) -> None:
        generator = PipelineGenerator(
            layers=[], params=DungeonParameters(width=14, length=9)
        )
        assert generator.map_width == 14
        assert generator.map_length == 9

    def test_injected_rng_overrides_params_seed(self) -> None:
        params = DungeonParameters(width=20, length=20, seed=1)
        generator = create_dungeon_pipeline(params)

        injected = generator.generate(rng=RNGProvider(2))
        direct = create_dungeon_pipeline(
            DungeonParameters(width=20, length=20, seed=2)
        ).generate()

        assert injected.seed == 2
        assert injected.rooms == direct.rooms
        np.testing.assert_array_equal(injected.floor, direct.floor)

    def test_rng_streams_are_isolated_per_stage(self) -> None:
        """Consuming the rooms stream does not shift the props stream."""

        class BurnRoomsStream(GenerationLayer):
            def apply(self, ctx: GenerationContext) -> None:
                for _ in range(100):
                    ctx.rng.get(ROOMS_DOMAIN).random()

        class StampBlock(GenerationLayer):
            def apply(self, ctx: GenerationContext) -> None:
                ctx.floor.tiles[2:10, 2:10] = TileType.ROOM

        def build(extra: list[GenerationLayer]) -> PipelineGenerator:
            params = DungeonParameters(width=12, length=12, number_of_rooms=0, seed=3)
            layers: list[GenerationLayer] = [*extra]
            # A single room block gives the props something to roll on
            layers.append(StampBlock())
            layers.append(FeaturePlacementLayer(prop_chance=0.5))
            return PipelineGenerator(layers=layers, params=params)

        plain = build([]).generate()
        burned = build([BurnRoomsStream()]).generate()

        np.testing.assert_array_equal(plain.features, burned.features)

    def test_concurrent_generation_gives_complete_layouts(self) -> None:
        generator = create_dungeon_pipeline(
            DungeonParameters(width=24, length=24, seed="threads")
        )
        expected = generator.generate()
        results: list[DungeonLayout] = []
        lock = threading.Lock()

        def worker() -> None:
            layout = generator.generate()
            with lock:
                results.append(layout)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 4
        for layout in results:
            np.testing.assert_array_equal(layout.floor, expected.floor)
            np.testing.assert_array_equal(layout.walls, expected.walls)
            np.testing.assert_array_equal(layout.features, expected.features)


# =============================================================================
# Factory
# =============================================================================


class TestFactory:
    """Tests for the pipeline factory functions."""

    def test_create_pipeline_dungeon(self) -> None:
        generator = create_pipeline("dungeon", DungeonParameters(seed=1))

        assert isinstance(generator, PipelineGenerator)
        assert [type(layer) for layer in generator.layers] == [
            RoomPlacementLayer,
            SmoothingLayer,
            WallDerivationLayer,
            FeaturePlacementLayer,
        ]

    def test_create_pipeline_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown pipeline"):
            create_pipeline("settlement", DungeonParameters())

    def test_generate_dungeon_convenience(self) -> None:
        layout = generate_dungeon(15, 12, seed=8, number_of_rooms=4)

        assert layout.width == 15
        assert layout.length == 12
        assert len(layout.rooms) == 4
        assert layout.seed == 8

    def test_generate_dungeon_room_sizes(self) -> None:
        layout = generate_dungeon(
            30, 30, min_room_size=4, max_room_size=7, number_of_rooms=10, seed=2
        )

        for room in layout.rooms:
            assert 4 <= room.width < 7
            assert 4 <= room.length < 7

    def test_generate_dungeon_matches_pipeline(self) -> None:
        convenience = generate_dungeon(20, 16, seed="same")
        explicit = create_dungeon_pipeline(
            DungeonParameters(
                width=20, length=16, room_params=RoomParameters(), seed="same"
            )
        ).generate()

        np.testing.assert_array_equal(convenience.floor, explicit.floor)
        np.testing.assert_array_equal(convenience.walls, explicit.walls)
        np.testing.assert_array_equal(convenience.features, explicit.features)

    def test_generate_dungeon_rejects_bad_input(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            generate_dungeon(4, 4)
