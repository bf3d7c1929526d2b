"""Base classes for layout generation."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dungeonforge.environment.layout import DungeonLayout

    from .parameters import DungeonParameters


class BaseLayoutGenerator(abc.ABC):
    """Abstract base class for dungeon layout algorithms.

    Parameters are validated on construction, so a generator that exists can
    always run.
    """

    def __init__(self, params: DungeonParameters) -> None:
        params.validate()
        self.params = params

    @property
    def map_width(self) -> int:
        return self.params.width

    @property
    def map_length(self) -> int:
        return self.params.length

    @abc.abstractmethod
    def generate(self) -> DungeonLayout:
        """Generate a complete layout from scratch."""
        raise NotImplementedError
