from __future__ import annotations

import random
from typing import List

from esper import World

from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import NumberTile
from sumstack.config import GameConfig
from sumstack.systems.board_ops import TileSnapshot


class TileFactory:
    """Creates tile entities with fresh ids and uniformly drawn values."""

    def __init__(self, world: World, config: GameConfig, rng: random.Random | None = None) -> None:
        self.world = world
        self.config = config
        self.rng = rng or getattr(world, "random", None) or random.Random()

    def next_value(self) -> int:
        return self.rng.randint(self.config.min_value, self.config.max_value)

    def create_tile(self, row: int, col: int, value: int | None = None) -> TileSnapshot:
        if value is None:
            value = self.next_value()
        entity = self.world.create_entity(NumberTile(value=value), BoardPosition(row=row, col=col))
        return TileSnapshot(id=entity, value=value, row=row, col=col)

    def make_row(self, row_index: int) -> List[TileSnapshot]:
        """One new tile per column ``0..cols-1`` on ``row_index``."""
        return [self.create_tile(row_index, col) for col in range(self.config.cols)]

    def spawn_initial_rows(self) -> List[TileSnapshot]:
        spawned: List[TileSnapshot] = []
        for row in range(self.config.rows - self.config.initial_rows, self.config.rows):
            spawned.extend(self.make_row(row))
        return spawned
