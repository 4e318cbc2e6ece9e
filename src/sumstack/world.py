import random

from esper import World

from sumstack.components.board import Board
from sumstack.components.countdown import Countdown
from sumstack.components.game_state import GameState
from sumstack.components.selection import Selection
from sumstack.config import GameConfig


def create_world(config: GameConfig | None = None, *, rng: random.Random | None = None) -> World:
    """Build a world holding the board and session singletons, with no tiles yet."""
    config = (config or GameConfig()).validate()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(Board(rows=config.rows, cols=config.cols))
    world.create_entity(
        GameState(),
        Selection(),
        Countdown(duration=config.timed_interval, remaining=config.timed_interval),
    )
    return world
