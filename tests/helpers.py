from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from esper import World

from sumstack.components.game_state import GameMode, SessionPhase
from sumstack.config import GameConfig
from sumstack.events.bus import EventBus
from sumstack.factories.tiles import TileFactory
from sumstack.systems.board_ops import TileSnapshot
from sumstack.systems.countdown_system import CountdownSystem
from sumstack.systems.match_resolution import MatchResolutionSystem
from sumstack.systems.row_injection import RowInjectionSystem
from sumstack.systems.selection_system import SelectionSystem
from sumstack.systems.session_system import SessionSystem
from sumstack.systems.target_system import TargetSystem
from sumstack.utils.game_state import get_countdown, get_game_state
from sumstack.world import create_world


class ScriptedRandom(random.Random):
    """Random source that replays scripted ``randint`` results.

    ``sample`` takes the first ``k`` items of the population unless a
    scripted pick (list of indices) is queued. Once the script runs out the
    regular seeded generator takes over.
    """

    def __init__(self, *, ints: Iterable[int] = (), samples: Iterable[Sequence[int]] = (), seed: int = 0) -> None:
        super().__init__(seed)
        self.ints: List[int] = list(ints)
        self.samples: List[Sequence[int]] = list(samples)

    def randint(self, a: int, b: int) -> int:
        if self.ints:
            value = self.ints.pop(0)
            assert a <= value <= b, f"scripted {value} outside [{a}, {b}]"
            return value
        return super().randint(a, b)

    def sample(self, population, k, **kwargs):
        items = list(population)
        if self.samples:
            return [items[i] for i in self.samples.pop(0)]
        return items[:k]


@dataclass
class Engine:
    world: World
    bus: EventBus
    config: GameConfig
    factory: TileFactory
    targets: TargetSystem
    selection: SelectionSystem
    resolver: MatchResolutionSystem
    injector: RowInjectionSystem
    countdown: CountdownSystem
    session: SessionSystem


def build_engine(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
    mode: GameMode | None = None,
) -> Engine:
    """Wire every system onto a fresh world. With ``mode`` the board is left empty but in play."""

    config = config or GameConfig()
    bus = EventBus()
    rng = rng or ScriptedRandom()
    world = create_world(config, rng=rng)
    factory = TileFactory(world, config, rng)
    engine = Engine(
        world=world,
        bus=bus,
        config=config,
        factory=factory,
        targets=TargetSystem(world, bus, config, rng),
        selection=SelectionSystem(world, bus),
        resolver=MatchResolutionSystem(world, bus, config),
        injector=RowInjectionSystem(world, bus, factory),
        countdown=CountdownSystem(world, bus),
        session=SessionSystem(world, bus, config, factory),
    )
    if mode is not None:
        state = get_game_state(world)
        state.mode = mode
        state.phase = SessionPhase.PLAYING
        get_countdown(world).running = mode == GameMode.TIMED
    return engine


def place_tiles(world: World, cells: Iterable[Tuple[int, int, int]]) -> List[TileSnapshot]:
    """Create tiles from ``(row, col, value)`` triples."""
    from sumstack.components.board_position import BoardPosition
    from sumstack.components.tile import NumberTile

    placed = []
    for row, col, value in cells:
        entity = world.create_entity(NumberTile(value=value), BoardPosition(row=row, col=col))
        placed.append(TileSnapshot(id=entity, value=value, row=row, col=col))
    return placed


def set_target(world: World, target: int) -> None:
    get_game_state(world).target = target
