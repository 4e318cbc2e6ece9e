"""In-process API for a presentation layer driving one SumStack board.

Every call is routed through the event bus, so player toggles and timer
ticks mutate the world through the same handlers, one at a time.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List

from sumstack.components.game_state import GameMode, SessionPhase
from sumstack.config import GameConfig
from sumstack.events.bus import (
    EventBus,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_SESSION_END,
    EVENT_SESSION_START,
    EVENT_TICK,
    EVENT_TILE_TOGGLE,
)
from sumstack.factories.tiles import TileFactory
from sumstack.systems.board_ops import TileSnapshot, all_tiles
from sumstack.systems.countdown_system import CountdownSystem
from sumstack.systems.match_resolution import MatchResolutionSystem
from sumstack.systems.row_injection import RowInjectionSystem
from sumstack.systems.selection_system import SelectionOutcome, SelectionSystem, ToggleResult
from sumstack.systems.session_system import SessionSystem
from sumstack.systems.target_system import TargetSystem
from sumstack.utils.game_state import get_countdown, get_game_state, get_selection
from sumstack.world import create_world


@dataclass(slots=True)
class SessionSnapshot:
    tiles: List[TileSnapshot]
    target: int


@dataclass(slots=True)
class ToggleReport:
    """Outcome of one toggle; ``tiles`` is left as None for ignored toggles."""
    outcome: SelectionOutcome
    tile_ids: List[int] = field(default_factory=list)
    total: int = 0
    tiles: List[TileSnapshot] | None = None


class SumStackGame:
    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.event_bus = event_bus or EventBus()
        self.world = create_world(self.config, rng=rng)
        rng = getattr(self.world, "random")
        self.tile_factory = TileFactory(self.world, self.config, rng)
        self.target_system = TargetSystem(self.world, self.event_bus, self.config, rng)
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, self.config)
        self.row_injection_system = RowInjectionSystem(self.world, self.event_bus, self.tile_factory)
        self.countdown_system = CountdownSystem(self.world, self.event_bus)
        self.session_system = SessionSystem(self.world, self.event_bus, self.config, self.tile_factory)

    def start_session(self, mode: GameMode) -> SessionSnapshot:
        self.event_bus.emit(EVENT_SESSION_START, mode=mode)
        return SessionSnapshot(tiles=self.current_grid(), target=self.current_target())

    def end_session(self) -> None:
        self.event_bus.emit(EVENT_SESSION_END)

    def toggle_tile(self, tile_id: int) -> ToggleReport:
        self.selection_system.last_result = None
        self.event_bus.emit(EVENT_TILE_TOGGLE, tile_id=tile_id)
        result: ToggleResult | None = self.selection_system.last_result
        if result is None:
            return ToggleReport(SelectionOutcome.IGNORED)
        report = ToggleReport(result.outcome, list(result.tile_ids), result.total)
        if result.changed:
            report.tiles = self.current_grid()
        return report

    def tick(self) -> None:
        self.event_bus.emit(EVENT_TICK)

    def pause(self) -> None:
        self.event_bus.emit(EVENT_PAUSE)

    def resume(self) -> None:
        self.event_bus.emit(EVENT_RESUME)

    def is_game_over(self) -> bool:
        return self.phase() == SessionPhase.GAME_OVER

    def current_target(self) -> int:
        return get_game_state(self.world).target

    def current_grid(self) -> List[TileSnapshot]:
        return all_tiles(self.world)

    def phase(self) -> SessionPhase:
        return get_game_state(self.world).phase

    def mode(self) -> GameMode | None:
        return get_game_state(self.world).mode

    def score(self) -> int:
        return get_game_state(self.world).score

    def best_score(self) -> int:
        return get_game_state(self.world).best_score

    def selected_ids(self) -> List[int]:
        return list(get_selection(self.world).tile_ids)

    def selection_sum(self) -> int:
        return self.selection_system.current_sum()

    def time_left(self) -> int | None:
        if self.mode() != GameMode.TIMED:
            return None
        return get_countdown(self.world).remaining
