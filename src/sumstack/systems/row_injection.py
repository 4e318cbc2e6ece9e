from __future__ import annotations

import logging
from typing import List

from esper import World

from sumstack.components.game_state import GameMode, SessionPhase
from sumstack.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_ROW_INJECTED,
)
from sumstack.factories.tiles import TileFactory
from sumstack.systems.board_ops import TileSnapshot, all_tiles, get_board, replace_all
from sumstack.utils.game_state import get_countdown, get_game_state, is_playing, set_phase

logger = logging.getLogger(__name__)


class RowInjectionSystem:
    """Pushes a fresh row in from the bottom, or ends the game when it cannot."""

    def __init__(self, world: World, event_bus: EventBus, tile_factory: TileFactory) -> None:
        self.world = world
        self.event_bus = event_bus
        self.tile_factory = tile_factory
        self.event_bus.subscribe(EVENT_ROW_INJECT_REQUEST, self.on_row_inject_request)

    def on_row_inject_request(self, sender, **payload) -> None:
        self.inject(reason=payload.get("reason", "request"))

    def would_overflow(self) -> bool:
        return any(tile.row == 0 for tile in all_tiles(self.world))

    def inject(self, reason: str = "request") -> List[TileSnapshot]:
        """Insert one row at the bottom. Returns the new tiles, empty when nothing changed."""
        if not is_playing(self.world):
            return []
        if self.would_overflow():
            self._end_game()
            return []
        shifted = [
            TileSnapshot(id=tile.id, value=tile.value, row=tile.row - 1, col=tile.col)
            for tile in all_tiles(self.world)
        ]
        replace_all(self.world, shifted)
        new_tiles = self.tile_factory.make_row(get_board(self.world).rows - 1)
        state = get_game_state(self.world)
        if state.mode == GameMode.TIMED:
            countdown = get_countdown(self.world)
            countdown.remaining = countdown.duration
        logger.debug("row injected (%s): %d new tiles", reason, len(new_tiles))
        self.event_bus.emit(EVENT_ROW_INJECTED, new_tiles=[tile.id for tile in new_tiles], reason=reason)
        return new_tiles

    def _end_game(self) -> None:
        state = get_game_state(self.world)
        get_countdown(self.world).running = False
        set_phase(self.world, self.event_bus, SessionPhase.GAME_OVER)
        logger.info("game over: score %s (best %s)", state.score, state.best_score)
        self.event_bus.emit(EVENT_GAME_OVER, score=state.score, best_score=state.best_score)
