from __future__ import annotations

import logging

from esper import World

from sumstack.components.board import Board
from sumstack.components.game_state import GameMode, SessionPhase
from sumstack.config import GameConfig
from sumstack.events.bus import (
    EventBus,
    EVENT_PAUSE,
    EVENT_RESUME,
    EVENT_SESSION_END,
    EVENT_SESSION_START,
    EVENT_SESSION_STARTED,
    EVENT_TARGET_REQUEST,
)
from sumstack.factories.tiles import TileFactory
from sumstack.systems.board_ops import clear_board, get_board
from sumstack.utils.game_state import (
    clear_selection,
    get_countdown,
    get_game_state,
    set_phase,
    set_phase_if,
)

logger = logging.getLogger(__name__)


class SessionSystem:
    """Owns the session lifecycle: start/restart, pause, resume and leaving."""

    def __init__(self, world: World, event_bus: EventBus, config: GameConfig, tile_factory: TileFactory) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.tile_factory = tile_factory
        self.event_bus.subscribe(EVENT_SESSION_START, self.on_session_start)
        self.event_bus.subscribe(EVENT_SESSION_END, self.on_session_end)
        self.event_bus.subscribe(EVENT_PAUSE, self.on_pause)
        self.event_bus.subscribe(EVENT_RESUME, self.on_resume)

    def on_session_start(self, sender, **payload) -> None:
        mode = payload.get("mode")
        if not isinstance(mode, GameMode):
            raise ValueError(f"unknown game mode: {mode!r}")
        self.start(mode)

    def start(self, mode: GameMode) -> None:
        self.config.validate()
        board: Board = get_board(self.world)
        board.rows = self.config.rows
        board.cols = self.config.cols

        state = get_game_state(self.world)
        state.mode = mode
        state.score = 0
        clear_selection(self.world, self.event_bus, reason="reset")
        clear_board(self.world)
        spawned = self.tile_factory.spawn_initial_rows()
        self.event_bus.emit(EVENT_TARGET_REQUEST, reason="session_start")

        countdown = get_countdown(self.world)
        countdown.duration = self.config.timed_interval
        countdown.remaining = self.config.timed_interval
        countdown.running = mode == GameMode.TIMED

        # A restart from PLAYING keeps the phase but is still a fresh session.
        set_phase(self.world, self.event_bus, SessionPhase.PLAYING)
        logger.info("session started: mode=%s target=%s", mode.name, state.target)
        self.event_bus.emit(
            EVENT_SESSION_STARTED,
            mode=mode,
            target=state.target,
            tile_ids=[tile.id for tile in spawned],
        )

    def on_session_end(self, sender, **payload) -> None:
        self.end()

    def end(self) -> None:
        """Leave the current session: the countdown stops and the phase returns to READY.

        The board is left as it was so a menu can still draw it behind itself.
        """
        state = get_game_state(self.world)
        if state.phase == SessionPhase.READY:
            return
        get_countdown(self.world).running = False
        clear_selection(self.world, self.event_bus, reason="session_end")
        state.mode = None
        set_phase(self.world, self.event_bus, SessionPhase.READY)
        logger.info("session ended: score=%s best=%s", state.score, state.best_score)

    def on_pause(self, sender, **payload) -> None:
        if not set_phase_if(self.world, self.event_bus, SessionPhase.PLAYING, SessionPhase.PAUSED):
            return
        get_countdown(self.world).running = False

    def on_resume(self, sender, **payload) -> None:
        if not set_phase_if(self.world, self.event_bus, SessionPhase.PAUSED, SessionPhase.PLAYING):
            return
        get_countdown(self.world).running = get_game_state(self.world).mode == GameMode.TIMED
