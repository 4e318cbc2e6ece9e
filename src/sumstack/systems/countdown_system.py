from __future__ import annotations

from esper import World

from sumstack.components.game_state import GameMode
from sumstack.events.bus import (
    EventBus,
    EVENT_COUNTDOWN_CHANGED,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_TICK,
)
from sumstack.utils.game_state import get_countdown, get_game_state, is_playing


class CountdownSystem:
    """Advances the timed-mode countdown one unit per tick."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **payload) -> None:
        if get_game_state(self.world).mode != GameMode.TIMED or not is_playing(self.world):
            return
        countdown = get_countdown(self.world)
        if not countdown.running:
            return
        if countdown.remaining <= 1:
            self.event_bus.emit(EVENT_ROW_INJECT_REQUEST, reason="timer")
            # Injection may have ended the game; a stopped countdown stays as it is.
            if countdown.running:
                countdown.remaining = countdown.duration
        else:
            countdown.remaining -= 1
        self.event_bus.emit(EVENT_COUNTDOWN_CHANGED, remaining=countdown.remaining, duration=countdown.duration)
