from __future__ import annotations

import logging

from esper import World

from sumstack.components.countdown import Countdown
from sumstack.components.game_state import GameState, SessionPhase
from sumstack.components.selection import Selection
from sumstack.events.bus import EVENT_PHASE_CHANGED, EVENT_SELECTION_CLEARED, EventBus
from sumstack.systems.board_ops import tile_values

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState component not found")


def get_selection(world: World) -> Selection:
    for _, selection in world.get_component(Selection):
        return selection
    raise RuntimeError("Selection component not found")


def get_countdown(world: World) -> Countdown:
    for _, countdown in world.get_component(Countdown):
        return countdown
    raise RuntimeError("Countdown component not found")


def is_playing(world: World) -> bool:
    return get_game_state(world).phase == SessionPhase.PLAYING


def set_phase(world: World, event_bus: EventBus, phase: SessionPhase) -> bool:
    """Move the session to ``phase``; emits a change event and returns True when it differs."""

    state = get_game_state(world)
    previous = state.phase
    if previous == phase:
        return False
    state.phase = phase
    logger.debug("session phase %s -> %s", previous.name, phase.name)
    event_bus.emit(EVENT_PHASE_CHANGED, previous=previous, new=phase)
    return True


def set_phase_if(world: World, event_bus: EventBus, expected: SessionPhase, phase: SessionPhase) -> bool:
    """Transition only from ``expected``; any other current phase leaves state untouched."""

    if get_game_state(world).phase != expected:
        return False
    return set_phase(world, event_bus, phase)


def clear_selection(world: World, event_bus: EventBus, reason: str) -> bool:
    """Drop every selected id and announce it; returns False when nothing was selected."""

    selection = get_selection(world)
    if not selection.tile_ids:
        return False
    values = tile_values(world, selection.tile_ids)
    previous = [i for i in selection.tile_ids if i in values]
    selection.tile_ids = []
    event_bus.emit(
        EVENT_SELECTION_CLEARED,
        reason=reason,
        tile_ids=previous,
        total=sum(values[i] for i in previous),
    )
    return True
