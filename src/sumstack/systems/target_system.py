from __future__ import annotations

import logging
import random
from typing import Sequence

from esper import World

from sumstack.config import GameConfig
from sumstack.constants import (
    TARGET_FALLBACK,
    TARGET_MAX,
    TARGET_MAX_TERMS,
    TARGET_MIN,
    TARGET_MIN_TERMS,
)
from sumstack.events.bus import EVENT_TARGET_CHANGED, EVENT_TARGET_REQUEST, EventBus
from sumstack.systems.board_ops import all_tiles
from sumstack.utils.game_state import get_game_state

logger = logging.getLogger(__name__)


def generate_target(
    values: Sequence[int],
    rng: random.Random,
    *,
    minimum: int = TARGET_MIN,
    maximum: int = TARGET_MAX,
    fallback: int = TARGET_FALLBACK,
    min_terms: int = TARGET_MIN_TERMS,
    max_terms: int = TARGET_MAX_TERMS,
) -> int:
    """Sum a random handful of tile values and clamp it into ``[minimum, maximum]``.

    The clamp can yield a target no subset reaches; that is accepted and the
    draw is never repeated.
    """
    if not values:
        return fallback
    count = min(len(values), rng.randint(min_terms, max_terms))
    total = sum(rng.sample(list(values), count))
    return max(minimum, min(total, maximum))


class TargetSystem:
    """Replaces the session target whenever a new one is requested."""

    def __init__(self, world: World, event_bus: EventBus, config: GameConfig, rng: random.Random | None = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.rng = rng or getattr(world, "random", None) or random.Random()
        self.event_bus.subscribe(EVENT_TARGET_REQUEST, self.on_target_request)

    def on_target_request(self, sender, **payload) -> None:
        self.refresh_target(reason=payload.get("reason", "request"))

    def refresh_target(self, reason: str = "request") -> int:
        values = [tile.value for tile in all_tiles(self.world)]
        target = generate_target(
            values,
            self.rng,
            minimum=self.config.target_min,
            maximum=self.config.target_max,
            fallback=self.config.target_fallback,
            min_terms=self.config.target_min_terms,
            max_terms=self.config.target_max_terms,
        )
        state = get_game_state(self.world)
        previous = state.target
        state.target = target
        logger.debug("target %s -> %s (%s)", previous, target, reason)
        self.event_bus.emit(EVENT_TARGET_CHANGED, target=target, previous=previous, reason=reason)
        return target
