from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from esper import World

from sumstack.components.game_state import GameMode
from sumstack.config import GameConfig
from sumstack.events.bus import (
    EventBus,
    EVENT_MATCH_RESOLVED,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_SUM_MATCHED,
    EVENT_TARGET_REQUEST,
)
from sumstack.systems.board_ops import (
    GravityMove,
    TileSnapshot,
    all_tiles,
    compute_gravity_layout,
    get_board,
    replace_all,
)
from sumstack.utils.game_state import get_game_state, is_playing

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Removes matched tiles, lets the rest fall, then scores and re-targets."""

    def __init__(self, world: World, event_bus: EventBus, config: GameConfig) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config
        self.event_bus.subscribe(EVENT_SUM_MATCHED, self.on_sum_matched)

    def on_sum_matched(self, sender, **payload) -> None:
        tile_ids = payload.get("tile_ids") or []
        total = payload.get("total", 0)
        if not tile_ids or not is_playing(self.world):
            return
        moves = self.resolve(tile_ids)
        state = get_game_state(self.world)
        self.event_bus.emit(EVENT_TARGET_REQUEST, reason="match")
        gained = total * self.config.score_per_point
        state.score += gained
        if state.score > state.best_score:
            state.best_score = state.score
        logger.debug("matched %s for %s (+%s, score %s)", tile_ids, total, gained, state.score)
        self.event_bus.emit(
            EVENT_MATCH_RESOLVED,
            tile_ids=list(tile_ids),
            total=total,
            score=state.score,
            moves=moves,
        )
        if state.mode == GameMode.TURN_BASED:
            self.event_bus.emit(EVENT_ROW_INJECT_REQUEST, reason="clear")

    def resolve(self, tile_ids: Iterable[int]) -> List[GravityMove]:
        """Drop ``tile_ids`` from the board and compact every column in one commit."""
        layout, moves = self.compute(tile_ids)
        replace_all(self.world, layout)
        return moves

    def compute(self, tile_ids: Iterable[int]) -> Tuple[List[TileSnapshot], List[GravityMove]]:
        matched = set(tile_ids)
        remaining = [tile for tile in all_tiles(self.world) if tile.id not in matched]
        rows = get_board(self.world).rows
        return compute_gravity_layout(remaining, rows)
