from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from esper import World

from sumstack.events.bus import (
    EventBus,
    EVENT_SELECTION_CHANGED,
    EVENT_SELECTION_CLEARED,
    EVENT_SUM_MATCHED,
    EVENT_TILE_TOGGLE,
)
from sumstack.systems.board_ops import is_tile, tile_values
from sumstack.utils.game_state import get_game_state, get_selection, is_playing


class SelectionOutcome(Enum):
    EXACT = "exact"
    OVER = "over"
    UNDER = "under"
    # Toggle dropped: unknown tile, or session not in play.
    IGNORED = "ignored"


@dataclass(slots=True)
class ToggleResult:
    outcome: SelectionOutcome
    tile_ids: List[int] = field(default_factory=list)
    total: int = 0

    @property
    def changed(self) -> bool:
        return self.outcome is not SelectionOutcome.IGNORED


class SelectionSystem:
    """Tracks the player's picks and classifies their sum against the target."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.last_result: ToggleResult | None = None
        self.event_bus.subscribe(EVENT_TILE_TOGGLE, self.on_tile_toggle)

    def on_tile_toggle(self, sender, **payload) -> None:
        tile_id = payload.get("tile_id")
        if tile_id is None:
            return
        self.toggle(tile_id)

    def toggle(self, tile_id: int) -> ToggleResult:
        result = self._toggle(tile_id)
        self.last_result = result
        return result

    def current_sum(self) -> int:
        _, total = self._resolve(get_selection(self.world).tile_ids)
        return total

    def _toggle(self, tile_id: int) -> ToggleResult:
        if not is_playing(self.world):
            return ToggleResult(SelectionOutcome.IGNORED)
        selection = get_selection(self.world)
        if tile_id in selection.tile_ids:
            candidate = [i for i in selection.tile_ids if i != tile_id]
        elif is_tile(self.world, tile_id):
            candidate = selection.tile_ids + [tile_id]
        else:
            return ToggleResult(SelectionOutcome.IGNORED)

        tile_ids, total = self._resolve(candidate)
        target = get_game_state(self.world).target
        if total == target:
            selection.tile_ids = []
            self.event_bus.emit(EVENT_SUM_MATCHED, tile_ids=list(tile_ids), total=total)
            return ToggleResult(SelectionOutcome.EXACT, list(tile_ids), total)
        if total > target:
            selection.tile_ids = []
            self.event_bus.emit(EVENT_SELECTION_CLEARED, reason="overshoot", tile_ids=list(tile_ids), total=total)
            return ToggleResult(SelectionOutcome.OVER, list(tile_ids), total)
        selection.tile_ids = tile_ids
        self.event_bus.emit(EVENT_SELECTION_CHANGED, tile_ids=list(tile_ids), total=total)
        return ToggleResult(SelectionOutcome.UNDER, list(tile_ids), total)

    def _resolve(self, tile_ids: List[int]) -> Tuple[List[int], int]:
        # Preserve pick order, drop ids whose tile no longer exists.
        values = tile_values(self.world, tile_ids)
        kept = [i for i in tile_ids if i in values]
        return kept, sum(values[i] for i in kept)
