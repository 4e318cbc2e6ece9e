"""Bridge engine events onto the standard logging module."""
from __future__ import annotations

import logging
from typing import Iterable

from sumstack.events.bus import ALL_EVENTS, EVENT_TICK, EventBus

logger = logging.getLogger(__name__)


def attach_event_logger(
    event_bus: EventBus,
    log: logging.Logger | None = None,
    *,
    events: Iterable[str] = ALL_EVENTS,
    include_ticks: bool = False,
) -> None:
    """Write one DEBUG record per emitted event. Ticks are skipped unless asked for."""

    target = log or logger
    for name in events:
        if name == EVENT_TICK and not include_ticks:
            continue
        event_bus.subscribe(name, lambda sender, _name=name, **payload: target.debug("%s %s", _name, payload))
