from sumstack.components.game_state import GameMode, SessionPhase
from sumstack.config import GameConfig
from sumstack.events.bus import (
    EVENT_GAME_OVER,
    EVENT_PAUSE,
    EVENT_PHASE_CHANGED,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_ROW_INJECTED,
)
from sumstack.systems.board_ops import all_tiles, find_layout_violations
from sumstack.utils.game_state import get_countdown, get_game_state
from tests.helpers import build_engine, place_tiles


def test_row_shifts_tiles_up_and_adds_bottom_row():
    engine = build_engine(mode=GameMode.TURN_BASED)
    a, b = place_tiles(engine.world, [(9, 0, 4), (8, 0, 2)])
    injected = {}
    engine.bus.subscribe(EVENT_ROW_INJECTED, lambda s, **k: injected.update(k))

    engine.bus.emit(EVENT_ROW_INJECT_REQUEST, reason="clear")

    tiles = {t.id: t for t in all_tiles(engine.world)}
    assert (tiles[a.id].row, tiles[b.id].row) == (8, 7)
    assert tiles[a.id].value == 4
    new_ids = injected["new_tiles"]
    assert len(new_ids) == 7
    assert sorted(tiles[i].col for i in new_ids) == list(range(7))
    assert all(tiles[i].row == 9 for i in new_ids)
    assert injected["reason"] == "clear"
    assert find_layout_violations(engine.world) == []


def test_overflow_sets_game_over_without_mutation():
    engine = build_engine(mode=GameMode.TURN_BASED)
    place_tiles(engine.world, [(row, 1, 5) for row in range(10)])
    before = all_tiles(engine.world)
    over = []
    phases = []
    engine.bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))
    engine.bus.subscribe(EVENT_PHASE_CHANGED, lambda s, **k: phases.append(k["new"]))

    new_tiles = engine.injector.inject()

    assert new_tiles == []
    assert all_tiles(engine.world) == before
    assert get_game_state(engine.world).phase is SessionPhase.GAME_OVER
    assert phases == [SessionPhase.GAME_OVER]
    assert len(over) == 1


def test_game_over_is_terminal():
    engine = build_engine(mode=GameMode.TIMED)
    place_tiles(engine.world, [(0, 0, 1)] + [(row, 0, 1) for row in range(1, 10)])
    over = []
    engine.bus.subscribe(EVENT_GAME_OVER, lambda s, **k: over.append(k))
    engine.injector.inject()
    before = all_tiles(engine.world)
    engine.injector.inject()
    engine.bus.emit(EVENT_ROW_INJECT_REQUEST, reason="timer")
    assert len(over) == 1
    assert all_tiles(engine.world) == before
    assert get_countdown(engine.world).running is False


def test_injection_ignored_while_paused():
    engine = build_engine(mode=GameMode.TURN_BASED)
    place_tiles(engine.world, [(9, 0, 4)])
    engine.bus.emit(EVENT_PAUSE)
    assert engine.injector.inject() == []
    assert len(all_tiles(engine.world)) == 1


def test_timed_injection_resets_countdown():
    engine = build_engine(mode=GameMode.TIMED)
    countdown = get_countdown(engine.world)
    countdown.remaining = 3
    engine.injector.inject(reason="timer")
    assert countdown.remaining == countdown.duration == 10


def test_board_overflows_after_filling_every_row():
    config = GameConfig(rows=4, cols=3)
    engine = build_engine(config, mode=GameMode.TURN_BASED)
    engine.factory.spawn_initial_rows()
    injections = 0
    while not engine.injector.would_overflow():
        assert engine.injector.inject()
        injections += 1
        assert find_layout_violations(engine.world) == []
    assert injections == 3
    assert len(all_tiles(engine.world)) == 12
    assert engine.injector.inject() == []
    assert get_game_state(engine.world).phase is SessionPhase.GAME_OVER
