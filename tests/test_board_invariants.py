import random

from sumstack.components.game_state import GameMode
from sumstack.config import GameConfig
from sumstack.game import SumStackGame
from sumstack.systems.board_ops import find_layout_violations
from sumstack.systems.selection_system import SelectionOutcome
from sumstack.utils.solver import find_matching_subset


def _play(mode, seed, steps=400):
    rng = random.Random(seed)
    game = SumStackGame(rng=random.Random(seed))
    game.start_session(mode)
    matches = 0
    for _ in range(steps):
        if game.is_game_over():
            break
        roll = rng.random()
        grid = game.current_grid()
        if roll < 0.3:
            group = find_matching_subset(grid, game.current_target())
            for tile in group:
                report = game.toggle_tile(tile.id)
            if group and report.outcome is SelectionOutcome.EXACT:
                matches += 1
        elif roll < 0.7 and grid:
            game.toggle_tile(rng.choice(grid).id)
        else:
            game.tick()
        assert find_layout_violations(game.world) == []
        cells = [(t.row, t.col) for t in game.current_grid()]
        assert len(cells) == len(set(cells))
    return game, matches


def test_invariants_hold_in_timed_play():
    for seed in range(5):
        game, _ = _play(GameMode.TIMED, seed)
        assert game.score() >= 0


def test_invariants_hold_in_turn_based_play():
    for seed in range(5):
        _play(GameMode.TURN_BASED, seed)


def test_score_never_decreases():
    game = SumStackGame(rng=random.Random(11))
    game.start_session(GameMode.TURN_BASED)
    last = 0
    for _ in range(50):
        if game.is_game_over():
            break
        group = find_matching_subset(game.current_grid(), game.current_target())
        if not group:
            break
        # Drop any partial picks so the solver's group is evaluated on its own.
        for tile_id in game.selected_ids():
            game.toggle_tile(tile_id)
        for tile in group:
            game.toggle_tile(tile.id)
        assert game.score() >= last
        last = game.score()


def test_small_board_eventually_overflows():
    game = SumStackGame(GameConfig(rows=3, cols=2, timed_interval=2), rng=random.Random(5))
    game.start_session(GameMode.TIMED)
    for _ in range(20):
        game.tick()
    assert game.is_game_over()
