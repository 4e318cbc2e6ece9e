import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import logging
import random

from sumstack.components.game_state import GameMode
from sumstack.game import SumStackGame
from sumstack.utils.event_log import attach_event_logger
from sumstack.utils.solver import find_matching_subset

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

mode = GameMode.TIMED if "--timed" in sys.argv else GameMode.TURN_BASED
game = SumStackGame(rng=random.Random(1234))
attach_event_logger(game.event_bus)


def show(game):
    rows = {}
    for tile in game.current_grid():
        rows.setdefault(tile.row, {})[tile.col] = tile.value
    for r in range(game.config.rows):
        print(' '.join(str(rows.get(r, {}).get(c, '.')) for c in range(game.config.cols)))
    print('target', game.current_target(), 'score', game.score(), 'phase', game.phase().name)


game.start_session(mode)
show(game)
for step in range(200):
    if game.is_game_over():
        break
    group = find_matching_subset(game.current_grid(), game.current_target())
    if group and step % 3:
        for tile in group:
            report = game.toggle_tile(tile.id)
        print('picked', [t.value for t in group], '->', report.outcome.name)
    else:
        game.tick()
    show(game)
print('final score', game.score(), 'best', game.best_score())
