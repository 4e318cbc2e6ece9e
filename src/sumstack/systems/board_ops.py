from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Set, Tuple

from esper import World

from sumstack.components.board import Board
from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import NumberTile

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class TileSnapshot:
    """Read-only view of a tile handed out to callers."""
    id: int
    value: int
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


@dataclass(slots=True)
class GravityMove:
    tile_id: int
    source: Position
    target: Position


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def tile_at(world: World, row: int, col: int) -> TileSnapshot | None:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    return snapshot_for(world, entity)


def is_tile(world: World, entity: int) -> bool:
    if not world.entity_exists(entity):
        return False
    return world.has_component(entity, NumberTile) and world.has_component(entity, BoardPosition)


def snapshot_for(world: World, entity: int) -> TileSnapshot | None:
    try:
        tile = world.component_for_entity(entity, NumberTile)
        position = world.component_for_entity(entity, BoardPosition)
    except KeyError:
        return None
    return TileSnapshot(id=entity, value=tile.value, row=position.row, col=position.col)


def all_tiles(world: World) -> List[TileSnapshot]:
    """Every tile on the board, ordered by column then row."""
    tiles = [
        TileSnapshot(id=entity, value=tile.value, row=position.row, col=position.col)
        for entity, (tile, position) in world.get_components(NumberTile, BoardPosition)
    ]
    tiles.sort(key=lambda t: (t.col, t.row, t.id))
    return tiles


def tile_values(world: World, tile_ids: Iterable[int]) -> Dict[int, int]:
    """Map each id that still names a tile to its value; stale ids are dropped."""
    values: Dict[int, int] = {}
    for tile_id in tile_ids:
        if not is_tile(world, tile_id):
            continue
        values[tile_id] = world.component_for_entity(tile_id, NumberTile).value
    return values


def remove_tiles(world: World, tile_ids: Iterable[int]) -> List[TileSnapshot]:
    """Delete the given tiles and return what is left. Unknown ids are skipped."""
    for tile_id in set(tile_ids):
        if is_tile(world, tile_id):
            world.delete_entity(tile_id, immediate=True)
    return all_tiles(world)


def replace_all(world: World, tiles: Iterable[TileSnapshot]) -> None:
    """Make the board hold exactly ``tiles``.

    Existing entities named by a snapshot take its value and coordinates,
    tile entities not named are deleted. Cell uniqueness is the caller's
    responsibility.
    """
    wanted = {tile.id: tile for tile in tiles}
    for entity, _ in list(world.get_components(NumberTile, BoardPosition)):
        if entity not in wanted:
            world.delete_entity(entity, immediate=True)
    for tile_id, snap in wanted.items():
        if is_tile(world, tile_id):
            world.component_for_entity(tile_id, NumberTile).value = snap.value
            position = world.component_for_entity(tile_id, BoardPosition)
            position.row = snap.row
            position.col = snap.col
        else:
            raise KeyError(f"tile {tile_id} does not exist")


def clear_board(world: World) -> None:
    for entity, _ in list(world.get_components(NumberTile, BoardPosition)):
        world.delete_entity(entity, immediate=True)


def compute_gravity_layout(
    tiles: Iterable[TileSnapshot], rows: int
) -> Tuple[List[TileSnapshot], List[GravityMove]]:
    """Compact every column toward the bottom row.

    Tiles in a column are ordered bottom-most first and reassigned rows
    ``rows-1, rows-2, ...``; relative order within a column is kept and
    columns never interact.
    """
    by_col: Dict[int, List[TileSnapshot]] = {}
    for tile in tiles:
        by_col.setdefault(tile.col, []).append(tile)
    layout: List[TileSnapshot] = []
    moves: List[GravityMove] = []
    for col in sorted(by_col):
        column = sorted(by_col[col], key=lambda t: t.row, reverse=True)
        for index, tile in enumerate(column):
            new_row = rows - 1 - index
            if new_row != tile.row:
                moves.append(GravityMove(tile_id=tile.id, source=(tile.row, col), target=(new_row, col)))
            layout.append(TileSnapshot(id=tile.id, value=tile.value, row=new_row, col=col))
    return layout, moves


def find_layout_violations(world: World) -> List[str]:
    """Describe every broken board invariant (shared cells, floating or out-of-bounds tiles)."""
    problems: List[str] = []
    dims = board_dimensions(world)
    if not dims:
        return ["board missing"]
    rows, cols = dims
    seen: Set[Position] = set()
    per_col: Dict[int, List[int]] = {}
    for tile in all_tiles(world):
        if not (0 <= tile.row < rows and 0 <= tile.col < cols):
            problems.append(f"tile {tile.id} out of bounds at {tile.position}")
        if tile.position in seen:
            problems.append(f"cell {tile.position} holds more than one tile")
        seen.add(tile.position)
        per_col.setdefault(tile.col, []).append(tile.row)
    for col, occupied in per_col.items():
        expected = list(range(rows - len(occupied), rows))
        if sorted(occupied) != expected:
            problems.append(f"column {col} is not compacted: rows {sorted(occupied)}")
    return problems
