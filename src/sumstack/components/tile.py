from dataclasses import dataclass

@dataclass(slots=True)
class NumberTile:
    """Numeric value carried by a tile entity.

    The entity id is the tile's identity; placement lives in BoardPosition.
    """
    value: int
