from dataclasses import dataclass, field
from typing import List

@dataclass(slots=True)
class Selection:
    """Ordered tile ids the player has picked toward the current target."""
    tile_ids: List[int] = field(default_factory=list)
