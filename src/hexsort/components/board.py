from dataclasses import dataclass, field
from typing import Dict, Tuple

Coord = Tuple[int, int]

@dataclass(slots=True)
class Board:
    radius: int
    # Axial (q, r) -> cell entity. Built once; never resized.
    cells: Dict[Coord, int] = field(default_factory=dict)
