from dataclasses import dataclass
from typing import List, Tuple

from hexsort.components.unit_stack import Unit

@dataclass(slots=True)
class PlaceAnimation:
    request_id: int
    cell: Tuple[int, int]
    units: List[Unit]
    elapsed: float = 0.0
    sounded: int = 0  # pieces whose start sound has been emitted
