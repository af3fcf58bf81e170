from dataclasses import dataclass
from typing import List, Tuple

from hexsort.components.unit_stack import Unit

@dataclass(slots=True)
class PopAnimation:
    request_id: int
    cell: Tuple[int, int]
    units: List[Unit]
    elapsed: float = 0.0
    sounded: int = 0
