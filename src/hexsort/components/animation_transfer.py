from dataclasses import dataclass
from typing import List, Tuple

from hexsort.components.unit_stack import Unit

@dataclass(slots=True)
class TransferAnimation:
    request_id: int
    source: Tuple[int, int]
    target: Tuple[int, int]
    units: List[Unit]
    elapsed: float = 0.0
    sounded: int = 0
