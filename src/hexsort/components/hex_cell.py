from dataclasses import dataclass
from typing import Tuple

@dataclass(slots=True)
class HexCell:
    """Axial position of a board cell."""
    q: int
    r: int

    @property
    def coord(self) -> Tuple[int, int]:
        return (self.q, self.r)
