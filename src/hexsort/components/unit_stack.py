from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True, eq=False)
class Unit:
    """Immutable colored token. Compared by identity so a moved unit stays the same object."""
    color: str


@dataclass(slots=True)
class UnitStack:
    """Units on a cell, bottom to top."""
    units: List[Unit] = field(default_factory=list)

    @property
    def top_color(self) -> str | None:
        return self.units[-1].color if self.units else None
