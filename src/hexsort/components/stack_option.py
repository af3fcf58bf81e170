from dataclasses import dataclass, field
from typing import List

from hexsort.components.unit_stack import Unit

@dataclass(slots=True)
class StackOption:
    """A spawned stack waiting in an option slot to be dropped on the board."""
    slot: int
    units: List[Unit] = field(default_factory=list)
    reserved: bool = False  # drop accepted, animation in flight
