from dataclasses import dataclass


@dataclass(slots=True)
class CascadeState:
    """Tracks in-flight work shared across systems."""

    active_cascades: int = 0
    pending_placements: int = 0
    steps: int = 0
    max_depth: int = 0

    @property
    def settled(self) -> bool:
        return self.active_cascades == 0 and self.pending_placements == 0
