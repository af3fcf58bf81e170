from dataclasses import dataclass

@dataclass(slots=True)
class CellLock:
    locked: bool = False             # owned by an in-flight cascade step
    pending_placement: bool = False  # target of an in-flight drop
