from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from hexsort.components.unit_stack import Unit, UnitStack
from hexsort.constants import MERGE_THRESHOLD, POINTS_PER_UNIT
from hexsort.systems.transfer import top_run


@dataclass(slots=True)
class MergeResult:
    run_length: int
    popped: List[Unit] = field(default_factory=list)
    points: int = 0

    @property
    def pops(self) -> bool:
        return bool(self.popped)


def evaluate_merge(
    units: List[Unit],
    *,
    threshold: int = MERGE_THRESHOLD,
    points_per_unit: int = POINTS_PER_UNIT,
) -> MergeResult:
    """Report whether the top run of units reaches threshold and what it scores."""
    run = top_run(units)
    if len(run) < threshold:
        return MergeResult(run_length=len(run))
    return MergeResult(run_length=len(run), popped=run, points=len(run) * points_per_unit)


def apply_merge(stack: UnitStack, result: MergeResult) -> List[Unit]:
    """Remove exactly the reported run from the top of stack."""
    count = len(result.popped)
    if not count:
        return []
    top = stack.units[-count:]
    if len(top) != count or any(a is not b for a, b in zip(top, result.popped)):
        raise RuntimeError("Stack top changed between merge evaluation and removal")
    del stack.units[-count:]
    return top
