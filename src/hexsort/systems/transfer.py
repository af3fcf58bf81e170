from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from hexsort.components.unit_stack import Unit
from hexsort.systems.board_ops import stack_of


@dataclass(slots=True)
class Transfer:
    source: int
    units: List[Unit]  # the source's top run, bottom to top


@dataclass(slots=True)
class TransferPlan:
    target: int
    color: str
    runs: Dict[int, int] = field(default_factory=dict)
    transfers: List[Transfer] = field(default_factory=list)

    @property
    def sources(self) -> List[int]:
        return [transfer.source for transfer in self.transfers]

    @property
    def moved(self) -> int:
        return sum(len(transfer.units) for transfer in self.transfers)


def top_run(units: Sequence[Unit], color: str | None = None) -> List[Unit]:
    """Maximal contiguous suffix of units matching color (the top color when omitted)."""
    if not units:
        return []
    if color is None:
        color = units[-1].color
    start = len(units)
    while start > 0 and units[start - 1].color == color:
        start -= 1
    return list(units[start:])


def plan_transfer(cluster: Sequence[int], trigger: int) -> TransferPlan | None:
    """Elect the consolidation target and list what every other member gives up.

    The member with the strictly longest top run wins. The trigger keeps any
    tie it takes part in; among other members the first discovered wins.
    """
    if len(cluster) < 2:
        return None
    color = stack_of(trigger).top_color
    if color is None:
        return None
    runs: Dict[int, List[Unit]] = {}
    best = trigger
    best_length = 0
    for member in cluster:
        run = top_run(stack_of(member).units, color)
        runs[member] = run
        if len(run) > best_length:
            best_length = len(run)
            best = member
        elif len(run) == best_length and member == trigger:
            best = trigger
    plan = TransferPlan(target=best, color=color, runs={m: len(r) for m, r in runs.items()})
    for member in cluster:
        if member == best or not runs[member]:
            continue
        plan.transfers.append(Transfer(source=member, units=runs[member]))
    return plan
