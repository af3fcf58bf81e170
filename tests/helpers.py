from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from hexsort.components.cell_lock import CellLock
from hexsort.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus
from hexsort.systems.board_ops import get_board, get_cell_at, lock_of, set_stack, stack_of
from hexsort.systems.board import BoardSystem
from hexsort.systems.cascade import CascadeSystem
from hexsort.systems.placement import PlacementSystem
from hexsort.systems.score_system import ScoreSystem

Coord = Tuple[int, int]


def drive(bus: EventBus, ticks: int, dt: float = 0.02) -> None:
    for _ in range(ticks):
        bus.emit(EVENT_TICK, dt=dt)


def paint(layout: Dict[Coord, Sequence[str]]) -> None:
    """Set stacks from a {(q, r): [colors bottom to top]} mapping."""
    for coord, colors in layout.items():
        set_stack(coord, colors)


def colors_at(coord: Coord) -> List[str]:
    return [unit.color for unit in stack_of(get_cell_at(coord)).units]


def board_snapshot() -> Dict[Coord, Tuple[Tuple[str, ...], bool, bool]]:
    board = get_board()
    snapshot = {}
    for coord, ent in board.cells.items():
        lock: CellLock = lock_of(ent)
        snapshot[coord] = (
            tuple(unit.color for unit in stack_of(ent).units),
            lock.locked,
            lock.pending_placement,
        )
    return snapshot


def locked_cells() -> List[Coord]:
    board = get_board()
    return sorted(coord for coord, ent in board.cells.items() if lock_of(ent).locked)


class ManualPresenter:
    """Records animation requests and acknowledges them only when told to."""

    def __init__(self, bus: EventBus):
        self.bus = bus
        self.requests: List[dict] = []
        self.pending: Dict[int, dict] = {}
        bus.subscribe(EVENT_ANIMATION_START, self.on_start)

    def on_start(self, sender, **kwargs):
        self.requests.append(kwargs)
        self.pending[kwargs['request_id']] = kwargs

    def ack(self, request_id: int) -> None:
        request = self.pending.pop(request_id)
        self.bus.emit(EVENT_ANIMATION_COMPLETE, kind=request['kind'], request_id=request_id)

    def ack_all(self, kind: str | None = None) -> int:
        """Acknowledge every request pending right now; returns how many were acknowledged."""
        ids = [rid for rid, req in self.pending.items() if kind is None or req['kind'] == kind]
        for rid in ids:
            if rid in self.pending:
                self.ack(rid)
        return len(ids)

    def settle(self, max_rounds: int = 200) -> None:
        for _ in range(max_rounds):
            if not self.ack_all():
                return
        raise AssertionError("Presenter never settled")

    def kinds(self) -> List[str]:
        return [req['kind'] for req in self.requests]


class InstantPresenter:
    """Acknowledges every animation request synchronously."""

    def __init__(self, bus: EventBus):
        self.bus = bus
        self.requests: List[dict] = []
        bus.subscribe(EVENT_ANIMATION_START, self.on_start)

    def on_start(self, sender, **kwargs):
        self.requests.append(kwargs)
        self.bus.emit(EVENT_ANIMATION_COMPLETE, kind=kwargs['kind'], request_id=kwargs['request_id'])


class Engine:
    def __init__(self, bus: EventBus, radius: int = 2, threshold: int = 10):
        self.board = BoardSystem(bus, radius=radius)
        self.cascade = CascadeSystem(bus, threshold=threshold)
        self.placement = PlacementSystem(bus, self.cascade)
        self.score = ScoreSystem(bus)

    def trigger(self, coord: Coord):
        return self.cascade.trigger(get_cell_at(coord))


def recorder(bus: EventBus, *names: str) -> Dict[str, List[dict]]:
    """Subscribe to events and collect their payloads by name."""
    seen: Dict[str, List[dict]] = {name: [] for name in names}
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: seen[_name].append(payload))
    return seen
