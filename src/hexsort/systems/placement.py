import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from hexsort.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_PLACEMENT_ACCEPTED,
    EVENT_PLACEMENT_REJECTED,
    EVENT_PLACEMENT_REQUEST,
    EVENT_STACK_PLACED,
)
from hexsort.components.game_state import GameMode
from hexsort.components.unit_stack import Unit
from hexsort.systems.board_ops import get_cell_at, lock_of, stack_of
from hexsort.systems.cascade import CascadeSystem
from hexsort.utils.game_state import get_game_state, get_or_create_cascade_state

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingDrop:
    entity: int
    cell: Tuple[int, int]
    units: List[Unit] = field(default_factory=list)
    slot: int | None = None


class PlacementSystem:
    """Validates drops onto empty cells, waits for the drop animation, then starts a cascade."""

    def __init__(self, event_bus: EventBus, cascade: CascadeSystem):
        self.event_bus = event_bus
        self.cascade = cascade
        self._pending: Dict[int, PendingDrop] = {}
        self.event_bus.subscribe(EVENT_PLACEMENT_REQUEST, self.on_placement_request)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    def on_placement_request(self, sender, **kwargs):
        cell = kwargs.get('cell')
        units = kwargs.get('units')
        if cell is None or units is None:
            return
        self.place(cell, units, slot=kwargs.get('slot'))

    def rejection_reason(self, cell: Tuple[int, int], units: Sequence[Unit]) -> str | None:
        if get_game_state().mode != GameMode.PLAYING:
            return 'level_complete'
        if not units:
            return 'empty_stack'
        entity = get_cell_at(cell)
        if entity is None:
            return 'out_of_range'
        if stack_of(entity).units:
            return 'occupied'
        lock = lock_of(entity)
        if lock.locked:
            return 'locked'
        if lock.pending_placement:
            return 'pending'
        return None

    def place(self, cell: Tuple[int, int], units: Sequence[Unit], *, slot: int | None = None) -> bool:
        """Begin dropping units onto cell; False (and no state change) when the drop is illegal."""
        reason = self.rejection_reason(cell, units)
        if reason is not None:
            logger.debug("Placement at %s rejected: %s", cell, reason)
            self.event_bus.emit(EVENT_PLACEMENT_REJECTED, cell=cell, slot=slot, reason=reason)
            return False
        entity = get_cell_at(cell)
        coord = (int(cell[0]), int(cell[1]))
        lock_of(entity).pending_placement = True
        get_or_create_cascade_state().pending_placements += 1
        request_id = self.event_bus.next_request_id()
        self._pending[request_id] = PendingDrop(entity=entity, cell=coord, units=list(units), slot=slot)
        self.event_bus.emit(EVENT_PLACEMENT_ACCEPTED, cell=coord, units=list(units), slot=slot)
        self.event_bus.emit(
            EVENT_ANIMATION_START,
            kind='place',
            request_id=request_id,
            cell=coord,
            units=list(units),
        )
        return True

    def on_animation_complete(self, sender, **kwargs):
        drop = self._pending.pop(kwargs.get('request_id'), None)
        if drop is None:
            return
        stack_of(drop.entity).units = list(drop.units)
        lock_of(drop.entity).pending_placement = False
        state = get_or_create_cascade_state()
        state.pending_placements = max(0, state.pending_placements - 1)
        self.event_bus.emit(EVENT_STACK_PLACED, cell=drop.cell, units=list(drop.units), slot=drop.slot)
        self.cascade.trigger(drop.entity)

    @property
    def pending_drops(self) -> List[PendingDrop]:
        return list(self._pending.values())
