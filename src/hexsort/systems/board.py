import logging
from typing import Tuple

import esper

from hexsort.events.bus import EventBus, EVENT_BOARD_RESET
from hexsort.components.board import Board
from hexsort.components.cell_lock import CellLock
from hexsort.components.hex_cell import HexCell
from hexsort.components.unit_stack import UnitStack
from hexsort.constants import BOARD_RADIUS
from hexsort.systems.board_ops import hex_coords, get_cell_at

logger = logging.getLogger(__name__)


class BoardSystem:
    def __init__(self, event_bus: EventBus, radius: int = BOARD_RADIUS):
        self.event_bus = event_bus
        # Create a single board entity with Board component
        self.board_entity = esper.create_entity(Board(radius=radius))
        self.event_bus.subscribe(EVENT_BOARD_RESET, self.on_board_reset)
        self._init_board()

    @property
    def board(self) -> Board:
        return esper.component_for_entity(self.board_entity, Board)

    def _init_board(self):
        board = self.board
        for q, r in hex_coords(board.radius):
            ent = esper.create_entity(HexCell(q=q, r=r), UnitStack(), CellLock())
            board.cells[(q, r)] = ent
        logger.debug("Board of radius %d created with %d cells", board.radius, len(board.cells))

    def cell_at(self, coord: Tuple[int, int]) -> int | None:
        return get_cell_at(coord)

    def reset(self):
        """Empty every stack and clear every flag; the cell set itself is kept."""
        for ent in self.board.cells.values():
            esper.component_for_entity(ent, UnitStack).units = []
            lock = esper.component_for_entity(ent, CellLock)
            lock.locked = False
            lock.pending_placement = False

    def on_board_reset(self, sender, **kwargs):
        self.reset()
        logger.debug("Board reset (%s)", kwargs.get('reason', 'unspecified'))
