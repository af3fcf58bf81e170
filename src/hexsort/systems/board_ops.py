from __future__ import annotations

from typing import Iterable, List, Tuple

import esper

from hexsort.components.board import Board
from hexsort.components.cell_lock import CellLock
from hexsort.components.hex_cell import HexCell
from hexsort.components.unit_stack import Unit, UnitStack

Coord = Tuple[int, int]

# Axial neighbor offsets in the fixed scan order used by cluster search.
HEX_DIRECTIONS: Tuple[Coord, ...] = (
    (1, 0), (1, -1), (0, -1),
    (-1, 0), (-1, 1), (0, 1),
)


def hex_distance(a: Coord, b: Coord) -> int:
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dr) + abs(dq + dr)) // 2


def hex_coords(radius: int) -> List[Coord]:
    """All axial coordinates within radius of the origin, q-major order."""
    coords: List[Coord] = []
    for q in range(-radius, radius + 1):
        r_low = max(-radius, -q - radius)
        r_high = min(radius, -q + radius)
        for r in range(r_low, r_high + 1):
            coords.append((q, r))
    return coords


def get_board() -> Board | None:
    for _, board in esper.get_component(Board):
        return board
    return None


def get_cell_at(coord: Coord) -> int | None:
    """Cell entity at coord, or None when the board is missing or coord is out of range."""
    board = get_board()
    if board is None:
        return None
    try:
        return board.cells.get((int(coord[0]), int(coord[1])))
    except (TypeError, ValueError, IndexError):
        return None


def cell_coord(entity: int) -> Coord:
    return esper.component_for_entity(entity, HexCell).coord


def stack_of(entity: int) -> UnitStack:
    return esper.component_for_entity(entity, UnitStack)


def lock_of(entity: int) -> CellLock:
    return esper.component_for_entity(entity, CellLock)


def top_color(entity: int) -> str | None:
    return stack_of(entity).top_color


def neighbors(entity: int) -> List[int]:
    """Cells at the six axial offsets of entity that exist on the board."""
    board = get_board()
    if board is None:
        return []
    q, r = cell_coord(entity)
    found: List[int] = []
    for dq, dr in HEX_DIRECTIONS:
        neighbor = board.cells.get((q + dq, r + dr))
        if neighbor is not None:
            found.append(neighbor)
    return found


def set_stack(coord: Coord, colors: Iterable[str]) -> List[Unit]:
    """Replace the stack at coord with fresh units of the given colors (bottom to top)."""
    entity = get_cell_at(coord)
    if entity is None:
        raise KeyError(f"No cell at {coord}")
    units = [Unit(color) for color in colors]
    stack_of(entity).units = units
    return units


def stack_colors(coord: Coord) -> List[str]:
    entity = get_cell_at(coord)
    if entity is None:
        return []
    return [unit.color for unit in stack_of(entity).units]


def total_units(entities: Iterable[int] | None = None) -> int:
    if entities is None:
        board = get_board()
        entities = board.cells.values() if board is not None else ()
    return sum(len(stack_of(entity).units) for entity in entities)


def occupied_cells() -> List[Coord]:
    board = get_board()
    if board is None:
        return []
    return sorted(coord for coord, entity in board.cells.items() if stack_of(entity).units)
