from hexsort.components.board import Board
from hexsort.events.bus import EVENT_BOARD_RESET
from hexsort.systems.board import BoardSystem
from hexsort.systems.board_ops import (
    cell_coord,
    get_cell_at,
    hex_coords,
    hex_distance,
    lock_of,
    neighbors,
    stack_colors,
)
from tests.helpers import paint


def test_radius_two_board_has_nineteen_cells(world, bus):
    board = BoardSystem(bus, radius=2)
    assert len(board.board.cells) == 19
    assert all(hex_distance(coord, (0, 0)) <= 2 for coord in board.board.cells)


def test_hex_coords_sizes():
    assert hex_coords(0) == [(0, 0)]
    assert len(hex_coords(1)) == 7
    assert len(hex_coords(3)) == 37


def test_out_of_range_lookup_returns_none(world, bus):
    BoardSystem(bus, radius=2)
    assert get_cell_at((3, 0)) is None
    assert get_cell_at((2, 1)) is None
    assert get_cell_at(("x", 0)) is None
    assert get_cell_at((2, -2)) is not None


def test_lookup_without_board_returns_none(world):
    assert get_cell_at((0, 0)) is None


def test_neighbors_follow_fixed_direction_order(world, bus):
    BoardSystem(bus, radius=2)
    center = get_cell_at((0, 0))
    coords = [cell_coord(n) for n in neighbors(center)]
    assert coords == [(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)]


def test_corner_cell_has_three_neighbors(world, bus):
    BoardSystem(bus, radius=2)
    corner = get_cell_at((2, 0))
    assert sorted(cell_coord(n) for n in neighbors(corner)) == [(1, 0), (1, 1), (2, -1)]


def test_board_reset_event_clears_stacks_and_flags(world, bus):
    board = BoardSystem(bus, radius=1)
    paint({(0, 0): ['red', 'blue'], (1, 0): ['green']})
    lock_of(get_cell_at((0, 0))).locked = True
    lock_of(get_cell_at((1, 0))).pending_placement = True
    bus.emit(EVENT_BOARD_RESET, reason='test')
    assert stack_colors((0, 0)) == []
    assert stack_colors((1, 0)) == []
    assert not lock_of(get_cell_at((0, 0))).locked
    assert not lock_of(get_cell_at((1, 0))).pending_placement
    # The cell set is fixed
    assert len(board.board.cells) == 7
