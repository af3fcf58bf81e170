import random

import pytest

from hexsort.components.game_state import GameMode
from hexsort.events.bus import (
    EVENT_MOUSE_PRESS,
    EVENT_OPTION_DESELECTED,
    EVENT_OPTION_SELECTED,
    EVENT_PLACEMENT_REQUEST,
)
from hexsort.systems.input import MOUSE_BUTTON_LEFT, MOUSE_BUTTON_RIGHT, InputSystem
from hexsort.systems.spawn_system import SpawnSystem
from hexsort.ui.layout import axial_to_pixel, board_origin, option_slot_center
from hexsort.utils.game_state import set_game_mode
from tests.helpers import Engine, ManualPresenter, recorder


class DummyWindow:
    width = 900
    height = 700


@pytest.fixture
def setup(world, bus):
    engine = Engine(bus)
    presenter = ManualPresenter(bus)
    spawn = SpawnSystem(bus, rng=random.Random(4))
    window = DummyWindow()
    system = InputSystem(bus, window, spawn)
    return engine, presenter, spawn, system


def click_slot(bus, slot, button=MOUSE_BUTTON_LEFT):
    x, y = option_slot_center(slot, 3, DummyWindow.width)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)


def click_cell(bus, q, r, button=MOUSE_BUTTON_LEFT):
    x, y = axial_to_pixel(q, r, board_origin(DummyWindow.width, DummyWindow.height))
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)


def test_pick_option_then_drop_on_cell(setup, bus):
    engine, presenter, spawn, system = setup
    events = recorder(bus, EVENT_OPTION_SELECTED, EVENT_PLACEMENT_REQUEST)
    expected = [u.color for u in spawn.option_at(1).units]
    click_slot(bus, 1)
    assert events[EVENT_OPTION_SELECTED] == [{'slot': 1}]
    click_cell(bus, 1, -1)
    (request,) = events[EVENT_PLACEMENT_REQUEST]
    assert request['cell'] == (1, -1)
    assert request['slot'] == 1
    assert [u.color for u in request['units']] == expected
    assert system.selected_slot is None
    assert spawn.option_at(1).reserved
    assert presenter.kinds() == ['place']


def test_reserved_option_cannot_be_picked(setup, bus):
    _, _, spawn, system = setup
    spawn.option_at(0).reserved = True
    selected = recorder(bus, EVENT_OPTION_SELECTED)[EVENT_OPTION_SELECTED]
    click_slot(bus, 0)
    assert selected == []
    assert system.selected_slot is None


def test_cell_click_without_selection_does_nothing(setup, bus):
    requests = recorder(bus, EVENT_PLACEMENT_REQUEST)[EVENT_PLACEMENT_REQUEST]
    click_cell(bus, 0, 0)
    assert requests == []


def test_click_off_board_keeps_selection(setup, bus):
    _, _, _, system = setup
    click_slot(bus, 2)
    bus.emit(EVENT_MOUSE_PRESS, x=5, y=695, button=MOUSE_BUTTON_LEFT)
    assert system.selected_slot == 2


def test_right_click_deselects(setup, bus):
    _, _, _, system = setup
    deselected = recorder(bus, EVENT_OPTION_DESELECTED)[EVENT_OPTION_DESELECTED]
    click_slot(bus, 2)
    click_cell(bus, 0, 0, button=MOUSE_BUTTON_RIGHT)
    assert system.selected_slot is None
    assert deselected == [{'slot': 2}]


def test_clicks_ignored_after_level_complete(setup, bus):
    _, _, _, system = setup
    set_game_mode(bus, GameMode.LEVEL_COMPLETE)
    click_slot(bus, 0)
    assert system.selected_slot is None
