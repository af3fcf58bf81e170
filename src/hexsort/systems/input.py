from hexsort.events.bus import (
    EventBus,
    EVENT_MOUSE_PRESS,
    EVENT_OPTION_DESELECTED,
    EVENT_OPTION_SELECTED,
    EVENT_PLACEMENT_REQUEST,
)
from hexsort.components.game_state import GameMode
from hexsort.systems.board_ops import get_cell_at
from hexsort.systems.spawn_system import SpawnSystem
from hexsort.ui.layout import board_origin, option_slot_at, pixel_to_axial
from hexsort.utils.game_state import get_game_state

MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4


class InputSystem:
    """Click an option to pick it up, then click an empty cell to drop it."""

    def __init__(self, event_bus: EventBus, window, spawn: SpawnSystem):
        self.event_bus = event_bus
        self.window = window
        self.spawn = spawn
        self.selected_slot: int | None = None
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button == MOUSE_BUTTON_RIGHT:
            self._deselect()
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        if get_game_state().mode != GameMode.PLAYING:
            return
        slots = self.spawn.config.option_slots
        slot = option_slot_at(x, y, slots, self.window.width)
        if slot is not None:
            option = self.spawn.option_at(slot)
            if option is not None and not option.reserved:
                self.selected_slot = slot
                self.event_bus.emit(EVENT_OPTION_SELECTED, slot=slot)
            return
        if self.selected_slot is None:
            return
        cell = pixel_to_axial(x, y, board_origin(self.window.width, self.window.height))
        if get_cell_at(cell) is None:
            return
        option = self.spawn.option_at(self.selected_slot)
        slot = self.selected_slot
        self.selected_slot = None
        if option is None or option.reserved:
            return
        self.event_bus.emit(EVENT_PLACEMENT_REQUEST, cell=cell, units=list(option.units), slot=slot)

    def _deselect(self):
        prev = self.selected_slot
        if prev is not None:
            self.selected_slot = None
            self.event_bus.emit(EVENT_OPTION_DESELECTED, slot=prev)
