from typing import Sequence

import esper

from hexsort.events.bus import EventBus, EVENT_OPTION_SELECTED, EVENT_OPTION_DESELECTED, EVENT_PLACEMENT_REQUEST
from hexsort.components.cell_lock import CellLock
from hexsort.components.game_state import GameMode
from hexsort.components.hex_cell import HexCell
from hexsort.components.unit_stack import Unit, UnitStack
from hexsort.constants import HEX_SIZE, PALETTE_COLORS, STACK_PIECE_HEIGHT, OPTION_PIECE_HEIGHT
from hexsort.systems.spawn_system import SpawnSystem
from hexsort.ui.layout import axial_to_pixel, board_origin, hex_corners, option_slot_center
from hexsort.utils.game_state import get_game_state, get_progress

TILE_COLOR = (202, 222, 237)
LOCKED_OUTLINE = (255, 255, 255)
PENDING_OUTLINE = (230, 242, 255)
SELECTED_OUTLINE = (255, 220, 100)
TEXT_COLOR = (30, 40, 60)
MAX_DRAWN_PIECES = 12


class RenderSystem:
    """Draws board, stacks, options and score. Visual only; never mutates state."""

    def __init__(self, event_bus: EventBus, window, spawn: SpawnSystem):
        self.event_bus = event_bus
        self.window = window
        self.spawn = spawn
        self.selected_slot: int | None = None
        self.event_bus.subscribe(EVENT_OPTION_SELECTED, self.on_option_selected)
        self.event_bus.subscribe(EVENT_OPTION_DESELECTED, self.on_option_deselected)
        self.event_bus.subscribe(EVENT_PLACEMENT_REQUEST, self.on_option_deselected)

    def on_option_selected(self, sender, **kwargs):
        self.selected_slot = kwargs.get('slot')

    def on_option_deselected(self, sender, **kwargs):
        self.selected_slot = None

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        origin = board_origin(self.window.width, self.window.height)
        for ent, cell in esper.get_component(HexCell):
            cx, cy = axial_to_pixel(cell.q, cell.r, origin)
            arcade.draw_polygon_filled(hex_corners(cx, cy, HEX_SIZE), TILE_COLOR)
            lock = esper.component_for_entity(ent, CellLock)
            if lock.locked:
                arcade.draw_polygon_outline(hex_corners(cx, cy, HEX_SIZE), LOCKED_OUTLINE, 3)
            elif lock.pending_placement:
                arcade.draw_polygon_outline(hex_corners(cx, cy, HEX_SIZE), PENDING_OUTLINE, 2)
            stack = esper.component_for_entity(ent, UnitStack)
            self._draw_stack(arcade, stack.units, cx, cy, STACK_PIECE_HEIGHT)
        slots = self.spawn.config.option_slots
        for option in self.spawn.options():
            cx, cy = option_slot_center(option.slot, slots, self.window.width)
            if option.slot == self.selected_slot:
                arcade.draw_polygon_outline(hex_corners(cx, cy, HEX_SIZE * 1.1), SELECTED_OUTLINE, 3)
            if not option.reserved:
                self._draw_stack(arcade, option.units, cx, cy, OPTION_PIECE_HEIGHT)
        self._draw_hud(arcade)

    def _draw_stack(self, arcade, units: Sequence[Unit], cx: float, cy: float, piece_height: float):
        shown = units[-MAX_DRAWN_PIECES:]
        for index, unit in enumerate(shown):
            color = PALETTE_COLORS.get(unit.color, (128, 128, 128))
            arcade.draw_polygon_filled(hex_corners(cx, cy + index * piece_height, HEX_SIZE * 0.85), color)
            arcade.draw_polygon_outline(hex_corners(cx, cy + index * piece_height, HEX_SIZE * 0.85), (0, 0, 0), 1)
        if units:
            arcade.draw_text(str(len(units)), cx, cy + len(shown) * piece_height, TEXT_COLOR, 12,
                             anchor_x="center")

    def _draw_hud(self, arcade):
        progress = get_progress()
        top = self.window.height - 30
        arcade.draw_text(f"Score {progress.score}", 20, top, TEXT_COLOR, 18)
        arcade.draw_text(f"Level {progress.level}", self.window.width - 140, top, TEXT_COLOR, 18)
        bar_left, bar_right = self.window.width * 0.3, self.window.width * 0.7
        arcade.draw_lrbt_rectangle_filled(bar_left, bar_right, top, top + 14, (255, 255, 255))
        fill_right = bar_left + (bar_right - bar_left) * progress.fraction
        if fill_right > bar_left:
            arcade.draw_lrbt_rectangle_filled(bar_left, fill_right, top, top + 14, (57, 230, 57))
        if get_game_state().mode == GameMode.LEVEL_COMPLETE:
            arcade.draw_text(
                f"Level {progress.level} complete! Press Enter",
                self.window.width / 2, self.window.height / 2, (255, 255, 255), 28,
                anchor_x="center",
            )
