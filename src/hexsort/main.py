"""Entry point for the HexSort stacking puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import argparse
import logging
import random

from arcade import Window, run, key

from hexsort.config import GameConfig, load_config
from hexsort.world import create_world
from hexsort.constants import WINDOW_WIDTH, WINDOW_HEIGHT
from hexsort.events.bus import EVENT_TICK, EventBus, EVENT_MOUSE_PRESS, EVENT_NEXT_LEVEL_REQUEST
from hexsort.systems.animation import AnimationSystem
from hexsort.systems.board import BoardSystem
from hexsort.systems.cascade import CascadeSystem
from hexsort.systems.input import InputSystem
from hexsort.systems.placement import PlacementSystem
from hexsort.systems.render import RenderSystem
from hexsort.systems.score_system import ScoreSystem
from hexsort.systems.spawn_system import SpawnSystem


class HexSortWindow(Window):
    def __init__(self, config: GameConfig, rng: random.Random | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "HexSort")
        self.set_update_rate(1/60)
        self.background_color = (118, 212, 249)
        self.event_bus = EventBus()
        create_world(self.event_bus, config)

        # Board and cascade systems
        self.board_system = BoardSystem(self.event_bus, radius=config.board_radius)
        self.cascade_system = CascadeSystem(
            self.event_bus,
            threshold=config.merge_threshold,
            points_per_unit=config.points_per_unit,
        )
        self.placement_system = PlacementSystem(self.event_bus, self.cascade_system)
        self.score_system = ScoreSystem(self.event_bus, config)
        self.spawn_system = SpawnSystem(self.event_bus, config, rng=rng)

        # Presentation systems
        self.animation_system = AnimationSystem(self.event_bus)
        self.input_system = InputSystem(self.event_bus, self, self.spawn_system)
        self.render_system = RenderSystem(self.event_bus, self, self.spawn_system)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in (key.ENTER, key.RETURN):
            self.event_bus.emit(EVENT_NEXT_LEVEL_REQUEST)


def main(argv=None):
    parser = argparse.ArgumentParser(description="HexSort stacking puzzle")
    parser.add_argument("--config", help="JSON file with GameConfig overrides")
    parser.add_argument("--seed", type=int, help="Seed for reproducible option spawns")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = load_config(args.config) if args.config else GameConfig()
    rng = random.Random(args.seed) if args.seed is not None else None
    HexSortWindow(config, rng=rng)
    run()

if __name__ == "__main__":
    main()
