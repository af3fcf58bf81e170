from __future__ import annotations

import random
from typing import List, Sequence, Tuple

import esper

from hexsort.config import GameConfig
from hexsort.components.stack_option import StackOption
from hexsort.components.unit_stack import Unit
from hexsort.events.bus import (
    EventBus,
    EVENT_OPTIONS_SPAWNED,
    EVENT_PLACEMENT_ACCEPTED,
    EVENT_STACK_PLACED,
)


def generate_random_stack(
    rng: random.Random,
    size: int,
    palette: Sequence[str],
    *,
    colors_range: Tuple[int, int] = (1, 3),
    switch_chance: float = 0.3,
) -> List[Unit]:
    """Build a stack of size units drawing from a few colors picked from palette.

    Colors are picked with replacement, so a stack may end up with fewer
    distinct colors than drawn. The stack starts in the first pick and may
    switch to any pick before each unit.
    """
    if size <= 0 or not palette:
        return []
    picks = [rng.choice(palette) for _ in range(rng.randint(*colors_range))]
    current = picks[0]
    units: List[Unit] = []
    for _ in range(size):
        if rng.random() < switch_chance:
            current = rng.choice(picks)
        units.append(Unit(current))
    return units


class SpawnSystem:
    """Keeps the option slots stocked; all slots refill together once every one is used."""

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None, *, rng: random.Random | None = None):
        self.event_bus = event_bus
        self.config = config or GameConfig()
        self._rng: random.Random = rng or random.Random()
        self.event_bus.subscribe(EVENT_PLACEMENT_ACCEPTED, self.on_placement_accepted)
        self.event_bus.subscribe(EVENT_STACK_PLACED, self.on_stack_placed)
        self.spawn_options()

    def options(self) -> List[StackOption]:
        return sorted((option for _, option in esper.get_component(StackOption)), key=lambda o: o.slot)

    def option_at(self, slot: int) -> StackOption | None:
        for _, option in esper.get_component(StackOption):
            if option.slot == slot:
                return option
        return None

    def available_options(self) -> List[StackOption]:
        return [option for option in self.options() if not option.reserved]

    def spawn_options(self) -> List[int]:
        """Fill every empty slot with a fresh random stack."""
        low, high = self.config.stack_size_range
        spawned: List[int] = []
        for slot in range(self.config.option_slots):
            if self.option_at(slot) is not None:
                continue
            units = generate_random_stack(
                self._rng,
                self._rng.randint(low, high),
                self.config.palette(),
                colors_range=self.config.colors_per_stack_range,
                switch_chance=self.config.color_switch_chance,
            )
            esper.create_entity(StackOption(slot=slot, units=units))
            spawned.append(slot)
        if spawned:
            self.event_bus.emit(EVENT_OPTIONS_SPAWNED, slots=spawned)
        return spawned

    def on_placement_accepted(self, sender, **kwargs):
        option = self._option_for(kwargs.get('slot'))
        if option is not None:
            option.reserved = True

    def on_stack_placed(self, sender, **kwargs):
        slot = kwargs.get('slot')
        if slot is None:
            return
        for ent, option in esper.get_component(StackOption):
            if option.slot == slot:
                esper.delete_entity(ent, immediate=True)
                break
        if not esper.get_component(StackOption):
            self.spawn_options()

    def _option_for(self, slot) -> StackOption | None:
        if slot is None:
            return None
        return self.option_at(slot)
