from __future__ import annotations

import esper

from hexsort.components.cascade_state import CascadeState
from hexsort.components.game_state import GameMode, GameState
from hexsort.components.progress import Progress
from hexsort.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def get_game_state() -> GameState:
    for _, state in esper.get_component(GameState):
        return state
    state = GameState()
    esper.create_entity(state)
    return state


def get_progress() -> Progress:
    for _, progress in esper.get_component(Progress):
        return progress
    progress = Progress()
    esper.create_entity(progress)
    return progress


def get_or_create_cascade_state() -> CascadeState:
    """Return the shared CascadeState component, creating it if absent."""
    for _, state in esper.get_component(CascadeState):
        return state
    state = CascadeState()
    esper.create_entity(state)
    return state


def set_game_mode(event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs."""

    state = get_game_state()
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
