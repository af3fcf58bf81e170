import esper

from hexsort.config import GameConfig
from hexsort.events.bus import EventBus
from hexsort.components.cascade_state import CascadeState
from hexsort.components.game_state import GameState, GameMode
from hexsort.components.progress import Progress

DEFAULT_WORLD = "hexsort"


def create_world(
    event_bus: EventBus,
    config: GameConfig | None = None,
    *,
    name: str = DEFAULT_WORLD,
    initial_mode: GameMode = GameMode.PLAYING,
) -> str:
    """Switch esper to a fresh world context and register the session singletons.

    Returns the context name so callers can switch back to it later.
    """
    config = config or GameConfig()
    esper.switch_world(name)
    esper.clear_database()

    # Global game state and score resources.
    esper.create_entity(
        GameState(mode=initial_mode),
        Progress(level=1, target=config.level_target(1)),
        CascadeState(),
    )
    return name
