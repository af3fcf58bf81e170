import logging

from hexsort.config import GameConfig
from hexsort.events.bus import (
    EventBus,
    EVENT_BOARD_RESET,
    EVENT_LEVEL_COMPLETE,
    EVENT_LEVEL_STARTED,
    EVENT_MERGE_POPPED,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_SCORE_CHANGED,
)
from hexsort.components.game_state import GameMode
from hexsort.utils.game_state import get_game_state, get_or_create_cascade_state, get_progress, set_game_mode

logger = logging.getLogger(__name__)


class ScoreSystem:
    """Turns merge pops into score and level progress and drives level transitions."""

    def __init__(self, event_bus: EventBus, config: GameConfig | None = None):
        self.event_bus = event_bus
        self.config = config or GameConfig()
        self.event_bus.subscribe(EVENT_MERGE_POPPED, self.on_merge_popped)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self.on_next_level_request)

    def on_merge_popped(self, sender, **kwargs):
        points = kwargs.get('points', 0)
        if points:
            self.add_points(int(points))

    def add_points(self, points: int) -> None:
        progress = get_progress()
        progress.score += points
        completed = False
        if get_game_state().mode == GameMode.PLAYING:
            progress.progress += points
            if progress.progress >= progress.target:
                progress.progress = progress.target
                completed = True
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=progress.score, progress_fraction=progress.fraction)
        if completed:
            logger.info("Level %d complete with score %d", progress.level, progress.score)
            set_game_mode(self.event_bus, GameMode.LEVEL_COMPLETE)
            self.event_bus.emit(EVENT_LEVEL_COMPLETE, level=progress.level)

    def on_next_level_request(self, sender, **kwargs):
        self.next_level()

    def next_level(self) -> bool:
        """Advance to the next level once the current one is complete and the board is settled."""
        if get_game_state().mode != GameMode.LEVEL_COMPLETE:
            return False
        if not get_or_create_cascade_state().settled:
            logger.debug("Next level deferred: board still resolving")
            return False
        progress = get_progress()
        progress.level += 1
        progress.target = self.config.level_target(progress.level)
        progress.progress = 0
        self.event_bus.emit(EVENT_BOARD_RESET, reason='next_level')
        set_game_mode(self.event_bus, GameMode.PLAYING)
        logger.info("Level %d started (target %d)", progress.level, progress.target)
        self.event_bus.emit(EVENT_LEVEL_STARTED, level=progress.level, target=progress.target)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=progress.score, progress_fraction=progress.fraction)
        return True
