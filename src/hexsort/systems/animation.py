from typing import Dict, Tuple, Type

import esper

from hexsort.events.bus import (EVENT_TICK, EventBus, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE,
                                EVENT_SOUND)
from hexsort.components.animation_place import PlaceAnimation
from hexsort.components.animation_pop import PopAnimation
from hexsort.components.animation_transfer import TransferAnimation
from hexsort.components.duration import Duration
from hexsort.constants import (
    PLACE_DURATION, PLACE_STAGGER,
    TRANSFER_DURATION, TRANSFER_STAGGER,
    POP_DURATION, POP_STAGGER,
    SOUND_PLACE, SOUND_SORT, SOUND_MERGE,
    SOUND_MIN_PITCH, SOUND_MAX_PITCH,
)

# kind -> (component type, per-piece duration, stagger, sound kind, sound params)
ANIMATION_KINDS: Dict[str, Tuple[Type, float, float, str, Tuple[float, float, float]]] = {
    'place': (PlaceAnimation, PLACE_DURATION, PLACE_STAGGER, 'place', SOUND_PLACE),
    'transfer': (TransferAnimation, TRANSFER_DURATION, TRANSFER_STAGGER, 'sort', SOUND_SORT),
    'pop': (PopAnimation, POP_DURATION, POP_STAGGER, 'merge', SOUND_MERGE),
}


def clamp_pitch(pitch: float) -> float:
    return min(max(pitch, SOUND_MIN_PITCH), SOUND_MAX_PITCH)


def total_duration(piece_duration: float, stagger: float, pieces: int) -> float:
    """Time until the last staggered piece settles."""
    return piece_duration + stagger * max(pieces - 1, 0)


class AnimationSystem:
    """Drives timing of animation requests; each request is its own entity.

    Acknowledges every ``animation_start`` with ``animation_complete`` carrying the
    same request id once its last staggered piece has settled.
    """
    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind')
        request_id = kwargs.get('request_id')
        if kind not in ANIMATION_KINDS or request_id is None:
            return
        comp_type, piece_duration, stagger, _, _ = ANIMATION_KINDS[kind]
        units = list(kwargs.get('units') or [])
        if kind == 'transfer':
            anim = TransferAnimation(
                request_id=request_id,
                source=kwargs.get('source'),
                target=kwargs.get('target'),
                units=units,
            )
        else:
            anim = comp_type(request_id=request_id, cell=kwargs.get('cell'), units=units)
        esper.create_entity(anim, Duration(total_duration(piece_duration, stagger, len(units))))

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        for kind, (comp_type, _, stagger, sound_kind, sound) in ANIMATION_KINDS.items():
            for ent, anim in list(esper.get_component(comp_type)):
                anim.elapsed += dt
                self._emit_piece_sounds(anim, stagger, sound_kind, sound)
                duration = esper.component_for_entity(ent, Duration)
                if anim.elapsed >= duration.value:
                    esper.delete_entity(ent, immediate=True)
                    self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=kind, request_id=anim.request_id)

    def _emit_piece_sounds(self, anim, stagger: float, sound_kind: str, sound: Tuple[float, float, float]):
        base, step, volume = sound
        # A piece "starts" once its stagger delay has elapsed.
        while anim.sounded < len(anim.units) and anim.elapsed >= anim.sounded * stagger:
            pitch = clamp_pitch(base + anim.sounded * step)
            self.event_bus.emit(EVENT_SOUND, kind=sound_kind, pitch=pitch, volume=volume)
            anim.sounded += 1

    def progress_for(self, request_id: int) -> float | None:
        """Linear 0..1 progress of a running request, for renderers."""
        for comp_type, *_ in ANIMATION_KINDS.values():
            for ent, anim in esper.get_component(comp_type):
                if anim.request_id == request_id:
                    duration = esper.component_for_entity(ent, Duration).value
                    return min(anim.elapsed / duration, 1.0) if duration > 0 else 1.0
        return None
