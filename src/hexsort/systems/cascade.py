"""Cluster-sort cascade controller.

Each cascade is a job with a LIFO work list of trigger cells. A step locks
its cluster, asks the presentation layer to animate the transfers (and a pop
when the merge threshold is reached) and only mutates stacks once every
request of that step has been acknowledged via ``animation_complete``.
"""
from __future__ import annotations

import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Deque, Dict, List, Set, Tuple

from hexsort.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_REQUEST,
    EVENT_CASCADE_STARTED,
    EVENT_CASCADE_STEP,
    EVENT_MERGE_POPPED,
)
from hexsort.constants import MERGE_THRESHOLD, POINTS_PER_UNIT
from hexsort.systems.board_ops import cell_coord, get_cell_at, lock_of, stack_of
from hexsort.systems.cluster import resolve_cluster
from hexsort.systems.merge import MergeResult, apply_merge, evaluate_merge
from hexsort.systems.transfer import TransferPlan, plan_transfer
from hexsort.utils.game_state import get_or_create_cascade_state

logger = logging.getLogger(__name__)


class CascadePhase(Enum):
    SCANNING = auto()
    LOCKED = auto()
    TRANSFERRING = auto()
    MERGING = auto()
    UNLOCKED = auto()
    DONE = auto()


@dataclass(slots=True)
class CascadeStep:
    trigger: int
    depth: int
    cluster: List[int]
    plan: TransferPlan
    phase: CascadePhase = CascadePhase.LOCKED
    pending: Set[int] = field(default_factory=set)
    merge: MergeResult | None = None


@dataclass(slots=True)
class CascadeJob:
    job_id: int
    root: int
    # Pending (cell, depth) triggers; the last entry runs next.
    work: List[Tuple[int, int]] = field(default_factory=list)
    step: CascadeStep | None = None
    phase: CascadePhase = CascadePhase.SCANNING
    steps: int = 0
    popped: int = 0


class CascadeSystem:
    def __init__(
        self,
        event_bus: EventBus,
        *,
        threshold: int = MERGE_THRESHOLD,
        points_per_unit: int = POINTS_PER_UNIT,
    ):
        self.event_bus = event_bus
        self.threshold = threshold
        self.points_per_unit = points_per_unit
        self._jobs: Dict[int, CascadeJob] = {}
        self._awaiting: Dict[int, int] = {}  # animation request id -> job id
        self._ready: Deque[int] = deque()
        self._pumping = False
        self._job_ids = itertools.count(1)
        self.event_bus.subscribe(EVENT_CASCADE_REQUEST, self.on_cascade_request)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    @property
    def active_jobs(self) -> List[CascadeJob]:
        return list(self._jobs.values())

    @property
    def idle(self) -> bool:
        return not self._jobs

    def on_cascade_request(self, sender, **kwargs):
        cell = kwargs.get('cell')
        if cell is None:
            return
        entity = get_cell_at(cell)
        if entity is None:
            return
        self.trigger(entity)

    def trigger(self, entity: int) -> CascadeJob:
        """Start a cascade rooted at entity; it runs until no cluster remains."""
        job = CascadeJob(job_id=next(self._job_ids), root=entity, work=[(entity, 1)])
        self._jobs[job.job_id] = job
        get_or_create_cascade_state().active_cascades += 1
        self.event_bus.emit(EVENT_CASCADE_STARTED, job_id=job.job_id, cell=cell_coord(entity))
        self._ready.append(job.job_id)
        self._pump()
        return job

    def on_animation_complete(self, sender, **kwargs):
        request_id = kwargs.get('request_id')
        job_id = self._awaiting.pop(request_id, None)
        if job_id is None:
            if kwargs.get('kind') in ('transfer', 'pop'):
                logger.warning("Ignoring acknowledgment for unknown request %r", request_id)
            return
        job = self._jobs.get(job_id)
        if job is None or job.step is None:
            return
        step = job.step
        step.pending.discard(request_id)
        if not step.pending:
            self._ready.append(job_id)
            self._pump()

    def _pump(self):
        # Acknowledgments raised while a job is advancing are queued, never nested.
        if self._pumping:
            return
        self._pumping = True
        try:
            while self._ready:
                job = self._jobs.get(self._ready.popleft())
                if job is not None:
                    self._advance(job)
        finally:
            self._pumping = False

    def _advance(self, job: CascadeJob):
        while True:
            step = job.step
            if step is not None:
                if step.pending:
                    return
                if step.phase == CascadePhase.TRANSFERRING:
                    self._apply_transfers(step)
                    if step.merge is not None and step.merge.pops:
                        step.phase = CascadePhase.MERGING
                        job.phase = CascadePhase.MERGING
                        target = step.plan.target
                        self._request(job, [dict(
                            kind='pop',
                            cell=cell_coord(target),
                            units=list(step.merge.popped),
                        )])
                        return
                elif step.phase == CascadePhase.MERGING:
                    self._apply_pop(job, step)
                self._complete_step(job, step)
                continue
            job.phase = CascadePhase.SCANNING
            if not job.work:
                self._finish(job)
                return
            entity, depth = job.work.pop()
            step = self._begin_step(entity, depth)
            if step is None:
                continue
            job.step = step
            job.phase = CascadePhase.TRANSFERRING
            target_coord = cell_coord(step.plan.target)
            self._request(job, [
                dict(
                    kind='transfer',
                    source=cell_coord(transfer.source),
                    target=target_coord,
                    units=list(transfer.units),
                )
                for transfer in step.plan.transfers
            ])
            return

    def _begin_step(self, trigger: int, depth: int) -> CascadeStep | None:
        if not stack_of(trigger).units or lock_of(trigger).locked:
            return None
        cluster = resolve_cluster(trigger)
        if len(cluster) <= 1:
            return None
        for member in cluster:
            lock_of(member).locked = True
        plan = plan_transfer(cluster, trigger)
        if plan is None or not plan.transfers:
            for member in cluster:
                lock_of(member).locked = False
            return None
        logger.debug(
            "Cluster of %d %s cells at %s; target %s receives %d units",
            len(cluster), plan.color, cell_coord(trigger), cell_coord(plan.target), plan.moved,
        )
        return CascadeStep(
            trigger=trigger,
            depth=depth,
            cluster=cluster,
            plan=plan,
            phase=CascadePhase.TRANSFERRING,
        )

    def _request(self, job: CascadeJob, payloads: List[dict]):
        step = job.step
        ids = [self.event_bus.next_request_id() for _ in payloads]
        # Register every id before emitting so a synchronous acknowledgment cannot release the step early.
        step.pending.update(ids)
        for request_id in ids:
            self._awaiting[request_id] = job.job_id
        for request_id, payload in zip(ids, payloads):
            self.event_bus.emit(EVENT_ANIMATION_START, request_id=request_id, **payload)

    def _apply_transfers(self, step: CascadeStep):
        target_stack = stack_of(step.plan.target)
        for transfer in step.plan.transfers:
            source_stack = stack_of(transfer.source)
            count = len(transfer.units)
            moving = source_stack.units[-count:]
            if len(moving) != count or any(a is not b for a, b in zip(moving, transfer.units)):
                raise RuntimeError(f"Locked cell {cell_coord(transfer.source)} changed during transfer")
            del source_stack.units[-count:]
            target_stack.units.extend(moving)
        step.merge = evaluate_merge(
            target_stack.units,
            threshold=self.threshold,
            points_per_unit=self.points_per_unit,
        )

    def _apply_pop(self, job: CascadeJob, step: CascadeStep):
        target = step.plan.target
        popped = apply_merge(stack_of(target), step.merge)
        job.popped += len(popped)
        logger.debug("Popped %d units at %s for %d points", len(popped), cell_coord(target), step.merge.points)
        self.event_bus.emit(
            EVENT_MERGE_POPPED,
            cell=cell_coord(target),
            units=popped,
            run_length=step.merge.run_length,
            points=step.merge.points,
        )

    def _complete_step(self, job: CascadeJob, step: CascadeStep):
        step.phase = CascadePhase.UNLOCKED
        job.phase = CascadePhase.UNLOCKED
        for member in step.cluster:
            lock_of(member).locked = False
        plan = step.plan
        # Target resumes after every refilled source has been fully resolved, first source first.
        job.work.append((plan.target, step.depth))
        remaining = [source for source in plan.sources if stack_of(source).units]
        for source in reversed(remaining):
            job.work.append((source, step.depth + 1))
        job.steps += 1
        job.step = None
        state = get_or_create_cascade_state()
        state.steps += 1
        state.max_depth = max(state.max_depth, step.depth)
        self.event_bus.emit(
            EVENT_CASCADE_STEP,
            job_id=job.job_id,
            depth=step.depth,
            target=cell_coord(plan.target),
            sources=[cell_coord(source) for source in plan.sources],
            color=plan.color,
            moved=plan.moved,
            popped=len(step.merge.popped) if step.merge is not None else 0,
        )

    def _finish(self, job: CascadeJob):
        job.phase = CascadePhase.DONE
        self._jobs.pop(job.job_id, None)
        state = get_or_create_cascade_state()
        state.active_cascades = max(0, state.active_cascades - 1)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, job_id=job.job_id, steps=job.steps)
