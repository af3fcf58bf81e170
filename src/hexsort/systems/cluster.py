from __future__ import annotations

from collections import deque
from typing import List

from hexsort.systems.board_ops import lock_of, neighbors, stack_of


def resolve_cluster(trigger: int) -> List[int]:
    """Collect the connected cells sharing the trigger's top color.

    Breadth-first over hex adjacency, visiting neighbors in the fixed
    direction order, so the result (trigger first, then discovery order) is
    reproducible for a given board. Locked and empty cells never join. An
    empty or locked trigger yields an empty cluster.
    """
    trigger_stack = stack_of(trigger)
    if not trigger_stack.units or lock_of(trigger).locked:
        return []
    color = trigger_stack.top_color
    cluster: List[int] = [trigger]
    seen = {trigger}
    queue = deque([trigger])
    while queue:
        current = queue.popleft()
        for neighbor in neighbors(current):
            if neighbor in seen:
                continue
            if lock_of(neighbor).locked:
                continue
            if stack_of(neighbor).top_color != color:
                continue
            seen.add(neighbor)
            cluster.append(neighbor)
            queue.append(neighbor)
    return cluster
