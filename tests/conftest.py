import sys, os

import pytest

# Ensure src (and the repo root for tests.helpers) is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from hexsort.events.bus import EventBus
from hexsort.world import create_world


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def world(bus):
    return create_world(bus, name="hexsort-test")
