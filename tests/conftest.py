# tests/conftest.py
"""
Shared fixtures: an engine stub that records every hypercall.
"""

import pytest

from pychef.engine import Engine
from pychef.session import ConcolicSession


class RecordingEngine(Engine):
    """Identity engine: tracked buffers keep their content."""

    def __init__(self, active=True, max_size=1000):
        super().__init__()
        self.active = active
        self.max_size = max_size
        self.calls = []
        self.atomic_events = []

    def is_active(self):
        return self.active

    def track_buffer(self, buf, name):
        self.calls.append(("track", name, bytes(buf)))
        return name

    def assume(self, constraint):
        self.calls.append(("assume", constraint.symbol, constraint.operator, constraint.bound))

    def get_configured_max_size(self):
        return self.max_size

    def _enter_atomic(self):
        self.atomic_events.append("begin")

    def _exit_atomic(self):
        self.atomic_events.append("end")

    @property
    def tracked(self):
        return [(name, data) for kind, name, data in
                (c for c in self.calls if c[0] == "track")]

    @property
    def assumptions(self):
        return [c[1:] for c in self.calls if c[0] == "assume"]


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def inactive_engine():
    return RecordingEngine(active=False)


@pytest.fixture
def session(engine):
    return ConcolicSession(engine)
