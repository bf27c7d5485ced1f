from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.session'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class _Timer:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual clock: timers only fire when the test calls advance()."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: List[_Timer] = []

    def schedule(self, callback: Callable[[], None], delay_seconds: float) -> _Timer:
        timer = _Timer(self.now + delay_seconds, callback)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = [t for t in self.timers if not t.cancelled and not t.fired and t.due <= self.now + 1e-9]
        for timer in sorted(due, key=lambda t: t.due):
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()

    @property
    def active(self) -> List[_Timer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


ADVOCATE_PAYLOADS: List[Dict[str, Any]] = [
    {
        "firstName": "Anne",
        "lastName": "Pham",
        "city": "Seattle",
        "degree": "MD",
        "specialties": ["Sleep issues"],
        "yearsOfExperience": 12,
        "phoneNumber": 5551112222,
    },
    {
        "firstName": "Ana",
        "lastName": "Reyes",
        "city": "Boston",
        "degree": "PhD",
        "specialties": ["Grief"],
        "yearsOfExperience": 8,
        "phoneNumber": 5553334444,
    },
    {
        "firstName": "Luis",
        "lastName": "Moreno",
        "city": "Santa Fe",
        "degree": "MSW",
        "specialties": ["Trauma & PTSD", "Anxiety"],
        "yearsOfExperience": 15,
        "phoneNumber": 5557778888,
    },
    {
        "firstName": "Maria",
        "lastName": "Garcia",
        "city": "Chicago",
        "degree": "PhD",
        "specialties": ["Depression"],
        "yearsOfExperience": 5,
        "phoneNumber": 5559990000,
    },
]


@pytest.fixture
def advocate_payloads() -> List[Dict[str, Any]]:
    return [dict(p) for p in ADVOCATE_PAYLOADS]


@pytest.fixture
def advocates(advocate_payloads):
    from models import Advocate
    return [Advocate.from_payload(p) for p in advocate_payloads]


@pytest.fixture
def stub_source(advocates):
    class _StubSource:
        source_name = "stub"

        def __init__(self, records):
            self.records = records
            self.calls = 0

        def fetch(self):
            self.calls += 1
            return list(self.records)

    return _StubSource(advocates)
