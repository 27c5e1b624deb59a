from __future__ import annotations

import itertools
from typing import Callable, Iterator

import pytest

from homepanel.panel import Panel
from homepanel.store import Store


class StepClock:
    """Returns a new, strictly increasing stamp on every call."""

    def __init__(self) -> None:
        self._counter = itertools.count()

    def __call__(self) -> str:
        n = next(self._counter)
        return f"2026-01-01 10:{n // 60:02d}:{n % 60:02d}"


@pytest.fixture
def clock() -> Callable[[], str]:
    return StepClock()


@pytest.fixture
def store() -> Iterator[Store]:
    s = Store.in_memory()
    yield s
    s.close()


@pytest.fixture
def panel(store: Store, clock: Callable[[], str]) -> Panel:
    return Panel(store, clock=clock).init()
