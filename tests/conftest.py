from __future__ import annotations

import itertools
import threading

import pytest

CONFIG_ENV_VARS = ("TRIALS", "IDS_PER_TRIAL", "POOL_CAPACITY", "REFILL_POLICY")


class CountingGenerator:
    """Thread-safe generator of sequential identifiers ("id-0", "id-1", ...)."""

    def __init__(self):
        self._counter = itertools.count()
        self._lock = threading.Lock()
        self.calls = 0

    def __call__(self):
        with self._lock:
            self.calls += 1
            return f"id-{next(self._counter)}"


@pytest.fixture
def counting_generator():
    return CountingGenerator()


@pytest.fixture
def clean_env(monkeypatch):
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
