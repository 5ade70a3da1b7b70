# tests/conftest.py

from __future__ import annotations

import random

import pytest

from controller.app_controller import AppController

from .fakes import FakeStore


@pytest.fixture()
def store() -> FakeStore:
    """Store with two subjects and three tasks (t3 completed)."""
    s = FakeStore()
    s.seed_subject("s1", "Math", "#ef4444")
    s.seed_subject("s2", "History", "#10b981")
    s.seed_task("t1", "s1", "Old")
    s.seed_task("t2", "s1", "Exercises 3.1")
    s.seed_task("t3", "s2", "Essay draft", completed=True)
    return s


@pytest.fixture()
def controller(store: FakeStore) -> AppController:
    c = AppController(store, rng=random.Random(7))
    assert c.load() is True
    return c
