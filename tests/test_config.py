# tests/test_config.py

from __future__ import annotations

import logging

from core import config
from core.logging_setup import setup_logging


def test_env_float(monkeypatch) -> None:
    monkeypatch.setenv("STUDY_TEST_TIMEOUT", "2.5")
    assert config._env_float("STUDY_TEST_TIMEOUT", 10.0) == 2.5
    monkeypatch.setenv("STUDY_TEST_TIMEOUT", "soon")
    assert config._env_float("STUDY_TEST_TIMEOUT", 10.0) == 10.0
    monkeypatch.delenv("STUDY_TEST_TIMEOUT")
    assert config._env_float("STUDY_TEST_TIMEOUT", 10.0) == 10.0


def test_palette() -> None:
    assert config.SUBJECT_COLORS == ("#ef4444", "#10b981", "#f59e0b", "#8b5cf6", "#06b6d4", "#f97316")


def test_setup_logging_single_handler() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug")
        setup_logging("warning")
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING
        assert logging.getLogger("urllib3").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
