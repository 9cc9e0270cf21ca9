"""Pytest configuration for the vetcase-events test suite."""

from __future__ import annotations

import logging

import pytest

from vetcase_events.container import reset_container


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Reset the global container and package logger around every test."""
    logger = logging.getLogger("vetcase_events")
    level, handlers = logger.level, list(logger.handlers)
    reset_container()
    yield
    reset_container()
    logger.setLevel(level)
    logger.handlers[:] = handlers
