"""Shared pytest fixtures for Tomatodo tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from tomatodo.database.db import configure_engine, init_db
from tomatodo.timer.engine import SessionController, TimerConfig


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def controller(qapp):
    """Default config: breaks and focus sessions wait for a click."""
    return SessionController(TimerConfig())


@pytest.fixture
def controller_auto(qapp):
    """Auto-starts breaks and focus sessions."""
    return SessionController(
        TimerConfig(auto_start_breaks=True, auto_start_pomodoros=True)
    )
