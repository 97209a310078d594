"""Tomatodo — Pomodoro timer with to-do tracking."""

__version__ = "0.1.0"
