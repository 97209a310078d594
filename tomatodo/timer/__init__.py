"""Timer package."""

from .engine import (
    SessionController,
    SessionState,
    TimerConfig,
    AlertSettings,
    Phase,
    compute_progress,
    LONG_BREAK_INTERVAL,
)

__all__ = [
    "SessionController",
    "SessionState",
    "TimerConfig",
    "AlertSettings",
    "Phase",
    "compute_progress",
    "LONG_BREAK_INTERVAL",
]
