"""Text shown for the running timer (clock face, window/tray title)."""

from __future__ import annotations

from .timer.engine import Phase, SessionState, TimerConfig

_PHASE_LABELS: dict[Phase, str] = {
    Phase.FOCUS: "Focus",
    Phase.BREAK: "Break",
    Phase.LONG_BREAK: "Long Break",
}


def format_time(seconds: int) -> str:
    """``MM:SS``; minutes are not wrapped at 60."""
    seconds = max(0, int(seconds))
    m, s = divmod(seconds, 60)
    return f"{m:02d}:{s:02d}"


def phase_label(phase: Phase) -> str:
    return _PHASE_LABELS[phase]


def window_title(state: SessionState, config: TimerConfig) -> str:
    """e.g. ``24:59 - Focus (1/4)``."""
    return (
        f"{format_time(state.time_left)} - {phase_label(state.phase)} "
        f"({state.current_session}/{config.study_sessions})"
    )
