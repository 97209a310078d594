"""Pomodoro session controller for Tomatodo.

Phases
------
FOCUS        Study session counting down.
BREAK        Short break counting down.
LONG_BREAK   Long break counting down (every 4th focus session).

Transitions
-----------
FOCUS → BREAK | LONG_BREAK            (countdown reaches 0)
BREAK | LONG_BREAK → FOCUS            (countdown reaches 0, sessions left)
BREAK | LONG_BREAK → terminal         (last session's break ends)
Any → FOCUS, session 1                (reset)

Running is orthogonal to the phase: ``start()`` / ``pause()`` only flip
``is_running``.  Entering a break halts the countdown unless
``auto_start_breaks`` is set; entering a focus session halts it unless
``auto_start_pomodoros`` is set.

The terminal state (last break finished) keeps ``time_left == 0`` so that
``start()`` stays a no-op until ``reset()`` begins a new cycle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    FOCUS = "focus"
    BREAK = "break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Phase.FOCUS


# ── constants ─────────────────────────────────────────────────────────────

LONG_BREAK_INTERVAL = 4  # every 4th focus session earns a long break
TICK_INTERVAL_MS = 1000

FOCUS_END_TITLE = "Time to take a break!"
FOCUS_END_BODY = "Good job! Take a short break."
BREAK_END_TITLE = "Break finished!"
BREAK_END_BODY = "Time to focus again."


# ── configuration ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerConfig:
    """Cycle shape.  Lengths are in minutes.

    Callers validate these values; the controller trusts them.
    """

    study_sessions: int = 4
    study_length: int = 25
    break_length: int = 5
    long_break_length: int = 15
    enable_long_breaks: bool = True
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False

    def duration_for(self, phase: Phase) -> int:
        """Seconds a freshly entered *phase* lasts."""
        if phase is Phase.FOCUS:
            return self.study_length * 60
        if phase is Phase.LONG_BREAK:
            return self.long_break_length * 60
        return self.break_length * 60


@dataclass(frozen=True)
class AlertSettings:
    """Gates for the alarm / notification requests emitted on phase end."""

    sound_enabled: bool = True
    sound_volume: int = 75  # 0-100
    notifications: bool = True

    @property
    def volume(self) -> float:
        return max(0.0, min(1.0, self.sound_volume / 100))


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of the controller."""

    time_left: int
    is_running: bool
    phase: Phase
    current_session: int
    completed_sessions: int
    phase_duration: int

    @property
    def progress(self) -> float:
        return compute_progress(self.phase_duration, self.time_left)


def compute_progress(total_seconds: int, time_left: int) -> float:
    """Percent (0-100) of *total_seconds* already elapsed."""
    if total_seconds <= 0:
        return 0.0
    progress = (total_seconds - time_left) / total_seconds * 100
    return min(100.0, max(0.0, progress))


# ── controller ────────────────────────────────────────────────────────────


class SessionController(QObject):
    """Qt-driven Pomodoro controller: countdown, phase cycling and
    session counting.  Performs no I/O; sinks connect to its signals.

    Signals
    -------
    time_updated(time_left: int)
        Emitted on every tick that decrements the countdown.
    phase_ended(phase: Phase)
        Emitted when the countdown reaches 0, before the transition.
    phase_started(phase: Phase, duration_seconds: int)
        Emitted after the transition into the next phase.
    alarm_requested(volume: float)
        Emitted on phase end when sound is enabled.  Volume in [0, 1].
    notification_requested(title: str, body: str)
        Emitted on phase end when notifications are enabled.
    session_completed()
        Emitted when the last session's break ends (terminal state).
    running_changed(is_running: bool)
        Emitted whenever ``is_running`` flips.
    """

    time_updated = pyqtSignal(int)
    phase_ended = pyqtSignal(object)
    phase_started = pyqtSignal(object, int)
    alarm_requested = pyqtSignal(float)
    notification_requested = pyqtSignal(str, str)
    session_completed = pyqtSignal()
    running_changed = pyqtSignal(bool)

    def __init__(
        self,
        config: TimerConfig | None = None,
        parent: QObject | None = None,
        *,
        alerts: AlertSettings | None = None,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._config: TimerConfig = config or TimerConfig()
        self._alerts: AlertSettings = alerts or AlertSettings()

        # ── session state ─────────────────────────────────────────────
        self._phase: Phase = Phase.FOCUS
        self._current_session: int = 1
        self._completed_sessions: int = 0
        self._is_running: bool = False
        self._phase_duration: int = self._config.duration_for(Phase.FOCUS)
        self._time_left: int = self._phase_duration
        self._transitioning: bool = False

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def alerts(self) -> AlertSettings:
        return self._alerts

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def time_left(self) -> int:
        """Seconds left on the clock."""
        return self._time_left

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def current_session(self) -> int:
        """Which focus session in the cycle (1-based)."""
        return self._current_session

    @property
    def completed_sessions(self) -> int:
        return self._completed_sessions

    @property
    def phase_duration(self) -> int:
        """Seconds the current phase lasted when it was entered."""
        return self._phase_duration

    @property
    def progress(self) -> float:
        """0 → 100 progress through the current phase."""
        return compute_progress(self._phase_duration, self._time_left)

    @property
    def is_cycle_complete(self) -> bool:
        """True once the last session's break has ended."""
        return self._phase.is_break and self._time_left == 0

    @property
    def state(self) -> SessionState:
        return SessionState(
            time_left=self._time_left,
            is_running=self._is_running,
            phase=self._phase,
            current_session=self._current_session,
            completed_sessions=self._completed_sessions,
            phase_duration=self._phase_duration,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Resume the countdown.  No-op when running or at zero."""
        if self._is_running or self._time_left <= 0:
            return
        self._set_running(True)

    def pause(self) -> None:
        self._set_running(False)

    def toggle(self) -> None:
        """Play/pause button."""
        if self._is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Back to focus session 1.  Completed count is kept."""
        self._set_running(False)
        self._phase = Phase.FOCUS
        self._current_session = 1
        self._phase_duration = self._config.duration_for(Phase.FOCUS)
        self._time_left = self._phase_duration
        self.time_updated.emit(self._time_left)

    def update_config(self, config: TimerConfig) -> None:
        """Swap the config.  An in-progress countdown is left alone; the
        next transition reads the new lengths."""
        self._config = config

    def update_alerts(self, alerts: AlertSettings) -> None:
        self._alerts = alerts

    def tick(self) -> None:
        """Advance the countdown by one second.

        Ignored while a phase end is being processed: alert slots may spin a
        nested event loop (a modal dialog) while the Qt timer keeps firing.
        """
        if not self._is_running or self._transitioning:
            return
        if self._time_left > 0:
            self._time_left -= 1
            self.time_updated.emit(self._time_left)
        if self._time_left <= 0:
            self._finish_phase()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _finish_phase(self) -> None:
        self._transitioning = True
        try:
            self._run_transition()
        finally:
            self._transitioning = False

    def _run_transition(self) -> None:
        ended = self._phase
        self._time_left = 0
        logger.info(
            "Phase ended: %s (session %d/%d)",
            ended.value,
            self._current_session,
            self._config.study_sessions,
        )
        self.phase_ended.emit(ended)
        self._request_alerts(ended)

        if ended is Phase.FOCUS:
            self._enter_break()
        elif self._current_session < self._config.study_sessions:
            self._enter_focus()
        else:
            self._completed_sessions += 1
            self._set_running(False)
            logger.info(
                "Cycle complete: %d sessions, %d completed",
                self._config.study_sessions,
                self._completed_sessions,
            )
            self.session_completed.emit()

    def _enter_break(self) -> None:
        cfg = self._config
        # Tested against the focus session that just ended.
        long_break = (
            cfg.enable_long_breaks
            and self._current_session % LONG_BREAK_INTERVAL == 0
            and self._current_session < cfg.study_sessions
        )
        self._begin_phase(Phase.LONG_BREAK if long_break else Phase.BREAK)
        self._completed_sessions += 1
        if not cfg.auto_start_breaks:
            self._set_running(False)
        self.phase_started.emit(self._phase, self._phase_duration)

    def _enter_focus(self) -> None:
        self._current_session += 1
        self._begin_phase(Phase.FOCUS)
        if not self._config.auto_start_pomodoros:
            self._set_running(False)
        self.phase_started.emit(self._phase, self._phase_duration)

    def _begin_phase(self, phase: Phase) -> None:
        self._phase = phase
        self._phase_duration = self._config.duration_for(phase)
        self._time_left = self._phase_duration
        logger.info(
            "Phase started: %s (%ds, session %d)",
            phase.value,
            self._phase_duration,
            self._current_session,
        )

    def _request_alerts(self, ended: Phase) -> None:
        alerts = self._alerts
        if alerts.sound_enabled:
            self.alarm_requested.emit(alerts.volume)
        if alerts.notifications:
            if ended is Phase.FOCUS:
                self.notification_requested.emit(FOCUS_END_TITLE, FOCUS_END_BODY)
            else:
                self.notification_requested.emit(BREAK_END_TITLE, BREAK_END_BODY)

    def _set_running(self, running: bool) -> None:
        if running:
            self._qt_timer.start()
        else:
            self._qt_timer.stop()
        if running != self._is_running:
            self._is_running = running
            self.running_changed.emit(running)
