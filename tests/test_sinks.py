"""Tests for the alarm and notification sinks and the display helpers."""

from __future__ import annotations

import io
import wave

import pytest

from tomatodo.audio.sounds import SoundManager, generate_alarm
from tomatodo.display import format_time, phase_label, window_title
from tomatodo.notifications import NotificationManager, NotificationPermission
from tomatodo.timer.engine import Phase, SessionState, TimerConfig

from helpers import SignalCollector, finish_phase


# ═══════════════════════════════════════════════════════════════════════
#  ALARM SOUND
# ═══════════════════════════════════════════════════════════════════════


class TestAlarmSynthesis:
    def test_produces_wav(self):
        data = generate_alarm()
        assert isinstance(data, bytes)
        assert data[:4] == b"RIFF"

    def test_wav_is_parseable(self):
        with wave.open(io.BytesIO(generate_alarm()), "rb") as wf:
            assert wf.getnchannels() == 1
            assert wf.getsampwidth() == 2
            assert wf.getframerate() == 44100
            assert wf.getnframes() > 0


@pytest.mark.usefixtures("qapp")
class TestSoundManager:
    def test_wav_cached(self, tmp_path):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        assert mgr.alarm_path.exists()
        assert mgr.alarm_path.stat().st_size > 100

    def test_existing_wav_reused(self, tmp_path):
        path = tmp_path / "alarm.wav"
        path.write_bytes(generate_alarm())
        before = path.stat().st_mtime_ns
        SoundManager(parent=None, sounds_dir=tmp_path)
        assert path.stat().st_mtime_ns == before

    @pytest.mark.parametrize("requested, expected", [
        (0.4, 0.4), (1.5, 1.0), (-0.2, 0.0),
    ])
    def test_alarm_volume_clamped(self, tmp_path, requested, expected):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        mgr.on_alarm_requested(requested)
        assert mgr.volume == pytest.approx(expected)

    def test_wired_to_controller(self, tmp_path, controller):
        mgr = SoundManager(parent=None, sounds_dir=tmp_path)
        controller.alarm_requested.connect(mgr.on_alarm_requested)
        finish_phase(controller)
        assert mgr.volume == pytest.approx(0.75)


# ═══════════════════════════════════════════════════════════════════════
#  NOTIFICATIONS
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestNotificationManager:
    def test_granted_shows(self):
        shown = []
        mgr = NotificationManager(
            presenter=lambda t, b: shown.append((t, b)),
            permission=NotificationPermission.GRANTED,
        )
        mgr.on_notification_requested("Break finished!", "Time to focus again.")
        assert shown == [("Break finished!", "Time to focus again.")]

    def test_denied_drops_silently(self):
        shown = []
        asked = []
        mgr = NotificationManager(
            presenter=lambda t, b: shown.append((t, b)),
            request_permission=lambda: asked.append(1) or NotificationPermission.GRANTED,
            permission=NotificationPermission.DENIED,
        )
        mgr.on_notification_requested("t", "b")
        assert shown == []
        assert asked == []

    def test_default_asks_permission(self):
        shown = []
        mgr = NotificationManager(
            presenter=lambda t, b: shown.append((t, b)),
            request_permission=lambda: NotificationPermission.GRANTED,
        )
        changes = SignalCollector()
        mgr.permission_changed.connect(changes)

        mgr.on_notification_requested("first", "dropped while asking")
        assert shown == []
        assert mgr.permission == NotificationPermission.GRANTED
        assert changes.items == [NotificationPermission.GRANTED]

        mgr.on_notification_requested("second", "shown")
        assert shown == [("second", "shown")]

    def test_default_without_requester_stays_default(self):
        mgr = NotificationManager()
        mgr.on_notification_requested("t", "b")
        assert mgr.permission == NotificationPermission.DEFAULT

    def test_shown_signal(self):
        mgr = NotificationManager(permission=NotificationPermission.GRANTED)
        c = SignalCollector()
        mgr.notification_shown.connect(c)
        mgr.on_notification_requested("t", "b")
        assert c.last == ("t", "b")

    def test_wired_to_controller(self, controller):
        shown = []
        mgr = NotificationManager(
            presenter=lambda t, b: shown.append(t),
            permission=NotificationPermission.GRANTED,
        )
        controller.notification_requested.connect(mgr.on_notification_requested)
        finish_phase(controller)
        assert shown == ["Time to take a break!"]


# ═══════════════════════════════════════════════════════════════════════
#  DISPLAY
# ═══════════════════════════════════════════════════════════════════════


class TestDisplay:
    @pytest.mark.parametrize("seconds, text", [
        (1500, "25:00"), (65, "01:05"), (0, "00:00"), (3600, "60:00"), (-3, "00:00"),
    ])
    def test_format_time(self, seconds, text):
        assert format_time(seconds) == text

    def test_phase_labels(self):
        assert phase_label(Phase.FOCUS) == "Focus"
        assert phase_label(Phase.BREAK) == "Break"
        assert phase_label(Phase.LONG_BREAK) == "Long Break"

    def test_window_title(self):
        state = SessionState(
            time_left=899,
            is_running=True,
            phase=Phase.LONG_BREAK,
            current_session=4,
            completed_sessions=4,
            phase_duration=900,
        )
        assert window_title(state, TimerConfig(study_sessions=8)) == "14:59 - Long Break (4/8)"

    def test_window_title_from_controller(self, controller):
        assert window_title(controller.state, controller.config) == "25:00 - Focus (1/4)"
