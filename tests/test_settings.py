"""Tests for preferences: defaults, camelCase conversion, validation and the
local / remote stores."""

from __future__ import annotations

import json

import httpx
import pytest

from tomatodo.api.client import ApiClient
from tomatodo.errors import InvalidPreferencesError
from tomatodo.settings import Preferences, validate_preferences
from tomatodo.storage import (
    LocalPreferencesStore,
    RemotePreferencesStore,
    select_preferences_store,
)
from tomatodo.timer.engine import AlertSettings, TimerConfig


# ═══════════════════════════════════════════════════════════════════════
#  PREFERENCES
# ═══════════════════════════════════════════════════════════════════════


class TestPreferencesDefaults:
    def test_timer_defaults(self):
        p = Preferences()
        assert p.study_sessions == 4
        assert p.study_length == 25
        assert p.break_length == 5
        assert p.long_break_length == 15
        assert p.enable_long_breaks is True

    def test_auto_start_defaults(self):
        p = Preferences()
        assert p.auto_start_breaks is False
        assert p.auto_start_pomodoros is False

    def test_alert_defaults(self):
        p = Preferences()
        assert p.sound_enabled is True
        assert p.sound_volume == 75
        assert p.notifications is True
        assert p.dark_mode is False

    def test_timer_config(self):
        cfg = Preferences(study_length=50, auto_start_breaks=True).timer_config
        assert cfg == TimerConfig(study_length=50, auto_start_breaks=True)

    def test_alert_settings(self):
        alerts = Preferences(sound_volume=20, notifications=False).alert_settings
        assert alerts == AlertSettings(sound_volume=20, notifications=False)


class TestWireFormat:
    def test_to_dict_uses_camel_case(self):
        data = Preferences().to_dict()
        assert data["studySessions"] == 4
        assert data["longBreakLength"] == 15
        assert data["autoStartPomodoros"] is False
        assert data["soundVolume"] == 75
        assert "study_sessions" not in data

    def test_from_backend_row(self):
        """The backend returns 0/1 for flags."""
        p = Preferences.from_dict({
            "studySessions": 6,
            "enableLongBreaks": 0,
            "autoStartBreaks": 1,
            "soundVolume": 30,
        })
        assert p.study_sessions == 6
        assert p.enable_long_breaks is False
        assert p.auto_start_breaks is True
        assert p.sound_volume == 30

    def test_snake_case_accepted(self):
        assert Preferences.from_dict({"study_length": 40}).study_length == 40

    def test_unknown_keys_ignored(self):
        p = Preferences.from_dict({"studyLength": 30, "theme": "neon"})
        assert p.study_length == 30
        assert not hasattr(p, "theme")

    def test_missing_keys_take_defaults(self):
        assert Preferences.from_dict({}) == Preferences()

    @pytest.mark.parametrize("value", ["false", "true", 2, 0.5])
    def test_flag_must_be_bool_or_0_1(self, value):
        with pytest.raises(ValueError):
            Preferences.from_dict({"soundEnabled": value})

    def test_bad_integer_rejected(self):
        with pytest.raises(ValueError):
            Preferences.from_dict({"studyLength": "abc"})

    def test_string_false_in_file_falls_back(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text('{"soundEnabled": "false"}', encoding="utf-8")
        assert LocalPreferencesStore(path).load() == Preferences()


class TestValidation:
    def test_defaults_are_valid(self):
        validate_preferences(Preferences())

    @pytest.mark.parametrize("field, value", [
        ("study_sessions", 0),
        ("study_sessions", 13),
        ("study_length", 0),
        ("study_length", 61),
        ("break_length", 31),
        ("long_break_length", 4),
        ("sound_volume", 101),
        ("sound_volume", -1),
    ])
    def test_out_of_range(self, field, value):
        with pytest.raises(InvalidPreferencesError) as info:
            validate_preferences(Preferences(**{field: value}))
        assert field in info.value.problems

    def test_reports_every_problem(self):
        with pytest.raises(InvalidPreferencesError) as info:
            validate_preferences(Preferences(study_length=0, break_length=0))
        assert set(info.value.problems) == {"study_length", "break_length"}

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            validate_preferences(Preferences(study_sessions=0))


# ═══════════════════════════════════════════════════════════════════════
#  LOCAL STORE
# ═══════════════════════════════════════════════════════════════════════


class TestLocalStore:
    def test_round_trip(self, tmp_path):
        store = LocalPreferencesStore(tmp_path / "prefs.json")
        store.save(Preferences(study_length=30, sound_volume=42))
        loaded = store.load()
        assert loaded.study_length == 30
        assert loaded.sound_volume == 42

    def test_file_is_camel_case_json(self, tmp_path):
        path = tmp_path / "prefs.json"
        LocalPreferencesStore(path).save(Preferences())
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["studyLength"] == 25

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "prefs.json"
        LocalPreferencesStore(path).save(Preferences())
        assert path.exists()

    def test_missing_file_returns_defaults(self, tmp_path):
        store = LocalPreferencesStore(tmp_path / "nonexistent.json")
        assert store.load() == Preferences()

    def test_invalid_json_returns_defaults(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("NOT VALID JSON", encoding="utf-8")
        assert LocalPreferencesStore(path).load() == Preferences()

    def test_non_object_json_returns_defaults(self, tmp_path):
        path = tmp_path / "prefs.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert LocalPreferencesStore(path).load() == Preferences()


# ═══════════════════════════════════════════════════════════════════════
#  REMOTE STORE
# ═══════════════════════════════════════════════════════════════════════


def _backend(state: dict):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/preferences"
        if request.method == "GET":
            return httpx.Response(200, json=state["prefs"])
        state["prefs"] = json.loads(request.content)
        return httpx.Response(200, json={"message": "Preferences updated successfully"})
    return httpx.MockTransport(handler)


class TestRemoteStore:
    def test_load(self):
        state = {"prefs": {"studySessions": 8, "studyLength": 45, "enableLongBreaks": 1}}
        client = ApiClient("http://api.example.com", transport=_backend(state))
        prefs = RemotePreferencesStore(client).load()
        assert prefs.study_sessions == 8
        assert prefs.study_length == 45
        assert prefs.enable_long_breaks is True

    def test_save_sends_camel_case(self):
        state = {"prefs": {}}
        client = ApiClient("http://api.example.com", transport=_backend(state))
        RemotePreferencesStore(client).save(Preferences(sound_enabled=False))
        assert state["prefs"]["soundEnabled"] is False
        assert state["prefs"]["studySessions"] == 4


    def test_non_object_body_rejected(self):
        client = ApiClient("http://api.example.com", transport=_backend({"prefs": [1, 2]}))
        with pytest.raises(ValueError):
            RemotePreferencesStore(client).load()


class TestStoreSelection:
    def test_local_when_signed_out(self, tmp_path):
        store = select_preferences_store(False, path=tmp_path / "p.json")
        assert isinstance(store, LocalPreferencesStore)
        assert store.path == tmp_path / "p.json"

    def test_remote_when_signed_in(self):
        client = ApiClient("http://api.example.com", transport=_backend({"prefs": {}}))
        store = select_preferences_store(True, client=client)
        assert isinstance(store, RemotePreferencesStore)

    def test_remote_needs_client(self):
        with pytest.raises(ValueError):
            select_preferences_store(True)
