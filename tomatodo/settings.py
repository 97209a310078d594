"""User preferences and application paths.

Preferences are persisted as JSON using the backend's camelCase keys, so the
same document works for the local file and ``/api/preferences``::

    prefs = Preferences.from_dict(json.loads(text))
    prefs = replace(prefs, sound_volume=50)
    validate_preferences(prefs)
    text = json.dumps(prefs.to_dict())

Paths
-----
``TOMATODO_HOME``      application directory (default ``~/.tomatodo``)
``TOMATODO_API_URL``   backend base URL (default ``http://localhost:5001``)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any

from .errors import InvalidPreferencesError
from .timer.engine import AlertSettings, TimerConfig


# ── paths ────────────────────────────────────────────────────────────────

APP_DIR = Path(os.environ.get("TOMATODO_HOME", Path.home() / ".tomatodo"))
PREFERENCES_PATH = APP_DIR / "preferences.json"
DB_PATH = APP_DIR / "tomatodo.db"
SOUNDS_DIR = APP_DIR / "sounds"

API_URL = os.environ.get("TOMATODO_API_URL", "http://localhost:5001")


# ── allowed ranges (inclusive) ────────────────────────────────────────────

RANGES: dict[str, tuple[int, int]] = {
    "study_sessions": (1, 12),
    "study_length": (1, 60),
    "break_length": (1, 30),
    "long_break_length": (5, 60),
    "sound_volume": (0, 100),
}


@dataclass
class Preferences:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    study_sessions: int = 4
    study_length: int = 25                 # minutes
    break_length: int = 5
    long_break_length: int = 15
    enable_long_breaks: bool = True
    auto_start_breaks: bool = False
    auto_start_pomodoros: bool = False

    # ── appearance ────────────────────────────────────────────────────
    dark_mode: bool = False

    # ── alerts ────────────────────────────────────────────────────────
    notifications: bool = True
    sound_enabled: bool = True
    sound_volume: int = 75                 # 0-100

    @property
    def timer_config(self) -> TimerConfig:
        return TimerConfig(
            study_sessions=self.study_sessions,
            study_length=self.study_length,
            break_length=self.break_length,
            long_break_length=self.long_break_length,
            enable_long_breaks=self.enable_long_breaks,
            auto_start_breaks=self.auto_start_breaks,
            auto_start_pomodoros=self.auto_start_pomodoros,
        )

    @property
    def alert_settings(self) -> AlertSettings:
        return AlertSettings(
            sound_enabled=self.sound_enabled,
            sound_volume=self.sound_volume,
            notifications=self.notifications,
        )

    def to_dict(self) -> dict[str, Any]:
        """camelCase mapping, as stored on disk and sent to the backend."""
        return {_camel(k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Preferences:
        """Build from a camelCase (or snake_case) mapping.

        Unknown keys are ignored and missing keys take their defaults.
        The backend stores booleans as 0/1, so flags are coerced.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            for key in (_camel(f.name), f.name):
                if key in data and data[key] is not None:
                    values[f.name] = _coerce(data[key], f.type)
                    break
        return cls(**values)


def validate_preferences(prefs: Preferences) -> None:
    """Raise ``InvalidPreferencesError`` naming every out-of-range field."""
    problems: dict[str, str] = {}
    for name, (low, high) in RANGES.items():
        value = getattr(prefs, name)
        if isinstance(value, bool) or not isinstance(value, int):
            problems[name] = f"expected an integer, got {value!r}"
        elif not low <= value <= high:
            problems[name] = f"{value} not in [{low}, {high}]"
    if problems:
        raise InvalidPreferencesError(problems)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _coerce(value: Any, type_name: Any) -> Any:
    # Annotations are strings under ``from __future__ import annotations``.
    if type_name in ("bool", bool):
        # The backend stores flags as 0/1.
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        raise ValueError(f"expected a boolean flag, got {value!r}")
    if type_name in ("int", int):
        return int(value)
    return value
