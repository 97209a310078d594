"""Preferences kept in a JSON file while signed out."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..settings import PREFERENCES_PATH, Preferences
from .base import PreferencesStore

logger = logging.getLogger(__name__)


class LocalPreferencesStore(PreferencesStore):

    def __init__(self, path: Path = PREFERENCES_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Preferences:
        """Load from disk, falling back to defaults."""
        if not self._path.exists():
            return Preferences()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return Preferences.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", self._path, exc)
            return Preferences()

    def save(self, prefs: Preferences) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(prefs.to_dict(), indent=2) + "\n",
            encoding="utf-8",
        )
