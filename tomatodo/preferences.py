"""Current preferences, kept in sync with the controller and the store."""

from __future__ import annotations

import logging
from dataclasses import replace

import httpx
from PyQt6.QtCore import QObject, pyqtSignal

from .errors import ApiError
from .settings import Preferences, validate_preferences
from .storage.base import PreferencesStore
from .timer.engine import SessionController

logger = logging.getLogger(__name__)

# ValueError covers bad field values and InvalidPreferencesError.
_STORE_ERRORS = (ApiError, httpx.HTTPError, OSError, ValueError)


class PreferencesManager(QObject):
    """Owns the active ``Preferences``.

    Every change is validated, pushed to the controller, then handed to the
    store.  Store failures are logged and never block or undo the change.
    """

    preferences_changed = pyqtSignal(object)

    def __init__(
        self,
        store: PreferencesStore,
        controller: SessionController,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._controller = controller
        self._prefs = Preferences()

    @property
    def preferences(self) -> Preferences:
        return self._prefs

    @property
    def store(self) -> PreferencesStore:
        return self._store

    def set_store(self, store: PreferencesStore) -> None:
        """Switch backends (sign in / sign out) and reload."""
        self._store = store
        self.load()

    def load(self) -> Preferences:
        """Read preferences and restart the cycle with them."""
        try:
            prefs = self._store.load()
            validate_preferences(prefs)
        except _STORE_ERRORS as exc:
            logger.warning("Could not load preferences, keeping current: %s", exc)
            prefs = self._prefs
        self._apply(prefs)
        self._controller.reset()
        return prefs

    def update(self, **changes) -> Preferences:
        """Apply field changes, e.g. ``update(study_length=50)``."""
        prefs = replace(self._prefs, **changes)
        validate_preferences(prefs)
        self._apply(prefs)
        self._save()
        return prefs

    def toggle_sound(self) -> bool:
        return self.update(sound_enabled=not self._prefs.sound_enabled).sound_enabled

    def _apply(self, prefs: Preferences) -> None:
        self._prefs = prefs
        self._controller.update_config(prefs.timer_config)
        self._controller.update_alerts(prefs.alert_settings)
        self.preferences_changed.emit(prefs)

    def _save(self) -> None:
        try:
            self._store.save(self._prefs)
        except _STORE_ERRORS as exc:
            logger.warning("Could not save preferences: %s", exc)
