"""Preferences kept by the backend for the signed-in user."""

from __future__ import annotations

from ..api.client import ApiClient
from ..settings import Preferences
from .base import PreferencesStore


class RemotePreferencesStore(PreferencesStore):

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    def load(self) -> Preferences:
        data = self._client.get_preferences()
        if not isinstance(data, dict):
            raise ValueError(f"expected a preferences object, got {type(data).__name__}")
        return Preferences.from_dict(data)

    def save(self, prefs: Preferences) -> None:
        self._client.put_preferences(prefs.to_dict())
