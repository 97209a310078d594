"""Preferences persistence: local JSON file or authenticated backend."""

from __future__ import annotations

from pathlib import Path

from ..api.client import ApiClient
from ..settings import PREFERENCES_PATH
from .base import PreferencesStore
from .local import LocalPreferencesStore
from .remote import RemotePreferencesStore


def select_preferences_store(
    authenticated: bool,
    *,
    client: ApiClient | None = None,
    path: Path = PREFERENCES_PATH,
) -> PreferencesStore:
    """Backend store when signed in, local file otherwise."""
    if authenticated:
        if client is None:
            raise ValueError("an ApiClient is required when authenticated")
        return RemotePreferencesStore(client)
    return LocalPreferencesStore(path)


__all__ = [
    "PreferencesStore",
    "LocalPreferencesStore",
    "RemotePreferencesStore",
    "select_preferences_store",
]
