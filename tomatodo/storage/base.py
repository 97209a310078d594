"""Preferences store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..settings import Preferences


class PreferencesStore(ABC):
    """Where preferences live: a local file or the signed-in backend."""

    @abstractmethod
    def load(self) -> Preferences:
        ...

    @abstractmethod
    def save(self, prefs: Preferences) -> None:
        ...
