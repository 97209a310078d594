"""Desktop notification sink.

Mirrors the browser permission model the timer was designed around:

- ``GRANTED``  notifications are shown.
- ``DEFAULT``  not asked yet; the first request asks for permission and is
  itself dropped.
- ``DENIED``   requests are silently dropped.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class NotificationPermission(Enum):
    GRANTED = "granted"
    DENIED = "denied"
    DEFAULT = "default"


Presenter = Callable[[str, str], None]
PermissionRequester = Callable[[], NotificationPermission]


class NotificationManager(QObject):
    """Shows notifications requested by the session controller.

    *presenter* receives ``(title, body)``, typically
    ``QSystemTrayIcon.showMessage``.  *request_permission* is asked once
    while the permission is still ``DEFAULT``.
    """

    notification_shown = pyqtSignal(str, str)
    permission_changed = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        presenter: Presenter | None = None,
        request_permission: PermissionRequester | None = None,
        permission: NotificationPermission = NotificationPermission.DEFAULT,
    ) -> None:
        super().__init__(parent)
        self._presenter = presenter
        self._request_permission = request_permission
        self._permission = permission

    @property
    def permission(self) -> NotificationPermission:
        return self._permission

    def set_permission(self, permission: NotificationPermission) -> None:
        if permission != self._permission:
            self._permission = permission
            self.permission_changed.emit(permission)

    def on_notification_requested(self, title: str, body: str) -> None:
        if self._permission == NotificationPermission.GRANTED:
            self._show(title, body)
        elif self._permission == NotificationPermission.DEFAULT:
            self._ask_permission()
        # DENIED: dropped

    def _show(self, title: str, body: str) -> None:
        if self._presenter is not None:
            self._presenter(title, body)
        else:
            logger.info("Notification: %s: %s", title, body)
        self.notification_shown.emit(title, body)

    def _ask_permission(self) -> None:
        if self._request_permission is None:
            return
        answer = self._request_permission()
        logger.info("Notification permission: %s", answer.value)
        self.set_permission(answer)
