"""Tray application: wires the session controller to its sinks and stores."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
from PyQt6.QtCore import QObject, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QApplication, QInputDialog, QLineEdit, QMenu, QMessageBox, QSystemTrayIcon,
)

from .api.client import ApiClient
from .audio.sounds import SoundManager
from .display import window_title
from .errors import ApiError, TodoNotFoundError
from .notifications import NotificationManager, NotificationPermission
from .preferences import PreferencesManager
from .settings import PREFERENCES_PATH
from .storage import PreferencesStore, select_preferences_store
from .timer.engine import Phase, SessionController
from .todos import Todo, TodoStore, select_todo_store

logger = logging.getLogger(__name__)


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(phase: Phase, running: bool) -> QIcon:
    """32×32 icon: filled circle while focusing, outline + dot on breaks,
    plain outline while paused."""
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor("#E5484D") if phase is Phase.FOCUS else QColor("#30A46C")

    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if running and phase is Phase.FOCUS:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
        if running:
            p.setPen(Qt.PenStyle.NoPen)
            p.setBrush(colour)
            dot_r = 6
            p.drawEllipse(cx - dot_r, cy - dot_r, dot_r * 2, dot_r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


class TomatodoApp(QObject):
    """Headless tray application around one ``SessionController``."""

    todos_changed = pyqtSignal()

    def __init__(
        self,
        client: ApiClient | None = None,
        *,
        preferences_path: Path = PREFERENCES_PATH,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__()
        self._client = client or ApiClient()
        self._preferences_path = preferences_path
        self._username = self._check_auth()
        self._permission_pending = False

        # ── controller + preferences ──────────────────────────────────
        self._controller = SessionController(parent=self)
        self._preferences = PreferencesManager(
            self._select_preferences_store(),
            self._controller,
            parent=self,
        )
        self._todos: TodoStore = select_todo_store(
            self.authenticated, client=self._client,
        )

        # ── sinks ─────────────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
        self._notifications = NotificationManager(
            parent=self,
            presenter=self._tray_icon.showMessage,
            request_permission=self._request_notification_permission,
        )

        self._controller.alarm_requested.connect(self._sound_manager.on_alarm_requested)
        self._controller.notification_requested.connect(
            self._notifications.on_notification_requested
        )
        self._controller.time_updated.connect(self._refresh_tray)
        self._controller.running_changed.connect(self._refresh_tray)
        self._controller.phase_started.connect(self._refresh_tray)
        self._controller.session_completed.connect(self._on_cycle_complete)
        self._preferences.preferences_changed.connect(self._refresh_tray)

        self._build_tray_menu()
        self._preferences.load()
        self._tray_icon.show()

    # ── public API ────────────────────────────────────────────────────

    @property
    def authenticated(self) -> bool:
        return self._username is not None

    @property
    def username(self) -> str | None:
        return self._username

    @property
    def controller(self) -> SessionController:
        return self._controller

    @property
    def preferences(self) -> PreferencesManager:
        return self._preferences

    @property
    def notifications(self) -> NotificationManager:
        return self._notifications

    @property
    def todos(self) -> TodoStore:
        return self._todos

    @property
    def tooltip(self) -> str:
        return self._tray_icon.toolTip()

    def sign_in(self, username: str, password: str) -> None:
        self._client.login(username, password)
        self._username = username
        logger.info("Signed in as %s", username)
        self._switch_backends()

    def sign_out(self) -> None:
        self._client.logout()
        self._username = None
        logger.info("Signed out")
        self._switch_backends()

    def add_todo(self, text: str) -> Todo:
        todo = self._todos.add(text)
        self.todos_changed.emit()
        return todo

    def toggle_todo(self, todo_id: int) -> Todo:
        todo = self._todos.toggle(todo_id)
        self.todos_changed.emit()
        return todo

    def remove_completed_todos(self) -> int:
        done = [t for t in self._todos.list() if t.completed]
        for todo in done:
            self._todos.delete(todo.id)
        self.todos_changed.emit()
        return len(done)

    # ── internal ──────────────────────────────────────────────────────

    def _check_auth(self) -> str | None:
        try:
            return self._client.auth_check()
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Backend unreachable, using local storage: %s", exc)
            return None

    def _select_preferences_store(self) -> PreferencesStore:
        return select_preferences_store(
            self.authenticated, client=self._client, path=self._preferences_path,
        )

    def _switch_backends(self) -> None:
        self._todos = select_todo_store(self.authenticated, client=self._client)
        self._preferences.set_store(self._select_preferences_store())
        self.todos_changed.emit()
        self._refresh_account_action()

    def _build_tray_menu(self) -> None:
        menu = QMenu()

        self._start_action = menu.addAction("Start")
        self._start_action.triggered.connect(self._controller.toggle)

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(self._controller.reset)

        self._sound_action = menu.addAction("Sound")
        self._sound_action.setCheckable(True)
        self._sound_action.triggered.connect(self._preferences.toggle_sound)

        menu.addSeparator()

        self._todo_menu = menu.addMenu("To-dos")
        self._todo_menu.aboutToShow.connect(self._populate_todo_menu)

        self._account_action = menu.addAction("Sign In…")
        self._account_action.triggered.connect(self._on_account_action)
        self._refresh_account_action()

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._menu = menu
        self._tray_icon.setContextMenu(menu)

    def _populate_todo_menu(self) -> None:
        menu = self._todo_menu
        menu.clear()
        try:
            todos = self._todos.list()
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Could not list to-dos: %s", exc)
            todos = []

        for todo in todos:
            action = menu.addAction(todo.text)
            action.setCheckable(True)
            action.setChecked(todo.completed)
            action.triggered.connect(
                lambda _checked, todo_id=todo.id: self._run_todo_action(
                    self.toggle_todo, todo_id
                )
            )
        if not todos:
            empty = menu.addAction("No tasks yet")
            empty.setEnabled(False)

        menu.addSeparator()
        add_action = menu.addAction("Add To-do…")
        add_action.triggered.connect(self._prompt_add_todo)
        clear_action = menu.addAction("Remove Completed")
        clear_action.setEnabled(any(t.completed for t in todos))
        clear_action.triggered.connect(
            lambda: self._run_todo_action(self.remove_completed_todos)
        )

    def _run_todo_action(self, action, *args) -> None:
        try:
            action(*args)
        except (ApiError, TodoNotFoundError, httpx.HTTPError) as exc:
            logger.warning("To-do update failed: %s", exc)

    def _prompt_add_todo(self) -> None:
        text, ok = QInputDialog.getText(None, "Tomatodo", "Add a new task:")
        if ok and text.strip():
            self._run_todo_action(self.add_todo, text)

    def _refresh_account_action(self) -> None:
        if self.authenticated:
            self._account_action.setText(f"Sign Out ({self._username})")
        else:
            self._account_action.setText("Sign In…")

    def _on_account_action(self) -> None:
        if self.authenticated:
            try:
                self.sign_out()
            except (ApiError, httpx.HTTPError) as exc:
                logger.warning("Sign out failed: %s", exc)
            return

        username, ok = QInputDialog.getText(None, "Sign In", "Username:")
        if not ok or not username.strip():
            return
        password, ok = QInputDialog.getText(
            None, "Sign In", "Password:", QLineEdit.EchoMode.Password,
        )
        if not ok:
            return
        try:
            self.sign_in(username.strip(), password)
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("Sign in failed: %s", exc)
            self._tray_icon.showMessage("Sign in failed", str(exc))

    def _refresh_tray(self, *_args) -> None:
        c = self._controller
        self._tray_icon.setIcon(_make_tray_icon(c.phase, c.is_running))
        self._tray_icon.setToolTip(window_title(c.state, c.config))
        self._start_action.setText("Pause" if c.is_running else "Start")
        self._start_action.setEnabled(c.is_running or c.time_left > 0)
        self._sound_action.setChecked(self._preferences.preferences.sound_enabled)

    def _on_cycle_complete(self) -> None:
        c = self._controller
        logger.info(
            "All %d sessions done (%d completed so far)",
            c.config.study_sessions,
            c.completed_sessions,
        )
        self._tray_icon.setToolTip("Tomatodo - cycle complete, reset to start again")

    def _request_notification_permission(self) -> NotificationPermission:
        # Runs inside a phase end; the dialog opens from the event loop.
        if not self._permission_pending:
            self._permission_pending = True
            QTimer.singleShot(0, self._ask_notification_permission)
        return NotificationPermission.DEFAULT

    def _ask_notification_permission(self) -> None:
        answer = QMessageBox.question(
            None,
            "Notifications",
            "Show a notification when a focus session or break ends?",
        )
        self._permission_pending = False
        if answer == QMessageBox.StandardButton.Yes:
            self._notifications.set_permission(NotificationPermission.GRANTED)
        else:
            self._notifications.set_permission(NotificationPermission.DENIED)

    def _quit_app(self) -> None:
        self._controller.pause()
        self._tray_icon.hide()
        self._client.close()
        QApplication.instance().quit()
