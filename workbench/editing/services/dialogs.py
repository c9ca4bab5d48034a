"""Headless dialog and notification surfaces.

There is no UI in this process: dialogs are answered from a script supplied
by the caller (e.g. the body of an HTTP request), and notifications are kept
in memory for the command layer to list.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger

from workbench.editing.models.enums import Severity
from workbench.editing.models.notifications import Notification, NotificationAction


class ScriptedDialogService:
    """Answers dialogs with pre-chosen values.

    ``answer`` is the label of the button to pick; when it is not among the
    offered buttons the dialog resolves to ``cancel_id`` (as if dismissed).
    ``save_path`` is returned from every save dialog.
    """

    def __init__(self, *, answer: str | None = None, save_path: Path | None = None) -> None:
        self._answer = answer
        self._save_path = save_path
        self.shown: list[str] = []

    async def show(
        self,
        severity: Severity,
        message: str,
        buttons: list[str],
        *,
        detail: str | None = None,
        cancel_id: int | None = None,
    ) -> int:
        self.shown.append(message)
        logger.debug("Dialog ({}): {} {}", severity, message, buttons)
        if self._answer in buttons:
            return buttons.index(self._answer)
        return cancel_id if cancel_id is not None else len(buttons) - 1

    async def show_save_dialog(
        self,
        *,
        title: str,
        save_label: str,
        filters: list[dict[str, Any]],
        default_path: Path | None = None,
    ) -> Path | None:
        logger.debug("Save dialog '{}' (default={}) -> {}", title, default_path, self._save_path)
        return self._save_path


class NotificationCenter:
    """In-memory notification list."""

    def __init__(self) -> None:
        self._notifications: list[Notification] = []

    def prompt(self, severity: Severity, message: str, actions: list[NotificationAction]) -> None:
        logger.warning("Notification: {}", message)
        self._notifications.append(Notification(severity=severity, message=message, actions=actions))

    def error(self, message: str) -> None:
        logger.error("Notification: {}", message)
        self._notifications.append(Notification(severity=Severity.ERROR, message=message))

    def get_notifications(self) -> list[Notification]:
        return list(self._notifications)

    def clear(self) -> None:
        self._notifications.clear()
