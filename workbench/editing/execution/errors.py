"""Classification of workspace configuration edit failures.

Invalid and dirty workspace files get a prompt offering to open the file;
every other failure is reported with its message verbatim.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from workbench.editing.models.enums import JsonEditingErrorCode, Severity
from workbench.editing.models.notifications import NotificationAction

if TYPE_CHECKING:
    from workbench.editing.services.base import NotificationService

OPEN_WORKSPACE_CONFIG_COMMAND = "workbench.action.openWorkspaceConfigFile"

INVALID_FILE_MESSAGE = (
    "Unable to write into workspace configuration file. "
    "Please open the file to correct errors/warnings in it and try again."
)
FILE_DIRTY_MESSAGE = (
    "Unable to write into workspace configuration file because the file is dirty. Please save it and try again."
)


def handle_workspace_configuration_editing_error(
    error: Exception,
    notifications: NotificationService,
    config_path: Path | None = None,
) -> None:
    code = getattr(error, "code", None)
    if code == JsonEditingErrorCode.INVALID_FILE:
        _ask_to_open_workspace_configuration_file(notifications, INVALID_FILE_MESSAGE, config_path)
    elif code == JsonEditingErrorCode.FILE_DIRTY:
        _ask_to_open_workspace_configuration_file(notifications, FILE_DIRTY_MESSAGE, config_path)
    else:
        notifications.error(getattr(error, "message", None) or str(error))


def _ask_to_open_workspace_configuration_file(
    notifications: NotificationService,
    message: str,
    config_path: Path | None,
) -> None:
    action = NotificationAction(
        label="Open Workspace Configuration",
        command=OPEN_WORKSPACE_CONFIG_COMMAND,
        args=[str(config_path)] if config_path is not None else [],
    )
    notifications.prompt(Severity.ERROR, message, [action])
