from __future__ import annotations

from pathlib import Path

import pytest

from workbench.editing.execution.errors import (
    FILE_DIRTY_MESSAGE,
    INVALID_FILE_MESSAGE,
    OPEN_WORKSPACE_CONFIG_COMMAND,
    handle_workspace_configuration_editing_error,
)
from workbench.editing.models.enums import JsonEditingErrorCode, Severity
from workbench.editing.services.configuration import JsonEditingError
from workbench.editing.services.dialogs import NotificationCenter

CONFIG = Path("/projects/team.workspace")


@pytest.mark.parametrize(
    ("code", "message"),
    [
        (JsonEditingErrorCode.INVALID_FILE, INVALID_FILE_MESSAGE),
        (JsonEditingErrorCode.FILE_DIRTY, FILE_DIRTY_MESSAGE),
    ],
)
def test_fixable_errors_offer_to_open_the_file(code: JsonEditingErrorCode, message: str) -> None:
    notifications = NotificationCenter()

    handle_workspace_configuration_editing_error(JsonEditingError(code, "raw"), notifications, CONFIG)

    (notification,) = notifications.get_notifications()
    assert notification.severity == Severity.ERROR
    assert notification.message == message
    (action,) = notification.actions
    assert action.label == "Open Workspace Configuration"
    assert action.command == OPEN_WORKSPACE_CONFIG_COMMAND
    assert action.args == [str(CONFIG)]


def test_other_editing_errors_show_their_message() -> None:
    notifications = NotificationCenter()
    error = JsonEditingError(JsonEditingErrorCode.WRITE_FAILED, "Unable to write into 'team.workspace': EACCES")

    handle_workspace_configuration_editing_error(error, notifications, CONFIG)

    (notification,) = notifications.get_notifications()
    assert notification.message == "Unable to write into 'team.workspace': EACCES"
    assert notification.actions == []


def test_unrelated_exception_uses_str() -> None:
    notifications = NotificationCenter()

    handle_workspace_configuration_editing_error(PermissionError("denied"), notifications)

    assert [n.message for n in notifications.get_notifications()] == ["denied"]


def test_missing_config_path_yields_action_without_args() -> None:
    notifications = NotificationCenter()

    handle_workspace_configuration_editing_error(
        JsonEditingError(JsonEditingErrorCode.INVALID_FILE, "raw"), notifications
    )

    assert notifications.get_notifications()[0].actions[0].args == []
