"""Ask to save an untitled workspace before its window goes away.

``before_shutdown`` answers with ``True`` (veto), ``False`` (let it close) or
``None`` (no opinion -- the guard does not apply).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from workbench.editing.execution.persistence import pick_new_workspace_path
from workbench.editing.models.enums import ConfirmResult, Platform, Severity, ShutdownReason
from workbench.editing.models.workspace import RecentlyOpenedEntry
from workbench.editing.resources import current_platform, is_equal_or_parent, workspace_label

if TYPE_CHECKING:
    from workbench.editing.execution.persistence import WorkspacePersistence
    from workbench.editing.services.base import (
        ConfigurationService,
        DialogService,
        RecentlyOpenedService,
        WindowHost,
    )

SAVE_LABEL = "Save"
DONT_SAVE_LABEL = "Don't Save"
CANCEL_LABEL = "Cancel"

SAVE_MESSAGE = "Do you want to save your workspace configuration as a file?"
SAVE_DETAIL = "Save your workspace if you plan to open it again."

_LABELS = {
    ConfirmResult.SAVE: SAVE_LABEL,
    ConfirmResult.DONT_SAVE: DONT_SAVE_LABEL,
    ConfirmResult.CANCEL: CANCEL_LABEL,
}


def confirm_buttons(platform: Platform) -> list[ConfirmResult]:
    """Button order of the save prompt on *platform*."""
    if platform == Platform.WINDOWS:
        return [ConfirmResult.SAVE, ConfirmResult.DONT_SAVE, ConfirmResult.CANCEL]
    if platform == Platform.LINUX:
        return [ConfirmResult.DONT_SAVE, ConfirmResult.CANCEL, ConfirmResult.SAVE]
    return [ConfirmResult.SAVE, ConfirmResult.CANCEL, ConfirmResult.DONT_SAVE]


class ShutdownSaveGuard:
    def __init__(
        self,
        *,
        context: ConfigurationService,
        host: WindowHost,
        dialogs: DialogService,
        persistence: WorkspacePersistence,
        recent: RecentlyOpenedService,
        untitled_home: Path,
        default_workspace_path: Path | None = None,
        platform: Platform | None = None,
    ) -> None:
        self._context = context
        self._host = host
        self._dialogs = dialogs
        self._persistence = persistence
        self._recent = recent
        self._untitled_home = untitled_home
        self._default_workspace_path = default_workspace_path
        self._platform = platform

    async def before_shutdown(self, reason: ShutdownReason) -> bool | None:
        if reason not in (ShutdownReason.CLOSE, ShutdownReason.LOAD):
            return None

        workspace = self._context.workbench.identifier
        if workspace is None or not is_equal_or_parent(workspace.config_path, self._untitled_home):
            return None

        platform = self._platform or current_platform()
        window_count = await self._host.get_window_count()
        if reason == ShutdownReason.CLOSE and platform != Platform.MACOS and window_count == 1:
            # The application quits with its last window on Windows/Linux.
            return False

        buttons = confirm_buttons(platform)
        choice = await self._dialogs.show(
            Severity.WARNING,
            SAVE_MESSAGE,
            [_LABELS[b] for b in buttons],
            detail=SAVE_DETAIL,
            cancel_id=buttons.index(ConfirmResult.CANCEL),
        )
        result = buttons[choice] if 0 <= choice < len(buttons) else ConfirmResult.CANCEL
        logger.info("Shutdown: untitled workspace prompt answered with {}", result)

        if result == ConfirmResult.CANCEL:
            return True

        if result == ConfirmResult.DONT_SAVE:
            await self._host.delete_untitled_workspace(workspace)
            return False

        target = await pick_new_workspace_path(self._dialogs, self._default_workspace_path)
        if target is None:
            return True

        try:
            await self._persistence.save_as(workspace, target)
        except Exception:
            logger.opt(exception=True).warning("Shutdown: saving {} as {} failed", workspace.config_path, target)
            return False

        saved = await self._host.get_workspace_identifier(target)
        label = workspace_label(saved.config_path, verbose=True)
        await self._recent.add_recently_opened([RecentlyOpenedEntry(label=label, workspace=saved)])
        await self._host.delete_untitled_workspace(workspace)
        return False
