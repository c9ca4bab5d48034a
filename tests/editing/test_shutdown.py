from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from workbench.editing.execution.shutdown import (
    CANCEL_LABEL,
    DONT_SAVE_LABEL,
    SAVE_LABEL,
    SAVE_MESSAGE,
    ShutdownSaveGuard,
    confirm_buttons,
)
from workbench.editing.models.enums import ConfirmResult, Platform, ShutdownReason
from workbench.editing.models.workspace import (
    FolderWorkbench,
    WorkspaceFolder,
    WorkspaceIdentifier,
    WorkspaceWorkbench,
)
from workbench.editing.services.dialogs import ScriptedDialogService

UNTITLED_HOME = Path("/state/untitled")
UNTITLED = WorkspaceIdentifier(id="u1", config_path=UNTITLED_HOME / "u1" / "workspace.json")
SAVED = WorkspaceIdentifier(id="s1", config_path=Path("/projects/team.workspace"))


def _guard(
    *,
    dialogs: ScriptedDialogService | None = None,
    workspace: WorkspaceIdentifier = UNTITLED,
    window_count: int = 2,
    platform: Platform = Platform.LINUX,
    persistence: AsyncMock | None = None,
):
    context = MagicMock()
    context.workbench = WorkspaceWorkbench(workspace=workspace)
    host = AsyncMock()
    host.get_window_count.return_value = window_count
    host.get_workspace_identifier.return_value = SAVED
    recent = AsyncMock()
    guard = ShutdownSaveGuard(
        context=context,
        host=host,
        dialogs=dialogs or ScriptedDialogService(),
        persistence=persistence or AsyncMock(),
        recent=recent,
        untitled_home=UNTITLED_HOME,
        default_workspace_path=Path("/projects"),
        platform=platform,
    )
    return guard, host, recent


@pytest.mark.parametrize("reason", [ShutdownReason.QUIT, ShutdownReason.RELOAD])
async def test_other_reasons_have_no_opinion(reason: ShutdownReason) -> None:
    dialogs = ScriptedDialogService(answer=SAVE_LABEL)
    guard, _, _ = _guard(dialogs=dialogs)

    assert await guard.before_shutdown(reason) is None
    assert dialogs.shown == []


async def test_saved_workspace_has_no_opinion() -> None:
    guard, _, _ = _guard(workspace=SAVED)
    assert await guard.before_shutdown(ShutdownReason.CLOSE) is None


async def test_folder_window_has_no_opinion() -> None:
    guard, _, _ = _guard()
    guard._context.workbench = FolderWorkbench(folder=WorkspaceFolder(uri=Path("/p/a"), name="a"))
    assert await guard.before_shutdown(ShutdownReason.LOAD) is None


async def test_closing_last_window_off_macos_allows_without_prompt() -> None:
    dialogs = ScriptedDialogService(answer=SAVE_LABEL)
    guard, host, _ = _guard(dialogs=dialogs, window_count=1, platform=Platform.WINDOWS)

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is False
    assert dialogs.shown == []
    host.delete_untitled_workspace.assert_not_awaited()


async def test_closing_last_window_on_macos_still_prompts() -> None:
    dialogs = ScriptedDialogService(answer=CANCEL_LABEL)
    guard, _, _ = _guard(dialogs=dialogs, window_count=1, platform=Platform.MACOS)

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is True
    assert dialogs.shown == [SAVE_MESSAGE]


async def test_cancel_vetoes() -> None:
    guard, host, _ = _guard(dialogs=ScriptedDialogService(answer=CANCEL_LABEL))

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is True
    host.delete_untitled_workspace.assert_not_awaited()


async def test_dismissed_dialog_counts_as_cancel() -> None:
    guard, _, _ = _guard(dialogs=ScriptedDialogService(answer=None))
    assert await guard.before_shutdown(ShutdownReason.LOAD) is True


async def test_dont_save_deletes_untitled_workspace() -> None:
    guard, host, recent = _guard(dialogs=ScriptedDialogService(answer=DONT_SAVE_LABEL))

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is False
    host.delete_untitled_workspace.assert_awaited_once_with(UNTITLED)
    recent.add_recently_opened.assert_not_awaited()


async def test_save_without_picking_a_path_vetoes() -> None:
    persistence = AsyncMock()
    guard, host, _ = _guard(dialogs=ScriptedDialogService(answer=SAVE_LABEL), persistence=persistence)

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is True
    persistence.save_as.assert_not_awaited()
    host.delete_untitled_workspace.assert_not_awaited()


async def test_save_writes_file_and_records_recent() -> None:
    persistence = AsyncMock()
    dialogs = ScriptedDialogService(answer=SAVE_LABEL, save_path=SAVED.config_path)
    guard, host, recent = _guard(dialogs=dialogs, persistence=persistence)

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is False

    persistence.save_as.assert_awaited_once_with(UNTITLED, SAVED.config_path)
    host.get_workspace_identifier.assert_awaited_once_with(SAVED.config_path)
    (entries,) = recent.add_recently_opened.await_args.args
    assert [e.workspace for e in entries] == [SAVED]
    assert entries[0].label == "/projects/team.workspace"
    host.delete_untitled_workspace.assert_awaited_once_with(UNTITLED)


async def test_failed_save_still_allows_close() -> None:
    persistence = AsyncMock()
    persistence.save_as.side_effect = OSError("read-only file system")
    dialogs = ScriptedDialogService(answer=SAVE_LABEL, save_path=SAVED.config_path)
    guard, host, recent = _guard(dialogs=dialogs, persistence=persistence)

    assert await guard.before_shutdown(ShutdownReason.CLOSE) is False
    recent.add_recently_opened.assert_not_awaited()
    host.delete_untitled_workspace.assert_not_awaited()


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        (Platform.WINDOWS, [ConfirmResult.SAVE, ConfirmResult.DONT_SAVE, ConfirmResult.CANCEL]),
        (Platform.LINUX, [ConfirmResult.DONT_SAVE, ConfirmResult.CANCEL, ConfirmResult.SAVE]),
        (Platform.MACOS, [ConfirmResult.SAVE, ConfirmResult.CANCEL, ConfirmResult.DONT_SAVE]),
    ],
)
def test_confirm_buttons_order(platform: Platform, expected: list[ConfirmResult]) -> None:
    assert confirm_buttons(platform) == expected
