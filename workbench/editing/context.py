"""Workbench session context.

Bundles the editing service with the local collaborators it was built from,
so the command layers (HTTP routers, CLI) can reach the pieces they expose
-- notifications, the window registry -- without globals.

Design note: the current workspace identity is owned by the
``WorkspaceContextService`` held here.  Nothing else keeps a copy; callers
read ``session.context.workbench`` whenever they need it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

from workbench.editing.managers.workspaces import WorkspaceEditingService
from workbench.editing.resources import set_platform
from workbench.editing.services.configuration import (
    DEFAULT_PROPERTIES,
    ConfigurationRegistry,
    JsonEditingService,
    WorkspaceContextService,
)
from workbench.editing.services.dialogs import NotificationCenter, ScriptedDialogService
from workbench.editing.services.host import InProcessExtensionHost, LocalWindowHost, WindowRegistry
from workbench.editing.services.local import (
    JsonStorageService,
    LocalBackupService,
    LocalFileService,
    RecentlyOpenedStore,
)

if TYPE_CHECKING:
    from workbench.editing.settings import WorkbenchSettings


@dataclass
class WorkbenchSession:
    """Live state of the single editor session served by this process."""

    window_id: int
    editing: WorkspaceEditingService
    context: WorkspaceContextService
    json_editing: JsonEditingService
    notifications: NotificationCenter
    windows: WindowRegistry
    extensions: InProcessExtensionHost
    recent: RecentlyOpenedStore


async def create_session(settings: WorkbenchSettings, *, windows: WindowRegistry | None = None) -> WorkbenchSession:
    """Wire local collaborators and open what the settings ask for."""
    set_platform(settings.platform)

    files = LocalFileService()
    windows = windows or WindowRegistry()
    window_id = windows.register()
    untitled_home = settings.resolve_untitled_home()

    json_editing = JsonEditingService(files)
    context = WorkspaceContextService(files=files, json_editing=json_editing)
    host = LocalWindowHost(
        files=files,
        registry=windows,
        window_id=window_id,
        untitled_home=untitled_home,
        backup_home=settings.resolve_backup_home(),
    )
    notifications = NotificationCenter()
    extensions = InProcessExtensionHost()
    recent = RecentlyOpenedStore(settings.data_root / "recent.json")

    editing = WorkspaceEditingService(
        context=context,
        registry=ConfigurationRegistry(DEFAULT_PROPERTIES),
        json_editing=json_editing,
        files=files,
        host=host,
        storage=JsonStorageService(settings.data_root),
        backups=LocalBackupService(),
        extensions=extensions,
        dialogs=ScriptedDialogService(),
        notifications=notifications,
        recent=recent,
        untitled_home=untitled_home,
        default_workspace_path=settings.data_root,
        extension_tests_location=settings.extension_tests_location,
        remote_authority=settings.remote_authority,
        platform=settings.platform,
    )

    if settings.open_workspace is not None:
        workspace = await host.get_workspace_identifier(settings.open_workspace)
        await context.initialize(workspace)
        windows.update(window_id, workspace=workspace)
    elif settings.open_folder is not None:
        await context.open_folder(settings.open_folder)
        windows.update(window_id, workspace=None, folder=settings.open_folder)

    logger.info("Session: window {} ready ({})", window_id, context.workbench.state)
    return WorkbenchSession(
        window_id=window_id,
        editing=editing,
        context=context,
        json_editing=json_editing,
        notifications=notifications,
        windows=windows,
        extensions=extensions,
        recent=recent,
    )
