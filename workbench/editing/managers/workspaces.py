"""Workspace editing -- folder changes, save-as, and entering workspaces.

The ``WorkspaceEditingService`` is a process-level singleton initialised in
the app lifespan.  It owns no state of its own: the current workbench lives
in the context service, and every change goes through one of

- **Reconciler**: decide what a folder change means for the current state
- **Persistence**: validate targets and write workspace files
- **Migration**: move the session to a new workspace identity
- **Shutdown guard**: offer to save untitled workspaces on close
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from workbench.editing.execution.errors import handle_workspace_configuration_editing_error
from workbench.editing.execution.migration import MigrationPipeline
from workbench.editing.execution.persistence import (
    InvalidWorkspaceTargetError,
    WorkspacePersistence,
    pick_new_workspace_path,
)
from workbench.editing.execution.reconciler import FolderPlan, plan_add, plan_remove, plan_update
from workbench.editing.execution.shutdown import ShutdownSaveGuard
from workbench.editing.models.enums import FolderAction

if TYPE_CHECKING:
    from workbench.editing.models.enums import Platform, ShutdownReason
    from workbench.editing.models.workspace import (
        EmptyWorkbench,
        EnterWorkspaceResult,
        FolderCreationRequest,
        FolderWorkbench,
        WorkspaceIdentifier,
        WorkspaceWorkbench,
    )
    from workbench.editing.services.base import (
        BackupService,
        ConfigurationService,
        DialogService,
        ExtensionHost,
        FileService,
        JsonEditor,
        NotificationService,
        RecentlyOpenedService,
        StorageService,
        WindowHost,
    )
    from workbench.editing.services.configuration import ConfigurationRegistry


class NoWorkspaceOpenError(LookupError):
    """Raised when an operation needs an open workspace file and there is none."""


class WorkspaceEditingService:
    """Entry point for every change to the session's workspace."""

    def __init__(
        self,
        *,
        context: ConfigurationService,
        registry: ConfigurationRegistry,
        json_editing: JsonEditor,
        files: FileService,
        host: WindowHost,
        storage: StorageService,
        backups: BackupService,
        extensions: ExtensionHost,
        dialogs: DialogService,
        notifications: NotificationService,
        recent: RecentlyOpenedService,
        untitled_home: Path,
        default_workspace_path: Path | None = None,
        extension_tests_location: Path | None = None,
        remote_authority: str | None = None,
        platform: Platform | None = None,
    ) -> None:
        self._context = context
        self._host = host
        self._dialogs = dialogs
        self._notifications = notifications
        self._recent = recent
        self._untitled_home = untitled_home
        self._default_workspace_path = default_workspace_path
        self._remote_authority = remote_authority
        self._platform = platform
        self._persistence = WorkspacePersistence(files=files, host=host, dialogs=dialogs)
        self._migration = MigrationPipeline(
            context=context,
            registry=registry,
            json_editing=json_editing,
            storage=storage,
            backups=backups,
            extensions=extensions,
            host=host,
            extension_tests_location=extension_tests_location,
            remote_authority=remote_authority,
        )

    # -- Query -----------------------------------------------------------------

    @property
    def workbench(self) -> EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench:
        return self._context.workbench

    def current_workspace_identifier(self) -> WorkspaceIdentifier | None:
        return self._context.workbench.identifier

    async def get_workspace_identifier(self, path: Path) -> WorkspaceIdentifier:
        return await self._host.get_workspace_identifier(path)

    # -- Folders ---------------------------------------------------------------

    async def update_folders(
        self,
        index: int,
        delete_count: int | None = None,
        folders_to_add: list[FolderCreationRequest] | None = None,
        *,
        donot_notify_error: bool = False,
    ) -> None:
        """Delete ``delete_count`` folders at ``index`` and insert ``folders_to_add`` there."""
        plan = plan_update(self._context.workbench, index, delete_count, folders_to_add)
        await self._apply(plan, donot_notify_error=donot_notify_error)

    async def add_folders(
        self,
        folders_to_add: list[FolderCreationRequest],
        *,
        index: int | None = None,
        donot_notify_error: bool = False,
    ) -> None:
        plan = plan_add(self._context.workbench, folders_to_add, index)
        await self._apply(plan, donot_notify_error=donot_notify_error)

    async def remove_folders(self, folders_to_remove: list[Path], *, donot_notify_error: bool = False) -> None:
        plan = plan_remove(self._context.workbench, folders_to_remove)
        await self._apply(plan, donot_notify_error=donot_notify_error)

    async def _apply(self, plan: FolderPlan, *, donot_notify_error: bool) -> None:
        if plan.action == FolderAction.NONE:
            return
        if plan.action == FolderAction.ENTER:
            logger.info("Editing: entering a new workspace with {} folders", len(plan.folders_to_add))
            await self.create_and_enter_workspace(plan.folders_to_add)
            return

        try:
            if plan.action == FolderAction.ADD:
                await self._context.add_folders(plan.folders_to_add, plan.index)
            elif plan.action == FolderAction.REMOVE:
                await self._context.remove_folders(plan.folders_to_remove)
            else:
                await self._context.update_folders(plan.folders_to_add, plan.folders_to_remove, plan.index)
        except Exception as exc:
            if donot_notify_error:
                raise
            workspace = self.current_workspace_identifier()
            handle_workspace_configuration_editing_error(
                exc, self._notifications, workspace.config_path if workspace else None
            )

    # -- Workspaces ------------------------------------------------------------

    async def create_and_enter_workspace(
        self,
        folders: list[FolderCreationRequest],
        path: Path | None = None,
    ) -> EnterWorkspaceResult | None:
        """Create a workspace holding *folders* (saved at *path* if given) and enter it."""
        if path is not None and not await self.is_valid_target_location(path):
            raise InvalidWorkspaceTargetError(str(path))

        untitled = await self._host.create_untitled_workspace(folders, self._remote_authority)
        if path is not None:
            await self._persistence.save_as(untitled, path)
        else:
            path = untitled.config_path
        return await self.enter_workspace(path)

    async def save_and_enter_workspace(self, path: Path) -> EnterWorkspaceResult | None:
        """Save the open workspace as *path* and switch the session to it."""
        if not await self.is_valid_target_location(path):
            raise InvalidWorkspaceTargetError(str(path))

        workspace = self.current_workspace_identifier()
        if workspace is None:
            msg = "No workspace is open"
            raise NoWorkspaceOpenError(msg)

        await self._persistence.save_as(workspace, path)
        return await self.enter_workspace(path)

    async def enter_workspace(self, path: Path) -> EnterWorkspaceResult | None:
        return await self._migration.enter_workspace(path)

    async def copy_workspace_settings(self, to: WorkspaceIdentifier) -> None:
        await self._migration.copy_workspace_settings(to)

    async def is_valid_target_location(self, path: Path) -> bool:
        return await self._persistence.is_valid_target_location(path)

    async def pick_new_workspace_path(self) -> Path | None:
        return await pick_new_workspace_path(self._dialogs, self._default_workspace_path)

    # -- Lifecycle -------------------------------------------------------------

    async def before_shutdown(self, reason: ShutdownReason, *, dialogs: DialogService | None = None) -> bool | None:
        """Run the untitled-workspace save guard.  ``dialogs`` overrides the default surface."""
        guard = ShutdownSaveGuard(
            context=self._context,
            host=self._host,
            dialogs=dialogs or self._dialogs,
            persistence=self._persistence,
            recent=self._recent,
            untitled_home=self._untitled_home,
            default_workspace_path=self._default_workspace_path,
            platform=self._platform,
        )
        return await guard.before_shutdown(reason)
