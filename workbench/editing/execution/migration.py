"""Migration pipeline -- moves the session to another workspace identity.

Steps of ``enter_workspace``:

1. **Stop** the extension host.  Runs as its own task so extensions get the
   whole migration as grace period; it is joined only right before the host
   is started again.
2. **Enter**: ask the window host to accept the new workspace.  A decline
   ends the pipeline (the extension host is still restarted).
3. **Storage**: copy the key-value storage namespace to the new identity.
4. **Settings**: coming from a single folder, copy its window-scoped
   workspace settings into the new workspace file.
5. **Backups**: point the backup store at the new backup folder.
6. **Configuration**: rebind the context to the new identity, then restart
   the extension host (or reload the window for remote sessions).

If anything from step 2 on fails, the extension host is restarted (once) and
the error is re-raised.  Storage and settings already copied stay copied.
Migration never touches extension-owned state, which is what makes running it
concurrently with the extension shutdown safe.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from workbench.editing.models.enums import ConfigurationScope, ConfigurationTarget, WorkbenchState
from workbench.editing.models.workspace import ConfigurationProperty, EnterWorkspaceResult, WorkspaceIdentifier
from workbench.editing.services.local import NullBackupService

if TYPE_CHECKING:
    from workbench.editing.services.base import (
        BackupService,
        ConfigurationService,
        ExtensionHost,
        JsonEditor,
        StorageService,
        WindowHost,
    )
    from workbench.editing.services.configuration import ConfigurationRegistry


class WorkspaceEntryRefusedError(RuntimeError):
    """Raised when the session may not switch workspaces (extension tests)."""


class MigrationPipeline:
    """Enters workspaces and carries storage, settings and backups along."""

    def __init__(
        self,
        *,
        context: ConfigurationService,
        registry: ConfigurationRegistry,
        json_editing: JsonEditor,
        storage: StorageService,
        backups: BackupService,
        extensions: ExtensionHost,
        host: WindowHost,
        extension_tests_location: Path | None = None,
        remote_authority: str | None = None,
    ) -> None:
        self._context = context
        self._registry = registry
        self._json_editing = json_editing
        self._storage = storage
        self._backups = backups
        self._extensions = extensions
        self._host = host
        self._extension_tests_location = extension_tests_location
        self._remote_authority = remote_authority

    # -- Enter -----------------------------------------------------------------

    async def enter_workspace(self, path: Path) -> EnterWorkspaceResult | None:
        """Switch the session to the workspace file at *path*.

        Returns the host's result, or ``None`` if the host declined.
        """
        if self._extension_tests_location is not None:
            msg = "Entering a new workspace is not possible in tests."
            raise WorkspaceEntryRefusedError(msg)

        previous_state = self._context.workbench.state
        previous_storage_id = self._context.storage_id()

        stopping = asyncio.create_task(self._extensions.stop())
        started = False

        async def start_extension_host() -> None:
            nonlocal started
            started = True
            await _join_stop(stopping)
            if self._remote_authority:
                await self._host.reload()
            else:
                await self._extensions.start()

        try:
            result = await self._host.enter_workspace(path)
            if result is None:
                logger.info("Migration: host declined to enter {}", path)
                await start_extension_host()
                return None

            await self._migrate(result.workspace, previous_state, previous_storage_id)

            if result.backup_path is not None and not isinstance(self._backups, NullBackupService):
                self._backups.initialize(result.backup_path)

            await self._context.initialize(result.workspace)
            await start_extension_host()
        except Exception:
            if not started:
                logger.warning("Migration: entering {} failed, restarting extension host", path)
                await start_extension_host()
            raise

        logger.info("Migration: entered workspace {}", result.workspace.config_path)
        return result

    # -- Migrate ---------------------------------------------------------------

    async def _migrate(self, to: WorkspaceIdentifier, previous_state: WorkbenchState, from_storage_id: str) -> None:
        await self._storage.migrate(from_storage_id, to.id)

        if previous_state == WorkbenchState.FOLDER:
            await self.migrate_workspace_settings(to)

    async def migrate_workspace_settings(self, to: WorkspaceIdentifier) -> None:
        """Copy only window-scoped workspace settings into *to*."""
        await self._copy_workspace_settings(to, lambda prop: prop.scope == ConfigurationScope.WINDOW)

    async def copy_workspace_settings(self, to: WorkspaceIdentifier) -> None:
        """Copy every declared workspace-level setting into *to*, whatever its scope."""
        await self._copy_workspace_settings(to)

    async def _copy_workspace_settings(
        self,
        to: WorkspaceIdentifier,
        scope_filter: Callable[[ConfigurationProperty], bool] | None = None,
    ) -> None:
        properties = self._registry.get_configuration_properties()
        settings: dict[str, Any] = {}
        for key in self._context.keys(ConfigurationTarget.WORKSPACE):
            prop = properties.get(key)
            if prop is None:
                continue
            if scope_filter is not None and not scope_filter(prop):
                continue
            settings[key] = self._context.inspect(key, ConfigurationTarget.WORKSPACE)

        logger.debug("Migration: copying {} settings into {}", len(settings), to.config_path)
        await self._json_editing.write(to.config_path, "settings", settings)


async def _join_stop(stopping: asyncio.Task[None]) -> None:
    """Wait for the extension host stop to finish before starting it again."""
    try:
        await stopping
    except Exception:
        logger.opt(exception=True).warning("Migration: extension host did not stop cleanly")
