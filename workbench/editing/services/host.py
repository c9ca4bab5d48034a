"""In-process window host and extension host.

``WindowRegistry`` tracks the live windows of this process together with the
workspace or folder each has open.  It is the source of truth for "is this
workspace already open elsewhere" checks.  Ephemeral -- empty on restart.
"""

from __future__ import annotations

import asyncio
import itertools
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from workbench.editing.models.workspace import (
    EnterWorkspaceResult,
    FolderCreationRequest,
    StoredWorkspace,
    StoredWorkspaceFolder,
    WindowInfo,
    WorkspaceIdentifier,
)
from workbench.editing.resources import (
    UNTITLED_WORKSPACE_NAME,
    is_equal,
    is_equal_or_parent,
    to_stored_path,
    workspace_id,
)

if TYPE_CHECKING:
    from workbench.editing.services.base import FileService


class WindowRegistry:
    """Registry of open windows and what they show."""

    def __init__(self) -> None:
        self._windows: dict[int, WindowInfo] = {}
        self._ids = itertools.count(1)

    # -- Mutation --------------------------------------------------------------

    def register(self, *, workspace: WorkspaceIdentifier | None = None, folder: Path | None = None) -> int:
        window_id = next(self._ids)
        self._windows[window_id] = WindowInfo(window_id=window_id, workspace=workspace, folder=folder)
        logger.debug("Registry: register window {} (workspace={}, folder={})", window_id, workspace, folder)
        return window_id

    def update(self, window_id: int, *, workspace: WorkspaceIdentifier | None, folder: Path | None = None) -> None:
        self._windows[window_id] = WindowInfo(window_id=window_id, workspace=workspace, folder=folder)

    def unregister(self, window_id: int) -> WindowInfo | None:
        window = self._windows.pop(window_id, None)
        if window:
            logger.debug("Registry: unregister window {}", window_id)
        return window

    # -- Query -----------------------------------------------------------------

    def get(self, window_id: int) -> WindowInfo | None:
        return self._windows.get(window_id)

    def all_windows(self) -> list[WindowInfo]:
        """Return a snapshot of all open windows."""
        return list(self._windows.values())

    @property
    def active_count(self) -> int:
        return len(self._windows)


class LocalWindowHost:
    """Window host for a single window of this process.

    Untitled workspaces are created as
    ``{untitled_home}/{random}/workspace.json``; backups of a workspace live
    in ``{backup_home}/{workspace_id}``.
    """

    def __init__(
        self,
        *,
        files: FileService,
        registry: WindowRegistry,
        window_id: int,
        untitled_home: Path,
        backup_home: Path,
    ) -> None:
        self._files = files
        self._registry = registry
        self._window_id = window_id
        self._untitled_home = untitled_home
        self._backup_home = backup_home
        self.reload_requested = asyncio.Event()

    @property
    def untitled_home(self) -> Path:
        return self._untitled_home

    async def get_window_count(self) -> int:
        return self._registry.active_count

    async def get_windows(self) -> list[WindowInfo]:
        return self._registry.all_windows()

    async def enter_workspace(self, path: Path) -> EnterWorkspaceResult | None:
        for window in self._registry.all_windows():
            if window.window_id == self._window_id or window.workspace is None:
                continue
            if is_equal(window.workspace.config_path, path):
                logger.warning("Host: {} is already open in window {}", path, window.window_id)
                return None

        raw = await self._files.read_contents(path)
        StoredWorkspace.model_validate_json(raw)

        workspace = await self.get_workspace_identifier(path)
        self._registry.update(self._window_id, workspace=workspace)
        logger.info("Host: window {} entered {}", self._window_id, path)
        return EnterWorkspaceResult(workspace=workspace, backup_path=self._backup_home / workspace.id)

    async def reload(self) -> None:
        logger.info("Host: reload requested for window {}", self._window_id)
        self.reload_requested.set()

    async def create_untitled_workspace(
        self,
        folders: list[FolderCreationRequest],
        remote_authority: str | None = None,
    ) -> WorkspaceIdentifier:
        config_dir = self._untitled_home / uuid.uuid4().hex
        config_path = config_dir / UNTITLED_WORKSPACE_NAME
        stored = StoredWorkspace(
            folders=[StoredWorkspaceFolder.for_path(to_stored_path(f.uri, config_dir), f.name) for f in folders]
        )
        if remote_authority is not None:
            stored.remote_authority = remote_authority
        await self._files.write_file(config_path, stored.model_dump_json(indent=2, by_alias=True, exclude_unset=True))
        logger.debug("Host: created untitled workspace {} ({} folders)", config_path, len(folders))
        return await self.get_workspace_identifier(config_path)

    async def delete_untitled_workspace(self, workspace: WorkspaceIdentifier) -> None:
        if not is_equal_or_parent(workspace.config_path, self._untitled_home):
            logger.warning("Host: refusing to delete titled workspace {}", workspace.config_path)
            return
        await self._files.delete(workspace.config_path.parent, recursive=True)
        logger.info("Host: deleted untitled workspace {}", workspace.config_path)

    async def get_workspace_identifier(self, path: Path) -> WorkspaceIdentifier:
        return WorkspaceIdentifier(id=workspace_id(path), config_path=path)


class InProcessExtensionHost:
    """Extension runtime placeholder that only tracks whether it is running."""

    def __init__(self) -> None:
        self.running = True

    async def stop(self) -> None:
        logger.info("Extensions: stopping extension host")
        self.running = False

    async def start(self) -> None:
        logger.info("Extensions: starting extension host")
        self.running = True
