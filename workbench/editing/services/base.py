"""Collaborator interfaces consumed by the editing core.

Everything here is implemented elsewhere -- locally in this package for the
app and tests, or by a host application.  The editing core only depends on
these protocols, never on a concrete class (the single exception being the
``NullBackupService`` check in the migration pipeline).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from workbench.editing.models.enums import ConfigurationTarget, Severity
from workbench.editing.models.notifications import NotificationAction
from workbench.editing.models.workspace import (
    EmptyWorkbench,
    EnterWorkspaceResult,
    FolderCreationRequest,
    FolderWorkbench,
    RecentlyOpenedEntry,
    WindowInfo,
    WorkspaceIdentifier,
    WorkspaceWorkbench,
)


@runtime_checkable
class FileService(Protocol):
    async def read_contents(self, path: Path) -> str:
        """Read a text file.  Raises ``FileNotFoundError`` if missing."""
        ...

    async def write_file(self, path: Path, text: str, *, overwrite: bool = False) -> None:
        """Write a text file.  Raises ``FileExistsError`` if it exists and ``overwrite`` is false."""
        ...

    async def exists(self, path: Path) -> bool: ...

    async def delete(self, path: Path, *, recursive: bool = False) -> None:
        """Delete a file or directory.  No-op if missing."""
        ...


@runtime_checkable
class ExtensionHost(Protocol):
    """Start/stop signals for the extension runtime."""

    async def stop(self) -> None: ...

    async def start(self) -> None: ...


@runtime_checkable
class WindowHost(Protocol):
    """The process that owns windows and the workspaces they have open."""

    async def get_window_count(self) -> int: ...

    async def get_windows(self) -> list[WindowInfo]: ...

    async def enter_workspace(self, path: Path) -> EnterWorkspaceResult | None:
        """Point this window at the workspace file *path*.

        Returns ``None`` if the host declines (e.g. the workspace is open in
        another window).  Raises if the file cannot be used as a workspace.
        """
        ...

    async def reload(self) -> None: ...

    async def create_untitled_workspace(
        self,
        folders: list[FolderCreationRequest],
        remote_authority: str | None = None,
    ) -> WorkspaceIdentifier: ...

    async def delete_untitled_workspace(self, workspace: WorkspaceIdentifier) -> None: ...

    async def get_workspace_identifier(self, path: Path) -> WorkspaceIdentifier: ...


@runtime_checkable
class StorageService(Protocol):
    async def migrate(self, from_id: str, to_id: str) -> None:
        """Copy every key of namespace *from_id* into *to_id*.

        Keys already in *to_id* that *from_id* lacks are kept.
        """
        ...


@runtime_checkable
class ConfigurationService(Protocol):
    """Session-scoped context: what is open, its settings, and folder edits."""

    @property
    def workbench(self) -> EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench: ...

    def storage_id(self) -> str:
        """Namespace of the persisted key-value storage for what is open now."""
        ...

    def keys(self, target: ConfigurationTarget) -> list[str]: ...

    def inspect(self, key: str, target: ConfigurationTarget) -> Any: ...

    async def initialize(self, workspace: WorkspaceIdentifier) -> None:
        """Rebind to *workspace*, replacing the current identity."""
        ...

    async def add_folders(self, folders: list[FolderCreationRequest], index: int | None = None) -> None: ...

    async def remove_folders(self, folders: list[Path]) -> None: ...

    async def update_folders(
        self,
        folders_to_add: list[FolderCreationRequest],
        folders_to_remove: list[Path],
        index: int | None = None,
    ) -> None: ...


@runtime_checkable
class BackupService(Protocol):
    def initialize(self, backup_path: Path) -> None: ...


@runtime_checkable
class JsonEditor(Protocol):
    async def write(self, path: Path, key: str, value: Any) -> None:
        """Set top-level *key* of the JSON object stored at *path*."""
        ...


@runtime_checkable
class DialogService(Protocol):
    async def show(
        self,
        severity: Severity,
        message: str,
        buttons: list[str],
        *,
        detail: str | None = None,
        cancel_id: int | None = None,
    ) -> int:
        """Ask the user to pick a button.  Returns the chosen index."""
        ...

    async def show_save_dialog(
        self,
        *,
        title: str,
        save_label: str,
        filters: list[dict[str, Any]],
        default_path: Path | None = None,
    ) -> Path | None: ...


@runtime_checkable
class NotificationService(Protocol):
    def prompt(self, severity: Severity, message: str, actions: list[NotificationAction]) -> None: ...

    def error(self, message: str) -> None: ...


@runtime_checkable
class RecentlyOpenedService(Protocol):
    async def add_recently_opened(self, entries: list[RecentlyOpenedEntry]) -> None: ...
