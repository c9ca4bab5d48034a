"""Workspace persistence: target validation, save-as, and path rewriting.

``save_as`` is not transactional.  A failure between reading the source and
finishing the write leaves the target missing or partially written; callers
must treat that as a failed save, never as a new workspace.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from workbench.editing.models.enums import Severity
from workbench.editing.models.workspace import StoredWorkspace
from workbench.editing.resources import (
    WORKSPACE_FILTER,
    basename,
    is_absolute,
    is_equal,
    relative_stored_path,
    resolve_stored_path,
)

if TYPE_CHECKING:
    from workbench.editing.models.workspace import WorkspaceIdentifier
    from workbench.editing.services.base import DialogService, FileService, WindowHost


class InvalidWorkspaceTargetError(ValueError):
    """Raised when a workspace cannot be saved to or entered at a location."""


def rewrite_workspace_file_for_new_location(raw: str, source: Path, target: Path) -> str:
    """Rewrite the folder paths of a workspace file moving from *source* to *target*.

    Relative ``path`` entries are resolved against the source directory and
    re-expressed relative to the target directory.  Absolute paths, ``uri``
    entries and every other key are left as they are.
    """
    stored = StoredWorkspace.model_validate_json(raw)
    source_dir = source.parent
    target_dir = target.parent

    for folder in stored.folders:
        if folder.path is None or is_absolute(folder.path):
            continue
        location = resolve_stored_path(folder.path, source_dir)
        folder.path = relative_stored_path(location, target_dir) or str(location)

    return stored.model_dump_json(indent=2, by_alias=True, exclude_unset=True)


async def pick_new_workspace_path(dialogs: DialogService, default_path: Path | None = None) -> Path | None:
    return await dialogs.show_save_dialog(
        title="Save Workspace",
        save_label="Save",
        filters=WORKSPACE_FILTER,
        default_path=default_path,
    )


class WorkspacePersistence:
    """Reads, rewrites and writes workspace files on behalf of the session."""

    def __init__(self, *, files: FileService, host: WindowHost, dialogs: DialogService) -> None:
        self._files = files
        self._host = host
        self._dialogs = dialogs

    async def is_valid_target_location(self, target: Path) -> bool:
        """False (after telling the user) if another window has *target* open."""
        windows = await self._host.get_windows()
        if any(w.workspace is not None and is_equal(w.workspace.config_path, target) for w in windows):
            logger.info("Persistence: {} is open in another window", target)
            await self._dialogs.show(
                Severity.INFO,
                f"Unable to save workspace '{basename(target)}'",
                ["OK"],
                detail=(
                    "The workspace is already opened in another window. "
                    "Please close that window first and then try again."
                ),
            )
            return False
        return True

    async def save_as(self, workspace: WorkspaceIdentifier, target: Path) -> bool:
        """Write *workspace* to *target*.  False if *target* is the workspace file itself."""
        source = workspace.config_path
        if is_equal(source, target):
            return False

        raw = await self._files.read_contents(source)
        contents = rewrite_workspace_file_for_new_location(raw, source, target)
        await self._files.write_file(target, contents, overwrite=True)
        logger.info("Persistence: saved workspace {} as {}", source, target)
        return True
