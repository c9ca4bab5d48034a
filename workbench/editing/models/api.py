"""API request / response schemas for the workspace command endpoints.

These thin schemas sit between HTTP and the editing service.  Locations are
plain filesystem paths.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from workbench.editing.models.enums import ShutdownReason, WorkbenchState
from workbench.editing.models.workspace import (
    FolderCreationRequest,
    WorkspaceFolder,
    WorkspaceIdentifier,
)

# ---------------------------------------------------------------------------
# Workbench
# ---------------------------------------------------------------------------


class WorkbenchResponse(BaseModel):
    """What the session has open."""

    state: WorkbenchState
    workspace: WorkspaceIdentifier | None = None
    folders: list[WorkspaceFolder] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Folders
# ---------------------------------------------------------------------------


class FoldersUpdate(BaseModel):
    """Splice-style change: delete ``delete_count`` folders at ``index``, insert ``folders_to_add`` there."""

    index: int = 0
    delete_count: int | None = None
    folders_to_add: list[FolderCreationRequest] = Field(default_factory=list)
    donot_notify_error: bool = False


class FoldersAdd(BaseModel):
    folders: list[FolderCreationRequest]
    index: int | None = None
    donot_notify_error: bool = False


class FoldersRemove(BaseModel):
    folders: list[Path]
    donot_notify_error: bool = False


# ---------------------------------------------------------------------------
# Workspace files
# ---------------------------------------------------------------------------


class WorkspaceTarget(BaseModel):
    path: Path


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class BeforeShutdownRequest(BaseModel):
    """Shutdown notice plus the answers to any dialog the guard shows."""

    reason: ShutdownReason
    answer: str | None = Field(default=None, description="Label of the button to pick, e.g. 'Save'.")
    save_path: Path | None = Field(default=None, description="Location returned from the save dialog.")


class BeforeShutdownResponse(BaseModel):
    veto: bool | None = Field(default=None, description="True blocks the shutdown; null means no opinion.")
