"""Workspace identity model.

A session is in exactly one of three states -- no folder, a single folder, or
a workspace file with any number of folders.  The state is represented as a
tagged variant (``Workbench``) discriminated on ``state`` and is always
derived from folders + identifier via ``derive_workbench``.

The stored file schema (``StoredWorkspace``) only pins down the folder list,
the settings block and the remote authority.  Any other keys found in a
workspace file survive a load/save round trip untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from workbench.editing.models.enums import ConfigurationScope, WorkbenchState

# -- Folders and identifiers -------------------------------------------------


class WorkspaceFolder(BaseModel):
    """A root folder of the open workbench."""

    uri: Path
    name: str
    index: int = 0


class FolderCreationRequest(BaseModel):
    """Input to reconciliation.  Never persisted as-is."""

    uri: Path
    name: str | None = None


class WorkspaceIdentifier(BaseModel):
    """Identity of a workspace file.  Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    id: str
    config_path: Path


# -- Workbench variants ------------------------------------------------------


class EmptyWorkbench(BaseModel):
    state: Literal[WorkbenchState.EMPTY] = WorkbenchState.EMPTY

    @property
    def folders(self) -> list[WorkspaceFolder]:
        return []

    @property
    def identifier(self) -> WorkspaceIdentifier | None:
        return None


class FolderWorkbench(BaseModel):
    state: Literal[WorkbenchState.FOLDER] = WorkbenchState.FOLDER
    folder: WorkspaceFolder

    @property
    def folders(self) -> list[WorkspaceFolder]:
        return [self.folder]

    @property
    def identifier(self) -> WorkspaceIdentifier | None:
        return None


class WorkspaceWorkbench(BaseModel):
    state: Literal[WorkbenchState.WORKSPACE] = WorkbenchState.WORKSPACE
    workspace: WorkspaceIdentifier
    workspace_folders: list[WorkspaceFolder] = Field(default_factory=list)

    @property
    def folders(self) -> list[WorkspaceFolder]:
        return list(self.workspace_folders)

    @property
    def identifier(self) -> WorkspaceIdentifier | None:
        return self.workspace


Workbench = Annotated[EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench, Field(discriminator="state")]


def derive_workbench(
    folders: list[WorkspaceFolder],
    identifier: WorkspaceIdentifier | None = None,
) -> EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench:
    """Build the workbench variant implied by *folders* and *identifier*.

    Raises ``ValueError`` for more than one folder without a workspace file.
    """
    if identifier is not None:
        return WorkspaceWorkbench(workspace=identifier, workspace_folders=folders)
    if not folders:
        return EmptyWorkbench()
    if len(folders) == 1:
        return FolderWorkbench(folder=folders[0])
    msg = f"{len(folders)} folders require a workspace file"
    raise ValueError(msg)


# -- Stored workspace file ---------------------------------------------------


class StoredWorkspaceFolder(BaseModel):
    """One entry of the ``folders`` array.  ``path`` may be relative to the file."""

    model_config = ConfigDict(extra="allow")

    path: str | None = None
    uri: str | None = None
    name: str | None = None

    @classmethod
    def for_path(cls, path: str, name: str | None = None) -> StoredWorkspaceFolder:
        """Entry for a file folder; ``name`` is only written when given."""
        if name is None:
            return cls(path=path)
        return cls(path=path, name=name)


class StoredWorkspace(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    folders: list[StoredWorkspaceFolder] = Field(default_factory=list)
    settings: dict[str, Any] = Field(default_factory=dict)
    remote_authority: str | None = Field(default=None, alias="remoteAuthority")


# -- Collaborator payloads ---------------------------------------------------


class ConfigurationProperty(BaseModel):
    """Declared metadata of a setting key."""

    key: str
    scope: ConfigurationScope = ConfigurationScope.WINDOW
    default: Any = None
    description: str | None = None


class EnterWorkspaceResult(BaseModel):
    """What the window host hands back after accepting a workspace."""

    workspace: WorkspaceIdentifier
    backup_path: Path | None = None


class WindowInfo(BaseModel):
    """A live window and what it has open."""

    window_id: int
    workspace: WorkspaceIdentifier | None = None
    folder: Path | None = None


class RecentlyOpenedEntry(BaseModel):
    label: str
    workspace: WorkspaceIdentifier
