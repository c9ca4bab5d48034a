"""Folder set reconciliation.

Turns a folder-set change request into a ``FolderPlan`` -- the new folder
list plus how to carry it out -- given a snapshot of the current workbench.
Pure: no I/O, no collaborators.

A single-folder session has no workspace file, so any change that leaves it
with a number of folders other than one, or swaps its folder for others,
cannot be an edit.  It becomes ``FolderAction.ENTER``: create a fresh
workspace holding the resulting folders and enter it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from workbench.editing.models.enums import FolderAction, WorkbenchState
from workbench.editing.models.workspace import (
    EmptyWorkbench,
    FolderCreationRequest,
    FolderWorkbench,
    WorkspaceWorkbench,
)
from workbench.editing.resources import comparison_key, distinct, is_equal

AnyWorkbench = EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench


@dataclass(frozen=True)
class FolderPlan:
    """Outcome of reconciling a folder-set change."""

    action: FolderAction
    folders_to_add: list[FolderCreationRequest] = field(default_factory=list)
    folders_to_remove: list[Path] = field(default_factory=list)
    index: int | None = None


NO_CHANGE = FolderPlan(FolderAction.NONE)


def _dedupe(folders: list[FolderCreationRequest]) -> list[FolderCreationRequest]:
    return distinct(folders, lambda f: comparison_key(f.uri))


def folders_to_delete(workbench: AnyWorkbench, index: int, delete_count: int | None) -> list[Path]:
    """Locations of the folders at positions ``[index, index + delete_count)``."""
    if delete_count is None:
        return []
    return [f.uri for f in workbench.folders[index : index + delete_count]]


def includes_single_folder(workbench: AnyWorkbench, folders: list[Path]) -> bool:
    """True if *folders* contains the one folder of a single-folder session."""
    if not isinstance(workbench, FolderWorkbench):
        return False
    return any(is_equal(folder, workbench.folder.uri) for folder in folders)


def plan_update(
    workbench: AnyWorkbench,
    index: int,
    delete_count: int | None = None,
    folders_to_add: list[FolderCreationRequest] | None = None,
) -> FolderPlan:
    """Reconcile a splice-style change: delete ``delete_count`` at ``index``, insert ``folders_to_add``."""
    to_delete = folders_to_delete(workbench, index, delete_count)
    to_add = list(folders_to_add or [])

    wants_to_delete = bool(to_delete)
    wants_to_add = bool(to_add)

    if not wants_to_add and not wants_to_delete:
        return NO_CHANGE

    if wants_to_add and not wants_to_delete:
        return plan_add(workbench, to_add, index)

    if wants_to_delete and not wants_to_add:
        return plan_remove(workbench, to_delete)

    # The single folder is replaced: enter a workspace of just the new folders.
    if includes_single_folder(workbench, to_delete):
        return FolderPlan(FolderAction.ENTER, folders_to_add=_dedupe(to_add))

    if workbench.state != WorkbenchState.WORKSPACE:
        return plan_add(workbench, to_add, index)

    return FolderPlan(FolderAction.UPDATE, folders_to_add=to_add, folders_to_remove=to_delete, index=index)


def plan_add(
    workbench: AnyWorkbench,
    folders_to_add: list[FolderCreationRequest],
    index: int | None = None,
) -> FolderPlan:
    if isinstance(workbench, WorkspaceWorkbench):
        return FolderPlan(FolderAction.ADD, folders_to_add=list(folders_to_add), index=index)

    candidates = [FolderCreationRequest(uri=f.uri) for f in workbench.folders]
    position = len(candidates) if index is None else index
    candidates[position:position] = folders_to_add
    candidates = _dedupe(candidates)

    if workbench.state == WorkbenchState.EMPTY and not candidates:
        return NO_CHANGE
    if workbench.state == WorkbenchState.FOLDER and len(candidates) == 1:
        return NO_CHANGE

    return FolderPlan(FolderAction.ENTER, folders_to_add=candidates)


def plan_remove(workbench: AnyWorkbench, folders_to_remove: list[Path]) -> FolderPlan:
    if includes_single_folder(workbench, folders_to_remove):
        return FolderPlan(FolderAction.ENTER)

    if not isinstance(workbench, WorkspaceWorkbench) or not folders_to_remove:
        return NO_CHANGE

    return FolderPlan(FolderAction.REMOVE, folders_to_remove=list(folders_to_remove))
