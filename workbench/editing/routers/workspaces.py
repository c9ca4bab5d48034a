"""Workspace command endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from workbench.editing.deps import Session
from workbench.editing.execution.migration import WorkspaceEntryRefusedError
from workbench.editing.execution.persistence import InvalidWorkspaceTargetError
from workbench.editing.managers.workspaces import NoWorkspaceOpenError
from workbench.editing.models.api import (
    FoldersAdd,
    FoldersRemove,
    FoldersUpdate,
    WorkbenchResponse,
    WorkspaceTarget,
)
from workbench.editing.models.notifications import Notification

router = APIRouter(tags=["workspace"])


def _workbench(session: Session) -> WorkbenchResponse:
    workbench = session.context.workbench
    return WorkbenchResponse(state=workbench.state, workspace=workbench.identifier, folders=workbench.folders)


@router.get("/workspace/get", response_model=WorkbenchResponse)
async def get_workbench(session: Session) -> WorkbenchResponse:
    """Return what the session has open."""
    return _workbench(session)


@router.post("/workspace/folders/update", response_model=WorkbenchResponse)
async def update_folders(body: FoldersUpdate, session: Session) -> WorkbenchResponse:
    """Delete and/or insert root folders at a position."""
    try:
        await session.editing.update_folders(
            body.index,
            body.delete_count,
            body.folders_to_add,
            donot_notify_error=body.donot_notify_error,
        )
    except WorkspaceEntryRefusedError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    return _workbench(session)


@router.post("/workspace/folders/add", response_model=WorkbenchResponse)
async def add_folders(body: FoldersAdd, session: Session) -> WorkbenchResponse:
    try:
        await session.editing.add_folders(body.folders, index=body.index, donot_notify_error=body.donot_notify_error)
    except WorkspaceEntryRefusedError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    return _workbench(session)


@router.post("/workspace/folders/remove", response_model=WorkbenchResponse)
async def remove_folders(body: FoldersRemove, session: Session) -> WorkbenchResponse:
    try:
        await session.editing.remove_folders(body.folders, donot_notify_error=body.donot_notify_error)
    except WorkspaceEntryRefusedError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    return _workbench(session)


@router.post("/workspace/save-as", response_model=WorkbenchResponse)
async def save_workspace_as(body: WorkspaceTarget, session: Session) -> WorkbenchResponse:
    """Save the open workspace to a new file and switch to it."""
    try:
        await session.editing.save_and_enter_workspace(body.path)
    except InvalidWorkspaceTargetError:
        raise HTTPException(
            status.HTTP_409_CONFLICT, detail=f"Workspace '{body.path}' is open in another window."
        ) from None
    except NoWorkspaceOpenError as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=str(exc)) from None
    except WorkspaceEntryRefusedError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    return _workbench(session)


@router.post("/workspace/enter", response_model=WorkbenchResponse)
async def enter_workspace(body: WorkspaceTarget, session: Session) -> WorkbenchResponse:
    """Switch the session to an existing workspace file."""
    try:
        result = await session.editing.enter_workspace(body.path)
    except WorkspaceEntryRefusedError as exc:
        raise HTTPException(status.HTTP_403_FORBIDDEN, detail=str(exc)) from None
    except FileNotFoundError:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=f"Workspace '{body.path}' not found.") from None
    if result is None:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=f"Workspace '{body.path}' is open in another window.")
    return _workbench(session)


@router.post("/workspace/copy-settings", status_code=status.HTTP_204_NO_CONTENT)
async def copy_workspace_settings(body: WorkspaceTarget, session: Session) -> None:
    """Copy the current workspace-level settings into another workspace file."""
    target = await session.editing.get_workspace_identifier(body.path)
    await session.editing.copy_workspace_settings(target)


@router.get("/notifications/list", response_model=list[Notification])
async def list_notifications(session: Session) -> list[Notification]:
    return session.notifications.get_notifications()
