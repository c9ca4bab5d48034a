"""Lifecycle endpoints: shutdown negotiation."""

from __future__ import annotations

from fastapi import APIRouter

from workbench.editing.deps import Session
from workbench.editing.models.api import BeforeShutdownRequest, BeforeShutdownResponse
from workbench.editing.services.dialogs import ScriptedDialogService

router = APIRouter(prefix="/lifecycle", tags=["lifecycle"])


@router.post("/before-shutdown", response_model=BeforeShutdownResponse)
async def before_shutdown(body: BeforeShutdownRequest, session: Session) -> BeforeShutdownResponse:
    """Ask whether the window may go away.

    Dialogs the guard needs are answered from ``answer`` / ``save_path``; an
    unanswered prompt counts as dismissed.
    """
    dialogs = ScriptedDialogService(answer=body.answer, save_path=body.save_path)
    veto = await session.editing.before_shutdown(body.reason, dialogs=dialogs)
    return BeforeShutdownResponse(veto=veto)
