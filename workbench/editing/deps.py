"""FastAPI dependency injection for the workbench session.

Usage in route handlers::

    @router.post("/things")
    async def do_thing(session: Session) -> ThingResponse:
        ...

Raises HTTP 503 if the session was not created (lifespan did not run).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from workbench.editing.context import WorkbenchSession


async def get_session(request: Request) -> WorkbenchSession:
    """Return the process-wide workbench session."""
    session: WorkbenchSession | None = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Workbench session not initialised.",
        )
    return session


# -- Annotated type aliases for concise route signatures ---------------------

Session = Annotated[WorkbenchSession, Depends(get_session)]
"""Annotated dependency: the live workbench session."""
