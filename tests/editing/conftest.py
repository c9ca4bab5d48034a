"""Fixtures for the HTTP command surface."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from workbench.editing.app import app
from workbench.editing.context import WorkbenchSession


@pytest.fixture
async def client(session: WorkbenchSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a fresh test session.

    The app lifespan does NOT run under ``ASGITransport``, so the session is
    set on ``app.state`` directly.
    """
    app.state.session = session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.session = None
