"""Shared test fixtures.

Every test runs against a temporary data root; nothing touches the real
home directory.  Path rules are pinned to Linux (case-sensitive) unless a
test pins another platform itself.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest

from workbench.editing.context import WorkbenchSession, create_session
from workbench.editing.models.enums import Platform
from workbench.editing.resources import set_platform
from workbench.editing.settings import WorkbenchSettings


@pytest.fixture(autouse=True)
def linux_paths() -> Iterator[None]:
    set_platform(Platform.LINUX)
    yield
    set_platform(None)


@pytest.fixture
def settings(tmp_path: Path) -> WorkbenchSettings:
    return WorkbenchSettings(data_root=tmp_path / "data", platform=Platform.LINUX)


@pytest.fixture
async def session(settings: WorkbenchSettings) -> AsyncIterator[WorkbenchSession]:
    """A fresh session with nothing open, wired to local services."""
    session = await create_session(settings)
    yield session
    session.windows.unregister(session.window_id)


@pytest.fixture
def projects(tmp_path: Path) -> dict[str, Path]:
    """Three project folders a, b, c under ``{tmp_path}/projects``."""
    root = tmp_path / "projects"
    folders = {name: root / name for name in ("a", "b", "c")}
    for folder in folders.values():
        folder.mkdir(parents=True)
    return folders
