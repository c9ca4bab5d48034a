"""Local filesystem collaborators.

Layout under ``data_root``::

    {data_root}/storage/{namespace}.json     key-value storage per workspace
    {data_root}/recent.json                  recently opened workspaces

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.  Writes are
atomic: data is written to a temporary file in the same directory, then
renamed to the target path.
"""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import tempfile
from functools import partial
from pathlib import Path
from typing import Any

from anyio import to_thread
from loguru import logger
from pydantic import TypeAdapter

from workbench.editing.models.workspace import RecentlyOpenedEntry
from workbench.editing.resources import comparison_key


class LocalFileService:
    """Local filesystem implementation of the FileService protocol."""

    async def read_contents(self, path: Path) -> str:
        return await to_thread.run_sync(partial(_read_file, path))

    async def write_file(self, path: Path, text: str, *, overwrite: bool = False) -> None:
        if not overwrite and await self.exists(path):
            raise FileExistsError(str(path))
        await to_thread.run_sync(partial(_atomic_write, path, text))

    async def exists(self, path: Path) -> bool:
        return await to_thread.run_sync(path.exists)

    async def delete(self, path: Path, *, recursive: bool = False) -> None:
        await to_thread.run_sync(partial(_remove, path, recursive=recursive))


class JsonStorageService:
    """Per-workspace key-value storage kept as one JSON object per namespace."""

    def __init__(self, data_root: str | Path) -> None:
        self._base = Path(data_root) / "storage"

    def _namespace_path(self, namespace: str) -> Path:
        return self._base / f"{namespace}.json"

    async def get_items(self, namespace: str) -> dict[str, Any]:
        path = self._namespace_path(namespace)
        try:
            raw = await to_thread.run_sync(partial(_read_file, path))
        except FileNotFoundError:
            return {}
        return json.loads(raw)

    async def set_item(self, namespace: str, key: str, value: Any) -> None:
        items = await self.get_items(namespace)
        items[key] = value
        await self._write_items(namespace, items)

    async def migrate(self, from_id: str, to_id: str) -> None:
        if from_id == to_id:
            return
        source = await self.get_items(from_id)
        if not source:
            logger.debug("Storage: nothing to migrate from {}", from_id)
            return
        target = await self.get_items(to_id)
        target.update(source)
        await self._write_items(to_id, target)
        logger.info("Storage: migrated {} keys {} -> {}", len(source), from_id, to_id)

    async def _write_items(self, namespace: str, items: dict[str, Any]) -> None:
        data = json.dumps(items, indent=2, sort_keys=True)
        await to_thread.run_sync(partial(_atomic_write, self._namespace_path(namespace), data))


class LocalBackupService:
    """Tracks the backup folder of the open workspace."""

    def __init__(self, backup_path: Path | None = None) -> None:
        self.backup_path = backup_path

    def initialize(self, backup_path: Path) -> None:
        logger.info("Backups: now writing to {}", backup_path)
        self.backup_path = backup_path


class NullBackupService:
    """Backup store used when backups are disabled.  Never re-pointed."""

    backup_path: Path | None = None

    def initialize(self, backup_path: Path) -> None:
        pass


_ENTRIES_ADAPTER = TypeAdapter(list[RecentlyOpenedEntry])


class RecentlyOpenedStore:
    """Most-recent-first list of opened workspaces, persisted as JSON."""

    def __init__(self, path: str | Path, *, limit: int = 50) -> None:
        self._path = Path(path)
        self._limit = limit

    async def get_recently_opened(self) -> list[RecentlyOpenedEntry]:
        try:
            raw = await to_thread.run_sync(partial(_read_file, self._path))
        except FileNotFoundError:
            return []
        return _ENTRIES_ADAPTER.validate_json(raw)

    async def add_recently_opened(self, entries: list[RecentlyOpenedEntry]) -> None:
        current = await self.get_recently_opened()
        added = {comparison_key(e.workspace.config_path) for e in entries}
        kept = [e for e in current if comparison_key(e.workspace.config_path) not in added]
        merged = (list(entries) + kept)[: self._limit]
        data = _ENTRIES_ADAPTER.dump_json(merged, indent=2).decode("utf-8")
        await to_thread.run_sync(partial(_atomic_write, self._path, data))


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")


def _remove(path: Path, *, recursive: bool) -> None:
    """Remove a file or directory tree.  No-op if the path doesn't exist."""
    if path.is_dir():
        if recursive:
            shutil.rmtree(path)
        else:
            path.rmdir()
    elif path.exists():
        path.unlink()
