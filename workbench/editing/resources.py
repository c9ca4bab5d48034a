"""Location helpers.

Workspace folders and workspace files are compared by *comparison key*, not
by raw string: separators are unified, ``.``/``..`` segments and trailing
separators are collapsed, and the key is lower-cased on platforms whose file
systems ignore case (macOS, Windows).  Every de-duplication and equality
check in the editing core goes through ``comparison_key``.
"""

from __future__ import annotations

import hashlib
import ntpath
import os
import posixpath
import sys
from collections.abc import Callable, Iterable
from pathlib import Path, PurePath
from typing import TypeVar

from workbench.editing.models.enums import Platform

T = TypeVar("T")

UNTITLED_WORKSPACE_NAME = "workspace.json"
WORKSPACE_EXTENSION = "workspace"
WORKSPACE_FILTER = [{"name": "Workbench Workspace", "extensions": [WORKSPACE_EXTENSION]}]

_platform_override: Platform | None = None


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------


def current_platform() -> Platform:
    if _platform_override is not None:
        return _platform_override
    if sys.platform.startswith("win"):
        return Platform.WINDOWS
    if sys.platform == "darwin":
        return Platform.MACOS
    return Platform.LINUX


def set_platform(platform: Platform | None) -> None:
    """Pin the platform used for path rules (``None`` restores detection)."""
    global _platform_override  # noqa: PLW0603
    _platform_override = platform


def ignores_case(platform: Platform | None = None) -> bool:
    return (platform or current_platform()) != Platform.LINUX


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def comparison_key(location: str | PurePath, *, ignore_case: bool | None = None) -> str:
    raw = str(location).replace("\\", "/")
    key = posixpath.normpath(raw) if raw else raw
    if ignore_case is None:
        ignore_case = ignores_case()
    return key.lower() if ignore_case else key


def is_equal(a: str | PurePath | None, b: str | PurePath | None, *, ignore_case: bool | None = None) -> bool:
    if a is None or b is None:
        return a is b
    return comparison_key(a, ignore_case=ignore_case) == comparison_key(b, ignore_case=ignore_case)


def is_equal_or_parent(location: str | PurePath, parent: str | PurePath, *, ignore_case: bool | None = None) -> bool:
    """True if *location* is *parent* or lives somewhere below it."""
    key = comparison_key(location, ignore_case=ignore_case)
    parent_key = comparison_key(parent, ignore_case=ignore_case)
    if key == parent_key:
        return True
    return key.startswith(parent_key.rstrip("/") + "/")


def distinct(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Drop later duplicates, keeping first-occurrence order."""
    seen: set[str] = set()
    result: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


def workspace_id(location: str | PurePath) -> str:
    """Stable id for a workspace file or single folder (md5 of its comparison key)."""
    return hashlib.md5(comparison_key(location).encode("utf-8"), usedforsecurity=False).hexdigest()


def basename(location: str | PurePath) -> str:
    return PurePath(str(location).rstrip("/\\")).name or str(location)


def workspace_label(config_path: Path, *, untitled_home: Path | None = None, verbose: bool = False) -> str:
    """Human-readable label for a workspace file."""
    if untitled_home is not None and is_equal_or_parent(config_path, untitled_home):
        return "Untitled (Workspace)"
    if verbose:
        return tildify(config_path)
    return f"{config_path.stem} (Workspace)"


def tildify(path: Path) -> str:
    home = Path.home()
    if is_equal_or_parent(path, home) and not is_equal(path, home):
        return "~/" + Path(os.path.relpath(path, home)).as_posix()
    return str(path)


# ---------------------------------------------------------------------------
# Stored folder paths
# ---------------------------------------------------------------------------


def is_absolute(path: str) -> bool:
    return posixpath.isabs(path) or ntpath.isabs(path)


def resolve_stored_path(path: str, config_dir: Path) -> Path:
    """Turn a ``folders[].path`` entry into a real location."""
    if is_absolute(path):
        return Path(path)
    return Path(os.path.normpath(config_dir / path))


def relative_stored_path(folder: Path, config_dir: Path) -> str | None:
    """Express *folder* relative to *config_dir*, or ``None`` if impossible."""
    try:
        rel = os.path.relpath(folder, config_dir)
    except ValueError:
        # Different drives on Windows.
        return None
    return Path(rel).as_posix()


def to_stored_path(folder: Path, config_dir: Path) -> str:
    """Path to store for *folder* in a workspace file living in *config_dir*.

    Folders inside the workspace file's directory are stored relative (with
    forward slashes); everything else is stored absolute.
    """
    if is_equal_or_parent(folder, config_dir):
        rel = relative_stored_path(folder, config_dir)
        if rel is not None:
            return rel
    return str(folder)
