"""Unit tests for location helpers (no I/O)."""

from __future__ import annotations

from pathlib import Path

from workbench.editing.models.enums import Platform
from workbench.editing.resources import (
    comparison_key,
    distinct,
    ignores_case,
    is_equal,
    is_equal_or_parent,
    resolve_stored_path,
    set_platform,
    to_stored_path,
    workspace_id,
    workspace_label,
)


def test_comparison_key_strips_trailing_separator() -> None:
    assert comparison_key("/home/me/proj/") == comparison_key("/home/me/proj")
    assert comparison_key("/home/me/./proj") == "/home/me/proj"


def test_comparison_key_case_rules() -> None:
    assert comparison_key("/Home/Proj", ignore_case=False) == "/Home/Proj"
    assert comparison_key("/Home/Proj", ignore_case=True) == "/home/proj"


def test_platform_decides_case_rule() -> None:
    assert ignores_case(Platform.LINUX) is False
    assert ignores_case(Platform.MACOS) is True
    assert ignores_case(Platform.WINDOWS) is True

    set_platform(Platform.MACOS)
    assert is_equal("/Users/Me/Proj/", "/users/me/proj")
    set_platform(Platform.LINUX)
    assert not is_equal("/Users/Me/Proj", "/users/me/proj")


def test_windows_separators_normalised() -> None:
    assert comparison_key("C:\\Work\\Proj\\", ignore_case=True) == "c:/work/proj"


def test_is_equal_handles_none() -> None:
    assert is_equal(None, None)
    assert not is_equal("/a", None)


def test_is_equal_or_parent() -> None:
    assert is_equal_or_parent("/data/Workspaces/123/workspace.json", "/data/Workspaces")
    assert is_equal_or_parent("/data/Workspaces", "/data/Workspaces/")
    assert not is_equal_or_parent("/data/WorkspacesOther/x.json", "/data/Workspaces")


def test_distinct_keeps_first_occurrence() -> None:
    items = ["/a", "/b", "/a/", "/c", "/b"]
    assert distinct(items, comparison_key) == ["/a", "/b", "/c"]


def test_workspace_id_is_stable_across_spellings() -> None:
    assert workspace_id("/x/ws.workspace") == workspace_id("/x/./ws.workspace")
    assert workspace_id("/x/ws.workspace") != workspace_id("/y/ws.workspace")
    assert len(workspace_id("/x/ws.workspace")) == 32


def test_stored_path_relative_inside_config_dir() -> None:
    config_dir = Path("/work/ws")
    assert to_stored_path(Path("/work/ws/src"), config_dir) == "src"
    assert to_stored_path(Path("/work/ws"), config_dir) == "."
    assert to_stored_path(Path("/elsewhere/lib"), config_dir) == "/elsewhere/lib"


def test_resolve_stored_path() -> None:
    config_dir = Path("/work/ws")
    assert resolve_stored_path("src", config_dir) == Path("/work/ws/src")
    assert resolve_stored_path("../lib", config_dir) == Path("/work/lib")
    assert resolve_stored_path("/abs/path", config_dir) == Path("/abs/path")


def test_workspace_label() -> None:
    home = Path("/data/Workspaces")
    assert workspace_label(Path("/data/Workspaces/1/workspace.json"), untitled_home=home) == "Untitled (Workspace)"
    assert workspace_label(Path("/srv/team.workspace")) == "team (Workspace)"
    assert workspace_label(Path("/srv/team.workspace"), verbose=True) == "/srv/team.workspace"
