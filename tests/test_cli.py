from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from workbench.cli import main


def _workspace(path: Path, folders: list[dict]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"folders": folders, "settings": {}}))
    return path


def test_workspace_save_as_rewrites_relative_paths(tmp_path: Path) -> None:
    source = _workspace(tmp_path / "a" / "team.workspace", [{"path": "src"}, {"path": "/abs/lib"}])
    target = tmp_path / "b" / "team.workspace"

    result = CliRunner().invoke(main, ["workspace", "save-as", str(source), str(target)])

    assert result.exit_code == 0, result.output
    assert f"Workspace saved as {target}." in result.output
    assert [f["path"] for f in json.loads(target.read_text())["folders"]] == ["../a/src", "/abs/lib"]


def test_workspace_save_as_same_file_is_noop(tmp_path: Path) -> None:
    source = _workspace(tmp_path / "team.workspace", [])

    result = CliRunner().invoke(main, ["workspace", "save-as", str(source), str(source)])

    assert result.exit_code == 0
    assert "nothing to do" in result.output


def test_workspace_show_lists_folders(tmp_path: Path) -> None:
    path = _workspace(tmp_path / "team.workspace", [{"path": "src", "name": "Sources"}, {"path": "docs"}])

    result = CliRunner().invoke(main, ["workspace", "show", str(path)])

    assert result.exit_code == 0, result.output
    assert result.stdout.splitlines() == [
        f"0\tSources\t{tmp_path / 'src'}",
        f"1\tdocs\t{tmp_path / 'docs'}",
    ]


def test_workspace_save_as_keeps_unknown_keys(tmp_path: Path) -> None:
    source = tmp_path / "a" / "team.workspace"
    source.parent.mkdir()
    source.write_text(json.dumps({"folders": [{"path": "src"}], "launch": None, "tasks": {"version": "2.0.0"}}))
    target = tmp_path / "team.workspace"

    result = CliRunner().invoke(main, ["workspace", "save-as", str(source), str(target)])

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text()) == {
        "folders": [{"path": "a/src"}],
        "launch": None,
        "tasks": {"version": "2.0.0"},
    }
