"""Unit tests for folder set reconciliation (pure, no I/O)."""

from __future__ import annotations

from pathlib import Path

import pytest

from workbench.editing.execution.reconciler import (
    NO_CHANGE,
    folders_to_delete,
    includes_single_folder,
    plan_add,
    plan_remove,
    plan_update,
)
from workbench.editing.models.enums import FolderAction, WorkbenchState
from workbench.editing.models.workspace import (
    EmptyWorkbench,
    FolderCreationRequest,
    FolderWorkbench,
    WorkspaceFolder,
    WorkspaceIdentifier,
    WorkspaceWorkbench,
    derive_workbench,
)

A = Path("/p/a")
B = Path("/p/b")
C = Path("/p/c")
F = Path("/p/f")


def _req(*paths: Path) -> list[FolderCreationRequest]:
    return [FolderCreationRequest(uri=p) for p in paths]


def _uris(plan) -> list[Path]:
    return [f.uri for f in plan.folders_to_add]


def _folder(path: Path, index: int = 0) -> WorkspaceFolder:
    return WorkspaceFolder(uri=path, name=path.name, index=index)


def _empty() -> EmptyWorkbench:
    return EmptyWorkbench()


def _single(path: Path = F) -> FolderWorkbench:
    return FolderWorkbench(folder=_folder(path))


def _workspace(*paths: Path) -> WorkspaceWorkbench:
    identifier = WorkspaceIdentifier(id="ws", config_path=Path("/ws/team.workspace"))
    return WorkspaceWorkbench(
        workspace=identifier,
        workspace_folders=[_folder(p, i) for i, p in enumerate(paths)],
    )


# ---------------------------------------------------------------------------
# Identity model
# ---------------------------------------------------------------------------


def test_derive_workbench_states() -> None:
    identifier = WorkspaceIdentifier(id="ws", config_path=Path("/ws/team.workspace"))

    assert derive_workbench([]).state == WorkbenchState.EMPTY
    assert derive_workbench([_folder(A)]).state == WorkbenchState.FOLDER
    assert derive_workbench([], identifier).state == WorkbenchState.WORKSPACE
    assert derive_workbench([_folder(A), _folder(B)], identifier).identifier == identifier


def test_derive_workbench_rejects_many_folders_without_file() -> None:
    with pytest.raises(ValueError, match="require a workspace file"):
        derive_workbench([_folder(A), _folder(B)])


# ---------------------------------------------------------------------------
# update: no-op
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("workbench", [_empty(), _single(), _workspace(A, B)], ids=["empty", "folder", "workspace"])
def test_update_without_changes_is_noop(workbench) -> None:
    assert plan_update(workbench, 0) is NO_CHANGE
    assert plan_update(workbench, 0, 0, []) is NO_CHANGE
    # Deleting past the end selects nothing.
    assert plan_update(workbench, 5, 3) is NO_CHANGE


def test_folders_to_delete_is_positional() -> None:
    workbench = _workspace(A, B, C)
    assert folders_to_delete(workbench, 1, 2) == [B, C]
    assert folders_to_delete(workbench, 1, None) == []
    assert folders_to_delete(workbench, 7, 1) == []


# ---------------------------------------------------------------------------
# update: add and delete combined
# ---------------------------------------------------------------------------


def test_replace_single_folder_enters_workspace_of_new_folders() -> None:
    plan = plan_update(_single(F), 0, 1, _req(A, B, A))

    assert plan.action == FolderAction.ENTER
    assert _uris(plan) == [A, B]


def test_replace_single_folder_uses_only_the_new_list() -> None:
    plan = plan_update(_single(F), 0, 1, _req(A, F))

    assert plan.action == FolderAction.ENTER
    assert _uris(plan) == [A, F]


def test_combined_on_empty_is_an_add() -> None:
    # Nothing to delete from an empty workbench: only the add remains.
    plan = plan_update(_empty(), 0, 1, _req(A))

    assert plan.action == FolderAction.ENTER
    assert _uris(plan) == [A]


def test_combined_on_workspace_is_an_update() -> None:
    plan = plan_update(_workspace(A, B, C), 1, 1, _req(F))

    assert plan.action == FolderAction.UPDATE
    assert plan.folders_to_remove == [B]
    assert _uris(plan) == [F]
    assert plan.index == 1


def test_delete_only_delegates_to_remove() -> None:
    plan = plan_update(_workspace(A, B), 0, 1)

    assert plan.action == FolderAction.REMOVE
    assert plan.folders_to_remove == [A]


def test_add_only_delegates_to_add() -> None:
    plan = plan_update(_workspace(A), 0, None, _req(B))

    assert plan.action == FolderAction.ADD
    assert plan.index == 0


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


def test_add_to_empty_dedupes_in_order() -> None:
    plan = plan_add(_empty(), _req(A, B, A))

    assert plan.action == FolderAction.ENTER
    assert _uris(plan) == [A, B]


def test_add_nothing_to_empty_is_noop() -> None:
    assert plan_add(_empty(), []) is NO_CHANGE


def test_add_same_folder_to_single_folder_is_noop() -> None:
    assert plan_add(_single(F), _req(Path("/p/f/"))) is NO_CHANGE


def test_add_to_single_folder_splices_at_index() -> None:
    plan = plan_add(_single(F), _req(A), index=0)

    assert plan.action == FolderAction.ENTER
    assert _uris(plan) == [A, F]


def test_add_to_single_folder_defaults_to_end() -> None:
    plan = plan_add(_single(F), _req(A, B))

    assert _uris(plan) == [F, A, B]


def test_added_folder_names_survive_dedup() -> None:
    plan = plan_add(_empty(), [FolderCreationRequest(uri=A, name="Alpha"), FolderCreationRequest(uri=A)])

    assert [f.name for f in plan.folders_to_add] == ["Alpha"]


def test_add_to_workspace_is_an_edit() -> None:
    plan = plan_add(_workspace(A), _req(B, C), index=1)

    assert plan.action == FolderAction.ADD
    assert _uris(plan) == [B, C]
    assert plan.index == 1


# ---------------------------------------------------------------------------
# remove
# ---------------------------------------------------------------------------


def test_remove_single_folder_enters_empty_workspace() -> None:
    plan = plan_remove(_single(F), [F])

    assert plan.action == FolderAction.ENTER
    assert plan.folders_to_add == []


def test_remove_unrelated_folder_from_single_folder_is_noop() -> None:
    assert plan_remove(_single(F), [A]) is NO_CHANGE


def test_remove_from_workspace_is_an_edit() -> None:
    plan = plan_remove(_workspace(A, B), [B])

    assert plan.action == FolderAction.REMOVE
    assert plan.folders_to_remove == [B]


def test_includes_single_folder_only_in_folder_state() -> None:
    assert includes_single_folder(_single(F), [A, F])
    assert not includes_single_folder(_workspace(F), [F])
    assert not includes_single_folder(_empty(), [F])
