"""Configuration registry, JSON editing, and the workspace context service.

``WorkspaceContextService`` is the session-scoped owner of "what is open":
it holds the current ``Workbench`` variant, the settings of the user and
workspace levels, and performs folder edits against the open workspace file.
The identity it holds is only ever replaced through ``open_folder``,
``initialize`` or ``close``.

Settings locations:

- workspace state: the ``settings`` block of the workspace file
- folder state: ``{folder}/.workbench/settings.json``
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from workbench.editing.models.enums import ConfigurationScope, ConfigurationTarget, JsonEditingErrorCode
from workbench.editing.models.workspace import (
    ConfigurationProperty,
    EmptyWorkbench,
    FolderCreationRequest,
    FolderWorkbench,
    StoredWorkspace,
    StoredWorkspaceFolder,
    WorkspaceFolder,
    WorkspaceIdentifier,
    WorkspaceWorkbench,
    derive_workbench,
)
from workbench.editing.resources import (
    basename,
    comparison_key,
    distinct,
    resolve_stored_path,
    to_stored_path,
    workspace_id,
)

if TYPE_CHECKING:
    from workbench.editing.services.base import FileService, JsonEditor

FOLDER_SETTINGS_PATH = Path(".workbench") / "settings.json"
EMPTY_STORAGE_ID = "__empty__"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_PROPERTIES = [
    ConfigurationProperty(key="window.title", scope=ConfigurationScope.WINDOW, default="${activeEditorShort}"),
    ConfigurationProperty(key="window.zoomLevel", scope=ConfigurationScope.WINDOW, default=0),
    ConfigurationProperty(key="editor.tabSize", scope=ConfigurationScope.RESOURCE, default=4),
    ConfigurationProperty(key="files.exclude", scope=ConfigurationScope.RESOURCE, default={}),
    ConfigurationProperty(key="http.proxy", scope=ConfigurationScope.MACHINE, default=""),
    ConfigurationProperty(key="update.mode", scope=ConfigurationScope.APPLICATION, default="default"),
]


class ConfigurationRegistry:
    """Declared setting keys and their scopes."""

    def __init__(self, properties: Iterable[ConfigurationProperty] | None = None) -> None:
        self._properties: dict[str, ConfigurationProperty] = {}
        if properties is not None:
            self.register_properties(properties)

    def register_properties(self, properties: Iterable[ConfigurationProperty]) -> None:
        for prop in properties:
            self._properties[prop.key] = prop

    def get_configuration_properties(self) -> dict[str, ConfigurationProperty]:
        return dict(self._properties)

    def get_property(self, key: str) -> ConfigurationProperty | None:
        return self._properties.get(key)


# ---------------------------------------------------------------------------
# JSON editing
# ---------------------------------------------------------------------------


class JsonEditingError(Exception):
    """Raised when a configuration file cannot be edited."""

    def __init__(self, code: JsonEditingErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class JsonEditingService:
    """Sets top-level keys of JSON configuration files.

    Files reported dirty (unsaved changes in an editor) are refused so that
    an edit never races a pending save.
    """

    def __init__(self, files: FileService) -> None:
        self._files = files
        self._dirty: set[str] = set()

    def mark_dirty(self, path: Path) -> None:
        self._dirty.add(comparison_key(path))

    def mark_saved(self, path: Path) -> None:
        self._dirty.discard(comparison_key(path))

    async def write(self, path: Path, key: str, value: Any) -> None:
        if comparison_key(path) in self._dirty:
            raise JsonEditingError(
                JsonEditingErrorCode.FILE_DIRTY,
                f"Unable to write into '{path.name}' because the file has unsaved changes.",
            )

        try:
            raw = await self._files.read_contents(path)
        except FileNotFoundError:
            raw = ""

        try:
            content = json.loads(raw) if raw.strip() else {}
        except json.JSONDecodeError:
            content = None
        if not isinstance(content, dict):
            raise JsonEditingError(
                JsonEditingErrorCode.INVALID_FILE,
                f"Unable to write into '{path.name}' because the file is not a valid JSON object.",
            )

        content[key] = value
        try:
            await self._files.write_file(path, json.dumps(content, indent=2) + "\n", overwrite=True)
        except OSError as exc:
            msg = f"Unable to write into '{path.name}': {exc}"
            raise JsonEditingError(JsonEditingErrorCode.WRITE_FAILED, msg) from exc


# ---------------------------------------------------------------------------
# Workspace context
# ---------------------------------------------------------------------------


class WorkspaceContextService:
    """Session-scoped context: current workbench, its settings, folder edits."""

    def __init__(
        self,
        *,
        files: FileService,
        json_editing: JsonEditor,
        user_settings: dict[str, Any] | None = None,
    ) -> None:
        self._files = files
        self._json_editing = json_editing
        self._user_settings: dict[str, Any] = dict(user_settings or {})
        self._workspace_settings: dict[str, Any] = {}
        self._stored: StoredWorkspace | None = None
        self._workbench: EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench = EmptyWorkbench()

    # -- Query -----------------------------------------------------------------

    @property
    def workbench(self) -> EmptyWorkbench | FolderWorkbench | WorkspaceWorkbench:
        return self._workbench

    def storage_id(self) -> str:
        workbench = self._workbench
        if isinstance(workbench, WorkspaceWorkbench):
            return workbench.workspace.id
        if isinstance(workbench, FolderWorkbench):
            return workspace_id(workbench.folder.uri)
        return EMPTY_STORAGE_ID

    def keys(self, target: ConfigurationTarget) -> list[str]:
        if target == ConfigurationTarget.USER:
            return list(self._user_settings)
        return list(self._workspace_settings)

    def inspect(self, key: str, target: ConfigurationTarget) -> Any:
        if target == ConfigurationTarget.USER:
            return self._user_settings.get(key)
        return self._workspace_settings.get(key)

    # -- Identity --------------------------------------------------------------

    async def close(self) -> None:
        self._stored = None
        self._workspace_settings = {}
        self._workbench = EmptyWorkbench()

    async def open_folder(self, folder: Path) -> None:
        self._stored = None
        self._workspace_settings = await self._read_settings(folder / FOLDER_SETTINGS_PATH)
        self._workbench = FolderWorkbench(folder=WorkspaceFolder(uri=folder, name=basename(folder)))
        logger.info("Context: opened folder {}", folder)

    async def initialize(self, workspace: WorkspaceIdentifier) -> None:
        raw = await self._files.read_contents(workspace.config_path)
        stored = StoredWorkspace.model_validate_json(raw)
        config_dir = workspace.config_path.parent

        folders: list[WorkspaceFolder] = []
        for entry in stored.folders:
            if entry.path is None:
                logger.debug("Context: skipping non-file folder entry {}", entry.uri)
                continue
            uri = resolve_stored_path(entry.path, config_dir)
            folders.append(WorkspaceFolder(uri=uri, name=entry.name or basename(uri), index=0))
        folders = distinct(folders, lambda f: comparison_key(f.uri))
        for index, folder in enumerate(folders):
            folder.index = index

        self._stored = stored
        self._workspace_settings = dict(stored.settings)
        self._workbench = derive_workbench(folders, workspace)
        logger.info("Context: initialised workspace {} ({} folders)", workspace.config_path, len(folders))

    # -- Folder edits ----------------------------------------------------------

    async def add_folders(self, folders: list[FolderCreationRequest], index: int | None = None) -> None:
        await self.update_folders(folders, [], index)

    async def remove_folders(self, folders: list[Path]) -> None:
        await self.update_folders([], folders)

    async def update_folders(
        self,
        folders_to_add: list[FolderCreationRequest],
        folders_to_remove: list[Path],
        index: int | None = None,
    ) -> None:
        workbench = self._workbench
        if not isinstance(workbench, WorkspaceWorkbench) or self._stored is None:
            return

        config_path = workbench.workspace.config_path
        config_dir = config_path.parent

        def entry_key(entry: StoredWorkspaceFolder) -> str | None:
            if entry.path is None:
                return None
            return comparison_key(resolve_stored_path(entry.path, config_dir))

        removed = {comparison_key(p) for p in folders_to_remove}
        current = self._stored.folders
        kept = [e for e in current if entry_key(e) not in removed]

        known = {entry_key(e) for e in kept}
        added: list[StoredWorkspaceFolder] = []
        for folder in folders_to_add:
            key = comparison_key(folder.uri)
            if key in known:
                continue
            known.add(key)
            added.append(StoredWorkspaceFolder.for_path(to_stored_path(folder.uri, config_dir), folder.name))

        if len(kept) == len(current) and not added:
            return

        # ``index`` counts visible folders; uri-only and duplicate entries are not visible.
        visible: list[int] = []
        seen: set[str] = set()
        for position, entry in enumerate(kept):
            key = entry_key(entry)
            if key is None or key in seen:
                continue
            seen.add(key)
            visible.append(position)

        if index is None or index >= len(visible):
            position = len(kept)
        else:
            position = visible[max(index, 0)]
        kept[position:position] = added
        value = [e.model_dump(by_alias=True, exclude_unset=True) for e in kept]
        await self._json_editing.write(config_path, "folders", value)
        await self.initialize(workbench.workspace)

    # -- Helpers ---------------------------------------------------------------

    async def _read_settings(self, path: Path) -> dict[str, Any]:
        try:
            raw = await self._files.read_contents(path)
        except FileNotFoundError:
            return {}
        try:
            content = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Context: ignoring invalid settings file {}", path)
            return {}
        return content if isinstance(content, dict) else {}
