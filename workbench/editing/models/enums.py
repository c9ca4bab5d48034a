"""Shared enumerations used across the workbench editing core."""

from __future__ import annotations

from enum import StrEnum

# -- Workbench ---------------------------------------------------------------


class WorkbenchState(StrEnum):
    """What the session currently has open.

    Derived from the folder count and the presence of a workspace file;
    never assigned directly.
    """

    EMPTY = "empty"
    FOLDER = "folder"
    WORKSPACE = "workspace"


class FolderAction(StrEnum):
    """How a folder-set change is carried out."""

    NONE = "none"
    ENTER = "enter"
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


# -- Lifecycle ---------------------------------------------------------------


class ShutdownReason(StrEnum):
    CLOSE = "close"
    """The window is closing."""
    QUIT = "quit"
    RELOAD = "reload"
    LOAD = "load"
    """The window is loading another workspace (or reloading into one)."""


class ConfirmResult(StrEnum):
    SAVE = "save"
    DONT_SAVE = "dont_save"
    CANCEL = "cancel"


class Platform(StrEnum):
    LINUX = "linux"
    MACOS = "darwin"
    WINDOWS = "win32"


# -- Configuration -----------------------------------------------------------


class ConfigurationScope(StrEnum):
    """Declared reach of a setting."""

    APPLICATION = "application"
    MACHINE = "machine"
    WINDOW = "window"
    RESOURCE = "resource"


class ConfigurationTarget(StrEnum):
    """Level a setting value is read from."""

    USER = "user"
    WORKSPACE = "workspace"


class JsonEditingErrorCode(StrEnum):
    INVALID_FILE = "invalid_file"
    """The file content is not a valid JSON object."""
    FILE_DIRTY = "file_dirty"
    """The file has unsaved changes elsewhere."""
    WRITE_FAILED = "write_failed"


# -- Notifications -----------------------------------------------------------


class Severity(StrEnum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
