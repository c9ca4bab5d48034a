"""Collaborator protocols and their local implementations."""

from workbench.editing.services.base import (
    BackupService,
    ConfigurationService,
    DialogService,
    ExtensionHost,
    FileService,
    JsonEditor,
    NotificationService,
    RecentlyOpenedService,
    StorageService,
    WindowHost,
)
from workbench.editing.services.configuration import (
    ConfigurationRegistry,
    JsonEditingError,
    JsonEditingService,
    WorkspaceContextService,
)
from workbench.editing.services.dialogs import NotificationCenter, ScriptedDialogService
from workbench.editing.services.host import InProcessExtensionHost, LocalWindowHost, WindowRegistry
from workbench.editing.services.local import (
    JsonStorageService,
    LocalBackupService,
    LocalFileService,
    NullBackupService,
    RecentlyOpenedStore,
)

__all__ = [
    "BackupService",
    "ConfigurationRegistry",
    "ConfigurationService",
    "DialogService",
    "ExtensionHost",
    "FileService",
    "InProcessExtensionHost",
    "JsonEditingError",
    "JsonEditingService",
    "JsonEditor",
    "JsonStorageService",
    "LocalBackupService",
    "LocalFileService",
    "LocalWindowHost",
    "NotificationCenter",
    "NotificationService",
    "NullBackupService",
    "RecentlyOpenedService",
    "RecentlyOpenedStore",
    "ScriptedDialogService",
    "StorageService",
    "WindowHost",
    "WindowRegistry",
    "WorkspaceContextService",
]
