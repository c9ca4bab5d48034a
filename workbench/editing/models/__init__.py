"""Data models for the workbench editing core."""

from workbench.editing.models.api import (
    BeforeShutdownRequest,
    BeforeShutdownResponse,
    FoldersAdd,
    FoldersRemove,
    FoldersUpdate,
    WorkbenchResponse,
    WorkspaceTarget,
)
from workbench.editing.models.enums import (
    ConfigurationScope,
    ConfigurationTarget,
    ConfirmResult,
    FolderAction,
    JsonEditingErrorCode,
    Platform,
    Severity,
    ShutdownReason,
    WorkbenchState,
)
from workbench.editing.models.notifications import Notification, NotificationAction
from workbench.editing.models.workspace import (
    ConfigurationProperty,
    EmptyWorkbench,
    EnterWorkspaceResult,
    FolderCreationRequest,
    FolderWorkbench,
    RecentlyOpenedEntry,
    StoredWorkspace,
    StoredWorkspaceFolder,
    WindowInfo,
    Workbench,
    WorkspaceFolder,
    WorkspaceIdentifier,
    WorkspaceWorkbench,
    derive_workbench,
)

__all__ = [
    # API schemas
    "BeforeShutdownRequest",
    "BeforeShutdownResponse",
    # Configuration
    "ConfigurationProperty",
    # Enums
    "ConfigurationScope",
    "ConfigurationTarget",
    "ConfirmResult",
    # Workspace
    "EmptyWorkbench",
    "EnterWorkspaceResult",
    "FolderAction",
    "FolderCreationRequest",
    "FolderWorkbench",
    "FoldersAdd",
    "FoldersRemove",
    "FoldersUpdate",
    "JsonEditingErrorCode",
    # Notifications
    "Notification",
    "NotificationAction",
    "Platform",
    "RecentlyOpenedEntry",
    "Severity",
    "ShutdownReason",
    "StoredWorkspace",
    "StoredWorkspaceFolder",
    "WindowInfo",
    "Workbench",
    "WorkbenchResponse",
    "WorkbenchState",
    "WorkspaceFolder",
    "WorkspaceIdentifier",
    "WorkspaceTarget",
    "WorkspaceWorkbench",
    "derive_workbench",
]
