"""Workspace transition steps.

- **reconciler**: Folder-set change -> ``FolderPlan`` (pure)
- **persistence**: Target validation, save-as, folder path rewriting
- **migration**: Enter a workspace; carry storage, settings and backups along
- **shutdown**: Save-or-discard prompt for untitled workspaces on close
- **errors**: Configuration edit failure -> user notification
"""
