"""Workbench configuration loaded from WORKBENCH_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from workbench.editing.models.enums import Platform


class WorkbenchSettings(BaseSettings):
    """Workbench editing settings.

    All fields are read from environment variables with the ``WORKBENCH_``
    prefix.  For example, ``WORKBENCH_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKBENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    data_root: Path = Path("./data")
    """Root directory for storage namespaces, backups and the recent list."""

    untitled_workspaces_home: Path | None = None
    """Where untitled workspaces are created.  Defaults to ``{data_root}/Workspaces``."""

    backup_home: Path | None = None
    """Root of per-workspace backup folders.  Defaults to ``{data_root}/Backups``."""

    # -- Session ---------------------------------------------------------------
    extension_tests_location: Path | None = None
    """Set when the session runs under an extension test harness.

    Entering a different workspace is refused while this is set.
    """

    remote_authority: str | None = None
    """Remote authority of the window.  Restarting extensions reloads the window instead."""

    platform: Platform | None = None
    """Override the detected platform (affects path case rules and dialog buttons)."""

    open_folder: Path | None = None
    open_workspace: Path | None = None
    """What the session opens on startup.  ``open_workspace`` wins over ``open_folder``."""

    # -- Server ----------------------------------------------------------------
    host: str = "127.0.0.1"
    port: int = 8765

    # -- Helpers ---------------------------------------------------------------

    def resolve_untitled_home(self) -> Path:
        return self.untitled_workspaces_home or self.data_root / "Workspaces"

    def resolve_backup_home(self) -> Path:
        return self.backup_home or self.data_root / "Backups"


@lru_cache(maxsize=1)
def get_settings() -> WorkbenchSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return WorkbenchSettings()
