from pathlib import Path

import click


@click.group()
def main() -> None:
    """Workbench - workspace identity and folder editing for an editor session."""


@main.command()
@click.option("--host", default=None, help="Bind host (default: from WORKBENCH_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: from WORKBENCH_PORT or 8765).")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development.")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Serve the workspace command API for one editor session."""
    import uvicorn

    from workbench.editing.settings import WorkbenchSettings

    settings = WorkbenchSettings()

    uvicorn.run(
        "workbench.editing.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="warning",  # uvicorn's own logging is intercepted by loguru
    )


# ---------------------------------------------------------------------------
# Workspace files
# ---------------------------------------------------------------------------


@main.group()
def workspace() -> None:
    """Inspect and copy workspace files."""


@workspace.command("save-as")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
def save_as(source: Path, target: Path) -> None:
    """Copy the workspace file SOURCE to TARGET, keeping folder paths valid."""
    import asyncio

    from workbench.editing.execution.persistence import WorkspacePersistence
    from workbench.editing.services.dialogs import ScriptedDialogService
    from workbench.editing.services.host import LocalWindowHost, WindowRegistry
    from workbench.editing.services.local import LocalFileService
    from workbench.editing.settings import WorkbenchSettings

    settings = WorkbenchSettings()
    files = LocalFileService()
    registry = WindowRegistry()
    host = LocalWindowHost(
        files=files,
        registry=registry,
        window_id=registry.register(),
        untitled_home=settings.resolve_untitled_home(),
        backup_home=settings.resolve_backup_home(),
    )
    persistence = WorkspacePersistence(files=files, host=host, dialogs=ScriptedDialogService())

    async def _save() -> bool:
        workspace = await host.get_workspace_identifier(source.absolute())
        return await persistence.save_as(workspace, target.absolute())

    if asyncio.run(_save()):
        click.echo(f"Workspace saved as {target.absolute()}.")
    else:
        click.echo("Source and target are the same file; nothing to do.")


@workspace.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def show(path: Path) -> None:
    """List the root folders of the workspace file PATH."""
    import asyncio

    from workbench.editing.models.workspace import WorkspaceIdentifier
    from workbench.editing.resources import workspace_id
    from workbench.editing.services.configuration import JsonEditingService, WorkspaceContextService
    from workbench.editing.services.local import LocalFileService

    path = path.absolute()
    files = LocalFileService()
    context = WorkspaceContextService(files=files, json_editing=JsonEditingService(files))

    asyncio.run(context.initialize(WorkspaceIdentifier(id=workspace_id(path), config_path=path)))
    for folder in context.workbench.folders:
        click.echo(f"{folder.index}\t{folder.name}\t{folder.uri}")


if __name__ == "__main__":
    main()
