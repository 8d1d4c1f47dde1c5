"""Clean command — remove cached accessor workspaces."""

from __future__ import annotations

import shutil

import click

from typecat.cli.main import console, resolve_cache_dir


@click.command()
@click.option("--cache-dir", default=None, help="Override the workspace cache directory")
@click.option("-y", "--yes", is_flag=True, help="Skip confirmation prompt")
def clean(cache_dir: str | None, yes: bool):
    """Remove all cached accessor workspaces.

    Deletes the entire cache directory. Use --yes to skip the confirmation prompt.
    """
    from typecat.build.workspace import WorkspaceCache

    cache_path = resolve_cache_dir(cache_dir)

    if not cache_path.exists():
        console.print("[dim]Nothing to clean — cache directory does not exist.[/dim]")
        return

    count = len(WorkspaceCache(cache_path).list_workspaces())
    if not yes:
        console.print(
            f"This will delete [bold]{cache_path}[/bold] ({count} workspaces) and all its contents."
        )
        if not click.confirm("Continue?"):
            console.print("[dim]Aborted.[/dim]")
            return

    shutil.rmtree(cache_path)
    console.print(f"[green]Cleaned:[/green] {cache_path} ({count} workspaces)")
