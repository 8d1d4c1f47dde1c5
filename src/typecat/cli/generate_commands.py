"""Generate command — typecat generate."""

from __future__ import annotations

import sys
import time

import click
from rich import box
from rich.panel import Panel
from rich.table import Table

from typecat.cli.main import accessors_argument, console, resolve_cache_dir
from typecat.core.config import get_settings
from typecat.core.errors import CompilationError, TypecatError
from typecat.core.logging import TypecatLogger, Verbosity


def run_generation(accessors_file: str, cache_dir: str | None, concurrency: int | None,
                   verbose: int, project_accessors: bool | None):
    """Load an accessors file and run generation; shared by generate and show.

    Returns (models, registry, result). Exits with status 1 on load or
    fatal generation errors.
    """
    from typecat.build.accessors_file import load_accessors_file
    from typecat.build.runner import generate_accessors
    from typecat.build.workspace import WorkspaceCache
    from typecat.registry import AccessorRegistry

    settings = get_settings()
    try:
        models = load_accessors_file(accessors_file)
    except Exception as e:
        console.print(f"[red]Error loading accessors file:[/red] {e}")
        sys.exit(1)

    cache_path = resolve_cache_dir(cache_dir)
    cache = WorkspaceCache(cache_path)
    registry = AccessorRegistry(projects_extension_name=settings.projects_extension_name)
    logger = TypecatLogger(
        verbosity=Verbosity(min(verbose, Verbosity.DEBUG)),
        logs_dir=cache_path / "logs",
        console=console,
    )
    enabled = settings.project_accessors if project_accessors is None else project_accessors

    try:
        result = generate_accessors(
            models.catalogs,
            models.root_project,
            cache=cache,
            registry=registry,
            logger=logger,
            projects_enabled=enabled,
            concurrency=concurrency or settings.concurrency,
        )
    except CompilationError as e:
        console.print(f"[red]Compilation failed:[/red] {e}")
        if verbose:
            console.print(e.describe(), markup=False)
        sys.exit(1)
    except TypecatError as e:
        console.print(f"[red]Generation failed:[/red] {e}")
        sys.exit(1)
    return models, registry, result


def print_validation_error(result) -> None:
    if result.validation_error is not None:
        console.print(
            Panel(
                str(result.validation_error),
                title="[bold yellow]Project accessors skipped[/bold yellow]",
                border_style="yellow",
            )
        )


@click.command()
@accessors_argument
@click.option("--cache-dir", default=None, help="Override the workspace cache directory")
@click.option("--concurrency", "-j", default=None, type=int, help="Requests generated in parallel")
@click.option("--verbose", "-v", count=True, help="Verbosity level: -v per-request, -vv identities")
@click.option("--project-accessors/--no-project-accessors", default=None,
              help="Generate project accessors (default from TYPECAT_PROJECT_ACCESSORS)")
def generate(accessors_file: str, cache_dir: str | None, concurrency: int | None, verbose: int,
             project_accessors: bool | None):
    """Generate and compile accessors, reusing cached workspaces.

    ACCESSORS_FILE defaults to accessors.py in the current directory.
    """
    start_time = time.time()
    models, _registry, result = run_generation(
        accessors_file, cache_dir, concurrency, verbose, project_accessors
    )

    table = Table(title="Accessor Generation", box=box.ROUNDED)
    table.add_column("Request", style="bold")
    table.add_column("Status")
    table.add_column("Classes", justify="right")
    table.add_column("Identity", style="dim")
    for stats in result.requests:
        status = "[green]built[/green]" if stats.built else "[cyan]cached[/cyan]"
        table.add_row(stats.name, status, str(stats.class_count), stats.identity[:12])
    console.print(table)

    elapsed = time.time() - start_time
    console.print(
        f"[bold]{result.built}[/bold] built, [bold]{result.cached}[/bold] cached "
        f"in {elapsed:.2f}s"
    )

    print_validation_error(result)
    if not result.ok:
        sys.exit(1)
