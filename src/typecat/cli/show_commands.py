"""Show command — inspect a resolved catalog or the project accessors."""

from __future__ import annotations

import sys

import click
from rich import box
from rich.table import Table
from rich.tree import Tree

from typecat.cli.generate_commands import print_validation_error, run_generation
from typecat.cli.main import accessors_argument, console
from typecat.core.naming import to_symbol


@click.command()
@click.argument("name")
@accessors_argument
@click.option("--cache-dir", default=None, help="Override the workspace cache directory")
def show(name: str, accessors_file: str, cache_dir: str | None):
    """Show the accessors bound to NAME (a catalog name or the projects extension).

    ACCESSORS_FILE defaults to accessors.py in the current directory.
    """
    models, registry, result = run_generation(accessors_file, cache_dir, None, 0, None)

    catalog = registry.find_catalog(name)
    if catalog is not None:
        _show_catalog(catalog)
        return

    if name == registry.projects_extension_name:
        projects = registry.projects()
        if projects is None:
            print_validation_error(result)
            console.print("[red]No project accessors were generated.[/red]")
            sys.exit(1)
        _show_projects(projects, models.root_project)
        return

    known = ", ".join(c.catalog_name for c in registry.list_catalogs()) or "none"
    console.print(f"[red]No accessors bound to[/red] [bold]{name}[/bold] (catalogs: {known})")
    sys.exit(1)


def _show_catalog(catalog) -> None:
    table = Table(title=f"Catalog: {catalog.catalog_name}", box=box.ROUNDED)
    table.add_column("Kind", style="dim")
    table.add_column("Alias", style="bold")
    table.add_column("Accessor")
    table.add_column("Value")
    for alias in catalog.library_aliases:
        table.add_row("library", alias, to_symbol(alias), str(catalog.find_library(alias)))
    for alias in catalog.bundle_aliases:
        members = ", ".join(str(lib) for lib in catalog.find_bundle(alias))
        table.add_row("bundle", alias, f"bundles.{to_symbol(alias)}", members)
    for alias in catalog.version_aliases:
        table.add_row("version", alias, f"versions.{to_symbol(alias)}", catalog.find_version(alias))
    console.print(table)


def _show_projects(projects, root) -> None:
    tree = Tree(f"[bold]{_projects_label(projects)}[/bold]")

    def walk(node, accessor, branch):
        for child in node.children:
            symbol = to_symbol(child.name)
            child_accessor = getattr(accessor, symbol)
            sub = branch.add(f"{symbol} [dim]{child_accessor.project_path}[/dim]")
            walk(child, child_accessor, sub)

    walk(root, projects, tree)
    console.print(tree)


def _projects_label(projects) -> str:
    return f"{type(projects).__name__} ({projects.root_project.project_path})"
