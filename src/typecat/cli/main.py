"""Typecat CLI — main entry point and shared utilities."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console

from typecat.core.config import get_settings

console = Console()


def _resolve_accessors_path(
    ctx: click.Context, param: click.Parameter, value: str | None,
) -> str:
    """Click callback: default to ./accessors.py when no argument is given."""
    if value is not None:
        return value
    default = str(Path.cwd() / "accessors.py")
    if not Path(default).exists():
        console.print(
            "[red]Error:[/red] No accessors file specified and "
            "[bold]accessors.py[/bold] not found in the current directory."
        )
        sys.exit(1)
    return default


def accessors_argument(fn):
    """Shared Click argument decorator for ACCESSORS_FILE with ./accessors.py default."""
    return click.argument(
        "accessors_file",
        required=False,
        default=None,
        callback=_resolve_accessors_path,
        is_eager=False,
    )(fn)


def resolve_cache_dir(cache_dir: str | None) -> Path:
    """--cache-dir wins over TYPECAT_CACHE_DIR and the default."""
    if cache_dir:
        return Path(cache_dir)
    return get_settings().cache_dir


@click.group()
def main():
    """Typecat — cached, type-safe catalog and project accessors."""
    pass


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from typecat.cli.clean_commands import clean  # noqa: E402
from typecat.cli.generate_commands import generate  # noqa: E402
from typecat.cli.show_commands import show  # noqa: E402

main.add_command(generate)
main.add_command(show)
main.add_command(clean)
