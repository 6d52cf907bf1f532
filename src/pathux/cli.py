"""Command-line interface for pathux."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .components import ComponentKind, components
from .config import Config, find_config_file, load_config
from .dir_entries import UsableDirEntry, usable_dir_entries
from .errors import PathuxError
from .logging_config import get_logger, setup_logging
from .resolver import PathResolver

logger = get_logger("cli")

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

KIND_STYLES = {
    ComponentKind.PREFIX: "magenta",
    ComponentKind.ROOT_DIR: "bold",
    ComponentKind.HOME_DIR: "green",
    ComponentKind.CUR_DIR: "dim",
    ComponentKind.PARENT_DIR: "yellow",
    ComponentKind.NORMAL: "cyan",
}


@dataclass
class AppContext:
    """State shared by all subcommands."""

    config: Config
    resolver: PathResolver
    config_path: Path | None = None


def _load_app_context(config_path: Path | None, log_level: str | None) -> AppContext:
    if config_path is None:
        config_path = find_config_file()
    try:
        config = load_config(config_path) if config_path is not None else Config()
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot load config {config_path}: {e}") from e

    setup_logging(config.logging, log_level)
    if config_path is not None:
        logger.debug(f"Loaded config from {config_path}")
    return AppContext(config=config, resolver=config.make_resolver(), config_path=config_path)


def _each(paths: tuple[str, ...], convert: Callable[[str], str | None]) -> None:
    """Print ``convert(path)`` for every path, failing on the first error."""
    for path in paths:
        try:
            result = convert(path)
        except PathuxError as e:
            raise click.ClickException(str(e)) from e
        click.echo("" if result is None else result)


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (default: nearest pathux.json, if any)",
)
@click.option(
    "--log-level",
    "-l",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=True),
    default=None,
    help="Override log level from config",
)
@click.version_option(version=__version__, prog_name="pathux")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str | None) -> None:
    """Path text utilities that understand ~ without touching the disk.

    Examples:

    \b
      pathux components ~/SRC/project     Show how a path is classified
      pathux absolute ./notes.txt         Resolve against the current directory
      pathux home-relative /home/me/SRC   Rewrite as ~/SRC
      pathux ls ~/Downloads               List a directory
    """
    ctx.obj = _load_app_context(config_path, log_level)


@cli.command("components")
@click.argument("path")
@click.pass_obj
def components_command(app: AppContext, path: str) -> None:
    """Show the classified components of PATH."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    for index, component in enumerate(components(path, app.resolver.flavour)):
        style = KIND_STYLES[component.kind]
        table.add_row(
            str(index),
            f"[{style}]{component.kind.value}[/{style}]",
            component.as_text(app.resolver.flavour),
        )
    Console().print(table)


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
def absolute(app: AppContext, paths: tuple[str, ...]) -> None:
    """Print the absolute form of each PATH."""
    _each(paths, app.resolver.absolute)


@cli.command()
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
def relative(app: AppContext, paths: tuple[str, ...]) -> None:
    """Print each PATH relative to the current directory."""
    _each(paths, app.resolver.simple_relative)


@cli.command("home-relative")
@click.argument("paths", nargs=-1, required=True)
@click.pass_obj
def home_relative(app: AppContext, paths: tuple[str, ...]) -> None:
    """Print each PATH relative to the home directory (as ~/...)."""
    _each(paths, app.resolver.relative_to_home)


@cli.command()
@click.argument("base")
@click.argument("children", nargs=-1, required=True)
@click.pass_obj
def join(app: AppContext, base: str, children: tuple[str, ...]) -> None:
    """Join CHILDREN onto BASE in order."""
    result = base
    for child in children:
        result = app.resolver.join(result, child)
    click.echo(result)


@cli.command()
@click.argument("path")
@click.pass_obj
def parent(app: AppContext, path: str) -> None:
    """Print the parent of PATH (fails for a root)."""
    result = app.resolver.parent(path)
    if result is None:
        raise click.ClickException(f"{path!r} has no parent")
    click.echo(result)


@cli.command("file-name")
@click.argument("path")
@click.pass_obj
def file_name(app: AppContext, path: str) -> None:
    """Print the final name in PATH (fails if there is none)."""
    result = app.resolver.file_name(path)
    if result is None:
        raise click.ClickException(f"{path!r} has no file name")
    click.echo(result)


def _describe_size(entry: UsableDirEntry) -> str:
    if not entry.is_file():
        return ""
    try:
        return str(entry.metadata().st_size)
    except OSError as e:
        logger.debug(f"Cannot stat {entry.path}: {e}")
        return "?"


@cli.command()
@click.argument("directory", default=".")
@click.option("--all", "-a", "show_all", is_flag=True, help="Include entries starting with '.'")
@click.pass_obj
def ls(app: AppContext, directory: str, show_all: bool) -> None:
    """List the entries of DIRECTORY (default: current directory)."""
    try:
        target = app.resolver.absolute(directory)
        entries = usable_dir_entries(target)
    except PathuxError as e:
        raise click.ClickException(str(e)) from e
    except OSError as e:
        raise click.ClickException(f"Cannot list {directory}: {e.strerror or e}") from e

    listing = app.config.listing
    if not (show_all or listing.show_hidden):
        entries = [e for e in entries if not e.name.startswith(".")]
    if listing.directories_first:
        entries.sort(key=lambda e: (not e.is_dir(), e.name))
    else:
        entries.sort(key=lambda e: e.name)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type", justify="center")
    table.add_column("Size", justify="right")
    for entry in entries:
        name = f"{entry.name}/" if entry.is_dir() else entry.name
        table.add_row(name, entry.file_type.value, _describe_size(entry))
    Console().print(table)
