"""CLI entrypoint for journalvault."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .errors import JournalVaultError

VAULT_MARKERS = ("Entries", "Places", "People", "Media")


def _auto_detect_vault(start: Path) -> Path | None:
    """Find a vault (a folder holding one of VAULT_MARKERS) by walking up from `start`."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if any((p / marker).is_dir() for marker in VAULT_MARKERS):
            return p
    return None


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return

    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(__version__, prog_name="journalvault")
@click.option(
    "--vault",
    "-v",
    type=click.Path(exists=False, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Path to the vault root (defaults to auto-detected from the current directory)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a journalvault.toml (defaults to <vault>/journalvault.toml)",
)
@click.option("--verbose", is_flag=True, help="Log loader and writer activity")
@click.pass_context
def cli(ctx: click.Context, vault: Path | None, config_path: Path | None, verbose: bool) -> None:
    """journalvault - Markdown journal vault tools.

    Check, list, format and link-resolve the entries, places, people and media of
    an Obsidian-style journal vault.
    """
    from .config import find_config

    _configure_logging(verbose)
    ctx.ensure_object(dict)
    if vault is None:
        detected = _auto_detect_vault(Path.cwd())
        if detected is None:
            raise click.ClickException("Vault not found. Pass --vault /path/to/vault or run from inside it.")
        vault = detected

    if not vault.exists() or not vault.is_dir():
        raise click.BadParameter(f"Directory '{vault}' does not exist.", param_hint="--vault / -v")

    vault = vault.resolve()
    try:
        config = find_config(vault, config_path)
    except JournalVaultError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["vault"] = vault
    ctx.obj["config"] = config


@cli.command()
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning"]),
    default="error",
    help="Exit with error if this level or higher found",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output results as JSON",
)
@click.pass_context
def check(ctx: click.Context, fail_on: str, output_json: bool) -> None:
    """Load every vault file and report problems.

    Files that fail to parse are errors. Unresolved wiki-links and entries
    naming a place with no file are warnings.
    """
    from .commands.check import run_check

    exit_code = run_check(ctx.obj["vault"], ctx.obj["config"], fail_on, output_json)
    sys.exit(exit_code)


@cli.command()
@click.option("--limit", "-n", type=int, default=20, show_default=True, help="Maximum entries to show")
@click.option("--tag", type=str, default=None, help="Only show entries with this tag")
@click.pass_context
def entries(ctx: click.Context, limit: int, tag: str | None) -> None:
    """List entries, newest first."""
    from .commands.entries import run_entries

    exit_code = run_entries(ctx.obj["vault"], ctx.obj["config"], limit=limit, tag=tag)
    sys.exit(exit_code)


@cli.command()
@click.argument("content")
@click.option("--place", type=str, default=None, help="Place name to link the entry to")
@click.option(
    "--at",
    "at",
    type=str,
    default=None,
    metavar="ISO_DATETIME",
    help="Entry timestamp with offset, e.g. 2025-01-15T14:30:00-08:00 (defaults to now)",
)
@click.pass_context
def new(ctx: click.Context, content: str, place: str | None, at: str | None) -> None:
    """Create a new entry tagged with the configured default tags."""
    from .commands.entries import run_new
    from .vault.frontmatter import parse_iso_datetime

    when = None
    if at is not None:
        when = parse_iso_datetime(at)
        if when is None:
            raise click.BadParameter(f"'{at}' is not an ISO-8601 datetime with offset.", param_hint="--at")

    exit_code = run_new(ctx.obj["vault"], ctx.obj["config"], content, place=place, when=when)
    sys.exit(exit_code)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def links(ctx: click.Context, file: Path) -> None:
    """Print FILE's body with wiki-links resolved against the vault."""
    from .commands.links import run_links

    try:
        exit_code = run_links(ctx.obj["vault"], ctx.obj["config"], file)
    except JournalVaultError as e:
        raise click.ClickException(str(e)) from e
    sys.exit(exit_code)


@cli.command()
@click.argument("text")
@click.option("--mention", is_flag=True, help="Search people only, as after '@'")
@click.pass_context
def suggest(ctx: click.Context, text: str, mention: bool) -> None:
    """Show autocomplete suggestions for TEXT.

    Examples:

        journalvault suggest blue

        journalvault suggest "Coffee at [[blu"

        journalvault suggest --mention ali
    """
    from .commands.links import run_suggest

    exit_code = run_suggest(ctx.obj["vault"], ctx.obj["config"], text, mention=mention)
    sys.exit(exit_code)


@cli.command()
@click.option("--check", "check_only", is_flag=True, help="List files that would change without writing")
@click.pass_context
def fmt(ctx: click.Context, check_only: bool) -> None:
    """Rewrite vault files in canonical form."""
    from .commands.fmt import run_fmt

    exit_code = run_fmt(ctx.obj["vault"], ctx.obj["config"], check=check_only)
    sys.exit(exit_code)


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
