"""context-stash CLI: workspace-scoped store of immutable context entries.

Commands:
    context-stash init                 create .context/, config.json, agents.md
    context-stash serve                start stdio MCP server
    context-stash create [MARKDOWN|-]  add an entry (stdin when omitted)
    context-stash get REF              print an entry
    context-stash list                 list entries in index order
    context-stash search QUERY         first matching line per entry
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ctxstash.bootstrap import init_workspace
from ctxstash.config import find_workspace_root
from ctxstash.errors import StashError
from ctxstash.store import EntryStore

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

root_option = click.option(
    "--root",
    default=None,
    help="Workspace root (default: nearest parent of cwd containing .context/config.json)",
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_root(root: str | None) -> Path:
    if root:
        return Path(root).resolve()
    return find_workspace_root(Path.cwd())


def _store(root: str | None) -> EntryStore:
    return EntryStore(_resolve_root(root))


def _setup_logging(level: str) -> None:
    # stderr only: stdout carries the MCP protocol
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="context-stash")
def cli() -> None:
    """context-stash: durable context entries for AI coding agents."""


# ---------------------------------------------------------------------------
# init / serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--dir", "root", default=".", show_default=True, help="Workspace root")
def init(root: str) -> None:
    """Create .context/, config.json and agents.md (never overwrites)."""
    try:
        report = init_workspace(Path(root).resolve())
    except StashError as exc:
        raise click.ClickException(str(exc)) from exc

    ws_root = report.workspace.root
    for path in report.created:
        click.echo(f"Created {path.relative_to(ws_root)}")
    for path in report.existing:
        click.echo(f"{path.relative_to(ws_root)} already exists")
    click.echo("\nTo use the MCP server, run:\n  context-stash serve")


@cli.command()
@root_option
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="CONTEXT_STASH_LOG_LEVEL",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
)
def serve(root: str | None, log_level: str) -> None:
    """Start stdio MCP server (launch with the workspace root as cwd)."""
    from ctxstash.mcp import run_server

    _setup_logging(log_level)
    run_server(_resolve_root(root))


# ---------------------------------------------------------------------------
# Entry operations
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("markdown", required=False)
@root_option
def create(markdown: str | None, root: str | None) -> None:
    """Create an entry from MARKDOWN (or stdin) and print its ref."""
    if markdown is None or markdown == "-":
        markdown = click.get_text_stream("stdin").read()
    try:
        entry = _store(root).create(markdown)
    except StashError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(entry.ref)


@cli.command()
@click.argument("ref")
@root_option
def get(ref: str, root: str | None) -> None:
    """Print the raw content of entry REF."""
    try:
        content = _store(root).get(ref)
    except StashError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(content, nl=not content.endswith("\n"))


@cli.command("list")
@root_option
def list_cmd(root: str | None) -> None:
    """List entries in ascending index order."""
    try:
        entries = _store(root).list()
    except StashError as exc:
        raise click.ClickException(str(exc)) from exc
    if not entries:
        click.echo("(no entries)")
        return
    for e in entries:
        click.echo(f"{e.ref}  {e.file}")


@cli.command()
@click.argument("query")
@root_option
def search(query: str, root: str | None) -> None:
    """Case-insensitive substring search; one line per matching entry."""
    try:
        results = _store(root).search(query)
    except StashError as exc:
        raise click.ClickException(str(exc)) from exc
    if not results:
        click.echo("(no results)")
        return
    for r in results:
        click.echo(f"[{r.ref}] {r.snippet}")
