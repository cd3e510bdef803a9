"""Command-line interface (Typer + Rich).

Commands:
- `fetch`: one orchestrated load, rendered once (optionally exported to JSON).
- `browse`: interactive session; every input goes through the orchestrator.
- `doctor`: environment diagnostics.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

import typer
from rich.console import Console

from adapters.character_api import CharacterApiFetcher
from adapters.json_exporter import export_snapshot_json
from cli import doctor
from cli.log_setup import configure_logging
from cli.ui_components import BROWSE_HELP, print_banner, render_snapshot
from core.config import AppSettings
from core.domain.models import QuerySnapshot
from core.domain.state import QueryState
from core.interfaces.fetcher import CharacterFetcher
from core.services.query_orchestrator import QueryOrchestrator

app = typer.Typer(
    no_args_is_help=True,
    help="Browse the Rick and Morty character collection from the terminal.",
)
app.command(name="doctor")(doctor.run)

_console = Console()

LineReader = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class BrowseAction:
    """One parsed line of the interactive session."""

    kind: str
    search: str = ""
    page: int | None = None
    message: str | None = None


def parse_browse_input(line: str, *, page: int, page_count: int) -> BrowseAction:
    """Translate a line typed in `browse` into an action.

    Lines starting with `:` are commands, anything else is a search term.
    """

    text = line.strip()
    if not text.startswith(":"):
        return BrowseAction(kind="search", search=text)

    parts = text[1:].split()
    command = parts[0].lower() if parts else ""
    if command in ("q", "quit", "exit"):
        return BrowseAction(kind="quit")
    if command in ("n", "next"):
        if page_count and page >= page_count:
            return BrowseAction(kind="invalid", message="Already on the last page.")
        return BrowseAction(kind="page", page=page + 1)
    if command in ("p", "prev", "previous"):
        if page <= 1:
            return BrowseAction(kind="invalid", message="Already on the first page.")
        return BrowseAction(kind="page", page=page - 1)
    if command in ("g", "go", "goto"):
        if len(parts) != 2 or not parts[1].isdigit() or int(parts[1]) < 1:
            return BrowseAction(kind="invalid", message="Usage: :g <page number>")
        target = int(parts[1])
        if page_count and target > page_count:
            return BrowseAction(kind="invalid", message=f"There are only {page_count} pages.")
        return BrowseAction(kind="page", page=target)
    if command in ("h", "help", "?"):
        return BrowseAction(kind="help")
    return BrowseAction(kind="invalid", message=f"Unknown command: {text}")


async def fetch_once(
    settings: AppSettings,
    *,
    page: int,
    name: str,
    fetcher: CharacterFetcher | None = None,
) -> QuerySnapshot:
    """Run the initial load for (`page`, `name`) and return the final snapshot."""

    fetcher = fetcher or CharacterApiFetcher(settings)
    async with QueryOrchestrator(fetcher, settings=settings, search=name, page=page) as orchestrator:
        await orchestrator.wait_idle()
        return orchestrator.snapshot()


async def _read_line() -> str:
    try:
        return await asyncio.to_thread(_console.input, "[bold cyan]>[/bold cyan] ")
    except EOFError:
        return ":q"


async def browse_session(
    settings: AppSettings,
    *,
    page: int,
    name: str,
    console: Console | None = None,
    fetcher: CharacterFetcher | None = None,
    read_line: LineReader | None = None,
) -> QuerySnapshot:
    """Interactive loop; returns the last snapshot shown."""

    console = console or _console
    read_line = read_line or _read_line
    fetcher = fetcher or CharacterApiFetcher(settings)

    async with QueryOrchestrator(fetcher, settings=settings, search=name, page=page) as orchestrator:
        console.print(BROWSE_HELP, style="dim")
        while True:
            await orchestrator.wait_idle()
            snapshot = orchestrator.snapshot()
            render_snapshot(console, snapshot)

            action = parse_browse_input(
                await read_line(),
                page=orchestrator.page,
                page_count=snapshot.page_count,
            )
            while action.kind in ("invalid", "help"):
                console.print(action.message or BROWSE_HELP, style="yellow" if action.message else "dim")
                action = parse_browse_input(
                    await read_line(),
                    page=orchestrator.page,
                    page_count=snapshot.page_count,
                )

            if action.kind == "quit":
                return snapshot
            if action.kind == "page" and action.page is not None:
                orchestrator.change_page(action.page)
            else:
                orchestrator.set_search(action.search)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ...). Defaults to CHARACTER_BROWSER_LOG_LEVEL.",
    ),
) -> None:
    settings = AppSettings()
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


@app.command()
def fetch(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to load (starts at 1)."),
    name: str = typer.Option("", "--name", "-n", help="Name substring to search for."),
    json_path: Path | None = typer.Option(None, "--json", help="Also write the result to this JSON file."),
) -> None:
    """Load one page of characters and print it."""

    settings = AppSettings()
    snapshot = asyncio.run(fetch_once(settings, page=page, name=name))
    render_snapshot(_console, snapshot)

    if json_path is not None:
        written = export_snapshot_json(snapshot=snapshot, output_path=json_path)
        _console.print(f"[green]Saved JSON to:[/green] {written}")

    if snapshot.state is QueryState.ERROR:
        raise typer.Exit(code=1)


@app.command()
def browse(
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to start on."),
    name: str = typer.Option("", "--name", "-n", help="Initial search term."),
) -> None:
    """Interactive search and pagination."""

    settings = AppSettings()
    print_banner(_console)
    asyncio.run(browse_session(settings, page=page, name=name))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
