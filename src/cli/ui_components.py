"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets `fetch` and `browse` share the same tables and panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import QuerySnapshot
from core.domain.state import QueryState

BROWSE_HELP = "Type to search  •  :n next  •  :p previous  •  :g N go to page  •  :q quit"


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Why here:
    - Avoids circular imports (main <-> doctor).
    - Non-interactive commands can skip it.
    """

    title = Text("Character Browser", style="bold cyan")
    subtitle = Text("Search • Paginate • Rick and Morty API", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_characters_table(snapshot: QuerySnapshot) -> Table:
    title = f"Characters (page {snapshot.page}"
    if snapshot.page_count:
        title += f"/{snapshot.page_count}"
    title += ")"

    table = Table(title=title, caption=f"{snapshot.total_count} total")
    table.add_column("ID", style="dim", justify="right", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Species", style="white")
    table.add_column("Gender", style="magenta")
    for character in snapshot.characters:
        table.add_row(
            str(character.id),
            character.name,
            character.status,
            character.species,
            character.gender,
        )
    return table


def build_state_panel(snapshot: QuerySnapshot) -> Panel:
    """Panel for every state that is not a result list."""

    search = f" for “{snapshot.search}”" if snapshot.search else ""
    if snapshot.state is QueryState.LOADING:
        return Panel(Text(f"Loading page {snapshot.page}{search}…", style="dim"), border_style="blue")
    if snapshot.state is QueryState.NO_DATA_FOUND:
        return Panel(
            Text(f"No characters found{search}.", style="yellow"),
            title="No results",
            border_style="yellow",
        )
    return Panel(
        Text("Could not load characters. Try again later.", style="red"),
        title="Error",
        border_style="red",
    )


def render_snapshot(console: Console, snapshot: QuerySnapshot) -> None:
    if snapshot.state is QueryState.LOADED:
        console.print(build_characters_table(snapshot))
    else:
        console.print(build_state_panel(snapshot))
