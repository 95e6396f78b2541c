"""
Live terminal dashboard for Haole.

Uses Rich's Live display on the alternate screen. Every tick the dashboard
fetches the server status, records the player count in a rolling history,
and redraws; between ticks it waits for a quit key.
"""

import time
from datetime import datetime
from typing import Callable, Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..clients import HavenStatusClient, ServerStatus, StatusFetchError
from ..config import Config, get_config
from ..core.history import HistoryBuffer, sparkline
from ..logging_config import get_logger
from .keyboard import KeyReader, is_quit_key

logger = get_logger(__name__)

RECENT_SAMPLES_SHOWN = 5


def create_header(host: str, now: Optional[datetime] = None) -> Panel:
    """Create the dashboard header."""
    now = now or datetime.now()

    grid = Table.grid(expand=True)
    grid.add_column(justify="left", ratio=1)
    grid.add_column(justify="right")

    grid.add_row(
        f"[bold cyan]HavenMC Status[/bold cyan] [dim]{host}[/dim]",
        f"[dim]{now.strftime('%Y-%m-%d %H:%M:%S')}[/dim]",
    )

    return Panel(grid, style="bold white on dark_blue", height=3)


def create_status_panel(status: Optional[ServerStatus], error: Optional[str] = None) -> Panel:
    """Create the online state / player count / version panel."""
    if status is None:
        body = Text("Status unavailable", style="bold red")
        if error:
            body.append(f"\n{error}", style="dim")
        return Panel(body, title="📡 Server", border_style="red")

    state = "[bold green]● Online[/bold green]" if status.online else "[bold red]● Offline[/bold red]"

    grid = Table.grid(expand=True, padding=(0, 2))
    grid.add_column(justify="center", ratio=1)
    grid.add_column(justify="center", ratio=1)
    grid.add_column(justify="center", ratio=1)

    grid.add_row(
        f"[bold white]State[/bold white]\n{state}",
        f"[bold white]Players[/bold white]\n[bold cyan]{status.players_online}/{status.players_max}[/bold cyan]",
        Text.assemble(("Version\n", "bold white"), (status.server_version, "bold magenta")),
    )

    # Stale data is still shown, but flagged
    border = "yellow" if error else "blue"
    return Panel(grid, title="📡 Server", border_style=border)


def create_players_panel(status: Optional[ServerStatus]) -> Panel:
    """Create the player name list."""
    if status is None:
        body = Text("—", style="dim")
    elif status.player_names is None:
        body = Text("Player names are restricted or unavailable.", style="red")
    elif not status.player_names:
        body = Text("No players are currently online.", style="yellow")
    else:
        body = Text("\n".join(f" - {name}" for name in status.player_names), style="cyan")

    return Panel(body, title="👥 Players", border_style="cyan")


def create_history_panel(history: HistoryBuffer, ceiling: Optional[int] = None) -> Panel:
    """Create the sparkline and the most recent samples."""
    if not len(history):
        return Panel(Text("No samples yet", style="dim"), title="📈 History", border_style="green")

    values = history.values()

    table = Table(show_header=True, header_style="bold cyan", box=None, padding=(0, 1))
    table.add_column("Time", style="dim")
    table.add_column("Players", justify="right")
    for sample in reversed(history.latest(RECENT_SAMPLES_SHOWN)):
        table.add_row(sample.timestamp, str(sample.players_online))

    summary = Text()
    summary.append(sparkline(values, ceiling), style="green")
    summary.append(f"\nmin {min(values)}  max {max(values)}  samples {len(values)}/{history.capacity}", style="dim")

    return Panel(Group(summary, Text(), table), title="📈 History", border_style="green")


def create_footer(refresh_interval: float, error: Optional[str] = None) -> Panel:
    """Create the footer with help text."""
    text = Text()
    text.append("Refresh: ", style="dim")
    text.append(f"{refresh_interval:g}s", style="cyan")
    if error:
        text.append(" | ", style="dim")
        text.append(f"Last fetch failed: {error}", style="yellow")
    text.append(" | ", style="dim")
    text.append("Press q to quit", style="bold red")

    return Panel(text, style="dim", height=3)


class StatusDashboard:
    """
    Fetch/render/wait loop over the HavenMC status.

    The current status and the history buffer are owned by this object and
    only change inside ``refresh``.
    """

    def __init__(
        self,
        client: Optional[HavenStatusClient] = None,
        config: Optional[Config] = None,
        refresh_interval: Optional[float] = None,
        history_size: Optional[int] = None,
        console: Optional[Console] = None,
        key_reader_factory: Callable[[], KeyReader] = KeyReader,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or get_config()
        self.client = client or HavenStatusClient(self.config)
        self.refresh_interval = refresh_interval or self.config.refresh_interval
        self.history = HistoryBuffer(history_size or self.config.history_size)
        self.console = console or Console()
        self.key_reader_factory = key_reader_factory
        self.clock = clock

        self.status: Optional[ServerStatus] = None
        self.last_error: Optional[str] = None
        self.fetch_count = 0

    def refresh(self) -> bool:
        """
        Fetch once and update state.

        On failure the previous status is kept and the error is remembered
        for display.

        Returns:
            True if the fetch succeeded.
        """
        self.fetch_count += 1
        try:
            status = self.client.fetch()
        except StatusFetchError as e:
            logger.debug(f"Dashboard fetch failed: {e}")
            self.last_error = str(e)
            return False

        self.status = status
        self.last_error = None
        self.history.record(status.players_online)
        return True

    def render(self) -> Group:
        """Build the complete dashboard from current state."""
        ceiling = self.status.players_max if self.status else None
        return Group(
            create_header(self.config.server_host),
            create_status_panel(self.status, self.last_error),
            create_players_panel(self.status),
            create_history_panel(self.history, ceiling),
            create_footer(self.refresh_interval, self.last_error),
        )

    def run(self) -> None:
        """Run until the operator presses q (or Ctrl+C)."""
        self.refresh()

        with self.key_reader_factory() as keys:
            with Live(
                self.render(),
                console=self.console,
                screen=True,
                auto_refresh=False,
            ) as live:
                next_tick = self.clock() + self.refresh_interval
                try:
                    while True:
                        remaining = next_tick - self.clock()
                        if remaining <= 0:
                            self.refresh()
                            next_tick = self.clock() + self.refresh_interval
                            live.update(self.render(), refresh=True)
                            continue

                        if is_quit_key(keys.read_key(remaining)):
                            break
                except KeyboardInterrupt:
                    pass


def run_dashboard(refresh_interval: Optional[float] = None) -> None:
    """
    Run the live dashboard.

    Args:
        refresh_interval: Seconds between fetches (defaults to config).
    """
    config = get_config()
    with HavenStatusClient(config) as client:
        StatusDashboard(client=client, config=config, refresh_interval=refresh_interval).run()
