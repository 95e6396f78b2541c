"""
CLI application for Haole.

Provides one-shot status commands, the mode preference, self-update and
ping, plus a global --watch flag that reruns a status command on an interval.
"""

import sys
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..clients import HavenStatusClient, McStatusClient, ServerDetails, ServerStatus, StatusFetchError
from ..config import get_config
from ..core import formatting
from ..core.ping import run_ping
from ..core.preferences import Mode, PreferenceError, change_mode, load_preference
from ..core.updater import UpdateError, Updater
from ..dashboard.watch import DEFAULT_WATCH_INTERVAL, run_watch
from ..logging_config import get_logger, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="haole",
    help="HavenMC Status CLI Tool - check play.havenmc.jp from your terminal",
    add_completion=False,
)

console = Console()

WATCH_FLAGS = ("--watch", "-w")


def _fetch_status() -> ServerStatus:
    with HavenStatusClient() as client:
        return client.fetch()


def _fetch_details() -> ServerDetails:
    with McStatusClient() as client:
        return client.fetch()


def _emit(ctx: typer.Context, render: Callable[[], list[str]]) -> None:
    """Print a command's output once, or repeatedly under --watch."""
    watch = (ctx.obj or {}).get("watch")
    if watch is not None:
        run_watch(render, interval=watch, console=console)
        return

    try:
        lines = render()
    except StatusFetchError as e:
        console.print(f"[bold red]✗ Failed to fetch server status: {escape(str(e))}[/bold red]")
        raise typer.Exit(1)

    for line in lines:
        console.print(line)


def _warn_watch_ignored(ctx: typer.Context, command: str) -> None:
    if (ctx.obj or {}).get("watch") is not None:
        logger.warning(f"--watch has no effect on '{command}'")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    watch: Optional[int] = typer.Option(
        None,
        "--watch", "-w",
        help=f"Repeat the command every N seconds until q is pressed (min 2, default {DEFAULT_WATCH_INTERVAL})",
        metavar="N",
    ),
):
    """
    Query the HavenMC server status.

    Run without a command to open the live dashboard when the saved mode is 'tui'.
    """
    setup_logging()
    ctx.obj = {"watch": watch}

    if ctx.invoked_subcommand is not None:
        return

    preference = load_preference()
    if preference.mode is Mode.TUI:
        from ..dashboard.live_dashboard import run_dashboard

        run_dashboard()
    else:
        typer.echo(ctx.get_help())
    raise typer.Exit()


@app.command("author")
def author(ctx: typer.Context):
    """Show the author of this tool."""
    _emit(ctx, formatting.format_author)


@app.command("players")
def players(ctx: typer.Context):
    """List the names of online players."""
    _emit(ctx, lambda: formatting.format_player_names(_fetch_status().player_names))


@app.command("playercount")
def playercount(ctx: typer.Context):
    """Show online/max player counts."""
    _emit(ctx, lambda: formatting.format_player_count(_fetch_status()))


@app.command("playersall")
def playersall(ctx: typer.Context):
    """List online players, then the player count."""
    _emit(ctx, lambda: formatting.format_players_all(_fetch_status()))


# Short names from earlier releases
app.command("pq", hidden=True)(playercount)
app.command("pall", hidden=True)(playersall)


@app.command("is-online")
def is_online(ctx: typer.Context):
    """Check whether the server is online."""
    _emit(ctx, lambda: formatting.format_is_online(_fetch_status()))


@app.command("is-offline")
def is_offline(ctx: typer.Context):
    """Check whether the server is offline."""
    _emit(ctx, lambda: formatting.format_is_offline(_fetch_status()))


@app.command("version")
def version(ctx: typer.Context):
    """Show the haole version."""
    _emit(ctx, formatting.format_client_version)


@app.command("server-version")
def server_version(ctx: typer.Context):
    """Show the version reported by the server."""
    _emit(ctx, lambda: formatting.format_server_version(_fetch_status()))


@app.command("ip")
def ip(ctx: typer.Context):
    """Show the server's resolved IP address."""
    _emit(ctx, lambda: formatting.format_ip(_fetch_details()))


@app.command("host")
def host(ctx: typer.Context):
    """Show the server host name."""
    _emit(ctx, lambda: formatting.format_host(_fetch_details()))


@app.command("protocol")
def protocol(ctx: typer.Context):
    """Show the server's protocol version number."""
    _emit(ctx, lambda: formatting.format_protocol(_fetch_details()))


@app.command("port")
def port(ctx: typer.Context):
    """Show the server port."""
    _emit(ctx, lambda: formatting.format_port(_fetch_details()))


@app.command("motd")
def motd(
    ctx: typer.Context,
    raw: bool = typer.Option(False, "--raw", help="Show the MOTD with formatting codes"),
    clean: bool = typer.Option(False, "--clean", help="Show the MOTD as plain text (default)"),
    html: bool = typer.Option(False, "--html", help="Show the MOTD as HTML"),
):
    """Show the server's message of the day."""
    selected = [name for name, flag in (("raw", raw), ("clean", clean), ("html", html)) if flag]
    if len(selected) > 1:
        raise typer.BadParameter("Use only one of --raw, --clean, --html")
    encoding = selected[0] if selected else "clean"

    _emit(ctx, lambda: formatting.format_motd(_fetch_details(), encoding))


@app.command("mode")
def mode(
    ctx: typer.Context,
    new_mode: Optional[str] = typer.Argument(
        None,
        help="cli, tui or toggle. Omit to show the current mode.",
        show_default=False,
    ),
):
    """
    Show or change the default mode.

    In 'tui' mode, running haole without a command opens the live dashboard.
    """
    _warn_watch_ignored(ctx, "mode")

    if new_mode is None:
        current = load_preference().mode
        console.print(f"Current mode: [magenta]{current.value}[/magenta]")
        return

    try:
        changed = change_mode(new_mode)
    except PreferenceError as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]")
        raise typer.Exit(1)

    console.print(f"[bold green]✓ Mode set to {changed.value}[/bold green]")


@app.command("update")
def update(
    ctx: typer.Context,
    check: bool = typer.Option(False, "--check", help="Only report whether an update is available"),
):
    """Check for a newer release and install it."""
    _warn_watch_ignored(ctx, "update")
    updater = Updater()

    console.print("[bold blue]Checking for updates...[/bold blue]")
    try:
        release = updater.check()
        if release is None:
            console.print(f"[green]✓ haole {updater.current_version} is up to date.[/green]")
            return

        console.print(f"[yellow]New version available: {updater.current_version} → {release.version}[/yellow]")
        if check:
            return

        with console.status(f"Installing {release.tag}..."):
            updater.install(release)
    except UpdateError as e:
        console.print(f"[bold red]✗ Update failed: {escape(str(e))}[/bold red]")
        raise typer.Exit(1)

    console.print(f"[bold green]✓ Updated to {release.version}[/bold green]")


@app.command("ping")
def ping(
    ctx: typer.Context,
    count: int = typer.Option(4, "--count", "-c", min=1, help="Number of echo requests"),
):
    """Ping the server with the system ping utility (experimental)."""
    _warn_watch_ignored(ctx, "ping")
    host = get_config().server_host

    console.print("[yellow]⚠ ping is experimental and its output may change or break.[/yellow]")
    result = run_ping(host, count)

    if result.error:
        console.print(f"[red]✗ Could not run ping: {escape(result.error)}[/red]")
        return

    # Relay the utility's own output untouched
    if result.stdout:
        typer.echo(result.stdout, nl=False)
    if result.stderr:
        typer.echo(result.stderr, nl=False, err=True)

    if result.returncode != 0:
        console.print(f"[red]✗ ping exited with code {result.returncode}[/red]")


def normalize_watch_args(argv: list[str]) -> list[str]:
    """
    Rewrite ``--watch`` / ``--watch N`` / ``--watch=N`` anywhere on the line
    as a leading ``--watch=N``.

    Click only accepts group options before the subcommand and has no
    optional-value options, so the flag is normalized before parsing.
    """
    watch: Optional[str] = None
    rest: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            rest.extend(argv[i:])
            break
        if arg.startswith("--watch="):
            watch = arg.split("=", 1)[1]
        elif arg in WATCH_FLAGS:
            following = argv[i + 1] if i + 1 < len(argv) else None
            if following is not None and following.isdigit():
                watch = following
                i += 1
            else:
                watch = str(DEFAULT_WATCH_INTERVAL)
        else:
            rest.append(arg)
        i += 1

    if watch is None:
        return rest
    return [f"--watch={watch}"] + rest


def run(argv: Optional[list[str]] = None) -> None:
    """Console-script entry point."""
    args = normalize_watch_args(sys.argv[1:] if argv is None else list(argv))
    app(args=args, prog_name="haole")


if __name__ == "__main__":
    run()
