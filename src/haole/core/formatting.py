"""
Output formatting for the one-shot commands.

Every function here is a pure mapping from fetched data to Rich markup
lines; the CLI prints them and the watch loop reprints them.
"""

from typing import Optional, Sequence

from rich.markup import escape

from .. import __author__, __version__
from ..clients import ServerDetails, ServerStatus

NO_PLAYERS_MESSAGE = "No players are currently online."
RESTRICTED_PLAYERS_MESSAGE = "Player names are restricted or unavailable."

ONLINE_MESSAGE = "The server is online."
OFFLINE_MESSAGE = "The server is offline."

MOTD_LABELS = {
    "raw": "Raw",
    "clean": "Clean",
    "html": "HTML",
}


def format_author() -> list[str]:
    return [f"Created by: [magenta]{__author__}[/magenta]"]


def format_client_version() -> list[str]:
    return [f"Haole Version: [magenta]{__version__}[/magenta]"]


def format_player_names(names: Optional[Sequence[str]]) -> list[str]:
    """
    Format the player list, one line per name in source order.

    An empty list and a missing list (names hidden by the server) get
    different messages.
    """
    if names is None:
        return [f"[red]{RESTRICTED_PLAYERS_MESSAGE}[/red]"]
    if not names:
        return [f"[yellow]{NO_PLAYERS_MESSAGE}[/yellow]"]
    return [f" - [cyan]{escape(name)}[/cyan]" for name in names]


def format_player_count(status: ServerStatus) -> list[str]:
    return [
        f"[green]●[/green] {status.players_online}/{status.players_max} players online"
    ]


def format_players_all(status: ServerStatus) -> list[str]:
    return format_player_names(status.player_names) + [""] + format_player_count(status)


def format_is_online(status: ServerStatus) -> list[str]:
    if status.online:
        return [f"[green]{ONLINE_MESSAGE}[/green]"]
    return [f"[red]{OFFLINE_MESSAGE}[/red]"]


def format_is_offline(status: ServerStatus) -> list[str]:
    # Colors are inverted: green means the answer to "is it offline?" is yes
    if not status.online:
        return [f"[green]{OFFLINE_MESSAGE}[/green]"]
    return [f"[red]{ONLINE_MESSAGE}[/red]"]


def format_server_version(status: ServerStatus) -> list[str]:
    return [f"Server Version: [magenta]{escape(status.server_version)}[/magenta]"]


def format_ip(details: ServerDetails) -> list[str]:
    return [f"Server IP: [magenta]{escape(details.ip_address)}[/magenta]"]


def format_host(details: ServerDetails) -> list[str]:
    return [f"Server Host: [magenta]{escape(details.host)}[/magenta]"]


def format_protocol(details: ServerDetails) -> list[str]:
    return [f"Protocol Version: [magenta]{details.protocol}[/magenta]"]


def format_port(details: ServerDetails) -> list[str]:
    return [f"Server Port: [magenta]{details.port}[/magenta]"]


def format_motd(details: ServerDetails, encoding: str = "clean") -> list[str]:
    """
    Format the MOTD in the requested encoding.

    Raw and HTML MOTDs contain characters that look like Rich markup, so the
    value is escaped rather than interpreted.
    """
    value = details.motd(encoding)
    return [f"MOTD ({MOTD_LABELS[encoding]}): [magenta]{escape(value)}[/magenta]"]
