"""Shared fixtures: an isolated config directory, canned API payloads and fake loop drivers."""

from __future__ import annotations

from typing import Iterable, Optional

import pytest

from haole.clients import ServerDetails, ServerStatus
from haole.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp dir and drop any cached Config."""
    config_dir = tmp_path / "haole-config"
    monkeypatch.setenv("HAOLE_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("HAOLE_LOG_LEVEL", raising=False)
    reset_config()
    yield config_dir
    reset_config()


@pytest.fixture
def haven_payload() -> dict:
    return {
        "online": True,
        "players": {"online": 3, "max": 20, "list": ["A", "B", "C"]},
        "version": "Paper 1.21.4",
    }


@pytest.fixture
def mcstatus_payload() -> dict:
    return {
        "online": True,
        "host": "play.havenmc.jp",
        "port": 25565,
        "ip_address": "203.0.113.7",
        "version": {"name_raw": "Paper 1.21.4", "protocol": 769},
        "motd": {
            "raw": "§aWelcome to §bHaven",
            "clean": "Welcome to Haven",
            "html": "<span><span style=\"color: #55FF55;\">Welcome to </span></span>",
        },
    }


@pytest.fixture
def status() -> ServerStatus:
    return ServerStatus(
        online=True,
        players_online=3,
        players_max=20,
        server_version="Paper 1.21.4",
        player_names=("A", "B", "C"),
    )


@pytest.fixture
def details() -> ServerDetails:
    return ServerDetails(
        host="play.havenmc.jp",
        ip_address="203.0.113.7",
        port=25565,
        protocol=769,
        motd_raw="§aWelcome [here]",
        motd_clean="Welcome [here]",
        motd_html="<b>Welcome</b>",
    )


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeKeyReader:
    """
    Stands in for KeyReader.

    Each read_key call consumes the next scripted key (None = timeout) and
    advances the clock by the full timeout. Once the script runs out it
    answers "q" so loops always terminate.
    """

    def __init__(self, keys: Iterable[Optional[str]] = (), clock: Optional[FakeClock] = None):
        self.keys = list(keys)
        self.clock = clock
        self.timeouts: list[float] = []
        self.entered = False
        self.exited = False

    def __enter__(self) -> "FakeKeyReader":
        self.entered = True
        return self

    def __exit__(self, *args) -> None:
        self.exited = True

    def read_key(self, timeout: float) -> Optional[str]:
        self.timeouts.append(timeout)
        if self.clock is not None:
            self.clock.advance(timeout)
        if self.keys:
            return self.keys.pop(0)
        return "q"


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
