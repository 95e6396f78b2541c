from __future__ import annotations

import subprocess

from haole.core import ping as ping_module
from haole.core.ping import build_ping_command, run_ping


def test_ping_command_per_platform():
    assert build_ping_command("play.havenmc.jp", 4, system="Linux") == ["ping", "-c", "4", "play.havenmc.jp"]
    assert build_ping_command("play.havenmc.jp", 2, system="Darwin") == ["ping", "-c", "2", "play.havenmc.jp"]
    assert build_ping_command("play.havenmc.jp", 3, system="Windows") == ["ping", "-n", "3", "play.havenmc.jp"]


def test_run_ping_relays_output(monkeypatch):
    def fake_run(command, **kwargs):
        return subprocess.CompletedProcess(command, 0, stdout="64 bytes from 203.0.113.7\n", stderr="")

    monkeypatch.setattr(ping_module.subprocess, "run", fake_run)

    result = run_ping("play.havenmc.jp", 1)

    assert result.ok
    assert result.stdout == "64 bytes from 203.0.113.7\n"
    assert result.command[-1] == "play.havenmc.jp"


def test_run_ping_missing_binary(monkeypatch):
    def fake_run(command, **kwargs):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(ping_module.subprocess, "run", fake_run)

    result = run_ping("play.havenmc.jp")

    assert not result.ok
    assert result.error == "ping command not found"


def test_run_ping_non_zero_exit_is_not_ok(monkeypatch):
    monkeypatch.setattr(
        ping_module.subprocess,
        "run",
        lambda command, **kwargs: subprocess.CompletedProcess(command, 2, stdout="", stderr="unknown host\n"),
    )

    result = run_ping("play.havenmc.jp")

    assert not result.ok
    assert result.error is None
    assert result.stderr == "unknown host\n"
