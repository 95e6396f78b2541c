from __future__ import annotations

import subprocess
import sys

import httpx
import pytest

from haole.config import Config
from haole.core import updater as updater_module
from haole.core.updater import ReleaseInfo, UpdateError, Updater, is_newer, parse_version


@pytest.mark.parametrize(
    "value, expected",
    [("0.1.0", (0, 1)), ("v1.2.3", (1, 2, 3)), ("1.10", (1, 10)), ("2.0.0rc1", (2,)), ("3", (3,))],
)
def test_parse_version(value, expected):
    assert parse_version(value) == expected


def test_parse_version_rejects_garbage():
    with pytest.raises(ValueError):
        parse_version("latest")


def test_is_newer():
    assert is_newer("0.2.0", "0.1.0")
    assert is_newer("0.1.10", "0.1.9")
    assert not is_newer("0.1", "0.1.0")
    assert not is_newer("0.0.9", "0.1.0")


def _updater(handler, current="0.1.0") -> Updater:
    return Updater(config=Config(), transport=httpx.MockTransport(handler), current_version=current)


def test_check_finds_newer_release():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"tag_name": "v0.2.0", "html_url": "https://example.invalid/r"})

    release = _updater(handler).check()

    assert seen == ["https://api.github.com/repos/KoHaRxnP/haole/releases/latest"]
    assert release == ReleaseInfo(tag="v0.2.0", url="https://example.invalid/r")
    assert release.version == "0.2.0"


def test_check_returns_none_when_current():
    handler = lambda request: httpx.Response(200, json={"tag_name": "v0.1.0"})

    assert _updater(handler).check() is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(404, json={"message": "Not Found"}),
        httpx.Response(200, text="nope"),
        httpx.Response(200, json={"name": "untagged"}),
        httpx.Response(200, json={"tag_name": "nightly"}),
    ],
    ids=["not-found", "invalid-json", "no-tag", "unparseable-tag"],
)
def test_check_failures_raise_update_error(response):
    with pytest.raises(UpdateError):
        _updater(lambda request: response).check()


def test_install_runs_pip_for_the_tag(monkeypatch):
    calls = []

    def fake_run(command, capture_output, text):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout="ok", stderr="")

    monkeypatch.setattr(updater_module.subprocess, "run", fake_run)

    _updater(lambda request: httpx.Response(500)).install(ReleaseInfo(tag="v0.2.0"))

    assert calls == [[
        sys.executable, "-m", "pip", "install", "--upgrade",
        "git+https://github.com/KoHaRxnP/haole.git@v0.2.0",
    ]]


def test_install_failure_raises(monkeypatch):
    monkeypatch.setattr(
        updater_module.subprocess,
        "run",
        lambda command, capture_output, text: subprocess.CompletedProcess(command, 1, stdout="", stderr="no network"),
    )

    with pytest.raises(UpdateError, match="no network"):
        _updater(lambda request: httpx.Response(500)).install(ReleaseInfo(tag="v0.2.0"))
