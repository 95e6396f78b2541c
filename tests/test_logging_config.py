from __future__ import annotations

import logging

import pytest

from haole.logging_config import CHATTY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def restore_logger_levels():
    names = ("haole",) + CHATTY_LOGGERS
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_http_loggers_held_at_warning_by_default():
    logger = setup_logging("info")

    assert logger.name == "haole"
    assert logger.level == logging.INFO
    for name in CHATTY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_debug_lets_http_loggers_through():
    setup_logging("DEBUG")

    for name in CHATTY_LOGGERS:
        assert logging.getLogger(name).level == logging.DEBUG


def test_level_from_config(isolated_config_dir):
    isolated_config_dir.mkdir(parents=True)
    (isolated_config_dir / "config.yaml").write_text("log_level: error\n", encoding="utf-8")

    assert setup_logging().level == logging.ERROR


def test_unknown_override_is_rejected():
    with pytest.raises(ValueError):
        setup_logging("verbose")
