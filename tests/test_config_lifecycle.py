"""Tests for environment config and connection lifecycle logging."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

from lotto.config import BotConfig, load_config
from lotto.lifecycle import ConnectionLifecycle


def test_load_config_defaults():
    config = load_config({})
    assert config == BotConfig()
    assert config.lotto_prefix == "!lotto"
    assert config.log_file == "combined.log"


def test_load_config_overrides():
    config = load_config({
        "TOKEN": "abc",
        "LOTTO_PREFIX": " ?Raffle ",
        "DATABASE_PATH": "lotto.db",
        "LOG_LEVEL": "debug",
        "LOG_FILE": "",
    })
    assert config.token == "abc"
    assert config.lotto_prefix == "?raffle"
    assert config.database_path == "lotto.db"
    assert config.log_level == "DEBUG"
    assert config.log_file is None


def _bot():
    bot = MagicMock()
    bot.user.name = "Mini-Tool"
    bot.user.id = 77
    guild = MagicMock()
    guild.name = "Home"
    guild.id = 1
    bot.guilds = [guild]
    return bot


def test_first_ready_logs_startup_then_reconnects(caplog):
    lifecycle = ConnectionLifecycle()
    bot = _bot()

    with caplog.at_level(logging.DEBUG, logger="lotto.lifecycle"):
        assert lifecycle.on_ready(bot) is True
        assert lifecycle.on_ready(bot) is False

    assert "Connected." in caplog.text
    assert "* Mini-Tool" in caplog.text
    assert "* Home (1)" in caplog.text
    assert caplog.text.count("Connected.") == 1
    assert "Reconnected" in caplog.text


def test_error_is_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="lotto.lifecycle"):
        ConnectionLifecycle().on_error("on_message")
    assert "Error in event on_message" in caplog.text
