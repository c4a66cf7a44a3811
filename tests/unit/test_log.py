"""Tests for loguru sink setup."""

from __future__ import annotations

from loguru import logger

from mindflow.log import configure_logging


def test_configure_logging_filters_below_level(capsys) -> None:
    configure_logging("WARNING")

    logger.debug("quiet-debug")
    logger.warning("loud-warning")

    err = capsys.readouterr().err
    assert "loud-warning" in err
    assert "quiet-debug" not in err


def test_configure_logging_debug_level(capsys) -> None:
    configure_logging("debug")

    logger.debug("now-visible")

    assert "now-visible" in capsys.readouterr().err


def test_configure_logging_replaces_previous_sink(capsys) -> None:
    configure_logging("DEBUG")
    configure_logging("ERROR")

    logger.info("dropped")

    assert "dropped" not in capsys.readouterr().err
