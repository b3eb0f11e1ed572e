"""Tests for shared observability logging."""

import logging
import time

import pytest

from fakefile.observability.logging import get_logger, set_log_level


def test_get_logger_formats_utc_timestamps(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    fixed = time.struct_time((2020, 1, 2, 3, 4, 5, 3, 2, 0))

    def fake_gmtime(_: float | None = None) -> time.struct_time:
        return fixed

    monkeypatch.setattr(time, "gmtime", fake_gmtime)

    name = "fakefile.test.logging"
    logger = get_logger(name)
    logger.warning("Hello")

    captured = capsys.readouterr()
    assert "2020-01-02T03:04:05+0000 WARNING fakefile.test.logging: Hello" in captured.err


def test_get_logger_is_singleton_per_name() -> None:
    name = "fakefile.test.logging.singleton"
    logger = get_logger(name)
    logger_again = get_logger(name)

    assert logger is logger_again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False


def test_set_log_level_applies_to_prefixed_loggers_only() -> None:
    ours = get_logger("fakefile.test.logging.levels")
    theirs = get_logger("elsewhere.test.logging.levels")

    set_log_level("debug", prefix="fakefile.test.logging.levels")

    assert ours.level == logging.DEBUG
    assert theirs.level == logging.WARNING

    set_log_level(logging.WARNING, prefix="fakefile.test.logging.levels")
    assert ours.level == logging.WARNING


def test_set_log_level_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        set_log_level("chatty")


def test_debug_messages_are_hidden_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    logger = get_logger("fakefile.test.logging.quiet")
    logger.debug("hidden")

    assert "hidden" not in capsys.readouterr().err
