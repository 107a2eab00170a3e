"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from apiservices.logConfig import configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


def test_json_format_renders_json_lines(capsys: pytest.CaptureFixture[str], restore_logging: None) -> None:
    configure_logging(level="DEBUG", fmt="json")

    structlog.get_logger("apiservices.test").debug("calling service", service="getCustomers")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["event"] == "calling service"
    assert record["service"] == "getCustomers"
    assert record["level"] == "debug"


def test_level_filters_debug(capsys: pytest.CaptureFixture[str], restore_logging: None) -> None:
    configure_logging(level="WARNING", fmt="console")

    structlog.get_logger("apiservices.test").info("quiet")

    assert "quiet" not in capsys.readouterr().out
