"""Tests for the shared logging helpers."""

# pylint: disable=missing-function-docstring

import logging

import pytest

from asset_migrate.utils.logging_utils import TRACE, get_log_level, get_logger


@pytest.mark.parametrize(
    "name, expected",
    [
        ("TRACE", TRACE),
        ("DEBUG", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("LOUD", logging.INFO),
        ("Logger", logging.INFO),
    ],
)
def test_get_log_level(name, expected):
    assert get_log_level(name) == expected


def test_trace_level_is_named():
    assert logging.getLevelName(TRACE) == "TRACE"


def test_trace_is_emitted_when_enabled(caplog):
    logger = get_logger("asset_migrate.tests.trace")
    with caplog.at_level(TRACE, logger="asset_migrate.tests.trace"):
        logger.trace("probing %s", "NoPremultiply")
    assert caplog.records[-1].levelname == "TRACE"
    assert caplog.records[-1].getMessage() == "probing NoPremultiply"


def test_trace_is_dropped_above_trace(caplog):
    logger = get_logger("asset_migrate.tests.quiet")
    with caplog.at_level(logging.DEBUG, logger="asset_migrate.tests.quiet"):
        logger.trace("hidden")
    assert not caplog.records
