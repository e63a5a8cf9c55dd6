"""Tests for logging helpers."""

import logging

import pytest

from varset.utils.logging import log_call, timed

logger = logging.getLogger("varset.tests")


def test_timed_logs_duration(caplog):
    with caplog.at_level(logging.DEBUG, logger="varset.tests"):
        with timed("Loading variants", logger):
            pass
    assert "Loading variants took" in caplog.text


def test_log_call_reports_sizes_not_contents(caplog):
    @log_call(logger)
    def total(records, scale):
        return sum(records) * scale

    with caplog.at_level(logging.DEBUG, logger="varset.tests"):
        assert total([1, 2, 3], 2) == 12
    assert "total(list[3], 2)" in caplog.text
    assert "total finished" in caplog.text


def test_log_call_logs_and_reraises(caplog):
    @log_call(logger)
    def broken():
        raise ValueError("bad input")

    with caplog.at_level(logging.DEBUG, logger="varset.tests"):
        with pytest.raises(ValueError):
            broken()
    assert "broken failed: bad input" in caplog.text
