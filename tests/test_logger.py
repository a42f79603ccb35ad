"""Tests for the loguru setup used by the entrypoints."""

import sys

import pytest
from loguru import logger

from lounge.logger import setup_logger
from lounge.planner import LoungeRequest, optimize_lounge


@pytest.fixture
def restore_default_sink():
    yield
    # Removing the sinks closes the file so it can be read back.
    logger.remove()
    logger.add(sys.stderr)


def run_last_week():
    optimize_lounge(LoungeRequest(current_week=9, levels=(0, 0, 0), points=0, time_available=2.0))


def test_file_sink_receives_plan_summary(tmp_path, restore_default_sink):
    log_file = tmp_path / "logs" / "lounge.log"
    setup_logger(level="DEBUG", log_file=log_file)
    run_last_week()
    logger.remove()

    text = log_file.read_text()
    assert f"logging at DEBUG to stderr and {log_file}" in text
    assert "INFO    lounge.planner:" in text
    assert "Lounge plan from week 9" in text


def test_file_is_rewritten_per_run(tmp_path, restore_default_sink):
    log_file = tmp_path / "lounge.log"
    log_file.write_text("previous run\n")
    setup_logger(level="INFO", log_file=log_file)
    run_last_week()
    logger.remove()

    text = log_file.read_text()
    assert "previous run" not in text
    assert "Lounge plan from week 9" in text


def test_level_filters_file(tmp_path, restore_default_sink):
    log_file = tmp_path / "lounge.log"
    setup_logger(level="WARNING", log_file=log_file)
    run_last_week()
    logger.remove()

    assert log_file.read_text() == ""
