"""
Tests for pipeline logging helpers.
"""
import logging
from dataclasses import dataclass

import pytest

from market_climate.pipeline import logging_utils
from market_climate.pipeline.logging_utils import (
    is_debug_mode,
    log_data_preparation,
    log_pipeline_step,
    set_debug_mode,
)


@pytest.fixture(autouse=True)
def restore_debug_mode():
    previous = is_debug_mode()
    yield
    set_debug_mode(previous)


@dataclass(frozen=True)
class DummyConfig:
    flag: bool = True


def test_set_debug_mode_toggles_flag():
    set_debug_mode(True)
    assert is_debug_mode() is True
    assert logging.getLogger("market_climate").level == logging.DEBUG

    set_debug_mode(False)
    assert is_debug_mode() is False


def test_log_pipeline_step_returns_result(caplog):
    @log_pipeline_step
    def double(values, config):
        return [v * 2 for v in values]

    with caplog.at_level(logging.DEBUG, logger=logging_utils.logger.name):
        result = double([1, 2], DummyConfig())

    assert result == [2, 4]
    assert "Pipeline step: double config=DummyConfig" in caplog.text
    assert "2 items" in caplog.text


def test_log_pipeline_step_logs_and_reraises(caplog):
    @log_pipeline_step
    def broken():
        raise ValueError("bad input")

    with caplog.at_level(logging.ERROR):
        with pytest.raises(ValueError, match="bad input"):
            broken()

    assert "Pipeline step failed: broken" in caplog.text
    assert "ValueError: bad input" in caplog.text


def test_log_pipeline_step_preserves_name():
    @log_pipeline_step
    def named():
        return None

    assert named.__name__ == "named"


def test_log_data_preparation_reraises(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(KeyError):
            with log_data_preparation("Grouping rows"):
                raise KeyError("x")

    assert "Grouping rows failed" in caplog.text


def test_log_data_preparation_debug_timing(caplog):
    set_debug_mode(True)

    with caplog.at_level(logging.DEBUG, logger=logging_utils.logger.name):
        with log_data_preparation("Sorting dates"):
            pass

    assert "✓ Sorting dates" in caplog.text
