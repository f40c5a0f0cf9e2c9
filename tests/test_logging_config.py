"""Tests for the solver logging setup."""

import logging

import pytest

from common.logging_config import get_logger, set_log_level
from geodesic.direct import solve
from geodesic.ellipsoid import WGS84, clear_series_cache, series_tables


@pytest.fixture
def restore_levels():
    yield
    set_log_level(logging.INFO)


class TestGetLogger:
    """Test suite for get_logger."""

    def test_handler_installed_once_per_package(self):
        first = get_logger("geodesic.some_module")
        second = get_logger("geodesic.other_module")
        package = logging.getLogger("geodesic")
        assert len(package.handlers) == 1
        assert not first.handlers and not second.handlers
        assert first.parent is package

    def test_module_level_override(self):
        logger = get_logger("validation.verbose_module", level=logging.DEBUG)
        assert logger.level == logging.DEBUG
        assert logging.getLogger("validation").level == logging.INFO


class TestSetLogLevel:
    """Test suite for set_log_level."""

    def test_sets_every_package(self, restore_levels):
        set_log_level("DEBUG")
        for package in ("common", "geodesic", "validation"):
            assert logging.getLogger(package).level == logging.DEBUG

    def test_cache_miss_is_logged(self, caplog):
        clear_series_cache()
        with caplog.at_level(logging.DEBUG, logger="geodesic.ellipsoid"):
            series_tables(WGS84)
        assert any("Built series tables" in r.getMessage() for r in caplog.records)

    def test_batch_setup_is_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="geodesic.direct"):
            solve([0.0, 10.0], 0.0, 1e6, 45.0)
        assert any("Solving 2 geodesic(s)" in r.getMessage() for r in caplog.records)
