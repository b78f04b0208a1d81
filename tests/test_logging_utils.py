"""Tests for the logging helpers.

These tests verify that:
- The log file lives under the data directory
- Helpers work before setup_logging() without creating a log file
"""

from resource_map import logging_utils
from resource_map.config import DATA_DIR


def test_log_file_is_under_data_dir():
    assert logging_utils.get_log_file_path() == DATA_DIR / "logs" / "resource_map.log"


def test_helpers_before_setup_do_not_touch_log_file(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "resource_map.log"
    monkeypatch.setattr(logging_utils, "LOG_FILE", log_file)
    logging_utils.log_info("NAV: test message")
    logging_utils.log_export("kit-emergencia.png", False, "no rasterizer")
    assert not log_file.exists()
    assert logging_utils.get_logger().name == "resource_map"
