import sys

import pytest
from loguru import logger

from nodeio.core.config import ConfigManager
from nodeio.core.logging import setup_logging, setup_logging_from_config


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_file_logging_creates_log(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging(debug_mode=True, log_dir=str(log_dir), log_to_file=True)
    logger.debug("hello from test")
    logger.remove()  # closes the file sink

    files = list(log_dir.glob("nodeio_*.log"))
    assert len(files) == 1
    assert "hello from test" in files[0].read_text(encoding="utf-8")


def test_console_only_by_default(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging(debug_mode=False, log_dir=str(log_dir))
    assert not log_dir.exists()


def test_setup_from_config(tmp_path):
    config = ConfigManager(filepath=None)
    config.update("general", "log_dir", str(tmp_path / "cfg_logs"))
    config.update("general", "log_to_file", True)
    setup_logging_from_config(config)
    assert (tmp_path / "cfg_logs").is_dir()
