"""Tests for zfskit logging setup."""
import logging

from rich.logging import RichHandler

from zfskit.core import logger as zfskit_logger


def test_get_logger_attaches_one_handler():
    log = zfskit_logger.get_logger("zfskit.tests.handlers")
    zfskit_logger.get_logger("zfskit.tests.handlers")

    assert sum(isinstance(h, RichHandler) for h in log.handlers) == 1
    assert log.level == logging.INFO


def test_set_verbose():
    log = zfskit_logger.get_logger("zfskit.tests.verbose")

    zfskit_logger.set_verbose(True)
    assert log.level == logging.DEBUG

    zfskit_logger.set_verbose(False)
    assert log.level == logging.INFO


def test_setup_file_logging(tmp_path, monkeypatch):
    monkeypatch.setattr(zfskit_logger, "_file_logging_configured", False)
    root = logging.getLogger("zfskit")
    handlers = list(root.handlers)
    level = root.level
    log_file = tmp_path / "logs" / "zfskit.log"

    try:
        zfskit_logger.setup_file_logging(log_file=str(log_file), verbose=True)
        zfskit_logger.get_logger("zfskit.tests.file").info("Running: zfs list")

        for handler in root.handlers:
            handler.flush()
        content = log_file.read_text()
    finally:
        root.setLevel(level)
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()

    assert "zfskit logging initialized" in content
    assert "Running: zfs list" in content


def test_unwritable_log_dir_falls_back(tmp_path, monkeypatch):
    fallback = tmp_path / "fallback" / "zfskit.log"
    monkeypatch.setattr(zfskit_logger, "FALLBACK_LOG_FILE", fallback)
    original_mkdir = type(tmp_path).mkdir

    def mkdir(self, *args, **kwargs):
        if self == tmp_path / "locked":
            raise PermissionError(13, "Permission denied")
        return original_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(type(tmp_path), "mkdir", mkdir)

    assert zfskit_logger._writable_log_path(tmp_path / "locked" / "zfskit.log") == fallback
    assert fallback.parent.is_dir()


def test_setup_file_logging_runs_once(tmp_path, monkeypatch):
    monkeypatch.setattr(zfskit_logger, "_file_logging_configured", True)
    root = logging.getLogger("zfskit")
    handlers = list(root.handlers)

    zfskit_logger.setup_file_logging(log_file=str(tmp_path / "zfskit.log"))

    assert root.handlers == handlers
    assert not (tmp_path / "zfskit.log").exists()
