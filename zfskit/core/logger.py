"""Rich console logging for zfskit, with an optional command log file."""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LOG_FILE = Path("/var/log/zfskit/zfskit.log")
FALLBACK_LOG_FILE = Path("/tmp/zfskit.log")

_FILE_FORMAT = logging.Formatter(
    "%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

_file_logging_configured = False


def _level(verbose: bool) -> int:
    return logging.DEBUG if verbose else logging.INFO


def _writable_log_path(path: Path) -> Path:
    """Create the parent of ``path``, or fall back to ``FALLBACK_LOG_FILE``."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
    except PermissionError:
        FALLBACK_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        return FALLBACK_LOG_FILE


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False):
    """Mirror every ``zfskit.*`` record into a log file.

    Only the first call has an effect. With ``verbose`` the file also
    receives the DEBUG line the runners emit for each zfs/zpool command.
    """
    global _file_logging_configured
    if _file_logging_configured:
        return

    path = _writable_log_path(Path(log_file) if log_file else LOG_FILE)
    handler = logging.FileHandler(path)
    handler.setLevel(_level(verbose))
    handler.setFormatter(_FILE_FORMAT)

    package_logger = logging.getLogger("zfskit")
    package_logger.addHandler(handler)
    package_logger.setLevel(_level(verbose))
    _file_logging_configured = True

    package_logger.info(f"zfskit logging initialized: {path}")


def set_verbose(verbose: bool = True):
    for name, existing in logging.root.manager.loggerDict.items():
        if name.startswith("zfskit") and isinstance(existing, logging.Logger):
            existing.setLevel(_level(verbose))


def get_logger(name: str) -> logging.Logger:
    """Return the named logger with a single Rich console handler."""
    log = logging.getLogger(name)
    if any(isinstance(h, RichHandler) for h in log.handlers):
        return log

    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.INFO)
    return log
