"""Command runners used to execute zfs and zpool."""
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from zfskit.core.logger import get_logger

logger = get_logger(__name__)

_USAGE_MARKER = "\nusage:\n"


class Runner(ABC):
    """Executes a program and returns its captured output.

    Implementations must raise ``subprocess.CalledProcessError`` (with
    ``stderr`` populated) when the program exits non-zero.
    """

    def command(self, program: str, args: Sequence[str]) -> List[str]:
        """Return the argument vector that ``run`` would execute."""
        return [program, *args]

    @abstractmethod
    def run(
        self,
        program: str,
        args: Sequence[str],
        timeout: Optional[float] = None,
    ) -> subprocess.CompletedProcess:
        """Run ``program`` with ``args`` and return its captured output."""


class SubprocessRunner(Runner):
    """Run commands on the local host."""

    def run(self, program, args, timeout=None):
        cmd = self.command(program, args)
        logger.debug(f"Running: {' '.join(cmd)}")
        return subprocess.run(cmd, capture_output=True, check=True, timeout=timeout)


class SudoRunner(SubprocessRunner):
    """Run commands via non-interactive sudo."""

    def __init__(self, sudo_binary: str = "sudo"):
        self.sudo_binary = sudo_binary

    def command(self, program, args):
        return [self.sudo_binary, "-n", program, *args]


class MockRunner(Runner):
    """Log commands instead of running them, returning empty output."""

    def __init__(self):
        self.commands: List[List[str]] = []

    def run(self, program, args, timeout=None):
        cmd = self.command(program, args)
        self.commands.append(cmd)
        logger.info(f"MOCK: Would run {' '.join(cmd)}")
        return subprocess.CompletedProcess(cmd, 0, stdout=b"", stderr=b"")


def clean_up_stderr(stderr: Union[bytes, str, None]) -> str:
    """Condense zfs/zpool stderr into a single line.

    Drops any trailing usage message, blank lines and surrounding whitespace,
    then joins the remaining lines with ": ".
    """
    if not stderr:
        return ""

    if isinstance(stderr, bytes):
        text = stderr.decode("utf-8", errors="replace")
    else:
        text = stderr
    index = text.find(_USAGE_MARKER)
    if index != -1:
        text = text[:index]

    lines = [line.strip() for line in text.strip().split("\n")]
    return ": ".join(line for line in lines if line)
