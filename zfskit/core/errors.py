"""Exception hierarchy for zfskit.

Errors are arranged on two axes: the tool that was involved (``ZFSError`` for
``zfs``, ``ZpoolError`` for ``zpool``) and the kind of failure
(``InvalidNameError``, ``InvalidPropertyError``, ``InvalidCreateOptionsError``,
``CommandError``). Concrete errors inherit from one class of each axis, so
callers can catch whichever is more useful to them::

    try:
        manager.set_pool_properties("tank", {"all": "on"})
    except InvalidPropertyError:
        ...

The string form joins the tool, the kind and the detail message, for example
``zpool: invalid property: 'all' is not a valid property``.
"""
from typing import Optional, Sequence


class ZFSKitError(Exception):
    """Base class for every error raised by zfskit."""

    tool = ""
    label = ""

    def __str__(self) -> str:
        message = super().__str__()
        return ": ".join(part for part in (self.tool, self.label, message) if part)


class ZFSError(ZFSKitError):
    """Error involving the zfs command."""

    tool = "zfs"


class ZpoolError(ZFSKitError):
    """Error involving the zpool command."""

    tool = "zpool"


class ConfigError(ZFSKitError):
    """Raised when a configuration file cannot be used."""

    label = "invalid config"


class InvalidNameError(ZFSKitError):
    """Raised for a malformed dataset or pool name."""

    label = "invalid name"


class InvalidPropertyError(ZFSKitError):
    """Raised for a property name that must not be passed to a command."""

    label = "invalid property"


class InvalidCreateOptionsError(ZFSKitError):
    """Raised for incomplete or inconsistent create options."""

    label = "invalid create options"


class CommandError(ZFSKitError):
    """Raised when an executed command fails.

    Attributes:
        command: Full argument vector that was executed
        returncode: Exit status, or None if the command never completed
        stderr: Cleaned up stderr output
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class InvalidDatasetNameError(ZFSError, InvalidNameError):
    pass


class InvalidDatasetPropertyError(ZFSError, InvalidPropertyError):
    pass


class InvalidDatasetCreateOptionsError(ZFSError, InvalidCreateOptionsError):
    pass


class ZFSCommandError(ZFSError, CommandError):
    pass


class InvalidPoolNameError(ZpoolError, InvalidNameError):
    pass


class InvalidPoolPropertyError(ZpoolError, InvalidPropertyError):
    pass


class InvalidPoolCreateOptionsError(ZpoolError, InvalidCreateOptionsError):
    pass


class ZpoolCommandError(ZpoolError, CommandError):
    pass
