"""zfskit runtime configuration and settings."""
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from zfskit.core.errors import ConfigError

_TRUTHY = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


@dataclass
class ZFSKitConfig:
    """Runtime configuration for zfs and zpool invocations.

    Attributes:
        zfs_binary: Executable used for dataset commands (default: zfs)
        zpool_binary: Executable used for pool commands (default: zpool)
        command_timeout: Timeout in seconds for a single command (default: 60)
        sudo: Run commands through ``sudo -n`` (default: False)
        mock: Log commands instead of executing them (default: False)
    """

    zfs_binary: str = "zfs"
    zpool_binary: str = "zpool"
    command_timeout: float = 60  # seconds per command
    sudo: bool = False
    mock: bool = False

    @classmethod
    def from_env(cls) -> "ZFSKitConfig":
        """Create config from environment variables.

        Environment variables:
            ZFSKIT_ZFS_BINARY: Path to the zfs executable
            ZFSKIT_ZPOOL_BINARY: Path to the zpool executable
            ZFSKIT_COMMAND_TIMEOUT: Command timeout in seconds
            ZFSKIT_SUDO: Run commands via sudo when set to 1/true
            ZFSKIT_MOCK: Enable mock mode when set to 1/true

        Returns:
            ZFSKitConfig instance with values from environment or defaults
        """
        try:
            timeout = float(os.getenv("ZFSKIT_COMMAND_TIMEOUT", cls.command_timeout))
        except ValueError as e:
            raise ConfigError(f"ZFSKIT_COMMAND_TIMEOUT must be a number: {e}") from e

        return cls(
            zfs_binary=os.getenv("ZFSKIT_ZFS_BINARY", cls.zfs_binary),
            zpool_binary=os.getenv("ZFSKIT_ZPOOL_BINARY", cls.zpool_binary),
            command_timeout=timeout,
            sudo=_env_flag("ZFSKIT_SUDO", cls.sudo),
            mock=_env_flag("ZFSKIT_MOCK", cls.mock),
        )

    @classmethod
    def from_file(cls, path: str) -> "ZFSKitConfig":
        """Load a YAML config file on top of the environment defaults.

        Example file::

            zfs_binary: /usr/sbin/zfs
            command_timeout: 120
            sudo: true

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is not a mapping or has unknown keys
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            raw = yaml.safe_load(f)

        base = cls.from_env()
        if not raw:
            return base
        if not isinstance(raw, dict):
            raise ConfigError(f"{config_path}: expected a mapping at top level")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ConfigError(f"{config_path}: unknown keys: {', '.join(unknown)}")

        if 'command_timeout' in raw:
            try:
                raw['command_timeout'] = float(raw['command_timeout'])
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{config_path}: command_timeout must be a number") from e
        for key in ('sudo', 'mock'):
            if key in raw and not isinstance(raw[key], bool):
                raise ConfigError(f"{config_path}: {key} must be true or false")

        return replace(base, **raw)


_config: Optional[ZFSKitConfig] = None


def get_config() -> ZFSKitConfig:
    """Get the process-wide zfskit configuration.

    Returns:
        ZFSKitConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = ZFSKitConfig.from_env()
    return _config


def set_config(config: Optional[ZFSKitConfig]):
    """Set the process-wide zfskit configuration.

    Args:
        config: ZFSKitConfig instance to use, or None to re-read the environment
    """
    global _config
    _config = config
