"""Tests for zfskit configuration loading."""
import pytest

from zfskit.core.config import ZFSKitConfig, get_config, set_config
from zfskit.core.errors import ConfigError

ENV_VARS = (
    "ZFSKIT_ZFS_BINARY",
    "ZFSKIT_ZPOOL_BINARY",
    "ZFSKIT_COMMAND_TIMEOUT",
    "ZFSKIT_SUDO",
    "ZFSKIT_MOCK",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def write_config(tmp_path, content):
    path = tmp_path / "zfskit.yml"
    path.write_text(content)
    return str(path)


class TestFromEnv:

    def test_defaults(self):
        config = ZFSKitConfig.from_env()

        assert config == ZFSKitConfig()
        assert config.zfs_binary == "zfs"
        assert config.command_timeout == 60

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("ZFSKIT_ZFS_BINARY", "/usr/sbin/zfs")
        monkeypatch.setenv("ZFSKIT_ZPOOL_BINARY", "/usr/sbin/zpool")
        monkeypatch.setenv("ZFSKIT_COMMAND_TIMEOUT", "12.5")
        monkeypatch.setenv("ZFSKIT_SUDO", "yes")
        monkeypatch.setenv("ZFSKIT_MOCK", "1")

        config = ZFSKitConfig.from_env()

        assert config.zfs_binary == "/usr/sbin/zfs"
        assert config.zpool_binary == "/usr/sbin/zpool"
        assert config.command_timeout == 12.5
        assert config.sudo is True
        assert config.mock is True

    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_false_flags(self, monkeypatch, value):
        monkeypatch.setenv("ZFSKIT_MOCK", value)

        assert ZFSKitConfig.from_env().mock is False

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("ZFSKIT_COMMAND_TIMEOUT", "soon")

        with pytest.raises(ConfigError, match="ZFSKIT_COMMAND_TIMEOUT"):
            ZFSKitConfig.from_env()


class TestFromFile:

    def test_load(self, tmp_path):
        path = write_config(tmp_path, "zfs_binary: /sbin/zfs\ncommand_timeout: 120\nsudo: true\n")

        config = ZFSKitConfig.from_file(path)

        assert config.zfs_binary == "/sbin/zfs"
        assert config.zpool_binary == "zpool"
        assert config.command_timeout == 120.0
        assert config.sudo is True
        assert config.mock is False

    def test_file_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ZFSKIT_ZPOOL_BINARY", "/env/zpool")
        monkeypatch.setenv("ZFSKIT_MOCK", "1")
        path = write_config(tmp_path, "mock: false\n")

        config = ZFSKitConfig.from_file(path)

        assert config.zpool_binary == "/env/zpool"
        assert config.mock is False

    def test_empty_file(self, tmp_path):
        assert ZFSKitConfig.from_file(write_config(tmp_path, "")) == ZFSKitConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ZFSKitConfig.from_file(str(tmp_path / "missing.yml"))

    def test_not_a_mapping(self, tmp_path):
        with pytest.raises(ConfigError, match="expected a mapping"):
            ZFSKitConfig.from_file(write_config(tmp_path, "- zfs\n- zpool\n"))

    def test_unknown_keys(self, tmp_path):
        path = write_config(tmp_path, "zfs_binary: zfs\ntimeout: 5\nhost: nas\n")

        with pytest.raises(ConfigError) as exc_info:
            ZFSKitConfig.from_file(path)

        assert "unknown keys: host, timeout" in str(exc_info.value)
        assert str(exc_info.value).startswith("invalid config: ")

    def test_bad_timeout(self, tmp_path):
        with pytest.raises(ConfigError, match="command_timeout must be a number"):
            ZFSKitConfig.from_file(write_config(tmp_path, "command_timeout: forever\n"))

    def test_bad_flag(self, tmp_path):
        with pytest.raises(ConfigError, match="sudo must be true or false"):
            ZFSKitConfig.from_file(write_config(tmp_path, "sudo: maybe\n"))


class TestGlobalConfig:

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = ZFSKitConfig(mock=True)
        set_config(config)

        assert get_config() is config

    def test_reset_rereads_environment(self, monkeypatch):
        get_config()
        monkeypatch.setenv("ZFSKIT_ZFS_BINARY", "/opt/zfs")
        set_config(None)

        assert get_config().zfs_binary == "/opt/zfs"
