"""Shared test fixtures for zfskit tests."""
import subprocess

import pytest

from zfskit.core.config import ZFSKitConfig, set_config
from zfskit.core.runner import Runner
from zfskit.core.zfs_manager import ZFSManager


class FakeRunner(Runner):
    """Records invocations and replays canned output."""

    def __init__(self, stdout=b"", stderr=b"", returncode=0, exc=None):
        self.calls = []
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.exc = exc

    @property
    def last_args(self):
        return self.calls[-1][1]

    def run(self, program, args, timeout=None):
        self.calls.append((program, list(args)))
        cmd = self.command(program, args)
        if self.exc is not None:
            raise self.exc
        if self.returncode != 0:
            raise subprocess.CalledProcessError(
                self.returncode, cmd, output=self.stdout, stderr=self.stderr,
            )
        return subprocess.CompletedProcess(cmd, 0, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture(autouse=True)
def reset_config():
    """Keep the process-wide config from leaking between tests."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def manager(fake_runner):
    """ZFSManager wired to a FakeRunner."""
    return ZFSManager(runner=fake_runner, config=ZFSKitConfig())


@pytest.fixture
def pool_get_output():
    """Output of `zpool get -Hp -o name,property,value,source size,capacity,altroot`."""
    return (
        b"zfs-local-test\tsize\t336M\t-\n"
        b"zfs-local-test\tcapacity\t9%\t-\n"
        b"zfs-local-test\taltroot\t-\tdefault\n"
        b"zfs-other-test\tsize\t336M\t-\n"
        b"zfs-other-test\tcapacity\t0%\t-\n"
        b"zfs-other-test\taltroot\t-\tdefault\n"
    )


@pytest.fixture
def dataset_get_output():
    """Output of `zfs get -Hp -o name,property,value,source all -r tank/a`."""
    return (
        b"tank/a\ttype\tfilesystem\t-\n"
        b"tank/a\tcreation\t1651487819\t-\n"
        b"tank/a\tused\t401604608\t-\n"
        b"tank/a\tquota\t0\tdefault\n"
        b"tank/a\tmountpoint\t/mnt/a\tlocal\n"
        b"tank/a\tcompressratio\t1.42x\t-\n"
        b"tank/a/sub\ttype\tfilesystem\t-\n"
        b"tank/a/sub\tquota\t10737418240\tlocal\n"
        b"tank/a/sub\tmountpoint\tnone\tlocal\n"
    )
