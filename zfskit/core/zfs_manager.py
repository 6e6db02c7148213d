"""ZFS pool and dataset management through the zfs and zpool commands."""
import posixpath
import subprocess
from typing import Dict, List, Optional, Sequence, Type, Union

from zfskit.core.codecs import parse_size
from zfskit.core.config import ZFSKitConfig, get_config
from zfskit.core.errors import (
    CommandError,
    InvalidDatasetCreateOptionsError,
    InvalidDatasetNameError,
    InvalidDatasetPropertyError,
    InvalidPoolCreateOptionsError,
    InvalidPoolNameError,
    InvalidPoolPropertyError,
    InvalidPropertyError,
    ZFSCommandError,
    ZpoolCommandError,
)
from zfskit.core.logger import get_logger
from zfskit.core.properties import (
    ALL_PROPERTIES,
    new_properties,
    property_map_flags,
    validate_property_name,
)
from zfskit.core.runner import MockRunner, Runner, SubprocessRunner, SudoRunner, clean_up_stderr
from zfskit.core.tabular import parse_tabular
from zfskit.models.dataset import DESTROY_FLAG_ARGS, Dataset, DatasetType, DestroyFlag
from zfskit.models.options import CreateDatasetOptions, CreatePoolOptions, ImportPoolOptions
from zfskit.models.pool import Pool

logger = get_logger(__name__)

GET_COLUMNS = "name,property,value,source"


def join(*parts: str) -> str:
    """Join name components with "/", e.g. ``join("tank", "media")``.

    Empty parts are ignored, the result is cleaned like a path and a leading
    "/" is removed.
    """
    parts = tuple(p for p in parts if p)
    if not parts:
        return ""
    return posixpath.normpath("/".join(parts)).lstrip("/")


def valid_dataset_name(name: str) -> bool:
    return len(name) > 0 and not name.startswith("/") and not name.endswith("/")


def valid_pool_name(name: str) -> bool:
    return len(name) > 0 and "/" not in name


def _check_property(prop: str, error_cls: Type[InvalidPropertyError]):
    try:
        validate_property_name(prop)
    except InvalidPropertyError as e:
        raise error_cls(*e.args) from e


def _same_value(prop: str, current: str, desired: str) -> bool:
    """Compare raw values, treating "10G" and "10737418240" as equal sizes.

    User properties (names containing ":") are always compared verbatim.
    """
    if current == desired:
        return True
    if ":" in prop:
        return False
    try:
        return parse_size(current) == parse_size(desired)
    except ValueError:
        return False


def _default_runner(config: ZFSKitConfig) -> Runner:
    if config.mock:
        return MockRunner()
    if config.sudo:
        return SudoRunner()
    return SubprocessRunner()


class ZFSManager:
    """Runs zfs and zpool commands and turns their output into models.

    A ``Runner`` executes every command, so a ``SudoRunner`` or a custom
    runner (for remote hosts, or tests) can be swapped in.
    """

    def __init__(self, runner: Optional[Runner] = None, config: Optional[ZFSKitConfig] = None):
        self.config = config or get_config()
        self.runner = runner or _default_runner(self.config)

    @property
    def mock(self) -> bool:
        return isinstance(self.runner, MockRunner)

    def _run(
        self,
        program: str,
        args: Sequence[str],
        error_cls: Type[CommandError],
    ) -> List[List[str]]:
        command = self.runner.command(program, args)
        try:
            result = self.runner.run(program, args, timeout=self.config.command_timeout)
        except subprocess.CalledProcessError as e:
            stderr = clean_up_stderr(e.stderr)
            message = f"exit status {e.returncode}"
            if stderr:
                message = f"{message}: {stderr}"
            logger.error(f"Command failed: {' '.join(command)}: {message}")
            raise error_cls(message, command=command, returncode=e.returncode, stderr=stderr) from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"Command timed out after {e.timeout}s: {' '.join(command)}")
            raise error_cls(f"timed out after {e.timeout}s", command=command) from e
        except OSError as e:
            logger.error(f"Failed to execute {program}: {e}")
            raise error_cls(str(e), command=command) from e

        return parse_tabular(result.stdout or b"")

    def _zfs(self, *args: str) -> List[List[str]]:
        return self._run(self.config.zfs_binary, args, ZFSCommandError)

    def _zpool(self, *args: str) -> List[List[str]]:
        return self._run(self.config.zpool_binary, args, ZpoolCommandError)

    @staticmethod
    def _names(records: List[List[str]]) -> List[str]:
        return [record[0] for record in records if record and record[0] != ""]

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------

    def get_dataset_property(self, name: str, prop: str) -> str:
        """Return the raw value of one dataset property.

        Raises:
            InvalidDatasetNameError: For a malformed dataset name
            InvalidDatasetPropertyError: For an empty property or ``all``
            ZFSCommandError: If zfs fails
        """
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)
        _check_property(prop, InvalidDatasetPropertyError)

        records = self._zfs("get", "-Hp", "-o", "value", prop, name)
        return records[0][0]

    def set_dataset_property(self, name: str, prop: str, value: str):
        """Set a property on an existing dataset."""
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)
        _check_property(prop, InvalidDatasetPropertyError)

        self._zfs("set", f"{prop}={value}", name)
        logger.info(f"Set {name} property {prop}={value}")

    def inherit_dataset_property(self, name: str, prop: str, recursive: bool = False):
        """Clear a local property value so it is inherited from the parent."""
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)
        if prop == "":
            raise InvalidDatasetPropertyError("empty property name")

        args = ["inherit"]
        if recursive:
            args.append("-r")
        args.extend([prop, name])

        self._zfs(*args)

    def create_dataset(self, options: CreateDatasetOptions):
        """Create a filesystem, or a volume when ``volume_size`` is set.

        Raises:
            InvalidDatasetCreateOptionsError: If options are missing, the name
                is malformed or a property name is invalid
            ZFSCommandError: If zfs fails
        """
        if options is None:
            raise InvalidDatasetCreateOptionsError("no options given")
        if not valid_dataset_name(options.name):
            raise InvalidDatasetCreateOptionsError(f"invalid name: {options.name!r}")

        args = ["create"]
        if options.create_parents:
            args.append("-p")
        if not options.volume_size:
            if options.unmounted:
                args.append("-u")
        else:
            if options.block_size:
                args.extend(["-b", options.block_size])
            if options.sparse:
                args.append("-s")

        try:
            args.extend(property_map_flags("-o", options.properties))
        except InvalidPropertyError as e:
            raise InvalidDatasetPropertyError(*e.args) from e

        if options.volume_size:
            args.extend(["-V", options.volume_size])
        args.append(options.name)

        logger.info(f"Creating dataset: {options.name}")
        self._zfs(*args)

    def get_dataset(self, name: str, *properties: str) -> Dataset:
        """Return a Dataset with the given properties, or all of them."""
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)

        records = self._zfs(
            "get", "-Hp", "-o", GET_COLUMNS,
            ",".join(properties or (ALL_PROPERTIES,)), name,
        )
        props = new_properties(records)

        return Dataset(name, props.get(name))

    def list_datasets(
        self,
        filter: str = "",
        depth: int = 0,
        dataset_type: Union[DatasetType, str] = DatasetType.ALL,
        properties: Sequence[str] = (),
    ) -> List[Dataset]:
        """List datasets below ``filter`` (or everywhere) with their properties.

        Args:
            filter: Dataset to start from; empty lists all pools
            depth: Maximum depth to recurse; 0 recurses fully
            dataset_type: Type filter, see ``join_types`` for several types
            properties: Properties to fetch; empty fetches all
        """
        args = ["get", "-Hp", "-o", GET_COLUMNS]
        if depth > 0:
            args.extend(["-d", str(depth)])
        else:
            args.append("-r")
        args.extend(["-t", str(dataset_type)])
        args.append(",".join(properties) if properties else ALL_PROPERTIES)
        if filter:
            args.append(filter)

        records = self._zfs(*args)
        return [Dataset(name, props) for name, props in new_properties(records).items()]

    def list_dataset_names(
        self,
        filter: str = "",
        depth: int = 0,
        dataset_type: Union[DatasetType, str] = DatasetType.ALL,
    ) -> List[str]:
        """Return the names of datasets matching the arguments."""
        args = ["list", "-H", "-o", "name"]
        if depth > 0:
            args.extend(["-d", str(depth)])
        else:
            args.append("-r")
        args.extend(["-t", str(dataset_type)])
        if filter:
            args.append(filter)

        return self._names(self._zfs(*args))

    def dataset_exists(self, name: str) -> bool:
        """Check if a dataset exists.

        Args:
            name: Full dataset name (e.g., 'tank/movies')

        Returns:
            True if zfs lists the dataset
        """
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)

        try:
            self._zfs("list", "-H", "-o", "name", name)
            return True
        except ZFSCommandError as e:
            if e.returncode is None:
                raise
            return False

    def sync_dataset_properties(self, name: str, desired: Dict[str, str]) -> List[str]:
        """Set only the properties whose current value differs from ``desired``.

        Values are compared as raw strings, except that two sizes naming the
        same byte count (``10G`` and ``10737418240``) count as equal.

        Returns:
            Names of the properties that were changed
        """
        for prop in desired:
            _check_property(prop, InvalidDatasetPropertyError)
        if not desired:
            return []

        current = self.get_dataset(name, *desired).properties
        changed = []
        for prop, value in sorted(desired.items()):
            current_value, ok = current.get_string(prop)
            if ok and _same_value(prop, current_value, value):
                logger.debug(f"Property {prop} already set to {value}")
                continue

            logger.info(f"Property mismatch for {name}: {prop} is '{current_value}', want '{value}'")
            self.set_dataset_property(name, prop, value)
            changed.append(prop)

        if not changed:
            logger.info(f"All properties for {name} already match desired state")
        return changed

    def destroy_dataset(self, name: str, *flags: DestroyFlag):
        """Destroy a dataset.

        Flags may be given separately or combined with ``|``; repeats have no
        extra effect.
        """
        if not valid_dataset_name(name):
            raise InvalidDatasetNameError(name)

        combined = DestroyFlag.NONE
        for flag in flags:
            combined |= flag

        args = ["destroy"]
        args.extend(arg for flag, arg in DESTROY_FLAG_ARGS if flag in combined)
        args.append(name)

        logger.info(f"Destroying dataset: {name}")
        self._zfs(*args)

    # ------------------------------------------------------------------
    # Pools
    # ------------------------------------------------------------------

    def get_pool_property(self, name: str, prop: str) -> str:
        """Return the raw value of one pool property."""
        if not valid_pool_name(name):
            raise InvalidPoolNameError(name)
        _check_property(prop, InvalidPoolPropertyError)

        records = self._zpool("get", "-Hp", "-o", "value", prop, name)
        return records[0][0]

    def set_pool_property(self, name: str, prop: str, value: str):
        self.set_pool_properties(name, {prop: value})

    def set_pool_properties(self, name: str, properties: Dict[str, str]):
        """Set several pool properties with a single ``zpool set``."""
        if not valid_pool_name(name):
            raise InvalidPoolNameError(name)

        try:
            prop_args = property_map_flags("", properties)
        except InvalidPropertyError as e:
            raise InvalidPoolPropertyError(*e.args) from e

        self._zpool("set", *prop_args, name)
        logger.info(f"Set {name} properties {' '.join(prop_args)}")

    def create_pool(self, options: CreatePoolOptions):
        """Create a new pool.

        Raises:
            InvalidPoolCreateOptionsError: If options are missing, the name is
                malformed or no vdevs are given
            InvalidPoolPropertyError: If a property name is invalid
            ZpoolCommandError: If zpool fails
        """
        if options is None:
            raise InvalidPoolCreateOptionsError("no options given")
        if not valid_pool_name(options.name):
            raise InvalidPoolCreateOptionsError(f"invalid name: {options.name!r}")
        if not options.vdevs:
            raise InvalidPoolCreateOptionsError("no vdevs specified")

        args = ["create"]
        if options.mountpoint:
            args.extend(["-m", options.mountpoint])
        if options.root:
            args.extend(["-R", options.root])
        if options.force:
            args.append("-f")
        if options.disable_features:
            args.append("-d")

        try:
            args.extend(property_map_flags("-o", options.properties))
            args.extend(property_map_flags("-O", options.filesystem_properties))
        except InvalidPropertyError as e:
            raise InvalidPoolPropertyError(*e.args) from e

        args.extend(options.args)
        args.append(options.name)
        args.extend(options.vdevs)

        logger.info(f"Creating pool: {options.name}")
        self._zpool(*args)

    def get_pool(self, name: str, *properties: str) -> Pool:
        """Return a Pool with the given properties, or all of them."""
        if not valid_pool_name(name):
            raise InvalidPoolNameError(name)

        records = self._zpool(
            "get", "-Hp", "-o", GET_COLUMNS,
            ",".join(properties or (ALL_PROPERTIES,)), name,
        )
        props = new_properties(records)

        return Pool(name, props.get(name))

    def list_pools(self, *properties: str) -> List[Pool]:
        """Return every imported pool with the given properties, or all of them."""
        records = self._zpool(
            "get", "-Hp", "-o", GET_COLUMNS,
            ",".join(properties or (ALL_PROPERTIES,)),
        )
        return [Pool(name, props) for name, props in new_properties(records).items()]

    def list_pool_names(self) -> List[str]:
        return self._names(self._zpool("list", "-Hp", "-o", "name"))

    def destroy_pool(self, name: str, force: bool = False):
        if not valid_pool_name(name):
            raise InvalidPoolNameError(name)

        args = ["destroy"]
        if force:
            args.append("-f")
        args.append(name)

        logger.info(f"Destroying pool: {name}")
        self._zpool(*args)

    def import_pool(self, options: Optional[ImportPoolOptions] = None):
        """Import a pool; without a name zpool only lists importable pools."""
        options = options or ImportPoolOptions()
        if options.name and not valid_pool_name(options.name):
            raise InvalidPoolNameError(options.name)

        args = ["import"]
        if options.force:
            args.append("-f")

        try:
            args.extend(property_map_flags("-o", options.properties))
        except InvalidPropertyError as e:
            raise InvalidPoolPropertyError(*e.args) from e

        for dir_or_device in options.dir_or_device:
            args.extend(["-d", dir_or_device])
        args.extend(options.args)
        if options.name:
            args.append(options.name)

        self._zpool(*args)

    def export_pool(self, name: str, force: bool = False):
        if not valid_pool_name(name):
            raise InvalidPoolNameError(name)

        args = ["export"]
        if force:
            args.append("-f")
        args.append(name)

        self._zpool(*args)
