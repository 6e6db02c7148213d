"""zfskit - typed access to the zfs and zpool administrative commands."""
from zfskit.core.errors import (
    CommandError,
    InvalidCreateOptionsError,
    InvalidNameError,
    InvalidPropertyError,
    ZFSError,
    ZFSKitError,
    ZpoolError,
)
from zfskit.core.properties import Properties, Property, new_properties, property_map_flags
from zfskit.core.tabular import parse_tabular
from zfskit.core.zfs_manager import ZFSManager, join
from zfskit.models import (
    CreateDatasetOptions,
    CreatePoolOptions,
    Dataset,
    DatasetType,
    DestroyFlag,
    ImportPoolOptions,
    Pool,
    PoolHealth,
    join_types,
)

__version__ = "0.1.0"

__all__ = [
    'CommandError',
    'CreateDatasetOptions',
    'CreatePoolOptions',
    'Dataset',
    'DatasetType',
    'DestroyFlag',
    'ImportPoolOptions',
    'InvalidCreateOptionsError',
    'InvalidNameError',
    'InvalidPropertyError',
    'Pool',
    'PoolHealth',
    'Properties',
    'Property',
    'ZFSError',
    'ZFSKitError',
    'ZFSManager',
    'ZpoolError',
    'join',
    'join_types',
    'new_properties',
    'parse_tabular',
    'property_map_flags',
]
