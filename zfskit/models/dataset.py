"""ZFS dataset models."""
from datetime import datetime
from enum import Enum, Flag, auto
from typing import List, Tuple, Union

from zfskit import zfsprops
from zfskit.models.entity import Entity


class DatasetType(str, Enum):
    """Kinds of datasets accepted by ``zfs list -t``."""
    ALL = "all"
    BOOKMARK = "bookmark"
    FILESYSTEM = "filesystem"
    SNAPSHOT = "snapshot"
    VOLUME = "volume"

    def __str__(self) -> str:
        return self.value


def join_types(*types: Union[DatasetType, str]) -> str:
    """Combine dataset types into a comma separated ``-t`` filter.

    The result is only meaningful as a query filter, e.g.
    ``join_types(DatasetType.FILESYSTEM, DatasetType.VOLUME)`` gives
    ``"filesystem,volume"``.
    """
    return ",".join(str(t) for t in types)


class DestroyFlag(Flag):
    """Options for ``zfs destroy``. Combine with ``|``."""
    NONE = 0

    # -r: destroy all children, or same-named snapshots of descendants
    RECURSIVE = auto()

    # -R: destroy all dependents, including clones outside the hierarchy
    RECURSIVE_CLONES = auto()

    # -d: mark snapshots for deferred destruction if they cannot go now
    DEFER_DELETION = auto()

    # -f: force unmount of mounted file systems
    FORCE_UNMOUNT = auto()


DESTROY_FLAG_ARGS: List[Tuple[DestroyFlag, str]] = [
    (DestroyFlag.RECURSIVE, "-r"),
    (DestroyFlag.RECURSIVE_CLONES, "-R"),
    (DestroyFlag.DEFER_DELETION, "-d"),
    (DestroyFlag.FORCE_UNMOUNT, "-f"),
]


class Dataset(Entity):
    """Represents a ZFS filesystem, volume, snapshot or bookmark.

    Every getter returns ``(value, present)`` as described on
    ``zfskit.core.properties.Properties``.
    """

    def atime(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.ATIME)

    def can_mount(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.CAN_MOUNT)

    def devices(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.DEVICES)

    def exec(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.EXEC)

    def read_only(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.READ_ONLY)

    def rel_atime(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.REL_ATIME)

    def set_uid(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zfsprops.SET_UID)

    def available(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.AVAILABLE)

    def quota(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.QUOTA)

    def ref_quota(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.REF_QUOTA)

    def ref_reservation(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.REF_RESERVATION)

    def reservation(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.RESERVATION)

    def vol_size(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.VOL_SIZE)

    def logical_used(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.LOGICAL_USED)

    def logical_referenced(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.LOGICAL_REFERENCED)

    def used(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.USED)

    def used_by_children(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.USED_BY_CHILDREN)

    def used_by_dataset(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.USED_BY_DATASET)

    def used_by_snapshots(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.USED_BY_SNAPSHOTS)

    def used_by_ref_reservation(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zfsprops.USED_BY_REF_RESERVATION)

    def compress_ratio(self) -> Tuple[float, bool]:
        return self.properties.get_ratio(zfsprops.COMPRESS_RATIO)

    def ref_compress_ratio(self) -> Tuple[float, bool]:
        return self.properties.get_ratio(zfsprops.REF_COMPRESS_RATIO)

    def checksum(self) -> Tuple[str, bool]:
        return self.properties.get_string(zfsprops.CHECKSUM)

    def compression(self) -> Tuple[str, bool]:
        return self.properties.get_string(zfsprops.COMPRESSION)

    def mountpoint(self) -> Tuple[str, bool]:
        """Return the mountpoint; "none" is reported as a present empty string."""
        value, ok = self.properties.get_string(zfsprops.MOUNTPOINT)
        if value == "none":
            value = ""
        return value, ok

    def sync(self) -> Tuple[str, bool]:
        return self.properties.get_string(zfsprops.SYNC)

    def creation(self) -> Tuple[datetime, bool]:
        return self.properties.get_time(zfsprops.CREATION)

    def copies(self) -> Tuple[int, bool]:
        return self.properties.get_uint64(zfsprops.COPIES)

    def dataset_type(self) -> Tuple[Union[DatasetType, str], bool]:
        """Return the "type" property.

        Known types are returned as ``DatasetType`` members. Any other value
        is returned unchanged as a string rather than rejected.
        """
        value, ok = self.properties.get_string(zfsprops.TYPE)
        if not ok:
            return "", False
        try:
            return DatasetType(value), True
        except ValueError:
            return value, True
