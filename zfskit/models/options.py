"""Option records for zfs/zpool create and import commands."""
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class CreateDatasetOptions:
    """Options for ``zfs create``.

    Attributes:
        name: Full dataset name (required)
        properties: Properties passed with ``-o``
        create_parents: Create missing parents (``-p``)
        unmounted: Do not mount the new filesystem (``-u``); ignored for volumes
        volume_size: Create a volume of this size (``-V``) instead of a filesystem
        block_size: Volume block size (``-b``); ignored for filesystems
        sparse: Create a sparse volume (``-s``); ignored for filesystems
    """
    name: str
    properties: Dict[str, str] = field(default_factory=dict)
    create_parents: bool = False
    unmounted: bool = False
    volume_size: str = ""
    block_size: str = ""
    sparse: bool = False


@dataclass
class CreatePoolOptions:
    """Options for ``zpool create``.

    Attributes:
        name: Pool name (required)
        vdevs: Vdev specification, e.g. ``["mirror", "sda", "sdb"]`` (required)
        properties: Pool properties passed with ``-o``
        filesystem_properties: Root filesystem properties passed with ``-O``
        mountpoint: Root dataset mountpoint (``-m``)
        root: Alternate root (``-R``)
        force: Force use of in-use devices (``-f``)
        disable_features: Create with all features disabled (``-d``)
        args: Extra arguments placed before the pool name
    """
    name: str
    vdevs: List[str] = field(default_factory=list)
    properties: Dict[str, str] = field(default_factory=dict)
    filesystem_properties: Dict[str, str] = field(default_factory=dict)
    mountpoint: str = ""
    root: str = ""
    force: bool = False
    disable_features: bool = False
    args: List[str] = field(default_factory=list)


@dataclass
class ImportPoolOptions:
    """Options for ``zpool import``.

    Attributes:
        name: Pool to import; empty imports nothing by name
        properties: Pool properties passed with ``-o``
        force: Import even if the pool appears in use (``-f``)
        args: Extra arguments placed before the pool name
        dir_or_device: Directories or devices to search, each passed with ``-d``
    """
    name: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    force: bool = False
    args: List[str] = field(default_factory=list)
    dir_or_device: List[str] = field(default_factory=list)
