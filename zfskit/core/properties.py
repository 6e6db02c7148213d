"""Property model for zfs and zpool output.

Every property value is kept exactly as the tool printed it. Typed accessors
on ``Properties`` interpret that raw string on demand and report whether a
usable value was present, so one value can be read through several accessors
without being converted at decode time.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from zfskit.core import codecs
from zfskit.core.errors import InvalidPropertyError

ALL_PROPERTIES = "all"

# Value printed by zfs/zpool for properties that have no meaningful value.
BLANK = "-"

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Property:
    """A single property of a pool or dataset.

    Attributes:
        entity: Name of the pool or dataset the property belongs to
        name: Property name, e.g. ``quota`` or ``com.example:owner``
        value: Raw value as printed by the tool
        source: Origin of the value, e.g. ``default``, ``local`` or ``-``
    """

    entity: str
    name: str
    value: str
    source: str


class Properties(Mapping):
    """Read-only mapping of property name to ``Property`` with typed accessors.

    Each ``get_*`` accessor returns a ``(value, present)`` tuple. ``present``
    is False when the property is missing, holds the ``-`` placeholder, or
    cannot be parsed; ``value`` is then the zero value of the accessor's type.
    """

    def __init__(self, properties: Optional[Mapping] = None):
        self._props: Dict[str, Property] = dict(properties or {})

    @classmethod
    def for_entity(cls, entity: str, properties: Optional[Mapping] = None) -> "Properties":
        """Return only the properties owned by ``entity``, keyed by name.

        Properties of other entities are dropped even when the names share
        a prefix, e.g. ``tank/a/sub`` entries are excluded for ``tank/a``.
        """
        return cls({
            prop.name: prop
            for prop in (properties or {}).values()
            if prop.entity == entity
        })

    def __getitem__(self, key: str) -> Property:
        return self._props[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._props!r})"

    def _raw(self, name: str, blank_empty: bool = False) -> Optional[str]:
        prop = self._props.get(name)
        if prop is None or prop.value == BLANK:
            return None
        if blank_empty and prop.value == "":
            return None
        return prop.value

    def get_string(self, name: str) -> Tuple[str, bool]:
        """Return the raw value. An empty string is a present value."""
        value = self._raw(name)
        if value is None:
            return "", False
        return value, True

    def get_bool(self, name: str) -> Tuple[bool, bool]:
        """Return True for "on"/"enabled"; every other present value is False."""
        value = self._raw(name, blank_empty=True)
        if value is None:
            return False, False
        return codecs.parse_bool(value), True

    def get_bytes(self, name: str) -> Tuple[int, bool]:
        """Return a size in bytes; single letter units are powers of 1024."""
        value = self._raw(name)
        if value is None:
            return 0, False
        try:
            return codecs.parse_size(value), True
        except ValueError:
            return 0, False

    def get_percent(self, name: str) -> Tuple[int, bool]:
        """Return a percentage such as "9%" as an integer."""
        value = self._raw(name)
        if value is None:
            return 0, False
        try:
            return codecs.parse_percent(value), True
        except ValueError:
            return 0, False

    def get_ratio(self, name: str) -> Tuple[float, bool]:
        """Return a ratio such as "1.42x" as a float."""
        value = self._raw(name)
        if value is None:
            return 0.0, False
        try:
            return codecs.parse_ratio(value), True
        except ValueError:
            return 0.0, False

    def get_time(self, name: str) -> Tuple[datetime, bool]:
        """Return an aware UTC datetime from epoch seconds or the ctime-like layout."""
        value = self._raw(name, blank_empty=True)
        if value is None:
            return ZERO_TIME, False
        try:
            return codecs.parse_time(value), True
        except ValueError:
            return ZERO_TIME, False

    def get_uint64(self, name: str) -> Tuple[int, bool]:
        value = self._raw(name, blank_empty=True)
        if value is None:
            return 0, False
        try:
            return codecs.parse_uint64(value), True
        except ValueError:
            return 0, False


def new_properties(records: Iterable[Sequence[str]]) -> Dict[str, Properties]:
    """Group ``name, property, value, source`` records by entity name.

    Records that do not have exactly four fields, or have an empty entity
    name, are skipped; this includes the empty record produced by a trailing
    newline. A repeated property of the same entity replaces the earlier one.

    Args:
        records: Records as returned by ``parse_tabular``

    Returns:
        Mapping of entity name to that entity's ``Properties``
    """
    grouped: Dict[str, Dict[str, Property]] = {}
    for record in records:
        if len(record) != 4 or record[0] == "":
            continue
        entity, name, value, source = record
        grouped.setdefault(entity, {})[name] = Property(
            entity=entity, name=name, value=value, source=source,
        )

    return {entity: Properties(props) for entity, props in grouped.items()}


def validate_property_name(name: str):
    """Reject property names that must never reach a write command.

    Raises:
        InvalidPropertyError: For an empty name or ``all``
    """
    if name == "":
        raise InvalidPropertyError("empty property name")
    if name == ALL_PROPERTIES:
        raise InvalidPropertyError(f"'{ALL_PROPERTIES}' is not a valid property")


def property_map_flags(flag: str, properties: Optional[Mapping]) -> List[str]:
    """Build ``[flag, "name=value", ...]`` arguments from a property map.

    Pairs are sorted by their ``name=value`` string so the same map always
    yields the same arguments. With an empty ``flag`` only the ``name=value``
    operands are returned, as ``zpool set`` expects.

    >>> property_map_flags("-o", {"quota": "10G", "feature@async_destroy": "disabled"})
    ['-o', 'feature@async_destroy=disabled', '-o', 'quota=10G']

    Raises:
        InvalidPropertyError: If any name is empty or ``all``
    """
    pairs = []
    for name, value in (properties or {}).items():
        validate_property_name(name)
        pairs.append(f"{name}={value}")

    args: List[str] = []
    for pair in sorted(pairs):
        if flag:
            args.append(flag)
        args.append(pair)

    return args
