"""ZFS pool models."""
from enum import Enum
from typing import Tuple

from zfskit import zpoolprops
from zfskit.models.entity import Entity


class PoolHealth(str, Enum):
    """Values of the pool "health" property."""
    DEGRADED = "DEGRADED"
    FAULTED = "FAULTED"
    OFFLINE = "OFFLINE"
    ONLINE = "ONLINE"
    REMOVED = "REMOVED"
    UNAVAILABLE = "UNAVAIL"

    def __str__(self) -> str:
        return self.value


class Pool(Entity):
    """Represents an existing ZFS pool.

    Getters return ``(value, present)`` tuples.
    """

    def read_only(self) -> Tuple[bool, bool]:
        return self.properties.get_bool(zpoolprops.READ_ONLY)

    def allocated(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zpoolprops.ALLOCATED)

    def free(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zpoolprops.FREE)

    def freeing(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zpoolprops.FREEING)

    def leaked(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zpoolprops.LEAKED)

    def size(self) -> Tuple[int, bool]:
        return self.properties.get_bytes(zpoolprops.SIZE)

    def capacity(self) -> Tuple[int, bool]:
        """Return used capacity in percent."""
        return self.properties.get_percent(zpoolprops.CAPACITY)

    def fragmentation(self) -> Tuple[int, bool]:
        """Return free space fragmentation in percent."""
        return self.properties.get_percent(zpoolprops.FRAGMENTATION)

    def health(self) -> Tuple[str, bool]:
        return self.properties.get_string(zpoolprops.HEALTH)

    @property
    def is_healthy(self) -> bool:
        """True if the pool reports ONLINE."""
        health, ok = self.health()
        return ok and health == PoolHealth.ONLINE
