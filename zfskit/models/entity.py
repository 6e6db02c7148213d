"""Base class for named pools and datasets."""
from typing import Mapping, Optional

from zfskit.core.properties import Properties, Property


class Entity:
    """A named pool or dataset holding a snapshot of its own properties.

    Construction keeps only the properties whose owner matches ``name``, so
    a multi-entity response can be passed in without leaking properties of
    other entities into this one.
    """

    def __init__(self, name: str, properties: Optional[Mapping[str, Property]] = None):
        self.name = name
        self.properties = Properties.for_entity(name, properties)

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.name == other.name and self.properties == other.properties

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, properties={len(self.properties)})"
