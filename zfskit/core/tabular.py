"""Tab-delimited output decoding for zfs and zpool."""
from typing import List, Union


def parse_tabular(data: Union[bytes, str]) -> List[List[str]]:
    """Split tab-delimited command output into records of fields.

    zfs and zpool print one line per record with TAB separated fields when
    run with ``-H``. For example ``zpool get -H size,capacity,altroot``::

        zfs-local-test	size	336M	-
        zfs-local-test	capacity	9%	-
        zfs-local-test	altroot	-	default

    becomes::

        [
            ["zfs-local-test", "size", "336M", "-"],
            ["zfs-local-test", "capacity", "9%", "-"],
            ["zfs-local-test", "altroot", "-", "default"],
            [""],
        ]

    Every line yields a record, so output ending in a newline produces a
    trailing ``[""]`` record. Lines are never validated here; records with
    an unexpected field count are left for the consumer to reject.

    Args:
        data: Raw stdout of the command

    Returns:
        One list of field strings per line
    """
    if isinstance(data, bytes):
        text = data.decode("utf-8", errors="surrogateescape")
    else:
        text = data

    return [line.split("\t") for line in text.split("\n")]
