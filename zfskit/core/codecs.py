"""Parsers for the value encodings used in zfs and zpool property output.

All parsers raise ``ValueError`` when a value cannot be interpreted. They
never log and hold no state.
"""
import re
from datetime import datetime, timezone

import humanfriendly

UINT64_MAX = 2 ** 64 - 1

# zfs prints sizes like "42K" or "1.50G" where single letter units are
# binary multiples. humanfriendly treats "K" as 1000, so an explicit "iB" is
# appended before delegating.
_IEC_SIZE_RE = re.compile(r'([0-9]+)\s*([a-zA-Z])')
_SIZE_RE = re.compile(r'[0-9]+(\.[0-9]+)?\s*([KMGTPEZY](i?B)?|B)?', re.IGNORECASE)
_UNSIGNED_RE = re.compile(r'[0-9]+')
_SIGNED_RE = re.compile(r'[+-]?[0-9]+')

# Layout of "Mon May  2 10:36 2022". Names are always English.
_TIME_RE = re.compile(r'([A-Za-z]{3}) ([A-Za-z]{3}) +([0-9]{1,2}) ([0-9]{1,2}):([0-9]{2}) ([0-9]{4})')
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

TRUE_VALUES = frozenset({"on", "enabled"})


def parse_uint64(value: str) -> int:
    """Parse a base-10 unsigned 64-bit integer.

    Only ASCII digits are accepted: no sign, whitespace or separators.
    """
    if not _UNSIGNED_RE.fullmatch(value):
        raise ValueError(f"invalid unsigned integer: {value!r}")

    result = int(value)
    if result > UINT64_MAX:
        raise ValueError(f"value out of range: {value!r}")
    return result


def parse_size(value: str) -> int:
    """Parse a human readable size into a number of bytes.

    >>> parse_size("42K")
    43008
    >>> parse_size("239")
    239
    """
    size = value.strip()
    if not _SIZE_RE.fullmatch(size):
        raise ValueError(f"invalid size: {value!r}")
    if _IEC_SIZE_RE.fullmatch(size):
        size += "iB"

    try:
        result = humanfriendly.parse_size(size)
    except humanfriendly.InvalidSize as e:
        raise ValueError(str(e)) from e

    if result < 0 or result > UINT64_MAX:
        raise ValueError(f"size out of range: {value!r}")
    return result


def parse_percent(value: str) -> int:
    """Parse percentages like ``"9%"`` into an integer."""
    if value.endswith("%"):
        value = value[:-1]
    return parse_uint64(value)


def parse_ratio(value: str) -> float:
    """Parse ratios like ``"1.42x"`` into a float."""
    if value.endswith("x"):
        value = value[:-1]
    if not value or value != value.strip() or "_" in value:
        raise ValueError(f"invalid ratio: {value!r}")
    return float(value)


def parse_bool(value: str) -> bool:
    """Return True for "on" or "enabled" in any letter case, False otherwise."""
    return value.lower() in TRUE_VALUES


def parse_time(value: str) -> datetime:
    """Parse a zfs timestamp into an aware UTC datetime.

    Unix epoch seconds (as printed with ``-p``) are tried first, then the
    human readable layout, e.g. ``"Mon May  2 10:36 2022"``. Day and month
    names are matched in English regardless of the process locale.
    """
    value = value.strip()

    if _SIGNED_RE.fullmatch(value):
        try:
            return datetime.fromtimestamp(int(value), tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"timestamp out of range: {value!r}") from e

    match = _TIME_RE.fullmatch(value)
    if not match or match.group(1) not in _DAYS or match.group(2) not in _MONTHS:
        raise ValueError(f"invalid time: {value!r}")

    _, month, day, hour, minute, year = match.groups()
    return datetime(
        int(year), _MONTHS.index(month) + 1, int(day), int(hour), int(minute),
        tzinfo=timezone.utc,
    )
