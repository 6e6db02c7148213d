"""Names of ZFS pool properties, based on the zpoolprops(7) manual page."""

# Read-only
ALLOCATED = "allocated"
CAPACITY = "capacity"
EXPAND_SIZE = "expandsize"
FRAGMENTATION = "fragmentation"
FREE = "free"
FREEING = "freeing"
LEAKED = "leaked"
HEALTH = "health"
GUID = "guid"
LOAD_GUID = "load_guid"
SIZE = "size"

# Settable at creation and import time
ALT_ROOT = "altroot"

# Settable at import time only
READ_ONLY = "readonly"

# Settable at creation and import time, and later with zpool set
ASHIFT = "ashift"
AUTO_EXPAND = "autoexpand"        # on|off
AUTO_REPLACE = "autoreplace"      # on|off
AUTO_TRIM = "autotrim"            # on|off
BOOTFS = "bootfs"                 # (unset)|pool[/dataset]
CACHEFILE = "cachefile"           # path|none
COMMENT = "comment"
COMPATIBILITY = "compatibility"   # off|legacy|file[,file]...
DEDUP_DITTO = "dedupditto"
DELEGATION = "delegation"         # on|off
FAIL_MODE = "failmode"            # wait|continue|panic
LIST_SNAPSHOTS = "listsnapshots"  # on|off
MULTI_HOST = "multihost"          # on|off
VERSION = "version"


def feature(feature_name: str) -> str:
    """Return the ``feature@<name>`` property, e.g. ``feature@async_destroy``."""
    return f"feature@{feature_name}"
