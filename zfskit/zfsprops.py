"""Names of native ZFS dataset properties.

Based on the zfsprops(7) manual page. These are plain strings offered for
convenience; zfskit treats every property name as an opaque key, so user
properties (``module:property``) and names missing here work the same way.

User property names must contain a colon. The convention is
``module:property`` with a reversed DNS name as module, e.g.
``com.example:owner``; see ``user()``.
"""
from typing import Callable

# Read-only statistics. These can be neither set nor inherited.
AVAILABLE = "available"
COMPRESS_RATIO = "compressratio"
CREATE_TXG = "createtxg"
CREATION = "creation"
CLONES = "clones"
DEFER_DESTROY = "defer_destroy"
ENCRYPTION_ROOT = "encryptionroot"
FILESYSTEM_COUNT = "filesystem_count"
KEY_STATUS = "keystatus"
GUID = "guid"
LOGICAL_REFERENCED = "logicalreferenced"
LOGICAL_USED = "logicalused"
MOUNTED = "mounted"
OBJSET_ID = "objsetid"
ORIGIN = "origin"
RECEIVE_RESUME_TOKEN = "receive_resume_token"
REDACT_SNAPS = "redact_snaps"
REFERENCED = "referenced"
REF_COMPRESS_RATIO = "refcompressratio"
SNAPSHOT_COUNT = "snapshot_count"
TYPE = "type"
USED = "used"
USED_BY_CHILDREN = "usedbychildren"
USED_BY_DATASET = "usedbydataset"
USED_BY_REF_RESERVATION = "usedbyrefreservation"
USED_BY_SNAPSHOTS = "usedbysnapshots"
VOL_BLOCK_SIZE = "volblocksize"
WRITTEN = "written"

# Editable properties controlling dataset behavior.
ACL_INHERIT = "aclinherit"      # discard|noallow|restricted|passthrough|passthrough-x
ACL_MODE = "aclmode"            # discard|groupmask|passthrough|restricted
ACL_TYPE = "acltype"            # off|nfsv4|posix
ATIME = "atime"                 # on|off
CAN_MOUNT = "canmount"          # on|off|noauto
CHECKSUM = "checksum"           # on|off|fletcher2|fletcher4|sha256|noparity|sha512|skein|edonr
COMPRESSION = "compression"     # on|off|gzip|gzip-N|lz4|lzjb|zle|zstd|zstd-N|zstd-fast|zstd-fast-N
CONTEXT = "context"
FS_CONTEXT = "fscontext"
DEF_CONTEXT = "defcontext"
ROOT_CONTEXT = "rootcontext"
COPIES = "copies"               # 1|2|3
DEVICES = "devices"             # on|off
DEDUP = "dedup"
DNODE_SIZE = "dnodesize"        # legacy|auto|1k|2k|4k|8k|16k
ENCRYPTION = "encryption"
KEY_FORMAT = "keyformat"        # raw|hex|passphrase
KEY_LOCATION = "keylocation"    # prompt|file:///path|https://address|http://address
PBKDF2_ITERATIONS = "pbkdf2iters"
EXEC = "exec"                   # on|off
FILESYSTEM_LIMIT = "filesystem_limit"
SPECIAL_SMALL_BLOCKS = "special_small_blocks"
MOUNTPOINT = "mountpoint"       # path|none|legacy
NBMAND = "nbmand"
OVERLAY = "overlay"
PRIMARY_CACHE = "primarycache"  # all|none|metadata
QUOTA = "quota"                 # size|none
SNAPSHOT_LIMIT = "snapshot_limit"
READ_ONLY = "readonly"          # on|off
RECORD_SIZE = "recordsize"
REDUNDANT_METADATA = "redundant_metadata"
REF_QUOTA = "refquota"
REF_RESERVATION = "refreservation"  # size|none|auto
REL_ATIME = "relatime"
RESERVATION = "reservation"
SECONDARY_CACHE = "secondarycache"
SET_UID = "setuid"
SHARE_SMB = "sharesmb"
SHARE_NFS = "sharenfs"
LOG_BIAS = "logbias"            # latency|throughput
SNAP_DEV = "snapdev"            # hidden|visible
SNAP_DIR = "snapdir"            # hidden|visible
SYNC = "sync"                   # standard|always|disabled
VERSION = "version"
VOL_SIZE = "volsize"
VOL_MODE = "volmode"            # default|full|geom|dev|none
VSCAN = "vscan"
XATTR = "xattr"                 # on|off|sa
JAILED = "jailed"
ZONED = "zoned"

# Fixed at creation time; inherited from the parent when not given.
CASE_SENSITIVITY = "casesensitivity"  # sensitive|insensitive|mixed
NORMALIZATION = "normalization"       # none|formC|formD|formKC|formKD
UTF8_ONLY = "utf8only"


def user_quota(user: str) -> str:
    return f"userquota@{user}"


def user_obj_quota(user: str) -> str:
    return f"userobjquota@{user}"


def group_quota(group: str) -> str:
    return f"groupquota@{group}"


def group_obj_quota(group: str) -> str:
    return f"groupobjquota@{group}"


def project_quota(project: str) -> str:
    return f"projectquota@{project}"


def project_obj_quota(project: str) -> str:
    return f"projectobjquota@{project}"


def user(module: str) -> Callable[[str], str]:
    """Return a builder for ``module:property`` user property names.

    >>> owner = user("com.example")("owner")
    >>> owner
    'com.example:owner'
    """
    def build(name: str) -> str:
        return f"{module}:{name}"

    return build
