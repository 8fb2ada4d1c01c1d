"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONFIG_ERROR = 2
    MANIFEST_OUTDATED = 3


class Buckets(Enum):
    """Dependency buckets of a package manifest.

    Args:
        Enum (string): Manifest key of each bucket.
    """

    DIRECT = "dependencies"
    DEV = "devDependencies"
    PEER = "peerDependencies"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PACKAGE_JSON_FILE = "package.json"
    MANIFEST_CONFIG_KEY = "depcheck"
    BUCKETS = [Buckets.DIRECT.value, Buckets.DEV.value, Buckets.PEER.value]
    KIT_TYPES = ["app", "library"]
    DEFAULT_KIT_TYPE = "library"
    PEER_RANGE_SEPARATOR = " || "
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    # Configuration file discovery
    ENV_CONFIG_PATH = "DEPCHECK_CONFIG"
    CONFIG_FILES = ["depcheck.yaml", "depcheck.yml", "depcheck.json"]
    JSON_INDENT = 2
