"""Argument parsing functionality for depcheck."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depcheck",
        description=(
            "depcheck - Keep package manifests aligned with host platform profiles"
        ),
        add_help=True,
    )

    parser.add_argument("-m", "--manifest",
                        dest="MANIFESTS",
                        help="Path to a package.json (can be used multiple times; default: ./package.json)",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("-w", "--write",
                        dest="WRITE",
                        help="Write changes back to the manifest instead of only reporting them.",
                        action="store_true")
    parser.add_argument("--init",
                        dest="INIT",
                        help="Infer capabilities from existing dependencies and store them in the manifest.",
                        action="store",
                        type=str,
                        choices=Constants.KIT_TYPES)

    parser.add_argument("--kit-type",
                        dest="KIT_TYPE",
                        help="Whether the package is an app or a library (default: library)",
                        action="store",
                        type=str,
                        choices=Constants.KIT_TYPES)
    parser.add_argument("--host-version",
                        dest="HOST_VERSION",
                        help="Supported host platform version range, e.g. '^0.63.0 || ^0.64.0'",
                        action="store",
                        type=str)
    parser.add_argument("--host-dev-version",
                        dest="HOST_DEV_VERSION",
                        help="Host platform version range used for development (default: --host-version)",
                        action="store",
                        type=str)
    parser.add_argument("--capability",
                        dest="CAPABILITIES",
                        help="Required capability (can be used multiple times)",
                        action="append",
                        type=str)
    parser.add_argument("--runtime-version",
                        dest="RUNTIME_VERSION",
                        help="Host runtime version available locally; profiles needing a newer one are skipped.",
                        action="store",
                        type=str)
    parser.add_argument("--custom-profiles",
                        dest="CUSTOM_PROFILES",
                        help="Path to additional profiles (YAML or JSON)",
                        action="store",
                        type=str)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=Constants.LOG_LEVELS,
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    # Config file (general)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--set",
                        dest="OVERRIDES",
                        help="Set configuration override (KEY=VALUE format, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])

    return parser.parse_args(argv)
