"""depcheck - keep package manifests aligned with host platform profiles.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import Constants, ExitCodes
from common.logging_utils import configure_logging, is_debug_enabled
from args import parse_args
from cli_config import find_config_path, load_config_file, resolve_kit_config
from profiles import default_profiles, load_custom_profiles
from versioning.applicability import applicable_profiles, profiles_for
from versioning.capabilities import capabilities_for
from versioning.errors import EmptyApplicabilityError, ResolutionError
from versioning.manifest import diff_manifest, update_package_manifest

logger = logging.getLogger(__name__)


def load_manifest(path):
    """Loads a package manifest.

    Args:
        path (str): Path to package.json.

    Returns:
        dict: Manifest contents.
    """
    try:
        with open(path, encoding="utf-8") as file:
            manifest = json.load(file)
    except FileNotFoundError:
        logging.error("Manifest not found: %s, aborting", path)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except (IOError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logging.error("Cannot read manifest %s: %s, aborting", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    if not isinstance(manifest, dict):
        logging.error("Manifest %s is not a JSON object, aborting", path)
        sys.exit(ExitCodes.FILE_ERROR.value)
    return manifest


def write_manifest(path, original, updated):
    """Writes an updated manifest back to disk.

    Buckets that were absent in the original manifest and are still empty are
    left out.

    Args:
        path (str): Path to package.json.
        original (dict): Manifest as read from disk.
        updated (dict): Manifest to write.
    """
    output = {
        key: value
        for key, value in updated.items()
        if not (key in Constants.BUCKETS and not value and key not in original)
    }
    try:
        with open(path, "w", encoding="utf-8") as file:
            json.dump(output, file, indent=Constants.JSON_INDENT, ensure_ascii=False)
            file.write("\n")
    except IOError as e:
        logging.error("Cannot write manifest %s: %s, aborting", path, e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def load_profiles(config):
    """Returns the built-in profiles, extended by the configured custom profiles."""
    profiles = default_profiles()
    if config.custom_profiles:
        try:
            profiles = load_custom_profiles(config.custom_profiles, profiles)
        except OSError as e:
            logging.error("Cannot read custom profiles %s: %s, aborting", config.custom_profiles, e)
            sys.exit(ExitCodes.FILE_ERROR.value)
    return profiles


def init_manifest(manifest, kit_type, profiles):
    """Returns a copy of manifest with inferred capabilities stored in its config section."""
    section = dict(manifest.get(Constants.MANIFEST_CONFIG_KEY) or {})
    section["kitType"] = kit_type
    section["capabilities"] = capabilities_for(manifest, profiles)
    logger.info("Inferred %d capabilities", len(section["capabilities"]))
    return {**manifest, Constants.MANIFEST_CONFIG_KEY: section}


def check_manifest(manifest, config):
    """Computes the manifest expected under config.

    Args:
        manifest (dict): Manifest contents.
        config (KitConfig): Effective settings for this manifest.

    Returns:
        tuple: (updated manifest, list of Change)
    """
    profiles = load_profiles(config)
    supported = profiles_for(config.host_version, profiles)
    if not supported:
        raise EmptyApplicabilityError(f"No profile matches host version '{config.host_version}'")
    targets = applicable_profiles(supported, config.target_version, config.runtime_version)
    if is_debug_enabled(logger):
        logger.debug(
            "Supported profiles: %s; applicable: %s",
            [p.version for p in supported],
            [p.version for p in targets],
        )
    updated = update_package_manifest(manifest, config.capabilities, supported, targets, config.kind)
    return updated, diff_manifest(manifest, updated)


def run_manifest(path, args, file_config):
    """Checks (and optionally updates) one manifest.

    Returns:
        bool: True if the manifest is up to date (or was written).
    """
    manifest = load_manifest(path)
    write = args.WRITE
    if args.INIT:
        profiles = load_profiles(resolve_kit_config(manifest, args, file_config))
        manifest = init_manifest(manifest, args.INIT, profiles)
        write = True

    config = resolve_kit_config(manifest, args, file_config)
    if not config.capabilities:
        logger.info("%s: no capabilities declared, nothing to check", path)
        if args.INIT:
            write_manifest(path, manifest, manifest)
        return True

    updated, changes = check_manifest(manifest, config)
    if write:
        write_manifest(path, manifest, updated)
        logger.info("%s: %d change(s) written", path, len(changes))
        return True

    for change in changes:
        logger.warning("%s: %s", path, change.describe())
    if changes:
        logger.warning("%s: dependencies are out of date; re-run with --write to fix", path)
        return False
    logger.info("%s: dependencies are up to date", path)
    return True


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE, args.QUIET)

    try:
        file_config = load_config_file(find_config_path(args.CONFIG))
        manifests = args.MANIFESTS or [Constants.PACKAGE_JSON_FILE]
        results = [run_manifest(path, args, file_config) for path in manifests]
    except ResolutionError as e:
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value

    if not all(results):
        return ExitCodes.MANIFEST_OUTDATED.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
