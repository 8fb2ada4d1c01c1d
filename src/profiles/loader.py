"""Load user supplied profiles and merge them with the built-in ones.

File format (YAML or JSON, chosen by extension). Host versions must be quoted
strings in YAML::

    "0.64":
      my-capability:
        name: my-package
        version: ^1.0.0
        devOnly: false      # optional
        minRuntime: "12"    # optional
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Sequence

import yaml

from versioning.applicability import coerce_version
from versioning.errors import ProfileLoadError
from versioning.models import Profile, VersionDescriptor

logger = logging.getLogger(__name__)


def _read_data(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.lower().endswith(".json"):
                return json.load(fh)
            return yaml.safe_load(fh)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ProfileLoadError(f"Cannot parse custom profiles '{path}': {e}") from e


def _parse_descriptor(capability: str, entry: Any, source: str) -> VersionDescriptor:
    if isinstance(entry, str):
        return VersionDescriptor(version=entry)
    if not isinstance(entry, Mapping) or not entry.get("version"):
        raise ProfileLoadError(f"{source}: capability '{capability}' must define a version")
    min_runtime = entry.get("minRuntime")
    return VersionDescriptor(
        version=str(entry["version"]),
        name=entry.get("name"),
        dev_only=bool(entry.get("devOnly", False)),
        min_runtime=str(min_runtime) if min_runtime is not None else None,
    )


def parse_profiles(data: Any, source: str = "<data>") -> Dict[str, Dict[str, VersionDescriptor]]:
    """Convert raw profile data into host version -> capability -> descriptor."""
    if not isinstance(data, Mapping):
        raise ProfileLoadError(f"{source}: expected a mapping of host versions to capabilities")
    parsed: Dict[str, Dict[str, VersionDescriptor]] = {}
    for host_version, capabilities in data.items():
        # unquoted YAML keys such as 0.70 load as floats and lose digits
        if not isinstance(host_version, str):
            raise ProfileLoadError(f"{source}: host version {host_version!r} must be a quoted string")
        if not isinstance(capabilities, Mapping):
            raise ProfileLoadError(f"{source}: profile '{host_version}' must map capabilities to versions")
        parsed[str(host_version)] = {
            str(cap): _parse_descriptor(str(cap), entry, source) for cap, entry in capabilities.items()
        }
    return parsed


def merge_profiles(base: Sequence[Profile], custom: Mapping[str, Mapping[str, VersionDescriptor]]) -> List[Profile]:
    """Overlay custom capabilities onto base profiles.

    Host versions unknown to base become new profiles. The result is ordered
    from oldest to newest host version.
    """
    merged: Dict[Any, Profile] = {coerce_version(p.version): p for p in base}
    for host_version, packages in custom.items():
        key = coerce_version(host_version)
        existing = merged.get(key)
        if existing is None:
            merged[key] = Profile(version=host_version, packages=packages)
        else:
            merged[key] = Profile(
                version=existing.version,
                packages={**existing.packages, **packages},
                min_runtime=existing.min_runtime,
            )
        logger.debug("Custom profile %s: %d capabilities", host_version, len(packages))
    return [merged[k] for k in sorted(merged)]


def load_custom_profiles(path: str, base: Sequence[Profile]) -> List[Profile]:
    """Read custom profiles from path and merge them with base.

    Raises:
        ProfileLoadError: The file is malformed.
        OSError: The file cannot be read.
    """
    path = os.path.expanduser(path)
    custom = parse_profiles(_read_data(path), source=path)
    logger.info("Loaded custom profiles from %s", path)
    return merge_profiles(base, custom)
