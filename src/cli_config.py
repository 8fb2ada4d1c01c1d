"""Configuration loading for the depcheck CLI.

Settings are layered with the following precedence (highest first):

1. Explicit CLI flags (--kit-type, --host-version, ...)
2. --set KEY=VALUE overrides
3. The manifest's own "depcheck" section
4. A config file (--config, $DEPCHECK_CONFIG, or depcheck.yaml/.yml/.json in
   the working directory); its "depcheck" section is used when present
5. Built-in defaults
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterable, List, Mapping, Optional

import yaml

from constants import Constants
from versioning.errors import ResolutionError
from versioning.models import PackageKind

logger = logging.getLogger(__name__)


class ConfigError(ResolutionError):
    """Raised when a configuration value or file is invalid."""


# Config/manifest key -> KitConfig attribute
_KEYS = {
    "kitType": "kit_type",
    "hostVersion": "host_version",
    "hostDevVersion": "host_dev_version",
    "capabilities": "capabilities",
    "customProfiles": "custom_profiles",
    "runtimeVersion": "runtime_version",
}


@dataclass
class KitConfig:
    """Settings describing how a package's dependencies should be managed."""
    kit_type: str = Constants.DEFAULT_KIT_TYPE
    host_version: Optional[str] = None
    host_dev_version: Optional[str] = None
    capabilities: List[str] = field(default_factory=list)
    custom_profiles: Optional[str] = None
    runtime_version: Optional[str] = None

    @property
    def kind(self) -> PackageKind:
        """Return kit_type as a PackageKind."""
        try:
            return PackageKind(self.kit_type)
        except ValueError as e:
            raise ConfigError(
                f"Invalid kitType '{self.kit_type}'; expected one of {', '.join(Constants.KIT_TYPES)}"
            ) from e

    @property
    def target_version(self) -> Optional[str]:
        """Host version range used to pick the applicable profiles."""
        return self.host_dev_version or self.host_version

    def apply(self, values: Mapping[str, Any]) -> "KitConfig":
        """Update attributes from a mapping using camelCase or snake_case keys."""
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            attr = _KEYS.get(key, key)
            if attr not in known:
                logger.warning("Ignoring unknown setting '%s'", key)
                continue
            if value is None:
                continue
            if attr == "capabilities":
                if isinstance(value, str):
                    value = [value]
                value = [str(v) for v in value]
            else:
                value = str(value)
            setattr(self, attr, value)
        return self


def find_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """Return the config file to load, if any."""
    if explicit:
        return explicit
    env_path = os.environ.get(Constants.ENV_CONFIG_PATH)
    if env_path and env_path.strip():
        return env_path.strip()
    for name in Constants.CONFIG_FILES:
        if os.path.isfile(name):
            return name
    return None


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load the depcheck section of a YAML or JSON config file.

    A missing file yields an empty config; a malformed one raises ConfigError.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}

    with open(path, "r", encoding="utf-8") as fh:
        try:
            if path.lower().endswith(".json"):
                data = json.load(fh)
            else:
                data = yaml.safe_load(fh)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot parse config file '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    section = data.get(Constants.MANIFEST_CONFIG_KEY, data)
    logger.debug("Loaded config from %s", path)
    return section if isinstance(section, dict) else {}


def _coerce_value(text):
    """Best-effort convert string to JSON/number/bool, else raw string."""
    s = str(text).strip()
    try:
        return json.loads(s)
    except ValueError:
        sl = s.lower()
        if sl == "true":
            return True
        if sl == "false":
            return False
        return s


def parse_overrides(pairs: Iterable[str]) -> Dict[str, Any]:
    """Parse KEY=VALUE pairs given with --set."""
    overrides: Dict[str, Any] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ConfigError(f"Invalid --set value '{pair}'; expected KEY=VALUE")
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise ConfigError(f"Invalid --set value '{pair}'; missing key")
        overrides[key] = _coerce_value(value)
    return overrides


def _cli_values(args) -> Dict[str, Any]:
    values = {
        "kit_type": getattr(args, "KIT_TYPE", None),
        "host_version": getattr(args, "HOST_VERSION", None),
        "host_dev_version": getattr(args, "HOST_DEV_VERSION", None),
        "custom_profiles": getattr(args, "CUSTOM_PROFILES", None),
        "runtime_version": getattr(args, "RUNTIME_VERSION", None),
    }
    capabilities = getattr(args, "CAPABILITIES", None)
    if capabilities:
        values["capabilities"] = capabilities
    return values


def resolve_kit_config(manifest: Mapping, args=None, file_config: Optional[Mapping[str, Any]] = None) -> KitConfig:
    """Build the effective KitConfig for one manifest.

    Args:
        manifest: package.json contents; its "depcheck" section is honoured.
        args: Parsed CLI arguments, or None.
        file_config: Settings loaded from a config file.
    """
    config = KitConfig()
    config.apply(file_config or {})
    section = manifest.get(Constants.MANIFEST_CONFIG_KEY)
    if isinstance(section, Mapping):
        config.apply(section)
    if args is not None:
        config.apply(parse_overrides(getattr(args, "OVERRIDES", None)))
        config.apply(_cli_values(args))
    return config
