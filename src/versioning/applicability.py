"""Narrow the profile list to the profiles a package currently targets."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import semantic_version

from .errors import EmptyApplicabilityError, InvalidVersionRangeError
from .models import Profile, VersionDescriptor

logger = logging.getLogger(__name__)


def coerce_version(value: str) -> semantic_version.Version:
    """Parse a possibly partial version ("0.64", "v12") into a full semver Version."""
    text = str(value).strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    try:
        return semantic_version.Version.coerce(text)
    except ValueError as e:
        raise InvalidVersionRangeError(f"Invalid version '{value}': {e}") from e


def parse_range(version_range: str) -> semantic_version.NpmSpec:
    """Parse an npm-style range such as "^0.63.0 || ^0.64.0"."""
    try:
        return semantic_version.NpmSpec(version_range)
    except ValueError as e:
        raise InvalidVersionRangeError(f"Invalid version range '{version_range}': {e}") from e


def runtime_satisfies(requirement: Optional[str], runtime_cutoff: Optional[str]) -> bool:
    """Return True if a runtime at runtime_cutoff meets the minimum requirement.

    A missing requirement or a missing cutoff never excludes anything.
    """
    if not requirement or not runtime_cutoff:
        return True
    return coerce_version(runtime_cutoff) >= coerce_version(requirement)


def descriptor_applicable(descriptor: Optional[VersionDescriptor], runtime_cutoff: Optional[str] = None) -> bool:
    """Return True if descriptor exists and its package runs under runtime_cutoff."""
    if descriptor is None:
        return False
    return runtime_satisfies(descriptor.min_runtime, runtime_cutoff)


def profiles_for(version_range: Optional[str], profiles: Sequence[Profile]) -> List[Profile]:
    """Return the profiles whose host version satisfies version_range.

    Order is preserved. A missing range selects every profile.
    """
    if not version_range:
        return list(profiles)
    spec = parse_range(version_range)
    matched = [p for p in profiles if spec.match(coerce_version(p.version))]
    logger.debug("Range '%s' selects profiles: %s", version_range, [p.version for p in matched])
    return matched


def filter_by_runtime(profiles: Sequence[Profile], runtime_cutoff: Optional[str]) -> List[Profile]:
    """Drop profiles whose toolchain needs a newer runtime than runtime_cutoff."""
    kept = [p for p in profiles if runtime_satisfies(p.min_runtime, runtime_cutoff)]
    dropped = [p.version for p in profiles if not runtime_satisfies(p.min_runtime, runtime_cutoff)]
    if dropped:
        logger.info("Runtime %s excludes profiles: %s", runtime_cutoff, ", ".join(dropped))
    return kept


def applicable_profiles(
    profiles: Sequence[Profile],
    dev_range: Optional[str] = None,
    runtime_cutoff: Optional[str] = None,
) -> List[Profile]:
    """Select the profiles a package is developed and tested against.

    Raises:
        EmptyApplicabilityError: No profile survives the filters.
    """
    selected = filter_by_runtime(profiles_for(dev_range, profiles), runtime_cutoff)
    if not selected:
        raise EmptyApplicabilityError(
            f"No profile matches host version '{dev_range or '*'}'"
            + (f" with runtime {runtime_cutoff}" if runtime_cutoff else "")
        )
    return selected
