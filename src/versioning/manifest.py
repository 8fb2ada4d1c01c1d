"""Manifest updates: place resolved capability versions into dependency buckets.

Everything here is pure. Inputs are never mutated and each call returns new
dictionaries, so the same manifest can be updated repeatedly (or for several
packages of a workspace) without side effects.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from constants import Constants

from .applicability import descriptor_applicable
from .errors import DataIntegrityError, EmptyApplicabilityError
from .models import (
    CapabilityVersionList,
    Change,
    PackageKind,
    Placement,
    Profile,
    ResolutionMode,
    VersionDescriptor,
)
from .resolver import as_mode, resolve

logger = logging.getLogger(__name__)


def remove_keys(obj: Optional[Mapping[str, str]], keys: Iterable[str]) -> Optional[Dict[str, str]]:
    """Return a copy of obj without keys; None is passed through unchanged."""
    if obj is None:
        return None
    drop = set(keys)
    return {k: v for k, v in obj.items() if k not in drop}


def _sorted_dict(obj: Mapping[str, str]) -> Dict[str, str]:
    return {k: obj[k] for k in sorted(obj)}


def _eligible(
    descriptors: Optional[CapabilityVersionList],
    mode: ResolutionMode,
    runtime_cutoff: Optional[str] = None,
) -> List[VersionDescriptor]:
    """Return the descriptors that may take part in resolving under mode.

    Dev-only capabilities only ever resolve to development pins.
    """
    eligible = []
    for desc in descriptors or []:
        if not descriptor_applicable(desc, runtime_cutoff):
            continue
        if desc.dev_only and mode is not ResolutionMode.DEVELOPMENT:
            continue
        eligible.append(desc)
    return eligible


def update_dependencies(
    existing: Optional[Mapping[str, str]],
    resolved_packages: Mapping[str, CapabilityVersionList],
    mode: Union[ResolutionMode, str],
    runtime_cutoff: Optional[str] = None,
) -> Dict[str, str]:
    """Write resolved versions into a dependency bucket.

    Args:
        existing: Current bucket contents, or None if the manifest lacks it.
        resolved_packages: Package name -> descriptors, oldest profile first.
        mode: Resolution mode used for every package.
        runtime_cutoff: Optional host runtime version; descriptors needing a
            newer runtime are ignored.

    Returns:
        A new bucket with keys sorted. Packages with no usable descriptor keep
        their existing value, if any.
    """
    mode = as_mode(mode)
    result = dict(existing or {})
    for name, descriptors in resolved_packages.items():
        eligible = _eligible(descriptors, mode, runtime_cutoff)
        if not eligible:
            logger.debug("No %s version for %s; keeping %r", mode.value, name, result.get(name))
            continue
        result[name] = resolve(eligible, mode)
    return _sorted_dict(result)


def collect_packages(capabilities: Iterable[str], profiles: Sequence[Profile]) -> Dict[str, List[VersionDescriptor]]:
    """Group the descriptors of capabilities by manifest package name.

    Within one profile, the first capability (alphabetically) mapping to a
    package provides its descriptor.

    Raises:
        DataIntegrityError: A capability is not defined in any of profiles.
    """
    required = sorted(set(capabilities))
    for capability in required:
        if not any(capability in profile for profile in profiles):
            raise DataIntegrityError(capability, [p.version for p in profiles])

    packages: Dict[str, List[VersionDescriptor]] = {}
    for profile in profiles:
        seen: Set[str] = set()
        for capability in required:
            desc = profile.get(capability)
            if desc is None:
                continue
            name = desc.package_name(capability)
            if name in seen:
                continue
            seen.add(name)
            packages.setdefault(name, []).append(desc)
    return packages


def _sourced_packages(profiles: Iterable[Profile]) -> Set[str]:
    names: Set[str] = set()
    for profile in profiles:
        names.update(profile.package_names())
    return names


def _owned_packages(
    placement: Placement,
    target: Mapping[str, List[VersionDescriptor]],
    supported: Mapping[str, List[VersionDescriptor]],
    claimed: Set[str],
) -> Dict[str, List[VersionDescriptor]]:
    source = supported if placement.all_profiles else target
    owned = {}
    for name, descriptors in source.items():
        if placement.dev_only_only:
            # an app package is in dependencies or devDependencies, never both
            if name in claimed:
                continue
            descriptors = [d for d in descriptors if d.dev_only]
        if _eligible(descriptors, placement.mode):
            owned[name] = descriptors
    return owned


def update_package_manifest(
    manifest: Mapping,
    capabilities: Iterable[str],
    all_profiles: Sequence[Profile],
    applicable_profiles: Sequence[Profile],
    kind: Union[PackageKind, str],
) -> Dict:
    """Return a copy of manifest with its dependency buckets brought in line with profiles.

    Args:
        manifest: package.json contents.
        capabilities: Capabilities the package requires.
        all_profiles: Every supported profile, oldest first; peer ranges span these.
        applicable_profiles: Profiles currently targeted; pins come from these.
        kind: "app" or "library".

    Returns:
        A new manifest whose dependencies, devDependencies and peerDependencies
        are always present and sorted.

    Raises:
        EmptyApplicabilityError: No profile to resolve against.
        DataIntegrityError: A required capability is missing from the profiles.
    """
    kind = kind if isinstance(kind, PackageKind) else PackageKind(kind)
    if not applicable_profiles or not all_profiles:
        raise EmptyApplicabilityError("Cannot update dependencies without any applicable profile")

    required = set(capabilities)
    target = collect_packages(required, applicable_profiles)
    supported = collect_packages(required, all_profiles)

    required_names = set(target) | set(supported)
    stale = _sourced_packages(all_profiles) | _sourced_packages(applicable_profiles)
    stale -= required_names

    owned_by_bucket: Dict[str, Dict[str, List[VersionDescriptor]]] = {}
    claimed: Set[str] = set()
    for placement in kind.placements:
        owned_by_bucket[placement.bucket] = _owned_packages(placement, target, supported, claimed)
        claimed.update(owned_by_bucket[placement.bucket])

    updated = dict(manifest)
    for bucket in Constants.BUCKETS:
        placement = next((p for p in kind.placements if p.bucket == bucket), None)
        owned = owned_by_bucket.get(bucket, {})
        cleaned = remove_keys(manifest.get(bucket), (stale | required_names) - set(owned)) or {}
        removed = sorted(set(manifest.get(bucket) or {}) - set(cleaned))
        if removed:
            logger.debug("Removing from %s: %s", bucket, ", ".join(removed))
        if placement:
            updated[bucket] = update_dependencies(cleaned, owned, placement.mode)
        else:
            updated[bucket] = _sorted_dict(cleaned)
    return updated


def diff_manifest(current: Mapping, updated: Mapping) -> List[Change]:
    """List the bucket entries that differ between two manifests."""
    changes = []
    for bucket in Constants.BUCKETS:
        before = current.get(bucket) or {}
        after = updated.get(bucket) or {}
        for name in sorted(set(before) | set(after)):
            if before.get(name) != after.get(name):
                changes.append(Change(bucket, name, before.get(name), after.get(name)))
    return changes
