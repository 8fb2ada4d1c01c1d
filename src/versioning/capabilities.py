"""Infer capabilities from the packages a manifest already depends on."""

from __future__ import annotations

import logging
from typing import List, Mapping, Sequence, Set

from constants import Constants

from .models import Profile

logger = logging.getLogger(__name__)


def capabilities_for(manifest: Mapping, profiles: Sequence[Profile]) -> List[str]:
    """Return every capability whose package appears in one of the manifest's buckets.

    Args:
        manifest: package.json contents.
        profiles: Profiles used to map package names back to capabilities.

    Returns:
        Sorted capability names.
    """
    declared: Set[str] = set()
    for bucket in Constants.BUCKETS:
        declared.update(manifest.get(bucket) or {})

    found: Set[str] = set()
    for profile in profiles:
        for capability, desc in profile.items():
            if desc.package_name(capability) in declared:
                found.add(capability)

    logger.debug("Inferred capabilities: %s", ", ".join(sorted(found)) or "(none)")
    return sorted(found)
