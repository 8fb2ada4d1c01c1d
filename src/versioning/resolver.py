"""Collapse a capability's per-profile versions into one manifest value."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Union

from constants import Constants

from .errors import InputContractViolation
from .models import ResolutionMode, VersionDescriptor


def _resolve_direct(descriptors: Sequence[VersionDescriptor]) -> str:
    """Pin to the version required by the newest profile."""
    return descriptors[-1].version


def _resolve_development(descriptors: Sequence[VersionDescriptor]) -> str:
    """Pin to the version required by the oldest profile."""
    return descriptors[0].version


def _resolve_peer(descriptors: Sequence[VersionDescriptor]) -> str:
    """Build a range accepting the version of every profile."""
    versions: List[str] = []
    for desc in descriptors:
        if desc.version not in versions:
            versions.append(desc.version)
    return Constants.PEER_RANGE_SEPARATOR.join(versions)


_RESOLVERS: Dict[ResolutionMode, Callable[[Sequence[VersionDescriptor]], str]] = {
    ResolutionMode.DIRECT: _resolve_direct,
    ResolutionMode.DEVELOPMENT: _resolve_development,
    ResolutionMode.PEER: _resolve_peer,
}


def as_mode(mode: Union[ResolutionMode, str]) -> ResolutionMode:
    """Coerce a mode name such as "peer" into a ResolutionMode."""
    if isinstance(mode, ResolutionMode):
        return mode
    return ResolutionMode(mode)


def resolve(descriptors: Sequence[VersionDescriptor], mode: Union[ResolutionMode, str]) -> str:
    """Return the version expression for a capability under a resolution mode.

    Args:
        descriptors: Non-empty descriptors, ordered from oldest to newest profile.
        mode: Resolution mode or its value.

    Returns:
        A bare version, or for peer mode an "A || B" range when versions differ.

    Raises:
        InputContractViolation: descriptors is empty.
    """
    if not descriptors:
        raise InputContractViolation("Cannot resolve a version from an empty descriptor list")
    return _RESOLVERS[as_mode(mode)](descriptors)
