"""Data models for profiles, version descriptors and manifest placement."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from constants import Buckets


@dataclass(frozen=True)
class VersionDescriptor:
    """Version a capability resolves to in one profile."""
    version: str
    name: Optional[str] = None  # manifest package name; defaults to the capability name
    dev_only: bool = False
    min_runtime: Optional[str] = None

    def package_name(self, capability: str) -> str:
        """Return the manifest key this descriptor is written under."""
        return self.name or capability


@dataclass(frozen=True, eq=False)
class Profile(Mapping):
    """Compatibility snapshot for one host-platform version.

    Behaves as a read-only mapping from capability name to VersionDescriptor.
    """
    version: str
    packages: Mapping = field(default_factory=dict)
    min_runtime: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "packages", MappingProxyType(dict(self.packages)))

    def __getitem__(self, capability: str) -> VersionDescriptor:
        return self.packages[capability]

    def __iter__(self) -> Iterator[str]:
        return iter(self.packages)

    def __len__(self) -> int:
        return len(self.packages)

    def __repr__(self) -> str:
        return f"Profile(version={self.version!r}, capabilities={len(self.packages)})"

    def package_names(self) -> List[str]:
        """Return every manifest package name this profile provides."""
        return sorted({desc.package_name(cap) for cap, desc in self.packages.items()})


class ResolutionMode(Enum):
    """Policy for collapsing per-profile versions into one manifest value."""
    DIRECT = "direct"
    DEVELOPMENT = "development"
    PEER = "peer"


@dataclass(frozen=True)
class Placement:
    """Which bucket receives which resolution of a package."""
    bucket: str
    mode: ResolutionMode
    all_profiles: bool = False  # span every supported profile instead of the applicable subset
    dev_only_only: bool = False  # only receives capabilities flagged dev_only


class PackageKind(Enum):
    """Kind of package whose manifest is being updated."""
    APP = "app"
    LIBRARY = "library"

    @property
    def placements(self) -> Tuple[Placement, ...]:
        """Return the placement policy for this kind."""
        return _PLACEMENTS[self]


_PLACEMENTS: Dict[PackageKind, Tuple[Placement, ...]] = {
    PackageKind.APP: (
        Placement(Buckets.DIRECT.value, ResolutionMode.DIRECT),
        Placement(Buckets.DEV.value, ResolutionMode.DEVELOPMENT, dev_only_only=True),
    ),
    PackageKind.LIBRARY: (
        Placement(Buckets.PEER.value, ResolutionMode.PEER, all_profiles=True),
        Placement(Buckets.DEV.value, ResolutionMode.DEVELOPMENT),
    ),
}


@dataclass(frozen=True)
class Change:
    """A single manifest entry that differs from its expected value."""
    bucket: str
    name: str
    current: Optional[str]
    expected: Optional[str]

    def describe(self) -> str:
        """Human readable summary used in check mode output."""
        if self.current is None:
            return f"{self.bucket}: add {self.name}@{self.expected}"
        if self.expected is None:
            return f"{self.bucket}: remove {self.name}@{self.current}"
        return f"{self.bucket}: {self.name} {self.current} -> {self.expected}"


# Type alias for a capability's per-profile descriptors.
CapabilityVersionList = List[Optional[VersionDescriptor]]
