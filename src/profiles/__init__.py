"""Built-in host platform profiles."""

from typing import List

from versioning.models import Profile

from .loader import load_custom_profiles
from .profile_0_63 import PROFILE as PROFILE_0_63
from .profile_0_64 import PROFILE as PROFILE_0_64


def default_profiles() -> List[Profile]:
    """Return the built-in profiles, oldest host version first."""
    return [PROFILE_0_63, PROFILE_0_64]


__all__ = [
    "PROFILE_0_63",
    "PROFILE_0_64",
    "default_profiles",
    "load_custom_profiles",
]
