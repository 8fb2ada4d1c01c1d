"""Capabilities for host platform 0.64.

Starts from 0.63 and bumps what changed.
"""

from versioning.models import Profile, VersionDescriptor as V

from . import profile_0_63

PROFILE = Profile(
    version="0.64",
    packages={
        **profile_0_63.PROFILE.packages,
        "animation": V("^2.1.0", name="react-native-reanimated"),
        "core": V("^0.64.0", name="react-native"),
        "core-android": V("^0.64.0", name="react-native"),
        "core-ios": V("^0.64.0", name="react-native"),
        "core-macos": V("^0.64.0", name="react-native-macos"),
        "core-windows": V("^0.64.0", name="react-native-windows"),
        "hermes": V("~0.7.0", name="hermes-engine"),
        "netinfo": V("^6.0.0", name="@react-native-community/netinfo"),
        "react": V("17.0.1", name="react"),
        "react-dom": V("17.0.1", name="react-dom"),
        "react-test-renderer": V("17.0.1", name="react-test-renderer"),
        "safe-area": V("^3.2.0", name="react-native-safe-area-context"),
        "screens": V("^3.1.1", name="react-native-screens"),
        "storage": V("^1.15.0", name="@react-native-async-storage/async-storage"),
        "svg": V("^12.1.1", name="react-native-svg"),
        "webview": V("^11.4.2", name="react-native-webview"),
    },
    # 0.64 tooling dropped support for Node 10
    min_runtime="12.0.0",
)
