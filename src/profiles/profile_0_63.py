"""Capabilities for host platform 0.63."""

from versioning.models import Profile, VersionDescriptor as V

PROFILE = Profile(
    version="0.63",
    packages={
        "animation": V("^1.13.2", name="react-native-reanimated"),
        "base64": V("^0.2.1", name="react-native-base64"),
        "checkbox": V("^0.5.7", name="@react-native-community/checkbox"),
        "clipboard": V("^1.5.1", name="@react-native-community/clipboard"),
        "core": V("^0.63.4", name="react-native"),
        "core-android": V("^0.63.4", name="react-native"),
        "core-ios": V("^0.63.4", name="react-native"),
        "core-macos": V("^0.63.0", name="react-native-macos"),
        "core-windows": V("^0.63.0", name="react-native-windows"),
        "datetime-picker": V("^3.0.9", name="@react-native-community/datetimepicker"),
        "filesystem": V("^2.16.6", name="react-native-fs"),
        "gestures": V("^1.9.0", name="react-native-gesture-handler"),
        "hermes": V("~0.5.0", name="hermes-engine"),
        "html": V("^5.0.0", name="react-native-render-html"),
        "lazy-index": V("^2.1.7", name="@rnx-kit/react-native-lazy-index"),
        "masked-view": V("^0.1.10", name="@react-native-community/masked-view"),
        "modal": V("^11.5.6", name="react-native-modal"),
        "navigation/native": V("^5.9.4", name="@react-navigation/native"),
        "navigation/stack": V("^5.14.4", name="@react-navigation/stack"),
        "netinfo": V("^5.9.10", name="@react-native-community/netinfo"),
        "react": V("16.13.1", name="react"),
        "react-dom": V("16.13.1", name="react-dom"),
        "react-test-renderer": V("16.13.1", name="react-test-renderer"),
        "safe-area": V("^3.1.9", name="react-native-safe-area-context"),
        "screens": V("^2.18.1", name="react-native-screens"),
        "storage": V("^1.12.1", name="@react-native-community/async-storage"),
        "svg": V("^12.1.0", name="react-native-svg"),
        "test-app": V("^0.5.5", name="react-native-test-app", dev_only=True),
        "webview": V("^11.0.0", name="react-native-webview"),
    },
)
