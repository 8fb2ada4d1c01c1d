"""End-to-end tests for the depcheck command line."""

import json
import logging

import pytest

import depcheck
from constants import ExitCodes


@pytest.fixture(autouse=True)
def _keep_pytest_logging(monkeypatch, tmp_path):
    """Leave root handlers to caplog and keep config discovery inside tmp_path."""
    monkeypatch.setattr(depcheck, "configure_logging", lambda *a, **k: None)
    monkeypatch.delenv("DEPCHECK_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


def write_json(path, data):
    path.write_text(json.dumps(data, indent=2) + "\n")
    return str(path)


def read_json(path):
    with open(path, encoding="utf-8") as fh:
        return json.load(fh)


LIBRARY = {
    "name": "my-library",
    "version": "1.0.0",
    "dependencies": {"lodash": "^4.17.0", "react-native": "^0.62.0"},
    "peerDependencies": {"react": "16.13.1"},
    "depcheck": {
        "kitType": "library",
        "hostVersion": "^0.63.0 || ^0.64.0",
        "hostDevVersion": "^0.64.0",
        "capabilities": ["core-ios", "react"],
    },
}


class TestCheckMode:
    """Running without --write only reports."""

    def test_outdated_manifest(self, tmp_path, caplog):
        path = write_json(tmp_path / "package.json", LIBRARY)
        with caplog.at_level(logging.WARNING):
            code = depcheck.main(["-m", path])
        assert code == ExitCodes.MANIFEST_OUTDATED.value
        assert "peerDependencies: react 16.13.1 -> 16.13.1 || 17.0.1" in caplog.text
        assert "dependencies: remove react-native@^0.62.0" in caplog.text
        # untouched on disk
        assert read_json(path) == LIBRARY

    def test_up_to_date_manifest(self, tmp_path):
        path = write_json(tmp_path / "package.json", LIBRARY)
        assert depcheck.main(["-m", path, "--write"]) == ExitCodes.SUCCESS.value
        assert depcheck.main(["-m", path]) == ExitCodes.SUCCESS.value

    def test_defaults_to_package_json_in_cwd(self, tmp_path):
        write_json(tmp_path / "package.json", {"name": "empty", "version": "1.0.0"})
        assert depcheck.main([]) == ExitCodes.SUCCESS.value

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            depcheck.main(["-m", str(tmp_path / "nope.json")])
        assert exc.value.code == ExitCodes.FILE_ERROR.value

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("{ not json")
        with pytest.raises(SystemExit) as exc:
            depcheck.main(["-m", str(path)])
        assert exc.value.code == ExitCodes.FILE_ERROR.value

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')
        with pytest.raises(SystemExit) as exc:
            depcheck.main(["-m", str(path)])
        assert exc.value.code == ExitCodes.FILE_ERROR.value


class TestWriteMode:
    """--write updates manifests in place."""

    def test_library(self, tmp_path):
        path = write_json(tmp_path / "package.json", LIBRARY)
        assert depcheck.main(["-m", path, "-w"]) == ExitCodes.SUCCESS.value
        written = read_json(path)
        assert written["dependencies"] == {"lodash": "^4.17.0"}
        assert written["peerDependencies"] == {
            "react": "16.13.1 || 17.0.1",
            "react-native": "^0.63.4 || ^0.64.0",
        }
        assert written["devDependencies"] == {"react": "17.0.1", "react-native": "^0.64.0"}
        assert list(written) == ["name", "version", "dependencies", "peerDependencies", "depcheck", "devDependencies"]
        assert (tmp_path / "package.json").read_text().endswith("}\n")

    def test_app_omits_empty_new_buckets(self, tmp_path):
        manifest = {
            "name": "my-app",
            "version": "1.0.0",
            "dependencies": {"react-native": "0.0.0"},
        }
        path = write_json(tmp_path / "package.json", manifest)
        code = depcheck.main(["-m", path, "-w", "--kit-type", "app", "--capability", "core-ios",
                              "--capability", "react", "--host-version", "^0.64.0"])
        assert code == ExitCodes.SUCCESS.value
        written = read_json(path)
        assert written["dependencies"] == {"react": "17.0.1", "react-native": "^0.64.0"}
        assert "devDependencies" not in written
        assert "peerDependencies" not in written

    def test_runtime_version_narrows_dev_profiles(self, tmp_path):
        path = write_json(tmp_path / "package.json", LIBRARY)
        code = depcheck.main(["-m", path, "-w", "--host-dev-version", "^0.63.0 || ^0.64.0",
                              "--runtime-version", "10.24.1"])
        assert code == ExitCodes.SUCCESS.value
        written = read_json(path)
        assert written["devDependencies"] == {"react": "16.13.1", "react-native": "^0.63.4"}
        assert written["peerDependencies"]["react-native"] == "^0.63.4 || ^0.64.0"

    def test_config_file(self, tmp_path):
        (tmp_path / "depcheck.yaml").write_text(
            "depcheck:\n  kitType: app\n  hostVersion: ^0.63.0\n  capabilities:\n    - react\n"
        )
        path = write_json(tmp_path / "package.json", {"name": "my-app", "version": "1.0.0"})
        assert depcheck.main(["-m", path, "-w"]) == ExitCodes.SUCCESS.value
        assert read_json(path)["dependencies"] == {"react": "16.13.1"}

    def test_custom_profiles(self, tmp_path):
        profiles = tmp_path / "profiles.yaml"
        profiles.write_text('"0.64":\n  lottie:\n    name: lottie-react-native\n    version: ^4.0.0\n')
        path = write_json(tmp_path / "package.json", {"name": "my-app", "version": "1.0.0"})
        code = depcheck.main(["-m", path, "-w", "--kit-type", "app", "--capability", "lottie",
                              "--host-version", "^0.64.0", "--custom-profiles", str(profiles)])
        assert code == ExitCodes.SUCCESS.value
        assert read_json(path)["dependencies"] == {"lottie-react-native": "^4.0.0"}

    def test_dev_version_defaults_to_host_version(self, tmp_path):
        manifest = dict(LIBRARY, depcheck=dict(LIBRARY["depcheck"], hostVersion="^0.63.0"))
        del manifest["depcheck"]["hostDevVersion"]
        path = write_json(tmp_path / "package.json", manifest)
        assert depcheck.main(["-m", path, "-w"]) == ExitCodes.SUCCESS.value
        assert read_json(path)["devDependencies"] == {"react": "16.13.1", "react-native": "^0.63.4"}

    def test_unreadable_custom_profiles(self, tmp_path):
        profiles = tmp_path / "profiles.yaml"
        profiles.write_bytes(b"\xff\xfe\x00bad")
        path = write_json(tmp_path / "package.json", LIBRARY)
        assert depcheck.main(["-m", path, "--custom-profiles", str(profiles)]) == ExitCodes.CONFIG_ERROR.value


class TestInitMode:
    """--init infers capabilities and writes them to the manifest."""

    def test_init_app(self, tmp_path):
        manifest = {
            "name": "my-app",
            "version": "1.0.0",
            "dependencies": {"react": "16.13.1", "react-native": "^0.63.4"},
        }
        path = write_json(tmp_path / "package.json", manifest)
        code = depcheck.main(["-m", path, "--init", "app", "--host-version", "^0.64.0"])
        assert code == ExitCodes.SUCCESS.value
        written = read_json(path)
        assert written["depcheck"] == {
            "kitType": "app",
            "capabilities": ["core", "core-android", "core-ios", "react"],
        }
        assert written["dependencies"] == {"react": "17.0.1", "react-native": "^0.64.0"}

    def test_init_uses_custom_profiles(self, tmp_path):
        profiles = tmp_path / "profiles.yaml"
        profiles.write_text('"0.64":\n  lottie:\n    name: lottie-react-native\n    version: ^4.0.0\n')
        manifest = {
            "name": "my-app",
            "version": "1.0.0",
            "dependencies": {"lottie-react-native": "^3.0.0", "react": "16.13.1"},
        }
        path = write_json(tmp_path / "package.json", manifest)
        code = depcheck.main(["-m", path, "--init", "app", "--host-version", "^0.64.0",
                              "--custom-profiles", str(profiles)])
        assert code == ExitCodes.SUCCESS.value
        written = read_json(path)
        assert written["depcheck"]["capabilities"] == ["lottie", "react"]
        assert written["dependencies"] == {"lottie-react-native": "^4.0.0", "react": "17.0.1"}


class TestErrors:
    """Resolution errors map to CONFIG_ERROR."""

    def test_unknown_capability(self, tmp_path, caplog):
        manifest = dict(LIBRARY, depcheck={"capabilities": ["does-not-exist"]})
        path = write_json(tmp_path / "package.json", manifest)
        assert depcheck.main(["-m", path]) == ExitCodes.CONFIG_ERROR.value
        assert "does-not-exist" in caplog.text

    def test_no_matching_profile(self, tmp_path):
        path = write_json(tmp_path / "package.json", LIBRARY)
        assert depcheck.main(["-m", path, "--host-version", "^0.70.0"]) == ExitCodes.CONFIG_ERROR.value

    def test_runtime_too_old(self, tmp_path):
        path = write_json(tmp_path / "package.json", LIBRARY)
        code = depcheck.main(["-m", path, "--runtime-version", "10.24.1"])
        assert code == ExitCodes.CONFIG_ERROR.value

    def test_invalid_kit_type_in_manifest(self, tmp_path):
        manifest = dict(LIBRARY, depcheck={"kitType": "plugin", "capabilities": ["react"]})
        path = write_json(tmp_path / "package.json", manifest)
        assert depcheck.main(["-m", path]) == ExitCodes.CONFIG_ERROR.value
