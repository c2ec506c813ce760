import json
import re

import pytest
from click.testing import CliRunner
from unittest import mock

from storeversion.main import main
from storeversion.models import LaunchError, LaunchMode, VersionStatus
from storeversion.resolver import VersionStatusResolver

APPLE_ARGS = ["--platform", "ios", "--app-id", "com.example.app"]


def _plain_output(output: str) -> str:
    # Strip ANSI color/style sequences emitted by rich-click in CI terminals.
    return re.sub(r"\x1b\[[0-9;]*m", "", output)


def _json_from_output(output: str):
    start = output.find("{")
    if start == -1:
        raise AssertionError(f"No JSON object found in output:\n{output}")
    return json.loads(output[start:])


def _status(local="1.0.0", store="1.2.0"):
    return VersionStatus(
        local_version=local,
        store_version=store,
        app_store_link="https://apps.apple.com/x",
        prefer_newer_local_shows_changelog=False,
        release_notes="Bug fixes",
    )


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version_flag(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0, result.output
    assert "storeversion version:" in result.output


def test_status_json(runner):
    with mock.patch.object(VersionStatusResolver, "resolve", return_value=_status()):
        result = runner.invoke(
            main, ["status", *APPLE_ARGS, "--local-version", "1.0.0", "--json"]
        )

    assert result.exit_code == 0, result.output
    payload = _json_from_output(result.output)
    assert payload["store_version"] == "1.2.0"
    assert payload["can_update"] is True


def test_status_table(runner):
    with mock.patch.object(VersionStatusResolver, "resolve", return_value=_status()):
        result = runner.invoke(main, ["status", *APPLE_ARGS, "--local-version", "1.0"])

    assert result.exit_code == 0, result.output
    output = _plain_output(result.output)
    assert "Store version" in output
    assert "1.2.0" in output


def test_status_unavailable_exits_non_zero(runner):
    with mock.patch.object(VersionStatusResolver, "resolve", return_value=None):
        result = runner.invoke(main, ["status", *APPLE_ARGS, "--local-version", "1"])

    assert result.exit_code == 1
    assert "Could not determine" in result.output


def test_status_builds_config_from_file_and_flags(runner, tmp_path):
    config_path = tmp_path / "storeversion.yaml"
    config_path.write_text(
        "prefer_newer_local_shows_changelog: false\nios_id: com.from.file\n"
        "ios_app_store_country: de\n",
        encoding="utf-8",
    )
    captured = {}

    def fake_resolve(self):
        captured["config"] = self.config
        captured["identity"] = self.identity_provider.get_local_app_info()
        return _status()

    with mock.patch.object(VersionStatusResolver, "resolve", fake_resolve):
        result = runner.invoke(
            main,
            [
                "status",
                *APPLE_ARGS,
                "--local-version",
                "1.0.0",
                "--config",
                str(config_path),
                "--country",
                "jp",
                "--timeout",
                "4",
                "--show-changelog",
            ],
        )

    assert result.exit_code == 0, result.output
    config = captured["config"]
    assert config.prefer_newer_local_shows_changelog is True
    assert config.ios_id == "com.from.file"
    assert config.ios_app_store_country == "jp"
    assert config.timeout == 4.0
    assert captured["identity"].package_name == "com.example.app"


def test_force_version_env_without_config_file(runner, monkeypatch):
    monkeypatch.setenv("STOREVERSION_FORCE_APP_VERSION", "9.9.9")
    captured = {}

    def fake_resolve(self):
        captured["config"] = self.config
        return _status()

    with mock.patch.object(VersionStatusResolver, "resolve", fake_resolve):
        result = runner.invoke(
            main, ["status", *APPLE_ARGS, "--local-version", "1.0.0", "--json"]
        )

    assert result.exit_code == 0, result.output
    assert captured["config"].force_app_version == "9.9.9"
    assert captured["config"].prefer_newer_local_shows_changelog is False


def test_status_invalid_config(runner, tmp_path):
    config_path = tmp_path / "storeversion.yaml"
    config_path.write_text("ios_id: com.example.app\n", encoding="utf-8")

    result = runner.invoke(
        main,
        ["status", *APPLE_ARGS, "--local-version", "1.0.0", "--config", str(config_path)],
    )

    assert result.exit_code != 0
    assert "Invalid check configuration" in _plain_output(result.output)


def test_prompt_dismissed(runner):
    with mock.patch.object(VersionStatusResolver, "resolve", return_value=_status()):
        with mock.patch("storeversion.presenter.launch_app_store") as launcher:
            result = runner.invoke(
                main,
                ["prompt", *APPLE_ARGS, "--local-version", "1.0.0"],
                input="n\n",
            )

    assert result.exit_code == 0, result.output
    assert "Update Available" in _plain_output(result.output)
    launcher.assert_not_called()


def test_prompt_up_to_date(runner):
    with mock.patch.object(
        VersionStatusResolver, "resolve", return_value=_status(local="1.2.0")
    ):
        result = runner.invoke(main, ["prompt", *APPLE_ARGS, "--local-version", "1.2.0"])

    assert result.exit_code == 0, result.output
    assert "up to date" in result.output


def test_open_launches_link(runner):
    with mock.patch("storeversion.main.launch_app_store") as launcher:
        result = runner.invoke(main, ["open", "https://apps.apple.com/x", "--external"])

    assert result.exit_code == 0, result.output
    launcher.assert_called_once_with(
        "https://apps.apple.com/x", launch_mode=LaunchMode.EXTERNAL_APPLICATION
    )


def test_open_launch_failure(runner):
    with mock.patch(
        "storeversion.main.launch_app_store",
        side_effect=LaunchError("Could not launch app store link: x://y"),
    ):
        result = runner.invoke(main, ["open", "x://y"])

    assert result.exit_code != 0
    assert "Could not launch" in _plain_output(result.output)


def test_prompt_accepted_opens_store(runner):
    with mock.patch.object(VersionStatusResolver, "resolve", return_value=_status()):
        with mock.patch("storeversion.presenter.launch_app_store") as launcher:
            result = runner.invoke(
                main,
                ["prompt", *APPLE_ARGS, "--local-version", "1.0.0", "--default"],
                input="y\n",
            )

    assert result.exit_code == 0, result.output
    launcher.assert_called_once_with(
        "https://apps.apple.com/x", launch_mode=LaunchMode.PLATFORM_DEFAULT
    )
