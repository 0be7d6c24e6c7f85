"""Tests for Helm release commands."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.cli.deployment.shell_commands.helm import HelmCommands
from src.cli.deployment.shell_commands.types import CommandResult, HelmRelease
from src.utils.errors import MaterializationError


@pytest.fixture
def mock_runner() -> MagicMock:
    """Create a mock command runner."""
    return MagicMock()


@pytest.fixture
def helm_commands(mock_runner: MagicMock) -> HelmCommands:
    """Create HelmCommands instance with mock runner."""
    return HelmCommands(mock_runner)


def _list_output(*releases: dict) -> CommandResult:
    return CommandResult(success=True, stdout=json.dumps(list(releases)))


class TestUpgradeInstall:
    """Tests for helm upgrade --install."""

    def test_builds_full_command(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(success=True)

        result = helm_commands.upgrade_install(
            "web",
            "./charts/web",
            "web-ns",
            value_files=[Path("/tmp/values.yaml")],
            timeout="25m",
        )

        assert result.success
        cmd = mock_runner.run.call_args[0][0]
        assert cmd[:5] == ["helm", "upgrade", "--install", "web", "./charts/web"]
        assert cmd[cmd.index("--namespace") + 1] == "web-ns"
        assert "--create-namespace" in cmd
        assert "--wait" in cmd
        assert cmd[cmd.index("--timeout") + 1] == "25m"
        assert cmd[cmd.index("-f") + 1] == "/tmp/values.yaml"

    def test_without_wait_and_namespace_creation(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(success=True)

        helm_commands.upgrade_install(
            "web", "./charts/web", "web-ns", wait=False, create_namespace=False
        )

        cmd = mock_runner.run.call_args[0][0]
        assert "--wait" not in cmd
        assert "--create-namespace" not in cmd

    def test_streams_when_callback_given(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        on_output = MagicMock()
        mock_runner.run_streaming.return_value = CommandResult(success=True)

        helm_commands.upgrade_install("web", "./charts/web", "web-ns", on_output=on_output)

        mock_runner.run.assert_not_called()
        assert mock_runner.run_streaming.call_args.kwargs["on_output"] is on_output


class TestUninstall:
    """Tests for helm uninstall."""

    def test_waits_with_timeout(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(success=True)

        helm_commands.uninstall("web", "web-ns", timeout="15m")

        cmd = mock_runner.run.call_args[0][0]
        assert cmd[:3] == ["helm", "uninstall", "web"]
        assert cmd[cmd.index("-n") + 1] == "web-ns"
        assert "--wait" in cmd
        assert cmd[cmd.index("--timeout") + 1] == "15m"
        assert "--keep-history" not in cmd


class TestReleaseLookup:
    """Tests for release listing and status lookups."""

    def test_list_releases_parses_json(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = _list_output(
            {"name": "web", "namespace": "web-ns", "status": "deployed", "revision": 3},
            {"name": "db", "namespace": "db-ns", "status": "failed", "revision": "1"},
        )

        releases = helm_commands.list_releases()

        assert releases == [
            HelmRelease(name="web", namespace="web-ns", status="deployed", revision="3"),
            HelmRelease(name="db", namespace="db-ns", status="failed", revision="1"),
        ]
        cmd = mock_runner.run.call_args[0][0]
        assert "--all-namespaces" in cmd
        assert "--all" in cmd

    def test_list_releases_empty_output(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(success=True, stdout="")

        assert helm_commands.list_releases() == []

    def test_list_releases_failure_raises(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(
            success=False, stderr="Kubernetes cluster unreachable", returncode=1
        )

        with pytest.raises(MaterializationError) as excinfo:
            helm_commands.list_releases()

        assert excinfo.value.details == "Kubernetes cluster unreachable"

    def test_list_releases_garbage_raises(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = CommandResult(success=True, stdout="not json")

        with pytest.raises(MaterializationError):
            helm_commands.list_releases()

    def test_status_uses_anchored_filter(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = _list_output(
            {"name": "web.v2", "namespace": "ns", "status": "deployed", "revision": 1}
        )

        release = helm_commands.status("web.v2")

        assert release.namespace == "ns"
        cmd = mock_runner.run.call_args[0][0]
        assert cmd[cmd.index("--filter") + 1] == r"^web\.v2$"

    def test_status_requires_exact_name(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = _list_output(
            {"name": "web-canary", "namespace": "ns", "status": "deployed", "revision": 1}
        )

        with pytest.raises(MaterializationError, match="not found"):
            helm_commands.status("web")

    def test_status_of_missing_release(
        self, helm_commands: HelmCommands, mock_runner: MagicMock
    ) -> None:
        mock_runner.run.return_value = _list_output()

        with pytest.raises(MaterializationError, match="'ghost' not found"):
            helm_commands.status("ghost")


def test_get_notes(helm_commands: HelmCommands, mock_runner: MagicMock) -> None:
    mock_runner.run.return_value = CommandResult(success=True, stdout="Visit http://web")

    result = helm_commands.get_notes("web", "web-ns")

    assert result.stdout == "Visit http://web"
    mock_runner.run.assert_called_once_with(["helm", "get", "notes", "web", "-n", "web-ns"])
