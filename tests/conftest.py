"""Shared fixtures for the test suite."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cli.deployment.shell_commands.types import CommandResult, HelmRelease


@pytest.fixture
def ok_result() -> CommandResult:
    """A successful command result with no output."""
    return CommandResult(success=True, stdout="", stderr="", returncode=0)


@pytest.fixture
def mock_console() -> MagicMock:
    """A console double accepting every ConsoleLike call."""
    return MagicMock()


@pytest.fixture
def mock_helm() -> MagicMock:
    """Helm wrapper double that knows a single release ``app`` in ``app-ns``."""
    helm = MagicMock()
    helm.status.return_value = HelmRelease(
        name="app", namespace="app-ns", status="deployed", revision="1"
    )
    helm.uninstall.return_value = CommandResult(success=True)
    return helm


@pytest.fixture
def mock_controller() -> MagicMock:
    """Kubernetes controller double with async methods and no resources."""
    controller = MagicMock()
    controller.get_namespace = AsyncMock()
    controller.delete_namespace = AsyncMock()
    controller.list_resource_names = AsyncMock(return_value=[])
    controller.delete_resource = AsyncMock()
    return controller
