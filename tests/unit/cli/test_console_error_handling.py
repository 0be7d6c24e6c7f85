import pytest
import typer

from src.cli.shared.console import with_error_handling
from src.utils.errors import DeploymentError, MaterializationError, PhaseError


def test_with_error_handling_handles_deployment_error():
    @with_error_handling
    def _command() -> None:
        raise DeploymentError("Boom", details="extra")

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_phase_error():
    @with_error_handling
    def _command() -> None:
        raise PhaseError("failed to deploy release", MaterializationError("helm failed"))

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 1


def test_with_error_handling_handles_keyboard_interrupt():
    @with_error_handling
    def _command() -> None:
        raise KeyboardInterrupt

    with pytest.raises(typer.Exit) as excinfo:
        _command()

    assert excinfo.value.exit_code == 130


def test_with_error_handling_lets_other_errors_through():
    @with_error_handling
    def _command() -> None:
        raise ValueError("bug")

    with pytest.raises(ValueError):
        _command()


def test_phase_error_details_include_cause():
    cause = MaterializationError("helm failed", details="UPGRADE FAILED: timed out")

    error = PhaseError("failed to deploy release", cause)

    assert error.message == "failed to deploy release"
    assert error.cause is cause
    assert "helm failed" in error.details
    assert "UPGRADE FAILED: timed out" in error.details
