"""Error types shared by the deploy and purge workflows.

Every failure that reaches the CLI is a ``DeploymentError``. Low-level
failures raise one of the specific subclasses below; the workflows wrap
them in a ``PhaseError`` carrying a static label for the step that failed.
"""

from __future__ import annotations


class DeploymentError(Exception):
    """Raised when a deployment operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigReadError(DeploymentError):
    """The configuration file could not be read."""


class ConfigParseError(DeploymentError):
    """The configuration file is not valid YAML or does not match the schema."""


class TemplatingError(DeploymentError):
    """An embedded shell expression could not be evaluated."""

    def __init__(self, command: str, details: str | None = None):
        self.command = command
        super().__init__(f"failed to run command: {command}", details=details)


class HookExecutionError(DeploymentError):
    """A lifecycle hook task exited with a non-zero status."""


class MaterializationError(DeploymentError):
    """Helm failed to install, upgrade, look up or delete a release."""


class ResourceDeletionError(DeploymentError):
    """A cluster resource could not be deleted."""


class NamespaceWatchError(DeploymentError):
    """The namespace watch reported an error or ended early."""


class PhaseError(DeploymentError):
    """Wraps a failure with the label of the workflow phase it happened in."""

    def __init__(self, phase: str, cause: Exception):
        self.phase = phase
        self.cause = cause
        details = str(cause)
        if isinstance(cause, DeploymentError) and cause.details:
            details = f"{details}\n\n{cause.details}"
        super().__init__(phase, details=details)
