"""Deployment constants and configuration.

This module centralizes the fixed values used by the deploy and purge
workflows.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeploymentConstants:
    """Constants for Helm deployment and release purging.

    All attributes are class-level and immutable.
    """

    # Timeouts
    DEFAULT_DEPLOY_TIMEOUT_MINUTES: int = 40
    RELEASE_DELETE_TIMEOUT: str = "15m"

    # Deletion
    PROPAGATION_POLICY: str = "Foreground"
    # Workload controllers deleted before the namespace, in this order
    CONTROLLER_KINDS: tuple[str, ...] = ("deployment", "statefulset")

    # Watch event types that end a namespace termination
    WATCH_EVENT_DELETED: str = "DELETED"
    WATCH_EVENT_ERROR: str = "ERROR"

    # Word the operator must type to confirm a purge
    CONFIRMATION_WORD: str = "yes"

    # Hook phase labels
    PRE_DEPLOYMENT_PHASE: str = "Predeployment Steps"
    POST_DEPLOYMENT_PHASE: str = "Postdeployment Steps"

    def deploy_timeout(self, minutes: int) -> str:
        """Format a timeout in minutes as a Helm duration."""
        return f"{minutes}m"
