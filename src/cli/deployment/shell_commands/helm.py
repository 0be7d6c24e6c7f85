"""Helm command abstractions.

This module provides commands for Helm release management,
including deployment, uninstallation, release lookup and notes.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from src.utils.errors import MaterializationError

from .types import CommandResult, HelmRelease

if TYPE_CHECKING:
    from .runner import CommandRunner


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Release management (install/upgrade, uninstall)
    - Status queries (list releases, look up a single release, notes)

    The wrapper holds no state besides the runner, so one instance can be
    shared by concurrent purge tasks.
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    # =========================================================================
    # Release Management
    # =========================================================================

    def upgrade_install(
        self,
        release_name: str,
        chart_location: str | Path,
        namespace: str,
        *,
        value_files: list[Path] | None = None,
        timeout: str = "40m",
        wait: bool = True,
        create_namespace: bool = True,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Deploy or upgrade a Helm release.

        Uses `helm upgrade --install` to idempotently deploy a chart.
        If the release doesn't exist, it will be installed. If it exists,
        it will be upgraded.

        Args:
            release_name: Name for the Helm release
            chart_location: Chart reference (directory, archive, URL or repo/chart)
            namespace: Kubernetes namespace for deployment
            value_files: Optional list of values.yaml override files
            timeout: Maximum time to wait for deployment
            wait: Whether to wait for resources to be ready
            create_namespace: Whether to create namespace if it doesn't exist
            on_output: Optional callback for real-time output streaming.

        Returns:
            CommandResult with deployment status

        Example:
            >>> helm.upgrade_install(
            ...     "my-app",
            ...     "./charts/my-app",
            ...     "production",
            ...     value_files=[Path("./overrides.yaml")],
            ... )
        """
        cmd = [
            "helm",
            "upgrade",
            "--install",
            release_name,
            str(chart_location),
            "--namespace",
            namespace,
        ]

        if create_namespace:
            cmd.append("--create-namespace")
        if wait:
            cmd.append("--wait")
        cmd.extend(["--timeout", timeout])

        for vf in value_files or []:
            cmd.extend(["-f", str(vf)])

        if on_output:
            return self._runner.run_streaming(cmd, on_output=on_output)
        return self._runner.run(cmd, capture_output=True)

    def uninstall(
        self,
        release_name: str,
        namespace: str,
        *,
        wait: bool = True,
        timeout: str = "15m",
    ) -> CommandResult:
        """Uninstall a Helm release, removing its release history.

        Args:
            release_name: Name of the release to uninstall
            namespace: Kubernetes namespace
            wait: Whether to wait for resources to be deleted
            timeout: Maximum time to wait for the deletion

        Returns:
            CommandResult with uninstall status
        """
        cmd = ["helm", "uninstall", release_name, "-n", namespace]
        if wait:
            cmd.append("--wait")
        cmd.extend(["--timeout", timeout])
        return self._runner.run(cmd)

    # =========================================================================
    # Status Queries
    # =========================================================================

    def list_releases(self, *, name_filter: str | None = None) -> list[HelmRelease]:
        """List Helm releases in all namespaces and all states.

        Args:
            name_filter: Optional regular expression passed to ``--filter``

        Returns:
            List of HelmRelease objects

        Raises:
            MaterializationError: If helm fails or prints unparsable output
        """
        cmd = ["helm", "list", "--all-namespaces", "--all", "-o", "json"]
        if name_filter:
            cmd.extend(["--filter", name_filter])

        result = self._runner.run(cmd)
        if not result.success:
            raise MaterializationError(
                "failed to list helm releases", details=result.stderr.strip() or None
            )
        if not result.stdout.strip():
            return []

        try:
            releases_data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise MaterializationError(
                "failed to parse helm release list", details=str(e)
            ) from e

        return [
            HelmRelease(
                name=r.get("name", ""),
                namespace=r.get("namespace", ""),
                status=r.get("status", ""),
                revision=str(r.get("revision", "")),
            )
            for r in releases_data or []
        ]

    def status(self, release_name: str) -> HelmRelease:
        """Look up a single release by exact name.

        Args:
            release_name: Name of the release

        Returns:
            The matching HelmRelease

        Raises:
            MaterializationError: If the release does not exist or helm fails
        """
        releases = self.list_releases(name_filter=f"^{re.escape(release_name)}$")
        for release in releases:
            if release.name == release_name:
                return release
        raise MaterializationError(f"release: {release_name!r} not found")

    def get_notes(self, release_name: str, namespace: str) -> CommandResult:
        """Fetch the rendered NOTES.txt of a release.

        Args:
            release_name: Name of the release
            namespace: Kubernetes namespace

        Returns:
            CommandResult with the notes in stdout
        """
        return self._runner.run(["helm", "get", "notes", release_name, "-n", namespace])
