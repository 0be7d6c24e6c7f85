"""Deployment module for installing and purging Helm releases.

The package is organized into subpackages:
- shell_commands: Abstractions for shell command execution (runner, Helm)
- release_deployer: Ordered deployment of a multi-release configuration
- release_purger: Concurrent teardown of releases and their namespaces

Subpackages are imported directly (e.g.
``from src.cli.deployment.release_deployer import ReleaseDeployer``) so that
the configuration layer can use the command runner without pulling in the
workflows.
"""
