"""Release deployer package.

- hooks: sequential execution of lifecycle hook tasks
- deployer: the per-configuration deploy pipeline

Usage:
    from src.cli.deployment.release_deployer import ReleaseDeployer

    deployer = ReleaseDeployer(ShellCommands(), console)
    deployer.deploy_from_file(Path("chartwright.yml"), timeout_minutes=40)
"""

from .deployer import ReleaseDeployer
from .hooks import HookRunner

__all__ = ["ReleaseDeployer", "HookRunner"]
