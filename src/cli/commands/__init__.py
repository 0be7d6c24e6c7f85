"""CLI command implementations.

Commands:
- deploy: Install or upgrade the releases of a configuration file
- render: Print a configuration with its shell expressions evaluated
- purge: Delete releases together with their namespaces
"""

from .deploy import deploy, render
from .purge import purge

__all__ = [
    "deploy",
    "render",
    "purge",
]
