"""Release purger package.

- namespace: namespace deletion confirmed through a watch stream
- sequencer: teardown of a single release
- purger: confirmation and concurrent teardown of several releases

Usage:
    from src.cli.deployment.release_purger import ReleasePurger

    purger = ReleasePurger(helm, controller, confirm=ask_operator)
    purged = run_sync(purger.purge(["app-a", "app-b"]))
"""

from .namespace import NamespaceTerminator
from .purger import PurgeOutcome, ReleasePurger
from .sequencer import ReleasePurgeSequencer

__all__ = [
    "ReleasePurger",
    "PurgeOutcome",
    # Component classes for testing/extension
    "ReleasePurgeSequencer",
    "NamespaceTerminator",
]
