"""Shell expression substitution for configuration trees.

Any string value in an override section may embed ``((shell <command>))``
expressions. Each one is replaced with the trimmed standard output of the
command. Evaluation goes through a ``ShellEvaluator`` whose command executor
is injected, so tests can substitute a fake.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from loguru import logger

from src.cli.deployment.shell_commands.runner import CommandRunner
from src.cli.deployment.shell_commands.types import CommandResult
from src.runtime.config.config_data import Config
from src.runtime.config.config_node import (
    ConfigMapping,
    ConfigNode,
    ConfigNull,
    ConfigScalar,
    ConfigSequence,
)
from src.utils.errors import TemplatingError

SHELL_OPERATOR_PATTERN = re.compile(r"\(\(\s*shell\s+(.+?)\s*\)\)")

CommandExecutor = Callable[[str], CommandResult]


class ShellEvaluator:
    """Evaluates ``((shell ...))`` expressions inside a single string."""

    def __init__(self, execute: CommandExecutor | None = None) -> None:
        """Initialize the evaluator.

        Args:
            execute: Callable running one command line and returning its
                     result. Defaults to ``sh -c`` through a CommandRunner.
        """
        self._execute = execute or CommandRunner().run_shell

    def evaluate(self, text: str) -> str:
        """Return ``text`` with every shell expression replaced by its output.

        Raises:
            TemplatingError: If any command exits with a non-zero status
        """
        result = text
        for match in SHELL_OPERATOR_PATTERN.finditer(text):
            command = match.group(1)
            logger.debug(f"Evaluating shell expression: {command}")

            outcome = self._execute(command)
            if not outcome.success:
                details = f"exit code {outcome.returncode}"
                if outcome.stderr.strip():
                    details = f"{details}\n{outcome.stderr.strip()}"
                raise TemplatingError(command, details=details)

            result = result.replace(match.group(0), outcome.stdout.strip())

        return result


def template_structure(node: ConfigNode, evaluator: ShellEvaluator) -> ConfigNode:
    """Evaluate shell expressions in every string leaf of a configuration tree.

    The returned tree has the same shape as the input: mapping keys and
    sequence order are kept and only string scalars change. Null nodes are
    returned as empty mappings because consumers expect override sections to
    be map-shaped. The input tree is not modified.

    Raises:
        TemplatingError: On the first failing expression; no partial tree
                         is returned
    """
    match node:
        case ConfigMapping(entries=entries):
            return ConfigMapping(
                {key: template_structure(value, evaluator) for key, value in entries.items()}
            )
        case ConfigSequence(items=items):
            return ConfigSequence(tuple(template_structure(item, evaluator) for item in items))
        case ConfigScalar(value=str() as text):
            return ConfigScalar(evaluator.evaluate(text))
        case ConfigScalar():
            return node
        case ConfigNull():
            return ConfigMapping({})
    raise TypeError(f"not a configuration node: {node!r}")


def render_config(config: Config, evaluator: ShellEvaluator) -> Config:
    """Return a copy of ``config`` with every release's overrides templated.

    Raises:
        TemplatingError: If any embedded expression fails
    """
    releases = [
        release.model_copy(
            update={"overrides": template_structure(release.overrides, evaluator)}
        )
        for release in config.releases
    ]
    return config.model_copy(update={"releases": releases})
