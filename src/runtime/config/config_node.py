"""Tagged representation of arbitrary configuration trees.

Override sections are free-form YAML. They are decoded once into one of
four node variants so that the templating code can dispatch with ``match``
instead of inspecting raw Python types at every level.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import date
from typing import Any


@dataclass(frozen=True)
class ConfigMapping:
    """Key to node mapping. Keys are unique; their order carries no meaning."""

    entries: dict[Hashable, ConfigNode] = field(default_factory=dict)


@dataclass(frozen=True)
class ConfigSequence:
    """Ordered list of nodes."""

    items: tuple[ConfigNode, ...] = ()


@dataclass(frozen=True)
class ConfigScalar:
    """A string, number, boolean or date leaf."""

    value: str | int | float | bool | date


@dataclass(frozen=True)
class ConfigNull:
    """An explicit or implied YAML null."""


ConfigNode = ConfigMapping | ConfigSequence | ConfigScalar | ConfigNull


def decode_node(raw: Any) -> ConfigNode:
    """Convert data produced by ``yaml.safe_load`` into a ConfigNode tree.

    Raises:
        ValueError: If the data contains a value YAML scalars cannot express
    """
    if raw is None:
        return ConfigNull()
    if isinstance(raw, dict):
        return ConfigMapping({key: decode_node(value) for key, value in raw.items()})
    if isinstance(raw, list | tuple):
        return ConfigSequence(tuple(decode_node(item) for item in raw))
    if isinstance(raw, str | bool | int | float | date):
        return ConfigScalar(raw)
    raise ValueError(f"unsupported configuration value of type {type(raw).__name__}")


def encode_node(node: ConfigNode) -> Any:
    """Convert a ConfigNode tree back into plain Python data for serialization."""
    match node:
        case ConfigMapping(entries=entries):
            return {key: encode_node(value) for key, value in entries.items()}
        case ConfigSequence(items=items):
            return [encode_node(item) for item in items]
        case ConfigScalar(value=value):
            return value
        case ConfigNull():
            return None
