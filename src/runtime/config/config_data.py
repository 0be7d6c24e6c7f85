"""Typed model of the deployment configuration file."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.runtime.config.config_node import ConfigNode, ConfigNull, decode_node


class Task(BaseModel):
    """A named lifecycle hook.

    ``cmd`` is either a command line run through ``sh -c`` or an argv list
    executed directly.
    """

    name: str
    cmd: str | list[str]

    @field_validator("cmd")
    @classmethod
    def _cmd_not_empty(cls, value: str | list[str]) -> str | list[str]:
        if not value:
            raise ValueError("task command must not be empty")
        return value

    @property
    def argv(self) -> list[str]:
        """Command as an argv list."""
        if isinstance(self.cmd, str):
            return ["sh", "-c", self.cmd]
        return list(self.cmd)


class ReleaseSpec(BaseModel):
    """One chart release and its hooks."""

    chart_name: str
    chart_namespace: str
    chart_location: str
    # Decoded into a ConfigNode tree; missing or null overrides become ConfigNull.
    overrides: Any = Field(default_factory=ConfigNull)
    before: list[Task] = Field(default_factory=list)
    after: list[Task] = Field(default_factory=list)

    @field_validator("overrides", mode="before")
    @classmethod
    def _decode_overrides(cls, value: Any) -> ConfigNode:
        if isinstance(value, ConfigNode):
            return value
        return decode_node(value)

    @field_validator("before", "after", mode="before")
    @classmethod
    def _null_hooks_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Config(BaseModel):
    """Top-level deployment configuration."""

    before: list[Task] = Field(default_factory=list)
    releases: list[ReleaseSpec] = Field(default_factory=list)
    after: list[Task] = Field(default_factory=list)

    @field_validator("before", "releases", "after", mode="before")
    @classmethod
    def _null_lists_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value
