"""Deployment configuration loading."""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.runtime.config.config_data import Config
from src.runtime.config.config_node import ConfigNode, encode_node
from src.utils.errors import ConfigParseError, ConfigReadError


def load_config(file_path: Path) -> Config:
    """
    Load and validate a deployment configuration file.

    Override sections are decoded into ConfigNode trees but not templated;
    shell expressions are evaluated later, one release at a time.

    Args:
        file_path: Path to the YAML configuration file

    Returns:
        Validated Config

    Raises:
        ConfigReadError: If the file cannot be read
        ConfigParseError: If the content is not YAML or does not match the schema

    YAML Structure:
        before:   [ {name, cmd}, ... ]
        releases: [ {chart_name, chart_namespace, chart_location,
                     overrides, before, after}, ... ]
        after:    [ {name, cmd}, ... ]
    """
    try:
        content = Path(file_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigReadError(
            f"unable to read configuration file {file_path}", details=str(e)
        ) from e

    try:
        loaded: Any = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError("error parsing YAML", details=str(e)) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigParseError(
            "invalid configuration structure",
            details=f"expected a mapping at the top level, got {type(loaded).__name__}",
        )

    try:
        config = Config.model_validate(loaded)
    except ValidationError as e:
        raise ConfigParseError("invalid configuration", details=str(e)) from e

    logger.info(
        f"Loaded configuration from {file_path}: {len(config.releases)} release(s), "
        f"{len(config.before)} pre-hook(s), {len(config.after)} post-hook(s)"
    )
    return config


def dump_config(config: Config) -> str:
    """Serialize a configuration back to YAML, override trees included.

    Args:
        config: Configuration to serialize

    Returns:
        YAML document
    """
    data = config.model_dump(exclude={"releases"})
    data["releases"] = [
        {
            **release.model_dump(exclude={"overrides"}),
            "overrides": encode_node(release.overrides),
        }
        for release in config.releases
    ]
    return yaml.safe_dump(
        {"before": data["before"], "releases": data["releases"], "after": data["after"]},
        default_flow_style=False,
        sort_keys=False,
        indent=2,
    )


def dump_overrides(overrides: ConfigNode) -> str:
    """Serialize a templated override tree to a Helm values document."""
    return yaml.safe_dump(
        encode_node(overrides), default_flow_style=False, sort_keys=False
    )
