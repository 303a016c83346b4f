"""Plugin configuration loading."""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from watchpkg.infrastructure.logging import get_logger
from watchpkg.plugins.base import ConfigurationShapeError, PluginConfigurationError

logger = get_logger(__name__)

CFG_SCRIPTS = "SCRIPTS"
CFG_PKGS = "PKGS"


def _unique_strings(value: Any) -> List[str]:
    """
    Normalize a list-valued setting.

    A bare string counts as a one-element list. Empty strings and nulls are
    dropped, as are repeats of a value already seen.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError("must be a list of strings")

    result: List[str] = []
    for item in value:
        if item is None or item == "":
            continue
        if isinstance(item, (dict, list, tuple, bool)):
            raise ValueError(f"entries must be strings, got {type(item).__name__}")
        item = str(item)
        if item not in result:
            result.append(item)
    return result


class WatchPkgConfig(BaseModel):
    """Scripts to run and packages to watch."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    scripts: List[str] = Field(
        default_factory=list,
        alias=CFG_SCRIPTS,
        description="Executables invoked as '<script> <name> <origin>'",
    )
    packages: List[str] = Field(
        default_factory=list,
        alias=CFG_PKGS,
        description="Package names or origins to watch; empty watches everything",
    )

    @field_validator("scripts", "packages", mode="before")
    @classmethod
    def normalize_list(cls, v):
        return _unique_strings(v)

    def to_dict(self) -> Dict[str, List[str]]:
        return {CFG_SCRIPTS: list(self.scripts), CFG_PKGS: list(self.packages)}


def parse_config(data: Any) -> WatchPkgConfig:
    """
    Validate raw configuration data.

    Args:
        data: Parsed configuration document; None counts as empty

    Returns:
        Validated configuration

    Raises:
        ConfigurationShapeError: If data is not a mapping
        PluginConfigurationError: If a setting has the wrong type
    """
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigurationShapeError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )

    try:
        return WatchPkgConfig.model_validate(data)
    except ValidationError as e:
        raise PluginConfigurationError(f"Invalid configuration: {e}") from e


def load_config_file(file_path: Union[str, Path]) -> WatchPkgConfig:
    """
    Load plugin configuration from a file.

    A missing file yields an empty configuration. Files ending in .conf, the
    name the package manager uses for plugin configuration, are read as YAML.

    Args:
        file_path: Path to configuration file (YAML or JSON)

    Returns:
        Validated configuration

    Raises:
        ConfigurationShapeError: If the document is not a mapping
        PluginConfigurationError: If the file cannot be read or is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        logger.debug("config_file_missing", file=str(file_path))
        return WatchPkgConfig()

    if file_path.suffix in [".yml", ".yaml", ".conf"]:
        loader = yaml.safe_load
    elif file_path.suffix == ".json":
        loader = json.load
    else:
        raise PluginConfigurationError(f"Unsupported file format: {file_path.suffix}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = loader(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise PluginConfigurationError(
            f"Failed to load configuration from {file_path}: {e}"
        ) from e

    config = parse_config(data)

    logger.debug(
        "config_loaded",
        file=str(file_path),
        scripts=len(config.scripts),
        packages=len(config.packages),
    )

    return config
