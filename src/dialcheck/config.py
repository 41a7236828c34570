"""Configuration management for the dialcheck CLI tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > .dialcheckrc > pyproject.toml > defaults
"""

from __future__ import annotations

import codecs
import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class DialcheckConfig:
    """Configuration for the dialcheck CLI tool.

    Attributes:
        encoding: Text encoding used to read dialplan files (default: "utf-8")
        max_line_length: Longest accepted line; 0 disables the limit (default: 0)
        strict_escapes: Only an odd run of backslashes escapes a quote (default: False)
        parallel: Check multiple files in a thread pool (default: True)
    """

    encoding: str = "utf-8"
    max_line_length: int = 0
    strict_escapes: bool = False
    parallel: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        if not self.encoding or not isinstance(self.encoding, str):
            raise ValueError("encoding must be a non-empty string")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e

        if isinstance(self.max_line_length, bool) or not isinstance(self.max_line_length, int):
            raise ValueError("max_line_length must be an integer")
        if self.max_line_length < 0:
            raise ValueError("max_line_length must be >= 0")

        if not isinstance(self.strict_escapes, bool):
            raise ValueError("strict_escapes must be a boolean")
        if not isinstance(self.parallel, bool):
            raise ValueError("parallel must be a boolean")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names.

    Returns:
        Set of field names from DialcheckConfig.
    """
    return {f.name for f in fields(DialcheckConfig)}


def find_config_file(filename: str = ".dialcheckrc", start_dir: Path | None = None) -> Path | None:
    """Find a configuration file by traversing up the directory tree.

    Searches for the specified file starting from start_dir (or current directory)
    and traversing up to the filesystem root.

    Args:
        filename: Name of the config file to find.
        start_dir: Directory to start searching from. Defaults to current directory.

    Returns:
        Path to the config file if found, None otherwise.
    """
    current = start_dir or Path.cwd()
    current = current.resolve()

    while True:
        config_path = current / filename
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


def _load_from_dialcheckrc(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from .dialcheckrc file.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from .dialcheckrc, or empty dict if not found.
    """
    config_path = find_config_file(".dialcheckrc", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        valid_fields = _get_config_field_names()
        return {k: v for k, v in data.items() if k in valid_fields}
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.dialcheck] section.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        section = data.get("tool", {}).get("dialcheck", {})
        valid_fields = _get_config_field_names()
        return {k: v for k, v in section.items() if k in valid_fields}
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Environment variables are prefixed with DIALCHECK_ and use uppercase names.
    For example: DIALCHECK_ENCODING, DIALCHECK_MAX_LINE_LENGTH

    Returns:
        Dictionary containing configuration from environment variables.

    Raises:
        ValueError: If a numeric or boolean variable cannot be parsed.
    """
    result: dict[str, Any] = {}

    encoding = os.environ.get("DIALCHECK_ENCODING")
    if encoding is not None:
        result["encoding"] = encoding

    max_line_length = os.environ.get("DIALCHECK_MAX_LINE_LENGTH")
    if max_line_length is not None:
        try:
            result["max_line_length"] = int(max_line_length)
        except ValueError as e:
            raise ValueError(
                f"max_line_length must be an integer, got {max_line_length!r}"
            ) from e

    for env_var, config_key in (
        ("DIALCHECK_STRICT_ESCAPES", "strict_escapes"),
        ("DIALCHECK_PARALLEL", "parallel"),
    ):
        value = os.environ.get(env_var)
        if value is not None:
            result[config_key] = _parse_bool(config_key, value)

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple configuration dictionaries.

    Later dictionaries take precedence over earlier ones.
    """
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
) -> DialcheckConfig:
    """Load configuration with full precedence chain.

    Loads configuration from multiple sources and merges them with the following
    precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (DIALCHECK_*)
    3. .dialcheckrc file
    4. pyproject.toml [tool.dialcheck] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved DialcheckConfig instance.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    pyproject_config = _load_from_pyproject(start_dir)
    rc_config = _load_from_dialcheckrc(start_dir)
    env_config = _load_from_env()
    cli_config = cli_overrides or {}

    valid_fields = _get_config_field_names()
    cli_config = {k: v for k, v in cli_config.items() if k in valid_fields and v is not None}

    merged = _merge_configs(
        pyproject_config,
        rc_config,
        env_config,
        cli_config,
    )

    return DialcheckConfig(**merged)
