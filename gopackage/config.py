"""Configuration file loader for gopackage.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``gopackage.toml``: settings under ``[gopackage]`` table
- ``pyproject.toml``: settings under ``[tool.gopackage]`` table

Discovery order:

1. Explicit path from ``--config`` or ``GOPACKAGE_CONFIG``
2. ``gopackage.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.gopackage]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``gopackage.toml``)::

    [gopackage]
    strict_collection = true
    go_binary = "/usr/local/go/bin/go"
    build_dir = "gopackage"
    record_file = "gopackage.json"
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from gopackage.exceptions import ConfigError
from gopackage.utils.logger import get_logger
from gopackage.constants import (
    DEFAULT_BUILD_DIR,
    DEFAULT_GO_BINARY,
    DEFAULT_RECORD_FILE,
    DEFAULT_STRICT_COLLECTION,
)

logger = get_logger("config")

#: Option name -> expected Python type.
_OPTION_TYPES: Dict[str, type] = {
    "strict_collection": bool,
    "go_binary": str,
    "build_dir": str,
    "record_file": str,
}

_TYPE_NAMES = {bool: "a boolean", str: "a string"}


@dataclass
class GoPackageConfig:
    """Parsed and validated gopackage configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        strict_collection: Abort ``load`` on the first failed toolchain
            query instead of skipping the package or import.
        go_binary: Go executable to invoke.
        build_dir: Build GOPATH, relative to the working directory.
        record_file: Record file, relative to the working directory.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    strict_collection: bool = DEFAULT_STRICT_COLLECTION
    go_binary: str = DEFAULT_GO_BINARY
    build_dir: str = DEFAULT_BUILD_DIR
    record_file: str = DEFAULT_RECORD_FILE

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration options as a dictionary for debug logging."""
        return {name: getattr(self, name) for name in _OPTION_TYPES}


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    gopackage_toml = cwd / "gopackage.toml"
    if gopackage_toml.is_file():
        logger.debug("Found gopackage.toml: %s", gopackage_toml)
        return gopackage_toml

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_gopackage_section(pyproject_toml):
        logger.debug("Found [tool.gopackage] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_gopackage_section(path: Path) -> bool:
    """Check if pyproject.toml contains a [tool.gopackage] section.

    Parse errors are ignored so an unrelated broken pyproject.toml falls
    back to defaults.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return "gopackage" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> GoPackageConfig:
    """Load and validate gopackage configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`GoPackageConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return GoPackageConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("gopackage", {})
    else:
        section = raw.get("gopackage", {})

    if not section:
        logger.debug("Config file found but no gopackage section, using defaults")
        return GoPackageConfig(source_path=resolved)

    config = _parse_section(section, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is invalid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: str,
) -> GoPackageConfig:
    """Validate a ``[gopackage]`` or ``[tool.gopackage]`` table.

    Raises:
        ConfigError: Unknown keys, wrong types or empty strings.
    """
    unknown = set(section.keys()) - set(_OPTION_TYPES)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    config = GoPackageConfig()

    for option, expected in _OPTION_TYPES.items():
        if option not in section:
            continue

        val = section[option]
        if not isinstance(val, expected):
            raise ConfigError(
                f"{option} must be {_TYPE_NAMES[expected]}, got {type(val).__name__}",
                config_path=config_path,
                option=option,
            )
        if expected is str and not val.strip():
            raise ConfigError(
                f"{option} must not be empty",
                config_path=config_path,
                option=option,
            )
        setattr(config, option, val)

    return config
