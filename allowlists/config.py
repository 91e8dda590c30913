"""Config loading for the allowlist registry.

Reads an optional YAML file describing where allowlist files live and how
the registry logs. If no config file is found, defaults are used (the
registry runs without any config).

Config search order:
  1. ``config_path`` argument (explicit override, used by tests and embedders)
  2. ``.allowlists/config.yaml`` (working directory)

The default registry calls ``load_config()`` on its first build unless
``allowlists.registry.configure()`` supplied a Config beforehand.

Example::

    version: 1
    path_prefix: third_party/protobuf/compiler/allowlists/
    runfiles_workspace: google3
    runfiles_dir: /opt/app/bin/protoc.runfiles
    logging:
      level: WARNING
      json_output: true

Raises SystemExit on parse errors, a missing ``version`` field, or an invalid
log level. Which allowlists exist and their empty-policies are not
configurable; they are fixed in ``allowlists.registry``.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Optional

import yaml

from allowlists.constants import ALLOWLIST_PATH_PREFIX, DEFAULT_RUNFILES_WORKSPACE
from allowlists.utils.logger import get_logger

logger = get_logger(__name__)

# ─── Version constants ────────────────────────────────────────────────────────

SUPPORTED_CONFIG_VERSION = 1

SUPPORTED_VERSIONS: frozenset[int] = frozenset({1})

# ─── Validation sets ─────────────────────────────────────────────────────────

VALID_LOG_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)

DEFAULT_CONFIG_PATHS = [
    ".allowlists/config.yaml",
]


# ─── Dataclasses ─────────────────────────────────────────────────────────────


@dataclass
class LoggingConfig:
    """structlog settings applied when the registry is configured."""

    level: str = "INFO"
    json_output: bool = True


@dataclass
class Config:
    """Root configuration object.

    path_prefix:        Directory prefix joined with ``<name>.txt``.
    runfiles_workspace: Directory under the runfiles root holding the workspace.
    runfiles_dir:       Explicit runfiles root. None means "ask the resolver";
                        an empty string disables the runfiles tier.
    """

    version: int = SUPPORTED_CONFIG_VERSION
    path_prefix: str = ALLOWLIST_PATH_PREFIX
    runfiles_workspace: str = DEFAULT_RUNFILES_WORKSPACE
    runfiles_dir: Optional[str] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Optional[str] = None  # Path to the loaded config file, if any

    @classmethod
    def defaults(cls) -> "Config":
        return cls()

    @classmethod
    def from_dict(cls, raw: dict, path: Optional[str] = None) -> "Config":
        """Construct Config from a parsed YAML dict.

        Merges user-supplied values onto defaults; unknown keys are ignored.

        Raises:
            SystemExit(1): On an invalid logging.level value.
        """
        logging_raw = raw.get("logging") or {}
        level = str(logging_raw.get("level", "INFO")).upper()
        if level not in VALID_LOG_LEVELS:
            msg = (
                f"CONFIG ERROR: Invalid logging.level: '{level}'. "
                f"Supported values: {sorted(VALID_LOG_LEVELS)}."
            )
            print(msg, file=sys.stderr)
            raise SystemExit(1)

        return cls(
            version=raw.get("version", SUPPORTED_CONFIG_VERSION),
            path_prefix=raw.get("path_prefix", ALLOWLIST_PATH_PREFIX),
            runfiles_workspace=raw.get("runfiles_workspace", DEFAULT_RUNFILES_WORKSPACE),
            runfiles_dir=raw.get("runfiles_dir"),
            logging=LoggingConfig(
                level=level,
                json_output=bool(logging_raw.get("json_output", True)),
            ),
            path=path,
        )


# ─── Config loading ───────────────────────────────────────────────────────────


def load_config(config_path: Optional[str] = None) -> Config:
    """Load and validate the registry configuration.

    If no file is found at any search path, returns ``Config.defaults()``.
    If a file is found but invalid, writes an error to stderr and raises
    SystemExit(1).
    """
    search_paths: list[str] = []
    if config_path:
        search_paths.append(config_path)
    search_paths.extend(DEFAULT_CONFIG_PATHS)

    found_path: Optional[str] = None
    for candidate in search_paths:
        expanded = os.path.expanduser(candidate)
        if os.path.isfile(expanded):
            found_path = expanded
            break

    if found_path is None:
        logger.debug("No config file found — using defaults", searched=search_paths)
        return Config.defaults()

    logger.debug("Loading config", path=found_path)

    try:
        with open(found_path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        msg = f"CONFIG ERROR: Failed to parse {found_path}: {exc}"
        print(msg, file=sys.stderr)
        raise SystemExit(1)
    except OSError as exc:
        msg = f"CONFIG ERROR: Could not read {found_path}: {exc}"
        print(msg, file=sys.stderr)
        raise SystemExit(1)

    if not isinstance(raw, dict):
        if raw is None:
            msg = (
                f"CONFIG ERROR: {found_path} is missing the required 'version' field.\n"
                "Add 'version: 1' to the top of your config file."
            )
        else:
            msg = (
                f"CONFIG ERROR: {found_path} is not a valid YAML mapping.\n"
                "The config file must be a YAML dictionary at the top level."
            )
        print(msg, file=sys.stderr)
        raise SystemExit(1)

    version = raw.get("version")
    if version is None:
        msg = (
            f"CONFIG ERROR: {found_path} is missing the required 'version' field.\n"
            "Add 'version: 1' to the top of your config file."
        )
        print(msg, file=sys.stderr)
        raise SystemExit(1)

    if version not in SUPPORTED_VERSIONS:
        msg = (
            f"CONFIG ERROR: Unsupported config version: {version}. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}."
        )
        print(msg, file=sys.stderr)
        raise SystemExit(1)

    config = Config.from_dict(raw, path=found_path)
    logger.debug(
        "Config loaded",
        path=found_path,
        version=config.version,
        path_prefix=config.path_prefix,
    )
    return config
