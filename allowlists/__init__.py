"""Named file-path allowlists gating features to a fixed set of callers.

Public API:
    is_allowlisted()      — query: is this path allowed under this allowlist?
    AllowlistInfo         — one loaded allowlist (entries + EmptyPolicy)
    EmptyPolicy           — what an empty allowlist means
    AllowlistRegistry     — immutable name → AllowlistInfo table
    get_registry()        — the process-wide registry, built on first use
    configure()           — set Config before first use
    UnknownAllowlistError — raised for names outside the fixed set
"""

from allowlists.config import Config, load_config
from allowlists.errors import (
    AllowlistError,
    RegistryAlreadyInitializedError,
    UnknownAllowlistError,
)
from allowlists.info import AllowlistInfo, EmptyPolicy
from allowlists.registry import (
    KNOWN_ALLOWLISTS,
    AllowlistDefinition,
    AllowlistRegistry,
    configure,
    get_registry,
    is_allowlisted,
)

__all__ = [
    "KNOWN_ALLOWLISTS",
    "AllowlistDefinition",
    "AllowlistError",
    "AllowlistInfo",
    "AllowlistRegistry",
    "Config",
    "EmptyPolicy",
    "RegistryAlreadyInitializedError",
    "UnknownAllowlistError",
    "configure",
    "get_registry",
    "is_allowlisted",
    "load_config",
]
