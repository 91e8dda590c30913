"""Process-wide registry of named allowlists.

Public API:
    is_allowlisted(name, path) — the gate query used by callers
    get_registry()             — thread-safe accessor, builds the registry once
    configure(config)          — inject Config before first use

The set of allowlist names and their EmptyPolicy is fixed in
KNOWN_ALLOWLISTS. Asking about any other name raises UnknownAllowlistError.

Thread-safety:
    The default registry is built at most once, under ``_registry_lock``
    (double-checked). It is published only after every allowlist is loaded, so
    a thread never sees a partial table. Once built, the registry and every
    AllowlistInfo are immutable and queries take no lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from allowlists.config import Config, load_config
from allowlists.errors import RegistryAlreadyInitializedError, UnknownAllowlistError
from allowlists.info import AllowlistInfo, EmptyPolicy
from allowlists.loader import load_allowlist
from allowlists.utils.logger import PerformanceLogger, configure_logging, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AllowlistDefinition:
    """A logical allowlist name plus the policy its empty list follows."""

    name: str
    policy: EmptyPolicy = EmptyPolicy.DENY_ALL_WHEN_EMPTY


KNOWN_ALLOWLISTS: tuple[AllowlistDefinition, ...] = (
    AllowlistDefinition("weak_imports"),
    AllowlistDefinition(
        "test_allowlist_empty_allow_all", EmptyPolicy.ALLOW_ALL_WHEN_EMPTY
    ),
    AllowlistDefinition("test_allowlist_empty_allow_none"),
    AllowlistDefinition("test_allowlist"),
)


class AllowlistRegistry:
    """Immutable mapping of allowlist name to AllowlistInfo."""

    def __init__(self, table: Mapping[str, AllowlistInfo]) -> None:
        self._table: Mapping[str, AllowlistInfo] = MappingProxyType(dict(table))

    @classmethod
    def load(
        cls,
        definitions: Iterable[AllowlistDefinition] = KNOWN_ALLOWLISTS,
        config: Optional[Config] = None,
    ) -> "AllowlistRegistry":
        """Read every defined allowlist from disk. Missing files load as empty."""
        config = config or Config.defaults()
        definitions = tuple(definitions)
        table: dict[str, AllowlistInfo] = {}
        with PerformanceLogger(
            "Allowlist registry load", logger=logger, allowlists=len(definitions)
        ):
            for definition in definitions:
                table[definition.name] = load_allowlist(
                    definition.name, definition.policy, config
                )
        return cls(table)

    # ── Read API ──────────────────────────────────────────────────────────────

    def get(self, name: str) -> AllowlistInfo:
        try:
            return self._table[name]
        except KeyError:
            logger.critical("Unknown allowlist requested", allowlist=name)
            raise UnknownAllowlistError(name) from None

    def is_allowlisted(self, name: str, path: str) -> bool:
        """Return whether ``path`` is allowed under allowlist ``name``.

        Non-empty list: exact membership. Empty list: True only for
        ALLOW_ALL_WHEN_EMPTY.

        Raises:
            UnknownAllowlistError: ``name`` is not a registered allowlist.
        """
        info = self.get(name)
        if not info.empty():
            return info.is_allowlisted(path)
        return info.policy is EmptyPolicy.ALLOW_ALL_WHEN_EMPTY

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)


# ─── Default registry ─────────────────────────────────────────────────────────

_registry: Optional[AllowlistRegistry] = None
_registry_config: Optional[Config] = None
_registry_lock = threading.Lock()


def configure(config: Config) -> None:
    """Set the Config used to build the default registry.

    Must run before the first query; the registry never reloads.

    Raises:
        RegistryAlreadyInitializedError: The default registry was already built.
    """
    global _registry_config
    with _registry_lock:
        if _registry is not None:
            raise RegistryAlreadyInitializedError()
        _registry_config = config
    configure_logging(config.logging.level, config.logging.json_output)


def get_registry() -> AllowlistRegistry:
    """Return the default registry, building it on first call.

    Without a prior configure(), the first build reads its Config through
    load_config() (``.allowlists/config.yaml`` or defaults).
    """
    global _registry
    registry = _registry
    if registry is not None:
        return registry
    with _registry_lock:
        if _registry is None:
            config = _registry_config
            if config is None:
                config = load_config()
                if config.path is not None:
                    configure_logging(config.logging.level, config.logging.json_output)
            _registry = AllowlistRegistry.load(KNOWN_ALLOWLISTS, config)
            logger.info("Allowlist registry initialized", allowlists=sorted(_registry.names))
        return _registry


def is_allowlisted(allowlist: str, path: str) -> bool:
    """Return whether ``path`` is allowed under the named allowlist.

    Raises:
        UnknownAllowlistError: ``allowlist`` is not one of KNOWN_ALLOWLISTS.
    """
    return get_registry().is_allowlisted(allowlist, path)


def _reset_registry() -> None:
    """Drop the default registry and its config. Test use only."""
    global _registry, _registry_config
    with _registry_lock:
        _registry = None
        _registry_config = None
