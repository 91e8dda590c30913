"""AllowlistInfo: one loaded allowlist and its empty-list policy."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable


class EmptyPolicy(enum.Enum):
    """What an allowlist with no entries means."""

    DENY_ALL_WHEN_EMPTY = "deny_all_when_empty"
    ALLOW_ALL_WHEN_EMPTY = "allow_all_when_empty"


@dataclass(frozen=True)
class AllowlistInfo:
    """Immutable set of allowed paths plus the policy applied when it is empty.

    Fields:
        entries: Literal allowed paths. Matching is exact string equality.
        policy:  Interpretation of an empty ``entries`` set.
    """

    entries: frozenset[str] = field(default_factory=frozenset)
    policy: EmptyPolicy = EmptyPolicy.DENY_ALL_WHEN_EMPTY

    def __post_init__(self) -> None:
        if not isinstance(self.entries, frozenset):
            object.__setattr__(self, "entries", frozenset(self.entries))

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[str],
        policy: EmptyPolicy = EmptyPolicy.DENY_ALL_WHEN_EMPTY,
    ) -> "AllowlistInfo":
        return cls(entries=frozenset(entries), policy=policy)

    def is_allowlisted(self, path: str) -> bool:
        """Exact membership test. The registry applies ``policy`` for empty lists."""
        return path in self.entries

    def empty(self) -> bool:
        return not self.entries

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        return len(self.entries)
