"""Errors raised by the allowlist registry."""

from __future__ import annotations


class AllowlistError(Exception):
    """Base class for allowlist registry errors."""


class UnknownAllowlistError(AllowlistError, AssertionError):
    """Raised when a query names an allowlist that is not registered.

    The set of allowlist names is fixed when the package is built, so this is
    a programming mistake in the caller, reported like a failed assertion.
    It is never turned into a plain ``False``.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown allowlist: {name!r}")


class RegistryAlreadyInitializedError(AllowlistError):
    """Raised when configure() is called after the default registry was built."""

    def __init__(self, message: str = "Allowlist registry is already initialized") -> None:
        super().__init__(message)
