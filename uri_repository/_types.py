"""Shared types for the URI repository.

Holds the parsed URI value and the exception hierarchy.  Nothing in this
module depends on a concrete repository backend.
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Parsed URI
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedUri:
    """A validated ``<scheme>://<path>`` pair.

    ``path`` always starts with ``/``; everything after the separator,
    including any ``?`` or ``#`` suffix, belongs to it.
    """

    scheme: str
    path: str

    def __str__(self) -> str:
        return f"{self.scheme}://{self.path}"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UriRepositoryError(Exception):
    """Base exception for all URI repository errors."""


class InvalidArgumentError(UriRepositoryError, ValueError):
    """Raised when a scheme name or a registration value is malformed."""


class InvalidUriError(UriRepositoryError, ValueError):
    """Raised when a URI string does not have the ``scheme:///path`` shape."""


class SchemeNotSupportedError(UriRepositoryError, LookupError):
    """Raised when no repository is registered for a scheme."""

    def __init__(self, scheme: str, supported: list[str] | None = None) -> None:
        self.scheme = scheme
        self.supported = list(supported or [])
        known = ", ".join(self.supported) if self.supported else "none"
        super().__init__(f'The scheme "{scheme}" is not supported. Supported schemes: {known}.')


class RepositoryFactoryError(UriRepositoryError, TypeError):
    """Raised when a registered factory does not return a repository."""

    def __init__(self, scheme: str, returned: object) -> None:
        self.scheme = scheme
        self.returned_type = type(returned).__name__
        super().__init__(
            f'The factory registered for scheme "{scheme}" must return a '
            f"ResourceRepository, got {self.returned_type}."
        )


class ResourceNotFoundError(UriRepositoryError, LookupError):
    """Raised by the in-memory repository when a path has no resource."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f'The resource "{path}" does not exist.')
