"""URI repository: scheme-based dispatch over resource repositories.

Usage::

    from uri_repository import UriRepository

    repo = UriRepository()
    repo.register("resource", resource_repo)
    repo.register("namespace", lambda: build_namespace_repo())

    repo.get("resource:///acme/blog/config.yml")
    repo.contains("namespace:///acme/blog")
    repo.get_tags()

Backends implement the :class:`ResourceRepository` protocol.  Factories
are resolved on first use and cached.
"""

from ._protocols import ResourceRepository
from ._types import (
    InvalidArgumentError,
    InvalidUriError,
    ParsedUri,
    RepositoryFactoryError,
    ResourceNotFoundError,
    SchemeNotSupportedError,
    UriRepositoryError,
)
from .memory import InMemoryResourceRepository
from .registry import RepositoryFactory, RepositoryOrFactory, SchemeRegistry
from .repository import UriRepository
from .resources import Resource, ResourceCollection
from .uri import is_valid_scheme, parse_uri

__all__ = [
    # Dispatch
    "UriRepository",
    "SchemeRegistry",
    "RepositoryFactory",
    "RepositoryOrFactory",
    # URIs
    "ParsedUri",
    "parse_uri",
    "is_valid_scheme",
    # Protocols
    "ResourceRepository",
    # Types
    "Resource",
    "ResourceCollection",
    "InMemoryResourceRepository",
    # Exceptions
    "UriRepositoryError",
    "InvalidArgumentError",
    "InvalidUriError",
    "SchemeNotSupportedError",
    "RepositoryFactoryError",
    "ResourceNotFoundError",
]
