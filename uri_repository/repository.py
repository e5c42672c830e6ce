"""URI repository: dispatch resource lookups by URI scheme.

Usage::

    from uri_repository import UriRepository, InMemoryResourceRepository

    repo = UriRepository()
    repo.register("resource", InMemoryResourceRepository)
    repo.get("resource:///acme/blog/config.yml")
    repo.find("resource:///acme/blog/*.yml")
    repo.get_by_tag("acme/tag")

Single-URI operations are forwarded to exactly one backend, selected by
the URI scheme.  Tag operations span every registered backend.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from uri_repository._protocols import ResourceRepository
from uri_repository.registry import RepositoryOrFactory, SchemeRegistry
from uri_repository.resources import Resource, ResourceCollection
from uri_repository.uri import parse_uri

logger = logging.getLogger(__name__)


class UriRepository:
    """Route ``scheme:///path`` lookups to per-scheme repositories.

    Parameters
    ----------
    registry:
        The scheme registry to dispatch through.  Pass a shared instance
        to let several consumers see the same bindings; a private one is
        created when omitted.
    """

    def __init__(self, registry: SchemeRegistry | None = None) -> None:
        self._registry = registry if registry is not None else SchemeRegistry()

    @property
    def registry(self) -> SchemeRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, scheme: str, repository: RepositoryOrFactory) -> None:
        """Bind *scheme* to a repository or zero-argument factory.

        See :meth:`SchemeRegistry.register`.
        """
        self._registry.register(scheme, repository)

    def unregister(self, scheme: str) -> None:
        self._registry.unregister(scheme)

    def supported_schemes(self) -> list[str]:
        return self._registry.supported_schemes()

    # ------------------------------------------------------------------
    # Single-backend operations
    # ------------------------------------------------------------------

    def get(self, uri: str) -> Resource:
        """Return the resource at *uri*.

        Raises
        ------
        InvalidUriError
            If *uri* is malformed.
        SchemeNotSupportedError
            If no repository is registered for the URI's scheme.
        """
        repository, path = self._route(uri)
        return repository.get(path)

    def contains(self, uri: str) -> bool:
        repository, path = self._route(uri)
        return repository.contains(path)

    def find(self, uri: str) -> Iterable[Resource]:
        """Return the resources matching the glob pattern in *uri*.

        The pattern is passed to the backend untouched.
        """
        repository, path = self._route(uri)
        return repository.find(path)

    def _route(self, uri: str) -> tuple[ResourceRepository, str]:
        parsed = parse_uri(uri)
        return self._registry.resolve(parsed.scheme), parsed.path

    # ------------------------------------------------------------------
    # Aggregate operations
    # ------------------------------------------------------------------

    def get_by_tag(self, tag: str) -> ResourceCollection:
        """Return every resource tagged *tag*, across all repositories.

        Results are concatenated in scheme registration order, each
        backend's own ordering preserved.  Nothing is de-duplicated.
        """
        resources = ResourceCollection()
        for scheme, repository in self._registry.iter_repositories():
            found = repository.get_by_tag(tag)
            resources.merge(found)
            logger.debug("Scheme %r: merged results for tag %r", scheme, tag)
        return resources

    def get_tags(self) -> list[str]:
        """Return the union of all repositories' tags.

        Each tag appears once, in order of first appearance.
        """
        tags: dict[str, None] = {}
        for _scheme, repository in self._registry.iter_repositories():
            tags.update(dict.fromkeys(repository.get_tags()))
        return list(tags)

