"""In-memory resource repository.

A dictionary-backed :class:`ResourceRepository` for tests, fixtures and
small applications that build their resources in code.  Patterns passed
to :meth:`InMemoryResourceRepository.find` use shell-style globbing via
:mod:`fnmatch` (``*``, ``?``, ``[seq]``), matched case-sensitively
against the full path.
"""

from __future__ import annotations

import fnmatch
import logging
import threading
from collections.abc import Iterable

from uri_repository._types import InvalidArgumentError, ResourceNotFoundError
from uri_repository.resources import Resource, ResourceCollection

logger = logging.getLogger(__name__)


def _check_path(path: str) -> None:
    if not isinstance(path, str) or not path.startswith("/"):
        raise InvalidArgumentError(f"Expected an absolute path starting with '/', got {path!r}.")


class InMemoryResourceRepository:
    """Thread-safe in-memory repository keyed by absolute path."""

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._lock = threading.Lock()
        self._resources: dict[str, Resource] = {}
        for resource in resources:
            self.add(resource)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, resource: Resource) -> None:
        """Store *resource*, replacing any resource at the same path."""
        with self._lock:
            self._resources[resource.path] = resource

    def remove(self, path: str) -> bool:
        """Remove the resource at *path*.  Returns ``False`` if absent."""
        _check_path(path)
        with self._lock:
            return self._resources.pop(path, None) is not None

    def tag(self, path: str, tag: str) -> None:
        """Attach *tag* to the resource at *path*.

        Raises:
            ResourceNotFoundError: If no resource is stored at *path*.
        """
        with self._lock:
            resource = self._lookup(path)
            if tag not in resource.tags:
                self._resources[path] = resource.model_copy(update={"tags": [*resource.tags, tag]})

    def untag(self, path: str, tag: str) -> None:
        with self._lock:
            resource = self._lookup(path)
            if tag in resource.tags:
                remaining = [t for t in resource.tags if t != tag]
                self._resources[path] = resource.model_copy(update={"tags": remaining})

    # ------------------------------------------------------------------
    # ResourceRepository
    # ------------------------------------------------------------------

    def get(self, path: str) -> Resource:
        with self._lock:
            return self._lookup(path)

    def contains(self, path: str) -> bool:
        _check_path(path)
        with self._lock:
            return path in self._resources

    def find(self, pattern: str) -> ResourceCollection:
        """Return resources whose path matches *pattern*, sorted by path."""
        _check_path(pattern)
        with self._lock:
            matches = [
                r for p, r in self._resources.items() if fnmatch.fnmatchcase(p, pattern)
            ]
        logger.debug("Pattern %r matched %d resource(s)", pattern, len(matches))
        return ResourceCollection(sorted(matches, key=lambda r: r.path))

    def get_by_tag(self, tag: str) -> ResourceCollection:
        """Return resources carrying *tag*, sorted by path."""
        with self._lock:
            tagged = [r for r in self._resources.values() if tag in r.tags]
        return ResourceCollection(sorted(tagged, key=lambda r: r.path))

    def get_tags(self) -> list[str]:
        """Return every tag in use, sorted."""
        with self._lock:
            return sorted({t for r in self._resources.values() for t in r.tags})

    def _lookup(self, path: str) -> Resource:
        _check_path(path)
        try:
            return self._resources[path]
        except KeyError:
            raise ResourceNotFoundError(path) from None

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)
