"""Repository protocol definition.

This is the capability set every backend must satisfy.  The dispatcher
checks it at registration time and again when a factory is resolved,
never by probing attributes at call time.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from uri_repository.resources import Resource


@runtime_checkable
class ResourceRepository(Protocol):
    """Look up resources by absolute path, glob pattern or tag."""

    def get(self, path: str) -> Resource:
        """Return the resource stored at *path*.

        Raises:
            Whatever the backend raises for a missing resource.
        """
        ...

    def contains(self, path: str) -> bool:
        """Return ``True`` if a resource exists at *path*."""
        ...

    def find(self, pattern: str) -> Iterable[Resource]:
        """Return every resource matching the glob *pattern*."""
        ...

    def get_by_tag(self, tag: str) -> Iterable[Resource]:
        """Return every resource carrying *tag*, in backend order."""
        ...

    def get_tags(self) -> Sequence[str]:
        """Return every tag known to the backend."""
        ...
