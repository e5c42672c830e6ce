"""Resource value types returned by repositories."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from pydantic import BaseModel, Field, field_validator


class Resource(BaseModel):
    """A single addressable resource."""

    path: str = Field(
        ...,
        min_length=1,
        description="Absolute path of the resource inside its repository, e.g. '/acme/blog/css/style.css'.",
    )
    body: str | None = Field(
        default=None,
        description="Text content of the resource, or None for directory-like resources.",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Tags attached to the resource.",
    )

    @field_validator("path")
    @classmethod
    def path_must_be_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"Resource path must start with '/', got {v!r}")
        return v

    @property
    def name(self) -> str:
        """The last path segment, or ``/`` for the root."""
        return self.path.rstrip("/").rsplit("/", 1)[-1] or "/"


class ResourceCollection(Sequence[Resource]):
    """Ordered list of resources.

    Order is always the order in which resources were added; no sorting
    or de-duplication happens here.
    """

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources: list[Resource] = list(resources)

    @overload
    def __getitem__(self, index: int) -> Resource: ...

    @overload
    def __getitem__(self, index: slice) -> ResourceCollection: ...

    def __getitem__(self, index: int | slice) -> Resource | ResourceCollection:
        if isinstance(index, slice):
            return ResourceCollection(self._resources[index])
        return self._resources[index]

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResourceCollection):
            return self._resources == other._resources
        if isinstance(other, list):
            return self._resources == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResourceCollection({self._resources!r})"

    def add(self, resource: Resource) -> None:
        self._resources.append(resource)

    def merge(self, resources: Iterable[Resource]) -> None:
        """Append every resource from *resources*, keeping their order."""
        self._resources.extend(resources)

    def paths(self) -> list[str]:
        return [r.path for r in self._resources]

    def to_list(self) -> list[Resource]:
        return list(self._resources)
