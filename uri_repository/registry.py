"""Scheme registry mapping URI schemes to repositories.

Each scheme is bound either to a ready :class:`ResourceRepository` or to
a zero-argument factory that produces one.  Factories are resolved on
first use and the result is cached for the lifetime of the binding.

Thread-safe: the scheme map is guarded by a re-entrant lock, and every
binding carries its own lock so that concurrent resolution of the same
scheme invokes its factory at most once.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from uri_repository._protocols import ResourceRepository
from uri_repository._types import (
    InvalidArgumentError,
    RepositoryFactoryError,
    SchemeNotSupportedError,
)
from uri_repository.uri import is_valid_scheme

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[], ResourceRepository]
RepositoryOrFactory = ResourceRepository | RepositoryFactory


def _is_repository(value: object) -> bool:
    # A class object carries the protocol's methods as attributes too, so
    # it has to be excluded explicitly.
    return not isinstance(value, type) and isinstance(value, ResourceRepository)


def _is_zero_arg_callable(value: object) -> bool:
    if not callable(value):
        return False
    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures.
        return True
    try:
        signature.bind()
    except TypeError:
        return False
    return True


@dataclass
class _Binding:
    """``Unresolved(factory)`` until resolved, then ``Resolved(repository)``."""

    factory: RepositoryFactory | None = None
    repository: ResourceRepository | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def resolved(self) -> bool:
        return self.repository is not None


class SchemeRegistry:
    """Registry of scheme to repository bindings.

    Iteration order is registration order.  Re-registering a scheme
    replaces its binding but keeps its position.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._bindings: dict[str, _Binding] = {}

    def register(self, scheme: str, repository: RepositoryOrFactory) -> None:
        """Bind *scheme* to a repository or a repository factory.

        Parameters
        ----------
        scheme:
            A non-empty string of ASCII letters, e.g. ``"resource"``.
        repository:
            A :class:`ResourceRepository` instance, or a callable taking
            no arguments that returns one.  Classes count as factories.

        Raises
        ------
        InvalidArgumentError
            If *scheme* is not alphabetic or *repository* is neither a
            repository nor a zero-argument callable.
        """
        if not is_valid_scheme(scheme):
            raise InvalidArgumentError(
                f"The scheme must be a non-empty string of letters, got {scheme!r}."
            )

        if _is_repository(repository):
            binding = _Binding(repository=repository)  # type: ignore[arg-type]
        elif _is_zero_arg_callable(repository):
            binding = _Binding(factory=repository)  # type: ignore[arg-type]
        else:
            raise InvalidArgumentError(
                f'The value registered for scheme "{scheme}" must be a ResourceRepository '
                f"or a callable without arguments, got {type(repository).__name__}."
            )

        with self._lock:
            replaced = scheme in self._bindings
            self._bindings[scheme] = binding

        logger.debug(
            "%s scheme %r (%s)",
            "Re-registered" if replaced else "Registered",
            scheme,
            "resolved" if binding.resolved else "factory",
            extra={"scheme": scheme},
        )

    def unregister(self, scheme: str) -> None:
        """Remove the binding for *scheme*.  Unknown schemes are ignored."""
        with self._lock:
            removed = self._bindings.pop(scheme, None) if isinstance(scheme, str) else None
        if removed is not None:
            logger.debug("Unregistered scheme %r", scheme, extra={"scheme": scheme})

    def supported_schemes(self) -> list[str]:
        """Return the registered schemes in registration order."""
        with self._lock:
            return list(self._bindings)

    def is_resolved(self, scheme: str) -> bool:
        """Return ``True`` if *scheme* is bound to a ready repository.

        Raises
        ------
        SchemeNotSupportedError
            If *scheme* is not registered.
        """
        return self._get_binding(scheme).resolved

    def resolve(self, scheme: str) -> ResourceRepository:
        """Return the repository bound to *scheme*, building it if needed.

        Raises
        ------
        SchemeNotSupportedError
            If *scheme* is not registered.
        RepositoryFactoryError
            If the bound factory returns something that is not a
            repository.  Nothing is cached in that case, so the factory
            runs again on the next attempt.
        """
        return self._resolve_binding(scheme, self._get_binding(scheme))

    def iter_repositories(self) -> Iterator[tuple[str, ResourceRepository]]:
        """Yield ``(scheme, repository)`` for every binding, in order.

        The set of bindings is captured when iteration starts; later
        (un)registrations do not affect an iteration in progress.
        Resolution errors propagate immediately.
        """
        with self._lock:
            snapshot = list(self._bindings.items())
        for scheme, binding in snapshot:
            yield scheme, self._resolve_binding(scheme, binding)

    def _get_binding(self, scheme: str) -> _Binding:
        with self._lock:
            binding = self._bindings.get(scheme) if isinstance(scheme, str) else None
            if binding is None:
                raise SchemeNotSupportedError(str(scheme), list(self._bindings))
            return binding

    def _resolve_binding(self, scheme: str, binding: _Binding) -> ResourceRepository:
        if binding.repository is not None:
            return binding.repository

        with binding.lock:
            # Double-checked locking
            if binding.repository is not None:
                return binding.repository

            assert binding.factory is not None
            repository = binding.factory()
            if not _is_repository(repository):
                logger.warning(
                    "Factory for scheme %r returned %s instead of a repository",
                    scheme,
                    type(repository).__name__,
                    extra={"scheme": scheme},
                )
                raise RepositoryFactoryError(scheme, repository)

            binding.repository = repository
            binding.factory = None
            logger.debug("Resolved factory for scheme %r", scheme, extra={"scheme": scheme})
            return repository

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)

    def __contains__(self, scheme: object) -> bool:
        with self._lock:
            return isinstance(scheme, str) and scheme in self._bindings
