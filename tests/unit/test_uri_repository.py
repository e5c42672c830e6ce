"""Unit tests for uri_repository.repository.UriRepository.

Backends are replaced by ``MagicMock(spec=ResourceRepository)`` doubles so
that the tests assert pure forwarding: the path handed to the backend and
the value handed back to the caller.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from uri_repository import (
    InMemoryResourceRepository,
    InvalidArgumentError,
    InvalidUriError,
    RepositoryFactoryError,
    Resource,
    ResourceCollection,
    ResourceRepository,
    SchemeNotSupportedError,
    SchemeRegistry,
    UriRepository,
)


def _mock_repo() -> MagicMock:
    return MagicMock(spec=ResourceRepository)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegistration:
    def setup_method(self) -> None:
        self.repo = UriRepository()

    def test_register_repository(self):
        backend = _mock_repo()
        backend.get.return_value = "RESULT"
        self.repo.register("scheme", backend)

        assert self.repo.get("scheme:///path/to/resource") == "RESULT"
        backend.get.assert_called_once_with("/path/to/resource")

    def test_register_repository_factory(self):
        backend = _mock_repo()
        backend.get.return_value = "RESULT"
        self.repo.register("scheme", lambda: backend)

        assert self.repo.get("scheme:///path/to/resource") == "RESULT"
        backend.get.assert_called_once_with("/path/to/resource")

    def test_register_expects_valid_repository_factory(self):
        with pytest.raises(InvalidArgumentError):
            self.repo.register("scheme", "foo")  # type: ignore[arg-type]

    def test_register_expects_valid_scheme(self):
        with pytest.raises(InvalidArgumentError):
            self.repo.register(object(), _mock_repo())  # type: ignore[arg-type]

    def test_register_expects_alphabetic_scheme(self):
        with pytest.raises(InvalidArgumentError):
            self.repo.register("foo1", _mock_repo())

    def test_repository_factory_must_return_repository(self):
        self.repo.register("scheme", lambda: "foo")  # type: ignore[arg-type,return-value]

        with pytest.raises(RepositoryFactoryError):
            self.repo.get("scheme:///path/to/resource")
        with pytest.raises(RepositoryFactoryError):
            self.repo.get("scheme:///path/to/resource")

    def test_get_supported_schemes(self):
        backend = _mock_repo()
        assert self.repo.supported_schemes() == []

        self.repo.register("resource", backend)
        assert self.repo.supported_schemes() == ["resource"]

        self.repo.register("namespace", backend)
        assert self.repo.supported_schemes() == ["resource", "namespace"]

        self.repo.unregister("resource")
        assert self.repo.supported_schemes() == ["namespace"]

        self.repo.unregister("namespace")
        assert self.repo.supported_schemes() == []

    def test_shared_registry(self):
        registry = SchemeRegistry()
        first = UriRepository(registry)
        second = UriRepository(registry)

        first.register("scheme", _mock_repo())
        assert second.supported_schemes() == ["scheme"]
        assert first.registry is second.registry is registry


# ---------------------------------------------------------------------------
# get / contains / find
# ---------------------------------------------------------------------------


class TestGet:
    def setup_method(self) -> None:
        self.repo = UriRepository()

    def test_get_expects_registered_scheme(self):
        with pytest.raises(SchemeNotSupportedError):
            self.repo.get("scheme:///path/to/resource")

    def test_get_cant_use_unregistered_scheme(self):
        self.repo.register("scheme", _mock_repo())
        self.repo.unregister("scheme")

        with pytest.raises(SchemeNotSupportedError):
            self.repo.get("scheme:///path/to/resource")

    def test_get_expects_valid_uri(self):
        with pytest.raises(InvalidUriError):
            self.repo.get("foo")

    def test_invalid_uri_checked_before_lookup(self):
        factory = MagicMock()
        self.repo.register("scheme", lambda: factory())
        with pytest.raises(InvalidUriError):
            self.repo.get("scheme://no-leading-slash")
        factory.assert_not_called()

    def test_backend_error_propagates_unchanged(self):
        backend = _mock_repo()
        error = KeyError("/missing")
        backend.get.side_effect = error
        self.repo.register("scheme", backend)

        with pytest.raises(KeyError) as exc_info:
            self.repo.get("scheme:///missing")
        assert exc_info.value is error

    def test_routes_by_scheme(self):
        resource_backend = _mock_repo()
        namespace_backend = _mock_repo()
        self.repo.register("resource", resource_backend)
        self.repo.register("namespace", namespace_backend)

        self.repo.get("namespace:///acme")
        namespace_backend.get.assert_called_once_with("/acme")
        resource_backend.get.assert_not_called()

    def test_factory_deferred_until_first_use(self):
        calls: list[int] = []
        backend = _mock_repo()

        def factory() -> ResourceRepository:
            calls.append(1)
            return backend

        self.repo.register("scheme", factory)
        assert calls == []

        self.repo.get("scheme:///a")
        self.repo.contains("scheme:///b")
        self.repo.find("scheme:///*")
        assert calls == [1]


class TestContains:
    def setup_method(self) -> None:
        self.repo = UriRepository()

    def test_contains(self):
        backend = _mock_repo()
        backend.contains.side_effect = [True, False]
        self.repo.register("scheme", backend)

        assert self.repo.contains("scheme:///path/to/resource-1") is True
        assert self.repo.contains("scheme:///path/to/resource-2") is False
        assert [c.args for c in backend.contains.call_args_list] == [
            ("/path/to/resource-1",),
            ("/path/to/resource-2",),
        ]

    def test_contains_expects_valid_uri(self):
        with pytest.raises(InvalidUriError):
            self.repo.contains("foo")

    def test_contains_expects_registered_scheme(self):
        with pytest.raises(SchemeNotSupportedError):
            self.repo.contains("scheme:///path")


class TestFind:
    def setup_method(self) -> None:
        self.repo = UriRepository()

    def test_find(self):
        backend = _mock_repo()
        result = object()
        backend.find.return_value = result
        self.repo.register("scheme", backend)

        assert self.repo.find("scheme:///path/to/res*") is result
        backend.find.assert_called_once_with("/path/to/res*")

    def test_find_expects_valid_uri(self):
        with pytest.raises(InvalidUriError):
            self.repo.find("foo")

    def test_find_expects_registered_scheme(self):
        with pytest.raises(SchemeNotSupportedError):
            self.repo.find("scheme:///path/*")


# ---------------------------------------------------------------------------
# get_by_tag / get_tags
# ---------------------------------------------------------------------------


class TestAggregates:
    def setup_method(self) -> None:
        self.repo = UriRepository()

    def test_get_by_tag_checks_all_repositories(self):
        first = _mock_repo()
        second = _mock_repo()
        self.repo.register("resource", first)
        self.repo.register("namespace", second)

        foo = Resource(path="/foo")
        bar = Resource(path="/bar")
        first.get_by_tag.return_value = ResourceCollection([foo])
        second.get_by_tag.return_value = ResourceCollection([bar])

        assert self.repo.get_by_tag("acme/tag") == ResourceCollection([foo, bar])
        first.get_by_tag.assert_called_once_with("acme/tag")
        second.get_by_tag.assert_called_once_with("acme/tag")

    def test_get_by_tag_keeps_duplicates(self):
        shared = Resource(path="/shared")
        first = _mock_repo()
        second = _mock_repo()
        first.get_by_tag.return_value = [shared]
        second.get_by_tag.return_value = [shared]
        self.repo.register("resource", first)
        self.repo.register("namespace", second)

        assert self.repo.get_by_tag("tag") == [shared, shared]

    def test_get_by_tag_without_repositories(self):
        assert self.repo.get_by_tag("tag") == ResourceCollection()

    def test_get_by_tag_aborts_on_factory_error(self):
        first = _mock_repo()
        first.get_by_tag.return_value = []
        self.repo.register("resource", first)
        self.repo.register("namespace", lambda: "foo")  # type: ignore[arg-type,return-value]

        with pytest.raises(RepositoryFactoryError):
            self.repo.get_by_tag("tag")

    def test_get_by_tag_aborts_on_backend_error(self):
        first = _mock_repo()
        first.get_by_tag.side_effect = RuntimeError("boom")
        second = _mock_repo()
        self.repo.register("resource", first)
        self.repo.register("namespace", second)

        with pytest.raises(RuntimeError, match="boom"):
            self.repo.get_by_tag("tag")
        second.get_by_tag.assert_not_called()

    def test_get_tags_returns_union_from_all_repositories(self):
        first = _mock_repo()
        second = _mock_repo()
        first.get_tags.return_value = ["foo"]
        second.get_tags.return_value = ["foo", "bar"]
        self.repo.register("resource", first)
        self.repo.register("namespace", second)

        assert self.repo.get_tags() == ["foo", "bar"]
        first.get_tags.assert_called_once_with()
        second.get_tags.assert_called_once_with()

    def test_get_tags_without_repositories(self):
        assert self.repo.get_tags() == []


# ---------------------------------------------------------------------------
# End to end with the in-memory backend
# ---------------------------------------------------------------------------


class TestWithInMemoryBackends:
    def setup_method(self) -> None:
        resources = InMemoryResourceRepository(
            [
                Resource(path="/acme/blog/config.yml", body="title: Blog", tags=["acme/config"]),
                Resource(path="/acme/blog/style.css", body="body {}"),
            ]
        )
        namespaces = InMemoryResourceRepository(
            [Resource(path="/acme/blog", tags=["acme/config", "acme/ns"])]
        )
        self.repo = UriRepository()
        self.repo.register("resource", resources)
        self.repo.register("namespace", lambda: namespaces)

    def test_get(self):
        assert self.repo.get("resource:///acme/blog/config.yml").body == "title: Blog"

    def test_contains(self):
        assert self.repo.contains("namespace:///acme/blog") is True
        assert self.repo.contains("namespace:///acme/blog/config.yml") is False

    def test_find(self):
        found = self.repo.find("resource:///acme/blog/*")
        assert [r.path for r in found] == ["/acme/blog/config.yml", "/acme/blog/style.css"]

    def test_get_by_tag(self):
        found = self.repo.get_by_tag("acme/config")
        assert found.paths() == ["/acme/blog/config.yml", "/acme/blog"]

    def test_get_tags(self):
        assert self.repo.get_tags() == ["acme/config", "acme/ns"]
