"""
Fixture value objects - Directives, applied fixtures and test identity.

A directive is the parsed form of one fixture declaration. Once applied,
it becomes an AppliedFixture carrying the factory's result, which the
revert orchestrator hands back to the factory on teardown.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import InvalidAnnotation, InvalidFixtureDirective


class AnnotationScope(str, Enum):
    """Annotation grouping on a test case."""

    CLASS = "class"
    METHOD = "method"


class DbIsolationState(str, Enum):
    """
    Declared database isolation policy for a test.

    A test without the annotation has no state (None), which the
    isolation checker interprets as its default policy.
    """

    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def from_annotation(cls, value: str) -> "DbIsolationState":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise InvalidAnnotation(f"Invalid db isolation value: {value!r}") from None


@dataclass(frozen=True)
class TestIdentity:
    """Stable identity of a test method, used directly as a cache key."""

    __test__ = False

    class_name: str
    method_name: str


@dataclass(frozen=True)
class TestRef:
    """
    Reference to the running test.

    Carries the test class object so local fixture factories registered
    on it can be resolved.
    """

    __test__ = False

    test_class: type
    method_name: str

    @property
    def identity(self) -> TestIdentity:
        return TestIdentity(
            class_name=f"{self.test_class.__module__}.{self.test_class.__qualname__}",
            method_name=self.method_name,
        )


@dataclass(frozen=True)
class FixtureDirective:
    """One declared fixture use."""

    factory: str
    name: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "FixtureDirective":
        """
        Build a directive from parser metadata.

        Args:
            metadata: Mapping with "factory", optional "name" and "data"

        Raises:
            InvalidFixtureDirective: If the factory is missing or empty
        """
        factory = metadata.get("factory")
        if not factory:
            raise InvalidFixtureDirective(f"Fixture directive has no factory: {dict(metadata)!r}")
        return cls(
            factory=factory,
            name=metadata.get("name") or None,
            data=dict(metadata.get("data") or {}),
        )

    def with_factory(self, factory: str) -> "FixtureDirective":
        return FixtureDirective(factory=factory, name=self.name, data=self.data)

    def with_data(self, data: Mapping[str, Any]) -> "FixtureDirective":
        return FixtureDirective(factory=self.factory, name=self.name, data=dict(data))


@dataclass(frozen=True)
class AppliedFixture:
    """A directive plus the result its factory returned on apply."""

    directive: FixtureDirective
    result: dict[str, Any] | None = None

    @property
    def factory(self) -> str:
        return self.directive.factory

    @property
    def name(self) -> str | None:
        return self.directive.name


class FixtureResult(Mapping[str, Any]):
    """
    Read-only wrapper around a named fixture result.

    Persisted into fixture storage so later fixtures and assertions can
    read values either by key or by attribute:

        storage.get("customer1")["id"]
        storage.get("customer1").id
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = dict(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, key: str) -> Any:
        try:
            return self.__dict__["_data"][key]
        except KeyError:
            raise AttributeError(key) from None

    def __repr__(self) -> str:
        return f"FixtureResult({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)
