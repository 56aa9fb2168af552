"""
Attribute annotation adapter - Annotations declared with decorators.

Implements the AnnotationReader and DataProvider protocols for plain
Python test classes. Decorators attach raw annotation strings to test
classes and methods; the strings are parsed later by a DirectiveParser.

Example:

    @db_isolation("enabled")
    class TestCustomer:
        @data_fixture("CustomerFixture as:customer1")
        @data_fixture("AddressFixture with:{\"customer_id\": \"$customer1.id$\"}")
        def test_address(self):
            ...

Stacked decorators keep their top-to-bottom declaration order.
"""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from src.domain.fixtures import AnnotationScope, DbIsolationState, TestRef

ANNOTATIONS_ATTR = "__fixture_annotations__"
DATA_PROVIDER_ATTR = "__fixture_data_provider__"

DATA_FIXTURE = "dataFixture"
DATA_FIXTURE_BEFORE_TRANSACTION = "dataFixtureBeforeTransaction"
DB_ISOLATION = "dbIsolation"

T = TypeVar("T")

DataPayloads = Mapping[str, Mapping[str, Any]]


def annotate(key: str, value: str) -> Callable[[T], T]:
    """Attach a raw annotation value to a test class or method."""

    def decorator(target: T) -> T:
        # vars() so a subclass never mutates its parent's annotations
        own = vars(target).get(ANNOTATIONS_ATTR)
        if own is None:
            own = {}
            setattr(target, ANNOTATIONS_ATTR, own)
        own.setdefault(key, []).insert(0, value)
        return target

    return decorator


def data_fixture(raw: str, kind: str = DATA_FIXTURE) -> Callable[[T], T]:
    return annotate(kind, raw)


def db_isolation(state: str | DbIsolationState) -> Callable[[T], T]:
    value = state.value if isinstance(state, DbIsolationState) else state
    return annotate(DB_ISOLATION, value)


def fixture_data_provider(provider: DataPayloads | Callable[[], DataPayloads]) -> Callable[[T], T]:
    """Attach named fixture data (or a callable returning it) to a test class or method."""

    def decorator(target: T) -> T:
        setattr(target, DATA_PROVIDER_ATTR, provider)
        return target

    return decorator


def _own_annotations(target: Any) -> dict[str, list[str]]:
    try:
        return vars(target).get(ANNOTATIONS_ATTR) or {}
    except TypeError:
        return {}


class AttributeAnnotationReader:
    """
    Implements AnnotationReader protocol over decorator attributes.

    Class annotations are inherited along the MRO; a subclass replaces a
    base class's values key by key.

    Args:
        key_names: Renames decorator keys (DATA_FIXTURE, DB_ISOLATION, ...)
            to the annotation keys the controllers are configured with
    """

    def __init__(self, key_names: Mapping[str, str] | None = None) -> None:
        self._key_names = dict(key_names or {})

    def get_annotations(self, test: TestRef) -> dict[str, dict[str, list[str]]]:
        class_annotations: dict[str, list[str]] = {}
        for klass in reversed(test.test_class.__mro__):
            for key, values in _own_annotations(klass).items():
                class_annotations[self._key_name(key)] = list(values)

        method = getattr(test.test_class, test.method_name, None)
        method_annotations = {
            self._key_name(key): list(values)
            for key, values in _own_annotations(method).items()
        }

        return {
            AnnotationScope.CLASS.value: class_annotations,
            AnnotationScope.METHOD.value: method_annotations,
        }

    def _key_name(self, key: str) -> str:
        return self._key_names.get(key, key)


class AttributeDataProvider:
    """
    Implements DataProvider protocol over decorator attributes.

    A provider declared on the test method wins over one on the class.
    """

    def get_data_provider(self, test: TestRef) -> dict[str, dict[str, Any]]:
        method = getattr(test.test_class, test.method_name, None)
        provider = getattr(method, DATA_PROVIDER_ATTR, None)
        if provider is None:
            provider = getattr(test.test_class, DATA_PROVIDER_ATTR, None)
        if provider is None:
            return {}
        payloads = provider() if callable(provider) else provider
        return {name: dict(data) for name, data in payloads.items()}
