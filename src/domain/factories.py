"""
Local fixture factories - Explicit registry of test-class factories.

A test class can provide its own fixture factories as methods marked
with @local_factory. Registered names are qualified as
"module.ClassName::method" when directives are applied, and the fixture
setup adapter resolves the qualified name back to the callable.
Subclasses of a registered test class inherit its factories.
"""

from collections.abc import Callable
from typing import Any

LOCAL_FACTORY_MARKER = "__local_fixture_factory__"
QUALIFIER = "::"

LocalFactory = Callable[..., Any]


def local_factory(func: LocalFactory) -> LocalFactory:
    """Mark a test-class method (usually a staticmethod) as a fixture factory."""
    target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
    setattr(target, LOCAL_FACTORY_MARKER, True)
    return func


def _unwrap(attribute: Any) -> Any:
    if isinstance(attribute, (staticmethod, classmethod)):
        return attribute.__func__
    return attribute


class LocalFactoryRegistry:
    """Local fixture factories keyed by test class."""

    def __init__(self) -> None:
        self._factories: dict[type, dict[str, LocalFactory]] = {}
        self._qualified: dict[str, LocalFactory] = {}

    def register(self, test_class: type, name: str, factory: LocalFactory) -> None:
        self._factories.setdefault(test_class, {})[name] = factory
        self._qualified[self.qualify(test_class, name)] = factory

    def register_class(self, test_class: type) -> type:
        """
        Register every @local_factory method of a test class.

        Usable as a class decorator. Methods inherited from base classes
        are registered too; a subclass definition wins.
        """
        for klass in reversed(test_class.__mro__):
            for attr_name, attribute in vars(klass).items():
                if getattr(_unwrap(attribute), LOCAL_FACTORY_MARKER, False):
                    self.register(test_class, attr_name, getattr(test_class, attr_name))
        return test_class

    def lookup(self, test_class: type, name: str) -> str | None:
        """
        Return the qualified factory name when the class or a base registered one.

        The name is qualified with the concrete test class, so subclasses
        sharing a base resolve independently.
        """
        for klass in test_class.__mro__:
            factory = self._factories.get(klass, {}).get(name)
            if factory is not None:
                qualified = self.qualify(test_class, name)
                self._qualified.setdefault(qualified, factory)
                return qualified
        return None

    def get(self, qualified_name: str) -> LocalFactory | None:
        return self._qualified.get(qualified_name)

    @staticmethod
    def qualify(test_class: type, name: str) -> str:
        return f"{test_class.__module__}.{test_class.__qualname__}{QUALIFIER}{name}"
