"""
Callable fixture setup adapter - Implements FixtureSetup protocol.

Factories are looked up by identifier in a fixture pool. A factory is an
object with apply(data) and, when it can undo its effect, revert(result).
Qualified "ClassName::method" identifiers resolve to local factories
registered on test classes; those are apply-only.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from src.domain.factories import QUALIFIER, LocalFactoryRegistry
from src.domain.fixtures import FixtureResult

logger = logging.getLogger(__name__)


class UnknownFixtureFactory(LookupError):
    """No fixture is registered under the factory identifier."""

    pass


class DataFixture(Protocol):
    def apply(self, data: Mapping[str, Any]) -> Mapping[str, Any] | None: ...


@runtime_checkable
class RevertibleDataFixture(Protocol):
    def apply(self, data: Mapping[str, Any]) -> Mapping[str, Any] | None: ...

    def revert(self, result: FixtureResult) -> None: ...


class CallableFixtureSetup:
    """
    Implements FixtureSetup protocol over a pool of fixture objects.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        fixtures: Mapping[str, DataFixture] | None = None,
        local_factories: LocalFactoryRegistry | None = None,
    ) -> None:
        self._fixtures: dict[str, DataFixture] = dict(fixtures or {})
        self._local_factories = local_factories or LocalFactoryRegistry()

    def add(self, factory: str, fixture: DataFixture) -> None:
        self._fixtures[factory] = fixture

    def apply(self, factory: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """
        Run a fixture factory.

        Returns:
            The factory result as a dict, or None when it returned nothing

        Raises:
            UnknownFixtureFactory: If the identifier is not registered
        """
        if QUALIFIER in factory:
            result = self._get_local(factory)(dict(data))
        else:
            result = self._get_fixture(factory).apply(dict(data))
        return dict(result) if result is not None else None

    def revert(self, factory: str, result: Mapping[str, Any]) -> None:
        """Revert a fixture when its factory supports it."""
        if QUALIFIER in factory:
            return
        fixture = self._get_fixture(factory)
        if isinstance(fixture, RevertibleDataFixture):
            fixture.revert(FixtureResult(result))
        else:
            logger.debug("Fixture %s is not revertible, skipping", factory)

    def _get_fixture(self, factory: str) -> DataFixture:
        try:
            return self._fixtures[factory]
        except KeyError:
            raise UnknownFixtureFactory(f'Fixture "{factory}" is not registered') from None

    def _get_local(self, factory: str):
        local = self._local_factories.get(factory)
        if local is None:
            raise UnknownFixtureFactory(f'Local fixture "{factory}" is not registered')
        return local
