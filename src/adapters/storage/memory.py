"""
In-memory fixture storage adapter - Implements FixtureStorage protocol.

Named fixture results live for the process. The test runner flushes the
storage between tests.
"""

import logging

from src.domain.fixtures import FixtureResult

logger = logging.getLogger(__name__)


class FixtureNotFound(KeyError):
    """No fixture result is stored under the requested name."""

    pass


class InMemoryFixtureStorage:
    """
    Implements FixtureStorage protocol with a plain dict.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._fixtures: dict[str, FixtureResult] = {}

    def persist(self, name: str, value: FixtureResult) -> None:
        """Store a named fixture result, replacing any previous one."""
        if name in self._fixtures:
            logger.debug("Replacing stored fixture result: %s", name)
        self._fixtures[name] = value

    def get(self, name: str) -> FixtureResult:
        """
        Return a stored fixture result.

        Raises:
            FixtureNotFound: If nothing is stored under the name
        """
        try:
            return self._fixtures[name]
        except KeyError:
            raise FixtureNotFound(name) from None

    def flush(self) -> None:
        self._fixtures.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._fixtures
