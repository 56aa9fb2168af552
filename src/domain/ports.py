"""
Port interfaces - Protocol definitions for fixture collaborators.

This module defines the interfaces (ports) that the fixture lifecycle
requires from the surrounding test framework. Adapters implement these
protocols through structural subtyping.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from .fixtures import DbIsolationState, FixtureDirective, FixtureResult, TestRef

# Raw annotations of one scope: annotation key -> declared values in order
ScopeAnnotations = Mapping[str, Sequence[str]]


class AnnotationReader(Protocol):
    """Port interface for the test framework's reflection layer."""

    def get_annotations(self, test: TestRef) -> Mapping[str, ScopeAnnotations]:
        """
        Read raw annotations declared on a test.

        Returns:
            Mapping with "class" and "method" keys, each mapping an
            annotation key to its raw values in declaration order
        """
        ...


class DirectiveParser(Protocol):
    """Port interface for fixture annotation parsing."""

    def parse(self, raw: str) -> Mapping[str, Any]:
        """
        Parse one raw fixture annotation.

        Returns:
            Metadata mapping with "factory", "name" (may be None) and
            "data" (may be empty)
        """
        ...


class DataProvider(Protocol):
    """Port interface for named fixture data payloads."""

    def get_data_provider(self, test: TestRef) -> Mapping[str, Mapping[str, Any]]:
        """Return data payloads keyed by fixture name."""
        ...


class OverrideResolver(Protocol):
    """Port interface for test-specific fixture overrides."""

    def set_current_fixture_type(self, kind: str | None) -> None:
        """Set (or clear with None) the fixture kind being processed."""
        ...

    def apply_data_fixtures(
        self, test: TestRef, directives: Sequence[FixtureDirective], kind: str
    ) -> list[FixtureDirective]:
        """
        Adjust the declared directives of a test.

        Called even for an empty list, since overrides may inject
        fixtures that are not declared by annotations.
        """
        ...


class FixtureSetup(Protocol):
    """Port interface for running fixture factories."""

    def apply(self, factory: str, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Apply a fixture and return its result, if any."""
        ...

    def revert(self, factory: str, result: Mapping[str, Any]) -> None:
        """
        Revert a previously applied fixture.

        Raises:
            EntityNotFound: If the fixture's entity is already gone
        """
        ...


class FixtureStorage(Protocol):
    """Port interface for the process-wide named fixture store."""

    def persist(self, name: str, value: FixtureResult) -> None:
        """Store a named fixture result."""
        ...


class IsolationChecker(Protocol):
    """Port interface for persistent state leakage detection."""

    def create_snapshot(self, test: TestRef, state: DbIsolationState | None) -> None:
        """Snapshot persistent state before fixtures are applied."""
        ...

    def check_isolation(self, test: TestRef, state: DbIsolationState | None) -> None:
        """
        Compare persistent state with the snapshot.

        Raises:
            IsolationViolation: If state leaked
        """
        ...


class SecureModeFlag(Protocol):
    """Port interface for the process-wide secure-mode flag."""

    def get(self) -> bool | None:
        """Return the current value (None when never set)."""
        ...

    def set(self, value: bool | None) -> None:
        """Replace the current value."""
        ...
