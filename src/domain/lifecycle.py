"""
Fixture lifecycle controller - Resolve, apply and revert test fixtures.

This module contains the core orchestration for fixture directives of one
kind (for example "dataFixture"):

    resolve  -> annotations parsed into directives, cached per test
    apply    -> directives run in declared order, recorded in a ledger
    revert   -> ledger walked in reverse under secure mode, then cleared

Ledger Semantics
================

- Apply records each directive after its factory succeeded. A failure on
  directive k leaves directives 1..k-1 recorded, so teardown reverts
  exactly what was applied.
- Revert is strict LIFO. Later fixtures may depend on earlier ones (a
  child entity must go before its parent).
- The ledger is always emptied after a revert pass, even when a revert
  raised.

The secure-mode flag is forced on per reverted entry and restored
unconditionally for that entry.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .exceptions import EntityNotFound, FixtureApplyError, FixtureRevertError
from .factories import LocalFactoryRegistry
from .fixtures import (
    AnnotationScope,
    AppliedFixture,
    DbIsolationState,
    FixtureDirective,
    FixtureResult,
    TestIdentity,
    TestRef,
)
from .ports import (
    AnnotationReader,
    DataProvider,
    DirectiveParser,
    FixtureSetup,
    FixtureStorage,
    IsolationChecker,
    OverrideResolver,
    ScopeAnnotations,
    SecureModeFlag,
)
from .secure_mode import secure_mode

logger = logging.getLogger(__name__)

DB_ISOLATION_ANNOTATION = "dbIsolation"


@dataclass
class FixtureLifecycleController:
    """
    Domain service for the fixture lifecycle of one fixture kind.

    One instance is reused across a test run: it owns the resolution
    cache and the applied-fixtures ledger. Not safe for concurrent use.
    """

    kind: str
    annotation_reader: AnnotationReader
    parser: DirectiveParser
    data_provider: DataProvider
    override_resolver: OverrideResolver
    fixture_setup: FixtureSetup
    storage: FixtureStorage
    isolation_checker: IsolationChecker
    secure_flag: SecureModeFlag
    local_factories: LocalFactoryRegistry = field(default_factory=LocalFactoryRegistry)
    isolation_annotation: str = DB_ISOLATION_ANNOTATION

    _cache: dict[tuple[str, TestIdentity], list[FixtureDirective]] = field(
        default_factory=dict, init=False, repr=False
    )
    _applied: list[AppliedFixture] = field(default_factory=list, init=False, repr=False)

    @property
    def applied_fixtures(self) -> tuple[AppliedFixture, ...]:
        """Fixtures applied for the running test, in apply order."""
        return tuple(self._applied)

    # Test runner hooks

    def start_test(self, test: TestRef) -> None:
        """Resolve and apply the test's fixtures, if it has any."""
        fixtures = self.resolve(test)
        if fixtures:
            self.apply(fixtures, test)

    def end_test(self, test: TestRef) -> None:
        """Revert whatever was applied for the test."""
        if self._applied:
            self.revert(test)

    # Resolution

    def resolve(self, test: TestRef, scope: AnnotationScope | None = None) -> list[FixtureDirective]:
        """
        Resolve the ordered fixture directives of a test.

        The result is cached per (kind, test identity): repeated calls
        return the same list object without re-parsing. The override
        resolver is consulted even when no directive is declared, since
        configuration may inject fixtures.

        Args:
            test: Running test
            scope: None merges class and method annotations (method wins);
                otherwise only that scope's annotations are read

        Returns:
            Ordered fixture directives
        """
        key = (self.kind, test.identity)
        if key in self._cache:
            return self._cache[key]

        self.override_resolver.set_current_fixture_type(self.kind)
        annotations = self._read_annotations(test, scope)
        provided = self.data_provider.get_data_provider(test)

        directives = []
        for raw in annotations.get(self.kind, ()):
            directive = FixtureDirective.from_metadata(self.parser.parse(raw))
            if directive.name and not directive.data and directive.name in provided:
                directive = directive.with_data(provided[directive.name])
            directives.append(directive)

        resolved = list(self.override_resolver.apply_data_fixtures(test, directives, self.kind))
        logger.debug(
            "Resolved %d %s fixture(s) for %s (%d declared)",
            len(resolved),
            self.kind,
            test.identity,
            len(directives),
        )
        self._cache[key] = resolved
        return resolved

    def get_db_isolation_state(self, test: TestRef) -> DbIsolationState | None:
        """
        Return the explicitly declared db isolation state of a test.

        Method annotations win over class annotations; the last declared
        value is used. None means the isolation checker's default policy.
        """
        values = self._read_annotations(test, None).get(self.isolation_annotation)
        if not values:
            return None
        return DbIsolationState.from_annotation(values[-1])

    # Apply

    def apply(self, fixtures: Sequence[FixtureDirective], test: TestRef) -> None:
        """
        Apply fixture directives in declared order.

        Args:
            fixtures: Resolved directives for the test
            test: Running test, used for isolation bookkeeping and local
                factory lookup

        Raises:
            FixtureApplyError: If a factory fails; remaining directives
                are not applied and earlier ones stay in the ledger
        """
        self.isolation_checker.create_snapshot(test, self.get_db_isolation_state(test))

        for directive in fixtures:
            local = self.local_factories.lookup(test.test_class, directive.factory)
            if local is not None:
                directive = directive.with_factory(local)
            result = self._apply_directive(directive)
            self._applied.append(AppliedFixture(directive=directive, result=result))

        self.override_resolver.set_current_fixture_type(None)

    def _apply_directive(self, directive: FixtureDirective) -> dict | None:
        logger.debug("Applying fixture %s (%s)", directive.name or "<anonymous>", directive.factory)
        try:
            result = self.fixture_setup.apply(directive.factory, directive.data)
        except Exception as exc:
            logger.error("Fixture apply failed: %s - %s", directive.factory, exc)
            raise FixtureApplyError(directive.factory, exc, name=directive.name) from exc

        if result is not None and directive.name:
            self.storage.persist(directive.name, FixtureResult(result))

        return result

    # Revert

    def revert(self, test: TestRef | None = None) -> None:
        """
        Revert applied fixtures in reverse apply order.

        Each entry is reverted under secure mode. A missing entity counts
        as reverted. Any other failure aborts the pass; the ledger is
        cleared either way.

        Args:
            test: Running test; when given, isolation is checked against
                the snapshot taken before apply

        Raises:
            FixtureRevertError: If a factory fails to revert
            IsolationViolation: If persistent state leaked
        """
        self.override_resolver.set_current_fixture_type(self.kind)
        try:
            for applied in reversed(self._applied):
                self._revert_fixture(applied)
        finally:
            self._applied.clear()
            self.override_resolver.set_current_fixture_type(None)

        if test is not None:
            self.isolation_checker.check_isolation(test, self.get_db_isolation_state(test))

    def _revert_fixture(self, applied: AppliedFixture) -> None:
        logger.debug("Reverting fixture %s (%s)", applied.name or "<anonymous>", applied.factory)
        with secure_mode(self.secure_flag):
            try:
                self.fixture_setup.revert(applied.factory, applied.result or {})
            except EntityNotFound:
                logger.debug("Fixture entity already removed: %s", applied.factory)
            except Exception as exc:
                logger.error("Fixture revert failed: %s - %s", applied.factory, exc)
                raise FixtureRevertError(applied.factory, exc, name=applied.name) from exc

    def _read_annotations(
        self, test: TestRef, scope: AnnotationScope | None
    ) -> Mapping[str, Sequence[str]]:
        annotations = self.annotation_reader.get_annotations(test)
        if scope is not None:
            return _scope(annotations, scope)
        merged: dict[str, Sequence[str]] = {}
        merged.update(_scope(annotations, AnnotationScope.CLASS))
        merged.update(_scope(annotations, AnnotationScope.METHOD))
        return merged


def _scope(annotations: Mapping[str, ScopeAnnotations], scope: AnnotationScope) -> ScopeAnnotations:
    return annotations.get(scope.value) or {}
