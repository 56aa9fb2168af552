"""
Configured override resolver adapter - Implements OverrideResolver protocol.

Overrides come from configuration rather than annotations: extra
directives can be appended to every test of a fixture kind, and
factories can be skipped globally.
"""

import logging
from collections.abc import Collection, Mapping, Sequence

from src.domain.fixtures import FixtureDirective, TestRef

logger = logging.getLogger(__name__)


class ConfiguredOverrideResolver:
    """
    Implements OverrideResolver protocol from static configuration.

    Uses structural subtyping - no explicit inheritance from Protocol.

    `current_fixture_type` only records the kind the controller is
    resolving or applying (None between phases) for code that inspects
    the resolver; the filtering below uses the `kind` argument.
    """

    def __init__(
        self,
        added: Mapping[str, Sequence[FixtureDirective]] | None = None,
        skipped_factories: Collection[str] = (),
    ) -> None:
        self._added = {kind: list(directives) for kind, directives in (added or {}).items()}
        self._skipped = frozenset(skipped_factories)
        self.current_fixture_type: str | None = None

    def set_current_fixture_type(self, kind: str | None) -> None:
        self.current_fixture_type = kind

    def apply_data_fixtures(
        self, test: TestRef, directives: Sequence[FixtureDirective], kind: str
    ) -> list[FixtureDirective]:
        """Drop skipped factories, then append configured directives for the kind."""
        resolved = [d for d in directives if d.factory not in self._skipped]
        skipped = len(directives) - len(resolved)
        if skipped:
            logger.info("Skipped %d %s fixture(s) for %s", skipped, kind, test.identity)
        resolved.extend(self._added.get(kind, ()))
        return resolved
