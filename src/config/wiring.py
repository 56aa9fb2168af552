"""
Fixture lifecycle wiring - Composition root for controllers.

This module builds one FixtureLifecycleController per fixture kind and
wires them to the process-wide adapters. The directive parser and the
isolation checker belong to the surrounding test framework and must be
supplied by the caller.
"""

from src.adapters.annotations import (
    DATA_FIXTURE,
    DATA_FIXTURE_BEFORE_TRANSACTION,
    DB_ISOLATION,
    AttributeAnnotationReader,
    AttributeDataProvider,
)
from src.adapters.override import ConfiguredOverrideResolver
from src.adapters.registry import ObjectRegistry, RegistrySecureModeFlag
from src.adapters.setup import CallableFixtureSetup
from src.adapters.storage import InMemoryFixtureStorage
from src.config.settings import Settings, get_settings
from src.domain.factories import LocalFactoryRegistry
from src.domain.lifecycle import FixtureLifecycleController
from src.domain.ports import DirectiveParser, FixtureSetup, IsolationChecker, OverrideResolver

# Module-level singletons - shared by every controller of the process
_storage = InMemoryFixtureStorage()
_registry = ObjectRegistry()
_local_factories = LocalFactoryRegistry()


def get_storage() -> InMemoryFixtureStorage:
    """Get the process-wide fixture storage (singleton)."""
    return _storage


def get_registry() -> ObjectRegistry:
    """Get the process-wide object registry (singleton)."""
    return _registry


def get_local_factories() -> LocalFactoryRegistry:
    """Get the process-wide local factory registry (singleton)."""
    return _local_factories


def get_fixture_setup() -> CallableFixtureSetup:
    """Create a fixture setup that resolves local factories from the shared registry."""
    return CallableFixtureSetup(local_factories=_local_factories)


def create_controllers(
    parser: DirectiveParser,
    isolation_checker: IsolationChecker,
    fixture_setup: FixtureSetup | None = None,
    override_resolver: OverrideResolver | None = None,
    settings: Settings | None = None,
) -> dict[str, FixtureLifecycleController]:
    """
    Create a lifecycle controller for each configured fixture kind.

    Controllers share the adapters (storage, secure flag, override
    resolver) but own their resolution cache and ledger.

    Args:
        parser: Directive parser of the test framework
        isolation_checker: Database isolation checker of the test framework
        fixture_setup: Fixture setup; defaults to a CallableFixtureSetup
        override_resolver: Override resolver; defaults to one skipping
            the configured factories
        settings: Settings; defaults to the cached environment settings

    Returns:
        Controllers keyed by fixture kind
    """
    settings = settings or get_settings()
    fixture_setup = fixture_setup or get_fixture_setup()
    override_resolver = override_resolver or ConfiguredOverrideResolver(
        skipped_factories=settings.skipped_factories
    )
    secure_flag = RegistrySecureModeFlag(_registry, key=settings.secure_area_key)
    annotation_reader = AttributeAnnotationReader(
        key_names={
            DATA_FIXTURE: settings.data_fixture_annotation,
            DATA_FIXTURE_BEFORE_TRANSACTION: settings.data_fixture_before_transaction_annotation,
            DB_ISOLATION: settings.db_isolation_annotation,
        }
    )
    data_provider = AttributeDataProvider()

    return {
        kind: FixtureLifecycleController(
            kind=kind,
            annotation_reader=annotation_reader,
            parser=parser,
            data_provider=data_provider,
            override_resolver=override_resolver,
            fixture_setup=fixture_setup,
            storage=_storage,
            isolation_checker=isolation_checker,
            secure_flag=secure_flag,
            local_factories=_local_factories,
            isolation_annotation=settings.db_isolation_annotation,
        )
        for kind in settings.fixture_kinds
    }
