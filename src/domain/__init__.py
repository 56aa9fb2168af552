"""
Domain layer - Fixture lifecycle logic with zero framework imports.

This package contains the fixture resolution and apply/revert state
machine. It defines its own port interfaces for the test framework's
collaborators, keeping the core decoupled from any concrete runner.
"""

from .exceptions import (
    EntityNotFound,
    FixtureApplyError,
    FixtureError,
    FixtureRevertError,
    InvalidAnnotation,
    InvalidFixtureDirective,
    IsolationViolation,
)
from .factories import LocalFactoryRegistry, local_factory
from .fixtures import (
    AnnotationScope,
    AppliedFixture,
    DbIsolationState,
    FixtureDirective,
    FixtureResult,
    TestIdentity,
    TestRef,
)
from .lifecycle import FixtureLifecycleController
from .ports import (
    AnnotationReader,
    DataProvider,
    DirectiveParser,
    FixtureSetup,
    FixtureStorage,
    IsolationChecker,
    OverrideResolver,
    SecureModeFlag,
)
from .secure_mode import secure_mode

__all__ = [
    "AnnotationReader",
    "AnnotationScope",
    "AppliedFixture",
    "DataProvider",
    "DbIsolationState",
    "DirectiveParser",
    "EntityNotFound",
    "FixtureApplyError",
    "FixtureDirective",
    "FixtureError",
    "FixtureLifecycleController",
    "FixtureResult",
    "FixtureRevertError",
    "FixtureSetup",
    "FixtureStorage",
    "InvalidAnnotation",
    "InvalidFixtureDirective",
    "IsolationChecker",
    "IsolationViolation",
    "LocalFactoryRegistry",
    "OverrideResolver",
    "SecureModeFlag",
    "TestIdentity",
    "TestRef",
    "local_factory",
    "secure_mode",
]
