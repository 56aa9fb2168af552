"""
Domain exceptions - Semantic error types for the fixture lifecycle.

This module defines domain-specific exceptions that attribute failures
to the fixture directive that caused them, without leaking the details
of the collaborator that raised the original error.
"""

import traceback


class FixtureError(Exception):
    """Base class for fixture lifecycle errors."""

    pass


class InvalidFixtureDirective(FixtureError):
    """Parsed directive metadata has no factory."""

    pass


class InvalidAnnotation(FixtureError):
    """Annotation value is not one the lifecycle understands."""

    pass


class EntityNotFound(FixtureError):
    """
    Entity created by a fixture no longer exists.

    Raised by fixture revert routines. The revert orchestrator treats it
    as an already-reverted fixture.
    """

    pass


class IsolationViolation(FixtureError):
    """Persistent state changed between snapshot and check."""

    pass


class _AttributedFixtureError(FixtureError):
    """
    Wraps a collaborator error with the directive that triggered it.

    Message format:
        Unable to <action> fixture"<name>": <factory>.
        <original message>
        <original traceback>
    """

    action = ""

    def __init__(self, factory: str, cause: BaseException, name: str | None = None) -> None:
        self.factory = factory
        self.fixture_name = name
        self.cause = cause
        label = f'"{name}"' if name else ""
        trace = "".join(traceback.format_tb(cause.__traceback__))
        super().__init__(f"Unable to {self.action} fixture{label}: {factory}.\n{cause}\n{trace}")


class FixtureApplyError(_AttributedFixtureError):
    """Fixture setup routine failed while applying a directive."""

    action = "apply"


class FixtureRevertError(_AttributedFixtureError):
    """Fixture setup routine failed while reverting a directive."""

    action = "revert"
