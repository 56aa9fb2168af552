"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A minimal directive parser (annotation syntax is owned by the runner)
- A secure-mode flag backed by a fresh registry
- A controller factory wired with mocked ports
"""

import json
import re
from collections.abc import Callable
from typing import Any
from unittest.mock import Mock

import pytest

from src.adapters.registry import ObjectRegistry, RegistrySecureModeFlag
from src.domain.lifecycle import FixtureLifecycleController

_DIRECTIVE = re.compile(r"^\s*(?P<factory>\S+)(?:\s+with:(?P<data>\{.*\}))?(?:\s+as:(?P<name>\S+))?\s*$")


class SimpleDirectiveParser:
    """Parses "Factory [with:{json}] [as:name]" annotations."""

    def parse(self, raw: str) -> dict[str, Any]:
        match = _DIRECTIVE.match(raw)
        if match is None:
            raise ValueError(f"Unparseable fixture annotation: {raw!r}")
        data = match.group("data")
        return {
            "factory": match.group("factory"),
            "name": match.group("name"),
            "data": json.loads(data) if data else {},
        }


class CustomerCase:
    """Stand-in test class used as the running test."""

    def test_create(self) -> None:
        pass

    def test_update(self) -> None:
        pass


@pytest.fixture
def parser() -> SimpleDirectiveParser:
    return SimpleDirectiveParser()


@pytest.fixture
def secure_flag() -> RegistrySecureModeFlag:
    """Secure-mode flag initially set to False."""
    flag = RegistrySecureModeFlag(ObjectRegistry())
    flag.set(False)
    return flag


@pytest.fixture
def case_class() -> type:
    return CustomerCase


@pytest.fixture
def make_controller(
    parser: SimpleDirectiveParser, secure_flag: RegistrySecureModeFlag
) -> Callable[..., FixtureLifecycleController]:
    """
    Build a "dataFixture" controller with mocked collaborators.

    Keyword arguments replace individual collaborators. Method
    annotations are given as a mapping via `method_annotations`.
    """

    def factory(
        method_annotations: dict[str, list[str]] | None = None,
        class_annotations: dict[str, list[str]] | None = None,
        **overrides: Any,
    ) -> FixtureLifecycleController:
        annotation_reader = Mock()
        annotation_reader.get_annotations.return_value = {
            "class": class_annotations or {},
            "method": method_annotations or {},
        }
        data_provider = Mock()
        data_provider.get_data_provider.return_value = {}
        override_resolver = Mock()
        override_resolver.apply_data_fixtures.side_effect = lambda test, directives, kind: list(
            directives
        )
        fixture_setup = Mock()
        fixture_setup.apply.return_value = None

        collaborators = {
            "kind": "dataFixture",
            "annotation_reader": annotation_reader,
            "parser": parser,
            "data_provider": data_provider,
            "override_resolver": override_resolver,
            "fixture_setup": fixture_setup,
            "storage": Mock(),
            "isolation_checker": Mock(),
            "secure_flag": secure_flag,
        }
        collaborators.update(overrides)
        return FixtureLifecycleController(**collaborators)

    return factory
