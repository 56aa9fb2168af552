"""Fixture setup adapters - Run fixture factories."""

from .callable_setup import CallableFixtureSetup, DataFixture, RevertibleDataFixture, UnknownFixtureFactory

__all__ = ["CallableFixtureSetup", "DataFixture", "RevertibleDataFixture", "UnknownFixtureFactory"]
