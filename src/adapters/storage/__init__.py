"""Fixture storage adapters."""

from .memory import FixtureNotFound, InMemoryFixtureStorage

__all__ = ["FixtureNotFound", "InMemoryFixtureStorage"]
