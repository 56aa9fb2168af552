"""
Fixture lifecycle settings - pydantic-settings configuration.

This module defines the fixture framework configuration using
pydantic-settings for environment variable loading with validation and
defaults.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Fixture lifecycle settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="FIXTURES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Annotation keys
    data_fixture_annotation: str = "dataFixture"
    data_fixture_before_transaction_annotation: str = "dataFixtureBeforeTransaction"
    db_isolation_annotation: str = "dbIsolation"

    # Registry key of the secure-mode flag consulted by fixture reverts
    secure_area_key: str = "isSecureArea"

    # Factories dropped from every test (JSON list in the environment)
    skipped_factories: list[str] = []

    @property
    def fixture_kinds(self) -> tuple[str, str]:
        return (self.data_fixture_annotation, self.data_fixture_before_transaction_annotation)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
