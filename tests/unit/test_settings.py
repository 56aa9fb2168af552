"""
Unit tests for settings and controller wiring.
"""

from unittest.mock import Mock

import pytest

from src.adapters.annotations import data_fixture, db_isolation
from src.adapters.registry import RegistrySecureModeFlag
from src.config import wiring
from src.config.settings import Settings, get_settings
from src.domain.fixtures import DbIsolationState, FixtureDirective, TestRef


class RenamedKeysCase:
    @db_isolation("disabled")
    @data_fixture("CustomerFixture")
    def test_renamed(self) -> None:
        pass


class TestSettings:
    """Tests for Settings defaults and environment loading."""

    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.data_fixture_annotation == "dataFixture"
        assert settings.data_fixture_before_transaction_annotation == "dataFixtureBeforeTransaction"
        assert settings.db_isolation_annotation == "dbIsolation"
        assert settings.secure_area_key == "isSecureArea"
        assert settings.skipped_factories == []

    def test_fixture_kinds(self) -> None:
        assert Settings(_env_file=None).fixture_kinds == ("dataFixture", "dataFixtureBeforeTransaction")

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FIXTURES_SECURE_AREA_KEY", "secure")
        monkeypatch.setenv("FIXTURES_SKIPPED_FACTORIES", '["SlowFixture"]')

        settings = Settings(_env_file=None)

        assert settings.secure_area_key == "secure"
        assert settings.skipped_factories == ["SlowFixture"]

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestCreateControllers:
    """Tests for the controller composition root."""

    def test_one_controller_per_kind(self) -> None:
        controllers = wiring.create_controllers(
            parser=Mock(), isolation_checker=Mock(), settings=Settings(_env_file=None)
        )

        assert set(controllers) == {"dataFixture", "dataFixtureBeforeTransaction"}
        assert controllers["dataFixture"].kind == "dataFixture"

    def test_controllers_share_process_adapters(self) -> None:
        controllers = wiring.create_controllers(
            parser=Mock(), isolation_checker=Mock(), settings=Settings(_env_file=None)
        )
        first, second = controllers.values()

        assert first.storage is second.storage is wiring.get_storage()
        assert first.local_factories is wiring.get_local_factories()
        assert first.override_resolver is second.override_resolver
        assert first.applied_fixtures == ()

    def test_secure_flag_uses_configured_key(self) -> None:
        settings = Settings(_env_file=None, secure_area_key="wiringSecureArea")
        controllers = wiring.create_controllers(
            parser=Mock(), isolation_checker=Mock(), settings=settings
        )

        flag = controllers["dataFixture"].secure_flag
        assert isinstance(flag, RegistrySecureModeFlag)
        flag.set(True)
        assert wiring.get_registry().registry("wiringSecureArea") is True
        wiring.get_registry().unregister("wiringSecureArea")

    def test_renamed_annotation_keys_still_read_decorators(self, parser) -> None:
        settings = Settings(
            _env_file=None, data_fixture_annotation="fixture", db_isolation_annotation="isolation"
        )
        controllers = wiring.create_controllers(
            parser=parser, isolation_checker=Mock(), settings=settings
        )
        test = TestRef(RenamedKeysCase, "test_renamed")

        assert controllers["fixture"].resolve(test) == [FixtureDirective("CustomerFixture")]
        assert controllers["fixture"].get_db_isolation_state(test) is DbIsolationState.DISABLED
