"""
Unit tests for the secure-mode guard and the registry-backed flag.
"""

import pytest

from src.adapters.registry import ObjectRegistry, RegistryKeyExists, RegistrySecureModeFlag
from src.domain.secure_mode import secure_mode


class TestObjectRegistry:
    """Tests for ObjectRegistry."""

    def test_register_and_read(self) -> None:
        registry = ObjectRegistry()
        registry.register("key", 1)

        assert registry.registry("key") == 1

    def test_unknown_key_reads_none(self) -> None:
        assert ObjectRegistry().registry("missing") is None

    def test_register_existing_key_raises(self) -> None:
        registry = ObjectRegistry()
        registry.register("key", 1)

        with pytest.raises(RegistryKeyExists):
            registry.register("key", 2)

    def test_unregister_unknown_key_is_ignored(self) -> None:
        registry = ObjectRegistry()
        registry.unregister("missing")

        assert registry.registry("missing") is None


class TestRegistrySecureModeFlag:
    """Tests for RegistrySecureModeFlag."""

    def test_unset_flag_is_none(self) -> None:
        assert RegistrySecureModeFlag(ObjectRegistry()).get() is None

    def test_set_replaces_value(self) -> None:
        registry = ObjectRegistry()
        flag = RegistrySecureModeFlag(registry)

        flag.set(True)
        flag.set(False)

        assert flag.get() is False
        assert registry.registry("isSecureArea") is False

    def test_custom_key(self) -> None:
        registry = ObjectRegistry()
        RegistrySecureModeFlag(registry, key="secure").set(True)

        assert registry.registry("secure") is True


class TestSecureModeGuard:
    """Tests for the secure_mode context manager."""

    def test_forces_flag_inside_block(self, secure_flag: RegistrySecureModeFlag) -> None:
        with secure_mode(secure_flag):
            assert secure_flag.get() is True

        assert secure_flag.get() is False

    def test_restores_flag_after_error(self, secure_flag: RegistrySecureModeFlag) -> None:
        with pytest.raises(RuntimeError):
            with secure_mode(secure_flag):
                raise RuntimeError("revert failed")

        assert secure_flag.get() is False

    def test_restores_unset_flag(self) -> None:
        flag = RegistrySecureModeFlag(ObjectRegistry())

        with secure_mode(flag):
            assert flag.get() is True

        assert flag.get() is None

    def test_nested_guards_restore_outer_value(self, secure_flag: RegistrySecureModeFlag) -> None:
        with secure_mode(secure_flag):
            with secure_mode(secure_flag):
                pass
            assert secure_flag.get() is True

        assert secure_flag.get() is False
