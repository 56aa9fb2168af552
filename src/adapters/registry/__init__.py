"""Registry adapters - Process-wide runtime values."""

from .object_registry import ObjectRegistry, RegistryKeyExists, RegistrySecureModeFlag

__all__ = ["ObjectRegistry", "RegistryKeyExists", "RegistrySecureModeFlag"]
