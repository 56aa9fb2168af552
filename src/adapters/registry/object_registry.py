"""
Object registry adapter - Process-wide key/value registry.

The registry holds global runtime values such as the secure-area flag.
Keys are registered once; replacing a value requires unregistering it
first, which keeps accidental overwrites visible.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)

SECURE_AREA_KEY = "isSecureArea"


class RegistryKeyExists(RuntimeError):
    """Key is already registered."""

    pass


class ObjectRegistry:
    """Process-wide registry of named values."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def register(self, key: str, value: Any) -> None:
        """
        Register a value under a key.

        Raises:
            RegistryKeyExists: If the key is already registered
        """
        if key in self._values:
            raise RegistryKeyExists(f'Registry key "{key}" already exists')
        self._values[key] = value

    def unregister(self, key: str) -> None:
        """Remove a key. Unknown keys are ignored."""
        self._values.pop(key, None)

    def registry(self, key: str) -> Any:
        """Return the value registered under a key, or None."""
        return self._values.get(key)


class RegistrySecureModeFlag:
    """
    Implements SecureModeFlag protocol on top of an ObjectRegistry.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, registry: ObjectRegistry, key: str = SECURE_AREA_KEY) -> None:
        self._registry = registry
        self._key = key

    def get(self) -> bool | None:
        return self._registry.registry(self._key)

    def set(self, value: bool | None) -> None:
        self._registry.unregister(self._key)
        self._registry.register(self._key, value)
        logger.debug("Secure area flag %s set to %s", self._key, value)
