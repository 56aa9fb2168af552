"""Override resolver adapters."""

from .configured import ConfiguredOverrideResolver

__all__ = ["ConfiguredOverrideResolver"]
