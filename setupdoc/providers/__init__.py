"""setupdoc capability providers.

Quick usage::

    from setupdoc.providers import build_default_registry

    registry = build_default_registry()
    provider = registry.instantiate("fastapi", config)
"""

from setupdoc.providers import databases, servers, stacks, styling, testing
from setupdoc.providers.contract import (
    CapabilityDescriptor,
    CapabilityProvider,
    Category,
    ConfigFile,
    Dependencies,
    MarkdownSection,
    supports,
)
from setupdoc.providers.registry import CompatibilityConflict, ProviderRegistry

BUILTIN_DESCRIPTORS: list[CapabilityDescriptor] = [
    *stacks.DESCRIPTORS,
    *servers.DESCRIPTORS,
    *databases.DESCRIPTORS,
    *testing.DESCRIPTORS,
    *styling.DESCRIPTORS,
]


def build_default_registry() -> ProviderRegistry:
    """Return a new registry holding every built-in provider."""
    registry = ProviderRegistry()
    for descriptor in BUILTIN_DESCRIPTORS:
        registry.register(descriptor)
    return registry


__all__ = [
    "BUILTIN_DESCRIPTORS",
    "CapabilityDescriptor",
    "CapabilityProvider",
    "Category",
    "CompatibilityConflict",
    "ConfigFile",
    "Dependencies",
    "MarkdownSection",
    "ProviderRegistry",
    "build_default_registry",
    "supports",
]
