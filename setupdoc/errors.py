"""Exception taxonomy for setupdoc.

Configuration and registry errors stop a run before any provider executes.
Provider errors wrap whatever a contribution method or lifecycle hook raised
and carry the failing provider's name.  Rendering never raises.
"""

from __future__ import annotations


class SetupDocError(Exception):
    """Base class for every error raised by setupdoc."""


class ConfigValidationError(SetupDocError):
    """Raised when a configuration mapping fails schema or business-rule validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Configuration validation failed: {', '.join(self.errors)}")


class RegistryError(SetupDocError):
    """Raised for duplicate registrations, malformed descriptors and unknown names."""

    def __init__(self, message: str, name: str | None = None) -> None:
        self.name = name
        super().__init__(message)


class ProviderError(SetupDocError):
    """Raised when a capability provider fails while contributing data."""

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"Provider '{provider}' failed: {message}")


class TemplateLoadError(SetupDocError):
    """Raised when a template document cannot be read from disk."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to load template {path}: {message}")
