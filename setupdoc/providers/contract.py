"""The capability contract every provider satisfies.

A provider is described statically by a ``CapabilityDescriptor`` and bound
to one run's ``ProjectConfig`` through the descriptor's ``factory``.  The
bound object must satisfy ``CapabilityProvider``; there is no base class to
inherit from, so each provider implements the full protocol on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from setupdoc.config import ProjectConfig


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Category(str, Enum):
    """Provider categories, in the order the generator selects them."""
    STACK = "stack"
    DATABASE = "database"
    TESTING = "testing"
    STYLING = "styling"
    MISC = "misc"


# ---------------------------------------------------------------------------
# Contribution models
# ---------------------------------------------------------------------------

class Dependencies(BaseModel):
    """Package names a provider wants installed."""
    production: list[str] = Field(default_factory=list)
    development: list[str] = Field(default_factory=list)


class ConfigFile(BaseModel):
    """A configuration file a provider wants materialised."""
    name: str = Field(..., description="File name relative to the project root")
    language: str = Field(default="", description="Code-fence language tag")
    content: str = Field(default="", description="Full file body")


class MarkdownSection(BaseModel):
    """An extra section appended to the generated document."""
    title: str = Field(..., description="Section heading")
    content: str = Field(default="", description="Section body (markdown)")


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CapabilityDescriptor:
    """Static identity and metadata for one provider implementation."""

    name: str
    display_name: str
    category: Category
    factory: Callable[[ProjectConfig], "CapabilityProvider"] = field(compare=False, repr=False)
    project_types: frozenset[str] = frozenset()
    languages: frozenset[str] = frozenset()
    icon: Optional[str] = None
    description: str = ""
    version: str = "1.0.0"

    def create(self, config: ProjectConfig) -> "CapabilityProvider":
        """Bind this descriptor to *config*, returning a fresh provider instance."""
        return self.factory(config)


# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class CapabilityProvider(Protocol):
    """A descriptor bound to one composition run's configuration."""

    descriptor: CapabilityDescriptor
    config: ProjectConfig

    def dependencies(self) -> Dependencies:
        """Production and development packages; pure function of ``config``."""
        ...

    def config_files(self) -> list[ConfigFile]:
        ...

    def file_structure(self) -> str:
        """A descriptive directory-tree fragment, or ``""``."""
        ...

    def markdown_sections(self) -> list[MarkdownSection]:
        ...

    def commands(self) -> dict[str, str]:
        """Command name -> shell command; may override earlier providers' keys."""
        ...

    def security_guidelines(self) -> list[str]:
        ...

    def template_variables(self) -> dict[str, Any]:
        ...

    def supported_features(self) -> frozenset[str]:
        ...

    def is_compatible_with(self, other: str) -> bool:
        """Whether this provider may be composed with the provider named *other*."""
        ...

    def testing_strategy(self) -> Optional[str]:
        ...

    def ui_guidelines(self) -> Optional[str]:
        ...

    async def before_generation(self, config: ProjectConfig) -> None:
        """Run any side effect needed before contributions are read."""
        ...


def supports(provider: CapabilityProvider, feature: str) -> bool:
    """Return ``True`` if *provider* declares *feature*."""
    return feature in provider.supported_features()
