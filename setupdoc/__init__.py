"""setupdoc: compose a project-setup document from capability providers.

Quick usage::

    import asyncio
    from setupdoc import Generator, build_default_registry

    generator = Generator(build_default_registry())
    markdown = asyncio.run(generator.generate_markdown({"projectType": "backend"}))
"""

from setupdoc.config import ConfigValidator, ProjectConfig, Settings, ValidationResult
from setupdoc.errors import (
    ConfigValidationError,
    ProviderError,
    RegistryError,
    SetupDocError,
    TemplateLoadError,
)
from setupdoc.generator import GenerationResult, Generator
from setupdoc.providers import ProviderRegistry, build_default_registry
from setupdoc.templates import TemplateEngine

__version__ = "2.0.0"

__all__ = [
    "ConfigValidationError",
    "ConfigValidator",
    "GenerationResult",
    "Generator",
    "ProjectConfig",
    "ProviderError",
    "ProviderRegistry",
    "RegistryError",
    "Settings",
    "SetupDocError",
    "TemplateEngine",
    "TemplateLoadError",
    "ValidationResult",
    "build_default_registry",
]
