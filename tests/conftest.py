"""Shared pytest fixtures for the setupdoc test suite.

Provides reusable fixtures for:
- Registries populated with the built-in providers
- Template engines with an isolated cache
- Generators that never probe the host environment
- Sample configuration mappings
- A small stand-in provider for exercising the pipeline
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest

from setupdoc.config import ProjectConfig, Settings
from setupdoc.generator import Generator
from setupdoc.providers import build_default_registry
from setupdoc.providers.contract import (
    CapabilityDescriptor,
    Category,
    ConfigFile,
    Dependencies,
    MarkdownSection,
)
from setupdoc.providers.registry import ProviderRegistry
from setupdoc.templates.engine import TemplateEngine


# ---------------------------------------------------------------------------
# Registry & Engine
# ---------------------------------------------------------------------------

@pytest.fixture
def registry() -> ProviderRegistry:
    """A fresh registry holding every built-in provider."""
    return build_default_registry()


@pytest.fixture
def empty_registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture
def engine() -> TemplateEngine:
    """Template engine with its own cache so tests never share loaded files."""
    return TemplateEngine(cache={})


@pytest.fixture
def settings() -> Settings:
    """Generator settings with environment probing switched off."""
    return Settings(probe_environment=False)


@pytest.fixture
def generator(registry: ProviderRegistry, engine: TemplateEngine, settings: Settings) -> Generator:
    return Generator(registry, engine=engine, settings=settings)


@pytest.fixture
def tmp_template(tmp_path: Path) -> Path:
    """A tiny template exercising the context keys most tests assert on."""
    path = tmp_path / "template.md"
    path.write_text(
        "# {{projectTypeLabel}}\n"
        "deps: {{join productionDependencies \", \"}}\n"
        "{{#each commandList}}{{name}}={{command}};{{/each}}\n",
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Sample configurations
# ---------------------------------------------------------------------------

@pytest.fixture
def fastapi_config() -> dict[str, Any]:
    return {
        "projectType": "backend",
        "stack": "fastapi",
        "language": "Python",
        "database": "postgresql",
        "testing": "pytest",
        "codeStyle": ["self-documenting", "error-handling"],
        "assistantBehavior": ["ask-first"],
        "gitCommitStyle": "conventional",
        "branchStrategy": "feature-slash",
    }


@pytest.fixture
def nextjs_config() -> dict[str, Any]:
    return {
        "projectType": "fullstack",
        "stack": "nextjs-app",
        "language": "TypeScript",
        "packageManager": "pnpm",
        "database": "postgresql",
        "testing": "jest",
        "styling": "tailwind",
        "mcpServers": ["puppeteer"],
        "preferredWorkflow": "tdd",
    }


# ---------------------------------------------------------------------------
# Stand-in provider
# ---------------------------------------------------------------------------

class RecordingProvider:
    """Minimal provider that records hook calls into a shared list."""

    def __init__(
        self,
        config: ProjectConfig,
        descriptor: CapabilityDescriptor,
        calls: Optional[list[str]] = None,
        fail_in: Optional[str] = None,
        production: Optional[list[str]] = None,
        commands: Optional[dict[str, str]] = None,
        incompatible: frozenset[str] = frozenset(),
    ) -> None:
        self.config = config
        self.descriptor = descriptor
        self.calls = calls if calls is not None else []
        self.fail_in = fail_in
        self.production = production or []
        self._commands = commands or {}
        self.incompatible = incompatible

    def _maybe_fail(self, method: str) -> None:
        if self.fail_in == method:
            raise RuntimeError(f"{method} exploded")

    async def before_generation(self, config: ProjectConfig) -> None:
        self.calls.append(f"hook:{self.descriptor.name}")
        self._maybe_fail("before_generation")

    def dependencies(self) -> Dependencies:
        self._maybe_fail("dependencies")
        return Dependencies(production=list(self.production))

    def config_files(self) -> list[ConfigFile]:
        return [ConfigFile(name=f"{self.descriptor.name}.cfg", language="ini", content="x=1\n")]

    def file_structure(self) -> str:
        self._maybe_fail("file_structure")
        return ""

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        return dict(self._commands)

    def security_guidelines(self) -> list[str]:
        return []

    def template_variables(self) -> dict[str, Any]:
        return {}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"recording"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.incompatible

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


def make_descriptor(
    name: str,
    category: Category = Category.STACK,
    **provider_kwargs: Any,
) -> CapabilityDescriptor:
    """Build a descriptor whose factory yields a ``RecordingProvider``."""
    holder: dict[str, CapabilityDescriptor] = {}

    def _factory(config: ProjectConfig) -> RecordingProvider:
        return RecordingProvider(config, holder["descriptor"], **provider_kwargs)

    descriptor = CapabilityDescriptor(
        name=name,
        display_name=name.title(),
        category=category,
        factory=_factory,
        project_types=frozenset({"backend"}),
        languages=frozenset({"Python"}),
    )
    holder["descriptor"] = descriptor
    return descriptor


@pytest.fixture
def descriptor_factory():
    """Factory fixture: ``descriptor_factory(name, category, **provider_kwargs)``."""
    return make_descriptor
