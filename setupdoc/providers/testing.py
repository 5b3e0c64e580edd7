"""Testing-framework providers.

Both providers redefine the ``test`` command, overriding whatever the stack
provider contributed, and supply the document's testing-strategy section.
"""

from __future__ import annotations

import textwrap
from typing import Any, Optional

from setupdoc.config import ProjectConfig
from setupdoc.utils import find_existing_files

from .contract import (
    CapabilityDescriptor,
    Category,
    ConfigFile,
    Dependencies,
    MarkdownSection,
)


# ---------------------------------------------------------------------------
# Jest
# ---------------------------------------------------------------------------


class JestProvider:
    """Jest unit tests for JavaScript and TypeScript projects."""

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = JEST
        self.manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    @property
    def _typescript(self) -> bool:
        return self.config.language in (None, "TypeScript")

    def dependencies(self) -> Dependencies:
        development = ["jest"]
        if self._typescript:
            development += ["ts-jest", "@types/jest"]
        if self.config.stack in ("react", "nextjs-app"):
            development += ["@testing-library/react", "@testing-library/jest-dom"]
        return Dependencies(production=[], development=development)

    def config_files(self) -> list[ConfigFile]:
        preset = "  preset: 'ts-jest',\n" if self._typescript else ""
        return [
            ConfigFile(
                name="jest.config.js",
                language="javascript",
                content="module.exports = {\n" + preset + "  testEnvironment: 'node',\n};\n",
            )
        ]

    def file_structure(self) -> str:
        return ""

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        return {
            "test": f"{self.manager} test",
            "testWatch": f"{self.manager} test -- --watch",
            "coverage": f"{self.manager} test -- --coverage",
        }

    def security_guidelines(self) -> list[str]:
        return []

    def template_variables(self) -> dict[str, Any]:
        return {"testRunner": "jest"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"unit-tests", "snapshots", "mocking", "coverage"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in ("fastapi", "pytest-plugin")

    def testing_strategy(self) -> Optional[str]:
        return textwrap.dedent(
            """\
            - Write unit tests for all utilities and hooks
            - Component tests with React Testing Library
            - Mock external dependencies
            - Aim for 80% code coverage"""
        )

    def ui_guidelines(self) -> Optional[str]:
        return None


JEST = CapabilityDescriptor(
    name="jest-plugin",
    display_name="Jest",
    category=Category.TESTING,
    factory=JestProvider,
    project_types=frozenset({"fullstack", "frontend", "backend", "library", "cli"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🃏",
    description="JavaScript testing framework",
)


# ---------------------------------------------------------------------------
# Pytest
# ---------------------------------------------------------------------------


class PytestProvider:
    """Pytest for Python projects.

    ``before_generation`` looks for an existing pytest configuration under
    ``projectRoot``; when one is present no ``pytest.ini`` is proposed.
    """

    CONFIG_CANDIDATES = ["pytest.ini", "pyproject.toml", "setup.cfg", "tox.ini"]

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = PYTEST
        self.existing_config: list[str] = []

    async def before_generation(self, config: ProjectConfig) -> None:
        self.existing_config = await find_existing_files(
            config.project_root, self.CONFIG_CANDIDATES
        )

    def dependencies(self) -> Dependencies:
        return Dependencies(
            production=[],
            development=["pytest", "pytest-asyncio", "pytest-cov"],
        )

    def config_files(self) -> list[ConfigFile]:
        if self.existing_config:
            return []
        return [
            ConfigFile(
                name="pytest.ini",
                language="ini",
                content="[pytest]\ntestpaths = tests\nasyncio_mode = auto\n",
            )
        ]

    def file_structure(self) -> str:
        return ""

    def markdown_sections(self) -> list[MarkdownSection]:
        if not self.existing_config:
            return []
        return [
            MarkdownSection(
                title="Existing Test Configuration",
                content="Pytest settings already live in "
                + ", ".join(f"`{name}`" for name in self.existing_config)
                + "; extend them rather than adding a new file.",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {
            "test": "pytest",
            "testWatch": "pytest -f",
            "coverage": "pytest --cov --cov-report=term-missing",
        }

    def security_guidelines(self) -> list[str]:
        return []

    def template_variables(self) -> dict[str, Any]:
        return {"testRunner": "pytest"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"unit-tests", "fixtures", "async-tests", "coverage"})

    def is_compatible_with(self, other: str) -> bool:
        return other != "jest-plugin"

    def testing_strategy(self) -> Optional[str]:
        return textwrap.dedent(
            """\
            - Unit tests for services and utilities with pytest fixtures
            - Async endpoints tested with pytest-asyncio and httpx
            - Shared fixtures live in `conftest.py`
            - Track coverage with pytest-cov"""
        )

    def ui_guidelines(self) -> Optional[str]:
        return None


PYTEST = CapabilityDescriptor(
    name="pytest-plugin",
    display_name="Pytest",
    category=Category.TESTING,
    factory=PytestProvider,
    project_types=frozenset({"backend", "fullstack", "datascience", "library", "cli"}),
    languages=frozenset({"Python"}),
    icon="🧪",
    description="Python testing framework",
)


DESCRIPTORS: list[CapabilityDescriptor] = [JEST, PYTEST]
