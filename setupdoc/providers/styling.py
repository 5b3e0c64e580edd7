"""Styling providers."""

from __future__ import annotations

import textwrap
from typing import Any, Optional

from setupdoc.config import ProjectConfig

from .contract import (
    CapabilityDescriptor,
    Category,
    ConfigFile,
    Dependencies,
    MarkdownSection,
)


class TailwindProvider:
    """Tailwind CSS with PostCSS."""

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = TAILWIND

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        return Dependencies(
            production=[],
            development=["tailwindcss", "postcss", "autoprefixer"],
        )

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="tailwind.config.js",
                language="javascript",
                content=textwrap.dedent(
                    """\
                    /** @type {import('tailwindcss').Config} */
                    module.exports = {
                      content: ['./src/**/*.{js,ts,jsx,tsx}'],
                      theme: { extend: {} },
                      plugins: [],
                    };
                    """
                ),
            ),
            ConfigFile(
                name="postcss.config.js",
                language="javascript",
                content="module.exports = {\n  plugins: { tailwindcss: {}, autoprefixer: {} },\n};\n",
            ),
        ]

    def file_structure(self) -> str:
        return ""

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        return {}

    def security_guidelines(self) -> list[str]:
        return []

    def template_variables(self) -> dict[str, Any]:
        return {"cssFramework": "tailwind"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"utility-classes", "responsive", "dark-mode"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in ("styled-components-plugin", "emotion-plugin")

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return textwrap.dedent(
            """\
            - Use Tailwind utility classes
            - Create reusable component classes with @apply
            - Mobile-first responsive design
            - Use CSS variables for theming"""
        )


TAILWIND = CapabilityDescriptor(
    name="tailwind-plugin",
    display_name="Tailwind CSS",
    category=Category.STYLING,
    factory=TailwindProvider,
    project_types=frozenset({"fullstack", "frontend"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🌊",
    description="Utility-first CSS framework",
)


DESCRIPTORS: list[CapabilityDescriptor] = [TAILWIND]
