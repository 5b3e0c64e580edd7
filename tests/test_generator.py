"""Tests for the composition pipeline (setupdoc.generator).

Tests cover:
- Validation failures abort before any provider runs
- Provider selection order and skipping of unregistered names
- Dependency and command merging
- Hook ordering and ProviderError wrapping
- Compatibility conflicts surfaced as results, not errors
- Derived fields and environment probing
- End-to-end rendering with the bundled template
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from setupdoc.config import ProjectConfig, Settings
from setupdoc.errors import ConfigValidationError, ProviderError
from setupdoc.generator import DEFAULT_SECURITY_GUIDELINES, GenerationResult, Generator
from setupdoc.providers.contract import Category, ConfigFile
from setupdoc.providers.registry import ProviderRegistry
from setupdoc.templates.engine import TemplateEngine


@pytest.fixture
def template_settings(tmp_template: Path) -> Settings:
    return Settings(template_path=tmp_template, probe_environment=False)


@pytest.fixture
def small_generator(
    registry: ProviderRegistry, engine: TemplateEngine, template_settings: Settings
) -> Generator:
    return Generator(registry, engine=engine, settings=template_settings)


def _custom_generator(
    descriptors: list, engine: TemplateEngine, settings: Settings
) -> Generator:
    registry = ProviderRegistry()
    for descriptor in descriptors:
        registry.register(descriptor)
    return Generator(registry, engine=engine, settings=settings)


BACKEND = {"projectType": "backend", "stack": "fastapi", "database": "postgresql"}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_project_type(self, small_generator: Generator):
        with pytest.raises(ConfigValidationError) as exc_info:
            await small_generator.generate({"stack": "fastapi"})
        assert "Required field missing: projectType" in exc_info.value.errors

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_provider_runs_on_invalid_config(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        calls: list[str] = []
        generator = _custom_generator(
            [descriptor_factory("fastapi", calls=calls)], engine, template_settings
        )
        with pytest.raises(ConfigValidationError):
            await generator.generate({"stack": "fastapi", "projectType": "desktop"})
        assert calls == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_warnings_returned(self, engine: TemplateEngine, template_settings: Settings):
        generator = _custom_generator([], engine, template_settings)
        result = await generator.generate({"projectType": "backend", "componentLibrary": "mui"})
        assert result.warnings == [
            "Component libraries are not typically used in backend-only projects"
        ]


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


class TestSelectProviders:
    @pytest.mark.unit
    def test_selection_order(self, small_generator: Generator):
        config = ProjectConfig(
            project_type="fullstack",
            stack="nextjs-app",
            database="postgresql",
            testing="jest",
            styling="tailwind",
        )
        names = [p.descriptor.name for p in small_generator.select_providers(config)]
        assert names == ["nextjs-app", "postgresql-plugin", "jest-plugin", "tailwind-plugin"]

    @pytest.mark.unit
    def test_none_and_custom_skipped(self, small_generator: Generator):
        config = ProjectConfig(stack="custom", custom_stack="Phoenix", database="none", testing="none")
        assert small_generator.select_providers(config) == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unregistered_database_skipped(self, small_generator: Generator):
        result = await small_generator.generate(
            {"projectType": "backend", "stack": "fastapi", "database": "mysql"}
        )
        assert result.providers == ["fastapi"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unregistered_stack_with_markup_characters(self, small_generator: Generator):
        result = await small_generator.generate({"projectType": "frontend", "stack": "svelte[/kit]"})
        assert result.providers == []
        assert result.context["stackLabel"] == "svelte[/kit]"

    @pytest.mark.unit
    def test_skip_message_is_escaped(self, small_generator: Generator):
        with patch("setupdoc.generator.console") as console:
            small_generator.select_providers(ProjectConfig(stack="[bold]x"))
        (message,) = console.print.call_args.args
        assert "\\[bold]x" in message

    @pytest.mark.unit
    def test_providers_bound_to_config(self, small_generator: Generator):
        config = ProjectConfig(stack="fastapi")
        (provider,) = small_generator.select_providers(config)
        assert provider.config is config


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


class TestMerging:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dependencies_concatenate_in_provider_order(self, small_generator: Generator):
        result = await small_generator.generate({**BACKEND, "language": "Python"})
        production = result.context["productionDependencies"]
        assert production.index("fastapi") < production.index("sqlalchemy")
        # Duplicates across providers are kept.
        assert production.count("asyncpg") == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_later_commands_override(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        generator = _custom_generator(
            [
                descriptor_factory("fastapi", commands={"test": "first", "dev": "serve"}),
                descriptor_factory(
                    "postgresql-plugin", Category.DATABASE, commands={"test": "second"}
                ),
            ],
            engine,
            template_settings,
        )
        result = await generator.generate(BACKEND)
        assert result.context["commands"]["test"] == "second"
        assert result.context["commands"]["dev"] == "serve"
        assert result.context["commands"]["lint"] == "npm run lint"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_base_context(self, small_generator: Generator):
        result = await small_generator.generate({"projectType": "cli", "packageManager": "yarn"})
        context = result.context
        assert context["packageManager"] == "yarn"
        assert context["commands"]["dev"] == "yarn run dev"
        assert context["profileName"] == "custom"
        assert context["version"] == "2.0.0"
        assert context["securityGuidelines"] == DEFAULT_SECURITY_GUIDELINES
        assert context["config"]["projectType"] == "cli"
        assert context["config"]["packageManager"] == "yarn"
        assert "profileName" not in context["config"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_security_guidelines_appended(self, small_generator: Generator):
        result = await small_generator.generate(BACKEND)
        guidelines = result.context["securityGuidelines"]
        assert guidelines[: len(DEFAULT_SECURITY_GUIDELINES)] == DEFAULT_SECURITY_GUIDELINES
        assert "Validate every request body with Pydantic models" in guidelines

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_template_variables_merged(self, small_generator: Generator):
        result = await small_generator.generate(BACKEND)
        assert result.context["framework"] == "fastapi"
        assert result.context["databasePort"] == 5432

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_config_files_in_result(self, small_generator: Generator):
        result = await small_generator.generate(BACKEND)
        assert all(isinstance(f, ConfigFile) for f in result.config_files)
        assert [f.name for f in result.config_files] == ["requirements.txt", ".env.example"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rendered_with_merged_context(self, small_generator: Generator):
        markdown = await small_generator.generate_markdown(BACKEND)
        assert markdown.startswith("# Backend API\n")
        assert "deps: fastapi, uvicorn[standard]" in markdown
        assert "test=pytest;" in markdown


# ---------------------------------------------------------------------------
# Hooks & errors
# ---------------------------------------------------------------------------


class TestHooks:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_hooks_run_in_selection_order(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        calls: list[str] = []
        generator = _custom_generator(
            [
                descriptor_factory("postgresql-plugin", Category.DATABASE, calls=calls),
                descriptor_factory("fastapi", calls=calls),
            ],
            engine,
            template_settings,
        )
        await generator.generate(BACKEND)
        assert calls == ["hook:fastapi", "hook:postgresql-plugin"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_hook_failure_wrapped(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        calls: list[str] = []
        generator = _custom_generator(
            [
                descriptor_factory("fastapi", calls=calls, fail_in="before_generation"),
                descriptor_factory("postgresql-plugin", Category.DATABASE, calls=calls),
            ],
            engine,
            template_settings,
        )
        with pytest.raises(ProviderError) as exc_info:
            await generator.generate(BACKEND)

        assert exc_info.value.provider == "fastapi"
        assert "RuntimeError: before_generation exploded" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert calls == ["hook:fastapi"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_contribution_failure_wrapped(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        generator = _custom_generator(
            [
                descriptor_factory("fastapi"),
                descriptor_factory("postgresql-plugin", Category.DATABASE, fail_in="dependencies"),
            ],
            engine,
            template_settings,
        )
        with pytest.raises(ProviderError, match="Provider 'postgresql-plugin' failed"):
            await generator.generate(BACKEND)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_file_structure_failure_wrapped(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        generator = _custom_generator(
            [descriptor_factory("fastapi", fail_in="file_structure")], engine, template_settings
        )
        with pytest.raises(ProviderError) as exc_info:
            await generator.generate({"projectType": "backend", "stack": "fastapi"})
        assert exc_info.value.provider == "fastapi"


# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------


class TestConflicts:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_conflicts_reported_not_raised(
        self, engine: TemplateEngine, template_settings: Settings, descriptor_factory
    ):
        generator = _custom_generator(
            [
                descriptor_factory("fastapi", incompatible=frozenset({"postgresql-plugin"})),
                descriptor_factory("postgresql-plugin", Category.DATABASE),
            ],
            engine,
            template_settings,
        )
        result = await generator.generate(BACKEND)

        assert isinstance(result, GenerationResult)
        assert [c.reason for c in result.conflicts] == [
            "fastapi is incompatible with postgresql-plugin"
        ]
        assert result.markdown

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_builtin_selection_has_no_conflicts(self, small_generator: Generator):
        result = await small_generator.generate({**BACKEND, "testing": "pytest"})
        assert result.conflicts == []

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_django_selection(self, small_generator: Generator):
        result = await small_generator.generate(
            {**BACKEND, "stack": "django", "testing": "pytest", "language": "Python"}
        )
        assert result.providers == ["django", "postgresql-plugin", "pytest-plugin"]
        assert result.conflicts == []
        assert result.context["commands"]["dev"] == "python manage.py runserver"


# ---------------------------------------------------------------------------
# Derived fields
# ---------------------------------------------------------------------------


class TestDerivedFields:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fallbacks_without_providers(
        self, engine: TemplateEngine, template_settings: Settings
    ):
        generator = _custom_generator([], engine, template_settings)
        result = await generator.generate({"projectType": "cli", "language": "Python"})
        context = result.context
        assert context["fileStructure"] == "src/\n└── index.py"
        assert "No testing framework configured yet" in context["testingStrategy"]
        assert context["uiGuidelines"] == ""
        assert context["languageLabel"] == "Python"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_provider_sections_preferred(self, small_generator: Generator):
        result = await small_generator.generate({**BACKEND, "testing": "pytest"})
        assert result.context["fileStructure"].startswith("app/")
        assert "pytest fixtures" in result.context["testingStrategy"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_command_list_mirrors_commands(self, small_generator: Generator):
        result = await small_generator.generate(BACKEND)
        listed = {item["name"]: item["command"] for item in result.context["commandList"]}
        assert listed == result.context["commands"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_disabled(self, small_generator: Generator):
        probe = AsyncMock(return_value=True)
        with patch("setupdoc.generator.command_available", probe):
            result = await small_generator.generate(BACKEND)
        probe.assert_not_awaited()
        assert result.context["hasGitHubCli"] is False
        assert result.context["githubCliSection"] == ""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_probe_enabled(self, registry: ProviderRegistry, engine: TemplateEngine, tmp_template: Path):
        generator = Generator(
            registry, engine=engine, settings=Settings(template_path=tmp_template)
        )
        probe = AsyncMock(return_value=True)
        with patch("setupdoc.generator.command_available", probe):
            result = await generator.generate(BACKEND)
        probe.assert_awaited_once_with("gh")
        assert result.context["hasGitHubCli"] is True
        assert "GitHub CLI Detected" in result.context["githubCliSection"]


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


class TestConsoleOutput:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_summary_printed_after_render(self, small_generator: Generator):
        with patch("setupdoc.generator.print_summary_table") as summary, patch(
            "setupdoc.generator.print_success"
        ) as success:
            result = await small_generator.generate(BACKEND)

        data = summary.call_args.args[0]
        assert summary.call_args.kwargs["title"] == "Setup document"
        assert data["Stack"] == "Python + FastAPI"
        assert data["Providers"] == "fastapi, postgresql-plugin"
        assert data["Config files"] == str(len(result.config_files))
        assert data["Conflicts"] == "0"
        success.assert_called_once_with("Composed setup document from 2 provider(s)")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_selection_summary(
        self, engine: TemplateEngine, template_settings: Settings
    ):
        generator = _custom_generator([], engine, template_settings)
        with patch("setupdoc.generator.print_summary_table") as summary:
            await generator.generate({"projectType": "cli"})
        assert summary.call_args.args[0]["Providers"] == "none"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_config_prints_error(self, small_generator: Generator):
        with patch("setupdoc.generator.print_error") as error, patch(
            "setupdoc.generator.print_summary_table"
        ) as summary:
            with pytest.raises(ConfigValidationError):
                await small_generator.generate({"stack": "fastapi"})

        (message,) = error.call_args.args
        assert message.startswith("Configuration invalid: ")
        assert "Required field missing: projectType" in message
        summary.assert_not_called()


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


class TestBundledTemplate:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_fullstack_document(self, generator: Generator, nextjs_config: dict[str, Any]):
        markdown = await generator.generate_markdown(nextjs_config)

        assert markdown.startswith("# Full-Stack Web App Project Setup")
        assert "- **Stack**: Next.js 14 (App Router)" in markdown
        assert "- **Database**: PostgreSQL" in markdown
        assert "pnpm dev" in markdown
        assert "### `tailwind.config.js`" in markdown
        assert "## Next.js Conventions" in markdown
        assert "- Never commit .env files" in markdown
        assert "MCP Server Configuration" in markdown
        assert "Test-Driven Development Workflow" in markdown
        assert "{{" not in markdown

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_backend_document(self, generator: Generator, fastapi_config: dict[str, Any]):
        markdown = await generator.generate_markdown(fastapi_config)

        assert markdown.startswith("# Backend API Project Setup")
        assert "**Production**: fastapi, uvicorn[standard]" in markdown
        assert "- Write self-documenting code" in markdown
        assert "- Ask before making major changes" in markdown
        assert "- **Commits**: Conventional commits (feat:, fix:, etc.)" in markdown
        assert "- **Branches**: feature/branch-name" in markdown
        assert "UI Guidelines" not in markdown
        assert "{{" not in markdown

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_rendering_is_deterministic(
        self, generator: Generator, fastapi_config: dict[str, Any]
    ):
        first = await generator.generate_markdown(fastapi_config)
        second = await generator.generate_markdown(fastapi_config)
        assert first == second
