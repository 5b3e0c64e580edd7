"""Composition pipeline.

Turns a raw configuration mapping into the final setup document:

1. Validate the configuration (abort with every violation on failure).
2. Sanitize it into a typed ``ProjectConfig``.
3. Select providers in the fixed order stack, database, testing, styling.
4. Report compatibility conflicts between them (warnings only).
5. Await each provider's ``before_generation`` hook, then merge its
   contributions into the render context.
6. Add the derived fields from ``setupdoc.sections``.
7. Render the master template.

Usage::

    from setupdoc import Generator, build_default_registry

    generator = Generator(build_default_registry())
    result = await generator.generate({"projectType": "backend", "stack": "fastapi"})
    print(result.markdown)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field
from rich.markup import escape

from setupdoc import sections
from setupdoc.config import ConfigValidator, ProjectConfig, Settings
from setupdoc.errors import ConfigValidationError, ProviderError
from setupdoc.providers.contract import CapabilityProvider, Category, ConfigFile
from setupdoc.providers.registry import CompatibilityConflict, ProviderRegistry
from setupdoc.templates.engine import TemplateEngine
from setupdoc.utils import (
    command_available,
    console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


DEFAULT_SECURITY_GUIDELINES: list[str] = [
    "Never commit .env files",
    "Validate all user inputs",
    "Use environment variables for secrets",
    "Implement proper authentication",
    "Enable CORS appropriately",
    "Use HTTPS in production",
    "Regular dependency updates",
    "SQL injection prevention (if using SQL)",
    "XSS protection",
]


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Everything one composition run produced."""

    markdown: str = Field(..., description="The rendered document")
    context: dict[str, Any] = Field(default_factory=dict, description="Final render context")
    providers: list[str] = Field(default_factory=list, description="Selected providers, in order")
    config_files: list[ConfigFile] = Field(default_factory=list)
    conflicts: list[CompatibilityConflict] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class Generator:
    """Composes provider contributions into one rendered document.

    The registry is injected; the generator never registers providers
    itself.  Provider instances are created fresh for every ``generate``
    call and dropped when it returns.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        engine: Optional[TemplateEngine] = None,
        validator: Optional[ConfigValidator] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.registry = registry
        self.engine = engine or TemplateEngine()
        self.validator = validator or ConfigValidator()
        self.settings = settings or Settings()

    # -- Public API --------------------------------------------------------

    async def generate(self, config: dict[str, Any]) -> GenerationResult:
        """Run the full pipeline for a raw configuration mapping.

        Raises:
            ConfigValidationError: If the configuration is invalid.  No
                provider runs in that case.
            ProviderError: If a provider's hook or contribution fails.
            TemplateLoadError: If the master template cannot be read.
        """
        validation = self.validator.validate(config)
        if not validation.is_valid:
            print_error(f"Configuration invalid: {'; '.join(validation.errors)}")
            raise ConfigValidationError(validation.errors)
        for warning in validation.warnings:
            print_warning(f"Warning: {warning}")

        project = self.validator.sanitize(config)
        providers = self.select_providers(project)
        names = [p.descriptor.name for p in providers]

        conflicts = self.registry.validate_compatibility(names)
        for conflict in conflicts:
            print_warning(f"Incompatible providers: {conflict.reason}")

        context = await self.build_context(project, providers)
        markdown = await self.engine.render_file(self.settings.template_path, context)

        result = GenerationResult(
            markdown=markdown,
            context=context,
            providers=names,
            config_files=[ConfigFile(**f) for f in context["configFiles"]],
            conflicts=conflicts,
            warnings=validation.warnings,
        )
        self._print_summary(result)
        return result

    async def generate_markdown(self, config: dict[str, Any]) -> str:
        """Run the pipeline and return only the rendered document."""
        result = await self.generate(config)
        return result.markdown

    def select_providers(self, config: ProjectConfig) -> list[CapabilityProvider]:
        """Instantiate the providers *config* asks for, in selection order.

        Names that are not registered are skipped so configurations that
        reference removed or optional providers still compose.
        """
        candidates: list[str] = []
        if config.stack and config.stack != "custom":
            candidates.append(config.stack)
        if config.database and config.database != "none":
            candidates.append(f"{config.database}-plugin")
        if config.testing and config.testing != "none":
            candidates.append(f"{config.testing}-plugin")
        if config.styling:
            candidates.append(f"{config.styling}-plugin")

        selected: list[CapabilityProvider] = []
        for name in candidates:
            if name not in self.registry:
                console.print(f"  [dim]No provider registered for {escape(name)}; skipping[/dim]")
                continue
            selected.append(self.registry.instantiate(name, config))
        return selected

    async def build_context(
        self, config: ProjectConfig, providers: list[CapabilityProvider]
    ) -> dict[str, Any]:
        """Merge provider contributions and derived fields into a render context.

        Hooks run strictly one after another, in *providers* order.
        """
        context = self._base_context(config)

        for provider in providers:
            await self._merge_provider(provider, context, config)

        await self._add_derived_fields(context, config, providers)
        return context

    # -- Internal helpers ----------------------------------------------------

    def _print_summary(self, result: GenerationResult) -> None:
        context = result.context
        print_summary_table(
            {
                "Stack": context.get("stackLabel", "Not specified"),
                "Providers": ", ".join(result.providers) or "none",
                "Dependencies": f"{len(context['productionDependencies'])} production, "
                f"{len(context['developmentDependencies'])} development",
                "Config files": str(len(result.config_files)),
                "Conflicts": str(len(result.conflicts)),
            },
            title="Setup document",
        )
        print_success(f"Composed setup document from {len(result.providers)} provider(s)")

    def _base_context(self, config: ProjectConfig) -> dict[str, Any]:
        manager = config.package_manager or self.settings.default_package_manager
        return {
            "config": config.to_context(),
            "version": self.settings.version,
            "profileName": config.profile_name or "custom",
            "date": datetime.now(timezone.utc).date().isoformat(),
            "packageManager": manager,
            "productionDependencies": [],
            "developmentDependencies": [],
            "configFiles": [],
            "customSections": [],
            "commands": {
                "dev": f"{manager} run dev",
                "build": f"{manager} run build",
                "test": f"{manager} test",
                "testWatch": f"{manager} test:watch",
                "lint": f"{manager} run lint",
            },
            "securityGuidelines": list(DEFAULT_SECURITY_GUIDELINES),
        }

    async def _merge_provider(
        self,
        provider: CapabilityProvider,
        context: dict[str, Any],
        config: ProjectConfig,
    ) -> None:
        name = provider.descriptor.name
        try:
            await provider.before_generation(config)

            deps = provider.dependencies()
            context["productionDependencies"].extend(deps.production)
            context["developmentDependencies"].extend(deps.development)
            context["configFiles"].extend(f.model_dump() for f in provider.config_files())
            context["customSections"].extend(s.model_dump() for s in provider.markdown_sections())
            context["commands"].update(provider.commands())
            context["securityGuidelines"].extend(provider.security_guidelines())
            context.update(provider.template_variables())
        except Exception as exc:
            raise ProviderError(name, f"{type(exc).__name__}: {exc}") from exc

    async def _add_derived_fields(
        self,
        context: dict[str, Any],
        config: ProjectConfig,
        providers: list[CapabilityProvider],
    ) -> None:
        context.update(sections.build_labels(config))
        context["commandList"] = [
            {"name": name, "command": command} for name, command in context["commands"].items()
        ]

        stack = _first_of(providers, Category.STACK)
        structure = _contribute(stack, "file_structure") if stack is not None else ""
        context["fileStructure"] = structure or sections.fallback_file_structure(config)

        tester = _first_of(providers, Category.TESTING)
        strategy = _contribute(tester, "testing_strategy") if tester is not None else None
        context["testingStrategy"] = strategy or sections.fallback_testing_strategy(config.testing)

        styler = _first_of(providers, Category.STYLING)
        guidelines = _contribute(styler, "ui_guidelines") if styler is not None else None
        context["uiGuidelines"] = guidelines or sections.fallback_ui_guidelines(config.styling)

        has_gh = await command_available("gh") if self.settings.probe_environment else False
        context["hasGitHubCli"] = has_gh
        context["githubCliSection"] = (
            sections.github_cli_section(has_gh) if self.settings.probe_environment else ""
        )
        context["mcpSection"] = sections.mcp_section(config.mcp_servers)
        context["toolAllowlistSection"] = sections.tool_allowlist_section(config)
        context["workflowSection"] = sections.workflow_section(config.preferred_workflow)
        context["teamCollaborationSection"] = sections.team_collaboration_section(
            config.team_features
        )


def _first_of(
    providers: list[CapabilityProvider], category: Category
) -> Optional[CapabilityProvider]:
    for provider in providers:
        if provider.descriptor.category is category:
            return provider
    return None


def _contribute(provider: CapabilityProvider, method: str) -> Any:
    """Call a contribution method, tagging any failure with the provider name."""
    try:
        return getattr(provider, method)()
    except Exception as exc:
        raise ProviderError(provider.descriptor.name, f"{type(exc).__name__}: {exc}") from exc
