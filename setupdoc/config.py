"""setupdoc configuration.

Two models live here:

* ``ProjectConfig`` -- the user's answers, as handed over by the prompt or
  profile layer.  Keys arrive in camelCase (``projectType``, ``stack`` ...)
  and are exposed as snake_case attributes.  Unknown keys are preserved as
  extras so custom overrides survive the round trip.
* ``Settings`` -- knobs for the generator itself (template location,
  whether to probe the environment, defaults).

``ConfigValidator`` wraps ``ProjectConfig`` with the validate/sanitize
contract the composition pipeline consumes.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel


ProjectType = Literal[
    "fullstack", "backend", "frontend", "cli", "mobile", "datascience", "library"
]
Language = Literal[
    "TypeScript", "JavaScript", "Python", "Go", "Java", "Ruby", "Rust", "C++", "C#", "Other"
]
PackageManager = Literal["npm", "yarn", "pnpm", "bun"]
Database = Literal[
    "postgresql", "mysql", "mongodb", "sqlite", "supabase", "firebase", "other", "none"
]
Authentication = Literal[
    "nextauth", "clerk", "auth0", "supabase-auth", "jwt", "other", "none"
]
Styling = Literal[
    "tailwind", "css-modules", "styled-components", "vanilla-css", "scss", "emotion"
]
ComponentLibrary = Literal["shadcn", "mantine", "mui", "antd", "chakra", "none"]
Testing = Literal[
    "jest", "vitest", "playwright", "cypress", "pytest", "unittest", "go-test", "none"
]
Deployment = Literal[
    "vercel", "netlify", "aws", "gcp", "fly", "railway", "docker", "unsure"
]
CodeStyle = Literal[
    "ts-strict", "functional", "self-documenting", "comments", "early-returns", "error-handling"
]
AssistantBehavior = Literal["explain", "ask-first", "tdd", "fast", "patterns"]
GitCommitStyle = Literal["conventional", "simple", "detailed"]
BranchStrategy = Literal["feature-slash", "feature-dash", "username"]
McpServer = Literal["puppeteer", "sentry", "database", "filesystem", "git", "none"]
Workflow = Literal[
    "explore-plan-code", "tdd", "screenshot-ui", "safe-yolo", "multi-assistant", "standard"
]
TeamFeature = Literal[
    "shared-mcp", "team-commands", "team-allowlist", "review-automation", "issue-triage", "none"
]

#: Fields that always hold lists; a bare scalar is wrapped.
LIST_FIELDS: tuple[str, ...] = ("codeStyle", "assistantBehavior", "mcpServers", "teamFeatures")
_SNAKE_LIST_FIELDS: frozenset[str] = frozenset(
    {"code_style", "assistant_behavior", "mcp_servers", "team_features"}
)

#: Defaults declared by the configuration schema (camelCase keys).
SCHEMA_DEFAULTS: dict[str, Any] = {
    "packageManager": "npm",
    "wantAdvancedOptions": False,
    "preferredWorkflow": "standard",
    "saveProfile": True,
}


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """The answers describing the project to document.

    Every field is optional at the model level so that an empty
    ``ProjectConfig()`` can be bound to providers for compatibility probes;
    ``ConfigValidator`` enforces the required ones.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    project_type: Optional[ProjectType] = None
    stack: Optional[str] = None
    custom_stack: Optional[str] = None
    language: Optional[Language] = None
    custom_language: Optional[str] = None
    package_manager: Optional[PackageManager] = None
    database: Optional[Database] = None
    custom_database: Optional[str] = None
    authentication: Optional[Authentication] = None
    custom_authentication: Optional[str] = None
    styling: Optional[Styling] = None
    component_library: Optional[ComponentLibrary] = None
    testing: Optional[Testing] = None
    deployment: Optional[Deployment] = None
    code_style: list[CodeStyle] = Field(default_factory=list)
    assistant_behavior: list[AssistantBehavior] = Field(default_factory=list)
    git_commit_style: Optional[GitCommitStyle] = None
    branch_strategy: Optional[BranchStrategy] = None
    want_advanced_options: bool = False
    mcp_servers: list[McpServer] = Field(default_factory=list)
    preferred_workflow: Optional[Workflow] = None
    team_features: list[TeamFeature] = Field(default_factory=list)
    save_profile: bool = False
    profile_name: Optional[str] = None
    project_root: Optional[str] = Field(
        default=None, description="Existing project directory providers may probe"
    )

    @model_validator(mode="before")
    @classmethod
    def _normalise(cls, data: Any) -> Any:
        """Drop ``None`` values, trim strings and wrap scalar list fields."""
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
            if key in LIST_FIELDS or key in _SNAKE_LIST_FIELDS:
                if not isinstance(value, (list, tuple)):
                    value = [value]
            cleaned[key] = value
        return cleaned

    def get_extra(self, key: str, default: Any = None) -> Any:
        """Return a free-form (non-schema) field such as a ``custom*`` override."""
        return (self.model_extra or {}).get(key, default)

    def to_context(self) -> dict[str, Any]:
        """Dump the configuration with camelCase keys for template rendering."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationResult(BaseModel):
    """Outcome of validating a raw configuration mapping."""

    is_valid: bool = Field(..., description="True when no errors were found")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class ConfigValidator:
    """Validates and sanitises raw configuration mappings.

    ``validate`` never raises; it returns every problem it can find so the
    caller can show them all at once.  ``sanitize`` returns the typed
    ``ProjectConfig`` and raises ``pydantic.ValidationError`` if handed a
    mapping that ``validate`` would have rejected.
    """

    required: tuple[str, ...] = ("projectType",)

    def validate(self, config: dict[str, Any]) -> ValidationResult:
        errors: list[str] = []
        warnings: list[str] = []

        for field_name in self.required:
            if config.get(field_name) is None:
                errors.append(f"Required field missing: {field_name}")

        model: ProjectConfig | None = None
        try:
            model = ProjectConfig.model_validate(config)
        except ValidationError as exc:
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"]) or "config"
                errors.append(f"{location}: {error['msg']}")

        if model is not None:
            self._validate_business_rules(model, errors, warnings)

        return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)

    def sanitize(self, config: dict[str, Any]) -> ProjectConfig:
        return ProjectConfig.model_validate(config)

    def defaults(self) -> dict[str, Any]:
        return dict(SCHEMA_DEFAULTS)

    # -- Business rules ------------------------------------------------------

    @staticmethod
    def _validate_business_rules(
        config: ProjectConfig, errors: list[str], warnings: list[str]
    ) -> None:
        if config.stack == "custom" and not config.custom_stack:
            errors.append('customStack is required when stack is "custom"')
        if config.language == "Other" and not config.custom_language:
            errors.append('customLanguage is required when language is "Other"')
        if config.database == "other" and not config.custom_database:
            errors.append('customDatabase is required when database is "other"')
        if config.authentication == "other" and not config.custom_authentication:
            errors.append('customAuthentication is required when authentication is "other"')
        if config.save_profile and not config.profile_name:
            errors.append("profileName is required when saveProfile is true")

        if config.stack == "nextjs-app" and config.styling == "styled-components":
            warnings.append(
                "Styled Components with App Router may require additional configuration"
            )
        if config.database == "mongodb" and config.language == "Go":
            warnings.append("MongoDB with Go may require additional driver setup")
        if config.project_type in ("cli", "library") and config.styling in (
            "tailwind",
            "styled-components",
        ):
            warnings.append(
                "Styling frameworks are typically not needed for CLI tools or libraries"
            )
        if (
            config.project_type == "backend"
            and config.component_library is not None
            and config.component_library != "none"
        ):
            warnings.append(
                "Component libraries are not typically used in backend-only projects"
            )


# ---------------------------------------------------------------------------
# Generator settings
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "base.md"


class Settings(BaseModel):
    """Tuning knobs for the composition pipeline."""

    template_path: Path = Field(default=_DEFAULT_TEMPLATE_PATH)
    probe_environment: bool = Field(
        default=True,
        description="Probe PATH for tools such as the GitHub CLI while building sections",
    )
    default_package_manager: PackageManager = Field(default="npm")
    version: str = Field(default="2.0.0", description="Generator version stamped into documents")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            SETUPDOC_TEMPLATE_PATH, SETUPDOC_PROBE_ENVIRONMENT,
            SETUPDOC_PACKAGE_MANAGER.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SETUPDOC_TEMPLATE_PATH"):
            kwargs["template_path"] = Path(os.environ["SETUPDOC_TEMPLATE_PATH"])
        if os.environ.get("SETUPDOC_PROBE_ENVIRONMENT"):
            kwargs["probe_environment"] = os.environ["SETUPDOC_PROBE_ENVIRONMENT"].lower() in (
                "1",
                "true",
                "yes",
            )
        if os.environ.get("SETUPDOC_PACKAGE_MANAGER"):
            kwargs["default_package_manager"] = os.environ["SETUPDOC_PACKAGE_MANAGER"]
        return cls(**kwargs)
