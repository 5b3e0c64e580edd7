"""Unit tests for configuration models (setupdoc.config).

Tests cover:
- ProjectConfig aliases, normalisation, extras, immutability
- ConfigValidator required fields, schema errors, business rules, warnings
- Settings defaults and from_env
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from setupdoc.config import SCHEMA_DEFAULTS, ConfigValidator, ProjectConfig, Settings


# ---------------------------------------------------------------------------
# ProjectConfig
# ---------------------------------------------------------------------------


class TestProjectConfig:
    @pytest.mark.unit
    def test_camel_case_input(self):
        config = ProjectConfig.model_validate(
            {"projectType": "backend", "packageManager": "pnpm", "gitCommitStyle": "simple"}
        )
        assert config.project_type == "backend"
        assert config.package_manager == "pnpm"
        assert config.git_commit_style == "simple"

    @pytest.mark.unit
    def test_snake_case_input(self):
        config = ProjectConfig(project_type="cli", mcp_servers=["git"])
        assert config.project_type == "cli"
        assert config.mcp_servers == ["git"]

    @pytest.mark.unit
    def test_defaults(self):
        config = ProjectConfig()
        assert config.project_type is None
        assert config.code_style == []
        assert config.save_profile is False

    @pytest.mark.unit
    def test_scalar_list_fields_wrapped(self):
        config = ProjectConfig.model_validate({"codeStyle": "functional", "teamFeatures": "none"})
        assert config.code_style == ["functional"]
        assert config.team_features == ["none"]

    @pytest.mark.unit
    def test_strings_trimmed_and_none_dropped(self):
        config = ProjectConfig.model_validate({"profileName": "  mine  ", "stack": None})
        assert config.profile_name == "mine"
        assert config.stack is None

    @pytest.mark.unit
    def test_extras_preserved(self):
        config = ProjectConfig.model_validate({"projectType": "cli", "customThing": 1})
        assert config.get_extra("customThing") == 1
        assert config.get_extra("missing", "fallback") == "fallback"

    @pytest.mark.unit
    def test_to_context_uses_camel_case(self):
        context = ProjectConfig(project_type="backend", stack="fastapi").to_context()
        assert context["projectType"] == "backend"
        assert context["stack"] == "fastapi"
        assert "database" not in context

    @pytest.mark.unit
    def test_frozen(self):
        config = ProjectConfig(project_type="backend")
        with pytest.raises(ValidationError):
            config.project_type = "cli"

    @pytest.mark.unit
    def test_invalid_enum_value(self):
        with pytest.raises(ValidationError):
            ProjectConfig.model_validate({"database": "oracle"})


# ---------------------------------------------------------------------------
# ConfigValidator
# ---------------------------------------------------------------------------


class TestConfigValidator:
    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    @pytest.mark.unit
    def test_valid_minimal(self, validator: ConfigValidator):
        result = validator.validate({"projectType": "backend"})
        assert result.is_valid
        assert result.errors == []

    @pytest.mark.unit
    def test_missing_required(self, validator: ConfigValidator):
        result = validator.validate({})
        assert not result.is_valid
        assert result.errors == ["Required field missing: projectType"]

    @pytest.mark.unit
    def test_schema_error_reported_with_location(self, validator: ConfigValidator):
        result = validator.validate({"projectType": "desktop"})
        assert not result.is_valid
        assert any(e.startswith("projectType:") for e in result.errors)

    @pytest.mark.unit
    def test_collects_every_error(self, validator: ConfigValidator):
        result = validator.validate({"language": "Klingon", "database": "oracle"})
        assert "Required field missing: projectType" in result.errors
        assert any(e.startswith("language:") for e in result.errors)
        assert any(e.startswith("database:") for e in result.errors)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "config, message",
        [
            ({"stack": "custom"}, 'customStack is required when stack is "custom"'),
            ({"language": "Other"}, 'customLanguage is required when language is "Other"'),
            ({"database": "other"}, 'customDatabase is required when database is "other"'),
            (
                {"authentication": "other"},
                'customAuthentication is required when authentication is "other"',
            ),
            ({"saveProfile": True}, "profileName is required when saveProfile is true"),
        ],
    )
    def test_business_rules(self, validator: ConfigValidator, config, message):
        result = validator.validate({"projectType": "backend", **config})
        assert not result.is_valid
        assert message in result.errors

    @pytest.mark.unit
    def test_custom_companion_satisfies_rule(self, validator: ConfigValidator):
        result = validator.validate(
            {"projectType": "backend", "stack": "custom", "customStack": "Phoenix"}
        )
        assert result.is_valid

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "config, fragment",
        [
            ({"projectType": "fullstack", "stack": "nextjs-app", "styling": "styled-components"},
             "Styled Components with App Router"),
            ({"projectType": "backend", "database": "mongodb", "language": "Go"},
             "MongoDB with Go"),
            ({"projectType": "cli", "styling": "tailwind"}, "Styling frameworks"),
            ({"projectType": "backend", "componentLibrary": "mui"}, "Component libraries"),
        ],
    )
    def test_warnings(self, validator: ConfigValidator, config, fragment):
        result = validator.validate(config)
        assert result.is_valid
        assert any(fragment in w for w in result.warnings)

    @pytest.mark.unit
    def test_component_library_none_does_not_warn(self, validator: ConfigValidator):
        result = validator.validate({"projectType": "backend", "componentLibrary": "none"})
        assert result.warnings == []

    @pytest.mark.unit
    def test_validate_never_raises(self, validator: ConfigValidator):
        result = validator.validate({"projectType": 5, "codeStyle": [1, 2]})
        assert not result.is_valid

    @pytest.mark.unit
    def test_sanitize(self, validator: ConfigValidator):
        config = validator.sanitize({"projectType": " backend ", "codeStyle": "functional"})
        assert isinstance(config, ProjectConfig)
        assert config.project_type == "backend"
        assert config.code_style == ["functional"]

    @pytest.mark.unit
    def test_defaults_are_a_copy(self, validator: ConfigValidator):
        defaults = validator.defaults()
        assert defaults == SCHEMA_DEFAULTS
        defaults["packageManager"] = "bun"
        assert SCHEMA_DEFAULTS["packageManager"] == "npm"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings()
        assert settings.template_path.name == "base.md"
        assert settings.template_path.is_file()
        assert settings.probe_environment is True
        assert settings.default_package_manager == "npm"

    @pytest.mark.unit
    def test_from_env(self, tmp_path):
        env = {
            "SETUPDOC_TEMPLATE_PATH": str(tmp_path / "custom.md"),
            "SETUPDOC_PROBE_ENVIRONMENT": "false",
            "SETUPDOC_PACKAGE_MANAGER": "pnpm",
        }
        with patch.dict(os.environ, env):
            settings = Settings.from_env()
        assert settings.template_path == tmp_path / "custom.md"
        assert settings.probe_environment is False
        assert settings.default_package_manager == "pnpm"

    @pytest.mark.unit
    def test_from_env_without_variables(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        assert settings == Settings()

    @pytest.mark.unit
    def test_from_env_rejects_unknown_package_manager(self):
        with patch.dict(os.environ, {"SETUPDOC_PACKAGE_MANAGER": "cargo"}):
            with pytest.raises(ValidationError):
                Settings.from_env()
