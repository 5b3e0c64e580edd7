"""Derived document fields.

Labels and whole sections that depend on the configuration as a whole
rather than on any single provider.  Every function here is pure; the one
environment fact they need (whether the GitHub CLI is installed) is probed
by the generator and passed in.
"""

from __future__ import annotations

import json
import textwrap
from typing import Optional

from setupdoc.config import ProjectConfig


# ---------------------------------------------------------------------------
# Label tables
# ---------------------------------------------------------------------------

PROJECT_TYPE_LABELS: dict[str, str] = {
    "fullstack": "Full-Stack Web App",
    "backend": "Backend API",
    "frontend": "Frontend",
    "cli": "CLI Tool",
    "mobile": "Mobile App",
    "datascience": "Data Science/ML",
    "library": "Library/Package",
}

STACK_LABELS: dict[str, str] = {
    "nextjs-app": "Next.js 14 (App Router)",
    "nextjs-pages": "Next.js 14 (Pages Router)",
    "remix": "Remix",
    "t3": "T3 Stack",
    "mern": "MERN Stack",
    "mean": "MEAN Stack",
    "express": "Node.js + Express",
    "fastify": "Node.js + Fastify",
    "fastapi": "Python + FastAPI",
    "django": "Python + Django",
    "gin": "Go + Gin",
    "rails": "Ruby on Rails",
    "react": "React",
    "vue": "Vue.js",
    "svelte": "Svelte",
    "angular": "Angular",
    "vanilla": "Vanilla JS",
}

DATABASE_LABELS: dict[str, str] = {
    "postgresql": "PostgreSQL",
    "mysql": "MySQL",
    "mongodb": "MongoDB",
    "sqlite": "SQLite",
    "supabase": "Supabase",
    "firebase": "Firebase",
    "none": "None",
}

DEPLOYMENT_LABELS: dict[str, str] = {
    "vercel": "Vercel",
    "netlify": "Netlify",
    "aws": "AWS",
    "gcp": "Google Cloud",
    "fly": "Fly.io",
    "railway": "Railway",
    "docker": "Docker/Self-hosted",
    "unsure": "Not decided yet",
}

FILE_EXTENSIONS: dict[str, str] = {
    "TypeScript": "ts",
    "JavaScript": "js",
    "Python": "py",
    "Go": "go",
    "Java": "java",
    "Ruby": "rb",
    "Rust": "rs",
    "C++": "cpp",
    "C#": "cs",
}

CODE_STYLE_LABELS: dict[str, str] = {
    "ts-strict": "TypeScript strict mode enabled",
    "functional": "Prefer functional programming patterns",
    "self-documenting": "Write self-documenting code",
    "comments": "Include detailed comments",
    "early-returns": "Use early returns for clarity",
    "error-handling": "Comprehensive error handling",
}

BEHAVIOR_LABELS: dict[str, str] = {
    "explain": "Explain complex architectural decisions",
    "ask-first": "Ask before making major changes",
    "tdd": "Write tests before implementation (TDD)",
    "fast": "Move fast and iterate quickly",
    "patterns": "Follow existing code patterns",
}

GIT_COMMIT_LABELS: dict[str, str] = {
    "conventional": "Conventional commits (feat:, fix:, etc.)",
    "simple": "Simple, concise commit messages",
    "detailed": "Detailed commits with body",
}

BRANCH_STRATEGY_LABELS: dict[str, str] = {
    "feature-slash": "feature/branch-name",
    "feature-dash": "feature-branch-name",
    "username": "username/feature-name",
}

TESTING_LABELS: dict[str, str] = {
    "jest": "Jest",
    "vitest": "Vitest",
    "playwright": "Playwright (E2E)",
    "cypress": "Cypress (E2E)",
    "pytest": "Pytest",
    "unittest": "Python unittest",
    "go-test": "Go testing",
    "none": "None configured yet",
}

STYLING_LABELS: dict[str, str] = {
    "tailwind": "Tailwind CSS",
    "css-modules": "CSS Modules",
    "styled-components": "Styled Components",
    "vanilla-css": "Vanilla CSS",
    "scss": "Sass/SCSS",
    "emotion": "Emotion",
}

COMPONENT_LIBRARY_LABELS: dict[str, str] = {
    "shadcn": "shadcn/ui",
    "mantine": "Mantine",
    "mui": "Material UI",
    "antd": "Ant Design",
    "chakra": "Chakra UI",
    "none": "None - custom components",
}

TESTING_STRATEGIES: dict[str, str] = {
    "jest": textwrap.dedent(
        """\
        - Write unit tests for all utilities and hooks
        - Component tests with React Testing Library
        - Mock external dependencies
        - Aim for 80% code coverage"""
    ),
    "vitest": textwrap.dedent(
        """\
        - Use Vitest for fast unit testing
        - Component tests with React Testing Library
        - Integration tests for API routes
        - Run tests in watch mode during development"""
    ),
    "playwright": textwrap.dedent(
        """\
        - E2E tests for critical user flows
        - Test across multiple browsers
        - Visual regression testing
        - API testing capabilities"""
    ),
    "none": textwrap.dedent(
        """\
        - No testing framework configured yet
        - Consider adding tests as the project grows"""
    ),
}

UI_GUIDELINES: dict[str, str] = {
    "tailwind": textwrap.dedent(
        """\
        - Use Tailwind utility classes
        - Create reusable component classes with @apply
        - Mobile-first responsive design
        - Use CSS variables for theming"""
    ),
    "styled-components": textwrap.dedent(
        """\
        - Create styled components for reusability
        - Use theme provider for consistent styling
        - Keep style definitions next to the components that use them"""
    ),
    "css-modules": textwrap.dedent(
        """\
        - One CSS module per component
        - Use camelCase for class names
        - Compose styles for variants"""
    ),
}


# ---------------------------------------------------------------------------
# Label helpers
# ---------------------------------------------------------------------------


def _label(table: dict[str, str], value: Optional[str], default: str = "") -> str:
    if value is None:
        return default
    return table.get(value, value)


def project_type_label(project_type: Optional[str]) -> str:
    return _label(PROJECT_TYPE_LABELS, project_type)


def stack_label(stack: Optional[str], custom_stack: Optional[str] = None) -> str:
    """Human-readable stack name; ``custom`` defers to *custom_stack*."""
    if stack == "custom" and custom_stack:
        return custom_stack
    if stack in STACK_LABELS:
        return STACK_LABELS[stack]
    return custom_stack or stack or "Custom"


def language_label(language: Optional[str], custom_language: Optional[str] = None) -> str:
    if language == "Other" and custom_language:
        return custom_language
    return language or "Not specified"


def database_label(database: Optional[str], custom_database: Optional[str] = None) -> str:
    if database == "other" and custom_database:
        return custom_database
    return _label(DATABASE_LABELS, database)


def deployment_label(deployment: Optional[str]) -> str:
    return _label(DEPLOYMENT_LABELS, deployment)


def testing_label(testing: Optional[str]) -> str:
    return _label(TESTING_LABELS, testing)


def styling_label(styling: Optional[str]) -> str:
    return _label(STYLING_LABELS, styling)


def file_extension(language: Optional[str], custom_language: Optional[str] = None) -> str:
    name = custom_language if language == "Other" else language
    return FILE_EXTENSIONS.get(name or "", "js")


def build_labels(config: ProjectConfig) -> dict[str, object]:
    """All label fields of the render context, keyed as the template expects."""
    return {
        "projectTypeLabel": project_type_label(config.project_type),
        "stackLabel": stack_label(config.stack, config.custom_stack),
        "languageLabel": language_label(config.language, config.custom_language),
        "databaseLabel": database_label(config.database, config.custom_database),
        "deploymentLabel": deployment_label(config.deployment),
        "testingLabel": testing_label(config.testing),
        "stylingLabel": styling_label(config.styling),
        "componentLibraryLabel": _label(COMPONENT_LIBRARY_LABELS, config.component_library),
        "gitCommitLabel": _label(GIT_COMMIT_LABELS, config.git_commit_style),
        "branchStrategyLabel": _label(BRANCH_STRATEGY_LABELS, config.branch_strategy),
        "codeStyleLabels": [_label(CODE_STYLE_LABELS, s) for s in config.code_style],
        "behaviorLabels": [_label(BEHAVIOR_LABELS, b) for b in config.assistant_behavior],
    }


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------


def fallback_file_structure(config: ProjectConfig) -> str:
    """Minimal tree used when no stack provider described one."""
    ext = file_extension(config.language, config.custom_language)
    return f"src/\n└── index.{ext}"


def fallback_testing_strategy(testing: Optional[str]) -> str:
    return TESTING_STRATEGIES.get(testing or "none", TESTING_STRATEGIES["none"])


def fallback_ui_guidelines(styling: Optional[str]) -> str:
    if not styling:
        return ""
    return UI_GUIDELINES.get(styling, "")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def github_cli_section(available: bool) -> str:
    """Tool-availability notice for the GitHub CLI."""
    if available:
        return textwrap.dedent(
            """\
            ## ✅ GitHub CLI Detected

            GitHub CLI is installed. The assistant can use it for:
            - Creating and managing pull requests
            - Reading and creating issues
            - Code review automation

            No additional setup needed!"""
        )
    return textwrap.dedent(
        """\
        ## 🚨 GitHub CLI Recommended

        Install GitHub CLI so the assistant can work with pull requests and issues:

        ```bash
        # macOS
        brew install gh

        # Ubuntu/Debian
        sudo apt install gh

        # Windows
        winget install --id GitHub.cli
        ```

        After installation: `gh auth login`"""
    )


_MCP_SERVERS: dict[str, dict[str, object]] = {
    "puppeteer": {"command": "npx", "args": ["@mcp-server/puppeteer"]},
    "sentry": {
        "command": "npx",
        "args": ["@mcp-server/sentry"],
        "env": {"SENTRY_AUTH_TOKEN": "your-sentry-token"},
    },
    "database": {
        "command": "npx",
        "args": ["@mcp-server/database"],
        "env": {"DATABASE_URL": "your-database-url"},
    },
}


def mcp_section(servers: list[str]) -> str:
    if not servers or "none" in servers:
        return ""
    selected = {name: _MCP_SERVERS[name] for name in servers if name in _MCP_SERVERS}
    if not selected:
        return ""
    payload = json.dumps({"mcpServers": selected}, indent=2)
    return (
        "## 🔧 MCP Server Configuration\n\n"
        "Create `.mcp.json` in your project root:\n\n"
        f"```json\n{payload}\n```\n\n"
        "These MCP servers will be available to the assistant."
    )


def allowed_tools(config: ProjectConfig) -> list[str]:
    """Tool permissions recommended for *config*, in display order."""
    tools = ["Edit", "Write"]
    if config.language in ("TypeScript", "JavaScript"):
        tools += ["Bash(npm:*)", "Bash(yarn:*)", "Bash(pnpm:*)"]
    if config.language == "Python":
        tools += ["Bash(pip:*)", "Bash(python:*)"]
    if config.testing != "none":
        tools += ["Bash(test:*)", "Bash(jest:*)", "Bash(pytest:*)"]
    tools.append("Bash(git:*)")
    if "none" not in config.mcp_servers:
        if "puppeteer" in config.mcp_servers:
            tools.append("mcp__puppeteer__*")
        if "sentry" in config.mcp_servers:
            tools.append("mcp__sentry__*")
    return tools


def tool_allowlist_section(config: ProjectConfig) -> str:
    tools = allowed_tools(config)
    bullet_list = "\n".join(f"- {tool}" for tool in tools)
    return (
        "## 🛠️ Recommended Tool Allowlist\n\n"
        "Consider allowing these tools for a smoother workflow:\n\n"
        f"```bash\n{bullet_list}\n```\n\n"
        "Or add them to your settings file:\n"
        f"```json\n{json.dumps({'allowedTools': tools})}\n```"
    )


WORKFLOWS: dict[str, str] = {
    "explore-plan-code": textwrap.dedent(
        """\
        ## 🔄 Recommended Workflow: Explore → Plan → Code

        1. **Explore**: read the relevant files before writing any code
        2. **Plan**: write down a detailed plan and save it for reference
        3. **Code**: implement the plan, checking each step as it lands
        4. **Commit**: descriptive commit messages and context-rich pull requests"""
    ),
    "tdd": textwrap.dedent(
        """\
        ## 🧪 Test-Driven Development Workflow

        1. **Write tests first** from the expected behavior; confirm they fail
        2. **Commit the tests** before any implementation
        3. **Implement** until the tests pass, without modifying them
        4. **Verify and commit** the working code"""
    ),
}


def workflow_section(workflow: Optional[str]) -> str:
    if not workflow or workflow == "standard":
        return ""
    return WORKFLOWS.get(workflow, "")


def team_collaboration_section(features: list[str]) -> str:
    if not features or "none" in features:
        return ""

    content = "## 👥 Team Collaboration Setup\n\n"
    if "shared-mcp" in features:
        content += textwrap.dedent(
            """\
            ### Shared MCP Configuration
            - Check `.mcp.json` into git for team-wide MCP server access
            - New team members need no individual setup

            """
        )
    if "team-commands" in features:
        content += textwrap.dedent(
            """\
            ### Team Slash Commands
            Create shared commands in `.commands/`:
            - `fix-github-issue.md` - Automated issue resolution
            - `deploy-staging.md` - Standardized deployment process

            """
        )
    return content.strip()
