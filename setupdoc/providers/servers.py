"""Server-side stacks: HTTP backends and the MongoDB full-stack bundles.

Node.js stacks reuse the command helpers of
:mod:`setupdoc.providers.stacks`.
"""

from __future__ import annotations

import textwrap
from typing import Any, Optional

from setupdoc.config import ProjectConfig
from setupdoc.utils import detect_package_manager

from .contract import (
    CapabilityDescriptor,
    Category,
    ConfigFile,
    Dependencies,
    MarkdownSection,
)
from .stacks import _is_typescript, _node_commands, _run, _styling_dev_deps

#: Backend shared by the MERN and MEAN bundles.
_MONGO_EXPRESS_DEPS = [
    "express",
    "mongoose",
    "cors",
    "dotenv",
    "helmet",
    "bcryptjs",
    "jsonwebtoken",
    "express-validator",
]

_MONGO_EXPRESS_TYPES = [
    "@types/express",
    "@types/cors",
    "@types/bcryptjs",
    "@types/jsonwebtoken",
]


def _bundle_commands(manager: str) -> dict[str, str]:
    run = _run(manager)
    return {
        "dev": f"{run} dev",
        "server": f"{run} server",
        "client": f"{run} client",
        "build": f"{run} build",
        "test": f"{manager} test",
    }


# ---------------------------------------------------------------------------
# Express
# ---------------------------------------------------------------------------


class ExpressProvider:
    """Node.js HTTP API on Express."""

    INCOMPATIBLE = frozenset({"fastify", "django", "rails", "gin"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = EXPRESS
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        production = ["express", "cors", "helmet", "dotenv"]
        development = ["nodemon", "eslint"]
        if _is_typescript(self.config):
            development += ["typescript", "ts-node", "@types/express", "@types/node"]
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(name=".env.example", language="bash", content="PORT=3000\nNODE_ENV=development\n")
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            src/
            ├── routes/
            ├── controllers/
            ├── middleware/
            ├── services/
            └── server.ts"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        commands = _node_commands(self.package_manager)
        commands["start"] = f"{self.package_manager} start"
        return commands

    def security_guidelines(self) -> list[str]:
        return ["Use helmet for secure HTTP headers", "Rate-limit authentication endpoints"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "express"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"rest-api", "middleware"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


EXPRESS = CapabilityDescriptor(
    name="express",
    display_name="Node.js + Express",
    category=Category.STACK,
    factory=ExpressProvider,
    project_types=frozenset({"backend", "fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🚂",
    description="Minimal web framework for Node.js",
)


# ---------------------------------------------------------------------------
# Fastify
# ---------------------------------------------------------------------------


class FastifyProvider:
    """Node.js HTTP API on Fastify with its plugin ecosystem."""

    INCOMPATIBLE = frozenset({"express", "django", "rails", "gin"})

    DATABASE_PLUGINS: dict[str, list[str]] = {
        "postgresql": ["pg", "@fastify/postgres"],
        "mongodb": ["mongoose", "@fastify/mongodb"],
        "mysql": ["mysql2"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = FASTIFY

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        production = ["fastify", "@fastify/cors", "@fastify/helmet", "@fastify/env", "@fastify/sensible"]
        production += self.DATABASE_PLUGINS.get(self.config.database or "", [])
        if self.config.authentication == "jwt":
            production += ["@fastify/jwt", "bcryptjs"]

        development = ["nodemon", "tap"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/node", "ts-node"]
            if self.config.authentication == "jwt":
                development.append("@types/bcryptjs")
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(name=".env.example", language="bash", content="PORT=3000\nHOST=0.0.0.0\n")
        ]

    def file_structure(self) -> str:
        ext = "ts" if _is_typescript(self.config) else "js"
        lines = [
            "src/",
            "├── plugins/",
            f"│   ├── auth.{ext}",
            f"│   └── database.{ext}",
            "├── routes/",
            "├── schemas/",
            "├── hooks/",
            f"├── app.{ext}",
            f"└── server.{ext}",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Fastify Conventions",
                content="- Register cross-cutting concerns as encapsulated plugins\n"
                "- Declare a JSON schema for every route body and response",
            )
        ]

    def commands(self) -> dict[str, str]:
        if _is_typescript(self.config):
            return {
                "dev": "nodemon --exec ts-node src/server.ts",
                "start": "node dist/server.js",
                "build": "tsc",
                "test": "tap test/**/*.test.ts",
                "lint": "eslint src/",
            }
        return {
            "dev": "nodemon src/server.js",
            "start": "node src/server.js",
            "test": "tap test/**/*.test.js",
            "lint": "eslint src/",
        }

    def security_guidelines(self) -> list[str]:
        return [
            "Always validate input using Fastify JSON schemas",
            "Implement rate limiting using @fastify/rate-limit",
            "Use @fastify/helmet for security headers",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {
            "framework": "fastify",
            "hasAuthentication": self.config.authentication not in (None, "none"),
        }

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {
                "rest-api",
                "plugins",
                "validation",
                "routing",
                "authentication",
                "database",
                "high-performance",
            }
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


FASTIFY = CapabilityDescriptor(
    name="fastify",
    display_name="Node.js + Fastify",
    category=Category.STACK,
    factory=FastifyProvider,
    project_types=frozenset({"backend", "fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="⚡",
    description="Fast and low overhead web framework for Node.js",
)


# ---------------------------------------------------------------------------
# MERN
# ---------------------------------------------------------------------------


class MERNProvider:
    """MongoDB, Express, React and Node.js in one repository."""

    INCOMPATIBLE = frozenset(
        {"nextjs-app", "nextjs-pages", "remix", "t3", "mean", "express", "fastify"}
    )

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = MERN
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        production = [*_MONGO_EXPRESS_DEPS, "react", "react-dom", "react-router-dom", "axios"]
        development = [
            "nodemon",
            "concurrently",
            "@vitejs/plugin-react",
            "vite",
            "eslint",
            "eslint-plugin-react",
            "eslint-plugin-react-hooks",
        ]
        if _is_typescript(self.config):
            development += ["typescript", "@types/node", *_MONGO_EXPRESS_TYPES]
            development += ["@types/react", "@types/react-dom"]
        if self.config.testing == "jest":
            development += ["jest", "supertest", "@testing-library/react", "@testing-library/jest-dom"]
        elif self.config.testing == "vitest":
            development += ["vitest", "@testing-library/react", "jsdom"]
        development += _styling_dev_deps(self.config)
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="server/.env.example",
                language="bash",
                content="PORT=5000\nMONGODB_URI=mongodb://localhost:27017/app\nJWT_SECRET=change-me\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            client/
            ├── src/
            │   ├── components/
            │   ├── pages/
            │   ├── hooks/
            │   ├── services/
            │   └── App.tsx
            └── vite.config.ts
            server/
            ├── config/
            ├── controllers/
            ├── middleware/
            ├── models/
            ├── routes/
            └── server.js
            package.json"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="MERN Layout",
                content="- `client/` holds the React app and `server/` the Express API\n"
                "- Run both together with `concurrently` during development",
            )
        ]

    def commands(self) -> dict[str, str]:
        return _bundle_commands(self.package_manager)

    def security_guidelines(self) -> list[str]:
        return [
            "Enable CORS only for trusted origins",
            "Hash passwords with bcrypt",
            "Validate data on both client and server",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "mern", "hasMongoDB": True, "hasJWTAuth": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"mongodb", "express", "react", "jwt-auth", "rest-api", "spa"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


MERN = CapabilityDescriptor(
    name="mern",
    display_name="MERN Stack",
    category=Category.STACK,
    factory=MERNProvider,
    project_types=frozenset({"fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🍃",
    description="MongoDB, Express.js, React, Node.js full-stack application",
)


# ---------------------------------------------------------------------------
# MEAN
# ---------------------------------------------------------------------------


class MEANProvider:
    """MongoDB, Express, Angular and Node.js in one repository."""

    INCOMPATIBLE = frozenset(
        {"nextjs-app", "nextjs-pages", "remix", "t3", "mern", "express", "fastify"}
    )

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = MEAN
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        production = [
            *_MONGO_EXPRESS_DEPS,
            "@angular/animations",
            "@angular/common",
            "@angular/compiler",
            "@angular/core",
            "@angular/forms",
            "@angular/platform-browser",
            "@angular/router",
            "rxjs",
            "tslib",
            "zone.js",
        ]
        development = [
            "nodemon",
            "concurrently",
            "@angular-devkit/build-angular",
            "@angular/cli",
            "@angular/compiler-cli",
            "typescript",
            "@types/node",
        ]
        if _is_typescript(self.config):
            development += _MONGO_EXPRESS_TYPES
        development += _styling_dev_deps(self.config)
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="server/.env.example",
                language="bash",
                content="PORT=3000\nMONGODB_URI=mongodb://localhost:27017/app\nJWT_SECRET=change-me\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            client/
            ├── src/
            │   ├── app/
            │   │   ├── components/
            │   │   ├── services/
            │   │   └── guards/
            │   └── main.ts
            └── angular.json
            server/
            ├── controllers/
            ├── middleware/
            ├── models/
            ├── routes/
            └── server.js
            package.json"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="MEAN Layout",
                content="- `client/` holds the Angular app and `server/` the Express API\n"
                "- Protect client routes with Angular route guards",
            )
        ]

    def commands(self) -> dict[str, str]:
        return _bundle_commands(self.package_manager)

    def security_guidelines(self) -> list[str]:
        return [
            "Enable CORS only for trusted origins",
            "Hash passwords with bcrypt",
            "Implement Angular route guards",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "mean", "hasMongoDB": True, "hasJWTAuth": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {"mongodb", "express", "angular", "jwt-auth", "rest-api", "spa", "typescript"}
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


MEAN = CapabilityDescriptor(
    name="mean",
    display_name="MEAN Stack",
    category=Category.STACK,
    factory=MEANProvider,
    project_types=frozenset({"fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🅰",
    description="MongoDB, Express.js, Angular, Node.js full-stack application",
)


# ---------------------------------------------------------------------------
# FastAPI
# ---------------------------------------------------------------------------


class FastAPIProvider:
    """Python API on FastAPI; database drivers follow the configured database."""

    INCOMPATIBLE = frozenset({"express", "fastify", "django", "rails", "gin"})

    DATABASE_DRIVERS: dict[str, list[str]] = {
        "postgresql": ["asyncpg", "databases[postgresql]"],
        "mongodb": ["motor", "beanie"],
        "mysql": ["aiomysql", "databases[mysql]"],
        "sqlite": ["aiosqlite", "databases[sqlite]"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = FASTAPI

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        production = ["fastapi", "uvicorn[standard]", "python-multipart", "python-dotenv"]
        production += self.DATABASE_DRIVERS.get(self.config.database or "", [])
        if self.config.authentication == "jwt":
            production += ["python-jose[cryptography]", "passlib[bcrypt]"]
        return Dependencies(
            production=production,
            development=["pytest", "pytest-asyncio", "httpx", "black", "flake8", "mypy"],
        )

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="requirements.txt",
                language="text",
                content="\n".join(self.dependencies().production) + "\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            app/
            ├── api/
            │   └── v1/
            ├── core/
            ├── models/
            ├── schemas/
            ├── services/
            └── main.py
            tests/"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="FastAPI Conventions",
                content="- Declare request and response models with Pydantic\n"
                "- Use dependency injection for database sessions and auth\n"
                "- Keep route handlers thin; move logic into services",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {
            "dev": "uvicorn app.main:app --reload",
            "build": "pip install -r requirements.txt",
            "test": "pytest",
            "lint": "flake8 app && mypy app",
            "format": "black app tests",
        }

    def security_guidelines(self) -> list[str]:
        return ["Validate every request body with Pydantic models"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "fastapi", "pythonVersion": "3.11"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"rest-api", "async", "openapi"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


FASTAPI = CapabilityDescriptor(
    name="fastapi",
    display_name="Python + FastAPI",
    category=Category.STACK,
    factory=FastAPIProvider,
    project_types=frozenset({"backend", "fullstack"}),
    languages=frozenset({"Python"}),
    icon="🚀",
    description="High-performance Python web framework for building APIs",
)


# ---------------------------------------------------------------------------
# Django
# ---------------------------------------------------------------------------


class DjangoProvider:
    """Django with Django REST framework.

    Setting the free-form ``caching`` answer adds the Redis cache backend.
    """

    INCOMPATIBLE = frozenset({"express", "fastify", "fastapi", "rails", "gin"})

    DATABASE_DRIVERS: dict[str, list[str]] = {
        "postgresql": ["psycopg2-binary"],
        "mysql": ["mysqlclient"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = DJANGO

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        production = ["Django>=4.2,<5.0", "djangorestframework", "django-cors-headers", "python-dotenv"]
        production += self.DATABASE_DRIVERS.get(self.config.database or "", [])
        if self.config.authentication == "jwt":
            production.append("djangorestframework-simplejwt")
        if self.config.get_extra("caching"):
            production += ["redis", "django-redis"]
        return Dependencies(
            production=production,
            development=[
                "pytest",
                "pytest-django",
                "black",
                "flake8",
                "mypy",
                "django-debug-toolbar",
                "factory-boy",
                "coverage",
            ],
        )

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="requirements/base.txt",
                language="text",
                content="\n".join(self.dependencies().production) + "\n",
            ),
            ConfigFile(
                name="pytest.ini",
                language="ini",
                content="[pytest]\nDJANGO_SETTINGS_MODULE = myproject.settings.testing\n",
            ),
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            myproject/
            ├── manage.py
            ├── myproject/
            │   ├── settings/
            │   │   ├── base.py
            │   │   ├── development.py
            │   │   ├── production.py
            │   │   └── testing.py
            │   ├── urls.py
            │   ├── wsgi.py
            │   └── asgi.py
            ├── apps/
            │   ├── users/
            │   └── core/
            ├── api/
            │   └── v1/
            ├── templates/
            ├── tests/
            └── requirements/"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Django Conventions",
                content="- Split settings per environment under `myproject/settings/`\n"
                "- Create a migration with every model change",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {
            "dev": "python manage.py runserver",
            "start": "gunicorn myproject.wsgi:application",
            "test": "pytest",
            "lint": "black . && flake8 . && mypy .",
            "migrate": "python manage.py migrate",
            "migrate:create": "python manage.py makemigrations",
            "shell": "python manage.py shell",
            "collectstatic": "python manage.py collectstatic --noinput",
            "createsuperuser": "python manage.py createsuperuser",
        }

    def security_guidelines(self) -> list[str]:
        return [
            "Enable CSRF protection for forms",
            "Use the Django ORM to prevent SQL injection",
            "Use permissions and authentication decorators",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "django", "hasAdminInterface": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {
                "rest-api",
                "orm",
                "admin-interface",
                "authentication",
                "database",
                "migrations",
                "templating",
            }
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


DJANGO = CapabilityDescriptor(
    name="django",
    display_name="Python + Django",
    category=Category.STACK,
    factory=DjangoProvider,
    project_types=frozenset({"backend", "fullstack"}),
    languages=frozenset({"Python"}),
    icon="🎸",
    description="High-level Python web framework that encourages rapid development",
)


# ---------------------------------------------------------------------------
# Gin
# ---------------------------------------------------------------------------


class GinProvider:
    """Go HTTP API on Gin; GORM drivers follow the configured database."""

    INCOMPATIBLE = frozenset({"express", "fastify", "fastapi", "django", "rails"})

    DATABASE_MODULES: dict[str, list[str]] = {
        "postgresql": ["github.com/lib/pq", "gorm.io/gorm", "gorm.io/driver/postgres"],
        "mysql": ["gorm.io/gorm", "gorm.io/driver/mysql"],
        "sqlite": ["gorm.io/gorm", "gorm.io/driver/sqlite"],
        "mongodb": ["go.mongodb.org/mongo-driver/mongo"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = GIN

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        production = [
            "github.com/gin-gonic/gin",
            "github.com/gin-contrib/cors",
            "github.com/gin-contrib/secure",
            "github.com/joho/godotenv",
        ]
        production += self.DATABASE_MODULES.get(self.config.database or "", [])
        if self.config.authentication == "jwt":
            production.append("github.com/golang-jwt/jwt/v5")
        return Dependencies(
            production=production,
            development=[
                "github.com/stretchr/testify",
                "github.com/gin-contrib/pprof",
                "github.com/swaggo/gin-swagger",
                "github.com/swaggo/files",
            ],
        )

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name=".env.example",
                language="bash",
                content="PORT=8080\nGIN_MODE=debug\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            cmd/
            └── server/
                └── main.go
            internal/
            ├── config/
            ├── handlers/
            ├── middleware/
            ├── models/
            ├── repository/
            └── services/
            pkg/
            └── api/
                └── router.go
            go.mod
            Makefile"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Go Conventions",
                content="- Keep packages under `internal/` unless other modules import them\n"
                "- Bind and validate request bodies with Gin binding tags",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {
            "dev": "go run cmd/server/main.go",
            "start": "./bin/server",
            "build": "go build -o bin/server cmd/server/main.go",
            "test": "go test -v ./...",
            "lint": "go fmt ./... && go vet ./...",
            "tidy": "go mod tidy",
            "deps": "go mod download",
        }

    def security_guidelines(self) -> list[str]:
        return [
            "Always validate input using Gin binding tags",
            "Use parameterized queries with GORM to prevent SQL injection",
            "Implement rate limiting middleware",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "gin", "hasJWT": self.config.authentication == "jwt"}

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {
                "rest-api",
                "high-performance",
                "concurrency",
                "middleware",
                "authentication",
                "database",
                "jwt",
            }
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


GIN = CapabilityDescriptor(
    name="gin",
    display_name="Go + Gin",
    category=Category.STACK,
    factory=GinProvider,
    project_types=frozenset({"backend", "fullstack"}),
    languages=frozenset({"Go"}),
    icon="🍸",
    description="Fast HTTP web framework written in Go",
)


# ---------------------------------------------------------------------------
# Rails
# ---------------------------------------------------------------------------


class RailsProvider:
    """Ruby on Rails; rejects every other server and meta-framework."""

    INCOMPATIBLE = frozenset(
        {
            "nextjs-app",
            "nextjs-pages",
            "remix",
            "t3",
            "mern",
            "mean",
            "express",
            "fastify",
            "django",
            "fastapi",
        }
    )

    DATABASE_GEMS: dict[str, list[str]] = {
        "mysql": ["mysql2"],
        "sqlite": ["sqlite3"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = RAILS

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        production = ["rails", "pg", "puma", "sass-rails", "image_processing", "jbuilder", "bootsnap"]
        production += self.DATABASE_GEMS.get(self.config.database or "", [])
        return Dependencies(production=production, development=["debug", "web-console"])

    def config_files(self) -> list[ConfigFile]:
        gems = "\n".join(f'gem "{gem}"' for gem in self.dependencies().production)
        return [
            ConfigFile(
                name="Gemfile",
                language="ruby",
                content=f'source "https://rubygems.org"\n\n{gems}\n',
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            app/
            ├── controllers/
            │   └── api/
            │       └── v1/
            ├── models/
            ├── views/
            │   └── layouts/
            ├── jobs/
            └── mailers/
            config/
            ├── routes.rb
            ├── database.yml
            ├── environments/
            └── initializers/
            db/
            ├── migrate/
            └── seeds.rb
            Gemfile"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Rails Conventions",
                content="- Follow RESTful resource routes in `config/routes.rb`\n"
                "- Whitelist attributes with strong parameters",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {
            "dev": "rails server",
            "start": "rails server -e production",
            "console": "rails console",
            "test": "rails test",
            "db:create": "rails db:create",
            "db:migrate": "rails db:migrate",
            "db:seed": "rails db:seed",
            "routes": "rails routes",
        }

    def security_guidelines(self) -> list[str]:
        return [
            "Use strong parameters to prevent mass assignment",
            "Enable force_ssl in production",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "rails", "hasActiveRecord": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"mvc", "orm", "migrations", "routing", "templating", "real-time"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


RAILS = CapabilityDescriptor(
    name="rails",
    display_name="Ruby on Rails",
    category=Category.STACK,
    factory=RailsProvider,
    project_types=frozenset({"fullstack", "backend"}),
    languages=frozenset({"Ruby"}),
    icon="💎",
    description="Convention over configuration web framework for Ruby",
)


DESCRIPTORS: list[CapabilityDescriptor] = [
    EXPRESS,
    FASTIFY,
    MERN,
    MEAN,
    FASTAPI,
    DJANGO,
    GIN,
    RAILS,
]
