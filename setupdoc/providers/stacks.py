"""Web framework stacks: the primary frontend or meta-framework of the project.

JavaScript stacks probe ``projectRoot`` for a lockfile before contributing,
so commands use the package manager the project already has even when the
answers did not name one.  Server-side stacks live in
:mod:`setupdoc.providers.servers`.
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


def _run(manager: str) -> str:
    return "npm run" if manager == "npm" else manager


def _node_commands(manager: str) -> dict[str, str]:
    run = _run(manager)
    return {
        "dev": f"{run} dev",
        "build": f"{run} build",
        "test": f"{manager} test",
        "lint": f"{run} lint",
    }


def _is_typescript(config: ProjectConfig) -> bool:
    return config.language in (None, "TypeScript")


def _script_ext(config: ProjectConfig) -> str:
    return "ts" if _is_typescript(config) else "js"


def _component_ext(config: ProjectConfig) -> str:
    return "tsx" if _is_typescript(config) else "jsx"


def _styling_dev_deps(config: ProjectConfig) -> list[str]:
    if config.styling == "tailwind":
        return ["tailwindcss", "postcss", "autoprefixer"]
    return []


# ---------------------------------------------------------------------------
# Next.js (App Router)
# ---------------------------------------------------------------------------


class NextJSAppProvider:
    """Next.js 14 using the App Router."""

    INCOMPATIBLE = frozenset({"vue", "angular", "svelte", "react"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = NEXTJS_APP
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        production = ["next", "react", "react-dom"]
        development = ["eslint", "eslint-config-next"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/react", "@types/node"]
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="next.config.js",
                language="javascript",
                content="/** @type {import('next').NextConfig} */\n"
                "const nextConfig = {};\n\nmodule.exports = nextConfig;\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            src/
            ├── app/
            │   ├── layout.tsx
            │   ├── page.tsx
            │   └── api/
            ├── components/
            └── lib/"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Next.js Conventions",
                content="- Default to Server Components; add `'use client'` only when needed\n"
                "- Colocate route handlers under `app/api/`\n"
                "- Use `next/image` and `next/link` for assets and navigation",
            )
        ]

    def commands(self) -> dict[str, str]:
        return _node_commands(self.package_manager)

    def security_guidelines(self) -> list[str]:
        return ["Keep secrets out of NEXT_PUBLIC_ environment variables"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "nextjs", "routerType": "app"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"ssr", "ssg", "api-routes", "typescript"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


NEXTJS_APP = CapabilityDescriptor(
    name="nextjs-app",
    display_name="Next.js 14 (App Router)",
    category=Category.STACK,
    factory=NextJSAppProvider,
    project_types=frozenset({"fullstack", "frontend"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="▲",
    description="React framework with server components and file-based routing",
)


# ---------------------------------------------------------------------------
# Next.js (Pages Router)
# ---------------------------------------------------------------------------


class NextJSPagesProvider:
    """Next.js 14 using the traditional Pages Router."""

    INCOMPATIBLE = frozenset({"vue", "angular", "svelte", "react"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = NEXTJS_PAGES
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        development = ["eslint", "eslint-config-next"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/react", "@types/node"]
        return Dependencies(production=["next", "react", "react-dom"], development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="next.config.js",
                language="javascript",
                content="module.exports = { reactStrictMode: true };\n",
            )
        ]

    def file_structure(self) -> str:
        ext = _component_ext(self.config)
        lines = [
            "src/",
            "├── pages/",
            f"│   ├── _app.{ext}",
            f"│   ├── _document.{ext}",
            f"│   ├── index.{ext}",
            "│   └── api/",
            f"│       └── hello.{ext}",
            "├── components/",
            "├── styles/",
            "│   └── globals.css",
            "└── public/",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Next.js Conventions",
                content="- Fetch page data with `getServerSideProps` or `getStaticProps`\n"
                "- Keep API handlers under `pages/api/`",
            )
        ]

    def commands(self) -> dict[str, str]:
        commands = _node_commands(self.package_manager)
        commands["start"] = f"{_run(self.package_manager)} start"
        return commands

    def security_guidelines(self) -> list[str]:
        return [
            "Keep secrets out of NEXT_PUBLIC_ environment variables",
            "Validate all API route inputs",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "nextjs", "routerType": "pages"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"ssr", "ssg", "api-routes", "image-optimization", "routing"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


NEXTJS_PAGES = CapabilityDescriptor(
    name="nextjs-pages",
    display_name="Next.js 14 (Pages Router)",
    category=Category.STACK,
    factory=NextJSPagesProvider,
    project_types=frozenset({"fullstack", "frontend"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="⚡",
    description="Next.js with traditional Pages Router",
)


# ---------------------------------------------------------------------------
# Remix
# ---------------------------------------------------------------------------


class RemixProvider:
    """Remix full-stack framework on Vite."""

    INCOMPATIBLE = frozenset({"nextjs-app", "nextjs-pages", "t3", "mern", "mean"})

    DATABASE_DRIVERS: dict[str, list[str]] = {
        "postgresql": ["pg"],
        "mongodb": ["mongoose"],
        "mysql": ["mysql2"],
    }

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = REMIX
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        production = [
            "@remix-run/node",
            "@remix-run/react",
            "@remix-run/serve",
            "isbot",
            "react",
            "react-dom",
        ]
        production += self.DATABASE_DRIVERS.get(self.config.database or "", [])
        development = ["@remix-run/dev", "vite"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/react", "@types/react-dom"]
            if self.config.database == "postgresql":
                development.append("@types/pg")
        development += _styling_dev_deps(self.config)
        if self.config.testing == "vitest":
            development += ["vitest", "@testing-library/react", "jsdom"]
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name=f"vite.config.{_script_ext(self.config)}",
                language="typescript" if _is_typescript(self.config) else "javascript",
                content="import { vitePlugin as remix } from '@remix-run/dev';\n"
                "import { defineConfig } from 'vite';\n\n"
                "export default defineConfig({ plugins: [remix()] });\n",
            )
        ]

    def file_structure(self) -> str:
        ext = _component_ext(self.config)
        lines = [
            "app/",
            f"├── entry.client.{ext}",
            f"├── entry.server.{ext}",
            f"├── root.{ext}",
            "├── routes/",
            f"│   ├── _index.{ext}",
            f"│   └── login.{ext}",
            "├── components/",
            "├── utils/",
            f"│   └── db.server.{_script_ext(self.config)}",
            "└── styles/",
            "public/",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Remix Conventions",
                content="- Load data in route `loader` functions and mutate in `action` functions\n"
                "- Keep server-only modules in `*.server` files",
            )
        ]

    def commands(self) -> dict[str, str]:
        run = _run(self.package_manager)
        commands = _node_commands(self.package_manager)
        commands["start"] = f"{self.package_manager} start"
        commands["typecheck"] = f"{run} typecheck"
        return commands

    def security_guidelines(self) -> list[str]:
        return [
            "Validate all form inputs on the server",
            "Implement CSRF protection for forms",
            "Use secure session management",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "remix", "hasSSR": True, "hasDataLoading": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"ssr", "file-routing", "data-loading", "forms", "nested-routing"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


REMIX = CapabilityDescriptor(
    name="remix",
    display_name="Remix",
    category=Category.STACK,
    factory=RemixProvider,
    project_types=frozenset({"fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="💿",
    description="Full-stack web framework focused on web standards",
)


# ---------------------------------------------------------------------------
# T3 Stack
# ---------------------------------------------------------------------------


class T3Provider:
    """Next.js with tRPC, Prisma, NextAuth and Tailwind."""

    INCOMPATIBLE = frozenset(
        {"nextjs-app", "nextjs-pages", "remix", "mern", "mean", "express", "fastify"}
    )

    PRISMA_DATABASES = frozenset({None, "postgresql", "mysql", "mongodb"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = T3
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    @property
    def uses_prisma(self) -> bool:
        return self.config.database in self.PRISMA_DATABASES

    def dependencies(self) -> Dependencies:
        production = [
            "next",
            "react",
            "react-dom",
            "@trpc/client",
            "@trpc/next",
            "@trpc/react-query",
            "@trpc/server",
            "@tanstack/react-query",
            "superjson",
            "zod",
        ]
        if self.uses_prisma:
            production.append("@prisma/client")
        if self.config.authentication in (None, "nextauth"):
            production.append("next-auth")

        development = [
            "typescript",
            "@types/node",
            "@types/react",
            "@types/react-dom",
            "eslint",
            "eslint-config-next",
        ]
        if self.uses_prisma:
            development.append("prisma")
        development += ["tailwindcss", "postcss", "autoprefixer"]
        if self.config.testing == "vitest":
            development += ["vitest", "@testing-library/react", "jsdom"]
        elif self.config.testing == "jest":
            development += ["jest", "@testing-library/react", "@testing-library/jest-dom"]
        return Dependencies(production=production, development=development)

    def config_files(self) -> list[ConfigFile]:
        if not self.uses_prisma:
            return []
        provider = self.config.database or "postgresql"
        return [
            ConfigFile(
                name="prisma/schema.prisma",
                language="prisma",
                content='generator client {\n  provider = "prisma-client-js"\n}\n\n'
                f'datasource db {{\n  provider = "{provider}"\n'
                '  url      = env("DATABASE_URL")\n}\n',
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            src/
            ├── env.mjs
            ├── pages/
            │   ├── _app.tsx
            │   ├── index.tsx
            │   └── api/
            │       ├── trpc/
            │       └── auth/
            ├── server/
            │   ├── api/
            │   │   ├── routers/
            │   │   ├── root.ts
            │   │   └── trpc.ts
            │   ├── auth.ts
            │   └── db.ts
            ├── utils/
            │   └── api.ts
            └── styles/
            prisma/
            └── schema.prisma"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="T3 Conventions",
                content="- Define procedures in `server/api/routers/` and merge them in `root.ts`\n"
                "- Validate procedure inputs and environment variables with Zod",
            )
        ]

    def commands(self) -> dict[str, str]:
        commands = _node_commands(self.package_manager)
        commands["start"] = f"{self.package_manager} start"
        if self.uses_prisma:
            commands.update(
                {
                    "db:push": "npx prisma db push",
                    "db:studio": "npx prisma studio",
                    "db:migrate": "npx prisma migrate dev",
                    "db:generate": "npx prisma generate",
                }
            )
        return commands

    def security_guidelines(self) -> list[str]:
        return [
            "Always validate environment variables with Zod",
            "Validate all tRPC inputs with Zod schemas",
            "Set a strong NEXTAUTH_SECRET",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {
            "framework": "t3",
            "hasTRPC": True,
            "hasPrisma": self.uses_prisma,
            "hasNextAuth": self.config.authentication in (None, "nextauth"),
        }

    def supported_features(self) -> frozenset[str]:
        return frozenset({"trpc", "prisma", "nextauth", "type-safety", "ssr", "tailwind"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


T3 = CapabilityDescriptor(
    name="t3",
    display_name="T3 Stack",
    category=Category.STACK,
    factory=T3Provider,
    project_types=frozenset({"fullstack"}),
    languages=frozenset({"TypeScript"}),
    icon="🔺",
    description="Type-safe full-stack framework with Next.js, tRPC, Prisma, and Tailwind",
)


# ---------------------------------------------------------------------------
# React (single-page app)
# ---------------------------------------------------------------------------


class ReactProvider:
    """React single-page application built with Vite."""

    INCOMPATIBLE = frozenset({"vue", "angular", "svelte"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = REACT
        self.package_manager = config.package_manager or "npm"

    async def before_generation(self, config: ProjectConfig) -> None:
        if config.package_manager is None:
            detected = await detect_package_manager(config.project_root)
            if detected:
                self.package_manager = detected

    def dependencies(self) -> Dependencies:
        development = ["vite", "@vitejs/plugin-react", "eslint"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/react", "@types/react-dom"]
        return Dependencies(production=["react", "react-dom"], development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="vite.config.ts",
                language="typescript",
                content="import { defineConfig } from 'vite';\n"
                "import react from '@vitejs/plugin-react';\n\n"
                "export default defineConfig({ plugins: [react()] });\n",
            )
        ]

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            src/
            ├── components/
            ├── hooks/
            ├── pages/
            ├── App.tsx
            └── main.tsx"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        commands = _node_commands(self.package_manager)
        commands["preview"] = f"{_run(self.package_manager)} preview"
        return commands

    def security_guidelines(self) -> list[str]:
        return ["Avoid dangerouslySetInnerHTML with untrusted content"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "react"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"spa", "hooks", "typescript"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


REACT = CapabilityDescriptor(
    name="react",
    display_name="React",
    category=Category.STACK,
    factory=ReactProvider,
    project_types=frozenset({"frontend"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="⚛",
    description="Component-based UI library",
)


# ---------------------------------------------------------------------------
# Vue
# ---------------------------------------------------------------------------


class VueProvider:
    """Vue 3 with Vue Router and Pinia, built with Vite."""

    INCOMPATIBLE = frozenset({"react", "angular", "svelte"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = VUE

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        development = ["@vitejs/plugin-vue", "vite", "eslint", "eslint-plugin-vue"]
        if _is_typescript(self.config):
            development += ["typescript", "vue-tsc", "@types/node"]
        development += _styling_dev_deps(self.config)
        if self.config.testing == "vitest":
            development += ["vitest", "@vue/test-utils", "jsdom"]
        elif self.config.testing == "jest":
            development += ["jest", "@vue/test-utils", "@vue/vue3-jest", "babel-jest"]
        return Dependencies(production=["vue", "vue-router", "pinia"], development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name=f"vite.config.{_script_ext(self.config)}",
                language="typescript" if _is_typescript(self.config) else "javascript",
                content="import { defineConfig } from 'vite';\n"
                "import vue from '@vitejs/plugin-vue';\n\n"
                "export default defineConfig({ plugins: [vue()] });\n",
            )
        ]

    def file_structure(self) -> str:
        ext = _script_ext(self.config)
        lines = [
            "src/",
            "├── components/",
            "│   ├── AppLayout.vue",
            "│   └── AppHeader.vue",
            "├── composables/",
            "├── views/",
            "│   ├── HomeView.vue",
            "│   └── AboutView.vue",
            "├── router/",
            f"│   └── index.{ext}",
            "├── stores/",
            "├── App.vue",
            f"└── main.{ext}",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Vue Conventions",
                content="- Use `<script setup>` with the Composition API\n"
                "- Keep shared state in Pinia stores",
            )
        ]

    def commands(self) -> dict[str, str]:
        commands = {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
            "test": "vitest",
            "lint": "eslint . --ext .vue,.js,.jsx,.cjs,.mjs,.ts,.tsx,.cts,.mts --fix",
        }
        if _is_typescript(self.config):
            commands["type-check"] = "vue-tsc --noEmit"
        return commands

    def security_guidelines(self) -> list[str]:
        return ["Use v-html carefully and sanitize content"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "vue", "usesSFC": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {"spa", "components", "composition-api", "routing", "state-management", "reactive"}
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


VUE = CapabilityDescriptor(
    name="vue",
    display_name="Vue.js",
    category=Category.STACK,
    factory=VueProvider,
    project_types=frozenset({"frontend", "fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="💚",
    description="The Progressive JavaScript Framework",
)


# ---------------------------------------------------------------------------
# Svelte
# ---------------------------------------------------------------------------


class SvelteProvider:
    """SvelteKit application."""

    INCOMPATIBLE = frozenset({"react", "vue", "angular"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = SVELTE

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        development = [
            "@sveltejs/adapter-auto",
            "@sveltejs/kit",
            "@sveltejs/vite-plugin-svelte",
            "svelte",
            "vite",
            "eslint",
            "eslint-plugin-svelte",
        ]
        if _is_typescript(self.config):
            development += ["typescript", "tslib", "@types/node", "svelte-check"]
        development += _styling_dev_deps(self.config)
        if self.config.testing == "vitest":
            development += ["vitest", "@testing-library/svelte", "jsdom"]
        elif self.config.testing == "playwright":
            development.append("@playwright/test")
        return Dependencies(production=["@sveltejs/kit", "svelte"], development=development)

    def config_files(self) -> list[ConfigFile]:
        return [
            ConfigFile(
                name="svelte.config.js",
                language="javascript",
                content="import adapter from '@sveltejs/adapter-auto';\n\n"
                "export default { kit: { adapter: adapter() } };\n",
            )
        ]

    def file_structure(self) -> str:
        ext = _script_ext(self.config)
        lines = [
            "src/",
            "├── lib/",
            "│   ├── components/",
            "│   ├── stores/",
            f"│   └── index.{ext}",
            "├── routes/",
            "│   ├── +layout.svelte",
            "│   ├── +page.svelte",
            "│   └── +error.svelte",
            "├── app.html",
            f"└── hooks.server.{ext}",
            "static/",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        commands = {
            "dev": "vite dev",
            "build": "vite build",
            "preview": "vite preview",
            "test": "vitest",
            "lint": "eslint .",
            "format": "prettier --write .",
        }
        if _is_typescript(self.config):
            check = "svelte-kit sync && svelte-check --tsconfig ./tsconfig.json"
            commands["check"] = check
            commands["check:watch"] = f"{check} --watch"
        return commands

    def security_guidelines(self) -> list[str]:
        return [
            "Use {@html} carefully and sanitize content",
            "Validate form data server-side",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "svelte", "usesFileBasedRouting": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset(
            {"spa", "ssr", "ssg", "components", "routing", "state-management", "reactive"}
        )

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


SVELTE = CapabilityDescriptor(
    name="svelte",
    display_name="Svelte",
    category=Category.STACK,
    factory=SvelteProvider,
    project_types=frozenset({"frontend", "fullstack"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🧡",
    description="Cybernetically enhanced web apps",
)


# ---------------------------------------------------------------------------
# Angular
# ---------------------------------------------------------------------------


class AngularProvider:
    INCOMPATIBLE = frozenset({"react", "vue", "svelte"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = ANGULAR

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        return Dependencies(
            production=["@angular/core", "@angular/common", "@angular/router", "rxjs", "zone.js"],
            development=["@angular/cli", "@angular-devkit/build-angular", "typescript"],
        )

    def config_files(self) -> list[ConfigFile]:
        return []

    def file_structure(self) -> str:
        return textwrap.dedent(
            """\
            src/
            ├── app/
            │   ├── components/
            │   ├── services/
            │   └── app.config.ts
            └── main.ts"""
        )

    def markdown_sections(self) -> list[MarkdownSection]:
        return [
            MarkdownSection(
                title="Angular Conventions",
                content="- Prefer standalone components\n- Keep business logic in services",
            )
        ]

    def commands(self) -> dict[str, str]:
        return {"dev": "ng serve", "build": "ng build", "test": "ng test", "lint": "ng lint"}

    def security_guidelines(self) -> list[str]:
        return ["Rely on Angular's built-in sanitization; avoid bypassSecurityTrust*"]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "angular"}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"spa", "dependency-injection", "typescript"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


ANGULAR = CapabilityDescriptor(
    name="angular",
    display_name="Angular",
    category=Category.STACK,
    factory=AngularProvider,
    project_types=frozenset({"frontend"}),
    languages=frozenset({"TypeScript"}),
    icon="🅰",
    description="Batteries-included frontend framework",
)


# ---------------------------------------------------------------------------
# Vanilla JS
# ---------------------------------------------------------------------------


class VanillaProvider:
    """Framework-free frontend with Vite tooling."""

    INCOMPATIBLE = frozenset({"react", "vue", "angular", "svelte"})

    def __init__(self, config: ProjectConfig) -> None:
        self.config = config
        self.descriptor = VANILLA

    async def before_generation(self, config: ProjectConfig) -> None:
        return None

    def dependencies(self) -> Dependencies:
        development = ["vite", "eslint"]
        if _is_typescript(self.config):
            development += ["typescript", "@types/node"]
        development += _styling_dev_deps(self.config)
        if self.config.testing in ("vitest", "jest"):
            development += [
                self.config.testing,
                "jsdom",
                "@testing-library/dom",
                "@testing-library/user-event",
            ]
        return Dependencies(production=[], development=development)

    def config_files(self) -> list[ConfigFile]:
        return []

    def file_structure(self) -> str:
        ext = _script_ext(self.config)
        lines = [
            "src/",
            "├── components/",
            "├── pages/",
            "├── utils/",
            f"│   └── dom.{ext}",
            "├── services/",
            f"│   └── api.{ext}",
            "├── styles/",
            f"├── router.{ext}",
            f"└── main.{ext}",
            "public/",
            "└── index.html",
        ]
        return "\n".join(lines)

    def markdown_sections(self) -> list[MarkdownSection]:
        return []

    def commands(self) -> dict[str, str]:
        commands = {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
            "test": "vitest",
            "lint": "eslint src/ --ext js,ts",
        }
        if _is_typescript(self.config):
            commands["type-check"] = "tsc --noEmit"
        return commands

    def security_guidelines(self) -> list[str]:
        return [
            "Use textContent instead of innerHTML when possible",
            "Validate API responses before processing",
        ]

    def template_variables(self) -> dict[str, Any]:
        return {"framework": "vanilla", "usesPureJS": True}

    def supported_features(self) -> frozenset[str]:
        return frozenset({"spa", "components", "routing", "utilities", "dom-manipulation"})

    def is_compatible_with(self, other: str) -> bool:
        return other not in self.INCOMPATIBLE

    def testing_strategy(self) -> Optional[str]:
        return None

    def ui_guidelines(self) -> Optional[str]:
        return None


VANILLA = CapabilityDescriptor(
    name="vanilla",
    display_name="Vanilla JS",
    category=Category.STACK,
    factory=VanillaProvider,
    project_types=frozenset({"frontend"}),
    languages=frozenset({"TypeScript", "JavaScript"}),
    icon="🍦",
    description="Pure JavaScript with modern tooling",
)


DESCRIPTORS: list[CapabilityDescriptor] = [
    NEXTJS_APP,
    NEXTJS_PAGES,
    REMIX,
    T3,
    REACT,
    VUE,
    SVELTE,
    ANGULAR,
    VANILLA,
]
