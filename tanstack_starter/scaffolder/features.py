"""Feature catalog and registry.

Every optional capability of the generated project is one ``FeatureDescriptor``:
static package lists plus small pure functions that contribute scripts,
top-level manifest fields, sub-selection packages and files.  The composer
only ever walks the catalog; nothing outside this module branches on a
feature key.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from tanstack_starter.config import PackageManager, Selection, StateLibrary

from .locales import phrases_for
from .manifest import dump_json
from .models import FileEmission
from .templates import TemplateRenderer, slugify


Package = tuple[str, str]
ScriptHook = Callable[[Selection], dict[str, str]]
ExtraFieldHook = Callable[[Selection], dict[str, Any]]
PackageHook = Callable[[Selection], list[Package]]
FileHook = Callable[[Selection, TemplateRenderer, dict[str, Any]], list[FileEmission]]


class UnknownFeature(KeyError):
    """Raised when a feature key is not part of the catalog."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown feature: {self.key!r}"


@dataclass(frozen=True)
class FeatureDescriptor:
    """Static description of one selectable feature."""

    key: str
    display_name: str
    description: str
    runtime_packages: tuple[Package, ...] = ()
    dev_packages: tuple[Package, ...] = ()
    scripts: ScriptHook | None = None
    extra_fields: ExtraFieldHook | None = None
    sub_packages: PackageHook | None = None
    files: FileHook | None = None
    tsconfig_types: tuple[str, ...] = ()
    docs: tuple[tuple[str, str], ...] = ()
    default_selected: bool = False


def _latest(*names: str) -> tuple[Package, ...]:
    return tuple((name, "latest") for name in names)


# ---------------------------------------------------------------------------
# i18n
# ---------------------------------------------------------------------------

INLANG_MODULES = (
    "https://cdn.jsdelivr.net/npm/@inlang/plugin-message-format@4/dist/index.js",
    "https://cdn.jsdelivr.net/npm/@inlang/plugin-m-function-matcher@2/dist/index.js",
)


def _i18n_scripts(selection: Selection) -> dict[str, str]:
    return {"machine-translate": "inlang machine translate --project project.inlang"}


def _i18n_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    options = selection.sub_options.i18n
    settings = {
        "$schema": "https://inlang.com/schema/project-settings",
        "baseLocale": options.base_locale,
        "locales": list(options.locales),
        "modules": list(INLANG_MODULES),
        "plugin.inlang.messageFormat": {
            "pathPattern": "./messages/{locale}.json",
        },
    }
    files = [FileEmission("project.inlang/settings.json", dump_json(settings))]
    for locale in options.locales:
        files.append(
            FileEmission(f"messages/{locale}.json", dump_json(phrases_for(locale).as_messages()))
        )
    return files


# ---------------------------------------------------------------------------
# ui
# ---------------------------------------------------------------------------


def _ui_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    components = {
        "$schema": "https://ui.shadcn.com/schema.json",
        "style": "default",
        "rsc": False,
        "tsx": True,
        "tailwind": {
            "config": "tailwind.config.mjs",
            "css": "src/styles/global.css",
            "baseColor": "slate",
            "cssVariables": True,
        },
        "aliases": {
            "components": "@/components",
            "utils": "@/utils",
        },
    }
    return [
        FileEmission("components.json", dump_json(components)),
        renderer.emit("features/ui/utils.ts.j2", "src/lib/utils.ts", context),
        renderer.emit("features/ui/tailwind.config.mjs.j2", "tailwind.config.mjs", context),
    ]


# ---------------------------------------------------------------------------
# state
# ---------------------------------------------------------------------------

STATE_STORE_MODULES: dict[StateLibrary, str] = {
    StateLibrary.JOTAI: "jotaiStore.ts",
    StateLibrary.ZUSTAND: "zustandStore.ts",
}


def _state_packages(selection: Selection) -> list[Package]:
    return [(library.value, "latest") for library in _state_libraries(selection)]


def _state_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    files = []
    for library in _state_libraries(selection):
        module = STATE_STORE_MODULES[library]
        files.append(renderer.emit(f"features/state/{module}.j2", f"src/store/{module}", context))
    return files


def _state_libraries(selection: Selection) -> list[StateLibrary]:
    # Stable order regardless of how the libraries were picked.
    chosen = set(selection.sub_options.state)
    return [library for library in StateLibrary if library in chosen]


# ---------------------------------------------------------------------------
# auth
# ---------------------------------------------------------------------------


def _auth_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    return [renderer.emit("features/auth/auth.ts.j2", "src/services/auth.ts", context)]


# ---------------------------------------------------------------------------
# testing
# ---------------------------------------------------------------------------


def _testing_scripts(selection: Selection) -> dict[str, str]:
    return {
        "test": "vitest run",
        "test:watch": "vitest",
        "test:ui": "vitest --ui",
    }


def _testing_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    return [
        renderer.emit("features/testing/vitest.config.ts.j2", "vitest.config.ts", context),
        renderer.emit("features/testing/setup.ts.j2", "tests/setup.ts", context),
    ]


# ---------------------------------------------------------------------------
# quality
# ---------------------------------------------------------------------------

BIOME_CONFIG: dict[str, Any] = {
    "$schema": "https://biomejs.dev/schemas/1.9.4/schema.json",
    "vcs": {
        "enabled": True,
        "clientKind": "git",
        "useIgnoreFile": True,
    },
    "files": {
        "ignoreUnknown": False,
        "ignore": [],
    },
    "formatter": {
        "enabled": True,
        "indentStyle": "space",
    },
    "organizeImports": {
        "enabled": True,
    },
    "linter": {
        "enabled": True,
        "rules": {
            "recommended": True,
        },
    },
}


def _biome(selection: Selection, args: str) -> str:
    prefix = "pnpm " if selection.package_manager is PackageManager.PNPM else ""
    return f"{prefix}biome {args}"


def _quality_scripts(selection: Selection) -> dict[str, str]:
    return {
        "lint": _biome(selection, "check src"),
        "lint:fix": _biome(selection, "check --write src"),
        "prepare": "husky",
    }


def _quality_extra_fields(selection: Selection) -> dict[str, Any]:
    return {"lint-staged": {"*.{js,jsx,ts,tsx}": [_biome(selection, "check src")]}}


def _quality_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    return [
        FileEmission("biome.json", dump_json(BIOME_CONFIG)),
        renderer.emit("features/quality/editorconfig.j2", ".editorconfig", context),
        renderer.emit(
            "features/quality/pre-commit.j2", ".husky/pre-commit", context, executable=True
        ),
    ]


# ---------------------------------------------------------------------------
# deploy
# ---------------------------------------------------------------------------


def _deploy_files(
    selection: Selection, renderer: TemplateRenderer, context: dict[str, Any]
) -> list[FileEmission]:
    wrangler = {
        "name": slugify(selection.project_name),
        "pages_build_output_dir": "dist/client",
        "compatibility_date": "2024-01-01",
        "compatibility_flags": ["nodejs_compat"],
    }
    return [FileEmission("wrangler.json", dump_json(wrangler))]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

CATALOG: tuple[FeatureDescriptor, ...] = (
    FeatureDescriptor(
        key="i18n",
        display_name="Internationalization (i18n)",
        description="Multi-language support with Inlang/Paraglide",
        runtime_packages=_latest("@inlang/cli", "@inlang/paraglide-js"),
        scripts=_i18n_scripts,
        files=_i18n_files,
        docs=(("Inlang", "https://inlang.com"),),
    ),
    FeatureDescriptor(
        key="ui",
        display_name="UI Components",
        description="Radix UI + Tailwind CSS + shadcn/ui",
        runtime_packages=_latest(
            "@radix-ui/react-accordion",
            "@radix-ui/react-avatar",
            "@radix-ui/react-checkbox",
            "@radix-ui/react-dialog",
            "@radix-ui/react-dropdown-menu",
            "@radix-ui/react-label",
            "@radix-ui/react-popover",
            "@radix-ui/react-slot",
            "@radix-ui/react-tooltip",
            "class-variance-authority",
            "clsx",
            "tailwind-merge",
            "lucide-react",
        ),
        dev_packages=_latest("@tailwindcss/vite", "tailwindcss", "autoprefixer"),
        files=_ui_files,
        docs=(
            ("Tailwind CSS", "https://tailwindcss.com"),
            ("Radix UI", "https://radix-ui.com"),
        ),
        default_selected=True,
    ),
    FeatureDescriptor(
        key="state",
        display_name="State Management",
        description="Choose Jotai or Zustand for state management",
        sub_packages=_state_packages,
        files=_state_files,
    ),
    FeatureDescriptor(
        key="auth",
        display_name="Authentication",
        description="Google OAuth integration",
        runtime_packages=_latest("cookie-es"),
        dev_packages=_latest("@types/google.accounts"),
        files=_auth_files,
    ),
    FeatureDescriptor(
        key="animation",
        display_name="Animations",
        description="Framer Motion for smooth animations",
        runtime_packages=_latest("framer-motion"),
    ),
    FeatureDescriptor(
        key="testing",
        display_name="Testing Setup",
        description="Vitest + Testing Library",
        dev_packages=_latest(
            "@testing-library/jest-dom",
            "@testing-library/react",
            "@testing-library/user-event",
            "@vitest/ui",
            "vitest",
            "jsdom",
        ),
        scripts=_testing_scripts,
        files=_testing_files,
        tsconfig_types=("vitest/globals", "@testing-library/jest-dom"),
        docs=(("Vitest", "https://vitest.dev"),),
    ),
    FeatureDescriptor(
        key="quality",
        display_name="Code Quality",
        description="Biome (linter/formatter) + Husky + lint-staged",
        dev_packages=_latest("@biomejs/biome", "husky", "lint-staged"),
        scripts=_quality_scripts,
        extra_fields=_quality_extra_fields,
        files=_quality_files,
        docs=(("Biome", "https://biomejs.dev"),),
        default_selected=True,
    ),
    FeatureDescriptor(
        key="deploy",
        display_name="Cloudflare Deployment",
        description="Deploy to Cloudflare Pages using @cloudflare/vite-plugin",
        runtime_packages=_latest("@cloudflare/vite-plugin"),
        dev_packages=_latest("wrangler"),
        files=_deploy_files,
        docs=(("Cloudflare Pages", "https://developers.cloudflare.com/pages"),),
    ),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class FeatureRegistry:
    """Read-only lookup over a feature catalog."""

    def __init__(self, catalog: Iterable[FeatureDescriptor] = CATALOG) -> None:
        self._features: dict[str, FeatureDescriptor] = {}
        for descriptor in catalog:
            if descriptor.key in self._features:
                raise ValueError(f"Duplicate feature key in catalog: {descriptor.key!r}")
            self._features[descriptor.key] = descriptor

    def get(self, key: str) -> FeatureDescriptor:
        """Return the descriptor for *key* or raise ``UnknownFeature``."""
        try:
            return self._features[key]
        except KeyError:
            raise UnknownFeature(key) from None

    def list(self) -> list[FeatureDescriptor]:
        """All descriptors in declaration order (the canonical display order)."""
        return list(self._features.values())

    def ordered(self, keys: Iterable[str]) -> list[FeatureDescriptor]:
        """Validate *keys* and return their descriptors in catalog order."""
        wanted = {self.get(key).key for key in keys}
        return [descriptor for descriptor in self._features.values() if descriptor.key in wanted]

    def __contains__(self, key: object) -> bool:
        return key in self._features

    def __len__(self) -> int:
        return len(self._features)


registry = FeatureRegistry()
