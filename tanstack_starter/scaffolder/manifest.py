"""Package manifest (``package.json``) assembly.

``ManifestDraft`` starts from the fixed TanStack Start toolchain and is then
folded over every selected feature.  Merging is last-write-wins: a package
declared again later simply replaces the earlier constraint, it is never
combined with it.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from tanstack_starter.config import PackageManager


# ---------------------------------------------------------------------------
# Base toolchain
# ---------------------------------------------------------------------------

TANSTACK_VERSION = "1.121.0"

BASE_SCRIPTS: dict[str, str] = {
    "dev": "vite dev --port 3000",
    "build": "vite build",
    "start": "node .output/server/index.mjs",
}

BASE_DEPENDENCIES: dict[str, str] = {
    "@tanstack/react-query": "^5.83.0",
    "@tanstack/react-router": TANSTACK_VERSION,
    "@tanstack/react-router-with-query": TANSTACK_VERSION,
    "react": "^19.1.0",
    "react-dom": "^19.1.0",
    "vite": "^6.3.5",
}

BASE_DEV_DEPENDENCIES: dict[str, str] = {
    "@tanstack/react-start": TANSTACK_VERSION,
    "@tanstack/router-core": TANSTACK_VERSION,
    "@tanstack/start-client-core": TANSTACK_VERSION,
    "@types/node": "^24.0.0",
    "@types/react": "^19.1.7",
    "@types/react-dom": "^19.1.6",
    "vite-tsconfig-paths": "^5.1.4",
    "@vitejs/plugin-react": "^5.0.4",
    "typescript": "^5.8.3",
}

# pnpm resolves these framework sub-packages to mismatched versions unless
# they are pinned to the router release.
PNPM_OVERRIDE_PACKAGES: tuple[str, ...] = (
    "@tanstack/react-start-server",
    "@tanstack/start-server-core",
    "@tanstack/start-plugin-core",
    "@tanstack/react-start-plugin",
    "@tanstack/router-plugin",
    "@tanstack/router-generator",
    "@tanstack/server-functions-plugin",
)


def pnpm_overrides() -> dict[str, Any]:
    """The ``pnpm`` block pinning every override package to one version."""
    return {"overrides": {name: TANSTACK_VERSION for name in PNPM_OVERRIDE_PACKAGES}}


# ---------------------------------------------------------------------------
# ManifestDraft
# ---------------------------------------------------------------------------


class ManifestDraft(BaseModel):
    """The package manifest while it is being composed."""

    name: str
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    extra_fields: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def base(cls, name: str) -> "ManifestDraft":
        """A draft holding only the fixed base toolchain."""
        return cls(
            name=name,
            scripts=dict(BASE_SCRIPTS),
            dependencies=dict(BASE_DEPENDENCIES),
            dev_dependencies=dict(BASE_DEV_DEPENDENCIES),
        )

    # -- Merging -------------------------------------------------------------

    def add_dependencies(self, packages: Iterable[tuple[str, str]]) -> None:
        for name, constraint in packages:
            self.dependencies[name] = constraint

    def add_dev_dependencies(self, packages: Iterable[tuple[str, str]]) -> None:
        for name, constraint in packages:
            self.dev_dependencies[name] = constraint

    def add_scripts(self, scripts: Mapping[str, str]) -> None:
        self.scripts.update(scripts)

    def add_extra_fields(self, fields: Mapping[str, Any]) -> None:
        self.extra_fields.update(fields)

    def apply_package_manager(self, package_manager: PackageManager) -> None:
        """Add package-manager specific top-level fields.

        Only pnpm needs anything: the override block is added regardless of
        the selected features.
        """
        if package_manager is PackageManager.PNPM:
            self.extra_fields["pnpm"] = pnpm_overrides()

    # -- Serialisation -------------------------------------------------------

    def to_package_json(self) -> dict[str, Any]:
        """Return the manifest as an ordered ``package.json`` document."""
        document: dict[str, Any] = {
            "name": self.name,
            "private": True,
            "sideEffects": False,
            "type": "module",
            "scripts": dict(self.scripts),
            "dependencies": dict(self.dependencies),
            "devDependencies": dict(self.dev_dependencies),
        }
        for key, value in self.extra_fields.items():
            document[key] = value
        return document

    def render(self) -> bytes:
        """Serialise to the bytes written as ``package.json``."""
        return dump_json(self.to_package_json())


def dump_json(data: Any) -> bytes:
    """Two-space indented JSON with a trailing newline, non-ASCII preserved."""
    return (json.dumps(data, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
