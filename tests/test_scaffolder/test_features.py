"""Tests for the feature catalog and registry.

Covers:
- Catalog order and keys
- get / list / ordered / membership
- UnknownFeature
- Per-feature contribution functions in isolation
- No two features declare the same package
"""

from __future__ import annotations

import pytest

from tanstack_starter.config import Selection
from tanstack_starter.scaffolder.features import (
    CATALOG,
    FeatureDescriptor,
    FeatureRegistry,
    UnknownFeature,
    registry,
)
from tanstack_starter.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


EXPECTED_ORDER = ["i18n", "ui", "state", "auth", "animation", "testing", "quality", "deploy"]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_catalog_order(self):
        assert [f.key for f in registry.list()] == EXPECTED_ORDER

    def test_get(self):
        feature = registry.get("animation")
        assert feature.display_name == "Animations"
        assert feature.runtime_packages == (("framer-motion", "latest"),)

    def test_get_unknown(self):
        with pytest.raises(UnknownFeature) as exc_info:
            registry.get("blockchain")
        assert exc_info.value.key == "blockchain"
        assert "blockchain" in str(exc_info.value)

    def test_unknown_feature_is_key_error(self):
        with pytest.raises(KeyError):
            registry.get("nope")

    def test_ordered_uses_catalog_order(self):
        ordered = registry.ordered(["deploy", "i18n", "testing"])
        assert [f.key for f in ordered] == ["i18n", "testing", "deploy"]

    def test_ordered_validates(self):
        with pytest.raises(UnknownFeature):
            registry.ordered(["ui", "nope"])

    def test_ordered_ignores_duplicates(self):
        assert [f.key for f in registry.ordered(["ui", "ui"])] == ["ui"]

    def test_contains_and_len(self):
        assert "quality" in registry
        assert "nope" not in registry
        assert len(registry) == 8

    def test_duplicate_keys_rejected(self):
        feature = FeatureDescriptor(key="x", display_name="X", description="")
        with pytest.raises(ValueError):
            FeatureRegistry([feature, feature])

    def test_custom_catalog(self):
        custom = FeatureRegistry([FeatureDescriptor(key="x", display_name="X", description="")])
        assert [f.key for f in custom.list()] == ["x"]

    def test_list_returns_copy(self):
        features = registry.list()
        features.clear()
        assert len(registry.list()) == 8

    def test_default_selected(self):
        assert [f.key for f in CATALOG if f.default_selected] == ["ui", "quality"]


class TestCatalogPackages:
    def test_no_package_declared_twice(self):
        """Last-write-wins never matters today: no two features share a package."""
        seen: dict[str, str] = {}
        for feature in CATALOG:
            for name, _ in (*feature.runtime_packages, *feature.dev_packages):
                assert name not in seen, f"{name} declared by {seen.get(name)} and {feature.key}"
                seen[name] = feature.key

    def test_feature_packages_are_latest(self):
        for feature in CATALOG:
            for _, constraint in (*feature.runtime_packages, *feature.dev_packages):
                assert constraint == "latest"

    def test_state_has_no_static_packages(self):
        state = registry.get("state")
        assert state.runtime_packages == ()
        assert state.dev_packages == ()


# ---------------------------------------------------------------------------
# Contribution functions
# ---------------------------------------------------------------------------


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def _context(selection: Selection) -> dict:
    pm = selection.package_manager
    return {
        "project_name": selection.project_name,
        "package_manager": pm.value,
        "run_prefix": pm.run_prefix,
        "exec_command": pm.exec_command,
        "features": [],
        "selected": set(selection.features),
    }


class TestContributions:
    def test_quality_scripts_pnpm_prefix(self):
        quality = registry.get("quality")
        scripts = quality.scripts(Selection(project_name="demo", package_manager="pnpm"))
        assert scripts["lint"] == "pnpm biome check src"
        assert scripts["lint:fix"] == "pnpm biome check --write src"
        assert scripts["prepare"] == "husky"

    def test_quality_scripts_without_prefix(self):
        quality = registry.get("quality")
        for pm in ("npm", "yarn"):
            scripts = quality.scripts(Selection(project_name="demo", package_manager=pm))
            assert scripts["lint"] == "biome check src"

    def test_quality_lint_staged(self):
        quality = registry.get("quality")
        extra = quality.extra_fields(Selection(project_name="demo", package_manager="npm"))
        assert extra == {"lint-staged": {"*.{js,jsx,ts,tsx}": ["biome check src"]}}

    def test_state_packages_follow_sub_selection(self):
        state = registry.get("state")
        selection = Selection(
            project_name="demo", features=["state"], sub_options={"state": ["zustand", "jotai"]}
        )
        assert state.sub_packages(selection) == [("jotai", "latest"), ("zustand", "latest")]

    def test_state_files(self, renderer):
        state = registry.get("state")
        selection = Selection(
            project_name="demo", features=["state"], sub_options={"state": ["zustand"]}
        )
        files = state.files(selection, renderer, _context(selection))
        assert [f.relative_path for f in files] == ["src/store/zustandStore.ts"]
        assert b"create<CounterState>" in files[0].content

    def test_quality_pre_commit_is_executable(self, renderer):
        quality = registry.get("quality")
        selection = Selection(project_name="demo", package_manager="pnpm", features=["quality"])
        files = {f.relative_path: f for f in quality.files(selection, renderer, _context(selection))}
        hook = files[".husky/pre-commit"]
        assert hook.executable is True
        assert hook.content == b"pnpm exec lint-staged\n"

    def test_deploy_wrangler_name_is_slugified(self, renderer):
        deploy = registry.get("deploy")
        selection = Selection(project_name="My_Shop", features=["deploy"])
        (wrangler,) = deploy.files(selection, renderer, _context(selection))
        assert wrangler.relative_path == "wrangler.json"
        assert b'"name": "my-shop"' in wrangler.content

    def test_animation_contributes_no_files(self):
        assert registry.get("animation").files is None
