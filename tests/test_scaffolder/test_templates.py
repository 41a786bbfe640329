"""Tests for the Jinja2 TemplateRenderer."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from tanstack_starter.scaffolder.templates import TemplateRenderer, slugify


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def tmp_templates(tmp_path: Path) -> Path:
    """A tiny template tree for testing the renderer in isolation."""
    root = tmp_path / "templates"
    (root / "tree" / "nested").mkdir(parents=True)
    (root / "tree" / "b.txt.j2").write_text("b={{ value }}\n")
    (root / "tree" / "a.txt.j2").write_text("a={{ value }}\n")
    (root / "tree" / "nested" / "c.txt.j2").write_text("c={{ value }}\n")
    (root / "tree" / "README.md").write_text("not a template\n")
    (root / "single").mkdir()
    (root / "single" / "missing.j2").write_text("{{ missing }}")
    (root / "single" / "markup.j2").write_text("{{ v }}")
    (root / "single" / "slug.j2").write_text("{{ name | slugify }}")
    return root


class TestRender:
    def test_render_packaged_template(self, renderer):
        output = renderer.render("project/env.example.j2", {"project_name": "shop"})
        assert output == 'VITE_APP_TITLE="shop"\n'

    def test_undefined_variable_raises(self, tmp_templates):
        with pytest.raises(UndefinedError):
            TemplateRenderer(tmp_templates).render("single/missing.j2", {})

    def test_no_html_escaping(self, tmp_templates):
        output = TemplateRenderer(tmp_templates).render("single/markup.j2", {"v": "<App />"})
        assert output == "<App />"

    def test_slugify_filter(self, tmp_templates):
        output = TemplateRenderer(tmp_templates).render("single/slug.j2", {"name": "My Shop"})
        assert output == "my-shop"

    def test_emit(self, renderer):
        emission = renderer.emit(
            "features/quality/pre-commit.j2",
            ".husky/pre-commit",
            {"exec_command": "npx"},
            executable=True,
        )
        assert emission.relative_path == ".husky/pre-commit"
        assert emission.content == b"npx lint-staged\n"
        assert emission.executable is True


class TestRenderTree:
    def test_sorted_and_stripped(self, tmp_templates):
        renderer = TemplateRenderer(tmp_templates)
        emissions = renderer.render_tree("tree", {"value": 1})
        assert [e.relative_path for e in emissions] == [
            "a.txt",
            "b.txt",
            "nested/c.txt",
        ]
        assert emissions[0].content == b"a=1\n"

    def test_ignores_non_templates(self, tmp_templates):
        renderer = TemplateRenderer(tmp_templates)
        paths = [e.relative_path for e in renderer.render_tree("tree", {"value": 1})]
        assert "README.md" not in paths

    def test_missing_prefix(self, tmp_templates):
        assert TemplateRenderer(tmp_templates).render_tree("nope", {}) == []

    def test_base_tree(self, renderer):
        emissions = renderer.render_tree("base", {"project_name": "demo"})
        assert "src/routes/__root.tsx" in [e.relative_path for e in emissions]


class TestListTemplates:
    def test_lists_packaged_templates(self, renderer):
        templates = renderer.list_templates()
        assert "project/README.md.j2" in templates
        assert templates == sorted(templates)

    def test_prefix(self, renderer):
        templates = renderer.list_templates("features/state")
        assert templates == [
            "features/state/jotaiStore.ts.j2",
            "features/state/zustandStore.ts.j2",
        ]

    def test_missing_prefix(self, renderer):
        assert renderer.list_templates("does/not/exist") == []


class TestSlugify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("my-app", "my-app"),
            ("My_App", "my-app"),
            ("  Hello World  ", "hello-world"),
            ("__app__", "app"),
            ("app2", "app2"),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected
