"""Jinja2 rendering of the files shipped under ``scaffolder/templates/``.

Template paths mirror the generated project: ``base/src/router.tsx.j2``
becomes ``src/router.tsx``.  Output is returned as ``FileEmission`` values;
nothing here writes to the project directory.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .models import FileEmission


TEMPLATE_SUFFIX = ".j2"

_PACKAGED_TEMPLATES = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Jinja2 environment bound to one template root.

    Generated sources are TypeScript, JSON and Markdown, so autoescaping is
    off.  A variable missing from the context is an error rather than an
    empty string.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else _PACKAGED_TEMPLATES
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = slugify

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template root) to text."""
        return self.env.get_template(template_path).render(**context)

    def emit(
        self,
        template_path: str,
        relative_path: str,
        context: dict[str, Any],
        *,
        executable: bool = False,
    ) -> FileEmission:
        """Render *template_path* into a ``FileEmission`` at *relative_path*."""
        return FileEmission.text(
            relative_path, self.render(template_path, context), executable=executable
        )

    def render_tree(self, template_prefix: str, context: dict[str, Any]) -> list[FileEmission]:
        """Render every template below *template_prefix*.

        The emitted path is the template path relative to *template_prefix*
        with the ``.j2`` suffix removed.  Templates are visited in sorted path
        order, so the result does not depend on the filesystem.
        """
        strip = len(template_prefix) + 1
        return [
            self.emit(template_path, template_path[strip : -len(TEMPLATE_SUFFIX)], context)
            for template_path in self.list_templates(template_prefix)
        ]

    def list_templates(self, prefix: str = "") -> list[str]:
        """Sorted template paths under *prefix*, relative to the template root."""
        root = self.template_dir / prefix if prefix else self.template_dir
        if not root.is_dir():
            return []
        return [
            path.relative_to(self.template_dir).as_posix()
            for path in sorted(root.rglob(f"*{TEMPLATE_SUFFIX}"))
        ]


def slugify(value: str) -> str:
    """Lowercase *value* and collapse anything outside ``[a-z0-9]`` to hyphens.

    >>> slugify("My_App")
    'my-app'
    """
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")
