"""Feature-driven project composition.

Turns a ``Selection`` into a fully populated ``ManifestDraft`` and the ordered
list of files to write.  Composition is pure: the only I/O is reading the
packaged templates, so every validation error surfaces before the writer
touches the filesystem, and equal selections always produce byte-identical
output.
"""

from __future__ import annotations

from typing import Any

from tanstack_starter.config import Selection

from .features import FeatureDescriptor, FeatureRegistry, registry as default_registry
from .manifest import ManifestDraft, dump_json
from .models import Composition, FileEmission
from .templates import TemplateRenderer


BASE_DIRECTORIES: tuple[str, ...] = (
    "src",
    "src/routes",
    "src/components",
    "src/utils",
    "src/styles",
    "public",
)

# Scripts documented in the generated README, in display order.
SCRIPT_DESCRIPTIONS: dict[str, str] = {
    "dev": "Start development server",
    "build": "Build for production",
    "start": "Start production server",
    "test": "Run tests",
    "test:watch": "Run tests in watch mode",
    "lint": "Lint code",
    "lint:fix": "Lint and fix code",
    "machine-translate": "Machine-translate messages",
}


class CompositionError(RuntimeError):
    """Raised when the catalog produces an inconsistent file set."""


class Composer:
    """Builds a ``Composition`` from a ``Selection``.

    Features are always processed in catalog order, never in the order the
    caller listed them, so the output does not depend on how a selection was
    assembled.
    """

    def __init__(
        self,
        registry: FeatureRegistry | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.registry = registry or default_registry
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def compose(self, selection: Selection) -> Composition:
        """Compose the manifest and file set for *selection*.

        Raises:
            UnknownFeature: A selected key is not in the catalog.
            CompositionError: Two contributions target the same path.
        """
        features = self.registry.ordered(selection.features)
        context = self._build_context(selection, features)

        manifest = self.build_manifest(selection, features)

        files: list[FileEmission] = []
        files.extend(self.renderer.render_tree("base", context))
        for feature in features:
            if feature.files is not None:
                files.extend(feature.files(selection, self.renderer, context))
        files.extend(self._project_files(selection, features, manifest, context))

        _check_unique_paths(files)
        return Composition(
            manifest=manifest,
            files=tuple(files),
            directories=BASE_DIRECTORIES,
        )

    def build_manifest(
        self, selection: Selection, features: list[FeatureDescriptor] | None = None
    ) -> ManifestDraft:
        """Fold the base toolchain and every selected feature into a manifest."""
        if features is None:
            features = self.registry.ordered(selection.features)

        manifest = ManifestDraft.base(selection.project_name)
        for feature in features:
            manifest.add_dependencies(feature.runtime_packages)
            manifest.add_dev_dependencies(feature.dev_packages)
            if feature.sub_packages is not None:
                manifest.add_dependencies(feature.sub_packages(selection))
            if feature.scripts is not None:
                manifest.add_scripts(feature.scripts(selection))
            if feature.extra_fields is not None:
                manifest.add_extra_fields(feature.extra_fields(selection))
        manifest.apply_package_manager(selection.package_manager)
        return manifest

    # -- Context building --------------------------------------------------

    def _build_context(
        self, selection: Selection, features: list[FeatureDescriptor]
    ) -> dict[str, Any]:
        """Build the Jinja2 template context shared by every template."""
        package_manager = selection.package_manager
        return {
            "project_name": selection.project_name,
            "package_manager": package_manager.value,
            "run_prefix": package_manager.run_prefix,
            "exec_command": package_manager.exec_command,
            "features": features,
            "selected": {feature.key for feature in features},
        }

    # -- Shared project files ----------------------------------------------

    def _project_files(
        self,
        selection: Selection,
        features: list[FeatureDescriptor],
        manifest: ManifestDraft,
        context: dict[str, Any],
    ) -> list[FileEmission]:
        """Config files every project gets, with feature-dependent content."""
        files = [
            FileEmission("tsconfig.json", dump_json(_tsconfig(features))),
            self.renderer.emit("project/vite.config.ts.j2", "vite.config.ts", context),
            self.renderer.emit("project/env.example.j2", ".env.example", context),
            self.renderer.emit(
                "project/README.md.j2",
                "README.md",
                {
                    **context,
                    "scripts": _documented_scripts(manifest),
                    "docs": [link for feature in features for link in feature.docs],
                    "has_i18n": "machine-translate" in manifest.scripts,
                },
            ),
        ]
        if selection.init_git:
            files.append(self.renderer.emit("project/gitignore.j2", ".gitignore", context))
        return files


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _tsconfig(features: list[FeatureDescriptor]) -> dict[str, Any]:
    types = [t for feature in features for t in feature.tsconfig_types]
    return {
        "include": ["**/*.ts", "**/*.tsx"],
        "compilerOptions": {
            "strict": True,
            "esModuleInterop": True,
            "jsx": "react-jsx",
            "module": "ESNext",
            "moduleResolution": "Bundler",
            "lib": ["DOM", "DOM.Iterable", "ES2023"],
            "isolatedModules": True,
            "resolveJsonModule": True,
            "skipLibCheck": True,
            "target": "ES2022",
            "allowJs": True,
            "forceConsistentCasingInFileNames": True,
            "baseUrl": ".",
            "paths": {
                "@/*": ["./src/*"],
            },
            "types": types,
            "noEmit": True,
        },
    }


def _documented_scripts(manifest: ManifestDraft) -> list[dict[str, str]]:
    return [
        {"name": name, "description": description}
        for name, description in SCRIPT_DESCRIPTIONS.items()
        if name in manifest.scripts
    ]


def _check_unique_paths(files: list[FileEmission]) -> None:
    seen: set[str] = set()
    for emission in files:
        if emission.relative_path in seen:
            raise CompositionError(f"More than one file targets {emission.relative_path!r}")
        seen.add(emission.relative_path)
