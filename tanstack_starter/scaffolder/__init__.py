"""tanstack-starter scaffolder -- composes and writes TanStack Start projects.

The composer turns a ``Selection`` into an in-memory ``Composition`` (the
``package.json`` draft plus every file to emit); the writer then puts it on
disk.

Quick usage::

    from tanstack_starter.config import Selection
    from tanstack_starter.scaffolder import Composer, ProjectWriter

    selection = Selection(project_name="demo", features=["ui", "testing"])
    composition = Composer().compose(selection)
    project_path = ProjectWriter("/tmp/output").write(composition)
"""

from tanstack_starter.scaffolder.composer import Composer, CompositionError
from tanstack_starter.scaffolder.features import (
    CATALOG,
    FeatureDescriptor,
    FeatureRegistry,
    UnknownFeature,
    registry,
)
from tanstack_starter.scaffolder.manifest import ManifestDraft
from tanstack_starter.scaffolder.models import Composition, FileEmission
from tanstack_starter.scaffolder.templates import TemplateRenderer
from tanstack_starter.scaffolder.writer import ProjectWriter, TargetExists, UnsafePath

__all__ = [
    "CATALOG",
    "Composer",
    "Composition",
    "CompositionError",
    "FeatureDescriptor",
    "FeatureRegistry",
    "FileEmission",
    "ManifestDraft",
    "ProjectWriter",
    "TargetExists",
    "TemplateRenderer",
    "UnknownFeature",
    "UnsafePath",
    "registry",
]
