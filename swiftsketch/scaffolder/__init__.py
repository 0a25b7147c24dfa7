"""SwiftSketch scaffolder -- generates Swift package and project structures.

This module takes a ``ProjectSpec`` and renders a single Swift package or a
modular app (App + local Util/Core/UI packages) with an optional color
catalog and an optional Tuist or XcodeGen manifest.

Quick usage::

    from swiftsketch.scaffolder import ProjectGenerator, ProjectSpec, parse_colors

    spec = ProjectSpec.build(
        name="Widgets",
        output_root="/tmp/output",
        colors=parse_colors("#FF0000=Red"),
    )
    result = await ProjectGenerator(spec).generate()
"""

from swiftsketch.scaffolder.colors import parse_colors
from swiftsketch.scaffolder.errors import (
    ArtifactIOError,
    ExternalToolFailure,
    MalformedColorSpec,
    ScaffoldError,
    ValidationError,
)
from swiftsketch.scaffolder.generator import (
    ProjectGenerator,
    ScaffoldResult,
    build_project_model,
)
from swiftsketch.scaffolder.manifests import parse_backend, render_manifest
from swiftsketch.scaffolder.models import (
    ColorEntry,
    GeneratedArtifact,
    ManifestBackend,
    ProjectModel,
    ProjectSpec,
)
from swiftsketch.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArtifactIOError",
    "ColorEntry",
    "ExternalToolFailure",
    "GeneratedArtifact",
    "MalformedColorSpec",
    "ManifestBackend",
    "ProjectGenerator",
    "ProjectModel",
    "ProjectSpec",
    "ScaffoldError",
    "ScaffoldResult",
    "TemplateRenderer",
    "ValidationError",
    "build_project_model",
    "parse_backend",
    "parse_colors",
    "render_manifest",
]
