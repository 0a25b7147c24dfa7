"""Main scaffolding orchestrator.

Takes a ``ProjectSpec`` and generates a complete Swift project directory:
either a single Swift package or a modular app backed by local ``Util``,
``Core`` and ``UI`` packages, with an optional color catalog and an optional
Tuist or XcodeGen manifest.

The whole :class:`ProjectModel` is resolved before anything touches the disk,
so no file is ever derived from a partially-built model.  A failure while
writing aborts the run; files written before the failure stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from swiftsketch.config import Config
from swiftsketch.utils import print_step, print_warning

from .asset_catalog import generate_color_catalog
from .errors import ArtifactIOError, ValidationError
from .layout import color_resources_dir, package_dir
from .manifests import render_manifest
from .models import (
    GeneratedArtifact,
    Layout,
    ManifestBackend,
    ModuleRole,
    ProjectModel,
    ProjectSpec,
)
from .modules import build_module_graph
from .package_init import PackageInitializer
from .sources import SourceStubRenderer
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Model building
# ---------------------------------------------------------------------------


def build_project_model(spec: ProjectSpec) -> ProjectModel:
    """Resolve *spec* into the read-only generation plan.

    Computes the module graph and naming policy, then the color catalog,
    which lives in the UI module (modular) or the plain package (single).
    """
    naming, modules = build_module_graph(spec.modular, spec.module_prefix, spec.name)
    layout = Layout.MODULAR if spec.modular else Layout.SINGLE
    draft = ProjectModel(
        spec=spec,
        naming=naming,
        modules=modules,
        colors=list(spec.colors),
        layout=layout,
    )
    catalog = generate_color_catalog(draft.colors, color_resources_dir(draft))
    return draft.model_copy(update={"color_catalog": catalog or None})


_MODULE_PURPOSES: dict[ModuleRole, str] = {
    ModuleRole.CORE: "Business logic module",
    ModuleRole.UI: "User interface components with color assets",
    ModuleRole.UTIL: "Utilities and helpers",
}


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


class ScaffoldResult(BaseModel):
    """Outcome of a completed generation run."""

    project_root: Path
    written: list[Path] = Field(default_factory=list)
    summary: dict[str, str] = Field(default_factory=dict)
    next_steps: list[str] = Field(default_factory=list)
    modules: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectSpec``, generates a directory tree containing:
    - a single Swift package, or an app plus local Util/Core/UI packages
    - a ``Colors.xcassets`` catalog and a ``Colors.swift`` bridge (with colors)
    - a Tuist or XcodeGen manifest (unless the backend is ``none``)
    """

    def __init__(
        self,
        spec: ProjectSpec,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.spec = spec
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()
        self.sources = SourceStubRenderer(self.renderer)
        self.initializer = PackageInitializer(
            swift=self.config.toolchain.swift,
            timeout=self.config.toolchain.timeout,
        )
        self._model: Optional[ProjectModel] = None

    # -- Planning ----------------------------------------------------------

    @property
    def model(self) -> ProjectModel:
        """The resolved project model (built once, on first access)."""
        if self._model is None:
            self._model = build_project_model(self.spec)
        return self._model

    @property
    def uses_swift_init(self) -> bool:
        """Whether the external initializer creates the single package."""
        return not self.spec.modular and self.config.package_init == "swift"

    def plan(self) -> list[GeneratedArtifact]:
        """Every artifact of the run, in write order.

        Module skeletons and sources come first (leaves first), then the color
        catalog, then the manifest.

        Raises:
            ValidationError: If two artifacts claim the same path.
        """
        model = self.model
        artifacts = self.sources.render_all(model, include_package=not self.uses_swift_init)
        artifacts.extend(model.color_catalog or [])
        artifacts.extend(render_manifest(model, self.renderer))

        seen: set[str] = set()
        for artifact in artifacts:
            if artifact.relative_path in seen:
                raise ValidationError(
                    "Two generated files share one path", value=artifact.relative_path
                )
            seen.add(artifact.relative_path)
        return artifacts

    # -- Public API --------------------------------------------------------

    async def generate(self) -> ScaffoldResult:
        """Generate the project under ``spec.output_root / spec.name``.

        Returns:
            A :class:`ScaffoldResult` listing every written file.

        Raises:
            ArtifactIOError: If the target directory is not empty (without
                ``force``) or a file cannot be written.
            ExternalToolFailure: If ``swift package init`` fails.
        """
        root = self.spec.project_root
        artifacts = self.plan()

        reused = await asyncio.to_thread(_prepare_target, root, self.config.force)
        if reused:
            print_warning(f"Generating into non-empty directory {root}")

        if self.uses_swift_init:
            self._log(f"Running {' '.join(self.initializer.command(self.spec.name))}")
            await self.initializer.initialize(root, self.spec.name, self.spec.platform_version)

        self._log(f"Writing {len(artifacts)} files to {root}")
        written = await write_artifacts(root, artifacts)

        return ScaffoldResult(
            project_root=root,
            written=written,
            summary=self.summary(len(written)),
            next_steps=self.next_steps(),
            modules=self.module_overview(),
        )

    # -- Reporting ---------------------------------------------------------

    def summary(self, files_written: int | None = None) -> dict[str, str]:
        """Human-readable key/value summary of the plan."""
        model = self.model
        spec = self.spec
        rows = {
            "Project": spec.name,
            "Location": str(spec.project_root),
            "Layout": model.layout.value,
            "iOS version": spec.platform_version,
            "Organization": spec.organization_id,
        }
        if model.is_modular:
            rows["Modules"] = ", ".join(model.library_module_names)
            if model.naming.prefix:
                rows["Module prefix"] = model.naming.prefix
        rows["Colors"] = ", ".join(c.name for c in model.colors) or "none"
        rows["Manifest"] = spec.manifest_backend.value
        backend = spec.manifest_backend
        if backend is ManifestBackend.TUIST or (
            backend is ManifestBackend.XCODEGEN and model.is_modular
        ):
            rows["Xcode version"] = spec.tool_version
        if files_written is not None:
            rows["Files written"] = str(files_written)
        return rows

    def next_steps(self) -> list[str]:
        """Shell commands that turn the manifest into an Xcode project."""
        backend = self.spec.manifest_backend
        if backend is ManifestBackend.NONE:
            return []
        return [f"cd {self.spec.project_root}", f"{backend.value} generate"]

    def module_overview(self) -> dict[str, str]:
        """``Packages/<name>`` -> purpose, for each local package."""
        return {
            package_dir(module.resolved_name): _MODULE_PURPOSES[module.role]
            for module in self.model.library_modules
        }

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print_step(message)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


async def write_artifacts(root: Path, artifacts: list[GeneratedArtifact]) -> list[Path]:
    """Write *artifacts* below *root*, in order.

    Raises:
        ArtifactIOError: On the first file that cannot be written.
    """
    written: list[Path] = []
    for artifact in artifacts:
        path = root / artifact.relative_path
        await asyncio.to_thread(_write_file, path, artifact.content)
        written.append(path)
    return written


def _write_file(path: Path, content: bytes) -> None:
    """Synchronous helper: create parent dirs and write content."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    except OSError as exc:
        raise ArtifactIOError(path, exc.strerror or str(exc)) from exc


def _prepare_target(root: Path, force: bool) -> bool:
    """Create *root*, refusing a non-empty existing directory unless *force*.

    Returns:
        ``True`` if *root* already held files (only possible with *force*).
    """
    non_empty = False
    if root.exists():
        if not root.is_dir():
            raise ArtifactIOError(root, "exists and is not a directory")
        non_empty = any(root.iterdir())
        if non_empty and not force:
            raise ArtifactIOError(root, "directory is not empty (use --force to overwrite)")
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ArtifactIOError(root, exc.strerror or str(exc)) from exc
    return non_empty

