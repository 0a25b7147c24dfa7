"""Swift source stub rendering.

Renders the fixed-shape Swift files of a scaffold from Jinja2 templates: the
app entry point, its view and test stub, the per-module packages, and the
color bridge that exposes every palette color to UIKit and SwiftUI.
"""

from __future__ import annotations

from typing import Any

from .layout import (
    module_resources_dir,
    module_sources_dir,
    module_tests_dir,
    package_dir,
)
from .models import GeneratedArtifact, ModuleSpec, ProjectModel
from .templates import TemplateRenderer


def color_namespace(module_name: str) -> str:
    """Name of the ``UIColor``/``Color`` extension property (``uiColors``)."""
    return f"{module_name.lower()}Colors"


class SourceStubRenderer:
    """Renders every Swift source artifact of a :class:`ProjectModel`."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def render_all(
        self, model: ProjectModel, *, include_package: bool = True
    ) -> list[GeneratedArtifact]:
        """Render all source artifacts in module (topological) order.

        Args:
            model: The resolved project model.
            include_package: For the single layout, whether to render the
                package manifest and library stubs.  Disabled when the
                external ``swift package init`` initializer creates them.
        """
        artifacts: list[GeneratedArtifact] = []
        if model.is_modular:
            for module in model.library_modules:
                artifacts.extend(self.render_module_package(model, module))
            artifacts.extend(self.render_app(model))
        elif include_package:
            artifacts.extend(self.render_single_package(model))
        artifacts.extend(self.render_color_bridge(model))
        return artifacts

    def render_app(self, model: ProjectModel) -> list[GeneratedArtifact]:
        """Entry point, content view, launch screen and test stub of the app."""
        ctx = self._base_context(model)
        name = model.name
        return [
            self.renderer.render_artifact("app/App.swift.j2", f"Sources/{name}App.swift", ctx),
            self.renderer.render_artifact("app/ContentView.swift.j2", "Sources/ContentView.swift", ctx),
            self.renderer.render_artifact(
                "app/LaunchScreen.storyboard.j2", "Resources/LaunchScreen.storyboard", ctx
            ),
            self.renderer.render_artifact("app/AppTests.swift.j2", f"Tests/{name}Tests.swift", ctx),
        ]

    def render_single_package(self, model: ProjectModel) -> list[GeneratedArtifact]:
        """Package manifest, library source and test stub of the single layout."""
        ctx = {**self._base_context(model), "has_resources": bool(model.colors)}
        name = model.name
        return [
            self.renderer.render_artifact("package/Package.swift.j2", "Package.swift", ctx),
            self.renderer.render_artifact(
                "package/Library.swift.j2",
                f"{module_sources_dir(model, name)}/{name}.swift",
                ctx,
            ),
            self.renderer.render_artifact(
                "package/LibraryTests.swift.j2",
                f"{module_tests_dir(model, name)}/{name}Tests.swift",
                ctx,
            ),
        ]

    def render_module_package(
        self, model: ProjectModel, module: ModuleSpec
    ) -> list[GeneratedArtifact]:
        """A local Swift package for one library module."""
        name = module.resolved_name
        ctx = {
            **self._base_context(model),
            "module": name,
            "dependencies": model.dependency_names(module),
        }
        artifacts = [
            self.renderer.render_artifact(
                "module/Package.swift.j2", f"{package_dir(name)}/Package.swift", ctx
            ),
            self.renderer.render_artifact(
                "module/Module.swift.j2",
                f"{module_sources_dir(model, name)}/{name}.swift",
                ctx,
            ),
            self.renderer.render_artifact(
                "module/ModuleTests.swift.j2",
                f"{module_tests_dir(model, name)}/{name}Tests.swift",
                ctx,
            ),
        ]
        # SwiftPM rejects `.process("Resources")` for a missing directory.
        if not (model.colors and name == model.color_module_name):
            artifacts.append(
                GeneratedArtifact(
                    relative_path=f"{module_resources_dir(model, name)}/.gitkeep"
                )
            )
        return artifacts

    def render_color_bridge(self, model: ProjectModel) -> list[GeneratedArtifact]:
        """``Colors.swift`` of the color-owning module; nothing without colors."""
        if not model.colors:
            return []
        module = model.color_module_name
        ctx = {**self._base_context(model), "module": module}
        return [
            self.renderer.render_artifact(
                "colors/Colors.swift.j2",
                f"{module_sources_dir(model, module)}/Colors.swift",
                ctx,
            )
        ]

    # -- Context building --------------------------------------------------

    def _base_context(self, model: ProjectModel) -> dict[str, Any]:
        """Template variables shared by every source template."""
        color_module = model.color_module_name
        return {
            "name": model.name,
            "platform_version": model.spec.platform_version,
            "library_modules": model.library_module_names,
            "ui_module": color_module,
            "color_namespace": color_namespace(color_module),
            "colors": model.colors,
        }
