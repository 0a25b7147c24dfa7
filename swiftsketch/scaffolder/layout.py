"""Directory layout of generated projects.

All paths are POSIX strings relative to the project root so that artifacts
render identically on every host platform.
"""

from __future__ import annotations

from .models import ProjectModel

PACKAGES_DIR = "Packages"


def package_dir(module_name: str) -> str:
    """Root of a local package in the modular layout."""
    return f"{PACKAGES_DIR}/{module_name}"


def module_sources_dir(model: ProjectModel, module_name: str) -> str:
    """Directory holding a module's Swift sources."""
    if model.is_modular:
        return f"{package_dir(module_name)}/Sources/{module_name}"
    return f"Sources/{module_name}"


def module_tests_dir(model: ProjectModel, module_name: str) -> str:
    """Directory holding a module's unit tests."""
    if model.is_modular:
        return f"{package_dir(module_name)}/Tests/{module_name}Tests"
    return f"Tests/{module_name}Tests"


def module_resources_dir(model: ProjectModel, module_name: str) -> str:
    """``Resources`` directory next to a module's sources."""
    return f"{module_sources_dir(model, module_name)}/Resources"


def color_resources_dir(model: ProjectModel) -> str:
    """``Resources`` directory that receives the color catalog.

    The UI module in the modular layout, the plain package otherwise.
    """
    return module_resources_dir(model, model.color_module_name)
