"""Shared pytest fixtures for the SwiftSketch test suite.

Provides reusable fixtures for:
- Temporary output directories
- Sample color palettes and project specs
- Resolved project models (single and modular)
- A Config that never shells out to the Swift toolchain
"""

from __future__ import annotations

from pathlib import Path

import pytest

from swiftsketch.config import Config
from swiftsketch.scaffolder import (
    ManifestBackend,
    ProjectModel,
    ProjectSpec,
    build_project_model,
    parse_colors,
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Temporary parent directory for generated projects (auto-cleanup)."""
    out = tmp_path / "output"
    out.mkdir()
    yield out


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

@pytest.fixture
def rgb_colors():
    """Red, green and blue, in that order."""
    return parse_colors("#FF0000=Red,#00FF00=Green,#0000FF=Blue")


# ---------------------------------------------------------------------------
# Specs & Models
# ---------------------------------------------------------------------------

@pytest.fixture
def single_spec(output_dir: Path, rgb_colors) -> ProjectSpec:
    """A single-package spec with three colors and no manifest."""
    return ProjectSpec.build(
        name="Widgets",
        output_root=output_dir,
        organization_id="com.example",
        platform_version="17.0",
        tool_version="16.2",
        colors=rgb_colors,
    )


@pytest.fixture
def modular_spec(output_dir: Path, rgb_colors) -> ProjectSpec:
    """A modular spec with the ``ABC`` prefix and a Tuist manifest."""
    return ProjectSpec.build(
        name="Shop",
        output_root=output_dir,
        organization_id="com.example",
        platform_version="16.2",
        tool_version="16.2",
        modular=True,
        module_prefix="ABC",
        colors=rgb_colors,
        manifest_backend=ManifestBackend.TUIST,
    )


@pytest.fixture
def single_model(single_spec: ProjectSpec) -> ProjectModel:
    return build_project_model(single_spec)


@pytest.fixture
def modular_model(modular_spec: ProjectSpec) -> ProjectModel:
    return build_project_model(modular_spec)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def builtin_config() -> Config:
    """Config that renders the single package itself (no ``swift`` needed)."""
    return Config(package_init="builtin")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove every SWIFT_SKETCH_* variable from the environment."""
    for var in (
        "SWIFT_SKETCH_ORG",
        "SWIFT_SKETCH_IOS_VERSION",
        "SWIFT_SKETCH_XCODE_VERSION",
        "SWIFT_SKETCH_PROJECT_TOOL",
        "SWIFT_SKETCH_PACKAGE_INIT",
        "SWIFT_SKETCH_SWIFT",
        "SWIFT_SKETCH_XCODEBUILD",
        "SWIFT_SKETCH_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
