"""Tests for the scaffolder's Pydantic models.

Covers:
- ColorEntry hex normalisation and name rules
- ProjectSpec validation and normalisation (name, organization, versions,
  prefix, duplicate colors, module name collisions) and the ValidationError
  translation in build()
- ProjectModel derived views (library modules, color module, dependencies)
- GeneratedArtifact helpers
"""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from swiftsketch.scaffolder.errors import ValidationError
from swiftsketch.scaffolder.generator import build_project_model
from swiftsketch.scaffolder.models import (
    ColorEntry,
    GeneratedArtifact,
    Layout,
    ModuleRole,
    ProjectSpec,
    is_swift_identifier,
    normalize_version,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestIdentifiers:
    @pytest.mark.parametrize("value", ["Widgets", "_Private", "My2App", "ui"])
    def test_valid(self, value):
        assert is_swift_identifier(value)

    @pytest.mark.parametrize("value", ["", "2Fast", "my-app", "my app", "struct", "Self"])
    def test_invalid(self, value):
        assert not is_swift_identifier(value)


class TestNormalizeVersion:
    @pytest.mark.parametrize(
        "value, expected",
        [("17.0", "17.0"), ("v17.0", "17.0"), ("V16.2", "16.2"), (" 16.1 ", "16.1")],
    )
    def test_strips_leading_v(self, value, expected):
        assert normalize_version(value) == expected


# ---------------------------------------------------------------------------
# ColorEntry
# ---------------------------------------------------------------------------


class TestColorEntry:
    def test_hex_normalised(self):
        assert ColorEntry(hex="#0f0", name="Green").hex == "00FF00"

    @pytest.mark.parametrize(
        "hex_value, name",
        [("FF0000", "class"), ("FF0000", "Struct"), ("FF0000", "1Red"), ("FF00", "Red")],
    )
    def test_invalid(self, hex_value, name):
        with pytest.raises(pydantic.ValidationError):
            ColorEntry(hex=hex_value, name=name)


# ---------------------------------------------------------------------------
# ProjectSpec
# ---------------------------------------------------------------------------


class TestProjectSpec:
    def test_defaults(self):
        spec = ProjectSpec.build(name="Widgets")
        assert spec.output_root == Path(".")
        assert spec.organization_id == "com.yourorganization"
        assert spec.platform_version == "16.0"
        assert spec.modular is False
        assert spec.module_prefix is None
        assert spec.colors == []
        assert spec.manifest_backend.value == "none"

    def test_project_root(self, tmp_path: Path):
        spec = ProjectSpec.build(name="Widgets", output_root=tmp_path)
        assert spec.project_root == tmp_path / "Widgets"

    def test_organization_name(self):
        spec = ProjectSpec.build(name="Widgets", organization_id="com.acme.mobile")
        assert spec.organization_name == "mobile"

    def test_platform_version_normalised(self):
        assert ProjectSpec.build(name="W", platform_version="v17.0").platform_version == "17.0"

    def test_blank_prefix_is_none(self):
        assert ProjectSpec.build(name="W", module_prefix="").module_prefix is None

    @pytest.mark.parametrize("name", ["my-package", "2Fast", "", "class"])
    def test_invalid_name(self, name):
        with pytest.raises(ValidationError, match="Invalid project specification"):
            ProjectSpec.build(name=name)

    @pytest.mark.parametrize("org", ["", "com..example", ".com", "com."])
    def test_invalid_organization(self, org):
        with pytest.raises(ValidationError, match="organization_id"):
            ProjectSpec.build(name="Widgets", organization_id=org)

    def test_invalid_prefix(self):
        with pytest.raises(ValidationError, match="module_prefix"):
            ProjectSpec.build(name="Widgets", module_prefix="A-B")

    def test_duplicate_color_names(self):
        colors = [ColorEntry(hex="FF0000", name="Red"), ColorEntry(hex="AA0000", name="Red")]
        with pytest.raises(ValidationError, match="duplicate color name"):
            ProjectSpec.build(name="Widgets", colors=colors)

    def test_color_names_differing_in_case(self):
        colors = [ColorEntry(hex="FF0000", name="Red"), ColorEntry(hex="AA0000", name="red")]
        with pytest.raises(ValidationError, match="clashes with 'Red'"):
            ProjectSpec.build(name="Widgets", colors=colors)

    def test_raw_colors_are_normalised(self):
        spec = ProjectSpec.build(name="Widgets", colors=[{"hex": "#fff", "name": "White"}])
        assert spec.colors == [ColorEntry(hex="FFFFFF", name="White")]

    @pytest.mark.parametrize(
        "color",
        [{"hex": "FF0000", "name": "class"}, {"hex": "#GG0000", "name": "Red"}],
    )
    def test_invalid_raw_color(self, color):
        with pytest.raises(ValidationError, match="colors"):
            ProjectSpec.build(name="Widgets", colors=[color])

    @pytest.mark.parametrize("version", ["", "  ", "v"])
    def test_empty_platform_version(self, version):
        with pytest.raises(ValidationError, match="platform version must not be empty"):
            ProjectSpec.build(name="Widgets", platform_version=version)

    @pytest.mark.parametrize(
        "name, prefix", [("Core", None), ("UI", None), ("Util", ""), ("ABCCore", "ABC")]
    )
    def test_modular_name_collides_with_module(self, name, prefix):
        with pytest.raises(ValidationError, match="collides with the"):
            ProjectSpec.build(name=name, modular=True, module_prefix=prefix)

    def test_module_like_name_allowed(self):
        assert ProjectSpec.build(name="Core").name == "Core"
        assert ProjectSpec.build(name="Core", modular=True, module_prefix="ABC").name == "Core"

    def test_spec_is_frozen(self):
        spec = ProjectSpec.build(name="Widgets")
        with pytest.raises(pydantic.ValidationError):
            spec.name = "Other"


# ---------------------------------------------------------------------------
# ProjectModel
# ---------------------------------------------------------------------------


class TestProjectModel:
    def test_single_model(self, single_model):
        assert single_model.layout is Layout.SINGLE
        assert not single_model.is_modular
        assert single_model.name == "Widgets"
        assert single_model.library_modules == []
        assert single_model.color_module_name == "Widgets"

    def test_modular_model(self, modular_model):
        assert modular_model.layout is Layout.MODULAR
        assert modular_model.library_module_names == ["ABCUtil", "ABCCore", "ABCUI"]
        assert modular_model.color_module_name == "ABCUI"

    def test_dependency_names_follow_module_order(self, modular_model):
        app = modular_model.module(ModuleRole.APP)
        assert modular_model.dependency_names(app) == ["ABCUtil", "ABCCore", "ABCUI"]
        core = modular_model.module(ModuleRole.CORE)
        assert modular_model.dependency_names(core) == ["ABCUtil"]

    def test_missing_role(self, single_model):
        with pytest.raises(KeyError):
            single_model.module(ModuleRole.UI)

    def test_catalog_resolved_before_rendering(self, single_model, modular_model):
        assert single_model.color_catalog is not None
        assert single_model.color_catalog[0].relative_path == (
            "Sources/Widgets/Resources/Colors.xcassets/Contents.json"
        )
        assert modular_model.color_catalog[0].relative_path == (
            "Packages/ABCUI/Sources/ABCUI/Resources/Colors.xcassets/Contents.json"
        )

    def test_no_colors_no_catalog(self):
        model = build_project_model(ProjectSpec.build(name="Plain"))
        assert model.colors == []
        assert model.color_catalog is None


# ---------------------------------------------------------------------------
# GeneratedArtifact
# ---------------------------------------------------------------------------


class TestGeneratedArtifact:
    def test_from_text_round_trip(self):
        artifact = GeneratedArtifact.from_text("Sources/A.swift", "let café = 1\n")
        assert artifact.content == "let café = 1\n".encode("utf-8")
        assert artifact.text == "let café = 1\n"

    def test_empty_by_default(self):
        assert GeneratedArtifact(relative_path="Resources/.gitkeep").content == b""
