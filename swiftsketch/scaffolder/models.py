"""Pydantic v2 models for the SwiftSketch scaffolder.

Defines the input ``ProjectSpec``, the resolved ``ProjectModel`` that every
renderer reads, and the ``GeneratedArtifact`` unit that renderers produce.
All models are frozen: once the orchestrator has built a model, nothing
downstream can alter it.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ValidationError


# ---------------------------------------------------------------------------
# Swift identifier rules
# ---------------------------------------------------------------------------

_SWIFT_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

SWIFT_KEYWORDS: frozenset[str] = frozenset({
    "associatedtype", "class", "deinit", "enum", "extension", "fileprivate",
    "func", "import", "init", "inout", "internal", "let", "open", "operator",
    "private", "precedencegroup", "protocol", "public", "rethrows", "static",
    "struct", "subscript", "typealias", "var", "break", "case", "catch",
    "continue", "default", "defer", "do", "else", "fallthrough", "for",
    "guard", "if", "in", "repeat", "return", "throw", "switch", "where",
    "while", "as", "Any", "await", "false", "is", "nil", "self", "Self",
    "super", "throws", "true", "try",
})


def is_swift_identifier(value: str) -> bool:
    """Return ``True`` if *value* can be used verbatim as a Swift identifier."""
    return bool(_SWIFT_IDENTIFIER.match(value)) and value not in SWIFT_KEYWORDS


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ManifestBackend(str, Enum):
    """Downstream project-generation tool whose manifest is rendered."""
    TUIST = "tuist"
    XCODEGEN = "xcodegen"
    NONE = "none"


class Layout(str, Enum):
    """Shape of the generated tree."""
    SINGLE = "single"
    MODULAR = "modular"


class ModuleRole(str, Enum):
    """Fixed roles of the modular architecture."""
    UTIL = "util"
    CORE = "core"
    UI = "ui"
    APP = "app"

    @property
    def display_name(self) -> str:
        """Canonical, capitalised module name for the role."""
        return _ROLE_NAMES[self]


_ROLE_NAMES: dict[ModuleRole, str] = {
    ModuleRole.UTIL: "Util",
    ModuleRole.CORE: "Core",
    ModuleRole.UI: "UI",
    ModuleRole.APP: "App",
}


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

_HEX_DIGITS = re.compile(r"^[0-9A-F]+$")


def normalize_hex(value: str) -> str:
    """Return *value* as 6 upper-case hex digits without ``#``.

    Three-digit shorthand is expanded (``"#0f0"`` -> ``"00FF00"``).

    Raises:
        ValueError: If *value* is not a 3- or 6-digit hex color.
    """
    digits = value.strip()
    if digits.startswith("#"):
        digits = digits[1:]
    digits = digits.upper()
    if len(digits) not in (3, 6) or not _HEX_DIGITS.match(digits):
        raise ValueError(f"'{value}' is not a 3- or 6-digit hex color")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return digits


def color_key(name: str) -> str:
    """Key under which two color names would collide in the generated tree.

    Accessors differ only in the case of the first letter and colorset
    folders share a case-insensitive filesystem on macOS, so names are
    compared case-folded.
    """
    return name.casefold()


def color_clash(seen: dict[str, str], name: str) -> Optional[str]:
    """Describe how *name* clashes with an already accepted color, if it does.

    Args:
        seen: Accepted names keyed by :func:`color_key`.
        name: Candidate color name.
    """
    previous = seen.get(color_key(name))
    if previous is None:
        return None
    if previous == name:
        return f"duplicate color name '{name}'"
    return f"color name '{name}' clashes with '{previous}'"


class ColorEntry(BaseModel):
    """One validated palette color."""

    model_config = ConfigDict(frozen=True)

    hex: str = Field(..., description="Normalised 6-digit upper-case hex, no '#'")
    name: str = Field(..., description="Display name, also the asset and accessor name")

    @field_validator("hex")
    @classmethod
    def _normalize_hex(cls, value: str) -> str:
        return normalize_hex(value)

    @field_validator("name")
    @classmethod
    def _name_is_accessor_safe(cls, value: str) -> str:
        value = value.strip()
        first = value[:1]
        if not first or (first.lower() == first.upper() and first != "_"):
            raise ValueError(f"name '{value}' must start with a letter or underscore")
        accessor = first.lower() + value[1:]
        if not is_swift_identifier(value) or not is_swift_identifier(accessor):
            raise ValueError(f"name '{value}' is not a valid Swift identifier")
        return value

    @property
    def accessor(self) -> str:
        """Generated-code accessor: first character lower-cased, rest unchanged."""
        return self.name[:1].lower() + self.name[1:]


# ---------------------------------------------------------------------------
# Module graph
# ---------------------------------------------------------------------------

class ModuleNaming(BaseModel):
    """Prefix policy applied uniformly to every module name."""

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = Field(default=None, description="Module name prefix, e.g. 'ABC'")

    @field_validator("prefix")
    @classmethod
    def _empty_prefix_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def resolve(self, role: ModuleRole) -> str:
        """Return the module name for *role* under this policy."""
        return f"{self.prefix or ''}{role.display_name}"


class ModuleSpec(BaseModel):
    """A module of the generated project and the roles it depends on."""

    model_config = ConfigDict(frozen=True)

    role: ModuleRole
    resolved_name: str
    depends_on: frozenset[ModuleRole] = Field(default_factory=frozenset)


# ---------------------------------------------------------------------------
# Artifacts
# ---------------------------------------------------------------------------

class GeneratedArtifact(BaseModel):
    """A single file of the scaffold, relative to the project root."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(..., description="POSIX path relative to the project root")
    content: bytes = Field(default=b"")

    @classmethod
    def from_text(cls, relative_path: str, text: str) -> "GeneratedArtifact":
        """Build an artifact from UTF-8 text."""
        return cls(relative_path=relative_path, content=text.encode("utf-8"))

    @property
    def text(self) -> str:
        """Content decoded as UTF-8."""
        return self.content.decode("utf-8")


# ---------------------------------------------------------------------------
# Project specification (input)
# ---------------------------------------------------------------------------

class ProjectSpec(BaseModel):
    """Everything the user asked for, validated and normalised."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project / package name")
    output_root: Path = Field(default=Path("."), description="Parent directory of the project")
    organization_id: str = Field(default="com.yourorganization", description="Dotted organization id")
    platform_version: str = Field(default="16.0", description="Minimum iOS version")
    tool_version: str = Field(default="16.0", description="Xcode version pinned in manifests")
    modular: bool = Field(default=False)
    module_prefix: Optional[str] = Field(default=None)
    colors: list[ColorEntry] = Field(default_factory=list)
    manifest_backend: ManifestBackend = Field(default=ManifestBackend.NONE)

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        value = value.strip()
        if not is_swift_identifier(value):
            raise ValueError(f"'{value}' is not a valid Swift identifier")
        return value

    @field_validator("organization_id")
    @classmethod
    def _organization_is_dotted(cls, value: str) -> str:
        value = value.strip()
        if not value or any(not part for part in value.split(".")):
            raise ValueError(f"'{value}' is not a dotted organization identifier")
        return value

    @field_validator("platform_version")
    @classmethod
    def _normalize_platform_version(cls, value: str) -> str:
        value = normalize_version(value)
        if not value:
            raise ValueError("platform version must not be empty")
        return value

    @field_validator("module_prefix")
    @classmethod
    def _prefix_is_identifier(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if not _SWIFT_IDENTIFIER.match(value):
            raise ValueError(f"module prefix '{value}' is not a valid Swift identifier")
        return value

    @model_validator(mode="after")
    def _color_names_unique(self) -> "ProjectSpec":
        seen: dict[str, str] = {}
        for color in self.colors:
            clash = color_clash(seen, color.name)
            if clash:
                raise ValueError(clash)
            seen[color_key(color.name)] = color.name
        return self

    @model_validator(mode="after")
    def _name_differs_from_modules(self) -> "ProjectSpec":
        if not self.modular:
            return self
        naming = ModuleNaming(prefix=self.module_prefix)
        for role in (ModuleRole.UTIL, ModuleRole.CORE, ModuleRole.UI):
            if naming.resolve(role) == self.name:
                raise ValueError(
                    f"project name '{self.name}' collides with the {role.display_name} module"
                )
        return self

    @classmethod
    def build(cls, **data: object) -> "ProjectSpec":
        """Validate *data*, raising the scaffolder's ``ValidationError`` on failure."""
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as exc:
            messages = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'spec'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ValidationError(f"Invalid project specification: {messages}") from exc

    @property
    def project_root(self) -> Path:
        """Directory the project is generated into."""
        return self.output_root / self.name

    @property
    def organization_name(self) -> str:
        """Last dotted segment of the organization id."""
        return self.organization_id.split(".")[-1]


def normalize_version(version: str) -> str:
    """Strip a leading ``v`` from a version string (``"v17.0"`` -> ``"17.0"``)."""
    version = version.strip()
    if version[:1] in ("v", "V"):
        return version[1:]
    return version


# ---------------------------------------------------------------------------
# Resolved generation plan
# ---------------------------------------------------------------------------

class ProjectModel(BaseModel):
    """The fully resolved, read-only generation plan."""

    model_config = ConfigDict(frozen=True)

    spec: ProjectSpec
    naming: ModuleNaming
    modules: list[ModuleSpec]
    colors: list[ColorEntry] = Field(default_factory=list)
    color_catalog: Optional[list[GeneratedArtifact]] = None
    layout: Layout

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def is_modular(self) -> bool:
        return self.layout is Layout.MODULAR

    def module(self, role: ModuleRole) -> ModuleSpec:
        """Return the module playing *role*."""
        for module in self.modules:
            if module.role is role:
                return module
        raise KeyError(role)

    @property
    def library_modules(self) -> list[ModuleSpec]:
        """Modules that become local packages (everything but the app), in order."""
        if not self.is_modular:
            return []
        return [m for m in self.modules if m.role is not ModuleRole.APP]

    @property
    def library_module_names(self) -> list[str]:
        return [m.resolved_name for m in self.library_modules]

    @property
    def color_module_name(self) -> str:
        """Module that owns the color catalog and the color bridge."""
        if self.is_modular:
            return self.module(ModuleRole.UI).resolved_name
        return self.spec.name

    def dependency_names(self, module: ModuleSpec) -> list[str]:
        """Resolved names of *module*'s dependencies, in module order."""
        return [m.resolved_name for m in self.modules if m.role in module.depends_on]
