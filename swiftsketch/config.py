"""SwiftSketch configuration.

Centralised, typed configuration for the command-line layer.  All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.

The Xcode version is an injected value: when it is not configured the CLI
probes ``xcodebuild -version`` and falls back to ``DEFAULT_XCODE_VERSION``, so
the renderers themselves never depend on an external tool being installed.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_ORGANIZATION = "com.yourorganization"
DEFAULT_IOS_VERSION = "16.0"
DEFAULT_XCODE_VERSION = "16.0"
DEFAULT_PROJECT_TOOL = "tuist"


class ToolchainConfig(BaseModel):
    """Locations and limits of the external developer tools."""

    swift: str = Field(default="swift", description="Swift toolchain executable")
    xcodebuild: str = Field(default="xcodebuild", description="Xcode build tool executable")
    timeout: int = Field(default=120, ge=5, description="Per-invocation timeout in seconds")


class Config(BaseModel):
    """Global SwiftSketch configuration.

    Instances are typically created once by the CLI entry point (defaults,
    then a JSON file, then environment variables, then flags) and passed to
    :class:`~swiftsketch.scaffolder.generator.ProjectGenerator`.
    """

    organization: str = Field(default=DEFAULT_ORGANIZATION)
    ios_version: str = Field(default=DEFAULT_IOS_VERSION)
    xcode_version: Optional[str] = Field(
        default=None, description="Pinned Xcode version; probed when unset"
    )
    project_tool: str = Field(default=DEFAULT_PROJECT_TOOL)
    package_init: Literal["swift", "builtin"] = Field(
        default="swift",
        description="'swift' runs `swift package init`; 'builtin' renders the package itself",
    )
    force: bool = Field(default=False, description="Allow generating into a non-empty directory")
    verbose: bool = Field(default=False)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, base: Optional["Config"] = None) -> "Config":
        """Overlay environment variables on *base* (or the defaults).

        Recognised variables (all optional):
            SWIFT_SKETCH_ORG, SWIFT_SKETCH_IOS_VERSION,
            SWIFT_SKETCH_XCODE_VERSION, SWIFT_SKETCH_PROJECT_TOOL,
            SWIFT_SKETCH_PACKAGE_INIT, SWIFT_SKETCH_SWIFT,
            SWIFT_SKETCH_XCODEBUILD, SWIFT_SKETCH_TIMEOUT.
        """
        data = (base or cls()).model_dump()

        env_fields = {
            "SWIFT_SKETCH_ORG": "organization",
            "SWIFT_SKETCH_IOS_VERSION": "ios_version",
            "SWIFT_SKETCH_XCODE_VERSION": "xcode_version",
            "SWIFT_SKETCH_PROJECT_TOOL": "project_tool",
            "SWIFT_SKETCH_PACKAGE_INIT": "package_init",
        }
        for var, field in env_fields.items():
            if os.environ.get(var):
                data[field] = os.environ[var]

        toolchain: dict[str, Any] = data["toolchain"]
        if os.environ.get("SWIFT_SKETCH_SWIFT"):
            toolchain["swift"] = os.environ["SWIFT_SKETCH_SWIFT"]
        if os.environ.get("SWIFT_SKETCH_XCODEBUILD"):
            toolchain["xcodebuild"] = os.environ["SWIFT_SKETCH_XCODEBUILD"]
        if os.environ.get("SWIFT_SKETCH_TIMEOUT"):
            toolchain["timeout"] = int(os.environ["SWIFT_SKETCH_TIMEOUT"])

        return cls.model_validate(data)
