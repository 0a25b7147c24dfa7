"""Wrapper around ``swift package init`` for the single-package layout.

The initializer creates ``Package.swift`` and the library/test stubs; the
manifest is then patched to declare the configured iOS platform.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from swiftsketch.utils import run_command

from .errors import ArtifactIOError, ExternalToolFailure


class PackageInitializer:
    """Runs the Swift toolchain's package initializer."""

    def __init__(self, swift: str = "swift", timeout: int = 120) -> None:
        self.swift = swift
        self.timeout = timeout

    def command(self, name: str) -> list[str]:
        """The initializer command line for a library package called *name*."""
        return [self.swift, "package", "init", "--type", "library", "--name", name]

    async def initialize(self, root: Path, name: str, platform_version: str) -> Path:
        """Initialise a library package in *root* and pin its iOS platform.

        Returns:
            Path to the customised ``Package.swift``.

        Raises:
            ExternalToolFailure: If the tool is missing or exits non-zero.
            ArtifactIOError: If the generated manifest cannot be read or
                rewritten.
        """
        cmd = self.command(name)
        try:
            code, stdout, stderr = await run_command(cmd, cwd=root, timeout=self.timeout)
        except OSError as exc:
            raise ExternalToolFailure(cmd, -1, str(exc)) from exc
        if code != 0:
            raise ExternalToolFailure(cmd, code, "\n".join(s for s in (stderr, stdout) if s))

        manifest = root / "Package.swift"
        try:
            content = await asyncio.to_thread(manifest.read_text, encoding="utf-8")
            patched = customize_package_manifest(content, name, platform_version)
            await asyncio.to_thread(manifest.write_text, patched, encoding="utf-8")
        except OSError as exc:
            raise ArtifactIOError(manifest, str(exc)) from exc
        return manifest


def customize_package_manifest(content: str, name: str, platform_version: str) -> str:
    """Insert ``platforms: [.iOS("<version>")]`` right after the package name.

    The manifest is returned unchanged when it has no ``name: "<name>",``
    argument or already declares platforms.
    """
    if "platforms:" in content:
        return content
    anchor = f'name: "{name}",'
    index = content.find(anchor)
    if index < 0:
        return content
    insert_at = index + len(anchor)
    platforms = f'\n    platforms: [.iOS("{platform_version}")],'
    return content[:insert_at] + platforms + content[insert_at:]
