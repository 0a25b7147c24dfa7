"""Exceptions raised while planning or writing a scaffold.

Every error derives from :class:`ScaffoldError` so callers (the CLI in
particular) can report any failed run with a single ``except`` clause.  A run
either completes or fails with exactly one of these; no error is retried.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffolding failure."""


class MalformedColorSpec(ScaffoldError):
    """Raised when a ``#HEX=Name`` token cannot be parsed or is rejected."""

    def __init__(self, token: str, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid color format '{token}': {reason}")


class ValidationError(ScaffoldError):
    """Raised when a value falls outside its allowed set or grammar."""

    def __init__(
        self,
        message: str,
        *,
        value: str | None = None,
        allowed: Iterable[str] | None = None,
    ) -> None:
        self.value = value
        self.allowed = tuple(allowed) if allowed is not None else ()
        if self.allowed:
            message = f"{message}. Supported options are: {', '.join(self.allowed)}"
        super().__init__(message)


class ExternalToolFailure(ScaffoldError):
    """Raised when an external developer tool exits with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, output: str) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"'{' '.join(command)}' failed with exit code {returncode}: {output}"
        )


class ArtifactIOError(ScaffoldError):
    """Raised when a directory or file of the scaffold cannot be created."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot write {self.path}: {reason}")
