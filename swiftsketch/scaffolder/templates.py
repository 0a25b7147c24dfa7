"""Jinja2 template rendering for Swift scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``swiftsketch/scaffolder/templates/`` directory and renders them with
project-specific context data.  Rendering is pure: results are returned as
strings or :class:`GeneratedArtifact` values and never written here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .models import GeneratedArtifact


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for Swift scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined template variables raise immediately so a
    missing context key can never produce a silently empty identifier.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["lower_first"] = _lower_first_filter
        self.env.filters["swift_string"] = _swift_string_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"app/App.swift.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def render_artifact(
        self,
        template_path: str,
        relative_path: str,
        context: dict[str, Any],
    ) -> GeneratedArtifact:
        """Render *template_path* into an artifact placed at *relative_path*."""
        return GeneratedArtifact.from_text(
            relative_path, self.render(template_path, context)
        )

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _lower_first_filter(value: str) -> str:
    """Lower-case the first character (``SomeThing`` -> ``someThing``)."""
    return value[:1].lower() + value[1:]


def _swift_string_filter(value: str) -> str:
    """Escape *value* for use inside a Swift string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')
