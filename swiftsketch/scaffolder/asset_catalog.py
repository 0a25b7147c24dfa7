"""Asset catalog (``Colors.xcassets``) generation.

Produces one catalog-level ``Contents.json`` plus one ``<Name>.colorset``
directory per color.  Each color set is self-contained; only the listing order
follows the palette order.
"""

from __future__ import annotations

import json
from typing import Any

from .colors import format_component, hex_to_components
from .models import ColorEntry, GeneratedArtifact

CATALOG_NAME = "Colors.xcassets"

_INFO: dict[str, Any] = {"author": "xcode", "version": 1}


def catalog_contents() -> dict[str, Any]:
    """The fixed catalog descriptor."""
    return {"info": dict(_INFO)}


def color_set_contents(color: ColorEntry) -> dict[str, Any]:
    """The ``Contents.json`` document of a single color set."""
    red, green, blue = hex_to_components(color.hex)
    return {
        "colors": [
            {
                "color": {
                    "color-space": "srgb",
                    "components": {
                        "alpha": "1.000",
                        "blue": format_component(blue),
                        "green": format_component(green),
                        "red": format_component(red),
                    },
                },
                "idiom": "universal",
            }
        ],
        "info": dict(_INFO),
    }


def generate_color_catalog(
    colors: list[ColorEntry], resources_dir: str
) -> list[GeneratedArtifact]:
    """Render the catalog into ``<resources_dir>/Colors.xcassets``.

    Args:
        colors: Validated palette, names unique.
        resources_dir: POSIX path (relative to the project root) of the
            ``Resources`` directory that holds the catalog.

    Returns:
        The catalog artifacts, or an empty list when there are no colors.
    """
    if not colors:
        return []

    catalog_dir = f"{resources_dir}/{CATALOG_NAME}"
    artifacts = [
        GeneratedArtifact.from_text(
            f"{catalog_dir}/Contents.json", _dump_json(catalog_contents())
        )
    ]
    emitted: set[str] = set()
    for color in colors:
        if color.name in emitted:
            continue
        emitted.add(color.name)
        artifacts.append(
            GeneratedArtifact.from_text(
                f"{catalog_dir}/{color.name}.colorset/Contents.json",
                _dump_json(color_set_contents(color)),
            )
        )
    return artifacts


def _dump_json(data: dict[str, Any]) -> str:
    """Serialise the way Xcode writes catalog JSON (``"key" : value``)."""
    return json.dumps(data, indent=2, separators=(",", " : "), ensure_ascii=False) + "\n"
