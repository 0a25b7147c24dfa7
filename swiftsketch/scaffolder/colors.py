"""Color palette parsing and conversion.

Turns the raw ``--colors`` value (``"#FF0000=Red,#0F0=Green"``) into ordered,
validated :class:`ColorEntry` values and converts hex triplets into the
``[0, 1]`` channel values used by asset catalogs.
"""

from __future__ import annotations

from typing import Optional

import pydantic

from .errors import MalformedColorSpec
from .models import ColorEntry, color_clash, color_key, normalize_hex

__all__ = [
    "format_component",
    "hex_to_components",
    "normalize_hex",
    "parse_color_token",
    "parse_colors",
]


def parse_colors(raw: Optional[str]) -> list[ColorEntry]:
    """Parse a comma-separated list of ``#HEX=Name`` tokens.

    A missing or blank value yields an empty list.  Input order is preserved.

    Raises:
        MalformedColorSpec: For a token without exactly one hex and one name,
            an invalid hex value, a name that cannot become a generated-code
            accessor, or a name equal to an earlier one ignoring case.
    """
    if raw is None or not raw.strip():
        return []

    entries: list[ColorEntry] = []
    seen: dict[str, str] = {}
    for token in raw.split(","):
        entry = parse_color_token(token)
        clash = color_clash(seen, entry.name)
        if clash:
            raise MalformedColorSpec(token.strip(), clash)
        seen[color_key(entry.name)] = entry.name
        entries.append(entry)
    return entries


def parse_color_token(token: str) -> ColorEntry:
    """Parse a single ``#HEX=Name`` token."""
    stripped = token.strip()
    hex_part, sep, name_part = stripped.partition("=")
    if not sep or not hex_part.strip() or not name_part.strip():
        raise MalformedColorSpec(stripped, "expected '#HEX=Name'")

    try:
        return ColorEntry(hex=hex_part, name=name_part)
    except pydantic.ValidationError as exc:
        err = exc.errors()[0]
        reason = err.get("ctx", {}).get("error") or err["msg"]
        raise MalformedColorSpec(stripped, str(reason)) from exc


def hex_to_components(hex_value: str) -> tuple[float, float, float]:
    """Convert a validated 6-digit hex string to ``(red, green, blue)`` in ``[0, 1]``."""
    value = int(hex_value, 16)
    red = (value >> 16) & 0xFF
    green = (value >> 8) & 0xFF
    blue = value & 0xFF
    return red / 255, green / 255, blue / 255


def format_component(value: float) -> str:
    """Format a channel value to three decimal places (``0.341``)."""
    return f"{value:.3f}"
