"""Tests for color palette parsing and conversion.

Covers:
- parse_colors: ordering, blanks, duplicates
- parse_color_token: hex forms, name rules, malformed tokens
- normalize_hex / hex_to_components / format_component
"""

from __future__ import annotations

import pytest

from swiftsketch.scaffolder.colors import (
    format_component,
    hex_to_components,
    normalize_hex,
    parse_color_token,
    parse_colors,
)
from swiftsketch.scaffolder.errors import MalformedColorSpec, ScaffoldError
from swiftsketch.scaffolder.models import ColorEntry


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# parse_colors
# ---------------------------------------------------------------------------


class TestParseColors:
    def test_preserves_input_order(self):
        colors = parse_colors("#0000FF=Blue,#FF0000=Red,#00FF00=Green")
        assert [c.name for c in colors] == ["Blue", "Red", "Green"]
        assert [c.hex for c in colors] == ["0000FF", "FF0000", "00FF00"]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_value_is_empty(self, raw):
        assert parse_colors(raw) == []

    def test_whitespace_around_tokens(self):
        colors = parse_colors(" #FF0000 = Red ,  #00FF00=Green ")
        assert colors == [
            ColorEntry(hex="FF0000", name="Red"),
            ColorEntry(hex="00FF00", name="Green"),
        ]

    def test_duplicate_name_rejected(self):
        with pytest.raises(MalformedColorSpec, match="duplicate color name 'Red'"):
            parse_colors("#FF0000=Red,#AA0000=Red")

    @pytest.mark.parametrize("raw", ["#FF0000=Red,#AA0000=red", "#FF0000=red,#AA0000=RED"])
    def test_names_differing_only_in_case_rejected(self, raw):
        with pytest.raises(MalformedColorSpec, match="clashes with") as exc_info:
            parse_colors(raw)
        assert exc_info.value.token == raw.split(",")[1]

    def test_trailing_comma_rejected(self):
        with pytest.raises(MalformedColorSpec):
            parse_colors("#FF0000=Red,")

    def test_error_is_a_scaffold_error(self):
        with pytest.raises(ScaffoldError):
            parse_colors("not-a-color")


# ---------------------------------------------------------------------------
# parse_color_token
# ---------------------------------------------------------------------------


class TestParseColorToken:
    def test_hash_is_optional(self):
        assert parse_color_token("FF0000=Red").hex == "FF0000"

    def test_short_hex_expands(self):
        assert parse_color_token("#f0a=Pink").hex == "FF00AA"

    def test_lowercase_hex_is_upper_cased(self):
        assert parse_color_token("#abcdef=Sky").hex == "ABCDEF"

    def test_lowercase_name_kept(self):
        entry = parse_color_token("#FF0000=red")
        assert entry.name == "red"
        assert entry.accessor == "red"

    def test_accessor_lowers_first_character_only(self):
        assert parse_color_token("#FF0000=PrimaryRed").accessor == "primaryRed"

    def test_underscore_name_allowed(self):
        assert parse_color_token("#FF0000=_brand").name == "_brand"

    @pytest.mark.parametrize(
        "token",
        [
            "#FF0000",
            "=Red",
            "#FF0000=",
            "#FF00=Red",
            "#GG0000=Red",
            "#FF0000=1Red",
            "#FF0000=Dark Red",
            "#FF0000=Red=Dark",
            "#FF0000=class",
            "#FF0000=Self",
        ],
    )
    def test_malformed_tokens(self, token):
        with pytest.raises(MalformedColorSpec) as exc_info:
            parse_color_token(token)
        assert exc_info.value.token == token

    def test_keyword_after_lowering_rejected(self):
        # "Struct" is fine as a type name but its accessor "struct" is not.
        with pytest.raises(MalformedColorSpec, match="not a valid Swift identifier"):
            parse_color_token("#FF0000=Struct")

    def test_message_names_token(self):
        with pytest.raises(MalformedColorSpec, match="Invalid color format '#XYZ=Red'"):
            parse_color_token("#XYZ=Red")

    def test_message_carries_reason(self):
        with pytest.raises(MalformedColorSpec, match="must start with a letter or underscore"):
            parse_color_token("#FF0000=9Red")


# ---------------------------------------------------------------------------
# Hex helpers
# ---------------------------------------------------------------------------


class TestNormalizeHex:
    @pytest.mark.parametrize(
        "value, expected",
        [("#ff0000", "FF0000"), ("00ff00", "00FF00"), ("#abc", "AABBCC"), (" #123456 ", "123456")],
    )
    def test_valid(self, value, expected):
        assert normalize_hex(value) == expected

    @pytest.mark.parametrize("value", ["", "#", "#12345", "#1234567", "#12G", "##FFF"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            normalize_hex(value)


class TestHexToComponents:
    def test_primary_colors(self):
        assert hex_to_components("FF0000") == (1.0, 0.0, 0.0)
        assert hex_to_components("00FF00") == (0.0, 1.0, 0.0)
        assert hex_to_components("0000FF") == (0.0, 0.0, 1.0)

    def test_mid_values(self):
        red, green, blue = hex_to_components("578000")
        assert red == pytest.approx(87 / 255)
        assert green == pytest.approx(128 / 255)
        assert blue == 0.0

    @pytest.mark.parametrize(
        "hex_value, expected",
        [
            ("FFFFFF", ("1.000", "1.000", "1.000")),
            ("000000", ("0.000", "0.000", "0.000")),
            ("FF5733", ("1.000", "0.341", "0.200")),
        ],
    )
    def test_formatted_channels(self, hex_value, expected):
        assert tuple(format_component(c) for c in hex_to_components(hex_value)) == expected


class TestFormatComponent:
    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "1.000"), (0.0, "0.000"), (87 / 255, "0.341"), (128 / 255, "0.502")],
    )
    def test_three_decimals(self, value, expected):
        assert format_component(value) == expected
