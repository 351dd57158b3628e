"""
Unit tests for color name resolution.

Tests cover:
- Well-known CSS color names and their hex values
- Case-insensitive lookups
- Unknown names raising UnknownColorNameError
- Hex formatting invariants across the whole table
- Read-only color table
"""

import re

import pytest

from color_api.src.models.color import ColorResult
from color_api.src.services.color_resolver import (
    ColorNameResolver,
    ColorResolutionError,
    PillowColorNameResolver,
    ResolverUnavailableError,
    UnknownColorNameError,
)


HEX_RE = re.compile(r"^#[0-9a-f]{6}$")


@pytest.fixture(scope="module")
def resolver():
    """Create a Pillow-backed resolver shared by the module."""
    return PillowColorNameResolver()


class TestPillowColorNameResolver:
    """Tests for PillowColorNameResolver."""

    @pytest.mark.parametrize(
        "name,expected_hex",
        [
            ("red", "#ff0000"),
            ("blue", "#0000ff"),
            ("black", "#000000"),
            ("white", "#ffffff"),
            ("cornflowerblue", "#6495ed"),
            ("teal", "#008080"),
        ],
    )
    def test_resolves_known_names(self, resolver, name, expected_hex):
        """Test well-known names resolve to their CSS hex values."""
        result = resolver.resolve(name)

        assert isinstance(result, ColorResult)
        assert result.hex == expected_hex
        assert result.name == name

    def test_lookup_is_case_insensitive(self, resolver):
        """Test names are matched regardless of case."""
        assert resolver.resolve("CornflowerBlue").hex == "#6495ed"
        assert resolver.resolve("RED").hex == "#ff0000"

    def test_result_keeps_name_verbatim(self, resolver):
        """Test the queried name is echoed back unchanged."""
        assert resolver.resolve("Red").name == "Red"

    @pytest.mark.parametrize("name", ["notacolor123", "", "#ff0000", "rgb(255,0,0)", "red "])
    def test_unknown_names_raise(self, resolver, name):
        """Test names outside the table raise UnknownColorNameError."""
        with pytest.raises(UnknownColorNameError) as exc_info:
            resolver.resolve(name)

        assert exc_info.value.name == name
        assert repr(name) in str(exc_info.value)

    def test_unknown_name_error_is_resolution_error(self):
        """Test the error taxonomy shares a common base."""
        assert issubclass(UnknownColorNameError, ColorResolutionError)
        assert issubclass(ResolverUnavailableError, ColorResolutionError)

    def test_every_entry_is_lowercase_hex(self, resolver):
        """Test every resolvable name produces a #rrggbb value."""
        for name in resolver._table:
            assert HEX_RE.match(resolver.resolve(name).hex), name

    def test_table_is_read_only(self, resolver):
        """Test the snapshot cannot be mutated by callers."""
        with pytest.raises(TypeError):
            resolver._table["red"] = "#000000"

    def test_contains_and_len(self, resolver):
        """Test container helpers reflect the color table."""
        assert "red" in resolver
        assert "RED" in resolver
        assert "notacolor123" not in resolver
        assert len(resolver) > 100

    def test_repeated_lookups_are_identical(self, resolver):
        """Test lookups have no hidden state."""
        assert resolver.resolve("teal") == resolver.resolve("teal")


class TestColorNameResolverInterface:
    """Tests for the abstract resolver capability."""

    def test_cannot_instantiate_abstract_resolver(self):
        """Test the interface requires resolve() to be implemented."""
        with pytest.raises(TypeError):
            ColorNameResolver()

    def test_custom_resolver_implementation(self):
        """Test a table-backed resolver satisfies the interface."""

        class StaticResolver(ColorNameResolver):
            def resolve(self, name: str) -> ColorResult:
                if name != "brand":
                    raise UnknownColorNameError(name)
                return ColorResult(name=name, hex="#123abc")

        resolver = StaticResolver()
        assert resolver.resolve("brand").hex == "#123abc"
        with pytest.raises(UnknownColorNameError):
            resolver.resolve("red")
