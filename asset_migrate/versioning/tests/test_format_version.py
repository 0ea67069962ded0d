"""Tests for FormatVersion parsing, rendering and ordering."""

# pylint: disable=missing-function-docstring

import pytest

from asset_migrate.errors import MalformedVersion
from asset_migrate.versioning import FormatVersion, coerce_version, compare

# =========================================================================
# PARSING
# =========================================================================


class TestParse:
    """Tests for FormatVersion.parse."""

    def test_release(self):
        version = FormatVersion.parse("1.7.0")
        assert (version.major, version.minor, version.patch) == (1, 7, 0)
        assert version.prerelease_label is None
        assert version.prerelease_number is None
        assert not version.is_prerelease

    def test_prerelease_with_number(self):
        version = FormatVersion.parse("1.5.0-alpha09")
        assert version.prerelease_label == "alpha"
        assert version.prerelease_number == 9
        assert version.is_prerelease

    def test_prerelease_without_number(self):
        version = FormatVersion.parse("2.0.0-rc")
        assert version.prerelease_label == "rc"
        assert version.prerelease_number is None

    def test_surrounding_whitespace_is_ignored(self):
        assert FormatVersion.parse("  1.2.3 \n") == FormatVersion(1, 2, 3)

    @pytest.mark.parametrize(
        "text",
        ["", "1", "1.2", "1.2.3.4", "v1.2.3", "1.2.3-", "a.b.c", "1.2.3 beta", "1.-2.3"],
    )
    def test_malformed(self, text):
        with pytest.raises(MalformedVersion) as excinfo:
            FormatVersion.parse(text)
        assert excinfo.value.text == text

    @pytest.mark.parametrize("text", ["١.٠.٠", "1.٥.0", "1.5.0-alpha٠٩"])
    def test_non_ascii_digits_are_malformed(self, text):
        with pytest.raises(MalformedVersion):
            FormatVersion.parse(text)

    def test_non_string_is_malformed(self):
        with pytest.raises(MalformedVersion):
            FormatVersion.parse(1.5)

    def test_malformed_is_a_value_error(self):
        with pytest.raises(ValueError):
            FormatVersion.parse("nope")


# =========================================================================
# RENDERING
# =========================================================================


class TestStr:
    """Tests for the canonical text form."""

    @pytest.mark.parametrize(
        "text", ["0.0.0", "1.5.0-alpha09", "1.7.0-beta02", "2.0.0-rc", "3.1.4-beta10"]
    )
    def test_round_trip(self, text):
        assert str(FormatVersion.parse(text)) == text

    def test_constructed_prerelease_renders_number(self):
        assert str(FormatVersion(1, 0, 0, "beta", 2)) == "1.0.0-beta2"

    def test_zero(self):
        assert str(FormatVersion.ZERO) == "0.0.0"


# =========================================================================
# ORDERING
# =========================================================================


class TestOrdering:
    """Tests for the total order."""

    def test_numeric_fields_compare_first(self):
        assert FormatVersion.parse("1.9.9") < FormatVersion.parse("2.0.0-alpha01")
        assert FormatVersion.parse("1.5.0") < FormatVersion.parse("1.10.0")
        assert FormatVersion.parse("1.5.2") > FormatVersion.parse("1.5.1")

    def test_release_is_greater_than_prerelease(self):
        assert FormatVersion.parse("1.5.0") > FormatVersion.parse("1.5.0-alpha09")
        assert FormatVersion.parse("1.5.0") > FormatVersion.parse("1.5.0-rc99")

    def test_prerelease_label_then_number(self):
        assert FormatVersion.parse("1.7.0-alpha10") < FormatVersion.parse("1.7.0-beta02")
        assert FormatVersion.parse("1.7.0-beta01") < FormatVersion.parse("1.7.0-beta02")
        assert FormatVersion.parse("1.7.0-beta2") < FormatVersion.parse("1.7.0-beta10")

    def test_missing_prerelease_number_sorts_first(self):
        assert FormatVersion.parse("1.0.0-beta") < FormatVersion.parse("1.0.0-beta0")

    def test_zero_padding_does_not_affect_equality(self):
        assert FormatVersion.parse("1.5.0-alpha09") == FormatVersion.parse("1.5.0-alpha9")
        assert hash(FormatVersion.parse("1.5.0-alpha09")) == hash(
            FormatVersion.parse("1.5.0-alpha9")
        )

    def test_sorting(self):
        texts = ["1.7.0-beta02", "0.0.0", "1.5.0", "1.5.0-alpha09", "1.7.0-alpha01"]
        ordered = sorted(FormatVersion.parse(text) for text in texts)
        assert [str(v) for v in ordered] == [
            "0.0.0",
            "1.5.0-alpha09",
            "1.5.0",
            "1.7.0-alpha01",
            "1.7.0-beta02",
        ]

    def test_compare(self):
        assert compare("1.0.0", "1.0.1") == -1
        assert compare("1.0.0", "1.0.0") == 0
        assert compare(FormatVersion.parse("2.0.0"), "1.7.0-beta02") == 1

    def test_comparison_with_other_types_is_rejected(self):
        with pytest.raises(TypeError):
            _ = FormatVersion.ZERO < "0.0.1"


class TestCoerce:
    """Tests for coerce_version."""

    def test_passes_versions_through(self):
        version = FormatVersion(1, 2, 3)
        assert coerce_version(version) is version

    def test_parses_text(self):
        assert coerce_version("1.2.3") == FormatVersion(1, 2, 3)
