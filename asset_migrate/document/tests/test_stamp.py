"""Tests for reading and writing format-version stamps."""

# pylint: disable=missing-function-docstring

import pytest

from asset_migrate.document import (
    DEFAULT_VERSION_KEY,
    MappingNode,
    ScalarNode,
    read_stamp,
    wrap,
    write_stamp,
)
from asset_migrate.errors import MalformedVersion
from asset_migrate.versioning import FormatVersion


class TestReadStamp:
    """Tests for read_stamp."""

    def test_reads_version(self):
        doc = wrap({"SerializedVersion": {"Xenko": "1.5.0-alpha09"}})
        assert read_stamp(doc, "Xenko") == FormatVersion.parse("1.5.0-alpha09")

    def test_missing_field_defaults_to_zero(self):
        assert read_stamp(wrap({"FontName": "Arial"}), "Xenko") == FormatVersion.ZERO

    def test_missing_schema_defaults_to_zero(self):
        doc = wrap({"SerializedVersion": {"Other": "2.0.0"}})
        assert read_stamp(doc, "Xenko") == FormatVersion.ZERO

    def test_null_stamp_counts_as_missing(self):
        doc = wrap({"SerializedVersion": {"Xenko": None}})
        assert read_stamp(doc, "Xenko") == FormatVersion.ZERO

    def test_custom_default(self):
        default = FormatVersion.parse("1.0.0")
        assert read_stamp(MappingNode(), "Xenko", default=default) is default
        assert read_stamp(MappingNode(), "Xenko", default=None) is None

    def test_custom_key(self):
        doc = wrap({"Versions": {"Xenko": "1.0.0"}})
        assert read_stamp(doc, "Xenko", key="Versions") == FormatVersion(1, 0, 0)
        assert read_stamp(doc, "Xenko") == FormatVersion.ZERO

    def test_malformed_text(self):
        doc = wrap({"SerializedVersion": {"Xenko": "one.two"}})
        with pytest.raises(MalformedVersion) as excinfo:
            read_stamp(doc, "Xenko")
        assert excinfo.value.schema_name == "Xenko"
        assert excinfo.value.text == "one.two"

    def test_numeric_stamp_is_malformed(self):
        doc = wrap({"SerializedVersion": {"Xenko": 1.5}})
        with pytest.raises(MalformedVersion):
            read_stamp(doc, "Xenko")

    def test_stamp_field_must_be_a_mapping(self):
        doc = wrap({"SerializedVersion": "1.5.0"})
        with pytest.raises(MalformedVersion):
            read_stamp(doc, "Xenko")

    def test_nested_stamp_value_is_malformed(self):
        doc = wrap({"SerializedVersion": {"Xenko": {"major": 1}}})
        with pytest.raises(MalformedVersion):
            read_stamp(doc, "Xenko")


class TestWriteStamp:
    """Tests for write_stamp."""

    def test_creates_field_first(self):
        doc = wrap({"FontName": "Arial"})
        written = write_stamp(doc, "Xenko", "1.5.0-alpha09")
        assert written == FormatVersion.parse("1.5.0-alpha09")
        assert doc.keys() == [DEFAULT_VERSION_KEY, "FontName"]
        assert doc.get(DEFAULT_VERSION_KEY).get("Xenko") == ScalarNode("1.5.0-alpha09")

    def test_updates_in_place(self):
        doc = wrap({"FontName": "Arial", "SerializedVersion": {"Xenko": "0.0.1"}})
        write_stamp(doc, "Xenko", FormatVersion.parse("1.7.0-beta02"))
        assert doc.keys() == ["FontName", "SerializedVersion"]
        assert read_stamp(doc, "Xenko") == FormatVersion.parse("1.7.0-beta02")

    def test_keeps_other_schemas(self):
        doc = wrap({"SerializedVersion": {"Other": "2.0.0"}})
        write_stamp(doc, "Xenko", "1.0.0")
        assert read_stamp(doc, "Other") == FormatVersion(2, 0, 0)
        assert read_stamp(doc, "Xenko") == FormatVersion(1, 0, 0)

    def test_preserves_zero_padding(self):
        doc = MappingNode()
        write_stamp(doc, "Xenko", "1.5.0-alpha09")
        assert doc.get("SerializedVersion").get("Xenko").value == "1.5.0-alpha09"

    def test_rejects_malformed(self):
        with pytest.raises(MalformedVersion):
            write_stamp(MappingNode(), "Xenko", "latest")
