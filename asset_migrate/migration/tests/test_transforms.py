"""Tests for the field-level transform helpers."""

# pylint: disable=missing-function-docstring

import logging

import pytest

from asset_migrate.document import EMPTY, ScalarNode, wrap
from asset_migrate.errors import TransformFailed
from asset_migrate.migration import invert_bool_rename, materialize_enum, read_legacy_bool

# ======================================================================
# read_legacy_bool
# ======================================================================


def test_read_legacy_bool_absent(context):
    assert read_legacy_bool(wrap({}), "IsDynamic", context) is None


def test_read_legacy_bool_null_counts_as_absent(context):
    assert read_legacy_bool(wrap({"IsDynamic": None}), "IsDynamic", context) is None


def test_read_legacy_bool_value(context):
    assert read_legacy_bool(wrap({"IsDynamic": False}), "IsDynamic", context) is False


@pytest.mark.parametrize("value", ["yes", "true", 1, 0.0, ["a"], {"a": 1}])
def test_read_legacy_bool_rejects_non_booleans(context, value):
    with pytest.raises(TransformFailed) as excinfo:
        read_legacy_bool(wrap({"IsDynamic": value}), "IsDynamic", context)
    error = excinfo.value
    assert error.field_name == "IsDynamic"
    assert error.schema_name == "Xenko"
    assert error.file_path == "Assets/Arial.xkfnt"
    assert error.stamped_version == "0.0.0"
    assert error.target_version == "1.7.0-beta02"


# ======================================================================
# invert_bool_rename
# ======================================================================


class TestInvertBoolRename:
    """Tests for the negated rename used by the premultiply upgrade."""

    KEYS = ("NoPremultiply", "IsNotPremultiply")

    def test_converts_and_blanks(self, context):
        doc = wrap({"FontName": "Arial", "NoPremultiply": True})
        assert invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert doc.get("IsPremultiplied") == ScalarNode(False)
        assert doc.get("NoPremultiply") is EMPTY
        assert doc.keys() == ["FontName", "NoPremultiply", "IsPremultiplied"]

    def test_second_alias(self, context):
        doc = wrap({"IsNotPremultiply": False})
        invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert doc.get("IsPremultiplied") == ScalarNode(True)
        assert doc.get("IsNotPremultiply") is EMPTY

    def test_no_alias_present(self, context):
        doc = wrap({"FontName": "Arial"})
        assert not invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert doc == wrap({"FontName": "Arial"})

    def test_last_alias_wins_with_warning(self, context, caplog):
        doc = wrap({"NoPremultiply": True, "IsNotPremultiply": False})
        with caplog.at_level(logging.WARNING):
            invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert doc.get("IsPremultiplied") == ScalarNode(True)
        assert doc.get("NoPremultiply") is EMPTY
        assert doc.get("IsNotPremultiply") is EMPTY
        assert len(context.diagnostics) == 1
        assert "IsNotPremultiply" in context.diagnostics[0]
        assert "Assets/Arial.xkfnt" in caplog.text

    def test_blanked_alias_is_skipped(self, context):
        doc = wrap({"NoPremultiply": True, "IsPremultiplied": True})
        doc.blank("NoPremultiply")
        assert not invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert doc.get("IsPremultiplied") == ScalarNode(True)

    def test_bad_alias_value(self, context):
        doc = wrap({"NoPremultiply": "no"})
        with pytest.raises(TransformFailed) as excinfo:
            invert_bool_rename(doc, self.KEYS, "IsPremultiplied", context)
        assert excinfo.value.field_name == "NoPremultiply"
        assert "IsPremultiplied" not in doc


# ======================================================================
# materialize_enum
# ======================================================================


class TestMaterializeEnum:
    """Tests for the boolean-to-enum conversion used by the font type upgrade."""

    @staticmethod
    def _apply(doc, context):
        return materialize_enum(doc, "IsDynamic", "FontType", "Dynamic", "Static", context)

    @pytest.mark.parametrize("value, label", [(True, "Dynamic"), (False, "Static")])
    def test_converts_and_removes(self, context, value, label):
        doc = wrap({"FontName": "Arial", "IsDynamic": value, "Size": 16.0})
        assert self._apply(doc, context)
        assert doc.get("FontType") == ScalarNode(label)
        assert "IsDynamic" not in doc
        assert doc.keys() == ["FontName", "Size", "FontType"]

    def test_absent(self, context):
        doc = wrap({"FontName": "Arial"})
        assert not self._apply(doc, context)
        assert "FontType" not in doc

    def test_null_is_dropped(self, context):
        doc = wrap({"IsDynamic": None})
        assert not self._apply(doc, context)
        assert len(doc) == 0

    def test_blanked_is_dropped(self, context):
        doc = wrap({"IsDynamic": True})
        doc.blank("IsDynamic")
        assert not self._apply(doc, context)
        assert len(doc) == 0

    def test_existing_enum_conflicts(self, context):
        doc = wrap({"IsDynamic": True, "FontType": "SDF"})
        with pytest.raises(TransformFailed) as excinfo:
            self._apply(doc, context)
        assert excinfo.value.field_name == "FontType"
        assert doc.get("FontType") == ScalarNode("SDF")
        assert doc.get("IsDynamic") == ScalarNode(True)

    def test_bad_legacy_value(self, context):
        doc = wrap({"IsDynamic": "maybe"})
        with pytest.raises(TransformFailed) as excinfo:
            self._apply(doc, context)
        assert excinfo.value.field_name == "IsDynamic"
        assert "FontType" not in doc
