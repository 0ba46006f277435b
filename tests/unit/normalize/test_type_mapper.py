"""Tests for the canonical type mapping.

Tests cover:
- Schema-typed tokens: exact, case-insensitive keywords
- Free-text tokens: substring containment in fixed priority order
- Totality: unknown, missing and non-string tokens map to TEXT
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from specsmith.data.descriptors import CanonicalFieldType, SourceKind
from specsmith.normalize.type_mapper import map_free_text_type, map_schema_type, map_type

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Schema-typed
# ---------------------------------------------------------------------------


class TestSchemaTyped:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("string", CanonicalFieldType.TEXT),
            ("integer", CanonicalFieldType.INTEGER),
            ("INTEGER", CanonicalFieldType.INTEGER),
            ("number", CanonicalFieldType.FLOATING_POINT),
            ("Boolean", CanonicalFieldType.BOOLEAN),
        ],
    )
    def test_known_keywords(self, token: str, expected: CanonicalFieldType) -> None:
        assert map_schema_type(token) is expected

    @pytest.mark.parametrize("token", ["int", "array", "object", "integers", "", None, 5])
    def test_everything_else_is_text(self, token: object) -> None:
        assert map_schema_type(token) is CanonicalFieldType.TEXT


# ---------------------------------------------------------------------------
# Free text
# ---------------------------------------------------------------------------


class TestFreeText:
    def test_int_beats_float(self) -> None:
        assert map_free_text_type("int or float") is CanonicalFieldType.INTEGER

    def test_float_beats_bool(self) -> None:
        assert map_free_text_type("float or bool") is CanonicalFieldType.FLOATING_POINT

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("Integer", CanonicalFieldType.INTEGER),
            ("long", CanonicalFieldType.INTEGER),
            ("Double", CanonicalFieldType.FLOATING_POINT),
            ("floating point", CanonicalFieldType.FLOATING_POINT),
            ("boolean", CanonicalFieldType.BOOLEAN),
            ("string", CanonicalFieldType.TEXT),
            ("date", CanonicalFieldType.TEXT),
        ],
    )
    def test_substring_rules(self, token: str, expected: CanonicalFieldType) -> None:
        assert map_free_text_type(token) is expected

    def test_substring_match_is_not_word_based(self) -> None:
        # "point" contains "int".
        assert map_free_text_type("point") is CanonicalFieldType.INTEGER

    def test_non_strings_are_coerced(self) -> None:
        assert map_free_text_type(None) is CanonicalFieldType.TEXT
        assert map_free_text_type(42) is CanonicalFieldType.TEXT

    @given(st.text(), st.text())
    def test_any_phrase_containing_int_is_integer(self, prefix: str, suffix: str) -> None:
        assert map_free_text_type(f"{prefix}INT{suffix}") is CanonicalFieldType.INTEGER

    @given(st.text(alphabet="acehjkmnpqrsuvwxyz _-"))
    def test_phrases_without_any_needle_are_text(self, token: str) -> None:
        assert map_free_text_type(token) is CanonicalFieldType.TEXT


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class TestMapType:
    def test_dispatches_on_source_kind(self) -> None:
        assert map_type("int", SourceKind.SCHEMA_TYPED) is CanonicalFieldType.TEXT
        assert map_type("int", SourceKind.FREE_TEXT) is CanonicalFieldType.INTEGER

    @given(st.one_of(st.none(), st.text(), st.integers(), st.floats(allow_nan=True)), st.sampled_from(list(SourceKind)))
    def test_never_raises(self, token: object, kind: SourceKind) -> None:
        assert isinstance(map_type(token, kind), CanonicalFieldType)
