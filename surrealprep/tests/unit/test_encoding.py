"""Tests for literal escaping and value encoding.

Run with: uv run pytest surrealprep/tests/unit/test_encoding.py
"""

from datetime import datetime
from decimal import Decimal

import pytest
from surrealdb import RecordID

from surrealprep.query.encoding import encode, escape


# =============================================================================
# Escaping
# =============================================================================


@pytest.mark.unit
class TestEscape:
    """Tests for escape()."""

    def test_escapes_single_quote(self):
        assert escape("O'Brien") == r"O\'Brien"

    def test_escapes_double_quotes(self):
        assert escape('say "hi"') == r"say \"hi\""

    def test_escapes_both_kinds(self):
        assert escape("it's \"x\"") == r"it\'s \"x\""

    def test_coerces_non_text(self):
        assert escape(42) == "42"
        assert escape(None) == "None"

    def test_text_without_quotes_unchanged(self):
        assert escape("plain text, no quotes") == "plain text, no quotes"

    def test_escaped_quote_before_unescaped_quote_left_alone(self):
        """An escaped pair is skipped while scanning up to a later bare quote."""
        assert escape(r"a\'b'") == r"a\'b\'"

    def test_not_idempotent(self):
        """Escaping twice escapes the backslash-quote pair again."""
        once = escape("O'Brien")
        twice = escape(once)

        assert once == r"O\'Brien"
        assert twice == r"O\\'Brien"
        assert twice != once


# =============================================================================
# Encoding
# =============================================================================


@pytest.mark.unit
class TestEncodeScalars:
    """Tests for encode() on scalar values."""

    def test_none_is_null(self):
        assert encode(None) == "null"

    def test_numbers_are_bare(self):
        assert encode(42) == "42"
        assert encode(-7) == "-7"
        assert encode(3.5) == "3.5"
        assert encode(Decimal("1.50")) == "1.50"

    @pytest.mark.parametrize(
        "value", [float("nan"), float("inf"), float("-inf"), Decimal("NaN"), Decimal("-Infinity")]
    )
    def test_non_finite_numbers_are_null(self, value):
        assert encode(value) == "null"

    def test_large_and_small_floats_have_no_exponent(self):
        assert encode(1e20) == "100000000000000000000"
        assert encode(1.5e-7) == "0.00000015"
        assert encode(Decimal("1E+3")) == "1000"

    def test_booleans_are_bare(self):
        assert encode(True) == "true"
        assert encode(False) == "false"

    def test_text_is_quoted_and_escaped(self):
        assert encode("O'Brien") == r'"O\'Brien"'
        assert encode('a "b"') == r'"a \"b\""'
        assert encode("") == '""'

    def test_record_id_is_bare(self, video_rid):
        assert encode(video_rid) == "video:abc123"


@pytest.mark.unit
class TestEncodeSequences:
    """Tests for encode() on lists and tuples."""

    def test_list(self):
        assert encode([1, "a"]) == '[1,"a"]'

    def test_empty_list(self):
        assert encode([]) == "[]"

    def test_nested(self):
        assert encode([[1, 2], [None, True]]) == "[[1,2],[null,true]]"

    def test_tuple_encodes_like_list(self):
        assert encode((1, False)) == "[1,false]"

    def test_record_ids_in_list(self):
        rids = [RecordID("topic", "ai"), RecordID("topic", "ml")]
        assert encode(rids) == "[topic:ai,topic:ml]"

    def test_self_containing_list_terminates(self):
        items = [1]
        items.append(items)

        assert encode(items) == "[1,null]"

    def test_shared_list_encoded_in_full_each_time(self):
        shared = [1, 2]
        assert encode([shared, shared]) == "[[1,2],[1,2]]"


@pytest.mark.unit
class TestEncodeFallback:
    """Tests for the generic JSON fallback."""

    def test_mapping(self):
        assert encode({"a": 1, "b": [1, 2]}) == '{"a":1,"b":[1,2]}'

    def test_mapping_with_record_id(self):
        assert encode({"owner": RecordID("user", "tobie")}) == '{"owner":"user:tobie"}'

    def test_datetime(self):
        assert encode({"at": datetime(2024, 1, 1)}) == '{"at":"2024-01-01T00:00:00"}'

    def test_plain_object(self):
        class Point:
            def __init__(self):
                self.x = 1
                self.y = 2
                self._hidden = 3

        assert encode(Point()) == '{"x":1,"y":2}'

    def test_opaque_object_never_fails(self):
        encoded = encode(object())
        assert encoded.startswith('"<object object')

    def test_cyclic_mapping_terminates(self):
        node = {"name": "n"}
        node["self"] = node

        assert encode(node) == '{"name":"n","self":null}'

    def test_shared_mapping_written_in_full(self):
        """A sub-object shared by two keys is not a cycle and keeps its data."""
        z = {"name": "x"}

        assert encode({"owner": z, "editor": z}) == '{"owner":{"name":"x"},"editor":{"name":"x"}}'

    def test_shared_record_keeps_fields(self, video_rid):
        z = {"id": video_rid, "title": "A"}
        expected = f'{{"id":"{video_rid}","title":"A"}}'

        assert encode({"a": z, "b": [z]}) == f'{{"a":{expected},"b":[{expected}]}}'

    def test_list_inside_mapping_back_reference(self):
        items = []
        items.append({"items": items})

        assert encode(items) == '[{"items":null}]'

    def test_non_finite_float_inside_mapping(self):
        assert encode({"a": float("nan")}) == '{"a":null}'

    def test_deterministic_for_equal_inputs(self):
        def build():
            return {"a": [1, {"b": "x"}], "c": None}

        assert encode(build()) == encode(build())
