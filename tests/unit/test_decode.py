"""Unit tests for reply decoding."""

from __future__ import annotations

from typing import Any, Optional

import pytest
from pydantic import BaseModel

from resp_mapper.errors import ConversionError, ResponseError
from resp_mapper.protocol.args import CommandArgs
from resp_mapper.protocol.decode import decode
from resp_mapper.protocol.values import (
    ArrayValue,
    IntegerValue,
    MapValue,
    Value,
    array,
    bulk,
    double,
    error,
    integer,
    nil,
    simple,
    to_value,
)


class Profile(BaseModel):
    name: str
    age: int


class Point:
    """User type joining the decoding capability."""

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    @classmethod
    def from_value(cls, value: Any) -> Point:
        x, y = decode(value, tuple[int, int])
        return cls(x, y)


class TestScalars:
    """Test scalar targets."""

    def test_bool_from_integer(self):
        """Non-zero should be True and zero False."""
        assert decode(integer(1), bool) is True
        assert decode(integer(2), bool) is True
        assert decode(integer(0), bool) is False

    def test_bool_rejects_string(self):
        """Only integer replies should decode as bool."""
        with pytest.raises(ConversionError):
            decode(bulk("1"), bool)

    @pytest.mark.parametrize("number", [0, 1, -1, -2, 2**63 - 1, -(2**63)])
    def test_int_round_trip(self, number):
        """An encoded integer should decode back to itself, sentinels included."""
        (token,) = CommandArgs().arg(number)
        assert decode(integer(number), int) == number
        assert decode(bulk(token), int) == number

    def test_int_from_bulk_rejects_garbage(self):
        """Only strict decimal text should decode as int."""
        for raw in (b"12a", b" 12", b"1_000", b"", b"1.0"):
            with pytest.raises(ConversionError):
                decode(bulk(raw), int)

    def test_int_rejects_double(self):
        """Doubles should not be truncated into ints."""
        with pytest.raises(ConversionError):
            decode(double(1.0), int)

    def test_float(self):
        """Doubles, integers and numeric strings should decode as float."""
        assert decode(double(1.5), float) == 1.5
        assert decode(integer(2), float) == 2.0
        assert decode(bulk("3.25"), float) == 3.25
        with pytest.raises(ConversionError):
            decode(bulk("abc"), float)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (b"-0.5", -0.5),
            (b"1e3", 1000.0),
            (b".25", 0.25),
            (b"+inf", float("inf")),
            (b"-inf", float("-inf")),
        ],
    )
    def test_float_text_forms(self, raw, expected):
        """Numeric text as the store renders it should decode as float."""
        assert decode(bulk(raw), float) == expected

    @pytest.mark.parametrize("raw", [b" 1_0 ", b"1_000.5", b" 2.5", b"2.5\n", b"infinity", b""])
    def test_float_rejects_loose_text(self, raw):
        """Whitespace, digit separators and spelled-out forms should not be coerced."""
        with pytest.raises(ConversionError):
            decode(bulk(raw), float)

    def test_same_bulk_as_bytes_or_str(self):
        """The requested type should decide between bytes and text."""
        value = bulk("ziplist")
        assert decode(value, bytes) == b"ziplist"
        assert decode(value, str) == "ziplist"

    def test_str_rejects_invalid_utf8(self):
        """Non-UTF-8 payloads should fail as text but succeed as bytes."""
        value = bulk(b"\x80\xff")
        assert decode(value, bytes) == b"\x80\xff"
        with pytest.raises(ConversionError, match="UTF-8"):
            decode(value, str)

    def test_str_from_simple_string(self):
        """Status replies should decode as text."""
        assert decode(simple("OK"), str) == "OK"

    def test_str_rejects_integer(self):
        """Integers should not be silently stringified."""
        with pytest.raises(ConversionError):
            decode(integer(1), str)

    def test_scalar_rejects_array(self):
        """An array reply must never be treated as a scalar."""
        with pytest.raises(ConversionError, match="array"):
            decode(array([1]), int)


class TestNil:
    """Test nil handling."""

    @pytest.mark.parametrize("target", [str | None, Optional[str], Optional[bytes], int | None])
    def test_nil_into_optional(self, target):
        """Nil should become None for optional targets."""
        assert decode(nil(), target) is None

    @pytest.mark.parametrize("target", [str, bytes, int, bool, float, list[str]])
    def test_nil_into_non_optional(self, target):
        """Nil should fail for non-optional targets."""
        with pytest.raises(ConversionError, match="nil"):
            decode(nil(), target)

    def test_optional_decodes_present_value(self):
        """A present value should decode as the inner type."""
        assert decode(bulk("x"), str | None) == "x"

    def test_optional_element_in_list(self):
        """Optional elements should allow nil inside arrays."""
        assert decode(array(["a", None]), list[str | None]) == ["a", None]


class TestUnitAndPassthrough:
    """Test unit and untyped targets."""

    def test_unit_accepts_any_success(self):
        """Unit should accept any non-error reply."""
        for value in (simple("OK"), integer(1), nil(), array([])):
            assert decode(value, None) is None

    def test_passthrough(self):
        """Value and Any should return the reply untouched."""
        value = array([1, 2])
        assert decode(value, Value) is value
        assert decode(value, Any) is value

    def test_reply_kind_target(self):
        """A reply kind as target should return a matching reply untouched."""
        value = integer(3)
        assert decode(value, IntegerValue) is value

    def test_reply_kind_mismatch_names_kind(self):
        """A mismatched reply kind should fail naming the expected kind."""
        with pytest.raises(ConversionError, match="expected ArrayValue"):
            decode(integer(3), ArrayValue)


class TestErrors:
    """Test error replies."""

    @pytest.mark.parametrize(
        "target",
        [None, int, str, bytes, bool, str | None, list[str], tuple[int, list[str]], Value, Any],
    )
    def test_error_reply_always_fails(self, target):
        """Error replies should raise with the store's text, whatever the target."""
        with pytest.raises(ResponseError) as exc_info:
            decode(error("WRONGTYPE Operation against a key"), target)

        assert str(exc_info.value) == "WRONGTYPE Operation against a key"
        assert exc_info.value.message == "WRONGTYPE Operation against a key"
        assert exc_info.value.code == "WRONGTYPE"

    def test_error_inside_array_fails_whole_decode(self):
        """An error element should fail the array decode."""
        with pytest.raises(ResponseError):
            decode(array([1, error("ERR inner")]), list[int])

    def test_non_ascii_error_text_kept(self):
        """Error text should not be assumed to be ASCII."""
        with pytest.raises(ResponseError, match="clé"):
            decode(error("ERR clé inconnue"), None)


class TestSequences:
    """Test homogeneous sequence targets."""

    def test_list_preserves_order_and_length(self):
        """Array decode should keep order and length exactly."""
        keys = [f"k{i}" for i in range(50)]
        assert decode(array(keys), list[str]) == keys

    def test_empty_array(self):
        """An empty array should decode as an empty container."""
        assert decode(array([]), list[bytes]) == []

    def test_container_chosen_by_caller(self):
        """The caller should pick the concrete container type."""
        value = array(["a", "b", "a"])
        assert decode(value, set[str]) == {"a", "b"}
        assert decode(value, frozenset[str]) == frozenset({"a", "b"})
        assert decode(value, tuple[str, ...]) == ("a", "b", "a")

    def test_bare_list_keeps_values(self):
        """An unparameterised list should keep the raw elements."""
        assert decode(array([1]), list) == [integer(1)]

    def test_partial_failure_fails_whole(self):
        """One bad element should fail the whole conversion."""
        with pytest.raises(ConversionError):
            decode(array([1, 2, "three"]), list[int])

    def test_scalar_into_list_fails(self):
        """A scalar reply should not be wrapped into a list."""
        with pytest.raises(ConversionError):
            decode(bulk("a"), list[str])


class TestFixedTuples:
    """Test positional tuple targets (scan cursor + batch)."""

    def test_cursor_and_batch(self):
        """A two-element array should decode positionally."""
        value = array([b"17", [b"a", b"b"]])
        assert decode(value, tuple[int, list[str]]) == (17, ["a", "b"])

    def test_terminal_empty_batch(self):
        """Cursor 0 with no matches should decode as (0, [])."""
        assert decode(array([b"0", []]), tuple[int, list[str]]) == (0, [])

    def test_too_few_elements(self):
        """Fewer elements than the tuple arity should fail."""
        with pytest.raises(ConversionError, match="2 elements, got 1"):
            decode(array([b"0"]), tuple[int, list[str]])

    def test_too_many_elements(self):
        """More elements than the tuple arity should fail."""
        with pytest.raises(ConversionError):
            decode(array([b"0", [], b"x"]), tuple[int, list[str]])

    def test_batch_must_be_array(self):
        """A scalar in the batch position should fail."""
        with pytest.raises(ConversionError):
            decode(array([b"0", b"a"]), tuple[int, list[str]])


class TestMappings:
    """Test dict and model targets."""

    def test_dict_from_flat_array(self):
        """Flat key/value arrays should decode as dicts."""
        value = array(["name", "ada", "age", "36"])
        assert decode(value, dict[str, str]) == {"name": "ada", "age": "36"}

    def test_dict_from_map(self):
        """Map replies should decode as dicts."""
        value = to_value({"hits": 3})
        assert isinstance(value, MapValue)
        assert decode(value, dict[str, int]) == {"hits": 3}

    def test_dict_odd_array_fails(self):
        """An odd-length array is not a list of pairs."""
        with pytest.raises(ConversionError, match="odd"):
            decode(array(["a", "b", "c"]), dict[str, str])

    def test_model(self):
        """Field/value pairs should validate into a pydantic model."""
        profile = decode(array(["name", "ada", "age", "36"]), Profile)
        assert profile == Profile(name="ada", age=36)

    def test_model_validation_error(self):
        """Invalid fields should surface as a conversion error."""
        with pytest.raises(ConversionError):
            decode(array(["name", "ada"]), Profile)


class TestCustomTargets:
    """Test extension points and unsupported targets."""

    def test_from_value_classmethod(self):
        """Classes with from_value should decode themselves."""
        point = decode(array([1, 2]), Point)
        assert (point.x, point.y) == (1, 2)

    def test_ambiguous_union_rejected(self):
        """Non-optional unions would require sniffing and are rejected."""
        with pytest.raises(TypeError):
            decode(integer(1), int | str)

    def test_unknown_target_rejected(self):
        """Types without a decoding should raise TypeError."""
        with pytest.raises(TypeError):
            decode(integer(1), complex)
