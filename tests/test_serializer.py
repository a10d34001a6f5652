import enum
import io
import json
import math
from dataclasses import dataclass
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsonemit.formatter import PrettyFormatter
from jsonemit.serializer import (
    ErrorCode,
    SerializationError,
    Serializer,
    to_bytes,
    to_bytes_pretty,
    to_string,
    to_string_pretty,
    to_writer,
    to_writer_pretty,
)


class Color(enum.Enum):
    RED = 1
    GREEN = 2


@dataclass
class Point:
    x: int
    y: int
    label: str


json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(),
    lambda children: st.lists(children, max_size=5)
    | st.dictionaries(st.text(), children, max_size=5),
    max_leaves=20,
)


def test_scalars():
    assert to_string(None) == "null"
    assert to_string(True) == "true"
    assert to_string(False) == "false"


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_floats_become_null(value):
    assert to_string(value) == "null"


@given(st.integers())
def test_int_round_trip(value):
    assert json.loads(to_string(value)) == value


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_float_round_trip(value):
    assert json.loads(to_string(value)) == value


@given(st.text())
def test_string_round_trip(value):
    text = to_string(value)
    assert json.loads(text) == value
    assert not any(ord(ch) < 0x20 for ch in text)


@given(json_values)
def test_structure_round_trip(value):
    compact = to_string(value)
    pretty = to_string_pretty(value)
    assert json.loads(compact) == value
    assert json.loads(pretty) == value


@given(json_values)
def test_bytes_match_string(value):
    assert to_bytes(value) == to_string(value).encode("utf-8")
    assert to_bytes_pretty(value) == to_string_pretty(value).encode("utf-8")


def test_compact_has_no_whitespace():
    text = to_string({"a": [1, 2, {"b": None}], "c": "d"})
    assert " " not in text
    assert "\n" not in text


def test_empty_containers_pretty():
    assert to_string_pretty([]) == "[]"
    assert to_string_pretty({}) == "{}"


def test_pretty_layout():
    assert to_string_pretty({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'


def test_custom_indent():
    buffer = io.BytesIO()
    Serializer(buffer, PrettyFormatter(b"\t")).serialize({"k": [1, 2]})
    text = buffer.getvalue().decode()
    assert json.loads(text) == {"k": [1, 2]}
    inner = text.splitlines()[1:-1]
    assert inner and all(line.startswith("\t") for line in inner)


def test_bytes_become_int_array():
    assert json.loads(to_string(b"\x00\x7f\xff")) == [0, 127, 255]
    assert json.loads(to_string(bytearray(b"ab"))) == [97, 98]


def test_tuple_and_set():
    assert json.loads(to_string((1, "x"))) == [1, "x"]
    assert json.loads(to_string({3})) == [3]


def test_enum_value_and_key():
    assert json.loads(to_string(Color.RED)) == "RED"
    assert json.loads(to_string({Color.GREEN: 1})) == {"GREEN": 1}


def test_dataclass_as_object():
    result = json.loads(to_string(Point(1, 2, "p")))
    assert result == {"x": 1, "y": 2, "label": "p"}
    assert list(result) == ["x", "y", "label"]


def test_non_string_keys_quoted():
    assert json.loads(to_string({1: "x"})) == {"1": "x"}
    assert json.loads(to_string({True: "x"})) == {"true": "x"}
    assert json.loads(to_string({1.5: 2})) == {"1.5": 2}


@pytest.mark.parametrize("key", [math.nan, math.inf, -math.inf])
def test_non_finite_float_key(key):
    with pytest.raises(SerializationError) as info:
        to_string({key: 1})
    assert info.value.code is ErrorCode.FLOAT_KEY_MUST_BE_FINITE
    assert str(info.value) == "float key must be finite"


@pytest.mark.parametrize("key", [None, (1, 2), b"ab"])
def test_key_must_be_string(key):
    with pytest.raises(SerializationError) as info:
        to_string({key: 1})
    assert info.value.code is ErrorCode.KEY_MUST_BE_A_STRING
    assert str(info.value) == "key must be a string"


def test_unsupported_type():
    with pytest.raises(SerializationError) as info:
        to_string(object())
    assert info.value.code is ErrorCode.UNSUPPORTED_TYPE


def test_decimal_written_verbatim():
    assert json.loads(to_string(Decimal("1.25")), parse_float=Decimal) == Decimal("1.25")
    assert to_string(Decimal("NaN")) == "null"


def test_to_writer_matches_to_bytes():
    value = {"a": [1, 2.5, "s"], "b": None}
    compact, pretty = io.BytesIO(), io.BytesIO()
    to_writer(compact, value)
    to_writer_pretty(pretty, value)
    assert compact.getvalue() == to_bytes(value)
    assert pretty.getvalue() == to_bytes_pretty(value)


def test_into_inner_returns_writer():
    buffer = io.BytesIO()
    serializer = Serializer.pretty(buffer)
    serializer.serialize([1])
    assert serializer.into_inner() is buffer
    assert json.loads(buffer.getvalue()) == [1]


class _BrokenWriter:
    def write(self, data):
        raise OSError("disk full")


def test_io_error_wrapped():
    with pytest.raises(SerializationError) as info:
        to_writer(_BrokenWriter(), [1])
    assert info.value.code is ErrorCode.IO
    assert isinstance(info.value.__cause__, OSError)