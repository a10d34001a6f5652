# jsonemit

A small JSON serializer that writes Python values straight to a binary
stream (anything with a `write(bytes)` method). The layout of the output is
left to a *formatter*, so the same serializer can produce compact or
indented JSON, and you can change the layout by subclassing `Formatter`.

## Installation

```
pip install jsonemit
```

## Quick use

```python
from jsonemit.serializer import to_string, to_string_pretty, to_bytes

to_string({"a": [1, 2.5, None, True]})
# '{"a":[1,2.5,null,true]}'

print(to_string_pretty({"a": [1, 2]}))
# {
#   "a": [
#     1,
#     2
#   ]
# }

to_bytes("tab\there")
# b'"tab\\there"'
```

`to_bytes` and `to_bytes_pretty` return `bytes`; `to_string` and
`to_string_pretty` return `str`.

## Writing to a stream

```python
import io
from jsonemit.serializer import Serializer, to_writer, to_writer_pretty
from jsonemit.formatter import PrettyFormatter

buf = io.BytesIO()
to_writer(buf, [1, 2, 3])

out = io.BytesIO()
ser = Serializer(out, PrettyFormatter(b"\t"))
ser.serialize({"key": "value"})
data = ser.into_inner().getvalue()
```

`Serializer(writer)` uses a `CompactFormatter` when no formatter is given.
`Serializer.pretty(writer)` makes a serializer that indents with two spaces.
`PrettyFormatter` takes its indent as `bytes` or `str`.

## How values are written

- `None` is `null`; `True` and `False` are `true` and `false`.
- Integers are written in decimal.
- Floats are written in the shortest form that reads back the same, and
  always look like a float: `1.0` stays `1.0`, large and small values use an
  exponent (`1.2e41`). NaN and infinite floats are written as `null`.
  `jsonemit.formatter.format_float` gives this text for a finite float.
- `decimal.Decimal` values are written with their own text; non-finite ones
  as `null`.
- Strings escape `"`, `\` and control characters below U+0020 (`\b`, `\t`,
  `\n`, `\f`, `\r`, otherwise `\u00XX`). Other characters are written
  unchanged as UTF-8.
- Enum members are written as strings holding their name.
- `bytes`, `bytearray` and `memoryview` are written as arrays of integers.
- Mappings and dataclass instances are written as objects, in iteration or
  field order. Other sequences and sets are written as arrays.
- Empty arrays and objects are `[]` and `{}`, in pretty output too.

## Errors

Failures raise `jsonemit.serializer.SerializationError`, whose `code` is an
`ErrorCode`:

- `KEY_MUST_BE_A_STRING`: a mapping key is not a string, enum member,
  boolean, integer or float. Booleans, integers and floats are quoted.
- `FLOAT_KEY_MUST_BE_FINITE`: a float key is NaN or infinite.
- `UNSUPPORTED_TYPE`: a value of a type listed nowhere above.
- `IO`: the writer raised `OSError`.

## Custom formatters

Subclass `Formatter` (or `CompactFormatter`) and override the hooks you
want to change, such as `begin_object_value`, `write_char_escape` or
`write_byte_array`. The `key_terminator` class attribute sets bytes written
after each key. The helpers in `jsonemit.escape` (`format_escaped_str`,
`format_escaped_str_contents`, `CharEscape`, `EscapeKind`, `needs_escape`)
escape strings the same way the serializer does.

## What it does not do

jsonemit only writes JSON. It does not parse or read JSON, has no
value tree type, and comes with no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```