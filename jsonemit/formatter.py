"""Formatters that decide how JSON tokens are laid out on a binary writer."""

from __future__ import annotations

import math
import operator
from decimal import Decimal
from typing import ClassVar, Iterable, Protocol

from jsonemit.escape import CharEscape


class _Writer(Protocol):
    def write(self, data: bytes) -> object: ...


def format_float(value: float) -> str:
    """Render a finite float in its shortest round-trip JSON form."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"cannot format non-finite float {value!r}")
    sign = "-" if math.copysign(1.0, value) < 0 else ""
    if value == 0.0:
        return sign + "0.0"

    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    assert isinstance(exponent, int)
    raw = "".join(map(str, digit_tuple))
    digits = raw.rstrip("0")
    exponent += len(raw) - len(digits)
    length = len(digits)
    point = length + exponent

    if 0 <= exponent and point <= 16:
        body = digits + "0" * exponent + ".0"
    elif 0 < point <= 16:
        body = f"{digits[:point]}.{digits[point:]}"
    elif -5 < point <= 0:
        body = "0." + "0" * -point + digits
    elif length == 1:
        body = f"{digits}e{point - 1}"
    else:
        body = f"{digits[0]}.{digits[1:]}e{point - 1}"
    return sign + body


class Formatter:
    """Writes JSON tokens with no extra whitespace; subclasses adjust the layout."""

    #: Bytes written right after every object key; the colon itself is
    #: written by ``begin_object_value``.
    key_terminator: ClassVar[bytes] = b""

    def write_null(self, writer: _Writer) -> None:
        """Write ``null``."""
        writer.write(b"null")

    def write_bool(self, writer: _Writer, value: bool) -> None:
        """Write ``true`` or ``false``."""
        writer.write(b"true" if value else b"false")

    def write_int(self, writer: _Writer, value: int) -> None:
        """Write an integer in decimal."""
        writer.write(str(operator.index(value)).encode("ascii"))

    def write_float(self, writer: _Writer, value: float) -> None:
        """Write a finite float in shortest round-trip form."""
        writer.write(format_float(value).encode("ascii"))

    def write_number_str(self, writer: _Writer, value: str) -> None:
        """Write a number that has already been rendered to text."""
        writer.write(value.encode("utf-8"))

    def begin_string(self, writer: _Writer) -> None:
        """Write the opening quote of a string."""
        writer.write(b'"')

    def end_string(self, writer: _Writer) -> None:
        """Write the closing quote of a string."""
        writer.write(b'"')

    def write_string_fragment(self, writer: _Writer, fragment: str) -> None:
        """Write string contents that need no escaping."""
        writer.write(fragment.encode("utf-8"))

    def write_char_escape(self, writer: _Writer, char_escape: CharEscape) -> None:
        """Write one character escape."""
        writer.write(char_escape.encode())

    def write_byte_array(self, writer: _Writer, value: Iterable[int]) -> None:
        """Write bytes as a JSON array of integers."""
        self.begin_array(writer)
        first = True
        for byte in value:
            self.begin_array_value(writer, first)
            self.write_int(writer, byte)
            self.end_array_value(writer)
            first = False
        self.end_array(writer)

    def begin_array(self, writer: _Writer) -> None:
        """Called before every array."""
        writer.write(b"[")

    def end_array(self, writer: _Writer) -> None:
        """Called after every array."""
        writer.write(b"]")

    def begin_array_value(self, writer: _Writer, first: bool) -> None:
        """Called before every array value; writes a separator if needed."""
        if not first:
            writer.write(b",")

    def end_array_value(self, writer: _Writer) -> None:
        """Called after every array value."""

    def begin_object(self, writer: _Writer) -> None:
        """Called before every object."""
        writer.write(b"{")

    def end_object(self, writer: _Writer) -> None:
        """Called after every object."""
        writer.write(b"}")

    def begin_object_key(self, writer: _Writer, first: bool) -> None:
        """Called before every object key; writes a separator if needed."""
        if not first:
            writer.write(b",")

    def end_object_key(self, writer: _Writer) -> None:
        """Called after every object key; writes ``key_terminator`` if set."""
        if self.key_terminator:
            writer.write(self.key_terminator)

    def begin_object_value(self, writer: _Writer) -> None:
        """Called before every object value; writes the colon."""
        writer.write(b":")

    def end_object_value(self, writer: _Writer) -> None:
        """Called after every object value."""

    def write_raw_fragment(self, writer: _Writer, fragment: str) -> None:
        """Write a raw JSON fragment verbatim."""
        writer.write(fragment.encode("utf-8"))


class CompactFormatter(Formatter):
    """Writes JSON with no extra whitespace."""


class PrettyFormatter(Formatter):
    """Writes indented, human-readable JSON."""

    def __init__(self, indent: bytes | str = b"  ") -> None:
        self.indent = indent.encode("utf-8") if isinstance(indent, str) else bytes(indent)
        self.current_indent = 0
        self.has_value = False

    def _write_indent(self, writer: _Writer) -> None:
        if self.current_indent and self.indent:
            writer.write(self.indent * self.current_indent)

    def _close(self, writer: _Writer, closer: bytes) -> None:
        if self.current_indent == 0:
            raise ValueError("closing a container that was never opened")
        self.current_indent -= 1
        if self.has_value:
            writer.write(b"\n")
            self._write_indent(writer)
        writer.write(closer)

    def begin_array(self, writer: _Writer) -> None:
        self.current_indent += 1
        self.has_value = False
        writer.write(b"[")

    def end_array(self, writer: _Writer) -> None:
        self._close(writer, b"]")

    def begin_array_value(self, writer: _Writer, first: bool) -> None:
        writer.write(b"\n" if first else b",\n")
        self._write_indent(writer)

    def end_array_value(self, writer: _Writer) -> None:
        self.has_value = True

    def begin_object(self, writer: _Writer) -> None:
        self.current_indent += 1
        self.has_value = False
        writer.write(b"{")

    def end_object(self, writer: _Writer) -> None:
        self._close(writer, b"}")

    def begin_object_key(self, writer: _Writer, first: bool) -> None:
        writer.write(b"\n" if first else b",\n")
        self._write_indent(writer)

    def begin_object_value(self, writer: _Writer) -> None:
        writer.write(b": ")

    def end_object_value(self, writer: _Writer) -> None:
        self.has_value = True