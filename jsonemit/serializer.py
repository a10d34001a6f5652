"""Serialize Python values as JSON onto a binary writer."""

from __future__ import annotations

import dataclasses
import enum
import io
import math
from collections.abc import Mapping, Sequence, Set
from decimal import Decimal
from typing import Any, Iterable

from jsonemit.escape import format_escaped_str
from jsonemit.formatter import CompactFormatter, Formatter, PrettyFormatter


class ErrorCode(enum.Enum):
    """Reasons a value cannot be serialized."""

    KEY_MUST_BE_A_STRING = "key must be a string"
    FLOAT_KEY_MUST_BE_FINITE = "float key must be finite"
    UNSUPPORTED_TYPE = "unsupported type"
    IO = "io error"


class SerializationError(Exception):
    """Raised when a value cannot be written as JSON."""

    def __init__(self, code: ErrorCode, message: str | None = None) -> None:
        self.code = code
        self.message = message if message is not None else code.value
        super().__init__(self.message)


class Serializer:
    """Writes Python values as JSON through a formatter onto a binary writer."""

    def __init__(self, writer: Any, formatter: Formatter | None = None) -> None:
        self._writer = writer
        self._formatter = formatter if formatter is not None else CompactFormatter()

    @classmethod
    def pretty(cls, writer: Any) -> Serializer:
        """Create a serializer that pretty prints with two-space indentation."""
        return cls(writer, PrettyFormatter())

    def into_inner(self) -> Any:
        """Return the underlying writer."""
        return self._writer

    def serialize(self, value: Any) -> None:
        """Write ``value`` as JSON."""
        try:
            self._write_value(value)
        except OSError as exc:
            raise SerializationError(ErrorCode.IO, str(exc)) from exc

    def _write_value(self, value: Any) -> None:
        fmt, out = self._formatter, self._writer
        if value is None:
            fmt.write_null(out)
        elif isinstance(value, bool):
            fmt.write_bool(out, value)
        elif isinstance(value, enum.Enum):
            format_escaped_str(out, fmt, value.name)
        elif isinstance(value, int):
            fmt.write_int(out, value)
        elif isinstance(value, float):
            if math.isfinite(value):
                fmt.write_float(out, value)
            else:
                fmt.write_null(out)
        elif isinstance(value, Decimal):
            if value.is_finite():
                fmt.write_number_str(out, str(value))
            else:
                fmt.write_null(out)
        elif isinstance(value, str):
            format_escaped_str(out, fmt, value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            fmt.write_byte_array(out, bytes(value))
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            self._write_object(
                (field.name, getattr(value, field.name))
                for field in dataclasses.fields(value)
            )
        elif isinstance(value, Mapping):
            self._write_object(value.items())
        elif isinstance(value, (Sequence, Set)):
            self._write_array(value)
        else:
            raise SerializationError(
                ErrorCode.UNSUPPORTED_TYPE,
                f"cannot serialize value of type {type(value).__name__}",
            )

    def _write_array(self, items: Iterable[Any]) -> None:
        fmt, out = self._formatter, self._writer
        fmt.begin_array(out)
        first = True
        for item in items:
            fmt.begin_array_value(out, first)
            first = False
            self._write_value(item)
            fmt.end_array_value(out)
        fmt.end_array(out)

    def _write_object(self, entries: Iterable[tuple[Any, Any]]) -> None:
        fmt, out = self._formatter, self._writer
        fmt.begin_object(out)
        first = True
        for key, item in entries:
            fmt.begin_object_key(out, first)
            first = False
            self._write_key(key)
            fmt.end_object_key(out)
            fmt.begin_object_value(out)
            self._write_value(item)
            fmt.end_object_value(out)
        fmt.end_object(out)

    def _write_key(self, key: Any) -> None:
        fmt, out = self._formatter, self._writer
        if isinstance(key, str):
            format_escaped_str(out, fmt, key)
        elif isinstance(key, enum.Enum):
            format_escaped_str(out, fmt, key.name)
        elif isinstance(key, bool):
            fmt.begin_string(out)
            fmt.write_bool(out, key)
            fmt.end_string(out)
        elif isinstance(key, int):
            fmt.begin_string(out)
            fmt.write_int(out, key)
            fmt.end_string(out)
        elif isinstance(key, float):
            if not math.isfinite(key):
                raise SerializationError(ErrorCode.FLOAT_KEY_MUST_BE_FINITE)
            fmt.begin_string(out)
            fmt.write_float(out, key)
            fmt.end_string(out)
        else:
            raise SerializationError(ErrorCode.KEY_MUST_BE_A_STRING)


def to_writer(writer: Any, value: Any) -> None:
    """Write ``value`` as compact JSON to a binary writer."""
    Serializer(writer).serialize(value)


def to_writer_pretty(writer: Any, value: Any) -> None:
    """Write ``value`` as pretty-printed JSON to a binary writer."""
    Serializer.pretty(writer).serialize(value)


def to_bytes(value: Any) -> bytes:
    """Return ``value`` as compact JSON bytes."""
    buffer = io.BytesIO()
    to_writer(buffer, value)
    return buffer.getvalue()


def to_bytes_pretty(value: Any) -> bytes:
    """Return ``value`` as pretty-printed JSON bytes."""
    buffer = io.BytesIO()
    to_writer_pretty(buffer, value)
    return buffer.getvalue()


def to_string(value: Any) -> str:
    """Return ``value`` as a compact JSON string."""
    return to_bytes(value).decode("utf-8")


def to_string_pretty(value: Any) -> str:
    """Return ``value`` as a pretty-printed JSON string."""
    return to_bytes_pretty(value).decode("utf-8")