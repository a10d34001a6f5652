"""String escaping for JSON output."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any

_HEX_DIGITS = b"0123456789abcdef"

_ESCAPE_RE = re.compile(r'[\x00-\x1f"\\]')


class EscapeKind(enum.Enum):
    """The kinds of character escape a JSON string may contain."""

    QUOTE = "quote"
    REVERSE_SOLIDUS = "reverse_solidus"
    SOLIDUS = "solidus"
    BACKSPACE = "backspace"
    FORM_FEED = "form_feed"
    LINE_FEED = "line_feed"
    CARRIAGE_RETURN = "carriage_return"
    TAB = "tab"
    ASCII_CONTROL = "ascii_control"


_SHORT_ESCAPES: dict[EscapeKind, bytes] = {
    EscapeKind.QUOTE: b'\\"',
    EscapeKind.REVERSE_SOLIDUS: b"\\\\",
    EscapeKind.SOLIDUS: b"\\/",
    EscapeKind.BACKSPACE: b"\\b",
    EscapeKind.FORM_FEED: b"\\f",
    EscapeKind.LINE_FEED: b"\\n",
    EscapeKind.CARRIAGE_RETURN: b"\\r",
    EscapeKind.TAB: b"\\t",
}

_BYTE_KINDS: dict[int, EscapeKind] = {
    0x08: EscapeKind.BACKSPACE,
    0x09: EscapeKind.TAB,
    0x0A: EscapeKind.LINE_FEED,
    0x0C: EscapeKind.FORM_FEED,
    0x0D: EscapeKind.CARRIAGE_RETURN,
    0x22: EscapeKind.QUOTE,
    0x5C: EscapeKind.REVERSE_SOLIDUS,
}


def needs_escape(byte: int) -> bool:
    """Return True if the byte must be escaped inside a JSON string."""
    return 0 <= byte < 0x20 or byte in (0x22, 0x5C)


@dataclass(frozen=True)
class CharEscape:
    """A single character escape; ``byte`` is set only for ASCII control escapes."""

    kind: EscapeKind
    byte: int | None = None

    def __post_init__(self) -> None:
        if self.kind is EscapeKind.ASCII_CONTROL:
            if self.byte is None or not 0 <= self.byte < 0x20:
                raise ValueError("an ASCII control escape needs a byte below 0x20")
        elif self.byte is not None:
            raise ValueError(f"{self.kind.name} escape takes no byte")

    @classmethod
    def from_byte(cls, byte: int) -> CharEscape:
        """Return the escape used for ``byte``; raise ValueError if it needs none."""
        if not needs_escape(byte):
            raise ValueError(f"byte {byte!r} does not need escaping")
        kind = _BYTE_KINDS.get(byte)
        if kind is None:
            return cls(EscapeKind.ASCII_CONTROL, byte)
        return cls(kind)

    def encode(self) -> bytes:
        """Return the default JSON spelling of this escape."""
        if self.kind is EscapeKind.ASCII_CONTROL:
            assert self.byte is not None
            return b"\\u00" + bytes(
                (_HEX_DIGITS[self.byte >> 4], _HEX_DIGITS[self.byte & 0xF])
            )
        return _SHORT_ESCAPES[self.kind]


def format_escaped_str(writer: Any, formatter: Any, value: str) -> None:
    """Write ``value`` as a quoted, escaped JSON string through ``formatter``."""
    formatter.begin_string(writer)
    format_escaped_str_contents(writer, formatter, value)
    formatter.end_string(writer)


def format_escaped_str_contents(writer: Any, formatter: Any, value: str) -> None:
    """Write the escaped contents of ``value`` without the surrounding quotes."""
    start = 0
    for match in _ESCAPE_RE.finditer(value):
        index = match.start()
        if start < index:
            formatter.write_string_fragment(writer, value[start:index])
        formatter.write_char_escape(writer, CharEscape.from_byte(ord(match.group())))
        start = index + 1
    if start < len(value):
        formatter.write_string_fragment(writer, value[start:])