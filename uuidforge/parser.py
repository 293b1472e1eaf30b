"""Parsing UUIDs from their text forms: simple, hyphenated, braced and URN."""

from __future__ import annotations

import string
import uuid

__all__ = [
    "ParseError",
    "parse_str",
    "try_parse",
    "try_parse_ascii",
    "parse_simple",
    "parse_hyphenated",
    "parse_braced",
    "parse_urn",
]

_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")
_HEX_CHARS = frozenset(string.hexdigits)
_URN_PREFIX = "urn:uuid:"
_HYPHEN_POSITIONS = (8, 13, 18, 23)
_BLOCK_STARTS = (0, 9, 14, 19, 24)
_GROUP_LENGTHS = (8, 4, 4, 4, 12)


class ParseError(ValueError):
    """Raised when text cannot be parsed as a UUID.

    ``kind`` is one of ``"simple_length"``, ``"char"``, ``"group_count"``,
    ``"group_length"``, ``"invalid_utf8"`` or ``"other"``. Indexes are
    1-based positions in the input.
    """

    def __init__(
        self,
        kind: str,
        *,
        character: str | None = None,
        index: int | None = None,
        length: int | None = None,
        group: int | None = None,
        count: int | None = None,
    ) -> None:
        self.kind = kind
        self.character = character
        self.index = index
        self.length = length
        self.group = group
        self.count = count
        super().__init__(self._message())

    def _fields(self) -> tuple:
        return (self.kind, self.character, self.index, self.length, self.group, self.count)

    def _message(self) -> str:
        if self.kind == "simple_length":
            return f"invalid length: expected length 32 for simple format, found {self.length}"
        if self.kind == "char":
            return (
                "invalid character: expected an optional prefix of `urn:uuid:` "
                f"followed by [0-9a-fA-F-], found `{self.character}` at {self.index}"
            )
        if self.kind == "group_count":
            return f"invalid group count: expected 5, found {self.count}"
        if self.kind == "group_length":
            expected = _GROUP_LENGTHS[self.group] if self.group is not None else "?"
            return (
                f"invalid group length in group {self.group}: "
                f"expected {expected}, found {self.length}"
            )
        if self.kind == "invalid_utf8":
            return "non-UTF8 input"
        return "failed to parse a UUID"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParseError):
            return self._fields() == other._fields()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._fields())


def _as_bytes(data: str | bytes | bytearray | memoryview) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected str or bytes, got {type(data).__name__}")


def _hex_to_bytes(chunk: bytes) -> bytes | None:
    if not _HEX_BYTES.issuperset(chunk):
        return None
    return bytes.fromhex(chunk.decode("ascii"))


def _decode_simple(data: bytes) -> bytes | None:
    if len(data) != 32:
        return None
    return _hex_to_bytes(data)


def _decode_hyphenated(data: bytes) -> bytes | None:
    if len(data) != 36:
        return None
    if any(data[pos] != ord("-") for pos in _HYPHEN_POSITIONS):
        return None
    digits = b"".join(
        data[start:start + size] for start, size in zip(_BLOCK_STARTS, _GROUP_LENGTHS)
    )
    return _hex_to_bytes(digits)


def _is_braced(data: bytes) -> bool:
    return len(data) >= 2 and data.startswith(b"{") and data.endswith(b"}")


def _decode_braced(data: bytes) -> bytes | None:
    if len(data) == 38 and _is_braced(data):
        return _decode_hyphenated(data[1:-1])
    return None


def _decode_urn(data: bytes) -> bytes | None:
    if len(data) == 45 and data.startswith(_URN_PREFIX.encode("ascii")):
        return _decode_hyphenated(data[len(_URN_PREFIX):])
    return None


def _decode_any(data: bytes) -> bytes | None:
    size = len(data)
    if size == 32:
        return _decode_simple(data)
    if size == 36:
        return _decode_hyphenated(data)
    if size == 38:
        return _decode_braced(data)
    if size == 45:
        return _decode_urn(data)
    return None


def _diagnose(data: bytes) -> ParseError:
    """Work out why ``data`` failed to parse and describe it."""
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        return ParseError("invalid_utf8")

    if len(text) >= 2 and text.startswith("{") and text.endswith("}"):
        body, offset, simple = text[1:-1], 1, False
    elif text.startswith(_URN_PREFIX):
        body, offset, simple = text[len(_URN_PREFIX):], len(_URN_PREFIX), False
    else:
        body, offset, simple = text, 0, True

    # Every character before the first bad one is ASCII, so character
    # positions equal byte positions here.
    hyphens = []
    for position, character in enumerate(body):
        if character == "-":
            hyphens.append(position)
        elif character not in _HEX_CHARS:
            return ParseError("char", character=character, index=position + offset + 1)

    if not hyphens and simple:
        return ParseError("simple_length", length=len(data))
    if len(hyphens) != 4:
        return ParseError("group_count", count=len(hyphens) + 1)

    for group, (bound, start, next_start) in enumerate(
        zip(hyphens, _BLOCK_STARTS, _BLOCK_STARTS[1:])
    ):
        if bound != next_start - 1:
            return ParseError(
                "group_length", group=group, length=bound - start, index=offset + start + 1
            )

    last_start = _BLOCK_STARTS[4]
    return ParseError(
        "group_length", group=4, length=len(body) - last_start, index=offset + last_start + 1
    )


def _finish(data: bytes, decoded: bytes | None) -> bytes:
    if decoded is None:
        raise _diagnose(data)
    return decoded


def parse_str(text: str) -> uuid.UUID:
    """Parse any supported text form, raising a detailed ParseError on failure."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    data = text.encode("utf-8")
    return uuid.UUID(bytes=_finish(data, _decode_any(data)))


def try_parse(text: str) -> uuid.UUID:
    """Parse any supported text form, raising a generic ParseError on failure."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return try_parse_ascii(text.encode("utf-8"))


def try_parse_ascii(data: bytes | bytearray | memoryview) -> uuid.UUID:
    """Parse a UUID from ASCII bytes, raising a generic ParseError on failure."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected bytes, got {type(data).__name__}")
    decoded = _decode_any(bytes(data))
    if decoded is None:
        raise ParseError("other")
    return uuid.UUID(bytes=decoded)


def parse_simple(data: str | bytes | bytearray | memoryview) -> bytes:
    """Decode 32 hex digits into 16 bytes."""
    raw = _as_bytes(data)
    return _finish(raw, _decode_simple(raw))


def parse_hyphenated(data: str | bytes | bytearray | memoryview) -> bytes:
    """Decode the 8-4-4-4-12 hyphenated form into 16 bytes."""
    raw = _as_bytes(data)
    return _finish(raw, _decode_hyphenated(raw))


def parse_braced(data: str | bytes | bytearray | memoryview) -> bytes:
    """Decode the ``{...}`` braced hyphenated form into 16 bytes."""
    raw = _as_bytes(data)
    return _finish(raw, _decode_braced(raw))


def parse_urn(data: str | bytes | bytearray | memoryview) -> bytes:
    """Decode the ``urn:uuid:`` prefixed hyphenated form into 16 bytes."""
    raw = _as_bytes(data)
    return _finish(raw, _decode_urn(raw))