"""Name-based (versions 3 and 5), random (version 4) and custom (version 8) UUIDs."""

from __future__ import annotations

import uuid

from .hashing import md5_hash, sha1_hash
from .rng import random_u128

__all__ = ["new_v3", "new_v4", "new_v5", "new_v8"]

_V4_MASK = 0xFFFFFFFFFFFF4FFFBFFFFFFFFFFFFFFF
_V4_BITS = 0x40008000000000000000

BytesLike = bytes | bytearray | memoryview


def _name_bytes(name: str | BytesLike) -> bytes:
    if isinstance(name, str):
        return name.encode("utf-8")
    if isinstance(name, (bytes, bytearray, memoryview)):
        return bytes(name)
    raise TypeError(f"expected str or bytes, got {type(name).__name__}")


def _namespace_bytes(namespace: uuid.UUID) -> bytes:
    if not isinstance(namespace, uuid.UUID):
        raise TypeError(f"expected a UUID namespace, got {type(namespace).__name__}")
    return namespace.bytes


def _stamp(data: bytes, version: int) -> uuid.UUID:
    """Overwrite the version nibble and the RFC 9562 variant bits."""
    raw = bytearray(data)
    raw[6] = (raw[6] & 0x0F) | (version << 4)
    raw[8] = (raw[8] & 0x3F) | 0x80
    return uuid.UUID(bytes=bytes(raw))


def new_v3(namespace: uuid.UUID, name: str | BytesLike) -> uuid.UUID:
    """Return the MD5-based UUID for ``name`` within ``namespace``.

    Strings are encoded as UTF-8.
    """
    digest = md5_hash(_namespace_bytes(namespace), _name_bytes(name))
    return _stamp(digest, 3)


def new_v4() -> uuid.UUID:
    """Return a random UUID."""
    return uuid.UUID(int=(random_u128() & _V4_MASK) | _V4_BITS)


def new_v5(namespace: uuid.UUID, name: str | BytesLike) -> uuid.UUID:
    """Return the SHA-1-based UUID for ``name`` within ``namespace``.

    Strings are encoded as UTF-8.
    """
    digest = sha1_hash(_namespace_bytes(namespace), _name_bytes(name))
    return _stamp(digest, 5)


def new_v8(buf: BytesLike | list[int] | tuple[int, ...]) -> uuid.UUID:
    """Return a custom UUID made of 16 user bytes with version and variant set."""
    data = bytes(buf)
    if len(data) != 16:
        raise ValueError(f"custom UUID data must be 16 bytes, got {len(data)}")
    return _stamp(data, 8)