"""Random integers drawn from the operating system's secure random source."""

import os
import sys

__all__ = ["random_u128", "random_u64", "random_u16"]


def _random_int(size: int) -> int:
    try:
        data = os.urandom(size)
    except OSError as err:
        raise RuntimeError(f"could not retrieve random bytes for uuid: {err}") from err
    return int.from_bytes(data, sys.byteorder)


def random_u128() -> int:
    """Return a random unsigned 128-bit integer."""
    return _random_int(16)


def random_u64() -> int:
    """Return a random unsigned 64-bit integer."""
    return _random_int(8)


def random_u16() -> int:
    """Return a random unsigned 16-bit integer."""
    return _random_int(2)