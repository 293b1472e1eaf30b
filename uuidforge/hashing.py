"""Digests of a namespace and a name, truncated to UUID size."""

import hashlib

__all__ = ["md5_hash", "sha1_hash"]

_UUID_SIZE = 16


def md5_hash(namespace: bytes, name: bytes) -> bytes:
    """Return the first 16 bytes of the MD5 digest of ``namespace + name``."""
    hasher = hashlib.md5(usedforsecurity=False)
    hasher.update(namespace)
    hasher.update(name)
    return hasher.digest()[:_UUID_SIZE]


def sha1_hash(namespace: bytes, name: bytes) -> bytes:
    """Return the first 16 bytes of the SHA-1 digest of ``namespace + name``."""
    hasher = hashlib.sha1(usedforsecurity=False)
    hasher.update(namespace)
    hasher.update(name)
    return hasher.digest()[:_UUID_SIZE]