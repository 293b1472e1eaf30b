import uuid

import pytest

from uuidforge.hashing import md5_hash, sha1_hash


def _without_version_and_variant(data: bytes) -> bytes:
    masked = bytearray(data)
    masked[6] &= 0x0F
    masked[8] &= 0x3F
    return bytes(masked)


@pytest.mark.parametrize(
    ("namespace", "name", "expected"),
    [
        (uuid.NAMESPACE_DNS, "example.org", "04738bdf-b25a-3829-a801-b21a1d25095b"),
        (uuid.NAMESPACE_URL, "rust-lang.org", "7ed45aaf-e75b-3130-8e33-ee4d9253b19f"),
        (uuid.NAMESPACE_OID, "42", "ce6925a5-2cd7-327b-ab1c-4b375ac044e4"),
        (uuid.NAMESPACE_X500, "lorem ipsum", "02f09a3f-1624-3b1d-8409-44eff7708208"),
    ],
)
def test_md5_digest_underlies_name_based_uuids(namespace, name, expected):
    digest = md5_hash(namespace.bytes, name.encode())
    assert len(digest) == 16
    assert _without_version_and_variant(digest) == _without_version_and_variant(
        uuid.UUID(expected).bytes
    )


@pytest.mark.parametrize(
    ("namespace", "name", "expected"),
    [
        (uuid.NAMESPACE_DNS, "example.org", "aad03681-8b63-5304-89e0-8ca8f49461b5"),
        (uuid.NAMESPACE_URL, "rust-lang.org", "c48d927f-4122-5413-968c-598b1780e749"),
        (uuid.NAMESPACE_OID, "42", "ba293c61-ad33-57b9-9671-f3319f57d789"),
        (uuid.NAMESPACE_X500, "lorem ipsum", "b11f79a5-1e6d-57ce-a4b5-ba8531ea03d0"),
    ],
)
def test_sha1_digest_underlies_name_based_uuids(namespace, name, expected):
    digest = sha1_hash(namespace.bytes, name.encode())
    assert len(digest) == 16
    assert _without_version_and_variant(digest) == _without_version_and_variant(
        uuid.UUID(expected).bytes
    )


def test_md5_of_empty_input():
    assert md5_hash(b"", b"").hex() == "d41d8cd98f00b204e9800998ecf8427e"


def test_sha1_of_empty_input_is_truncated():
    assert sha1_hash(b"", b"").hex() == "da39a3ee5e6b4b0d3255bfef95601890"


@pytest.mark.parametrize("func", [md5_hash, sha1_hash])
def test_digest_is_sixteen_bytes(func):
    assert len(func(uuid.NAMESPACE_DNS.bytes, b"rust-lang.org")) == 16


@pytest.mark.parametrize("func", [md5_hash, sha1_hash])
def test_digest_covers_the_concatenation(func):
    namespace = uuid.NAMESPACE_DNS.bytes
    name = b"rust-lang.org"
    assert func(namespace, name) == func(namespace + name[:4], name[4:])
    assert func(namespace, name) == func(b"", namespace + name)


@pytest.mark.parametrize("func", [md5_hash, sha1_hash])
def test_different_names_give_different_digests(func):
    namespace = uuid.NAMESPACE_URL.bytes
    assert func(namespace, b"example.org") != func(namespace, b"example.com")
    assert func(namespace, b"42") == func(namespace, b"42")


@pytest.mark.parametrize("func", [md5_hash, sha1_hash])
def test_text_name_is_rejected(func):
    with pytest.raises(TypeError):
        func(uuid.NAMESPACE_DNS.bytes, "example.org")