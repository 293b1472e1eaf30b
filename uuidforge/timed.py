"""Time-based UUIDs: versions 1 and 6 (Gregorian ticks) and 7 (Unix milliseconds)."""

from __future__ import annotations

import uuid

from .context import shared_context, shared_context_v7
from .rng import random_u128
from .timestamp import (
    Timestamp,
    encode_gregorian_timestamp,
    encode_sorted_gregorian_timestamp,
    encode_unix_timestamp_millis,
)

__all__ = ["new_v1", "now_v1", "new_v6", "now_v6", "new_v7", "now_v7"]

_U64 = (1 << 64) - 1
_U128 = (1 << 128) - 1

NodeId = bytes | bytearray | list[int] | tuple[int, ...]


def new_v1(ts: Timestamp, node_id: NodeId) -> uuid.UUID:
    """Return a version 1 UUID for ``ts`` and a 6-byte ``node_id``.

    Values are unique only if the node id is unique to this process and the
    clock sequence behind ``ts`` is shared by every thread generating them.
    """
    ticks, counter = ts.to_gregorian()
    return encode_gregorian_timestamp(ticks, counter, node_id)


def now_v1(node_id: NodeId) -> uuid.UUID:
    """Return a version 1 UUID for the current time and ``node_id``."""
    return new_v1(Timestamp.now(shared_context()), node_id)


def new_v6(ts: Timestamp, node_id: NodeId) -> uuid.UUID:
    """Return a version 6 UUID, a version 1 layout that sorts by timestamp."""
    ticks, counter = ts.to_gregorian()
    return encode_sorted_gregorian_timestamp(ticks, counter, node_id)


def now_v6(node_id: NodeId) -> uuid.UUID:
    """Return a version 6 UUID for the current time and ``node_id``."""
    return new_v6(Timestamp.now(shared_context()), node_id)


def new_v7(ts: Timestamp) -> uuid.UUID:
    """Return a version 7 UUID from ``ts`` padded with random data.

    The counter of ``ts`` occupies the most significant bits after the
    timestamp, so UUIDs built from one counting context keep their order.
    """
    seconds, nanos = ts.to_unix()
    millis = min(seconds * 1000 + nanos // 1_000_000, _U64)

    counter = ts.counter & _U128
    counter_bits = ts.usable_counter_bits

    # A counter that reaches into the variant field is split around it so
    # none of its bits are lost.
    if counter_bits > 12:
        mask = (_U128 << (counter_bits - 12)) & _U128
        counter = ((counter & ~mask) | ((counter & mask) << 2)) & _U128
        counter_bits += 2

    # Shifts wrap their amount modulo the width, as on a fixed 128-bit integer.
    random_part = random_u128() & (_U128 >> (counter_bits % 128))
    counter_part = (counter << (max(128 - counter_bits, 0) % 128)) & _U128

    combined = random_part | counter_part
    return encode_unix_timestamp_millis(millis, combined.to_bytes(16, "big")[:10])


def now_v7() -> uuid.UUID:
    """Return a version 7 UUID for the current time.

    UUIDs made by this function within one process sort in creation order.
    """
    return new_v7(Timestamp.now(shared_context_v7()))