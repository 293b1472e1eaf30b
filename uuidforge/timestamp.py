"""Timestamps for time-based UUIDs (versions 1, 6 and 7).

Versions 1 and 6 count 100 nanosecond ticks since ``1582-10-15 00:00:00``
together with a 14-bit clock sequence. Version 7 counts milliseconds since
the Unix epoch. :class:`Timestamp` holds a Unix time plus a counter and
converts between the two representations.
"""

from __future__ import annotations

import abc
import time
import uuid
from dataclasses import dataclass

__all__ = [
    "UUID_TICKS_BETWEEN_EPOCHS",
    "ClockSequence",
    "Timestamp",
    "unix_now",
    "encode_gregorian_timestamp",
    "decode_gregorian_timestamp",
    "encode_sorted_gregorian_timestamp",
    "decode_sorted_gregorian_timestamp",
    "encode_unix_timestamp_millis",
    "decode_unix_timestamp_millis",
]

UUID_TICKS_BETWEEN_EPOCHS = 0x01B2_1DD2_1381_4000
"""100 nanosecond ticks between 1582-10-15 and 1970-01-01."""

_U64 = (1 << 64) - 1
_TICKS_PER_SECOND = 10_000_000
_NANOS_PER_SECOND = 1_000_000_000


class ClockSequence(abc.ABC):
    """A source of counter values that keep timestamps unique."""

    @abc.abstractmethod
    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        """Return the next counter value for the given time.

        Bits beyond :meth:`usable_bits` must be unset.
        """

    def generate_timestamp_sequence(
        self, seconds: int, subsec_nanos: int
    ) -> tuple[int, int, int]:
        """Return ``(counter, seconds, subsec_nanos)``, possibly adjusting the time."""
        return self.generate_sequence(seconds, subsec_nanos), seconds, subsec_nanos

    @abc.abstractmethod
    def usable_bits(self) -> int:
        """Return how many low bits of the counter are meaningful (at most 128)."""


@dataclass(frozen=True)
class Timestamp:
    """A Unix time with a counter, encodable into versions 1, 6 and 7 UUIDs."""

    seconds: int
    subsec_nanos: int
    counter: int
    usable_counter_bits: int

    @classmethod
    def now(cls, context: ClockSequence) -> Timestamp:
        """Return the current system time with a counter drawn from ``context``."""
        seconds, subsec_nanos = unix_now()
        return cls.from_unix(context, seconds, subsec_nanos)

    @classmethod
    def from_gregorian(cls, ticks: int, counter: int) -> Timestamp:
        """Build from 100ns ticks since 1582-10-15 and a 14-bit counter.

        Conversion wraps around 64 bits as the encoded form does.
        """
        seconds, subsec_nanos = _gregorian_to_unix(ticks)
        return cls(seconds, subsec_nanos, counter & 0xFFFF, 14)

    @classmethod
    def from_unix_time(
        cls, seconds: int, subsec_nanos: int, counter: int, usable_counter_bits: int
    ) -> Timestamp:
        """Build from a Unix time and an explicit counter of up to 128 bits."""
        return cls(seconds, subsec_nanos, counter, usable_counter_bits)

    @classmethod
    def from_unix(
        cls, context: ClockSequence, seconds: int, subsec_nanos: int
    ) -> Timestamp:
        """Build from a Unix time, drawing the counter from ``context``."""
        counter, seconds, subsec_nanos = context.generate_timestamp_sequence(
            seconds, subsec_nanos
        )
        return cls(
            seconds,
            subsec_nanos,
            int(counter),
            int(context.usable_bits()) & 0xFF,
        )

    def to_gregorian(self) -> tuple[int, int]:
        """Return ``(ticks, counter)`` with the counter truncated to 14 bits."""
        return (
            _unix_to_gregorian_ticks(self.seconds, self.subsec_nanos),
            self.counter & 0x3FFF,
        )

    def to_unix(self) -> tuple[int, int]:
        """Return ``(seconds, subsec_nanos)`` since the Unix epoch."""
        return self.seconds, self.subsec_nanos


def _unix_to_gregorian_ticks(seconds: int, nanos: int) -> int:
    return (
        UUID_TICKS_BETWEEN_EPOCHS
        + (seconds * _TICKS_PER_SECOND & _U64)
        + nanos // 100
    ) & _U64


def _gregorian_to_unix(ticks: int) -> tuple[int, int]:
    since_unix = (ticks - UUID_TICKS_BETWEEN_EPOCHS) & _U64
    seconds, remainder = divmod(since_unix, _TICKS_PER_SECOND)
    return seconds, remainder * 100


def unix_now() -> tuple[int, int]:
    """Return the current system time as ``(seconds, subsec_nanos)``."""
    nanos = time.time_ns()
    if nanos < 0:
        raise RuntimeError("the system clock is set before the Unix epoch")
    return divmod(nanos, _NANOS_PER_SECOND)


def _node_bytes(node_id: bytes | bytearray | list[int] | tuple[int, ...]) -> bytes:
    node = bytes(node_id)
    if len(node) != 6:
        raise ValueError(f"node id must be 6 bytes, got {len(node)}")
    return node


def _clock_seq_bytes(counter: int) -> bytes:
    return bytes((((counter & 0x3F00) >> 8) | 0x80, counter & 0xFF))


def _from_fields(d1: int, d2: int, d3: int, d4: bytes) -> uuid.UUID:
    return uuid.UUID(
        bytes=d1.to_bytes(4, "big") + d2.to_bytes(2, "big") + d3.to_bytes(2, "big") + d4
    )


def encode_gregorian_timestamp(
    ticks: int, counter: int, node_id: bytes | bytearray | list[int] | tuple[int, ...]
) -> uuid.UUID:
    """Lay out a version 1 UUID from ticks, a clock sequence and a node id."""
    node = _node_bytes(node_id)
    time_low = ticks & 0xFFFF_FFFF
    time_mid = (ticks >> 32) & 0xFFFF
    time_high_and_version = ((ticks >> 48) & 0x0FFF) | (1 << 12)
    return _from_fields(
        time_low, time_mid, time_high_and_version, _clock_seq_bytes(counter) + node
    )


def decode_gregorian_timestamp(value: uuid.UUID) -> tuple[int, int]:
    """Return ``(ticks, counter)`` stored in a version 1 layout."""
    b = value.bytes
    ticks = (
        (b[6] & 0x0F) << 56
        | b[7] << 48
        | b[4] << 40
        | b[5] << 32
        | b[0] << 24
        | b[1] << 16
        | b[2] << 8
        | b[3]
    )
    counter = (b[8] & 0x3F) << 8 | b[9]
    return ticks, counter


def encode_sorted_gregorian_timestamp(
    ticks: int, counter: int, node_id: bytes | bytearray | list[int] | tuple[int, ...]
) -> uuid.UUID:
    """Lay out a version 6 UUID from ticks, a clock sequence and a node id."""
    node = _node_bytes(node_id)
    time_high = (ticks >> 28) & 0xFFFF_FFFF
    time_mid = (ticks >> 12) & 0xFFFF
    time_low_and_version = (ticks & 0x0FFF) | (0x6 << 12)
    return _from_fields(
        time_high, time_mid, time_low_and_version, _clock_seq_bytes(counter) + node
    )


def decode_sorted_gregorian_timestamp(value: uuid.UUID) -> tuple[int, int]:
    """Return ``(ticks, counter)`` stored in a version 6 layout."""
    b = value.bytes
    ticks = (
        b[0] << 52
        | b[1] << 44
        | b[2] << 36
        | b[3] << 28
        | b[4] << 20
        | b[5] << 12
        | (b[6] & 0x0F) << 8
        | b[7]
    )
    counter = (b[8] & 0x3F) << 8 | b[9]
    return ticks, counter


def encode_unix_timestamp_millis(
    millis: int, counter_random_bytes: bytes | bytearray | list[int] | tuple[int, ...]
) -> uuid.UUID:
    """Lay out a version 7 UUID from milliseconds and 10 counter/random bytes."""
    extra = bytes(counter_random_bytes)
    if len(extra) != 10:
        raise ValueError(f"counter and random data must be 10 bytes, got {len(extra)}")
    millis_high = (millis >> 16) & 0xFFFF_FFFF
    millis_low = millis & 0xFFFF
    counter_random_version = (extra[1] | ((extra[0] << 8) & 0x0FFF)) | (0x7 << 12)
    d4 = bytes(((extra[2] & 0x3F) | 0x80,)) + extra[3:]
    return _from_fields(millis_high, millis_low, counter_random_version, d4)


def decode_unix_timestamp_millis(value: uuid.UUID) -> int:
    """Return the milliseconds stored in a version 7 layout."""
    return int.from_bytes(value.bytes[:6], "big")