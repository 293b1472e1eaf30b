"""Clock sequences that feed counters into timestamps."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

from .rng import random_u16, random_u64
from .timestamp import ClockSequence

__all__ = [
    "Context",
    "NoContext",
    "ContextV7",
    "LockedContext",
    "ThreadLocalContext",
    "shared_context",
    "shared_context_v7",
]

_U16 = 0xFFFF
_U32 = 0xFFFF_FFFF
_U64 = (1 << 64) - 1
_U14 = _U16 >> 2

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MILLI = 1_000_000

_USABLE_BITS_V7 = 42
# The top bit of the counter stays unset on reseed, leaving plenty of room to
# increment within a millisecond before it overflows.
_RESEED_MASK = _U64 >> 23
_MAX_COUNTER = _U64 >> 22


class Context(ClockSequence):
    """A thread-safe counter producing 14-bit values that wrap around.

    Meant for versions 1 and 6 UUIDs. The starting value should be random so
    that UUIDs from different systems with the same timestamps rarely collide.
    """

    def __init__(self, count: int) -> None:
        self._count = count & _U16
        self._lock = threading.Lock()

    @classmethod
    def new_random(cls) -> Context:
        """Return a context that starts from a random value."""
        return cls(random_u16())

    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        with self._lock:
            value = self._count
            self._count = (value + 1) & _U16
        # Two bits of the clock sequence are reserved, so wrap at 14 bits.
        return value & _U14

    def usable_bits(self) -> int:
        return 14

    def __repr__(self) -> str:
        return f"Context(count={self._count})"


_shared_context: Context | None = None
_shared_context_lock = threading.Lock()


def shared_context() -> Context:
    """Return the process-wide context, seeding it randomly on first use."""
    global _shared_context
    with _shared_context_lock:
        if _shared_context is None:
            _shared_context = Context.new_random()
        return _shared_context


@dataclass(frozen=True)
class NoContext(ClockSequence):
    """A counter that is always zero.

    For version 7 UUIDs the whole counter segment is then filled with random
    data; for versions 1 and 6 the clock sequence stays zero.
    """

    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        return 0

    def usable_bits(self) -> int:
        return 0


def _apply_adjust(by_ns: int, seconds: int, subsec_nanos: int) -> tuple[int, int]:
    if by_ns == 0:
        return seconds, subsec_nanos
    total = seconds * _NANOS_PER_SECOND + subsec_nanos + by_ns
    whole, nanos = divmod(total, _NANOS_PER_SECOND)
    return whole & _U64, nanos


@dataclass(frozen=True)
class _ReseedingTimestamp:
    last_seed: int = 0
    seconds: int = 0
    subsec_nanos: int = 0

    @classmethod
    def from_ts(cls, seconds: int, subsec_nanos: int) -> _ReseedingTimestamp:
        millis = min(seconds * 1000, _U64)
        last_seed = min(millis + subsec_nanos // _NANOS_PER_MILLI, _U64)
        return cls(last_seed, seconds, subsec_nanos)

    def advance(self, seconds: int, subsec_nanos: int) -> tuple[_ReseedingTimestamp, bool]:
        incoming = _ReseedingTimestamp.from_ts(seconds, subsec_nanos)
        if incoming.last_seed > self.last_seed:
            return incoming, True
        # Same or earlier millisecond: keep it, but take any sub-second progress.
        return (
            _ReseedingTimestamp(
                self.last_seed, self.seconds, max(self.subsec_nanos, subsec_nanos)
            ),
            False,
        )

    def increment(self) -> _ReseedingTimestamp:
        seconds, subsec_nanos = _apply_adjust(
            _NANOS_PER_MILLI, self.seconds, self.subsec_nanos
        )
        return _ReseedingTimestamp.from_ts(seconds, subsec_nanos)

    @property
    def submilli_nanos(self) -> int:
        return self.subsec_nanos % _NANOS_PER_MILLI


@dataclass(frozen=True)
class _Precision:
    bits: int = 0
    factor: int = 0
    mask: int = 0
    shift: int = 0

    @classmethod
    def with_bits(cls, bits: int) -> _Precision:
        mask = _U64 >> (64 - _USABLE_BITS_V7 + bits)
        shift = _USABLE_BITS_V7 - bits
        factor = 999_999 // (2**bits) + 1
        return cls(bits, factor, mask, shift)

    def apply(self, value: int, timestamp: _ReseedingTimestamp) -> int:
        if self.bits == 0:
            return value
        additional = timestamp.submilli_nanos // self.factor
        return (value & self.mask) | (additional << self.shift)


def _reseed(precision: _Precision, timestamp: _ReseedingTimestamp) -> int:
    return precision.apply(random_u64() & _RESEED_MASK, timestamp)


class ContextV7(ClockSequence):
    """A reseeding counter producing 42-bit values for version 7 UUIDs.

    The counter is reseeded with a random 41-bit value each new millisecond
    and incremented within a millisecond. If it overflows, the timestamp is
    moved forward by a millisecond to stay monotonic. Not synchronised: wrap
    it in :class:`LockedContext` to share it between threads.
    """

    def __init__(self) -> None:
        self._timestamp = _ReseedingTimestamp()
        self._counter = 0
        self._adjust_ns = 0
        self._precision = _Precision()

    def with_adjust_by_millis(self, millis: int) -> ContextV7:
        """Shift generated timestamps forward by ``millis`` to obscure them."""
        if not 0 <= millis <= _U32:
            raise ValueError(f"millis must fit in 32 bits, got {millis}")
        self._adjust_ns = millis * _NANOS_PER_MILLI
        return self

    def with_additional_precision(self) -> ContextV7:
        """Use the top 12 counter bits for sub-millisecond precision."""
        self._precision = _Precision.with_bits(12)
        return self

    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        return self.generate_timestamp_sequence(seconds, subsec_nanos)[0]

    def generate_timestamp_sequence(
        self, seconds: int, subsec_nanos: int
    ) -> tuple[int, int, int]:
        seconds, subsec_nanos = _apply_adjust(self._adjust_ns, seconds, subsec_nanos)
        timestamp, should_reseed = self._timestamp.advance(seconds, subsec_nanos)

        if should_reseed:
            counter = _reseed(self._precision, timestamp)
        else:
            counter = self._precision.apply(self._counter, timestamp) + 1
            if counter > _MAX_COUNTER:
                timestamp = timestamp.increment()
                counter = _reseed(self._precision, timestamp)

        self._timestamp = timestamp
        self._counter = counter
        return counter, timestamp.seconds, timestamp.subsec_nanos

    def usable_bits(self) -> int:
        return _USABLE_BITS_V7


class LockedContext(ClockSequence):
    """Serialises access to another clock sequence with a lock."""

    def __init__(self, inner: ClockSequence) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        with self._lock:
            return self._inner.generate_sequence(seconds, subsec_nanos)

    def generate_timestamp_sequence(
        self, seconds: int, subsec_nanos: int
    ) -> tuple[int, int, int]:
        with self._lock:
            return self._inner.generate_timestamp_sequence(seconds, subsec_nanos)

    def usable_bits(self) -> int:
        with self._lock:
            return self._inner.usable_bits()


class ThreadLocalContext(ClockSequence):
    """Gives each thread its own clock sequence, built by ``factory``."""

    def __init__(self, factory: Callable[[], ClockSequence]) -> None:
        self._factory = factory
        self._local = threading.local()

    def _context(self) -> ClockSequence:
        context = getattr(self._local, "context", None)
        if context is None:
            context = self._factory()
            self._local.context = context
        return context

    def generate_sequence(self, seconds: int, subsec_nanos: int) -> int:
        return self._context().generate_sequence(seconds, subsec_nanos)

    def generate_timestamp_sequence(
        self, seconds: int, subsec_nanos: int
    ) -> tuple[int, int, int]:
        return self._context().generate_timestamp_sequence(seconds, subsec_nanos)

    def usable_bits(self) -> int:
        return self._context().usable_bits()

    def __repr__(self) -> str:
        return "ThreadLocalContext(...)"


_shared_context_v7 = LockedContext(ContextV7())


def shared_context_v7() -> LockedContext:
    """Return the process-wide, lock-protected version 7 context."""
    return _shared_context_v7