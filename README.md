# uuidforge

A small library with no dependencies for generating and parsing UUIDs. It covers
every version described in RFC 9562: time-based (1, 6, 7), name-based (3, 5),
random (4) and custom (8). Every UUID it returns is a standard `uuid.UUID`.

## Installation

```
pip install uuidforge
```

## Parsing

`uuidforge.parser` accepts the simple, hyphenated, braced and URN forms.
Upper-case and lower-case hex digits are both accepted:

```python
from uuidforge.parser import parse_str, ParseError

a = parse_str("67e55044-10b1-426f-9247-bb680e5fe0c8")
b = parse_str("67e5504410b1426f9247bb680e5fe0c8")
c = parse_str("{67e55044-10b1-426f-9247-bb680e5fe0c8}")
d = parse_str("urn:uuid:67e55044-10b1-426f-9247-bb680e5fe0c8")
assert a == b == c == d

try:
    parse_str("F9168C5E-CEB2-4faa-BGBF-329BF39FA1E4")
except ParseError as err:
    print(err.kind, err.character, err.index)  # char G 21
```

When `parse_str` fails, it raises a `ParseError`. The error's `kind` is one of
`"simple_length"`, `"char"`, `"group_count"`, `"group_length"`,
`"invalid_utf8"` or `"other"`. Depending on the kind, the error also sets
`character`, `index` (1-based), `length`, `group` or `count`.

`try_parse` (for `str`) and `try_parse_ascii` (for bytes) use the same parser.
On failure they raise a `ParseError` of kind `"other"`.

`parse_simple`, `parse_hyphenated`, `parse_braced` and `parse_urn` each accept
one layout only. They take `str` or bytes and return the 16 raw bytes.

## Name-based, random and custom UUIDs

```python
import uuid
from uuidforge.versions import new_v3, new_v4, new_v5, new_v8

print(new_v3(uuid.NAMESPACE_DNS, b"example.org"))  # 04738bdf-b25a-3829-a801-b21a1d25095b
print(new_v5(uuid.NAMESPACE_DNS, "example.org"))   # aad03681-8b63-5304-89e0-8ca8f49461b5
print(new_v4())
print(new_v8(bytes(range(16))))
```

`new_v3` and `new_v5` encode string names as UTF-8. `new_v8` needs exactly 16
bytes and overwrites the version and variant bits in them.

## Time-based UUIDs

`uuidforge.timestamp.Timestamp` describes a timestamp as a Unix time plus a
counter. It converts to and from 100 ns Gregorian ticks with `from_gregorian`
and `to_gregorian`, and to and from Unix time with `from_unix_time`,
`from_unix` and `to_unix`. `Timestamp.now(context)` reads the system clock.

The counter comes from a clock sequence in `uuidforge.context`:

- `Context`: a thread-safe counter that wraps at 14 bits, for versions 1 and 6.
  `Context.new_random()` starts it from a random value.
- `ContextV7`: a 42-bit counter for version 7. It is reseeded every millisecond.
  It can shift timestamps forward with `with_adjust_by_millis`, and
  `with_additional_precision` puts sub-millisecond time in its top bits.
- `NoContext`: always zero. For version 7, the counter field is then filled
  with random bits.
- `LockedContext`: wraps any clock sequence behind a lock.
- `ThreadLocalContext`: gives each thread its own clock sequence, built by a
  factory.

You can write your own clock sequence by subclassing
`uuidforge.timestamp.ClockSequence`.

```python
from uuidforge.context import Context, ContextV7, NoContext
from uuidforge.timestamp import Timestamp
from uuidforge.timed import new_v1, new_v6, new_v7, now_v1, now_v6, now_v7

node = bytes([1, 2, 3, 4, 5, 6])

print(new_v1(Timestamp.from_unix(Context(0), 1_496_854_535, 812_946_000), node))
# 20616934-4ba2-11e7-8000-010203040506
print(new_v6(Timestamp.from_unix(Context(0), 1_496_854_535, 812_946_000), node))
# 1e74ba22-0616-6934-8000-010203040506

ctx7 = ContextV7()
first = new_v7(Timestamp.from_unix(ctx7, 1_497_624_119, 1234))
second = new_v7(Timestamp.from_unix(ctx7, 1_497_624_119, 1234))
assert first < second

print(new_v7(Timestamp.from_unix(NoContext(), 1_497_624_119, 1234)))
print(now_v1(node), now_v6(node), now_v7())
```

`now_v1` and `now_v6` share one randomly seeded `Context` across the process.
`now_v7` uses one lock-protected `ContextV7` for the whole process, so UUIDs it
returns sort in the order they were made.

`uuidforge.timestamp` also has the low-level layout functions:

- `encode_gregorian_timestamp` and `decode_gregorian_timestamp`
- `encode_sorted_gregorian_timestamp` and `decode_sorted_gregorian_timestamp`
- `encode_unix_timestamp_millis` and `decode_unix_timestamp_millis`

## Non-nil UUIDs

`uuidforge.non_nil.NonNilUuid` wraps a UUID that is guaranteed not to be the
nil UUID. Building one from the nil UUID raises `NilUuidError`, while
`NonNilUuid.new` returns `None` instead. The wrapper compares equal to the
`uuid.UUID` it holds, and `get()` returns that UUID.

## Helpers

- `uuidforge.rng` supplies random 16-, 64- and 128-bit integers from `os.urandom`.
- `uuidforge.hashing` supplies the truncated MD5 and SHA-1 digests used by
  versions 3 and 5.

## What it does not do

This is a library only. It has no command-line tool, and it does not integrate
with any serialisation framework.

## Running the tests

```
pip install -e ".[test]"
pytest
```