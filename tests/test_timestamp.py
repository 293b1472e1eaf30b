import time
import uuid

import pytest

from uuidforge.timestamp import (
    UUID_TICKS_BETWEEN_EPOCHS,
    ClockSequence,
    Timestamp,
    decode_gregorian_timestamp,
    decode_sorted_gregorian_timestamp,
    decode_unix_timestamp_millis,
    encode_gregorian_timestamp,
    encode_sorted_gregorian_timestamp,
    encode_unix_timestamp_millis,
    unix_now,
)

U64_MAX = (1 << 64) - 1
U32_MAX = (1 << 32) - 1
NODE = bytes([1, 2, 3, 4, 5, 6])


class FixedContext(ClockSequence):
    def __init__(self, value, bits):
        self.value = value
        self.bits = bits

    def generate_sequence(self, seconds, subsec_nanos):
        return self.value

    def usable_bits(self):
        return self.bits


class ShiftingContext(FixedContext):
    def generate_timestamp_sequence(self, seconds, subsec_nanos):
        return self.value, seconds + 1, subsec_nanos + 5


def test_epoch_constant():
    assert UUID_TICKS_BETWEEN_EPOCHS == 0x01B21DD213814000
    assert Timestamp.from_gregorian(UUID_TICKS_BETWEEN_EPOCHS, 0).to_unix() == (0, 0)
    assert Timestamp.from_unix_time(0, 0, 0, 0).to_gregorian() == (
        UUID_TICKS_BETWEEN_EPOCHS,
        0,
    )


def test_clock_sequence_is_abstract():
    with pytest.raises(TypeError):
        ClockSequence()


def test_default_generate_timestamp_sequence_passes_time_through():
    ctx = FixedContext(7, 14)
    assert ClockSequence.generate_timestamp_sequence(ctx, 10, 20) == (7, 10, 20)
    ts = Timestamp.from_unix(ctx, 10, 20)
    assert ts.to_unix() == (10, 20)
    assert ts.counter == 7


def test_gregorian_unix_does_not_panic():
    for seconds, nanos in [(U64_MAX, 0), (0, U32_MAX), (U64_MAX, U32_MAX)]:
        ticks, _ = Timestamp.from_unix_time(seconds, nanos, 0, 0).to_gregorian()
        assert 0 <= ticks <= U64_MAX
    seconds, nanos = Timestamp.from_gregorian(U64_MAX, 0).to_unix()
    assert 0 <= seconds <= U64_MAX
    assert 0 <= nanos < 1_000_000_000


def test_to_gregorian_truncates_to_usable_bits():
    ts = Timestamp.from_gregorian(123, 0xFFFF)
    assert ts.to_gregorian() == (123, 0xFFFF >> 2)
    assert ts.usable_counter_bits == 14


def test_from_gregorian_to_unix():
    ticks = UUID_TICKS_BETWEEN_EPOCHS + 14_968_545_358_129_460
    ts = Timestamp.from_gregorian(ticks, 0)
    assert ts.to_unix() == (1_496_854_535, 812_946_000)
    assert ts.to_gregorian() == (ticks, 0)


def test_from_unix_time_keeps_fields():
    ts = Timestamp.from_unix_time(1_496_854_535, 812_946_000, 99, 42)
    assert ts.to_unix() == (1_496_854_535, 812_946_000)
    assert ts.counter == 99
    assert ts.usable_counter_bits == 42


def test_from_unix_uses_context():
    ts = Timestamp.from_unix(FixedContext(5, 14), 100, 200)
    assert ts == Timestamp.from_unix_time(100, 200, 5, 14)


def test_from_unix_honours_adjusted_time():
    ts = Timestamp.from_unix(ShiftingContext(3, 42), 100, 200)
    assert ts.to_unix() == (101, 205)
    assert ts.counter == 3


def test_now_is_close_to_system_time():
    before = time.time()
    ts = Timestamp.now(FixedContext(0, 0))
    after = time.time()
    seconds, nanos = ts.to_unix()
    value = seconds + nanos / 1e9
    assert before - 1 <= value <= after + 1


def test_unix_now_shape():
    seconds, nanos = unix_now()
    assert abs(seconds - time.time()) < 5
    assert 0 <= nanos < 1_000_000_000


def test_encode_gregorian_known_value():
    ticks = UUID_TICKS_BETWEEN_EPOCHS + 14_968_545_358_129_460
    value = encode_gregorian_timestamp(ticks, 0, NODE)
    assert str(value) == "20616934-4ba2-11e7-8000-010203040506"
    assert decode_gregorian_timestamp(value) == (ticks, 0)


def test_encode_gregorian_with_counter():
    value = encode_gregorian_timestamp(14976234442241191232, 42, NODE)
    assert str(value) == "b2c1ad40-45e0-1fd6-802a-010203040506"


def test_encode_sorted_gregorian_known_value():
    ticks = UUID_TICKS_BETWEEN_EPOCHS + 14_968_545_358_129_460
    value = encode_sorted_gregorian_timestamp(ticks, 0, NODE)
    assert str(value) == "1e74ba22-0616-6934-8000-010203040506"
    assert decode_sorted_gregorian_timestamp(value) == (ticks, 0)


def test_encode_sorted_gregorian_with_counter():
    value = encode_sorted_gregorian_timestamp(14976241191231231313, 42, NODE)
    assert str(value) == "fd64c041-1e91-6551-802a-010203040506"


def test_gregorian_counter_round_trip_max():
    value = encode_gregorian_timestamp(12345, 0x3FFF, NODE)
    assert value.bytes[8] == 0xBF
    assert decode_gregorian_timestamp(value) == (12345, 0x3FFF)


def test_node_id_must_be_six_bytes():
    with pytest.raises(ValueError):
        encode_gregorian_timestamp(0, 0, b"\x01\x02")
    with pytest.raises(ValueError):
        encode_sorted_gregorian_timestamp(0, 0, bytes(7))


def test_encode_unix_millis_known_prefix():
    value = encode_unix_timestamp_millis(1_497_624_119_000, bytes(10))
    assert str(value).startswith("015cb15a-86d8-7")
    assert value.version == 7
    assert value.variant == uuid.RFC_4122
    assert decode_unix_timestamp_millis(value) == 1_497_624_119_000


def test_encode_unix_millis_second_known_prefix():
    value = encode_unix_timestamp_millis(1_645_557_742_000, bytes(range(10)))
    assert str(value).startswith("017f22e2-79b0-7")
    assert decode_unix_timestamp_millis(value) == 1_645_557_742_000


def test_encode_unix_millis_masks_version_and_variant():
    value = encode_unix_timestamp_millis(0, b"\xff" * 10)
    assert str(value) == "00000000-0000-7fff-bfff-ffffffffffff"


def test_encode_unix_millis_requires_ten_bytes():
    with pytest.raises(ValueError):
        encode_unix_timestamp_millis(0, bytes(9))


def test_timestamps_are_hashable_and_equal_by_value():
    a = Timestamp.from_unix_time(1, 2, 3, 4)
    b = Timestamp.from_unix_time(1, 2, 3, 4)
    assert a == b
    assert len({a, b}) == 1