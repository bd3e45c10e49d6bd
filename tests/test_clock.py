import time

import pytest

from premo.clock import ManualClock, SystemClock, map_range


def test_manual_clock_starts_at_given_value():
    clock = ManualClock(1500)
    assert clock.micros() == 1500


def test_manual_clock_default_start_is_zero():
    assert ManualClock().micros() == 0


def test_manual_clock_advance_accumulates():
    clock = ManualClock(100)
    clock.advance(250)
    clock.advance(650)
    assert clock.micros() == 100 + 250 + 650


def test_manual_clock_millis_truncates():
    clock = ManualClock()
    clock.advance(999)
    assert clock.millis() == 0
    clock.advance(1)
    assert clock.millis() == 1


def test_manual_clock_wraps_at_32_bits():
    clock = ManualClock(2**32 - 10)
    clock.advance(15)
    assert clock.micros() == 5


def test_manual_clock_rejects_negative_advance():
    clock = ManualClock()
    with pytest.raises(ValueError):
        clock.advance(-1)


def test_system_clock_is_within_32_bits():
    clock = SystemClock()
    assert 0 <= clock.micros() <= 0xFFFFFFFF
    assert 0 <= clock.millis() <= 0xFFFFFFFF // 1000


def test_system_clock_moves_forward():
    clock = SystemClock()
    first = clock.micros()
    time.sleep(0.002)
    second = clock.micros()
    assert ((second - first) & 0xFFFFFFFF) >= 2000


def test_map_range_endpoints_map_to_endpoints():
    assert map_range(0, 0, 100, 10, 20) == 10
    assert map_range(100, 0, 100, 10, 20) == 20


def test_map_range_reversed_input_range():
    assert map_range(100, 100, 0, 0, 85) == 0
    assert map_range(0, 100, 0, 0, 85) == 85


def test_map_range_truncates_toward_zero():
    assert map_range(50, 0, 100, 0, 255) == 127
    assert map_range(-50, 0, 100, 0, 255) == -127


def test_map_range_truncates_float_arguments():
    assert map_range(50.9, 0, 100, 0, 255) == map_range(50, 0, 100, 0, 255)


def test_map_range_does_not_clamp():
    assert map_range(200, 0, 100, 0, 10) == 20


def test_map_range_rejects_empty_range():
    with pytest.raises(ValueError):
        map_range(5, 3, 3, 0, 10)