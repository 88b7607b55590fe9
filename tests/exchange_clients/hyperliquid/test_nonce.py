"""Tests for the Hyperliquid nonce generator."""

import threading

from exchange_clients.hyperliquid.client.utils.nonce import NonceGenerator, get_timestamp_ms


class SteppingClock:
    def __init__(self, values):
        self.values = list(values)

    def __call__(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


def test_first_nonce_is_clock_value():
    generator = NonceGenerator(clock=lambda: 1_700_000_000_000)

    assert generator.last == 0
    assert generator.next() == 1_700_000_000_000
    assert generator.last == 1_700_000_000_000


def test_same_millisecond_calls_still_increase():
    generator = NonceGenerator(clock=lambda: 1_000)

    nonces = [generator.next() for _ in range(5)]

    assert nonces == [1_000, 1_001, 1_002, 1_003, 1_004]


def test_clock_moving_backwards_never_repeats():
    generator = NonceGenerator(clock=SteppingClock([5_000, 4_000, 4_500, 6_000]))

    nonces = [generator.next() for _ in range(4)]

    assert nonces == [5_000, 5_001, 5_002, 6_000]


def test_follows_clock_when_it_jumps_ahead():
    generator = NonceGenerator(clock=SteppingClock([1_000, 9_000]))

    assert generator.next() == 1_000
    assert generator.next() == 9_000


def test_threads_share_one_strictly_increasing_sequence():
    generator = NonceGenerator(clock=lambda: 42)
    collected = []
    lock = threading.Lock()

    def worker():
        values = [generator.next() for _ in range(200)]
        with lock:
            collected.extend(values)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(collected) == 800
    assert len(set(collected)) == 800
    assert max(collected) == generator.last


def test_default_clock_is_wall_clock_milliseconds():
    before = get_timestamp_ms()
    nonce = NonceGenerator().next()
    after = get_timestamp_ms()

    assert before <= nonce <= after + 1
