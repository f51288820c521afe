"""Tests for the per-key lock registry."""

import threading
import time
from unittest.mock import patch

from src.services.locks import KeyedLock


def test_same_key_is_serialized():
    locks = KeyedLock()
    active = []
    overlaps = []

    def worker():
        with locks.hold((1, 1)):
            active.append(1)
            if len(active) > 1:
                overlaps.append(True)
            time.sleep(0.01)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []


def test_different_keys_do_not_block():
    locks = KeyedLock()
    entered = threading.Event()

    def worker():
        with locks.hold((1, 2)):
            entered.set()

    with locks.hold((1, 1)):
        thread = threading.Thread(target=worker)
        thread.start()
        assert entered.wait(timeout=2)
    thread.join()


def test_registry_is_emptied():
    """Entries are dropped once nobody holds them."""
    locks = KeyedLock()

    with locks.hold("a"):
        with locks.hold("b"):
            assert len(locks) == 2

    assert len(locks) == 0


def test_lock_released_on_error():
    locks = KeyedLock()

    try:
        with locks.hold("a"):
            raise ValueError("boom")
    except ValueError:
        pass

    with locks.hold("a"):
        assert len(locks) == 1


def test_hold_many_takes_sorted_keys():
    locks = KeyedLock()

    with patch.object(locks, "hold", wraps=locks.hold) as hold:
        with locks.hold_many([(1, 3), (1, 1), (1, 2), (1, 1)]):
            assert len(locks) == 3

    assert [c.args[0] for c in hold.call_args_list] == [(1, 1), (1, 2), (1, 3)]
    assert len(locks) == 0


def test_hold_many_blocks_on_any_key():
    locks = KeyedLock()
    entered = threading.Event()

    def worker():
        with locks.hold_many([(1, 1), (1, 2)]):
            entered.set()

    with locks.hold((1, 2)):
        thread = threading.Thread(target=worker)
        thread.start()
        assert not entered.wait(timeout=0.1)
    thread.join(timeout=2)

    assert entered.is_set()
