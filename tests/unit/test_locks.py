"""Tests for per-key locks."""

from __future__ import annotations

import threading
import time

import pytest

from typecat.core.locks import KeyedLock


class TestKeyedLock:
    def test_entry_dropped_after_release(self):
        locks = KeyedLock()
        with locks.hold("a"):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_dropped_after_exception(self):
        locks = KeyedLock()
        with pytest.raises(RuntimeError):
            with locks.hold("a"):
                raise RuntimeError("boom")
        assert len(locks) == 0

    def test_same_key_is_exclusive(self):
        locks = KeyedLock()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("a"):
                inside.append(1)
                if len(inside) > 1:
                    overlaps.append(1)
                time.sleep(0.02)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert overlaps == []
        assert len(locks) == 0

    def test_different_keys_do_not_block(self):
        locks = KeyedLock()
        with locks.hold("a"):
            done = threading.Event()

            def worker():
                with locks.hold("b"):
                    done.set()

            t = threading.Thread(target=worker)
            t.start()
            assert done.wait(timeout=2)
            t.join()
        assert len(locks) == 0
