"""Tests for per-owner locking."""

import threading

from carts.cart.locks import OwnerLocks


class TestOwnerLocks:
    def test_hold_sorts_and_deduplicates_keys(self):
        locks = OwnerLocks()
        with locks.hold("user:1", "guest:a", "user:1") as held:
            assert held == ("guest:a", "user:1")
            assert len(locks) == 2

    def test_locks_are_dropped_after_release(self):
        locks = OwnerLocks()
        with locks.hold("guest:a"):
            pass
        assert len(locks) == 0

    def test_lock_is_released_when_the_body_raises(self):
        locks = OwnerLocks()
        try:
            with locks.hold("guest:a"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0
        with locks.hold("guest:a"):
            pass

    def test_same_owner_is_mutually_exclusive(self):
        locks = OwnerLocks()
        inside = threading.Event()
        release = threading.Event()
        second_entered = threading.Event()

        def first():
            with locks.hold("guest:a"):
                inside.set()
                release.wait(timeout=5)

        def second():
            inside.wait(timeout=5)
            with locks.hold("guest:a"):
                second_entered.set()

        t1 = threading.Thread(target=first)
        t2 = threading.Thread(target=second)
        t1.start()
        t2.start()

        assert not second_entered.wait(timeout=0.2)
        release.set()
        t1.join(timeout=5)
        t2.join(timeout=5)
        assert second_entered.is_set()

    def test_different_owners_do_not_block(self):
        locks = OwnerLocks()
        entered = threading.Event()

        def other():
            with locks.hold("guest:b"):
                entered.set()

        with locks.hold("guest:a"):
            t = threading.Thread(target=other)
            t.start()
            assert entered.wait(timeout=5)
            t.join(timeout=5)

    def test_opposite_argument_order_never_deadlocks(self):
        locks = OwnerLocks()

        def worker(keys):
            for _ in range(200):
                with locks.hold(*keys):
                    pass

        threads = [
            threading.Thread(target=worker, args=(("guest:a", "user:1"),)),
            threading.Thread(target=worker, args=(("user:1", "guest:a"),)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert not any(t.is_alive() for t in threads)
        assert len(locks) == 0
