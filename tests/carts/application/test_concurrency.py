"""Concurrent writes to the same owner's cart serialize."""

import threading

import pytest
from carts.cart import service
from carts.cart.locks import owner_locks
from carts.domain import carts
from carts.owner import CartOwner

pytestmark = pytest.mark.slow

GUEST = CartOwner.guest("g-race")
USER = CartOwner.user("u-race")


def _run_together(*jobs):
    barrier = threading.Barrier(len(jobs))
    errors = []

    def runner(job):
        with carts.domain_context():
            barrier.wait()
            try:
                job()
            except Exception as exc:
                errors.append(exc)

    threads = [threading.Thread(target=runner, args=(job,)) for job in jobs]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return errors


def _adder(owner, product_id, quantity=1):
    return lambda: service.mutate(owner, "add", {"product_id": product_id, "quantity": quantity})


class TestSameOwner:
    def test_two_adds_both_land(self):
        errors = _run_together(_adder(GUEST, "A"), _adder(GUEST, "A"))
        assert errors == []
        assert service.snapshot(GUEST).quantities() == {"A": 2}

    def test_many_adds_both_products(self):
        jobs = [_adder(GUEST, "A") for _ in range(5)] + [_adder(GUEST, "B", 2) for _ in range(5)]
        errors = _run_together(*jobs)
        assert errors == []
        assert service.snapshot(GUEST).quantities() == {"A": 5, "B": 10}

    def test_locks_are_released(self):
        _run_together(_adder(GUEST, "A"), _adder(USER, "B"))
        assert len(owner_locks) == 0


class TestMergeRace:
    def test_concurrent_merges_fold_once(self):
        service.mutate(GUEST, "add", {"product_id": "A", "quantity": 2})
        service.mutate(USER, "add", {"product_id": "A", "quantity": 1})
        outcomes = []

        def merge():
            outcomes.append(service.merge(GUEST.ref, USER.ref))

        errors = _run_together(merge, merge, merge)

        assert errors == []
        assert sorted(o.merged_lines for o in outcomes) == [0, 0, 1]
        assert service.snapshot(USER).quantities() == {"A": 3}

    def test_merge_and_user_add_both_apply(self):
        service.mutate(GUEST, "add", {"product_id": "A", "quantity": 2})

        errors = _run_together(
            lambda: service.merge(GUEST.ref, USER.ref),
            _adder(USER, "B"),
        )

        assert errors == []
        assert service.snapshot(USER).quantities() == {"A": 2, "B": 1}
