import threading
import time

import pytest

from auctionkit.sync import Condition, Mutex, Semaphore


def _wait_until(pred, timeout=5.0):
    deadline = time.monotonic() + timeout
    while not pred():
        if time.monotonic() > deadline:
            raise AssertionError("condition not reached in time")
        time.sleep(0.005)


def _start(fn, *args):
    th = threading.Thread(target=fn, args=args, daemon=True)
    th.start()
    return th


def test_semaphore_counts_tickets():
    sem = Semaphore(2)
    sem.wait()
    sem.wait()
    assert sem.count == 0
    sem.post()
    assert sem.count == 1


def test_semaphore_negative_rejected():
    with pytest.raises(ValueError):
        Semaphore(-1)


def test_semaphore_wakes_in_fifo_order():
    sem = Semaphore(0)
    order = []

    def worker(i):
        sem.wait()
        order.append(i)

    threads = []
    for i in range(3):
        threads.append(_start(worker, i))
        _wait_until(lambda n=i + 1: sem.waiting == n)
    for expected in range(3):
        sem.post()
        _wait_until(lambda n=expected + 1: len(order) == n)
    for th in threads:
        th.join(5)
    assert order == [0, 1, 2]
    assert sem.count == 0


def test_mutex_handoff_is_fifo():
    m = Mutex()
    order = []

    def worker(i):
        with m:
            order.append(i)

    m.lock()
    threads = []
    for i in range(3):
        threads.append(_start(worker, i))
        _wait_until(lambda n=i + 1: m.waiting == n)
    m.unlock()
    for th in threads:
        th.join(5)
    assert order == [0, 1, 2]
    assert m.owner is None


def test_mutex_unlock_by_non_owner_raises():
    m = Mutex()
    with pytest.raises(RuntimeError):
        m.unlock()
    m.lock()
    errors = []

    def other():
        try:
            m.unlock()
        except RuntimeError as exc:
            errors.append(exc)

    _start(other).join(5)
    assert len(errors) == 1
    assert m.owner is threading.current_thread()
    m.unlock()


def test_condition_signal_moves_waiter_to_mutex():
    m = Mutex()
    cond = Condition(m)
    state = {"ready": False, "seen": None}

    def waiter():
        with m:
            while not state["ready"]:
                cond.wait()
            state["seen"] = m.owner is threading.current_thread()

    th = _start(waiter)
    _wait_until(lambda: cond.waiting == 1)
    m.lock()
    state["ready"] = True
    cond.signal()
    assert cond.waiting == 0
    assert m.waiting == 1
    m.unlock()
    th.join(5)
    assert state["seen"] is True
    assert m.owner is None


def test_condition_broadcast_wakes_all():
    m = Mutex()
    cond = Condition(m)
    state = {"go": False}
    woken = []

    def waiter(i):
        with m:
            while not state["go"]:
                cond.wait()
            woken.append(i)

    threads = []
    for i in range(3):
        threads.append(_start(waiter, i))
        _wait_until(lambda n=i + 1: cond.waiting == n)
    with m:
        state["go"] = True
        cond.broadcast()
        assert m.waiting == 3
    for th in threads:
        th.join(5)
    assert sorted(woken) == [0, 1, 2]


def test_condition_wait_requires_mutex():
    cond = Condition(Mutex())
    with pytest.raises(RuntimeError):
        cond.wait()
    assert cond.waiting == 0


def test_condition_broadcast_requires_mutex():
    cond = Condition(Mutex())
    with pytest.raises(RuntimeError):
        cond.broadcast()


def test_condition_signal_without_waiters_is_harmless():
    m = Mutex()
    cond = Condition(m)
    cond.signal()
    assert cond.waiting == 0
    assert m.owner is None