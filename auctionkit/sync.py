"""Semaphores, mutexes and condition variables with FIFO hand-off.

Waiting threads are served strictly in arrival order: a released
ticket or lock is handed directly to the first waiter.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .kernel_queues import ThreadQueue

_kernel = threading.Lock()


@dataclass(eq=False)
class _Waiter:
    thread: threading.Thread
    event: threading.Event = field(default_factory=threading.Event)


def _new_waiter() -> _Waiter:
    return _Waiter(threading.current_thread())


class Semaphore:
    """Counting semaphore whose waiters are woken in FIFO order."""

    def __init__(self, tickets: int = 0) -> None:
        if tickets < 0:
            raise ValueError("a semaphore cannot have a negative count")
        self._count = tickets
        self._waiters = ThreadQueue()

    @property
    def count(self) -> int:
        """Tickets currently available."""
        return self._count

    @property
    def waiting(self) -> int:
        """Number of threads blocked in :meth:`wait`."""
        return len(self._waiters)

    def wait(self) -> None:
        """Take a ticket, blocking until one is available."""
        with _kernel:
            if self._count > 0:
                self._count -= 1
                return
            waiter = _new_waiter()
            self._waiters.put_back(waiter)
        waiter.event.wait()

    def post(self) -> None:
        """Return a ticket, handing it to the first waiter if any."""
        with _kernel:
            waiter = self._waiters.get_front()
            if waiter is None:
                self._count += 1
            else:
                waiter.event.set()


class Mutex:
    """Non-reentrant lock handed to waiters in FIFO order."""

    def __init__(self) -> None:
        self._owner: threading.Thread | None = None
        self._waiters = ThreadQueue()

    @property
    def owner(self) -> threading.Thread | None:
        """The thread holding the lock, or None."""
        return self._owner

    @property
    def waiting(self) -> int:
        """Number of threads waiting to acquire the lock."""
        return len(self._waiters)

    def lock(self) -> None:
        """Acquire the lock, blocking while another thread holds it."""
        with _kernel:
            if self._owner is None and not self._waiters:
                self._owner = threading.current_thread()
                return
            waiter = _new_waiter()
            self._waiters.put_back(waiter)
        waiter.event.wait()

    def _check_owner(self) -> None:
        if self._owner is not threading.current_thread():
            raise RuntimeError("this thread does not own this mutex")

    def _hand_off(self) -> None:
        waiter = self._waiters.get_front()
        if waiter is None:
            self._owner = None
        else:
            self._owner = waiter.thread
            waiter.event.set()

    def unlock(self) -> None:
        """Release the lock, passing it to the first waiter if any."""
        with _kernel:
            self._check_owner()
            self._hand_off()

    def __enter__(self) -> Mutex:
        self.lock()
        return self

    def __exit__(self, *args: Any) -> None:
        self.unlock()


class Condition:
    """Condition variable bound to a :class:`Mutex`.

    A signalled thread is moved to the mutex's wait queue and resumes
    once the signalling thread releases the mutex.
    """

    def __init__(self, mutex: Mutex) -> None:
        self._mutex = mutex
        self._waiters = ThreadQueue()

    @property
    def mutex(self) -> Mutex:
        """The mutex this condition is bound to."""
        return self._mutex

    @property
    def waiting(self) -> int:
        """Number of threads blocked in :meth:`wait`."""
        return len(self._waiters)

    def wait(self) -> None:
        """Release the mutex and block until signalled and re-acquired."""
        with _kernel:
            self._mutex._check_owner()
            waiter = _new_waiter()
            self._waiters.put_back(waiter)
            self._mutex._hand_off()
        waiter.event.wait()

    def signal(self) -> None:
        """Move the first waiting thread to the mutex's queue."""
        with _kernel:
            if not self._waiters:
                return
            self._mutex._check_owner()
            self._mutex._waiters.put_back(self._waiters.get_front())

    def broadcast(self) -> None:
        """Move every waiting thread to the mutex's queue."""
        with _kernel:
            self._mutex._check_owner()
            while self._waiters:
                self._mutex._waiters.put_back(self._waiters.get_front())