"""Scheduling queues: a FIFO of waiting threads, a wake-time ordered
queue, and a circular in-memory event log."""

from __future__ import annotations

import bisect
import os
import threading
from collections import deque
from typing import Any, Iterator

DEFAULT_LOG_SIZE = 128 * 1024 * 1024
DEFAULT_LOG_MIN_SIZE = 8192


class ThreadQueue:
    """FIFO queue of waiting threads, compared by identity.

    A thread may appear at most once in a queue.
    """

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def _check_absent(self, th: Any) -> None:
        if th in self:
            raise ValueError("the thread is already in the queue")

    def put_back(self, th: Any) -> None:
        """Append ``th`` at the back of the queue."""
        self._check_absent(th)
        self._items.append(th)

    def put_front(self, th: Any) -> None:
        """Insert ``th`` at the front of the queue."""
        self._check_absent(th)
        self._items.appendleft(th)

    def peek_front(self) -> Any:
        """Return the first thread without removing it, or None."""
        return self._items[0] if self._items else None

    def get_front(self) -> Any:
        """Remove and return the first thread, or None when empty."""
        return self._items.popleft() if self._items else None

    def remove(self, th: Any) -> bool:
        """Remove ``th``; return whether it was queued."""
        for idx, queued in enumerate(self._items):
            if queued is th:
                del self._items[idx]
                return True
        return False

    def __contains__(self, th: Any) -> bool:
        return any(queued is th for queued in self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class TimeQueue:
    """Threads ordered by wake time.

    A thread inserted with the same wake time as threads already queued
    is placed before them.
    """

    def __init__(self) -> None:
        self._entries: list[tuple[int, Any]] = []

    def put(self, th: Any, wake_time: int) -> None:
        """Queue ``th`` to be woken at ``wake_time``."""
        if any(queued is th for _, queued in self._entries):
            raise ValueError("the thread is already in the time queue")
        pos = bisect.bisect_left(self._entries, wake_time, key=lambda e: e[0])
        self._entries.insert(pos, (wake_time, th))

    def get(self) -> Any:
        """Remove and return the thread with the earliest wake time, or None."""
        if not self._entries:
            return None
        return self._entries.pop(0)[1]

    def next_time(self) -> int:
        """Return the earliest wake time, or 0 when empty."""
        return self._entries[0][0] if self._entries else 0

    def remove(self, th: Any) -> bool:
        """Remove ``th``; return whether it was queued."""
        for idx, (_, queued) in enumerate(self._entries):
            if queued is th:
                del self._entries[idx]
                return True
        return False

    def __contains__(self, th: Any) -> bool:
        return any(queued is th for _, queued in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


class EventLog:
    """Circular text log kept in memory.

    When fewer than ``min_size`` bytes remain at the end of the buffer,
    writing restarts at the beginning, overwriting the oldest entries.
    """

    def __init__(
        self, size: int = DEFAULT_LOG_SIZE, min_size: int = DEFAULT_LOG_MIN_SIZE
    ) -> None:
        if min_size < 1:
            raise ValueError("min_size must be at least 1")
        if size < min_size:
            raise ValueError("size must not be smaller than min_size")
        self._size = size
        self._min_size = min_size
        self._buffer: bytearray | None = None
        self._idx = 0
        self._wrapped_size = 0
        self._lock = threading.Lock()

    def write(self, text: str) -> None:
        """Append ``text`` to the log."""
        data = text.encode()
        if not data:
            raise ValueError("cannot log an empty message")
        with self._lock:
            if self._buffer is None:
                self._buffer = bytearray(self._size)
            if self._size - self._idx < self._min_size:
                self._wrapped_size = self._idx
                self._idx = 0
            chunk = data[: self._size - self._idx]
            self._buffer[self._idx : self._idx + len(chunk)] = chunk
            self._idx += len(chunk)

    def dump(self, path: str | os.PathLike[str]) -> None:
        """Write the retained log, oldest entries first, to ``path``."""
        with self._lock:
            buf = self._buffer or bytearray()
            older = bytes(buf[self._idx : self._wrapped_size])
            newer = bytes(buf[: self._idx])
        with open(path, "wb") as fil:
            fil.write(older)
            fil.write(newer)