"""Exclusive access to a disk head, granted in elevator (C-SCAN) order."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from .pss import PriQueue


@dataclass(eq=False)
class _Request:
    track: int
    granted: bool = False
    event: threading.Event = field(default_factory=threading.Event)


class Disk:
    """A disk used by one thread at a time.

    While the disk is busy, requests wait.  On release the disk goes to the
    waiting request with the lowest track at or beyond the current one;
    when none is left ahead, the scan restarts from the lowest track.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._busy = False
        self._track = 0
        self._ahead = PriQueue()
        self._behind = PriQueue()

    @property
    def busy(self) -> bool:
        """True while some thread holds the disk."""
        with self._lock:
            return self._busy

    @property
    def track(self) -> int:
        """Track of the last granted request."""
        with self._lock:
            return self._track

    @property
    def waiting(self) -> int:
        """Number of requests waiting for the disk."""
        with self._lock:
            return len(self._ahead) + len(self._behind)

    def request(self, track: int, timeout: int = -1) -> bool:
        """Acquire the disk to work on ``track``.

        ``timeout`` is in milliseconds: negative waits without limit, zero
        does not wait.  Returns True once the disk is held, False if it
        could not be obtained in time.
        """
        with self._lock:
            if not self._busy:
                self._busy = True
                self._track = track
                return True
            if timeout == 0:
                return False
            req = _Request(track)
            queue = self._ahead if track >= self._track else self._behind
            queue.put(req, track)

        req.event.wait(timeout / 1000 if timeout > 0 else None)

        with self._lock:
            if not req.granted:
                self._ahead.delete(req)
                self._behind.delete(req)
                return False
            return True

    def release(self) -> None:
        """Release the disk, handing it to the next request in scan order."""
        with self._lock:
            if not self._busy:
                raise RuntimeError("the disk is not in use")
            if not len(self._ahead) and len(self._behind):
                self._ahead, self._behind = self._behind, self._ahead
            if not len(self._ahead):
                self._busy = False
                return
            req = self._ahead.get()
            req.granted = True
            self._track = req.track
            req.event.set()