"""Tasks that exchange synchronous messages, and monitors.

A :class:`Task` runs a function in its own thread.  Any task, including a
thread that was not started as a task, can send a message to another task
and block until it is answered.  The receiver picks messages up with
:func:`receive` and answers with :meth:`Task.reply`.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

from .sync import Condition, Mutex

_lock = threading.Lock()
_local = threading.local()


@dataclass(eq=False)
class _Message:
    sender: Task
    receiver: Task
    body: Any
    rc: Any = None
    answered: bool = False
    failed: bool = False


class Task:
    """A function running in its own thread, able to send and receive messages.

    The constructor returns once the new task has started.  The value the
    function returns is the task's exit code, delivered by :meth:`wait`.
    """

    def __init__(self, target: Callable[..., Any], *args: Any) -> None:
        self._init_state()
        started = threading.Event()

        def run() -> None:
            _local.task = self
            started.set()
            try:
                self._rc = target(*args)
            except BaseException as exc:  # delivered to the joining task
                self._error = exc
            finally:
                self._finish()

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()
        started.wait()

    def _init_state(self) -> None:
        self._inbox: deque[_Message] = deque()
        self._mail = threading.Condition(_lock)
        self._reply_cond = threading.Condition(_lock)
        self._pending: _Message | None = None
        self._finished = False
        self._joined = False
        self._rc: Any = None
        self._error: BaseException | None = None
        self._thread: threading.Thread | None = None

    @classmethod
    def _adopt(cls) -> Task:
        task = cls.__new__(cls)
        task._init_state()
        task._thread = threading.current_thread()
        return task

    def _finish(self) -> None:
        with _lock:
            self._finished = True
            while self._inbox:
                message = self._inbox.popleft()
                message.failed = True
                message.sender._pending = None
                message.sender._reply_cond.notify_all()

    @property
    def finished(self) -> bool:
        """True once the task's function has returned."""
        return self._finished

    @property
    def name(self) -> str:
        """Name of the underlying thread."""
        return self._thread.name if self._thread is not None else "?"

    def __repr__(self) -> str:
        state = "finished" if self._finished else "running"
        return f"<Task {self.name} {state}>"

    def send(self, msg: Any) -> Any:
        """Send ``msg`` to this task and block until it is answered.

        Returns the value given to :meth:`reply`.  Raises RuntimeError if
        this task has finished, or finishes without taking the message.
        """
        sender = current_task()
        if sender is self:
            raise RuntimeError("a task cannot send a message to itself")
        with _lock:
            if self._finished:
                raise RuntimeError("the receiver has finished")
            message = _Message(sender, self, msg)
            sender._pending = message
            self._inbox.append(message)
            self._mail.notify_all()
            sender._reply_cond.wait_for(lambda: message.answered or message.failed)
            if message.failed:
                raise RuntimeError("the receiver finished without taking the message")
            return message.rc

    def reply(self, rc: Any) -> None:
        """Answer the message this task is blocked sending, waking it with ``rc``."""
        with _lock:
            message = self._pending
            if message is None:
                raise RuntimeError("this task does not wait for a reply")
            try:
                message.receiver._inbox.remove(message)
            except ValueError:
                pass
            message.rc = rc
            message.answered = True
            self._pending = None
            self._reply_cond.notify_all()

    def wait(self) -> Any:
        """Wait for the task to finish and return its exit code.

        An exception raised by the task's function is raised again here.
        A task may be waited for only once.
        """
        with _lock:
            if self._joined:
                raise RuntimeError("task joined twice")
            if self._thread is threading.current_thread():
                raise RuntimeError("a task cannot wait for itself")
            self._joined = True
        assert self._thread is not None
        self._thread.join()
        if self._error is not None:
            raise self._error
        return self._rc


def current_task() -> Task:
    """Return the task running the calling thread."""
    task = getattr(_local, "task", None)
    if task is None:
        task = Task._adopt()
        _local.task = task
    return task


def receive(timeout: int = -1) -> tuple[Task | None, Any]:
    """Take the next message sent to the calling task.

    ``timeout`` is in milliseconds: negative waits forever, zero does not
    wait.  Returns ``(sender, message)``, or ``(None, None)`` when no
    message arrived in time.
    """
    me = current_task()
    with _lock:
        if not me._inbox and timeout != 0:
            limit = None if timeout < 0 else timeout / 1000
            me._mail.wait_for(lambda: bool(me._inbox), limit)
        if not me._inbox:
            return None, None
        message = me._inbox.popleft()
        return message.sender, message.body


class Monitor:
    """A non-reentrant mutex with an implicit condition."""

    def __init__(self) -> None:
        self._mutex = Mutex()
        self._cond = Condition(self._mutex)

    @property
    def mutex(self) -> Mutex:
        """The underlying mutex."""
        return self._mutex

    def enter(self) -> None:
        """Enter the monitor."""
        self._mutex.lock()

    def exit(self) -> None:
        """Leave the monitor."""
        self._mutex.unlock()

    def wait(self) -> None:
        """Release the monitor and block until notified and re-entered."""
        self._cond.wait()

    def notify_all(self) -> None:
        """Resume every task waiting in :meth:`wait`."""
        self._cond.broadcast()

    def make_condition(self) -> Condition:
        """Create a further condition bound to this monitor."""
        return Condition(self._mutex)

    def __enter__(self) -> Monitor:
        self.enter()
        return self

    def __exit__(self, *args: Any) -> None:
        self.exit()