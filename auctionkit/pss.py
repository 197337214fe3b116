"""General purpose containers: a chained hash map, a FIFO queue,
binary-heap priority queues and a generic in-place quicksort."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Iterator, MutableSequence

_MASK32 = 0xFFFFFFFF

HashFun = Callable[[Any], int]
EqualsFun = Callable[[Any, Any], bool]
PriComparator = Callable[[Any, Any], int]


# ---------------------------------------------------------------------------
# Hashing helpers
# ---------------------------------------------------------------------------

def hash_ptr(obj: Any) -> int:
    """Hash an object by identity, as an unsigned 32-bit value."""
    return (id(obj) // 16) & _MASK32


def pointer_equals(a: Any, b: Any) -> bool:
    """Identity comparison."""
    return a is b


def hash_string(text: str | bytes) -> int:
    """Multiplicative string hash over the (signed) bytes of ``text``."""
    data = text.encode() if isinstance(text, str) else bytes(text)
    total = 2
    for byte in data:
        signed = byte - 256 if byte > 127 else byte
        total = ((total + signed) * 5) & _MASK32
    return total


def equals_strings(a: str | bytes, b: str | bytes) -> bool:
    """Value comparison of two strings."""
    return a == b


# ---------------------------------------------------------------------------
# Hash map with separate chaining
# ---------------------------------------------------------------------------

@dataclass
class _Entry:
    key: Any
    val: Any
    next: _Entry | None = None


class HashMap:
    """Hash map with a fixed number of buckets and user supplied hashing.

    New entries go to the head of their bucket's chain; iteration visits
    buckets in order and each chain from its head.
    """

    def __init__(
        self,
        capacity: int,
        hash_fun: HashFun = hash_ptr,
        equals_fun: EqualsFun = pointer_equals,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._hash = hash_fun
        self._equals = equals_fun
        self._buckets: list[_Entry | None] = [None] * capacity
        self._count = 0

    def _index(self, key: Any) -> int:
        return (self._hash(key) & _MASK32) % self._capacity

    def _find(self, idx: int, key: Any) -> tuple[_Entry | None, _Entry | None]:
        """Return (previous entry, matching entry) within bucket ``idx``."""
        prev = None
        entry = self._buckets[idx]
        while entry is not None:
            if self._equals(key, entry.key):
                return prev, entry
            prev, entry = entry, entry.next
        return None, None

    def define(self, key: Any, val: Any) -> bool:
        """Associate ``val`` with ``key``; return True if the key existed."""
        idx = self._index(key)
        _, entry = self._find(idx, key)
        if entry is not None:
            entry.val = val
            return True
        self._buckets[idx] = _Entry(key, val, self._buckets[idx])
        self._count += 1
        return False

    def query(self, key: Any) -> Any:
        """Return the value for ``key`` or None when absent."""
        _, entry = self._find(self._index(key), key)
        return None if entry is None else entry.val

    def delete(self, key: Any) -> Any:
        """Remove ``key`` and return its value, or None when absent."""
        idx = self._index(key)
        prev, entry = self._find(idx, key)
        if entry is None:
            return None
        if prev is None:
            self._buckets[idx] = entry.next
        else:
            prev.next = entry.next
        self._count -= 1
        return entry.val

    def __contains__(self, key: Any) -> bool:
        return self._find(self._index(key), key)[1] is not None

    def items(self) -> Iterator[tuple[Any, Any]]:
        """Yield (key, value) pairs in bucket and chain order."""
        for head in self._buckets:
            entry = head
            while entry is not None:
                yield entry.key, entry.val
                entry = entry.next

    def values(self) -> Iterator[Any]:
        """Yield values in iteration order."""
        for _, val in self.items():
            yield val

    def __iter__(self) -> Iterator[Any]:
        for key, _ in self.items():
            yield key

    def __len__(self) -> int:
        return self._count


# ---------------------------------------------------------------------------
# FIFO queue
# ---------------------------------------------------------------------------

class Queue:
    """FIFO queue of objects compared by identity. Not thread safe."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def put(self, item: Any) -> None:
        """Append ``item`` at the back."""
        self._items.append(item)

    def push_front(self, item: Any) -> None:
        """Insert ``item`` at the front."""
        self._items.appendleft(item)

    def get(self) -> Any:
        """Remove and return the front item, or None when empty."""
        return self._items.popleft() if self._items else None

    def peek(self) -> Any:
        """Return the front item without removing it, or None when empty."""
        return self._items[0] if self._items else None

    def remove(self, item: Any) -> bool:
        """Remove ``item`` if queued; return whether it was found."""
        for idx, queued in enumerate(self._items):
            if queued is item:
                del self._items[idx]
                return True
        return False

    def __contains__(self, item: Any) -> bool:
        return any(queued is item for queued in self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


# ---------------------------------------------------------------------------
# Priority queues
# ---------------------------------------------------------------------------

class FullPriQueue:
    """Binary heap ordered by ``compare``; the greatest element comes first.

    ``compare(a, b)`` returns a positive number when ``a`` has higher
    priority than ``b``, negative when lower and zero when equal.
    """

    def __init__(self, compare: PriComparator, initial_size: int = 16) -> None:
        if initial_size < 1:
            raise ValueError("initial_size must be at least 1")
        self._compare = compare
        self._heap: list[Any] = []

    def _shift_up(self, i: int) -> None:
        heap, compare = self._heap, self._compare
        while i > 0:
            parent = (i - 1) // 2
            if compare(heap[parent], heap[i]) >= 0:
                break
            heap[parent], heap[i] = heap[i], heap[parent]
            i = parent

    def _shift_down(self, i: int) -> None:
        heap, compare = self._heap, self._compare
        last = len(heap) - 1
        while True:
            best = i
            left = 2 * i + 1
            if left <= last and compare(heap[left], heap[best]) > 0:
                best = left
            right = 2 * i + 2
            if right <= last and compare(heap[right], heap[best]) > 0:
                best = right
            if best == i:
                return
            heap[i], heap[best] = heap[best], heap[i]
            i = best

    def _remove_first(self, predicate: Callable[[Any], bool]) -> Any:
        """Remove the first stored element matching ``predicate``."""
        for k, stored in enumerate(self._heap):
            if predicate(stored):
                last = self._heap.pop()
                if k < len(self._heap):
                    self._heap[k] = last
                    self._shift_down(k)
                    self._shift_up(k)
                return stored
        return None

    def put(self, elem: Any) -> None:
        """Insert ``elem``."""
        self._heap.append(elem)
        self._shift_up(len(self._heap) - 1)

    def get(self) -> Any:
        """Remove and return the highest priority element."""
        if not self._heap:
            raise IndexError("get from an empty priority queue")
        result = self._heap[0]
        last = self._heap.pop()
        if self._heap:
            self._heap[0] = last
            self._shift_down(0)
        return result

    def peek(self) -> Any:
        """Return the highest priority element, or None when empty."""
        return self._heap[0] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)


@dataclass
class _PriObj:
    pri: float
    elem: Any


def _pri_compare(a: _PriObj, b: _PriObj) -> int:
    diff = b.pri - a.pri
    return 1 if diff > 0 else (-1 if diff < 0 else 0)


class PriQueue:
    """Priority queue of elements with numeric priorities; lowest first."""

    def __init__(self) -> None:
        self._queue = FullPriQueue(_pri_compare, 16)

    def put(self, elem: Any, pri: float) -> None:
        """Insert ``elem`` with priority ``pri``."""
        self._queue.put(_PriObj(pri, elem))

    def get(self) -> Any:
        """Remove and return the element with the lowest priority value."""
        return self._queue.get().elem

    def peek(self) -> Any:
        """Return the best element without removing it, or None when empty."""
        top = self._queue.peek()
        return None if top is None else top.elem

    def best(self) -> float:
        """Return the best priority value, or 0 when empty."""
        top = self._queue.peek()
        return 0 if top is None else top.pri

    def delete(self, elem: Any) -> bool:
        """Remove ``elem`` (by identity); return whether it was found."""
        return self._queue._remove_first(lambda obj: obj.elem is elem) is not None

    def __len__(self) -> int:
        return len(self._queue)


# ---------------------------------------------------------------------------
# Generic sort
# ---------------------------------------------------------------------------

def sort(
    seq: Any,
    left: int,
    right: int,
    compare: Callable[[Any, int, int], int],
    swap: Callable[[Any, int, int], None],
) -> None:
    """Quicksort positions ``left``..``right`` of ``seq`` in place.

    ``compare(seq, i, j)`` orders positions; ``swap(seq, i, j)`` exchanges them.
    """
    if left >= right:
        return
    swap(seq, left, (left + right) // 2)
    last = left
    for i in range(left + 1, right + 1):
        if compare(seq, i, left) < 0:
            last += 1
            swap(seq, last, i)
    swap(seq, left, last)
    sort(seq, left, last - 1, compare, swap)
    sort(seq, last + 1, right, compare, swap)


def _list_swap(seq: MutableSequence[Any], i: int, j: int) -> None:
    seq[i], seq[j] = seq[j], seq[i]