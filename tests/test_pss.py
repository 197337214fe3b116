import random

import pytest

from auctionkit.pss import (
    FullPriQueue,
    HashMap,
    PriQueue,
    Queue,
    equals_strings,
    hash_ptr,
    hash_string,
    pointer_equals,
    sort,
)


def _cmp(a, b):
    return (a > b) - (a < b)


# --- hashing ---------------------------------------------------------------

def test_hash_string_empty_is_seed():
    assert hash_string("") == 2


def test_hash_string_single_char():
    assert hash_string("a") == 495


def test_hash_string_is_32_bit_and_deterministic():
    text = "subasta" * 50 + "ñ"
    value = hash_string(text)
    assert 0 <= value <= 0xFFFFFFFF
    assert hash_string(text) == value
    assert hash_string(text.encode()) == value


def test_hash_ptr_identity():
    obj = object()
    assert hash_ptr(obj) == hash_ptr(obj)
    assert 0 <= hash_ptr(obj) <= 0xFFFFFFFF


def test_equality_helpers():
    a = "".join(["ab", "c"])
    b = "".join(["a", "bc"])
    assert equals_strings(a, b)
    assert not equals_strings(a, "abd")
    x = [1]
    assert pointer_equals(x, x)
    assert not pointer_equals(x, [1])


# --- HashMap ---------------------------------------------------------------

def test_hashmap_define_query_delete():
    m = HashMap(10, hash_string, equals_strings)
    assert m.define("k", 1) is False
    assert m.define("k", 2) is True
    assert m.query("k") == 2
    assert "k" in m
    assert len(m) == 1
    assert m.delete("k") == 2
    assert m.delete("k") is None
    assert "k" not in m
    assert m.query("k") is None
    assert len(m) == 0


def test_hashmap_identity_keys():
    m = HashMap(7)
    a, b = [1], [1]
    m.define(a, "a")
    assert a in m
    assert b not in m
    assert m.query(b) is None


def test_hashmap_iteration_bucket_then_chain_order():
    m = HashMap(4, lambda k: k, lambda x, y: x == y)
    for key in (5, 1, 2):
        m.define(key, key * 10)
    assert list(m) == [1, 5, 2]
    assert list(m.items()) == [(1, 10), (5, 50), (2, 20)]


def test_hashmap_many_entries_round_trip():
    m = HashMap(13, hash_string, equals_strings)
    data = {f"key{i}": i for i in range(200)}
    for k, v in data.items():
        m.define(k, v)
    assert len(m) == 200
    assert dict(m.items()) == data
    for k in list(data)[::2]:
        assert m.delete(k) == data[k]
    assert len(m) == 100
    assert sorted(m.values()) == sorted(list(data.values())[1::2])


def test_hashmap_delete_middle_of_chain():
    m = HashMap(1, lambda k: 0, lambda x, y: x == y)
    for key in "abc":
        m.define(key, key.upper())
    assert m.delete("b") == "B"
    assert list(m) == ["c", "a"]


def test_hashmap_rejects_zero_capacity():
    with pytest.raises(ValueError):
        HashMap(0)


# --- Queue -----------------------------------------------------------------

def test_queue_fifo_and_push_front():
    q = Queue()
    for item in ("a", "b", "c"):
        q.put(item)
    q.push_front("z")
    assert len(q) == 4
    assert q.peek() == "z"
    assert [q.get() for _ in range(4)] == ["z", "a", "b", "c"]
    assert q.get() is None
    assert q.peek() is None


def test_queue_remove_and_contains_by_identity():
    q = Queue()
    a, b, c = [1], [1], [2]
    q.put(a)
    q.put(c)
    assert a in q
    assert b not in q
    assert q.remove(b) is False
    assert q.remove(a) is True
    assert a not in q
    assert len(q) == 1
    assert q.get() is c


# --- FullPriQueue ----------------------------------------------------------

def test_full_pri_queue_orders_greatest_first():
    rng = random.Random(7)
    values = [rng.randint(-100, 100) for _ in range(60)]
    q = FullPriQueue(_cmp)
    for v in values:
        q.put(v)
    assert len(q) == 60
    assert q.peek() == max(values)
    assert [q.get() for _ in range(60)] == sorted(values, reverse=True)
    assert len(q) == 0


def test_full_pri_queue_empty():
    q = FullPriQueue(_cmp, 2)
    assert q.peek() is None
    with pytest.raises(IndexError):
        q.get()


def test_full_pri_queue_rejects_bad_size():
    with pytest.raises(ValueError):
        FullPriQueue(_cmp, 0)


# --- PriQueue --------------------------------------------------------------

def test_pri_queue_lowest_first():
    q = PriQueue()
    q.put("x", 3.0)
    q.put("y", 1.0)
    q.put("z", 2.0)
    assert q.best() == 1.0
    assert q.peek() == "y"
    assert [q.get(), q.get(), q.get()] == ["y", "z", "x"]
    assert q.best() == 0
    assert q.peek() is None
    with pytest.raises(IndexError):
        q.get()


def test_pri_queue_delete_keeps_order():
    rng = random.Random(3)
    items = [(object(), rng.uniform(0, 50)) for _ in range(80)]
    q = PriQueue()
    for elem, pri in items:
        q.put(elem, pri)
    removed = items[::3]
    for elem, _ in removed:
        assert q.delete(elem) is True
    assert q.delete(removed[0][0]) is False
    kept = [pri for i, (_, pri) in enumerate(items) if i % 3]
    assert len(q) == len(kept)
    out = []
    while len(q):
        out.append(q.best())
        q.get()
    assert out == sorted(kept)


def test_pri_queue_delete_missing():
    q = PriQueue()
    q.put("a", 1)
    assert q.delete("b") is False
    assert len(q) == 1


# --- sort ------------------------------------------------------------------

def _compare(seq, i, j):
    return _cmp(seq[i], seq[j])


def _swap(seq, i, j):
    seq[i], seq[j] = seq[j], seq[i]


def test_sort_whole_list():
    rng = random.Random(11)
    data = [rng.randint(0, 1000) for _ in range(150)]
    expected = sorted(data)
    sort(data, 0, len(data) - 1, _compare, _swap)
    assert data == expected


def test_sort_subrange_only():
    data = [9, 5, 4, 3, 2, 0]
    sort(data, 1, 4, _compare, _swap)
    assert data[0] == 9 and data[-1] == 0
    assert data[1:5] == sorted([5, 4, 3, 2])


def test_sort_empty_range_untouched():
    data = [3, 1, 2]
    sort(data, 2, 1, _compare, _swap)
    assert data == [3, 1, 2]