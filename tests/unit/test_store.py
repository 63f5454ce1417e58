"""Binary search tree behaviour of OrderedStore."""

import copy
import random

import pytest

from weatherlogic import exceptions
from weatherlogic.core import OrderedStore


def test_empty_store_is_well_defined():
    s = OrderedStore()
    assert s.size() == 0
    assert s.height() == -1
    assert s.is_empty()
    assert s.search(5) is None
    seen = []
    s.traverse(seen.append)
    assert seen == []
    assert s.check_invariant()


def test_invariant_holds_after_every_insert():
    rnd = random.Random(7)
    keys = [rnd.randint(0, 60) for _ in range(200)]  # plenty of repeats
    s = OrderedStore(duplicate_policy="ignore")
    for k in keys:
        s.insert(k)
        assert s.check_invariant()
    assert s.size() == len(set(keys))


def test_duplicate_insert_does_not_change_size():
    s = OrderedStore()
    for k in (5, 3, 8):
        s.insert(k)
    assert s.insert(3) == "rejected"
    assert s.size() == 3


def test_reject_policy_logs(caplog):
    s = OrderedStore()
    s.insert(1)
    with caplog.at_level("WARNING"):
        s.insert(1)
    assert "duplicate" in caplog.text.lower()


def test_raise_policy():
    s = OrderedStore(duplicate_policy="raise")
    s.insert(1)
    with pytest.raises(exceptions.DuplicateRecordError):
        s.insert(1)
    assert s.size() == 1


def test_overwrite_policy_replaces_payload(rec):
    s = OrderedStore(duplicate_policy="overwrite")
    s.insert(rec(2020, 1, 1, wind=1.0))
    outcome, slot = s.insert_slot(rec(2020, 1, 1, wind=9.0))
    assert outcome == "replaced"
    assert s.size() == 1
    assert s.get(slot).wind_speed == 9.0


def test_unknown_policy_rejected():
    with pytest.raises(exceptions.StoreError):
        OrderedStore(duplicate_policy="merge")  # type: ignore[arg-type]


def test_in_order_is_sorted_for_any_permutation():
    keys = list(range(50))
    expected = None
    for seed in range(5):
        shuffled = keys[:]
        random.Random(seed).shuffle(shuffled)
        s = OrderedStore()
        for k in shuffled:
            s.insert(k)
        out = list(s.walk("in"))
        assert out == keys
        assert s.size() == len(keys)
        if expected is None:
            expected = out
        assert out == expected


def test_pre_and_post_order():
    #       4
    #     2   6
    #    1 3 5 7
    s = OrderedStore()
    for k in (4, 2, 6, 1, 3, 5, 7):
        s.insert(k)
    assert list(s.walk("pre")) == [4, 2, 1, 3, 6, 5, 7]
    assert list(s.walk("post")) == [1, 3, 2, 5, 7, 6, 4]
    assert s.height() == 2


def test_sorted_input_degenerates_without_recursion_error():
    s = OrderedStore()
    n = 2000
    for k in range(n):
        s.insert(k)
    assert s.height() == n - 1
    assert s.size() == n
    assert s.check_invariant()
    assert list(s) == list(range(n))


def test_search_and_find_slot():
    s = OrderedStore()
    for k in (10, 5, 15):
        s.insert(k)
    assert s.search(15) == 15
    assert s.search(11) is None
    slot = s.find_slot(5)
    assert slot is not None and s.get(slot) == 5
    assert 10 in s and 11 not in s


def test_get_bad_slot():
    s = OrderedStore()
    with pytest.raises(exceptions.StoreError):
        s.get(0)


def test_accumulate_passes_one_accumulator():
    s = OrderedStore()
    for k in (3, 1, 2):
        s.insert(k)

    def visit(item, acc):
        acc["sum"] += item
        acc["seen"].append(item)

    acc = s.accumulate(visit, {"sum": 0, "seen": []})
    assert acc == {"sum": 6, "seen": [1, 2, 3]}


def test_copy_is_deep(rec):
    s = OrderedStore()
    for d in (2, 1, 3):
        s.insert(rec(2020, 1, d))
    c = s.copy()
    assert list(c) == list(s)
    for a, b in zip(s, c):
        assert a is not b
    c.insert(rec(2020, 1, 4))
    assert s.size() == 3 and c.size() == 4
    assert copy.deepcopy(s).size() == 3


def test_clear():
    s = OrderedStore()
    s.insert(1)
    s.clear()
    assert s.is_empty() and s.size() == 0
