from weatherlogic.core import Record, Timestamp


def test_equality_ignores_measurements():
    ts = Timestamp(2020, 6, 1, 9, 0)
    assert Record(ts, 1.0, 2.0, 3.0) == Record(ts, 9.0, 9.0, 9.0)
    assert hash(Record(ts, 1.0)) == hash(Record(ts, 2.0))


def test_ordering_follows_timestamp(rec):
    early = rec(2020, 1, 1, wind=50.0)
    late = rec(2020, 1, 2, wind=1.0)
    assert early < late
    assert late > early


def test_copy_is_detached_but_equal(rec):
    r = rec(2020, 6, 1, wind=4.5, temp=20.0, solar=300.0)
    c = r.copy()
    assert c is not r
    assert c.same_values(r)


def test_str_format(rec):
    r = rec(2010, 1, 1, 9, 0, wind=10.5, temp=21.0, solar=350.0)
    assert str(r) == "1/1/2010 9:00 | WS: 10.5 | Temp: 21 | Solar: 350"
