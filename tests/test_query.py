"""Month / year-month retrieval over a loaded collection."""

import pandas as pd

from weatherlogic import query


def test_year_month_round_trip(loaded):
    out = query.by_year_month(loaded.store, 2020, 6)
    assert len(out) == 3
    assert all(r.year == 2020 and r.month == 6 for r in out)
    assert [r.timestamp.day for r in out] == [1, 2, 3]


def test_by_month_spans_years(loaded):
    out = query.by_month(loaded.store, 6)
    assert len(out) == 6
    assert {r.year for r in out} == {2019, 2020}
    assert out == sorted(out)


def test_invalid_params_give_empty(loaded):
    assert query.by_month(loaded.store, 13) == []
    assert query.by_month(loaded.store, 0) == []
    assert query.by_year_month(loaded.store, 0, 6) == []
    assert query.by_year_month(loaded.store, 2020, 13) == []
    assert query.by_index(loaded.store, loaded.index, 13) == []


def test_results_are_detached_copies(loaded):
    out = query.by_year_month(loaded.store, 2019, 1)
    stored = {id(r) for r in loaded.store}
    assert out and not any(id(r) in stored for r in out)
    del out[:]
    assert loaded.total_records() == 72


def test_by_index_matches_traversal(loaded):
    via_index = query.by_index(loaded.store, loaded.index, 3)
    via_walk = query.by_month(loaded.store, 3)
    assert sorted(via_index) == via_walk
    assert all(a.same_values(b) for a, b in zip(sorted(via_index), via_walk))


def test_select_with_custom_predicate(loaded):
    hot = query.select(loaded.store, lambda r: r.temperature > 30)
    assert hot and all(r.temperature > 30 for r in hot)


def test_column_and_frame(loaded):
    recs = query.by_year_month(loaded.store, 2019, 2)
    assert query.column(recs, "solar_radiation") == [100.0, 200.0, 300.0]
    df = query.to_frame(recs)
    assert list(df.columns) == ["wind_speed", "temperature", "solar_radiation"]
    assert df.index.name == "timestamp"
    assert df.index[0] == pd.Timestamp("2019-02-01 09:00")
    assert df["solar_radiation"].sum() == 600.0


def test_empty_frame():
    df = query.to_frame([])
    assert df.empty
    assert list(df.columns) == ["wind_speed", "temperature", "solar_radiation"]
