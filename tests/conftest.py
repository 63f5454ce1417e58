import pytest

from weatherlogic import WeatherCollection
from weatherlogic.core import Record, Timestamp

HEADER = [
    "WAST", "DP", "Dta", "Dts", "EV", "QFE", "QFF", "QNH", "RF", "RH",
    "S", "SR", "ST1", "ST2", "ST3", "ST4", "Sx", "T",
]


def make_row(ts="1/01/2010 9:00", wind="10", solar="100", temp="20", width=18):
    fields = ["0"] * max(width, len(HEADER))
    fields[0] = ts
    fields[10] = wind
    fields[11] = solar
    fields[17] = temp
    return fields[:width]


def write_csv(path, rows, header=HEADER):
    lines = [",".join(header)] + [",".join(r) for r in rows]
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def rec():
    def _rec(year, month, day=1, hour=0, minute=0, wind=0.0, temp=0.0, solar=0.0):
        return Record(Timestamp(year, month, day, hour, minute), wind, temp, solar)

    return _rec


@pytest.fixture
def two_year_records(rec):
    # 2019 and 2020, every month, days 1..3 at 09:00
    out = []
    for year in (2019, 2020):
        for month in range(1, 13):
            for day in (1, 2, 3):
                out.append(
                    rec(year, month, day, 9, 0,
                        wind=float(month + day),
                        temp=float(year - 2000 + month),
                        solar=float(day * 100))
                )
    return out


@pytest.fixture
def loaded(two_year_records):
    c = WeatherCollection()
    for r in two_year_records:
        c.add_record(r)
    return c


@pytest.fixture
def row():
    return make_row


@pytest.fixture
def csv_writer():
    return write_csv
