from datetime import date, datetime

from recrut_core.utils.formatting import (
    format_duration,
    format_long_date,
    format_short_date,
    format_short_datetime,
    format_time,
)


def test_format_duration():
    assert format_duration(45) == "45 min"
    assert format_duration(60) == "1h"
    assert format_duration(90) == "1h30"
    assert format_duration(125) == "2h5"
    assert format_duration(0) == "0 min"


def test_format_long_date_fr():
    assert format_long_date(date(2025, 3, 3)) == "lundi 3 mars 2025"
    assert format_long_date(date(2025, 8, 15), weekday=False) == "15 août 2025"


def test_short_formats():
    dt = datetime(2025, 1, 2, 9, 5)
    assert format_time(dt) == "09:05"
    assert format_short_datetime(dt) == "02/01/2025 09:05"
    assert format_short_date(dt) == "02/01/2025"
    assert format_short_datetime(None) == "-"
