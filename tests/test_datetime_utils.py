"""Tests for local calendar-date marshalling."""
import random
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from microgreens.utils.datetime_utils import (
    InvalidDateFormat,
    from_local_date_string,
    is_valid_date_string,
    iso_to_local_date_string,
    parse_date_filter,
    to_local_date_string,
    to_local_midnight,
)

TIMEZONES = [
    "UTC",
    "America/Mexico_City",
    "America/Los_Angeles",
    "America/St_Johns",
    "Asia/Kolkata",
    "Australia/Adelaide",
    "Pacific/Kiritimati",
    "Pacific/Pago_Pago",
]


def _random_dates(n, seed=20250112):
    rnd = random.Random(seed)
    start = date(2000, 1, 1)
    return [start + timedelta(days=rnd.randrange(0, 365 * 35)) for _ in range(n)]


# --------------------
# Round-trip
# --------------------
@pytest.mark.parametrize("tz_name", TIMEZONES)
def test_round_trip_random_dates(tz_name):
    tz = ZoneInfo(tz_name)
    for d in _random_dates(1000):
        text = to_local_date_string(d)
        assert from_local_date_string(text) == d

        midnight = to_local_midnight(text, tz)
        assert to_local_date_string(midnight) == text
        # El mismo instante visto en UTC debe volver al mismo día local
        utc_iso = midnight.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
        assert iso_to_local_date_string(utc_iso, tz) == text


@pytest.mark.parametrize("tz_name,day", [
    ("America/Los_Angeles", date(2025, 3, 9)),    # inicio de horario de verano
    ("America/Los_Angeles", date(2025, 11, 2)),   # fin de horario de verano
    ("Australia/Adelaide", date(2025, 4, 6)),
    ("Australia/Adelaide", date(2025, 10, 5)),
    ("America/St_Johns", date(2025, 3, 9)),
])
def test_round_trip_across_dst_changes(tz_name, day):
    tz = ZoneInfo(tz_name)
    text = to_local_date_string(day)
    midnight = to_local_midnight(day, tz)
    assert to_local_date_string(midnight) == text
    assert iso_to_local_date_string(midnight.astimezone(timezone.utc).isoformat(), tz) == text


def test_to_local_date_string_uses_local_components():
    # 23:30 en Ciudad de México es el día siguiente en UTC
    dt = datetime(2025, 1, 5, 23, 30, tzinfo=ZoneInfo("America/Mexico_City"))
    assert to_local_date_string(dt) == "2025-01-05"
    assert to_local_date_string(date(2025, 1, 5)) == "2025-01-05"


# --------------------
# Validación
# --------------------
@pytest.mark.parametrize("value,expected", [
    ("2025-02-28", True),
    ("2024-02-29", True),
    ("2025-02-30", False),
    ("2025-13-01", False),
    ("2025-2-3", False),
    ("05/01/2025", False),
    ("2025-01-05\n", False),
    ("\uff12\uff10\uff12\uff15-01-05", False),
    ("20250105", False),
    (" 2025-01-05", False),
    ("", False),
    (None, False),
])
def test_is_valid_date_string(value, expected):
    assert is_valid_date_string(value) is expected


@pytest.mark.parametrize("value", ["2025-02-30", "2025/01/05", "ayer", ""])
def test_from_local_date_string_rejects_malformed(value):
    with pytest.raises(InvalidDateFormat):
        from_local_date_string(value)


def test_invalid_date_format_is_value_error():
    with pytest.raises(ValueError) as exc:
        from_local_date_string("2025-02-30")
    assert "invalid_date_format" in str(exc.value)


# --------------------
# Timestamps ISO
# --------------------
def test_iso_timestamp_converted_to_app_timezone():
    tz = ZoneInfo("America/Mexico_City")
    assert iso_to_local_date_string("2025-01-05T06:00:00.000Z", tz) == "2025-01-05"
    assert iso_to_local_date_string("2025-01-05T05:59:59Z", tz) == "2025-01-04"


def test_iso_naive_timestamp_keeps_its_own_day():
    assert iso_to_local_date_string("2025-01-05T23:30:00", ZoneInfo("Asia/Kolkata")) == "2025-01-05"


def test_iso_plain_date_passes_through():
    assert iso_to_local_date_string("2025-01-05") == "2025-01-05"
    with pytest.raises(InvalidDateFormat):
        iso_to_local_date_string("2025-01-32")


@pytest.mark.parametrize("value", ["20250105", "2025-W01-7", "2025-01-05\n", "2025-01-05X06:00:00", "\u0662025-01-05"])
def test_iso_rejects_non_dashed_forms(value):
    with pytest.raises(InvalidDateFormat):
        iso_to_local_date_string(value)


def test_parse_date_filter():
    assert parse_date_filter(None) is None
    assert parse_date_filter("") is None
    assert parse_date_filter("2025-01-05") == date(2025, 1, 5)
    with pytest.raises(InvalidDateFormat):
        parse_date_filter("not-a-date")
