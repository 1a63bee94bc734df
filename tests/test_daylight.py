from datetime import date, datetime, timedelta, timezone

import pytest

from suntrigger.core.daylight import Daylight
from suntrigger.core.errors import InputRangeError, NeverRisesError
from suntrigger.core.timebase import Timebase


def test_sunrise_sunset_pair_in_local_time():
  dl = Daylight(latitude=51.5074, longitude=-0.1278, tz="Europe/London")
  sunrise, sunset = dl.sunrise_sunset(date(2024, 6, 21))
  assert sunrise < sunset
  assert sunrise.utcoffset() == timedelta(hours=1)
  assert 4 <= sunrise.hour <= 5
  assert 21 <= sunset.hour <= 22


def test_invalid_coordinates_rejected_on_construction():
  with pytest.raises(InputRangeError):
    Daylight(latitude=95.0, longitude=0.0)


def test_next_sunset_same_day():
  dl = Daylight(51.5074, -0.1278)
  after = datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc)
  when = dl.next_event("sunset", after)
  assert when.date() == date(2024, 6, 21)
  assert when > after


def test_next_sunrise_rolls_to_tomorrow():
  dl = Daylight(51.5074, -0.1278)
  after = datetime(2024, 6, 21, 12, 0, tzinfo=timezone.utc)
  when = dl.next_event("sunrise", after)
  assert when.date() == date(2024, 6, 22)


def test_next_sunset_west_of_greenwich():
  # SF sunset lands just after midnight UTC of the following day.
  dl = Daylight(37.7749, -122.4194, tz="America/Los_Angeles")
  after = datetime(2024, 12, 21, 12, 0, tzinfo=dl.tz)
  when = dl.next_event("sunset", after)
  assert after < when < after + timedelta(hours=12)
  assert when.date() == date(2024, 12, 21)
  assert 16 <= when.hour <= 17


def test_next_event_skips_to_end_of_polar_night():
  dl = Daylight(85.0, 0.0)
  with pytest.raises(NeverRisesError):
    dl.next_event("sunrise", datetime(2024, 12, 1, tzinfo=timezone.utc), max_days=10)
  when = dl.next_event("sunrise", datetime(2024, 12, 1, tzinfo=timezone.utc))
  assert when.year == 2025
  assert when.month in (2, 3)


def test_next_event_requires_aware_datetime():
  with pytest.raises(ValueError):
    Daylight(0.0, 0.0).next_event("sunrise", datetime(2024, 1, 1))


def test_day_rows_record_polar_conditions():
  dl = Daylight(85.0, 0.0)
  winter, summer = dl.day_rows([date(2024, 12, 21), date(2024, 6, 21)])
  assert winter["condition"] == "never_rises"
  assert winter["sunrise"] is None and winter["sunset"] is None
  assert summer["condition"] == "never_sets"
  ordinary = Daylight(45.0, 7.0).day_rows([date(2024, 3, 20)])[0]
  assert ordinary["condition"] is None
  assert ordinary["sunrise"].startswith("2024-03-20T")


def test_timebase_covers_leap_year():
  days = list(Timebase(2024).days())
  assert len(days) == 366
  assert days[0] == date(2024, 1, 1)
  assert days[-1] == date(2024, 12, 31)


@pytest.mark.parametrize("lat, lon, tz", [
  (37.7749, -122.4194, "America/Los_Angeles"),
  (35.68, 139.69, "Asia/Tokyo"),
  (-33.87, 151.21, "Australia/Sydney"),
  (61.22, -149.90, "America/Anchorage"),
])
def test_sunrise_before_sunset_on_local_day(lat, lon, tz):
  dl = Daylight(lat, lon, tz)
  d = date(2024, 1, 1)
  while d.year == 2024:
    sunrise, sunset = dl.sunrise_sunset(d)
    assert sunrise.astimezone(dl.tz).date() == d, d
    assert sunset.astimezone(dl.tz).date() == d, d
    assert sunrise < sunset, d
    d += timedelta(days=3)


def test_local_pairing_far_from_greenwich():
  sf = Daylight(37.7749, -122.4194, tz="America/Los_Angeles")
  sunrise, sunset = sf.sunrise_sunset(date(2024, 12, 21))
  assert (sunrise.day, sunrise.hour) == (21, 7)
  assert (sunset.day, sunset.hour) == (21, 16)
  tokyo = Daylight(35.68, 139.69, tz="Asia/Tokyo")
  sunrise, sunset = tokyo.sunrise_sunset(date(2024, 12, 21))
  assert (sunrise.day, sunrise.hour) == (21, 6)
  assert (sunset.day, sunset.hour) == (21, 16)


def test_day_rows_follow_local_date():
  row = Daylight(37.7749, -122.4194, tz="America/Los_Angeles").day_rows([date(2024, 12, 21)])[0]
  assert row["sunrise"].startswith("2024-12-21T07:")
  assert row["sunset"].startswith("2024-12-21T16:")


def test_local_event_at_calendar_edges():
  dl = Daylight(0.0, 0.0)
  assert dl.sunrise(date.min).date() == date.min
  assert dl.sunset(date.max).date() == date.max


def test_timebase_last_representable_year():
  days = list(Timebase(9999).days())
  assert len(days) == 365
  assert days[-1] == date.max
