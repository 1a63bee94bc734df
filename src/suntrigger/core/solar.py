"""Sunrise and sunset times for a place and calendar date.

Single-pass approximation of the sun's position (the almanac algorithm
published by the US Naval Observatory). The result is accurate to a minute
or two, which is plenty for time-of-day automation triggers.

Everything here is pure: no I/O, no logging, no shared state.
"""
from dataclasses import dataclass
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from typing import Union
from zoneinfo import ZoneInfo
import math

from .errors import InputRangeError, NeverRisesError, NeverSetsError

# Sun centre 50 arcmin below the horizon: refraction plus solar radius.
ZENITH = 90.833

SUNRISE_SEED_HOUR = 6.0
SUNSET_SEED_HOUR = 18.0

ANOMALY_RATE = 0.9856
ANOMALY_OFFSET = 3.289
CENTER_COEFF_1 = 1.916
CENTER_COEFF_2 = 0.020
PERIHELION_LONGITUDE = 282.634
OBLIQUITY_TAN = 0.91764
OBLIQUITY_SIN = 0.39782
SIDEREAL_RATE = 0.06571
SIDEREAL_OFFSET = 6.622

TzLike = Union[tzinfo, str, None]


class EventKind(str, Enum):
  SUNRISE = "sunrise"
  SUNSET = "sunset"


@dataclass(frozen=True)
class GeoCoordinate:
  latitude: float
  longitude: float

  def __post_init__(self):
    validate_coordinates(self.latitude, self.longitude)


def validate_coordinates(latitude: float, longitude: float) -> None:
  if not -90.0 <= latitude <= 90.0:
    raise InputRangeError("latitude", latitude, -90, 90)
  if not -180.0 <= longitude <= 180.0:
    raise InputRangeError("longitude", longitude, -180, 180)


def resolve_tz(tz: TzLike, day: Union[date, datetime, None] = None) -> tzinfo:
  """Turn a tzinfo, an IANA name or None into a tzinfo.

  None falls back to the tzinfo of an aware datetime `day`, then to UTC.
  Unknown names raise zoneinfo.ZoneInfoNotFoundError.
  """
  if tz is None:
    if isinstance(day, datetime) and day.tzinfo is not None:
      return day.tzinfo
    return timezone.utc
  if isinstance(tz, str):
    if tz.upper() == "UTC":
      return timezone.utc
    return ZoneInfo(tz)
  return tz


def _sin(deg: float) -> float:
  return math.sin(math.radians(deg))


def _cos(deg: float) -> float:
  return math.cos(math.radians(deg))


def _tan(deg: float) -> float:
  return math.tan(math.radians(deg))


def _normalize(value: float, period: float) -> float:
  value = value % period
  # float modulo of a tiny negative value can round up to the period itself
  return value if value < period else 0.0


def _right_ascension_hours(true_longitude: float) -> float:
  ra = _normalize(math.degrees(math.atan(OBLIQUITY_TAN * _tan(true_longitude))), 360.0)
  # atan only knows two quadrants; pull RA into the same one as L
  l_quadrant = math.floor(true_longitude / 90.0) * 90.0
  ra_quadrant = math.floor(ra / 90.0) * 90.0
  return (ra + l_quadrant - ra_quadrant) / 15.0


def utc_hours(latitude: float, longitude: float, on: date, event: EventKind) -> float:
  """Fractional UTC hour of the event, in [0, 24).

  Raises NeverRisesError / NeverSetsError for polar night / polar day.
  Coordinates are assumed valid.
  """
  lng_hour = longitude / 15.0
  seed = SUNRISE_SEED_HOUR if event is EventKind.SUNRISE else SUNSET_SEED_HOUR
  t = on.timetuple().tm_yday + (seed - lng_hour) / 24.0

  mean_anomaly = ANOMALY_RATE * t - ANOMALY_OFFSET
  true_longitude = _normalize(
    mean_anomaly
    + CENTER_COEFF_1 * _sin(mean_anomaly)
    + CENTER_COEFF_2 * _sin(2 * mean_anomaly)
    + PERIHELION_LONGITUDE,
    360.0,
  )
  ra = _right_ascension_hours(true_longitude)

  sin_dec = OBLIQUITY_SIN * _sin(true_longitude)
  cos_dec = math.cos(math.asin(sin_dec))

  cos_h = (_cos(ZENITH) - sin_dec * _sin(latitude)) / (cos_dec * _cos(latitude))
  if cos_h > 1:
    raise NeverRisesError(latitude, on)
  if cos_h < -1:
    raise NeverSetsError(latitude, on)

  h = math.degrees(math.acos(cos_h))
  if event is EventKind.SUNRISE:
    h = 360.0 - h
  h /= 15.0

  local_mean_time = h + ra - SIDEREAL_RATE * t - SIDEREAL_OFFSET
  return _normalize(local_mean_time - lng_hour, 24.0)


def compute(
  latitude: float,
  longitude: float,
  day: Union[date, datetime],
  event: Union[EventKind, str],
  tz: TzLike = None,
) -> datetime:
  """Instant of sunrise or sunset at (latitude, longitude) on `day`.

  Args:
    latitude: degrees, -90..90
    longitude: degrees, -180..180 (east positive)
    day: the calendar date; for a datetime only its date part is used
    event: EventKind or "sunrise" / "sunset"
    tz: zone the result is expressed in (tzinfo or IANA name)

  Returns:
    Aware datetime, whole seconds. The instant is built on `day` in UTC, so
    for places far from Greenwich it can land on the neighbouring local date.

  Raises:
    InputRangeError: coordinates out of range (checked before anything else)
    NeverRisesError / NeverSetsError: polar night / polar day
  """
  validate_coordinates(latitude, longitude)
  event = EventKind(event)
  out_tz = resolve_tz(tz, day)
  on = day.date() if isinstance(day, datetime) else day

  ut = utc_hours(latitude, longitude, on, event)

  # truncate, never round
  hours = int(ut)
  minutes = int((ut - hours) * 60)
  seconds = int(((ut - hours) * 60 - minutes) * 60)

  instant = datetime(on.year, on.month, on.day, hours, minutes, seconds, tzinfo=timezone.utc)
  return instant.astimezone(out_tz)


def compute_for(coord: GeoCoordinate, day: Union[date, datetime], event: Union[EventKind, str], tz: TzLike = None) -> datetime:
  return compute(coord.latitude, coord.longitude, day, event, tz)


def sunrise(latitude: float, longitude: float, day: Union[date, datetime], tz: TzLike = None) -> datetime:
  return compute(latitude, longitude, day, EventKind.SUNRISE, tz)


def sunset(latitude: float, longitude: float, day: Union[date, datetime], tz: TzLike = None) -> datetime:
  return compute(latitude, longitude, day, EventKind.SUNSET, tz)
