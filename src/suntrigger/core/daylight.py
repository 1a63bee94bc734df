from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional, Union

from .errors import PolarConditionError
from .solar import EventKind, GeoCoordinate, compute_for, resolve_tz


@dataclass
class Daylight:
  latitude: float
  longitude: float
  tz: Union[tzinfo, str] = "UTC"
  coord: GeoCoordinate = field(init=False, repr=False)

  def __post_init__(self):
    self.coord = GeoCoordinate(self.latitude, self.longitude)
    self.tz = resolve_tz(self.tz)

  def event(self, d: date, kind: Union[EventKind, str]) -> datetime:
    return compute_for(self.coord, d, kind, self.tz)

  def local_event(self, d: date, kind: Union[EventKind, str]) -> datetime:
    """Sunrise/sunset falling on local date `d` in `self.tz`.

    event() builds the instant on the UTC date, so west of Greenwich a
    sunset can land on the previous local evening and far east a sunrise on
    the next local morning. Try d, d-1 and d+1 and keep the one that falls
    on d.
    """
    own_error: Optional[PolarConditionError] = None
    last_error: Optional[PolarConditionError] = None
    candidates = []
    for offset in (0, -1, 1):
      if (offset < 0 and d == date.min) or (offset > 0 and d == date.max):
        continue
      try:
        when = self.event(d + timedelta(days=offset), kind)
      except PolarConditionError as e:
        last_error = e
        if offset == 0:
          own_error = e
        continue
      if when.astimezone(self.tz).date() == d:
        return when
      candidates.append(when)
    if own_error is not None:
      raise own_error
    if not candidates:
      raise last_error
    # UT wrapped past midnight between neighbouring dates; move the
    # nearest result onto d by whole days.
    when = candidates[0]
    shift = timedelta(days=(d - when.astimezone(self.tz).date()).days)
    return (when.astimezone(timezone.utc) + shift).astimezone(self.tz)

  def sunrise(self, d: date) -> datetime:
    return self.local_event(d, EventKind.SUNRISE)

  def sunset(self, d: date) -> datetime:
    return self.local_event(d, EventKind.SUNSET)

  def sunrise_sunset(self, d: date) -> tuple[datetime, datetime]:
    # Polar days raise; callers that want a table should use day_rows().
    return self.sunrise(d), self.sunset(d)

  def next_event(self, kind: Union[EventKind, str], after: datetime, max_days: int = 366) -> datetime:
    """First sunrise/sunset strictly after `after`.

    Scanning starts one calendar day early because the instant is built on
    the UTC date, which can trail the local date west of Greenwich.
    """
    if after.tzinfo is None:
      raise ValueError("after must be timezone-aware")
    start = after.astimezone(self.tz).date() - timedelta(days=1)
    last_error: Optional[PolarConditionError] = None
    for offset in range(max_days + 2):
      try:
        when = self.event(start + timedelta(days=offset), kind)
      except PolarConditionError as e:
        last_error = e
        continue
      if when > after:
        return when
    if last_error is not None:
      raise last_error
    raise LookupError(f"no {EventKind(kind).value} within {max_days} days of {after.isoformat()}")

  def day_rows(self, days: Iterable[date]) -> list[dict]:
    rows = []
    for d in days:
      row = {"date": d.isoformat(), "sunrise": None, "sunset": None, "condition": None}
      for kind in EventKind:
        try:
          row[kind.value] = self.local_event(d, kind).isoformat()
        except PolarConditionError as e:
          row["condition"] = row["condition"] or e.kind
      rows.append(row)
    return rows
