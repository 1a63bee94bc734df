from dataclasses import dataclass
from datetime import date, timedelta


@dataclass
class Timebase:
  year: int

  def days(self):
    d = date(self.year, 1, 1)
    last = date(self.year, 12, 31)
    while True:
      yield d
      if d == last:
        return
      d += timedelta(days=1)
