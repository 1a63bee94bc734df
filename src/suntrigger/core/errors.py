class SolarEventError(Exception):
  """Base class for every failure of a sunrise/sunset computation."""


class InputRangeError(SolarEventError, ValueError):
  """Latitude or longitude outside its valid range."""

  def __init__(self, field: str, value: float, low: float, high: float):
    self.field = field
    self.value = value
    super().__init__(f"invalid {field}: {value} (must be between {low:g} and {high:g})")


class PolarConditionError(SolarEventError):
  """The sun does not cross the horizon at this place on this date."""

  kind = "polar"

  def __init__(self, latitude: float, day):
    self.latitude = latitude
    self.day = day
    super().__init__(f"{self.describe()} at latitude {latitude} on {day.isoformat()}")

  def describe(self) -> str:
    return "sun does not cross the horizon"


class NeverRisesError(PolarConditionError):
  kind = "never_rises"

  def describe(self) -> str:
    return "sun never rises"


class NeverSetsError(PolarConditionError):
  kind = "never_sets"

  def describe(self) -> str:
    return "sun never sets"
