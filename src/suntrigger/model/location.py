from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ..core.solar import GeoCoordinate, validate_coordinates


class LocationConfig(BaseModel):
  latitude: float
  longitude: float
  name: Optional[str] = None

  @model_validator(mode="after")
  def _check_range(self):
    validate_coordinates(self.latitude, self.longitude)
    return self

  def is_unset(self) -> bool:
    # 0,0 is what an empty config file deserializes to
    return self.latitude == 0 and self.longitude == 0

  def coordinate(self) -> GeoCoordinate:
    return GeoCoordinate(self.latitude, self.longitude)


class AppConfig(BaseModel):
  location: Optional[LocationConfig] = None
  timezone: str = "UTC"

  @field_validator("timezone")
  @classmethod
  def _strip_timezone(cls, v: str) -> str:
    return v.strip() or "UTC"
