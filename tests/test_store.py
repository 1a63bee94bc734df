import os
import stat
from zoneinfo import ZoneInfoNotFoundError

import pytest

from suntrigger.config.store import (
  CONFIG_ENV,
  ConfigError,
  LocationNotSetError,
  config_path,
  get_location,
  load_config,
  set_location,
  set_location_by_place,
  set_timezone,
)
from suntrigger.core.errors import InputRangeError
from suntrigger.geo.geocoding import GeocodingResult


class FakeGeocoder:
  def __init__(self):
    self.calls = []

  def geocode(self, place):
    self.calls.append(place)
    return GeocodingResult(display_name="San Francisco, California", latitude=37.7749, longitude=-122.4194)


def test_set_and_get_location(tmp_path):
  path = tmp_path / "config.yaml"
  set_location(37.7749, -122.4194, path=path)
  loc = get_location(path)
  assert loc.latitude == 37.7749
  assert loc.longitude == -122.4194


def test_missing_file_is_not_set(tmp_path):
  path = tmp_path / "absent.yaml"
  assert load_config(path) is None
  with pytest.raises(LocationNotSetError):
    get_location(path)


def test_zero_location_counts_as_unset(tmp_path):
  path = tmp_path / "config.yaml"
  set_location(0.0, 0.0, path=path)
  with pytest.raises(LocationNotSetError):
    get_location(path)


def test_config_without_location(tmp_path):
  path = tmp_path / "config.yaml"
  path.write_text("timezone: Europe/Paris\n", encoding="utf-8")
  with pytest.raises(LocationNotSetError):
    get_location(path)


def test_invalid_coordinates_write_nothing(tmp_path):
  path = tmp_path / "config.yaml"
  with pytest.raises(InputRangeError):
    set_location(91.0, 0.0, path=path)
  with pytest.raises(InputRangeError):
    set_location(0.0, -181.0, path=path)
  assert not path.exists()


def test_out_of_range_location_in_file(tmp_path):
  path = tmp_path / "config.yaml"
  path.write_text("location:\n  latitude: 120\n  longitude: 0\n", encoding="utf-8")
  with pytest.raises(ConfigError):
    load_config(path)


def test_malformed_yaml(tmp_path):
  path = tmp_path / "config.yaml"
  path.write_text("location: [unclosed\n", encoding="utf-8")
  with pytest.raises(ConfigError):
    load_config(path)


def test_timezone_update_keeps_location(tmp_path):
  path = tmp_path / "config.yaml"
  set_location(51.5074, -0.1278, name="London", path=path)
  set_timezone("Europe/London", path=path)
  cfg = load_config(path)
  assert cfg.timezone == "Europe/London"
  assert cfg.location.name == "London"


def test_unknown_timezone_rejected(tmp_path):
  path = tmp_path / "config.yaml"
  with pytest.raises(ZoneInfoNotFoundError):
    set_timezone("Mars/Olympus_Mons", path=path)
  assert not path.exists()


def test_file_is_private_and_no_temp_left(tmp_path):
  path = tmp_path / "nested" / "config.yaml"
  set_location(10.0, 20.0, path=path)
  assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
  assert [p.name for p in path.parent.iterdir()] == ["config.yaml"]


def test_env_var_overrides_default_path(tmp_path, monkeypatch):
  target = tmp_path / "env.yaml"
  monkeypatch.setenv(CONFIG_ENV, str(target))
  assert config_path() == target
  set_location(1.5, 2.5)
  assert get_location(target).latitude == 1.5


def test_set_location_by_place(tmp_path):
  path = tmp_path / "config.yaml"
  geocoder = FakeGeocoder()
  result = set_location_by_place("San Francisco", geocoder, path=path)
  assert geocoder.calls == ["San Francisco"]
  assert result.latitude == 37.7749
  loc = get_location(path)
  assert loc.name == "San Francisco, California"
  assert loc.longitude == -122.4194
