"""YAML-backed store for the configured location.

The file lives at ``~/.config/suntrigger/config.yaml`` unless the
``SUNTRIGGER_CONFIG`` environment variable or an explicit path says otherwise.
"""

from pathlib import Path
from typing import Optional, Union
import logging
import os

import yaml
from pydantic import ValidationError

from ..core.solar import resolve_tz, validate_coordinates
from ..geo.geocoding import Geocoder, GeocodingResult
from ..model.location import AppConfig, LocationConfig

logger = logging.getLogger(__name__)

CONFIG_ENV = "SUNTRIGGER_CONFIG"

PathLike = Union[str, Path, None]


class ConfigError(Exception):
    """Config file cannot be read or does not hold a valid config."""


class LocationNotSetError(ConfigError):
    """No usable location in the config."""


def config_path(path: PathLike = None) -> Path:
    """Resolve the config file location.

    Args:
        path: Explicit path, wins over the environment

    Returns:
        Path to the YAML config file (may not exist yet)
    """
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env)
    return Path.home() / ".config" / "suntrigger" / "config.yaml"


def load_config(path: PathLike = None) -> Optional[AppConfig]:
    """Load the config file.

    Returns:
        The parsed config, or None if the file does not exist
    """
    p = config_path(path)
    if not p.exists():
        return None
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"reading config file {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config file {p} must contain a mapping")
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {p}: {e}") from e


def save_config(config: AppConfig, path: PathLike = None) -> Path:
    """Write the config atomically (temp file, then rename).

    Returns:
        Path the config was written to
    """
    p = config_path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    data = yaml.safe_dump(config.model_dump(exclude_none=True), sort_keys=False)
    try:
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp, p)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise ConfigError(f"writing config file {p}: {e}") from e
    logger.debug(f"Saved config to {p}")
    return p


def get_location(path: PathLike = None) -> LocationConfig:
    """Read the configured location.

    Raises:
        LocationNotSetError: no config file, no location, or 0/0
    """
    config = load_config(path)
    if config is None:
        raise LocationNotSetError(f"config file {config_path(path)} does not exist")
    if config.location is None or config.location.is_unset():
        raise LocationNotSetError("latitude and longitude not set in config")
    return config.location


def set_location(
    latitude: float,
    longitude: float,
    name: Optional[str] = None,
    path: PathLike = None,
) -> LocationConfig:
    """Store a coordinate pair, keeping the rest of the config.

    Raises:
        InputRangeError: coordinates out of range (nothing is written)
    """
    validate_coordinates(latitude, longitude)
    config = load_config(path) or AppConfig()
    config.location = LocationConfig(latitude=latitude, longitude=longitude, name=name)
    save_config(config, path)
    logger.info(f"Location set to {latitude}, {longitude}")
    return config.location


def set_timezone(tz_name: str, path: PathLike = None) -> AppConfig:
    """Store the default output timezone (IANA name, checked before writing)."""
    resolve_tz(tz_name)
    config = load_config(path) or AppConfig()
    config.timezone = tz_name
    save_config(config, path)
    return config


def set_location_by_place(place: str, geocoder: Geocoder, path: PathLike = None) -> GeocodingResult:
    """Geocode a place name and store the result."""
    result = geocoder.geocode(place)
    set_location(result.latitude, result.longitude, name=result.display_name, path=path)
    return result
