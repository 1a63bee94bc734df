import sys
from zoneinfo import ZoneInfoNotFoundError

import click

from ..config.store import (
  ConfigError,
  config_path,
  load_config,
  set_location,
  set_location_by_place,
  set_timezone,
)
from ..core.errors import InputRangeError
from ..geo.geocoding import GeocodingError, NominatimGeocoder


@click.group()
@click.option("--config", type=click.Path(dir_okay=False), envvar="SUNTRIGGER_CONFIG", help="Configuration file path")
@click.pass_context
def main(ctx, config):
  """Show or change the stored location."""
  ctx.ensure_object(dict)
  ctx.obj["config"] = config


@main.command()
@click.pass_context
def show(ctx):
  path = ctx.obj["config"]
  try:
    cfg = load_config(path)
  except ConfigError as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)
  click.echo(f"Config: {config_path(path)}")
  if cfg is None or cfg.location is None or cfg.location.is_unset():
    click.echo("Location: not set")
  else:
    loc = cfg.location
    suffix = f" ({loc.name})" if loc.name else ""
    click.echo(f"Location: {loc.latitude}, {loc.longitude}{suffix}")
  click.echo(f"Timezone: {cfg.timezone if cfg else 'UTC'}")


@main.command(name="set")
@click.option("--lat", type=float)
@click.option("--lon", type=float)
@click.option("--place", help="Place name to geocode instead of --lat/--lon")
@click.pass_context
def set_(ctx, lat, lon, place):
  """Store coordinates, given directly or looked up by place name."""
  path = ctx.obj["config"]
  try:
    if place:
      geocoder = NominatimGeocoder()
      try:
        result = set_location_by_place(place, geocoder, path)
      finally:
        geocoder.close()
      click.echo(f"Location set to {result.latitude}, {result.longitude} ({result.display_name})")
      return
    if lat is None or lon is None:
      click.echo("ERROR: give --lat and --lon, or --place", err=True)
      sys.exit(2)
    set_location(lat, lon, path=path)
    click.echo(f"Location set to {lat}, {lon}")
  except (InputRangeError, GeocodingError, ConfigError) as e:
    click.echo(f"ERROR: {e}", err=True)
    sys.exit(1)


@main.command()
@click.argument("name")
@click.pass_context
def timezone(ctx, name):
  """Store the default output timezone."""
  try:
    set_timezone(name, ctx.obj["config"])
  except (ZoneInfoNotFoundError, ValueError, ConfigError) as e:
    click.echo(f"ERROR: unknown or unusable timezone {name}: {e}", err=True)
    sys.exit(1)
  click.echo(f"Timezone set to {name}")


if __name__ == "__main__":
  main()
