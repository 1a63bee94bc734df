"""CLI commands for sunrise/sunset times."""

from datetime import date, datetime, timezone
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError
import logging
import sys

import click

from ..config.store import ConfigError, get_location, load_config
from ..core.daylight import Daylight
from ..core.errors import SolarEventError
from ..core.solar import EventKind
from ..core.timebase import Timebase
from ..io.write_jsonl import write_day_rows

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def location_options(f):
    f = click.option("--tz", help="Output timezone (IANA name, default: config or UTC)")(f)
    f = click.option("--lon", type=float, help="Longitude in degrees, east positive")(f)
    f = click.option("--lat", type=float, help="Latitude in degrees, north positive")(f)
    return f


def _daylight(ctx, lat, lon, tz) -> Daylight:
    config_file = ctx.obj.get("config")
    try:
        if lat is None and lon is None:
            loc = get_location(config_file)
            lat, lon = loc.latitude, loc.longitude
        elif lat is None or lon is None:
            _fail("--lat and --lon must be given together")
        if tz is None:
            cfg = load_config(config_file)
            tz = cfg.timezone if cfg else "UTC"
        return Daylight(lat, lon, tz)
    except ConfigError as e:
        _fail(f"{e} (pass --lat/--lon or run suntrigger-location set)")
    except (ZoneInfoNotFoundError, ValueError) as e:
        # InputRangeError is a ValueError too
        _fail(str(e))


def _day(value, tz) -> date:
    if value is None:
        return datetime.now(tz).date()
    return value.date()


date_option = click.option(
    "--date", "on", type=click.DateTime(formats=["%Y-%m-%d"]), help="Calendar date (default: today in the output timezone)"
)


@click.group()
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    envvar="SUNTRIGGER_CONFIG",
    help="Configuration file path",
)
@click.option("-v", "--verbose", is_flag=True, help="Log at INFO level")
@click.pass_context
def main(ctx, config, verbose):
    """Sunrise and sunset times for automation triggers."""
    if verbose:
        logging.getLogger().setLevel(logging.INFO)
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


def _event_command(kind: EventKind):
    @location_options
    @date_option
    @click.pass_context
    def command(ctx, lat, lon, tz, on):
        daylight = _daylight(ctx, lat, lon, tz)
        try:
            when = daylight.event(_day(on, daylight.tz), kind)
        except (SolarEventError, OverflowError) as e:
            _fail(str(e))
        click.echo(when.isoformat())

    command.__doc__ = f"Print the {kind.value} instant for a date."
    return main.command(name=kind.value)(command)


sunrise = _event_command(EventKind.SUNRISE)
sunset = _event_command(EventKind.SUNSET)


@main.command()
@location_options
@date_option
@click.pass_context
def times(ctx, lat, lon, tz, on):
    """Print sunrise and sunset for a date."""
    daylight = _daylight(ctx, lat, lon, tz)
    try:
        row = daylight.day_rows([_day(on, daylight.tz)])[0]
    except OverflowError as e:
        _fail(str(e))
    click.echo(f"date:    {row['date']}")
    click.echo(f"sunrise: {row['sunrise'] or '-'}")
    click.echo(f"sunset:  {row['sunset'] or '-'}")
    if row["condition"]:
        click.echo(f"note:    {row['condition'].replace('_', ' ')}")


@main.command(name="next")
@click.argument("event", type=click.Choice([k.value for k in EventKind]))
@location_options
@click.option("--after", help="ISO instant to search from (default: now)")
@click.pass_context
def next_event(ctx, event, lat, lon, tz, after):
    """Print the next sunrise or sunset after an instant."""
    daylight = _daylight(ctx, lat, lon, tz)
    if after:
        try:
            start = datetime.fromisoformat(after.replace("Z", "+00:00"))
        except ValueError:
            _fail(f"invalid --after: {after}")
        if start.tzinfo is None:
            start = start.replace(tzinfo=daylight.tz)
    else:
        start = datetime.now(timezone.utc)
    try:
        when = daylight.next_event(event, start)
    except (SolarEventError, LookupError, OverflowError) as e:
        _fail(str(e))
    click.echo(when.isoformat())


@main.command()
@location_options
@click.option("--year", type=int, default=lambda: datetime.now(timezone.utc).year, help="Year to tabulate")
@click.option("--out", type=click.Path(dir_okay=False), help="Write JSON lines here instead of stdout")
@click.pass_context
def table(ctx, lat, lon, tz, year, out):
    """Tabulate sunrise/sunset for every day of a year."""
    daylight = _daylight(ctx, lat, lon, tz)
    try:
        rows = daylight.day_rows(Timebase(year).days())
    except (ValueError, OverflowError) as e:
        _fail(str(e))
    if out:
        n = write_day_rows(rows, Path(out))
        logger.info(f"Wrote {n} rows to {out}")
        click.echo(f"Done. Wrote {n} days to {out}")
        return
    for row in rows:
        click.echo(f"{row['date']}  {row['sunrise'] or '-':<25}  {row['sunset'] or '-':<25}  {row['condition'] or ''}".rstrip())


if __name__ == "__main__":
    main()
