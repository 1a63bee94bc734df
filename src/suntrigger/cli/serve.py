"""CLI command to start the sun times API server."""

import logging
import click
import uvicorn

from ..api import SunRestAPI
from ..config.store import ConfigError, load_config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--config",
    type=click.Path(dir_okay=False),
    envvar="SUNTRIGGER_CONFIG",
    help="Configuration file path (default location and timezone)",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (default: 127.0.0.1)",
)
@click.option(
    "--port",
    default=8130,
    type=int,
    help="Port to bind to (default: 8130)",
)
def main(config, host, port):
    """Start the sun times API server.

    Requests without coordinates fall back to the stored location.

    Examples:
        # Serve with the stored location
        suntrigger-serve

        # Bind on all interfaces
        suntrigger-serve --host 0.0.0.0 --port 9000
    """
    try:
        cfg = load_config(config)
    except ConfigError as e:
        click.echo(f"❌ Error loading configuration: {e}", err=True)
        logger.exception("Configuration error")
        return

    location = cfg.location if cfg and cfg.location and not cfg.location.is_unset() else None
    tz_name = cfg.timezone if cfg else "UTC"
    if location:
        click.echo(f"📍 Default location: {location.latitude}, {location.longitude}")
    else:
        click.echo("📍 No stored location; requests must pass latitude/longitude")
    click.echo(f"🕒 Default timezone: {tz_name}")

    api = SunRestAPI(default_location=location, default_timezone=tz_name)

    click.echo(f"🌐 Starting API server on http://{host}:{port}")
    click.echo(f"   • Sun times:     http://{host}:{port}/api/sun")
    click.echo(f"   • Health Check:  http://{host}:{port}/health")
    click.echo(f"   • API Docs:      http://{host}:{port}/docs")
    click.echo()

    try:
        uvicorn.run(api.get_app(), host=host, port=port, log_level="info")
    except KeyboardInterrupt:
        click.echo("\n🛑 Shutting down...")


if __name__ == "__main__":
    main()
