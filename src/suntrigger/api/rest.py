"""Read-only REST API exposing sunrise/sunset times."""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfoNotFoundError
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from ..core.daylight import Daylight
from ..core.errors import InputRangeError, PolarConditionError
from ..core.solar import EventKind, compute, resolve_tz
from ..model.location import LocationConfig

logger = logging.getLogger(__name__)


class SunRestAPI:
    """Sun times over HTTP."""

    def __init__(
        self,
        default_location: Optional[LocationConfig] = None,
        default_timezone: str = "UTC",
    ):
        """Initialize REST API.

        Args:
            default_location: Used when a request carries no coordinates
            default_timezone: Used when a request carries no ``tz``
        """
        self.default_location = default_location
        self.default_timezone = default_timezone
        self.app = FastAPI(
            title="suntrigger API",
            description="Sunrise and sunset times for automation triggers",
            version="0.1.0",
        )

        self._setup_error_handlers()
        self._setup_routes()

    def _setup_error_handlers(self) -> None:
        @self.app.exception_handler(InputRangeError)
        async def input_range(request: Request, exc: InputRangeError):
            return JSONResponse(
                status_code=422,
                content={"error": "input_range", "field": exc.field, "detail": str(exc)},
            )

        @self.app.exception_handler(OverflowError)
        async def date_out_of_range(request: Request, exc: OverflowError):
            # 0001-01-01 / 9999-12-31 shifted into a far-off zone
            return JSONResponse(
                status_code=400,
                content={"error": "date_out_of_range", "detail": str(exc)},
            )

        @self.app.exception_handler(PolarConditionError)
        async def polar_condition(request: Request, exc: PolarConditionError):
            return JSONResponse(
                status_code=409,
                content={"error": exc.kind, "detail": str(exc)},
            )

    def _coordinates(self, latitude: Optional[float], longitude: Optional[float]):
        if latitude is None and longitude is None:
            if self.default_location is None:
                raise HTTPException(status_code=400, detail="latitude and longitude are required")
            return self.default_location.latitude, self.default_location.longitude
        if latitude is None or longitude is None:
            raise HTTPException(status_code=400, detail="latitude and longitude must be given together")
        return latitude, longitude

    def _timezone(self, tz: Optional[str]):
        name = tz or self.default_timezone
        try:
            return resolve_tz(name)
        except (ZoneInfoNotFoundError, ValueError):
            raise HTTPException(status_code=400, detail=f"unknown timezone: {name}")

    @staticmethod
    def _day(value: Optional[str], tzinfo) -> date:
        if not value:
            return datetime.now(timezone.utc).astimezone(tzinfo).date()
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"invalid date: {value}")

    def _setup_routes(self) -> None:
        """Setup all API routes."""

        @self.app.get("/api/")
        async def api_discovery():
            """API discovery endpoint."""
            return {
                "message": "API running.",
                "version": "0.1.0",
                "events": [kind.value for kind in EventKind],
            }

        @self.app.get("/api/config")
        async def get_config():
            """Defaults applied to requests."""
            return {
                "location": self.default_location.model_dump() if self.default_location else None,
                "time_zone": self.default_timezone,
            }

        @self.app.get("/api/sun")
        async def get_sun_times(
            latitude: Optional[float] = None,
            longitude: Optional[float] = None,
            date: Optional[str] = None,
            tz: Optional[str] = None,
        ):
            """Sunrise and sunset for one day; polar days report a condition."""
            lat, lon = self._coordinates(latitude, longitude)
            tzinfo = self._timezone(tz)
            day = self._day(date, tzinfo)
            row = Daylight(lat, lon, tzinfo).day_rows([day])[0]
            return {"latitude": lat, "longitude": lon, "time_zone": str(tzinfo), **row}

        @self.app.get("/api/sun/{event}")
        async def get_sun_event(
            event: str,
            latitude: Optional[float] = None,
            longitude: Optional[float] = None,
            date: Optional[str] = None,
            tz: Optional[str] = None,
        ):
            """A single sunrise or sunset instant."""
            try:
                kind = EventKind(event)
            except ValueError:
                raise HTTPException(status_code=404, detail=f"unknown event: {event}")
            lat, lon = self._coordinates(latitude, longitude)
            tzinfo = self._timezone(tz)
            day = self._day(date, tzinfo)
            when = compute(lat, lon, day, kind, tzinfo)
            logger.debug(f"{kind.value} at {lat}, {lon} on {day}: {when.isoformat()}")
            return {
                "event": kind.value,
                "date": day.isoformat(),
                "latitude": lat,
                "longitude": lon,
                "time": when.isoformat(),
                "utc": when.astimezone(timezone.utc).isoformat(),
            }

        @self.app.get("/health")
        async def health_check():
            """Health check endpoint."""
            return {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }

    def get_app(self) -> FastAPI:
        """Get the FastAPI app instance."""
        return self.app
