"""Place name lookup through OpenStreetMap Nominatim."""

from typing import Optional, Protocol
import logging

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"
USER_AGENT = "suntrigger/0.1.0"


class GeocodingError(Exception):
    """The lookup failed (bad input, transport or response)."""


class PlaceNotFoundError(GeocodingError):
    """The service answered but had no match."""


class GeocodingResult(BaseModel):
    display_name: str
    latitude: float
    longitude: float


class Geocoder(Protocol):
    def geocode(self, place: str) -> GeocodingResult:
        ...


class NominatimGeocoder:
    """Resolve place names with the public Nominatim search endpoint."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        base_url: str = NOMINATIM_URL,
        timeout: float = 10.0,
    ):
        """Initialize the geocoder.

        Args:
            client: httpx client to reuse (one is created when omitted)
            base_url: Search endpoint
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers={"User-Agent": USER_AGENT},
        )

    def geocode(self, place: str) -> GeocodingResult:
        """Look up the best match for a place name.

        Raises:
            PlaceNotFoundError: no result for the place
            GeocodingError: empty name, HTTP failure or malformed payload
        """
        place = place.strip()
        if not place:
            raise GeocodingError("place name cannot be empty")

        params = {"q": place, "format": "json", "limit": "1", "addressdetails": "0"}
        try:
            resp = self._client.get(self.base_url, params=params, headers={"User-Agent": USER_AGENT})
        except httpx.HTTPError as e:
            raise GeocodingError(f"geocoding request failed: {e}") from e

        if resp.status_code != 200:
            raise GeocodingError(f"geocoding request failed with status {resp.status_code}")

        try:
            results = resp.json()
        except ValueError as e:
            raise GeocodingError("failed to decode geocoding response") from e

        if not isinstance(results, list):
            raise GeocodingError("unexpected geocoding response shape")
        if not results:
            raise PlaceNotFoundError(f"no results found for place: {place}")

        first = results[0]
        try:
            lat = float(first["lat"])
            lon = float(first["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodingError(f"malformed coordinates in geocoding response: {e}") from e

        logger.info(f"Geocoded {place!r} to {lat}, {lon}")
        return GeocodingResult(
            display_name=first.get("display_name") or place,
            latitude=lat,
            longitude=lon,
        )

    def close(self) -> None:
        self._client.close()
