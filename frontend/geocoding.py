"""
Address lookup for the map client, backed by Nominatim through geopy.
"""
from typing import Tuple

from geopy.exc import GeocoderServiceError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

USER_AGENT = "geosearch-map-client/1.0"


class GeocodingError(Exception):
    """The address could not be turned into coordinates."""


def build_geocoder(user_agent: str = USER_AGENT, timeout: float = 10.0):
    """Nominatim geocode callable, rate limited to one request per second."""
    geolocator = Nominatim(user_agent=user_agent, timeout=timeout)
    return RateLimiter(geolocator.geocode, min_delay_seconds=1.0, max_retries=1, swallow_exceptions=False)


def geocode_address(address: str, geocode) -> Tuple[float, float]:
    """
    Resolves a free-text address to (lat, lng) with the given geocode callable.
    Raises GeocodingError for blank input, no match, or a geocoder failure.
    """
    address = (address or "").strip()
    if not address:
        raise GeocodingError("Please enter an address or location for the search.")

    try:
        location = geocode(address)
    except GeocoderServiceError as e:
        raise GeocodingError(f'Geocoding failed for "{address}": {e}') from e

    if location is None:
        raise GeocodingError(f'Geocoding failed for "{address}": no match found')
    return location.latitude, location.longitude
