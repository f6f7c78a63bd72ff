import re
from typing import Optional

from geosearch.core.exceptions import InvalidParameter
from geosearch.models.search_model import SearchRequest

_FLOAT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
_INT_RE = re.compile(r"[+-]?\d+")


def _present(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _parse_coordinate(field: str, raw: str, limit: float) -> float:
    # float() alone would also take "nan", "inf" and "1_0"
    if not _FLOAT_RE.fullmatch(raw):
        raise InvalidParameter(field, InvalidParameter.NOT_A_NUMBER, f"Invalid {field}: {raw!r} is not a number")
    value = float(raw)
    if not -limit <= value <= limit:
        raise InvalidParameter(
            field, InvalidParameter.OUT_OF_RANGE, f"Invalid {field}: {raw} is outside [-{limit:g}, {limit:g}]"
        )
    return value


def _parse_radius(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise InvalidParameter("radius", InvalidParameter.NOT_A_NUMBER, f"Invalid radius: {raw!r} is not an integer")
    value = int(raw)
    if value < 0:
        raise InvalidParameter("radius", InvalidParameter.OUT_OF_RANGE, f"Invalid radius: {raw} must not be negative")
    return value


def parse_search_request(
    lat: Optional[str],
    lng: Optional[str],
    radius: Optional[str] = None,
    default_radius: int = 10000,
) -> SearchRequest:
    """
    Turns raw query-string values into a SearchRequest.

    lat and lng are required; radius falls back to default_radius when absent
    or empty. Raises InvalidParameter naming the offending field.
    """
    lat, lng, radius = _present(lat), _present(lng), _present(radius)

    if lat is None:
        raise InvalidParameter("lat", InvalidParameter.MISSING, "Missing latitude or longitude parameter: lat")
    if lng is None:
        raise InvalidParameter("lng", InvalidParameter.MISSING, "Missing latitude or longitude parameter: lng")

    latitude = _parse_coordinate("lat", lat, 90)
    longitude = _parse_coordinate("lng", lng, 180)
    radius_meters = default_radius if radius is None else _parse_radius(radius)

    return SearchRequest(latitude=latitude, longitude=longitude, radius_meters=radius_meters)
