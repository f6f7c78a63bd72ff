from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal

# --- Domain Models ---
class SearchRequest(BaseModel):
    """Validated search parameters. Built per request by the validator."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius_meters: int = Field(..., ge=0)

class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float]  # [longitude, latitude]

class Feature(BaseModel):
    """One point of interest. properties holds every column but the key and geometry, plus distance_km."""
    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: Dict[str, Any] = {}

# --- API Response Models ---
class SearchResponse(BaseModel):
    status: Literal["ok", "error"]
    features: Optional[List[Feature]] = None
    error: Optional[str] = None
