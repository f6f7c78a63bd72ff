import logging
from typing import Optional

import asyncpg
from fastapi import APIRouter, Depends, Query

from geosearch.core.config import settings
from geosearch.core.db_connection import get_pool
from geosearch.core.logger import logs
from geosearch.models.search_model import SearchResponse
from geosearch.repos.search_repo import SearchRepository
from geosearch.services.formatter import success_response
from geosearch.services.search_service import SearchService
from geosearch.services.validator import parse_search_request

router = APIRouter(prefix="/api")

# --- Dependency Injection ---
def get_search_repo(pool: asyncpg.Pool = Depends(get_pool)) -> SearchRepository:
    return SearchRepository(pool, settings)

def get_search_service(repo: SearchRepository = Depends(get_search_repo)) -> SearchService:
    return SearchService(repo)

@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": SearchResponse}, 500: {"model": SearchResponse}},
)
async def search_endpoint(
    lat: Optional[str] = Query(None, description="Latitude of the search center"),
    lng: Optional[str] = Query(None, description="Longitude of the search center"),
    radius: Optional[str] = Query(None, description="Search radius in meters (default 10000)"),
    service: SearchService = Depends(get_search_service),
):
    """
    Nearest points of interest around (lat, lng), at most 25, nearest first.
    Parameters are taken as raw strings so parse failures produce this API's own 400 envelope.
    """
    request = parse_search_request(lat, lng, radius, default_radius=settings.DEFAULT_RADIUS_METERS)
    payload = await service.search(request)
    return success_response(payload)
