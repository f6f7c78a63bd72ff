import logging
from geosearch.repos.search_repo import SearchRepository
from geosearch.models.search_model import SearchRequest
from geosearch.core.logger import logs

class SearchService:
    def __init__(self, repo: SearchRepository):
        self.repo = repo

    async def search(self, request: SearchRequest) -> str:
        """Returns the raw feature array for the request, nearest first."""
        logs.log(logging.INFO, "Search received", extra=logs.search_fields(request))
        payload = await self.repo.fetch_features(request)
        logs.log(logging.DEBUG, "Search completed", extra=logs.search_fields(request, payload_bytes=len(payload)))
        return payload
