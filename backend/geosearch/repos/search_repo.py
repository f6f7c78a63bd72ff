import asyncio
import logging
from typing import List, Tuple

import asyncpg

from geosearch.core.config import Settings, settings
from geosearch.core.db_connection import retire_if_expired
from geosearch.core.exceptions import QueryExecutionError, QueryTimeout
from geosearch.core.logger import logs
from geosearch.models.search_model import SearchRequest

EMPTY_FEATURES = "[]"

# $1 = longitude, $2 = latitude, $3 = radius in meters.
# Identifiers come from configuration only; request values are always bound.
_SEARCH_SQL = """
SELECT COALESCE(jsonb_agg(t.feature ORDER BY t.distance_km), '[]'::jsonb)::text
FROM (
    SELECT jsonb_build_object(
        'type', 'Feature',
        'geometry', ST_AsGeoJSON(r.{geom})::jsonb,
        'properties', to_jsonb(r) - {pk_key} - {geom_key}
    ) AS feature,
    r.distance_km
    FROM (
        SELECT *,
            ST_Distance(
                ST_GeogFromWKB({geom}),
                ST_SetSRID(ST_MakePoint($1::float8, $2::float8), 4326)::geography
            ) / 1000 AS distance_km
        FROM {table}
        WHERE ST_DWithin(
            ST_GeogFromWKB({geom}),
            ST_SetSRID(ST_MakePoint($1::float8, $2::float8), 4326)::geography,
            $3::float8
        )
        ORDER BY distance_km
        LIMIT {limit}
    ) r
) t
"""


def quote_ident(name: str) -> str:
    """Quotes a possibly schema-qualified identifier, e.g. public.places -> "public"."places"."""
    return ".".join('"' + part.replace('"', '""') + '"' for part in name.split("."))


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_search_query(request: SearchRequest, config: Settings = settings) -> Tuple[str, List]:
    """
    Returns the nearest-within-radius query and its bind values in order
    (longitude, latitude, radius_meters).
    """
    sql = _SEARCH_SQL.format(
        table=quote_ident(config.SEARCH_TABLE),
        geom=quote_ident(config.GEOMETRY_COLUMN),
        geom_key=quote_literal(config.GEOMETRY_COLUMN),
        pk_key=quote_literal(config.PRIMARY_KEY_COLUMN),
        limit=int(config.RESULT_LIMIT),
    )
    return sql, [request.longitude, request.latitude, request.radius_meters]


class SearchRepository:
    def __init__(self, pool: asyncpg.Pool, config: Settings = settings):
        self.pool = pool
        self.config = config

    async def fetch_features(self, request: SearchRequest) -> str:
        """
        Runs the search once and returns the aggregated feature array as a JSON string.
        No row at all is treated the same as an empty aggregate. Nothing is retried.
        """
        sql, params = build_search_query(request, self.config)
        timeout = self.config.QUERY_TIMEOUT_SECONDS

        try:
            payload = await asyncio.wait_for(self._fetch_one(sql, params), timeout=timeout)
        except asyncio.TimeoutError as e:
            # TimeoutError is an OSError subclass, so this must come first
            logs.log(logging.ERROR, "Search query timed out", extra=logs.search_fields(request, timeout_s=timeout))
            raise QueryTimeout(timeout) from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as e:
            logs.log(logging.ERROR, f"Search query failed: {e}", extra=logs.search_fields(request))
            raise QueryExecutionError(e) from e

        if payload is None:
            return EMPTY_FEATURES
        return payload

    async def _fetch_one(self, sql: str, params: List):
        async with self.pool.acquire() as conn:
            try:
                return await conn.fetchval(sql, *params)
            finally:
                await retire_if_expired(conn, self.config.DB_CONN_MAX_LIFETIME_SECONDS)
