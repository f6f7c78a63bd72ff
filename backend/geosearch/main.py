import asyncio
import logging
import os
from contextlib import asynccontextmanager

import asyncpg
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from geosearch.core.config import settings
from geosearch.core.db_connection import create_pool, check_connectivity
from geosearch.core.exceptions import GeoSearchError, InvalidParameter, StartupError
from geosearch.core.logger import logs
from geosearch.routes.search_route import router as search_router
from geosearch.services.formatter import error_response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Opens the pool and checks connectivity once before serving.
    A failure here aborts startup, so uvicorn exits without accepting requests.
    """
    pool = None
    try:
        pool = await create_pool(settings)
        await check_connectivity(pool, settings.QUERY_TIMEOUT_SECONDS)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as e:
        logs.log(logging.CRITICAL, f"Failed to initialize database: {e}")
        if pool is not None:
            await pool.close()
        raise StartupError(f"Failed to initialize database: {e}") from e

    logs.log(logging.INFO, f"Successfully connected to database: {settings.DB_NAME}")
    app.state.pool = pool
    yield

    logs.log(logging.INFO, "Shutting down, closing connection pool")
    await pool.close()


app = FastAPI(title="Geospatial Point Search", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET", "OPTIONS"], allow_headers=["*"])
app.include_router(search_router)


# --- Error Envelopes ---
@app.exception_handler(InvalidParameter)
async def handle_invalid_parameter(request: Request, exc: InvalidParameter):
    logs.log(logging.INFO, f"Rejected search: {exc.message}", extra={"field": exc.field, "reason": exc.reason})
    return error_response(exc.message, exc.status_code)


@app.exception_handler(GeoSearchError)
async def handle_geosearch_error(request: Request, exc: GeoSearchError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logs.exception(f"Unexpected error on {request.url.path}: {exc}")
    return error_response(f"Internal server error: {exc}", 500)


# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "geosearch"}


# Mounted last so /api and /health take precedence
if os.path.isdir(settings.STATIC_DIR):
    app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("geosearch.main:app", host=settings.HOST, port=settings.PORT)
