import logging
import time

import asyncpg
from fastapi import Request

from geosearch.core.config import Settings
from geosearch.core.logger import logs


class LifetimeConnection(asyncpg.Connection):
    """
    asyncpg connection that remembers when it was opened.
    The pool itself only knows about idle time, so the max lifetime is enforced
    on release by retire_if_expired.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.opened_at = time.monotonic()


async def create_pool(config: Settings) -> asyncpg.Pool:
    """
    Opens the process-wide connection pool.
    Uses the unix socket when INSTANCE_CONNECTION_NAME is set, TCP otherwise.
    """
    if config.connection_mode == "tcp" and not config.DB_PASSWORD:
        logs.log(logging.WARNING, "DB_PASSWORD environment variable not set. Assuming unsecure local connection.")

    pool = await asyncpg.create_pool(
        min_size=config.DB_POOL_MIN_SIZE,
        max_size=config.DB_POOL_MAX_SIZE,
        max_inactive_connection_lifetime=config.DB_CONN_MAX_IDLE_SECONDS,
        connection_class=LifetimeConnection,
        **config.connection_kwargs(),
    )
    logs.log(
        logging.INFO,
        f"Connection pool created ({config.connection_mode} mode)",
        extra={"database": config.DB_NAME, "max_size": config.DB_POOL_MAX_SIZE},
    )
    return pool


async def check_connectivity(pool: asyncpg.Pool, timeout: float) -> None:
    """Round trip to the database once; raises whatever the driver raises."""
    await pool.fetchval("SELECT 1", timeout=timeout)


async def retire_if_expired(conn, max_lifetime: float) -> bool:
    """
    Closes a connection that has outlived max_lifetime (seconds).
    A closed connection handed back to the pool is replaced on the next acquire.
    """
    opened_at = getattr(conn, "opened_at", None)
    if opened_at is None or time.monotonic() - opened_at < max_lifetime:
        return False
    await conn.close()
    logs.log(logging.DEBUG, "Retired connection past its max lifetime")
    return True


# Dependency for FastAPI
def get_pool(request: Request) -> asyncpg.Pool:
    return request.app.state.pool
