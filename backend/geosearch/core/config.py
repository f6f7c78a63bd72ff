import os
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    STATIC_DIR: str = "static"

    LOGGER: int = 20

    # Database credentials
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = "recycling_db"

    # TCP mode (local proxy)
    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 5432
    DB_SSLMODE: str = "disable"

    # Socket mode: set on managed deployments, takes precedence over TCP
    INSTANCE_CONNECTION_NAME: str = ""
    DB_SOCKET_DIR: str = "/cloudsql"

    # Pool
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 7
    DB_CONN_MAX_LIFETIME_SECONDS: float = 1800.0
    DB_CONN_MAX_IDLE_SECONDS: float = 300.0
    QUERY_TIMEOUT_SECONDS: float = 10.0

    # Backing dataset
    SEARCH_TABLE: str = "austinrecycling"
    GEOMETRY_COLUMN: str = "wkb_geometry"
    PRIMARY_KEY_COLUMN: str = "ogc_fid"
    DEFAULT_RADIUS_METERS: int = 10000
    RESULT_LIMIT: int = 25

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def connection_mode(self) -> str:
        return "socket" if self.INSTANCE_CONNECTION_NAME else "tcp"

    def connection_kwargs(self) -> dict:
        """
        Keyword arguments for asyncpg.create_pool.
        A directory passed as host makes asyncpg connect over the unix socket inside it.
        """
        kwargs = {
            "user": self.DB_USER,
            "password": self.DB_PASSWORD or None,
            "database": self.DB_NAME,
        }
        if self.connection_mode == "socket":
            kwargs["host"] = os.path.join(self.DB_SOCKET_DIR, self.INSTANCE_CONNECTION_NAME)
        else:
            kwargs["host"] = self.DB_HOST
            kwargs["port"] = self.DB_PORT
            kwargs["ssl"] = self.DB_SSLMODE
        return kwargs

settings = Settings()
