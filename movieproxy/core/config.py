from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from movieproxy.core import constants
from movieproxy.core.version import __version__


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    IMDB_ROOT: str = "https://movies-tvshows-data-imdb.p.rapidapi.com"
    IMDB_HOST: str = "movies-tvshows-data-imdb.p.rapidapi.com"
    RAPIDAPI_KEY: str | None = None
    DEFAULT_IMAGE: str = "https://via.placeholder.com/300x450?text=No+Image"
    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"

    REQUEST_TIMEOUT_SECONDS: float = 10.0
    # Pacing delay applied to every enrichment unit before its image lookup
    ENRICH_DELAY_SECONDS: float = constants.ENRICH_DELAY_SECONDS
    ENRICH_CHUNK_SIZE: int = constants.ENRICH_CHUNK_SIZE
    CACHE_TTL_SECONDS: int = constants.CACHE_TTL_SECONDS  # 7 days
    CACHE_MAXSIZE: int = 1024


settings = Settings()

APP_VERSION = __version__
