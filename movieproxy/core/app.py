from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from movieproxy.api.main import api_router
from movieproxy.core.cache import ReadThroughCache
from movieproxy.core.errors import UpstreamError, UpstreamStatusError
from movieproxy.services.movie_service import MovieService

from .config import settings
from .version import __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events (startup/shutdown).
    """
    cache = ReadThroughCache(maxsize=settings.CACHE_MAXSIZE, default_ttl=settings.CACHE_TTL_SECONDS)
    app.state.movie_service = MovieService.from_settings(settings, cache=cache)
    logger.info(f"MovieProxy {__version__} started against {settings.IMDB_ROOT}")
    yield
    cache.clear()
    try:
        await app.state.movie_service.close()
        logger.info("Upstream HTTP client closed")
    except Exception as exc:
        logger.warning(f"Failed to close upstream HTTP client: {exc}")


app = FastAPI(
    title="MovieProxy",
    description="Caching proxy returning enriched movie collections and details",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if settings.APP_ENV != "development" else "/docs",
    redoc_url=None if settings.APP_ENV != "development" else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    if isinstance(exc, UpstreamStatusError) and exc.status_code == 404:
        logger.warning(f"Upstream has nothing for {request.url.path}")
        return JSONResponse(status_code=404, content={"detail": "Movie not found"})
    logger.error(f"Upstream failure serving {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content={"detail": str(exc)})


app.include_router(api_router)
