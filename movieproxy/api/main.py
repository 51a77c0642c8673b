from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from .endpoints.caching import router as caching_router
from .endpoints.health import router as health_router
from .endpoints.movies import router as movies_router

api_router = APIRouter()


@api_router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root():
    return "Welcome to MovieProxy"


api_router.include_router(movies_router)
api_router.include_router(health_router)
api_router.include_router(caching_router)
