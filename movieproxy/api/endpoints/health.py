from fastapi import APIRouter, Depends

from movieproxy.api.deps import get_cache
from movieproxy.core.cache import ReadThroughCache

router = APIRouter(tags=["health"])


@router.get("/health", summary="Simple readiness probe")
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/metrics", summary="Runtime metrics (lightweight)")
async def metrics(cache: ReadThroughCache = Depends(get_cache)) -> dict:
    return {"cache_entries": len(cache)}
