from fastapi import APIRouter, Depends
from loguru import logger

from movieproxy.api.deps import get_cache
from movieproxy.core.cache import ReadThroughCache

router = APIRouter(prefix="/cache")


@router.delete("/")
async def clear_caches(cache: ReadThroughCache = Depends(get_cache)):
    """
    Clear the read-through cache.
    Fresh data is fetched from the upstream API on the next request.
    """
    cache.clear()
    logger.info("Cache cleared via API endpoint")
    return {"message": "All caches cleared successfully", "status": "success"}
