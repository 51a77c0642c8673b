from loguru import logger

from movieproxy.core.errors import UpstreamError
from movieproxy.services.imdb.client import ImdbClient


class ImageResolver:
    """
    Resolves the poster URL for an IMDb id, falling back to a default image.

    `resolve_image` never raises: a failed lookup and a lookup without a poster
    both collapse to the default image. `lookup_image` only covers the missing
    poster case and lets upstream errors through.
    """

    def __init__(self, client: ImdbClient, default_image: str):
        self.client = client
        self.default_image = default_image

    async def lookup_image(self, imdb_id: str) -> str:
        response = await self.client.get_images(imdb_id)
        return response.poster or self.default_image

    async def resolve_image(self, imdb_id: str) -> str:
        try:
            return await self.lookup_image(imdb_id)
        except UpstreamError as e:
            logger.warning(f"Image lookup failed for {imdb_id}, using default image: {e}")
            return self.default_image
