from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from movieproxy.core.base_client import BaseClient
from movieproxy.core.constants import (
    MOVIE_DETAILS_TYPE,
    MOVIE_IMAGES_TYPE,
    SIMILAR_MOVIES_TYPE,
)
from movieproxy.core.errors import DecodeError
from movieproxy.core.version import __version__
from movieproxy.models.movie import (
    MovieCollectionResponse,
    MovieDetailsResponse,
    MovieImageResponse,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ImdbClient(BaseClient):
    """
    Client for the RapidAPI hosted IMDb movie data API.

    Every endpoint is the API root queried with a `type` parameter. One attempt
    per call; callers decide what to do with failures.
    """

    def __init__(self, root: str, host: str, api_key: str | None, timeout: float = 10.0, max_retries: int = 1):
        headers = {
            "User-Agent": f"MovieProxy/{__version__}",
            "Accept": "application/json",
            "x-rapidapi-host": host,
            "x-rapidapi-key": api_key or "",
        }
        super().__init__(base_url=root, timeout=timeout, max_retries=max_retries, headers=headers)

    async def fetch(self, params: dict[str, Any], model: type[ModelT]) -> ModelT:
        """GET the API root with the given query and decode the body into model."""
        data = await self.get("/", params=params)
        try:
            decoded = model.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Unexpected {params.get('type')} payload: {e}") from e
        logger.info(f"Responded with {decoded!r}")
        return decoded

    async def get_collection(self, movie_type: str, page: int = 1) -> MovieCollectionResponse:
        return await self.fetch({"type": movie_type, "page": page}, MovieCollectionResponse)

    async def get_similar(self, imdb_id: str, page: int = 1) -> MovieCollectionResponse:
        return await self.fetch({"type": SIMILAR_MOVIES_TYPE, "imdb": imdb_id, "page": page}, MovieCollectionResponse)

    async def get_details(self, imdb_id: str) -> MovieDetailsResponse:
        return await self.fetch({"type": MOVIE_DETAILS_TYPE, "imdb": imdb_id}, MovieDetailsResponse)

    async def get_images(self, imdb_id: str) -> MovieImageResponse:
        return await self.fetch({"type": MOVIE_IMAGES_TYPE, "imdb": imdb_id}, MovieImageResponse)
