from movieproxy.core.cache import ReadThroughCache
from movieproxy.core.config import Settings
from movieproxy.core.constants import (
    MOVIE_DETAILS_KEY,
    POPULAR_MOVIES_KEY,
    POPULAR_MOVIES_TYPE,
    RANDOM_MOVIES_KEY,
    RANDOM_MOVIES_TYPE,
    RECENT_MOVIES_KEY,
    RECENT_MOVIES_TYPE,
    TRENDING_MOVIES_KEY,
    TRENDING_MOVIES_TYPE,
    UPCOMING_MOVIES_KEY,
    UPCOMING_MOVIES_TYPE,
)
from movieproxy.models.movie import Movie, PartialMovie
from movieproxy.services.details import DetailAssembler
from movieproxy.services.enrichment import CollectionEnricher
from movieproxy.services.imdb.client import ImdbClient
from movieproxy.services.imdb.images import ImageResolver


class MovieService:
    """
    Read operations exposed by the proxy, each memoized in the read-through cache.

    Collections are returned in chunk order; callers should not rely on the
    position of an item inside a page.
    """

    def __init__(
        self,
        client: ImdbClient,
        enricher: CollectionEnricher,
        assembler: DetailAssembler,
        cache: ReadThroughCache,
        ttl: float | None = None,
    ):
        self.client = client
        self.enricher = enricher
        self.assembler = assembler
        self.cache = cache
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings, cache: ReadThroughCache | None = None) -> "MovieService":
        client = ImdbClient(
            root=settings.IMDB_ROOT,
            host=settings.IMDB_HOST,
            api_key=settings.RAPIDAPI_KEY,
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
        resolver = ImageResolver(client, default_image=settings.DEFAULT_IMAGE)
        enricher = CollectionEnricher(
            resolver, chunk_size=settings.ENRICH_CHUNK_SIZE, delay=settings.ENRICH_DELAY_SECONDS
        )
        assembler = DetailAssembler(client, resolver, enricher)
        if cache is None:
            cache = ReadThroughCache(maxsize=settings.CACHE_MAXSIZE, default_ttl=settings.CACHE_TTL_SECONDS)
        return cls(client, enricher, assembler, cache, ttl=settings.CACHE_TTL_SECONDS)

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def _collection(self, key: str, movie_type: str, page: int) -> list[PartialMovie]:
        async def compute() -> list[PartialMovie]:
            response = await self.client.get_collection(movie_type, page)
            return await self.enricher.enrich_collection(response)

        movies = await self.cache.get_or_compute(key, compute, ttl=self.ttl)
        return list(movies)

    async def get_popular_movies(self, page: int = 1) -> list[PartialMovie]:
        return await self._collection(POPULAR_MOVIES_KEY.format(page=page), POPULAR_MOVIES_TYPE, page)

    async def get_recently_added_movies(self, page: int = 1) -> list[PartialMovie]:
        return await self._collection(RECENT_MOVIES_KEY.format(page=page), RECENT_MOVIES_TYPE, page)

    async def get_random_movies(self, page: int = 1) -> list[PartialMovie]:
        return await self._collection(RANDOM_MOVIES_KEY.format(page=page), RANDOM_MOVIES_TYPE, page)

    async def get_trending_movies(self, page: int = 1) -> list[PartialMovie]:
        return await self._collection(TRENDING_MOVIES_KEY.format(page=page), TRENDING_MOVIES_TYPE, page)

    async def get_upcoming_movies(self, page: int = 1) -> list[PartialMovie]:
        return await self._collection(UPCOMING_MOVIES_KEY.format(page=page), UPCOMING_MOVIES_TYPE, page)

    async def get_movie_details(self, imdb_id: str) -> Movie:
        return await self.cache.get_or_compute(
            MOVIE_DETAILS_KEY.format(imdb_id=imdb_id),
            lambda: self.assembler.assemble_details(imdb_id),
            ttl=self.ttl,
        )
