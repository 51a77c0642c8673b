import asyncio
from collections.abc import Sequence

from loguru import logger

from movieproxy.core.constants import DEFAULT_EXTERNAL_ID, ENRICH_CHUNK_SIZE, ENRICH_DELAY_SECONDS
from movieproxy.core.errors import UpstreamError
from movieproxy.models.movie import MovieCollectionResponse, MovieItemResponse, PartialMovie
from movieproxy.services.imdb.images import ImageResolver


class CollectionEnricher:
    """
    Turns upstream movie stubs into PartialMovie records with a poster URL.

    Stubs are processed in sequential chunks; every stub of a chunk is enriched
    concurrently after a fixed pacing delay, and the next chunk starts only once
    the whole chunk is done. A stub whose image lookup fails is dropped, so the
    result can be shorter than the input but the call itself never fails
    because of a single item.
    """

    def __init__(
        self, resolver: ImageResolver, chunk_size: int = ENRICH_CHUNK_SIZE, delay: float = ENRICH_DELAY_SECONDS
    ):
        if chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        self.resolver = resolver
        self.chunk_size = chunk_size
        self.delay = delay

    def chunks(self, stubs: Sequence[MovieItemResponse]) -> list[Sequence[MovieItemResponse]]:
        return [stubs[i : i + self.chunk_size] for i in range(0, len(stubs), self.chunk_size)]  # noqa

    async def _enrich_one(self, stub: MovieItemResponse) -> PartialMovie | None:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        imdb_id = stub.imdb_id or DEFAULT_EXTERNAL_ID
        try:
            poster_url = await self.resolver.lookup_image(imdb_id)
        except UpstreamError as e:
            logger.warning(f"Dropping {imdb_id} from collection: {e}")
            return None
        return PartialMovie.from_stub(stub, poster_url)

    async def enrich(self, stubs: Sequence[MovieItemResponse], max_chunks: int | None = None) -> list[PartialMovie]:
        """Enrich stubs chunk by chunk, stopping after max_chunks chunks when given."""
        chunks = self.chunks(stubs)
        if max_chunks is not None:
            chunks = chunks[:max_chunks]

        results: list[PartialMovie] = []
        for chunk in chunks:
            # Each unit hands back its own result; merged here after the barrier
            enriched = await asyncio.gather(*[self._enrich_one(stub) for stub in chunk])
            results.extend(movie for movie in enriched if movie is not None)
        return results

    async def enrich_collection(
        self, response: MovieCollectionResponse, max_chunks: int | None = None
    ) -> list[PartialMovie]:
        if not response.movie_results:
            return []
        return await self.enrich(response.movie_results, max_chunks=max_chunks)
