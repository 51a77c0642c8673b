import asyncio

from loguru import logger

from movieproxy.core.errors import UpstreamError
from movieproxy.models.movie import Movie, PartialMovie
from movieproxy.services.enrichment import CollectionEnricher
from movieproxy.services.imdb.client import ImdbClient
from movieproxy.services.imdb.images import ImageResolver


class DetailAssembler:
    """Builds full Movie records: core metadata, poster, cast and recommendations."""

    def __init__(self, client: ImdbClient, resolver: ImageResolver, enricher: CollectionEnricher):
        self.client = client
        self.resolver = resolver
        self.enricher = enricher

    async def _recommendations(self, imdb_id: str) -> list[PartialMovie]:
        try:
            similar = await self.client.get_similar(imdb_id)
        except UpstreamError as e:
            logger.warning(f"Failed to fetch similar movies for {imdb_id}: {e}")
            return []
        return await self.enricher.enrich_collection(similar, max_chunks=1)

    async def assemble_details(self, imdb_id: str) -> Movie:
        # Failures here propagate: a detail record is all or nothing
        details = await self.client.get_details(imdb_id)

        poster_url, recommendations = await asyncio.gather(
            self.resolver.resolve_image(imdb_id),
            self._recommendations(imdb_id),
        )
        return Movie.from_details(details, poster_url, recommendations)
