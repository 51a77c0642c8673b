from typing import Annotated

from fastapi import APIRouter, Depends, Query

from movieproxy.api.deps import get_movie_service
from movieproxy.models.movie import Movie, PartialMovie
from movieproxy.services.movie_service import MovieService

router = APIRouter(prefix="/api", tags=["movies"])

Page = Annotated[int, Query(ge=1)]
Service = Annotated[MovieService, Depends(get_movie_service)]


@router.get("/popular-movies")
async def popular_movies(service: Service, page: Page = 1) -> list[PartialMovie]:
    return await service.get_popular_movies(page)


@router.get("/recent-movies")
async def recent_movies(service: Service, page: Page = 1) -> list[PartialMovie]:
    return await service.get_recently_added_movies(page)


@router.get("/random-movies")
async def random_movies(service: Service, page: Page = 1) -> list[PartialMovie]:
    return await service.get_random_movies(page)


@router.get("/trending-movies")
async def trending_movies(service: Service, page: Page = 1) -> list[PartialMovie]:
    return await service.get_trending_movies(page)


@router.get("/upcoming-movies")
async def upcoming_movies(service: Service, page: Page = 1) -> list[PartialMovie]:
    return await service.get_upcoming_movies(page)


@router.get("/movies/{id}")
async def movie_details(id: str, service: Service) -> Movie:
    """Full detail record; 404 when the upstream API does not know the id."""
    return await service.get_movie_details(id)
