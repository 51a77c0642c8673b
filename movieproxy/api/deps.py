from fastapi import Request

from movieproxy.core.cache import ReadThroughCache
from movieproxy.services.movie_service import MovieService


def get_movie_service(request: Request) -> MovieService:
    return request.app.state.movie_service


def get_cache(request: Request) -> ReadThroughCache:
    return request.app.state.movie_service.cache
