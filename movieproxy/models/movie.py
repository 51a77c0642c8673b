from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from movieproxy.core.constants import (
    DEFAULT_DESCRIPTION,
    DEFAULT_DIRECTOR,
    DEFAULT_DURATION_MINUTES,
    DEFAULT_EXTERNAL_ID,
    DEFAULT_RATING,
    DEFAULT_RELEASE_YEAR,
    DEFAULT_TITLE,
)

# Upstream payloads


class UpstreamModel(BaseModel):
    """Base for decoded upstream payloads. Keys are matched case-insensitively."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def lowercase_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k.lower() if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class MovieItemResponse(UpstreamModel):
    """A movie stub as listed in an upstream collection."""

    title: str | None = None
    year: str | None = None
    imdb_id: str | None = None


class MovieCollectionResponse(UpstreamModel):
    movie_results: list[MovieItemResponse] | None = None


class MovieImageResponse(UpstreamModel):
    poster: str | None = None
    fanart: str | None = None
    imdb: str | None = None


class MovieDetailsResponse(UpstreamModel):
    title: str | None = None
    description: str | None = None
    year: str | None = None
    imdb_id: str | None = None
    rated: str | None = None
    runtime: int | None = None
    genres: list[str] | None = None
    directors: list[str] | None = None
    stars: list[str] | None = None
    language: list[str] | None = None

    @field_validator("runtime", mode="before")
    @classmethod
    def parse_runtime(cls, value: Any) -> Any:
        # Upstream sends runtimes as ints, digit strings or free text
        if isinstance(value, str):
            value = value.strip()
            return int(value) if value.isdigit() else None
        return value


# Domain records


class PartialMovie(BaseModel):
    """An upstream stub enriched with a poster URL."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str = DEFAULT_TITLE
    poster_url: str
    external_id: str = DEFAULT_EXTERNAL_ID

    @classmethod
    def from_stub(cls, stub: MovieItemResponse, poster_url: str) -> "PartialMovie":
        return cls(
            title=stub.title or DEFAULT_TITLE,
            poster_url=poster_url,
            external_id=stub.imdb_id or DEFAULT_EXTERNAL_ID,
        )


class Movie(BaseModel):
    """
    Full movie detail record.

    `production_and_cast` lists the director first followed by the cast, and
    `recommendations` never holds more than one enrichment chunk.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    title: str = DEFAULT_TITLE
    poster_url: str
    external_id: str = DEFAULT_EXTERNAL_ID
    description: str = DEFAULT_DESCRIPTION
    release_year: str = DEFAULT_RELEASE_YEAR
    genres: tuple[str, ...] | None = None
    production_and_cast: tuple[str, ...] = ()
    languages: tuple[str, ...] | None = None
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    rating: str = DEFAULT_RATING
    recommendations: tuple[PartialMovie, ...] = ()

    @classmethod
    def from_details(
        cls,
        details: MovieDetailsResponse,
        poster_url: str,
        recommendations: list[PartialMovie] | tuple[PartialMovie, ...] = (),
    ) -> "Movie":
        director = details.directors[0] if details.directors else DEFAULT_DIRECTOR
        return cls(
            title=details.title or DEFAULT_TITLE,
            poster_url=poster_url,
            external_id=details.imdb_id or DEFAULT_EXTERNAL_ID,
            description=details.description or DEFAULT_DESCRIPTION,
            release_year=details.year or DEFAULT_RELEASE_YEAR,
            genres=tuple(details.genres) if details.genres is not None else None,
            production_and_cast=(director, *(details.stars or [])),
            languages=tuple(details.language) if details.language is not None else None,
            duration_minutes=details.runtime if details.runtime is not None else DEFAULT_DURATION_MINUTES,
            rating=details.rated or DEFAULT_RATING,
            recommendations=tuple(recommendations),
        )
