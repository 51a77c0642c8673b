import asyncio

import pytest
from pydantic import ValidationError

from movieproxy.core.errors import UpstreamStatusError
from movieproxy.models.movie import PartialMovie
from movieproxy.services.details import DetailAssembler
from movieproxy.services.enrichment import CollectionEnricher
from movieproxy.services.imdb.images import ImageResolver

from .conftest import DEFAULT_IMAGE, movie_results


@pytest.fixture
def assembler(make_client, fake_api) -> DetailAssembler:
    client = make_client(fake_api)
    resolver = ImageResolver(client, default_image=DEFAULT_IMAGE)
    return DetailAssembler(client, resolver, CollectionEnricher(resolver, delay=0))


def test_assembles_full_movie_record(assembler, fake_api) -> None:
    fake_api.details["tt0133093"] = {
        "title": "The Matrix",
        "description": "A hacker learns the truth.",
        "year": "1999",
        "imdb_id": "tt0133093",
        "rated": "R",
        "runtime": 136,
        "genres": ["Action", "Sci-Fi"],
        "directors": ["Lana Wachowski", "Lilly Wachowski"],
        "stars": ["Keanu Reeves", "Laurence Fishburne"],
        "language": ["English"],
    }
    fake_api.similar["tt0133093"] = movie_results("tt0234215", "tt0242653")

    movie = asyncio.run(assembler.assemble_details("tt0133093"))

    assert movie.title == "The Matrix"
    assert movie.poster_url == "https://img.test/tt0133093.jpg"
    assert movie.external_id == "tt0133093"
    assert movie.release_year == "1999"
    assert movie.genres == ("Action", "Sci-Fi")
    assert movie.production_and_cast == ("Lana Wachowski", "Keanu Reeves", "Laurence Fishburne")
    assert movie.languages == ("English",)
    assert movie.duration_minutes == 136
    assert movie.rating == "R"
    assert {r.external_id for r in movie.recommendations} == {"tt0234215", "tt0242653"}


def test_missing_director_uses_placeholder(assembler, fake_api) -> None:
    fake_api.details["tt1"] = {"title": "Nobody Directed This", "directors": [], "stars": ["A", "B"]}

    movie = asyncio.run(assembler.assemble_details("tt1"))

    assert list(movie.production_and_cast) == ["some-director", "A", "B"]


def test_missing_fields_fall_back_to_placeholders(assembler, fake_api) -> None:
    fake_api.details["tt2"] = {"runtime": "N/A", "genres": None}

    movie = asyncio.run(assembler.assemble_details("tt2"))

    assert movie.title == "some-title"
    assert movie.external_id == "some-id"
    assert movie.description == "some-description"
    assert movie.release_year == "some-year"
    assert movie.duration_minutes == 0
    assert movie.rating == "PG"
    assert movie.genres is None
    assert movie.languages is None
    assert movie.production_and_cast == ("some-director",)
    assert movie.recommendations == ()


def test_recommendations_never_exceed_one_chunk(assembler, fake_api) -> None:
    fake_api.details["tt3"] = {"title": "Popular"}
    fake_api.similar["tt3"] = movie_results(*[f"tt9{i}" for i in range(17)])

    movie = asyncio.run(assembler.assemble_details("tt3"))

    assert len(movie.recommendations) == 5
    assert fake_api.count("get-movies-images-by-imdb") == 1 + 5


def test_failing_recommendation_is_dropped(assembler, fake_api) -> None:
    fake_api.details["tt4"] = {"title": "Picky"}
    fake_api.similar["tt4"] = movie_results("tt41", "tt42", "tt43")
    fake_api.fail("get-movies-images-by-imdb", "tt42", 500)

    movie = asyncio.run(assembler.assemble_details("tt4"))

    assert {r.external_id for r in movie.recommendations} == {"tt41", "tt43"}


def test_primary_image_failure_uses_default_image(assembler, fake_api) -> None:
    fake_api.details["tt5"] = {"title": "Faceless"}
    fake_api.fail("get-movies-images-by-imdb", "tt5", 502)

    movie = asyncio.run(assembler.assemble_details("tt5"))

    assert movie.poster_url == DEFAULT_IMAGE


def test_similar_movies_failure_yields_no_recommendations(assembler, fake_api) -> None:
    fake_api.details["tt6"] = {"title": "Lonely"}
    fake_api.fail("get-similar-movies", "tt6", 500)

    movie = asyncio.run(assembler.assemble_details("tt6"))

    assert movie.title == "Lonely"
    assert movie.recommendations == ()


def test_core_detail_failure_propagates(assembler, fake_api) -> None:
    with pytest.raises(UpstreamStatusError) as excinfo:
        asyncio.run(assembler.assemble_details("tt404"))

    assert excinfo.value.status_code == 404
    assert fake_api.count("get-similar-movies") == 0


def test_movie_record_is_immutable(assembler, fake_api) -> None:
    fake_api.details["tt7"] = {"title": "Frozen"}

    movie = asyncio.run(assembler.assemble_details("tt7"))

    with pytest.raises(ValidationError):
        movie.title = "Thawed"


def test_enriched_stub_is_immutable() -> None:
    stub = PartialMovie(title="Heat", poster_url="https://img.test/heat.jpg", external_id="tt0113277")

    with pytest.raises(ValidationError):
        stub.title = "x"
    with pytest.raises(ValidationError):
        stub.poster_url = "https://img.test/other.jpg"


def test_recommendations_cannot_be_mutated_in_place(assembler, fake_api) -> None:
    fake_api.details["tt8"] = {"title": "Sealed"}
    fake_api.similar["tt8"] = movie_results("tt81", "tt82")

    movie = asyncio.run(assembler.assemble_details("tt8"))

    assert isinstance(movie.recommendations, tuple)
    assert all(isinstance(r, PartialMovie) for r in movie.recommendations)
    with pytest.raises(AttributeError):
        movie.recommendations.append(PartialMovie(poster_url="https://img.test/x.jpg"))
    with pytest.raises(ValidationError):
        movie.recommendations[0].external_id = "tt0"
