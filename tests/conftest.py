from collections.abc import Callable

import httpx
import pytest
from loguru import logger

from movieproxy.services.imdb.client import ImdbClient

IMDB_ROOT = "https://imdb.test"
DEFAULT_IMAGE = "https://img.test/default.jpg"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], ImdbClient]:
    """Build an ImdbClient whose transport is answered by the given handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ImdbClient:
        client = ImdbClient(root=IMDB_ROOT, host="imdb.test", api_key="secret-key")
        client._client = httpx.AsyncClient(
            base_url=client.base_url, headers=client.headers, transport=httpx.MockTransport(handler)
        )
        return client

    return _make


@pytest.fixture
def log_records():
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


class FakeImdbApi:
    """Answers upstream requests by their `type` query parameter."""

    def __init__(self):
        self.collections: dict[str, dict] = {}
        self.details: dict[str, dict] = {}
        self.similar: dict[str, dict] = {}
        self.posters: dict[str, str] = {}
        self.failing: dict[tuple[str, str], int] = {}
        self.requests: list[httpx.Request] = []

    def fail(self, request_type: str, key: str, status_code: int) -> None:
        self.failing[(request_type, key)] = status_code

    def count(self, request_type: str) -> int:
        return sum(1 for r in self.requests if r.url.params.get("type") == request_type)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        request_type = params.get("type", "")
        key = params.get("imdb") or params.get("page", "1")
        if (request_type, key) in self.failing:
            return httpx.Response(self.failing[(request_type, key)], json={"message": "error"})

        if request_type == "get-movies-images-by-imdb":
            return httpx.Response(200, json={"IMDB": key, "poster": self.posters.get(key, f"https://img.test/{key}.jpg")})
        if request_type == "get-movie-details":
            if key not in self.details:
                return httpx.Response(404, json={"message": "not found"})
            return httpx.Response(200, json=self.details[key])
        if request_type == "get-similar-movies":
            return httpx.Response(200, json=self.similar.get(key, {"movie_results": []}))
        return httpx.Response(200, json=self.collections.get(request_type, {"movie_results": []}))


def movie_results(*imdb_ids: str) -> dict:
    return {"movie_results": [{"title": f"Title {i}", "year": "2021", "imdb_id": i} for i in imdb_ids]}


@pytest.fixture
def fake_api() -> FakeImdbApi:
    return FakeImdbApi()
