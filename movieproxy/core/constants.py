"""
Core constants used across the application. Keep these simple and documented.
"""

# Placeholders substituted when the upstream payload omits a field
DEFAULT_TITLE: str = "some-title"
DEFAULT_EXTERNAL_ID: str = "some-id"
DEFAULT_DESCRIPTION: str = "some-description"
DEFAULT_RELEASE_YEAR: str = "some-year"
DEFAULT_DIRECTOR: str = "some-director"
DEFAULT_DURATION_MINUTES: int = 0
DEFAULT_RATING: str = "PG"

# Stubs per concurrent fan-out round
ENRICH_CHUNK_SIZE: int = 5
# Pacing delay before each enrichment unit looks up its image
ENRICH_DELAY_SECONDS: float = 1.5

CACHE_TTL_SECONDS: int = 7 * 24 * 60 * 60

# Cache keys
POPULAR_MOVIES_KEY: str = "popular-movies-{page}"
RECENT_MOVIES_KEY: str = "recent-movies-{page}"
RANDOM_MOVIES_KEY: str = "random-movies-{page}"
TRENDING_MOVIES_KEY: str = "trending-movies-{page}"
UPCOMING_MOVIES_KEY: str = "upcoming-movies-{page}"
MOVIE_DETAILS_KEY: str = "movie-details-{imdb_id}"

# Upstream query `type` values
POPULAR_MOVIES_TYPE: str = "get-popular-movies"
RECENT_MOVIES_TYPE: str = "get-recently-added-movies"
RANDOM_MOVIES_TYPE: str = "get-random-movies"
TRENDING_MOVIES_TYPE: str = "get-trending-movies"
UPCOMING_MOVIES_TYPE: str = "get-upcoming-movies"
MOVIE_DETAILS_TYPE: str = "get-movie-details"
SIMILAR_MOVIES_TYPE: str = "get-similar-movies"
MOVIE_IMAGES_TYPE: str = "get-movies-images-by-imdb"
