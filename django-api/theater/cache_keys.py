"""Cache keys for catalog responses."""

MOVIE_LIST_KEY = "catalog:movies"
SHOWTIMES_KEY = "catalog:showtimes"


def movie_detail_key(movie_id) -> str:
    return f"catalog:movies:{movie_id}"
