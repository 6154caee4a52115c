"""
Domain models shared across the API and scripts.
"""

from movie_reviews.models.movies import (
    InvalidMovieRequestError,
    MovieLookup,
    MoviePatch,
    MovieRecord,
    Rating,
    parse_score,
)

__all__ = [
    "InvalidMovieRequestError",
    "MovieLookup",
    "MoviePatch",
    "MovieRecord",
    "Rating",
    "parse_score",
]
