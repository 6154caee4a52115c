"""
Ingestion helpers for importing catalog data into the movie store.
"""

from movie_reviews.ingestion.movie_importer import fetch_catalog_payload, import_movie

__all__ = [
    "fetch_catalog_payload",
    "import_movie",
]
