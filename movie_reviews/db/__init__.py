"""
Database helpers for the movie-reviews API and scripts.
"""

from movie_reviews.db.supabase import StoreNotConfiguredError, create_supabase_admin_client

__all__ = [
    "StoreNotConfiguredError",
    "create_supabase_admin_client",
]
