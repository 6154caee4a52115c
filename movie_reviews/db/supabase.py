from __future__ import annotations

from dataclasses import dataclass

from supabase import Client, create_client

from movie_reviews.utils.env import env_str


class StoreNotConfiguredError(RuntimeError):
    pass


@dataclass(frozen=True)
class SupabaseSettings:
    """Connection settings for the movie store."""

    url: str
    service_role_key: str

    @classmethod
    def from_env(cls) -> SupabaseSettings:
        url = env_str("SUPABASE_URL")
        key = env_str("SUPABASE_SERVICE_ROLE_KEY")
        missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_SERVICE_ROLE_KEY", key)) if not value]
        if missing:
            raise StoreNotConfiguredError(f"Missing environment variables: {', '.join(missing)}")
        return cls(url=url, service_role_key=key)


def create_supabase_admin_client(settings: SupabaseSettings | None = None) -> Client:
    """Service-role client for `core.movies`; the API builds one at startup and shares it."""

    settings = settings or SupabaseSettings.from_env()
    return create_client(settings.url, settings.service_role_key)
