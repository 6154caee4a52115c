from __future__ import annotations

import os

import pytest

from movie_reviews.utils.env import SERVICE_ENV_KEYS, env_str, load_env


@pytest.fixture(autouse=True)
def clean_service_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (*SERVICE_ENV_KEYS, "UNRELATED_SECRET"):
        # setenv first so monkeypatch also removes keys that load_env adds.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_load_env_applies_only_service_keys(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ANN001
    env_file = tmp_path / ".env"
    env_file.write_text(
        "OMDB_API_KEY=abc123\nSUPABASE_URL=https://db.example.co\nPORT=5000\nUNRELATED_SECRET=leak\n",
        encoding="utf-8",
    )

    applied = load_env(path=env_file)

    assert applied == {"OMDB_API_KEY": "abc123", "SUPABASE_URL": "https://db.example.co", "PORT": "5000"}
    assert os.environ["OMDB_API_KEY"] == "abc123"
    assert "UNRELATED_SECRET" not in os.environ


def test_load_env_keeps_existing_values_unless_override(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:  # noqa: ANN001
    env_file = tmp_path / ".env"
    env_file.write_text("OMDB_API_KEY=from-file\n", encoding="utf-8")
    monkeypatch.setenv("OMDB_API_KEY", "from-shell")

    assert load_env(path=env_file) == {}
    assert os.environ["OMDB_API_KEY"] == "from-shell"

    assert load_env(path=env_file, override=True) == {"OMDB_API_KEY": "from-file"}
    assert os.environ["OMDB_API_KEY"] == "from-file"


def test_load_env_skips_blank_template_values(tmp_path) -> None:  # noqa: ANN001
    env_file = tmp_path / ".env"
    env_file.write_text("OMDB_API_KEY=\nCORS_ALLOW_ORIGINS=\n", encoding="utf-8")

    assert load_env(path=env_file) == {}
    assert "OMDB_API_KEY" not in os.environ


def test_load_env_without_file_is_a_no_op(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("movie_reviews.utils.env.find_env_file", lambda: None)

    assert load_env() == {}


def test_env_str_strips_and_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "  8080 ")
    assert env_str("PORT") == "8080"

    monkeypatch.setenv("PORT", "   ")
    assert env_str("PORT", "4000") == "4000"
    assert env_str("CORS_ALLOW_ORIGINS") is None
