"""
Tests for application settings.

OPENAI_API_KEY, MONGODB_URI and MONGODB_DB are required; anything missing
must fail settings loading (and therefore application startup).
"""

import pytest
from pydantic import ValidationError

from app.config import Settings

REQUIRED_ENV = {
    "OPENAI_API_KEY": "sk-test",
    "MONGODB_URI": "mongodb://localhost:27017",
    "MONGODB_DB": "knowledge_desk",
}


@pytest.fixture
def clean_env(monkeypatch):
    for name in REQUIRED_ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_load_from_environment(clean_env):
    for name, value in REQUIRED_ENV.items():
        clean_env.setenv(name, value)

    settings = Settings(_env_file=None)

    assert settings.openai_api_key == "sk-test"
    assert settings.mongodb_uri == "mongodb://localhost:27017"
    assert settings.mongodb_db == "knowledge_desk"
    assert settings.mongodb_collection == "knowledge_base"
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.temperature == 0.7
    assert settings.max_tokens == 1000


@pytest.mark.parametrize("missing", sorted(REQUIRED_ENV))
def test_missing_required_setting_is_fatal(clean_env, missing):
    for name, value in REQUIRED_ENV.items():
        if name != missing:
            clean_env.setenv(name, value)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_blank_required_setting_is_fatal(clean_env):
    for name, value in REQUIRED_ENV.items():
        clean_env.setenv(name, value)
    clean_env.setenv("MONGODB_DB", "   ")

    with pytest.raises(ValidationError) as exc_info:
        Settings(_env_file=None)

    assert "MONGODB_DB" in str(exc_info.value)
