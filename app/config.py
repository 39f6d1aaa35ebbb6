from pydantic_settings import BaseSettings
from pydantic import ConfigDict, field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "Knowledge Desk"
    debug: bool = False

    # OpenAI (chat completions for the assistant)
    openai_api_key: str
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000

    # MongoDB (knowledge base storage)
    mongodb_uri: str
    mongodb_db: str
    mongodb_collection: str = "knowledge_base"
    mongodb_timeout_ms: int = 5000  # serverSelectionTimeoutMS

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("openai_api_key", "mongodb_uri", "mongodb_db")
    @classmethod
    def _require_value(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(
                f"Please define {info.field_name.upper()} environment variable"
            )
        return value.strip()


@lru_cache
def get_settings() -> Settings:
    return Settings()
