"""Configuration helpers for the privacy news pipeline."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    gemini_api_key: str | None = Field(None, alias="GEMINI_API_KEY")
    live_provider: str = Field(
        "openai",
        alias="LIVE_PROVIDER",
        description="Provider used by the live news view: 'openai' or 'gemini'.",
    )
    build_provider: str = Field(
        "gemini",
        alias="BUILD_PROVIDER",
        description="Provider used by the build-time page generator.",
    )
    openai_model: str = Field("gpt-4.1-mini", alias="OPENAI_MODEL")
    gemini_model: str = Field("gemini-2.0-flash", alias="GEMINI_MODEL")
    max_tokens: int = Field(
        2000,
        alias="MAX_TOKENS",
        description=(
            "Max output tokens for the news response; six articles plus four "
            "debates routinely exceed 1000."
        ),
    )
    output_path: str | None = Field(
        None,
        alias="NEWS_OUTPUT_PATH",
        description="Optional override for the static page; defaults to pages/news.html.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")


def get_settings() -> Settings:
    """Return a settings instance reflecting the current environment."""
    return Settings()
