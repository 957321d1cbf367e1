from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gnews_api_key: str | None = None
    gnews_base_url: str = "https://gnews.io/api/v4"
    gnews_lang: str = "en"

    log_level: str = "INFO"
    log_json: bool = True

    articles_cache_ttl_seconds: float = 600.0
    cache_key_prefix: str = "gnews_func"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
