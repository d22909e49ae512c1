"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Notion
    notion_token: str = ""
    notion_homepage_id: str = ""
    notion_blog_page_id: str = ""
    notion_landing_page_id: str = ""
    notion_docs_page_id: str = ""

    # Site
    preview_secret: str = ""
    site_url: str = ""

    # Rendering policy
    skip_empty_paragraphs: bool = True
    annotate_unsupported: bool = True
    description_max_chars: int = 200

    # Fetching
    children_safety_cap: int = 500
    fetch_concurrency: int = 8
    max_render_depth: int = 8

    # App
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 8080


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
