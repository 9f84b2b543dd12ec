from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content
    CONTENT_DIR: str = "content/android"

    # Site
    SITE_URL: str = "https://davideagostini.com"
    SITE_IDENTIFIER: str = "davideagostini.com"
    AUTHOR_NAME: str = "Davide Agostini"
    SECTION_PATH: str = "/android"
    SECTION_TITLE: str = "Android Engineering Notes"
    SECTION_DESCRIPTION: str = (
        "Daily insights on Jetpack Compose, Android Performance, and Security."
    )

    # Rendering
    HIGHLIGHT_THEME: str = "github-dark"

    # Open Graph images
    OG_IMAGE_VERSION: str = "v2"
    OG_FONT_FAMILY: str = "Inter"
    OG_REMOTE_FONTS: bool = True
    OG_FALLBACK_FONT_PATH: str = ""
    FONT_FETCH_TIMEOUT: float = 10.0

    # Crawlers explicitly allowed in robots.txt
    AI_CRAWLERS: List[str] = ["GPTBot", "PerplexityBot", "Google-Extended", "claudebot"]

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def content_path(self) -> Path:
        return Path(self.CONTENT_DIR)

    @property
    def site_url(self) -> str:
        return self.SITE_URL.rstrip("/")

    @property
    def section_url(self) -> str:
        return f"{self.site_url}{self.SECTION_PATH}"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
