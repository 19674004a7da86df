"""Client configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHATLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "chatlist"
    log_level: str = "INFO"

    # Chat backend
    server_url: str = "https://api.chatengine.io"
    project_id: str = ""
    username: str = ""
    user_secret: str = ""
    request_timeout: float = 15.0

    # Conversation list
    latest_chats_limit: int = 25
    search_heading_title: str = "Conversations"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
