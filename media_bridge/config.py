from typing import Optional

from pydantic_settings import BaseSettings

MiB = 1024 * 1024


class Settings(BaseSettings):
    notion_api_key: str = ""
    notion_database_id: str = ""
    notion_title_property: str = "Name"
    max_embed_size: int = 5 * MiB  # Notion rejects larger inline payloads
    skip_unreadable_pages: bool = True
    env: str = "dev"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    class Config:
        env_file = ".env"
        extra = "ignore"


class ClientSettings(BaseSettings):
    backend_url: Optional[str] = None
    max_file_size: int = 20 * MiB
    request_timeout: float = 30.0

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
