from functools import lru_cache

from notion_client import AsyncClient

from .config import settings


@lru_cache
def get_notion() -> AsyncClient:
    return AsyncClient(auth=settings.notion_api_key)
