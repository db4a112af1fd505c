from typing import Any, Dict, List

from notion_client import AsyncClient
from notion_client.helpers import async_collect_paginated_api

from ..config import settings
from ..models import RichText

UNTITLED = "Untitled"


def rich_text(content: str) -> List[Dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def caption_text(caption) -> List[Dict[str, Any]]:
    return rich_text(caption) if caption else []


def external_media_block(kind: str, url: str, caption) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": kind,
        kind: {
            "type": "external",
            "external": {"url": url},
            "caption": caption_text(caption),
        },
    }


def bookmark_block(url: str, caption) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "bookmark",
        "bookmark": {"url": url, "caption": caption_text(caption)},
    }


def paragraph_block(content: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "paragraph",
        "paragraph": {"rich_text": rich_text(content)},
    }


def callout_block(content: str, emoji: str) -> Dict[str, Any]:
    return {
        "object": "block",
        "type": "callout",
        "callout": {"rich_text": rich_text(content), "icon": {"emoji": emoji}},
    }


def page_title(page: Dict[str, Any]) -> str:
    prop = page.get("properties", {}).get(settings.notion_title_property) or {}
    title = prop.get("title") or []
    if not title:
        return UNTITLED
    return RichText.model_validate(title[0]).as_plain() or UNTITLED


async def create_page(notion: AsyncClient, title: str, children: List[Dict]) -> str:
    response = await notion.pages.create(
        parent={"type": "database_id", "database_id": settings.notion_database_id},
        properties={settings.notion_title_property: {"title": rich_text(title)}},
        children=children,
    )
    return response["id"]


async def query_pages(notion: AsyncClient) -> List[Dict[str, Any]]:
    """All pages of the database, newest first, across every result cursor."""
    return await async_collect_paginated_api(
        notion.databases.query,
        database_id=settings.notion_database_id,
        sorts=[{"timestamp": "created_time", "direction": "descending"}],
    )


async def list_blocks(notion: AsyncClient, page_id: str) -> List[Dict[str, Any]]:
    return await async_collect_paginated_api(
        notion.blocks.children.list, block_id=page_id
    )


async def archive_page(notion: AsyncClient, page_id: str) -> None:
    await notion.pages.update(page_id=page_id, archived=True)
