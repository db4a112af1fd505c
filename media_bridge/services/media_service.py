import asyncio
import base64
import logging
from typing import Any, Dict, Iterable, List, Optional

from notion_client import AsyncClient
from pydantic import BaseModel, ConfigDict, TypeAdapter

from ..models import MEDIA_BLOCK_TYPES, MediaBlock, MediaDescriptor, PageItem
from . import notion_store

logger = logging.getLogger(__name__)

FILE_PAGE_MESSAGE = (
    "Page created with file information. For images/videos, please use "
    "external URLs for better results."
)
FILE_PAGE_NOTE = (
    "💡 Note: File has been uploaded. For best results, upload images/videos "
    "to an external hosting service and paste the URL instead."
)

_media_block = TypeAdapter(MediaBlock)


class PageListing(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: List[PageItem] = []
    skipped: List[str] = []


def encode_data_url(content: bytes, content_type: str) -> str:
    return f"data:{content_type};base64,{base64.b64encode(content).decode('ascii')}"


def describe_file(filename: str, size: int) -> str:
    return f"File: {filename} ({size / 1024:.2f} KB)"


def extract_media(blocks: Iterable[Dict[str, Any]]) -> Optional[MediaDescriptor]:
    """Descriptor of the first image, video or bookmark block, if any."""
    for block in blocks:
        if block.get("type") in MEDIA_BLOCK_TYPES:
            return _media_block.validate_python(block).to_descriptor()
    return None


async def create_external_media_page(
    notion: AsyncClient, title: str, kind: str, url: str, caption: Optional[str]
) -> str:
    block = notion_store.external_media_block(kind, url, caption)
    return await notion_store.create_page(notion, title, [block])


async def create_file_page(
    notion: AsyncClient,
    title: str,
    filename: str,
    content_type: str,
    content: bytes,
    caption: Optional[str],
) -> str:
    # The data URL is not embedded; Notion only renders externally hosted media.
    data_url = encode_data_url(content, content_type)
    logger.info(
        f"Encoded {filename} ({len(content)} bytes) as a {len(data_url)}-char data URL"
    )
    children = [
        notion_store.paragraph_block(describe_file(filename, len(content))),
        notion_store.paragraph_block(caption or "No caption provided"),
        notion_store.callout_block(FILE_PAGE_NOTE, "💡"),
    ]
    return await notion_store.create_page(notion, title, children)


async def create_bookmark_page(
    notion: AsyncClient, title: str, url: str, caption: Optional[str]
) -> str:
    block = notion_store.bookmark_block(url, caption)
    return await notion_store.create_page(notion, title, [block])


async def load_page(notion: AsyncClient, page: Dict[str, Any]) -> PageItem:
    blocks = await notion_store.list_blocks(notion, page["id"])
    return PageItem(
        id=page["id"],
        title=notion_store.page_title(page),
        createdTime=page.get("created_time"),
        media=extract_media(blocks),
    )


async def list_pages(notion: AsyncClient, skip_unreadable: bool = True) -> PageListing:
    """
    Load every page with its media descriptor.

    Block fetches run concurrently, one per page. With ``skip_unreadable`` a
    page whose blocks cannot be read is logged and left out of the listing;
    otherwise the first such failure propagates.
    """
    pages = await notion_store.query_pages(notion)

    if not skip_unreadable:
        items = await asyncio.gather(*[load_page(notion, page) for page in pages])
        return PageListing(pages=list(items))

    results = await asyncio.gather(
        *[load_page(notion, page) for page in pages], return_exceptions=True
    )

    loaded, skipped = [], []
    for page, result in zip(pages, results):
        if isinstance(result, Exception):
            logger.error(f"Error fetching content for page {page['id']}: {result}")
            skipped.append(page["id"])
        else:
            loaded.append(result)
    return PageListing(pages=loaded, skipped=skipped)


async def delete_page(notion: AsyncClient, page_id: str) -> None:
    await notion_store.archive_page(notion, page_id)


async def get_page_blocks(notion: AsyncClient, page_id: str) -> List[Dict[str, Any]]:
    return await notion_store.list_blocks(notion, page_id)
