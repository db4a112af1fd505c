import logging

from fastapi import APIRouter, Depends
from notion_client import AsyncClient

from .. import errors
from ..config import settings
from ..dependencies import get_notion
from ..models import DebugBlocksResponse, DeleteResponse, ErrorResponse, PagesResponse
from ..services import media_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["pages"])


@router.get("/pages", response_model=PagesResponse, responses={500: {"model": ErrorResponse}})
async def list_pages(notion: AsyncClient = Depends(get_notion)):
    """
    Pages of the database, newest first, each with its first media block
    """
    try:
        listing = await media_service.list_pages(
            notion, skip_unreadable=settings.skip_unreadable_pages
        )
    except Exception as e:
        logger.error(f"Fetch pages error: {e}")
        raise errors.from_notion_error(e, "Failed to fetch pages from Notion")

    if listing.skipped:
        logger.warning(f"Skipped {len(listing.skipped)} unreadable page(s): {listing.skipped}")

    return PagesResponse(pages=listing.pages)


@router.delete(
    "/pages/{page_id}", response_model=DeleteResponse, responses={500: {"model": ErrorResponse}}
)
async def delete_page(page_id: str, notion: AsyncClient = Depends(get_notion)):
    """
    Archive a page. Notion keeps archived pages; this API cannot restore them.
    """
    try:
        await media_service.delete_page(notion, page_id)
    except Exception as e:
        logger.error(f"Delete error: {e}")
        raise errors.from_notion_error(e, "Failed to delete page from Notion")

    return DeleteResponse(message="Page deleted successfully")


@router.get("/debug/page/{page_id}", response_model=DebugBlocksResponse)
async def debug_page(page_id: str, notion: AsyncClient = Depends(get_notion)):
    try:
        blocks = await media_service.get_page_blocks(notion, page_id)
    except Exception as e:
        logger.error(f"Debug error: {e}")
        raise errors.from_notion_error(e, "Failed to fetch page blocks")

    return DebugBlocksResponse(blocks=blocks)
