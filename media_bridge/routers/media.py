import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from notion_client import AsyncClient

from .. import errors
from ..config import settings
from ..dependencies import get_notion
from ..errors import BridgeError
from ..models import AddUrlRequest, ErrorResponse, UploadResponse
from ..services import media_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["media"])

error_responses = {
    400: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post(
    "/upload",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=error_responses,
)
async def upload_media(
    title: str = Form(...),
    kind: str = Form("image", alias="type"),
    caption: Optional[str] = Form(None),
    external_url: Optional[str] = Form(None, alias="externalUrl"),
    file: Optional[UploadFile] = File(None),
    notion: AsyncClient = Depends(get_notion),
):
    """
    Create a page holding an image or video.

    With ``externalUrl`` the page gets a single image/video block pointing at
    that URL. Otherwise the uploaded file is described in text blocks; the
    binary itself is never embedded.
    """
    if external_url:
        block_type = "image" if kind == "image" else "video"
        try:
            page_id = await media_service.create_external_media_page(
                notion, title, block_type, external_url, caption
            )
        except Exception as e:
            logger.error(f"Upload error: {e}")
            raise errors.from_notion_error(e, "Failed to upload to Notion")
        return UploadResponse(pageId=page_id)

    if file is None:
        raise BridgeError(400, "No file or external URL provided")

    content = await file.read()
    if len(content) > settings.max_embed_size:
        raise BridgeError(
            400,
            "File too large. Notion API only supports files up to "
            f"{settings.max_embed_size // (1024 * 1024)}MB when embedding. Please "
            "upload your file to an external service (like Imgur, Cloudinary, "
            "etc.) and use the URL instead.",
            code=errors.FILE_TOO_LARGE,
        )

    try:
        page_id = await media_service.create_file_page(
            notion,
            title,
            file.filename or "upload",
            file.content_type or "application/octet-stream",
            content,
            caption,
        )
    except Exception as e:
        logger.error(f"Upload error: {e}")
        raise errors.from_notion_error(e, "Failed to upload to Notion")

    return UploadResponse(pageId=page_id, message=media_service.FILE_PAGE_MESSAGE)


@router.post(
    "/add-url",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=error_responses,
)
async def add_url(request: AddUrlRequest, notion: AsyncClient = Depends(get_notion)):
    if not request.url:
        raise BridgeError(400, "No URL provided")

    try:
        page_id = await media_service.create_bookmark_page(
            notion, request.title, request.url, request.caption
        )
    except Exception as e:
        logger.error(f"URL add error: {e}")
        raise errors.from_notion_error(e, "Failed to add URL to Notion")

    return UploadResponse(pageId=page_id)
