from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field

MediaType = Literal["image", "video", "bookmark"]
MEDIA_BLOCK_TYPES = ("image", "video", "bookmark")


class MediaDescriptor(BaseModel):
    type: MediaType
    url: Optional[str] = None
    caption: str = ""


# Notion block payloads. Only the fields the bridge reads are modelled.

class RichTextContent(BaseModel):
    content: str = ""


class RichText(BaseModel):
    plain_text: Optional[str] = None
    text: Optional[RichTextContent] = None

    def as_plain(self) -> str:
        if self.text is not None and self.text.content:
            return self.text.content
        return self.plain_text or ""


def _first_caption(caption: List[RichText]) -> str:
    return caption[0].as_plain() if caption else ""


class FileLink(BaseModel):
    url: Optional[str] = None


class FileObject(BaseModel):
    external: Optional[FileLink] = None
    file: Optional[FileLink] = None
    caption: List[RichText] = []

    def source_url(self) -> Optional[str]:
        """External link if present, else the Notion-hosted file link."""
        if self.external is not None and self.external.url:
            return self.external.url
        if self.file is not None:
            return self.file.url
        return None


class BookmarkObject(BaseModel):
    url: Optional[str] = None
    caption: List[RichText] = []


class ImageBlock(BaseModel):
    type: Literal["image"]
    image: FileObject

    def to_descriptor(self) -> MediaDescriptor:
        return MediaDescriptor(
            type="image",
            url=self.image.source_url(),
            caption=_first_caption(self.image.caption),
        )


class VideoBlock(BaseModel):
    type: Literal["video"]
    video: FileObject

    def to_descriptor(self) -> MediaDescriptor:
        return MediaDescriptor(
            type="video",
            url=self.video.source_url(),
            caption=_first_caption(self.video.caption),
        )


class BookmarkBlock(BaseModel):
    type: Literal["bookmark"]
    bookmark: BookmarkObject

    def to_descriptor(self) -> MediaDescriptor:
        return MediaDescriptor(
            type="bookmark",
            url=self.bookmark.url,
            caption=_first_caption(self.bookmark.caption),
        )


MediaBlock = Annotated[
    Union[ImageBlock, VideoBlock, BookmarkBlock], Field(discriminator="type")
]


# API payloads

class PageItem(BaseModel):
    id: str
    title: str
    createdTime: Optional[str] = None
    media: Optional[MediaDescriptor] = None


class PagesResponse(BaseModel):
    success: bool = True
    pages: List[PageItem]


class UploadResponse(BaseModel):
    success: bool = True
    pageId: str
    message: Optional[str] = None


class AddUrlRequest(BaseModel):
    title: str
    url: Optional[str] = None
    caption: Optional[str] = None


class DeleteResponse(BaseModel):
    success: bool = True
    message: str


class DebugBlocksResponse(BaseModel):
    success: bool = True
    blocks: List[Any]


class HealthResponse(BaseModel):
    status: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None
    details: Optional[Any] = None
