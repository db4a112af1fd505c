from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict

from ..models import MediaDescriptor, PageItem

KIND_LABELS = {"image": "Image", "video": "Video", "bookmark": "Link"}


def delete_prompt(title: str) -> str:
    return f'Are you sure you want to delete "{title}"?'


class GalleryItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    created_time: Optional[str] = None
    media: Optional[MediaDescriptor] = None

    @property
    def kind_label(self) -> str:
        if self.media is None:
            return "No media"
        return KIND_LABELS[self.media.type]

    @property
    def preview_url(self) -> Optional[str]:
        # Only images and videos can be previewed inline; bookmarks are links.
        if self.media is None or self.media.type == "bookmark":
            return None
        return self.media.url

    @property
    def link_url(self) -> Optional[str]:
        return self.media.url if self.media is not None else None

    @property
    def caption(self) -> str:
        return self.media.caption if self.media is not None else ""


def build_gallery(entries: Iterable[PageItem]) -> List[GalleryItem]:
    return [
        GalleryItem(
            id=entry.id,
            title=entry.title,
            created_time=entry.createdTime,
            media=entry.media,
        )
        for entry in entries
    ]
