import mimetypes
from pathlib import Path
from typing import Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from ..config import MiB
from ..models import PageItem

Tab = Literal["image", "video", "url"]
ServerStatus = Literal["checking", "connected", "error", "offline"]
MessageKind = Literal["", "success", "error"]

NOT_CONNECTED = "Backend server is not running. Please start the server first."


class SelectedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path, content_type: Optional[str] = None) -> "SelectedFile":
        path = Path(path)
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, content_type=content_type, data=path.read_bytes())


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: MessageKind = ""
    text: str = ""


class UploaderState(BaseModel):
    """Everything the upload form and gallery display. Never mutated in place."""

    model_config = ConfigDict(frozen=True)

    active_tab: Tab = "image"
    title: str = ""
    caption: str = ""
    url: str = ""
    external_url: str = ""
    use_external_url: bool = False
    selected_file: Optional[SelectedFile] = None
    server_status: ServerStatus = "checking"
    message: Message = Message()
    uploading: bool = False
    entries: Tuple[PageItem, ...] = ()
    loading_entries: bool = False
    gallery_open: bool = False

    @property
    def connected(self) -> bool:
        return self.server_status == "connected"


def edit(state: UploaderState, **fields) -> UploaderState:
    return state.model_copy(update=fields)


def with_message(state: UploaderState, kind: MessageKind, text: str) -> UploaderState:
    return edit(state, message=Message(kind=kind, text=text))


def clear_message(state: UploaderState) -> UploaderState:
    return edit(state, message=Message())


def switch_tab(state: UploaderState, tab: Tab) -> UploaderState:
    return edit(state, active_tab=tab, selected_file=None, url="", message=Message())


def use_file_mode(state: UploaderState) -> UploaderState:
    return edit(state, use_external_url=False, external_url="")


def use_url_mode(state: UploaderState) -> UploaderState:
    return edit(state, use_external_url=True, selected_file=None)


def health_checked(state: UploaderState, status: ServerStatus) -> UploaderState:
    return edit(state, server_status=status)


def select_file(
    state: UploaderState, file: SelectedFile, max_size: int = 20 * MiB
) -> UploaderState:
    """Accept ``file`` for the active tab, or keep the old selection and report why not."""
    if state.active_tab == "image" and not file.content_type.startswith("image/"):
        return with_message(state, "error", "Please select an image file (JPEG, PNG, GIF)")
    if state.active_tab == "video" and not file.content_type.startswith("video/"):
        return with_message(state, "error", "Please select a video file")
    if file.size > max_size:
        return with_message(
            state,
            "error",
            f"File size exceeds {max_size // MiB}MB. Please use a smaller file.",
        )
    return clear_message(edit(state, selected_file=file))


def upload_problem(state: UploaderState) -> Optional[str]:
    if not state.connected:
        return NOT_CONNECTED
    if state.use_external_url and not state.external_url:
        return "Please enter an external URL"
    if not state.use_external_url and state.selected_file is None:
        return "Please select a file to upload or use an external URL"
    if not state.title:
        return "Please enter a title for the page"
    return None


def url_entry_problem(state: UploaderState) -> Optional[str]:
    if not state.connected:
        return NOT_CONNECTED
    if not state.url:
        return "Please enter a URL"
    if not state.title:
        return "Please enter a title for the page"
    return None


def submission_started(state: UploaderState) -> UploaderState:
    return clear_message(edit(state, uploading=True))


def upload_succeeded(state: UploaderState) -> UploaderState:
    label = "Video" if state.active_tab == "video" else "Image"
    state = edit(
        state,
        uploading=False,
        selected_file=None,
        external_url="",
        caption="",
        title="",
    )
    return with_message(state, "success", f"{label} uploaded successfully to Notion database!")


def url_entry_succeeded(state: UploaderState) -> UploaderState:
    state = edit(state, uploading=False, url="", caption="", title="")
    return with_message(state, "success", "URL content added successfully to Notion database!")


def submission_failed(state: UploaderState, text: str) -> UploaderState:
    return with_message(edit(state, uploading=False), "error", text)


def entries_loaded(state: UploaderState, entries) -> UploaderState:
    entries = tuple(entries)
    state = edit(state, entries=entries, gallery_open=True, loading_entries=False)
    return with_message(state, "success", f"Loaded {len(entries)} pages from Notion")


def entries_failed(state: UploaderState, error: str) -> UploaderState:
    state = edit(state, loading_entries=False)
    return with_message(state, "error", f"Failed to fetch pages: {error}")
