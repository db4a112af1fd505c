import logging
from typing import Callable, List, Optional

import requests

from ..config import ClientSettings
from ..models import PagesResponse
from . import state as transitions
from .endpoint import resolve_backend_url
from .gallery import GalleryItem, build_gallery, delete_prompt
from .state import SelectedFile, UploaderState

logger = logging.getLogger(__name__)


class BridgeRequestError(Exception):
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class UploaderController:
    """
    Drives the upload form against the bridge.

    Every user action maps to a method here. Network calls go through
    ``session`` (a ``requests.Session`` unless one is given); results are
    folded into ``state`` with the pure transitions from ``state.py``.
    Expected failures end up in ``state.message``, never as exceptions.
    """

    def __init__(
        self,
        backend_url: Optional[str] = None,
        session=None,
        settings: Optional[ClientSettings] = None,
        page_url: Optional[str] = None,
        probe: bool = True,
    ):
        self.settings = settings or ClientSettings()
        self.backend_url = backend_url or resolve_backend_url(
            self.settings.backend_url, page_url
        )
        self.session = session if session is not None else requests.Session()
        self.state = UploaderState()
        if probe:
            self.check_health()

    @property
    def gallery(self) -> List[GalleryItem]:
        return build_gallery(self.state.entries)

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> dict:
        response = self.session.request(
            method,
            f"{self.backend_url}{path}",
            timeout=self.settings.request_timeout,
            **kwargs,
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not 200 <= response.status_code < 300:
            raise BridgeRequestError(data.get("error") or fallback, code=data.get("code"))
        return data

    # form fields

    def set_title(self, title: str):
        self.state = transitions.edit(self.state, title=title)

    def set_caption(self, caption: str):
        self.state = transitions.edit(self.state, caption=caption)

    def set_url(self, url: str):
        self.state = transitions.edit(self.state, url=url)

    def set_external_url(self, external_url: str):
        self.state = transitions.edit(self.state, external_url=external_url)

    def switch_tab(self, tab: str):
        self.state = transitions.switch_tab(self.state, tab)

    def use_file_mode(self):
        self.state = transitions.use_file_mode(self.state)

    def use_url_mode(self):
        self.state = transitions.use_url_mode(self.state)

    # actions

    def check_health(self) -> str:
        url = f"{self.backend_url}/api/health"
        logger.info(f"Checking server health at: {url}")
        self.state = transitions.health_checked(self.state, "checking")
        try:
            response = self.session.request("GET", url, timeout=self.settings.request_timeout)
        except requests.RequestException as e:
            logger.error(f"Failed to connect to backend: {e}")
            status = "offline"
        else:
            if 200 <= response.status_code < 300:
                status = "connected"
            else:
                logger.error(f"Backend returned error: {response.status_code}")
                status = "error"
        self.state = transitions.health_checked(self.state, status)
        return status

    def select_file(self, file: SelectedFile) -> bool:
        self.state = transitions.select_file(self.state, file, self.settings.max_file_size)
        return self.state.message.kind != "error"

    def select_path(self, path, content_type: Optional[str] = None) -> bool:
        return self.select_file(SelectedFile.from_path(path, content_type))

    def submit_upload(self) -> bool:
        problem = transitions.upload_problem(self.state)
        if problem:
            self.state = transitions.with_message(self.state, "error", problem)
            return False

        current = self.state
        self.state = transitions.submission_started(current)

        form = {"title": current.title, "caption": current.caption, "type": current.active_tab}
        files = None
        if current.use_external_url:
            form["externalUrl"] = current.external_url
        else:
            selected = current.selected_file
            files = {"file": (selected.name, selected.data, selected.content_type)}

        try:
            self._request(
                "POST", "/api/upload", "Failed to upload to Notion", data=form, files=files
            )
        except (BridgeRequestError, requests.RequestException) as e:
            logger.error(f"Upload error: {e}")
            self.state = transitions.submission_failed(self.state, f"Upload failed: {e}")
            return False

        self.state = transitions.upload_succeeded(self.state)
        if self.state.gallery_open:
            self.load_entries()
        return True

    def submit_url_entry(self) -> bool:
        problem = transitions.url_entry_problem(self.state)
        if problem:
            self.state = transitions.with_message(self.state, "error", problem)
            return False

        current = self.state
        self.state = transitions.submission_started(current)
        payload = {"title": current.title, "url": current.url, "caption": current.caption}

        try:
            self._request("POST", "/api/add-url", "Failed to add URL to Notion", json=payload)
        except (BridgeRequestError, requests.RequestException) as e:
            logger.error(f"URL add error: {e}")
            self.state = transitions.submission_failed(self.state, f"Failed to add URL: {e}")
            return False

        self.state = transitions.url_entry_succeeded(self.state)
        if self.state.gallery_open:
            self.load_entries()
        return True

    def load_entries(self) -> bool:
        if not self.state.connected:
            self.state = transitions.with_message(self.state, "error", transitions.NOT_CONNECTED)
            return False

        self.state = transitions.edit(self.state, loading_entries=True)
        try:
            data = self._request("GET", "/api/pages", "Failed to fetch pages")
            pages = PagesResponse.model_validate(data).pages
        except (BridgeRequestError, requests.RequestException, ValueError) as e:
            logger.error(f"Fetch pages error: {e}")
            self.state = transitions.entries_failed(self.state, str(e))
            return False

        self.state = transitions.entries_loaded(self.state, pages)
        return True

    def delete_entry(self, page_id: str, title: str, confirm: Callable[[str], bool]) -> bool:
        if not confirm(delete_prompt(title)):
            return False
        if not self.state.connected:
            self.state = transitions.with_message(self.state, "error", transitions.NOT_CONNECTED)
            return False

        try:
            self._request("DELETE", f"/api/pages/{page_id}", "Failed to delete page")
        except (BridgeRequestError, requests.RequestException) as e:
            logger.error(f"Delete error: {e}")
            self.state = transitions.with_message(self.state, "error", f"Failed to delete: {e}")
            return False

        self.state = transitions.with_message(
            self.state, "success", f'"{title}" deleted successfully'
        )
        self.load_entries()
        return True
