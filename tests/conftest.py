from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient
from notion_client.errors import APIResponseError, HTTPResponseError

from media_bridge.dependencies import get_notion
from media_bridge.main import app


def api_error(status: int, code: str, message: str) -> APIResponseError:
    response = httpx.Response(
        status, json={"object": "error", "status": status, "code": code, "message": message}
    )
    return APIResponseError(response, message, code)


def http_error(status: int, text: str = "") -> HTTPResponseError:
    return HTTPResponseError(httpx.Response(status, text=text))


class FakeNotion:
    """In-memory stand-in for ``notion_client.AsyncClient``."""

    def __init__(self, page_size: int = 100):
        self.page_size = page_size
        self.store = {}
        self.unreadable = set()
        self.create_error = None
        self.query_error = None
        self.calls = []
        self._counter = 0

        self.pages = SimpleNamespace(create=self._create_page, update=self._update_page)
        self.databases = SimpleNamespace(query=self._query)
        self.blocks = SimpleNamespace(children=SimpleNamespace(list=self._list_children))

    def live_pages(self):
        return [page for page in self.store.values() if not page["archived"]]

    def add_page(self, title, children, created_time=None):
        """Seed a page as if it had been written by someone else."""
        self._counter += 1
        page_id = f"page-{self._counter:04d}"
        self.store[page_id] = {
            "object": "page",
            "id": page_id,
            "created_time": created_time or f"2024-01-01T00:{self._counter:02d}:00.000Z",
            "archived": False,
            "properties": {"Name": {"title": [{"type": "text", "text": {"content": title}}]}},
            "children": [
                dict(child, id=f"{page_id}-block-{i}") for i, child in enumerate(children)
            ],
        }
        return page_id

    async def _create_page(self, **kwargs):
        self.calls.append(("pages.create", kwargs))
        if self.create_error is not None:
            raise self.create_error
        self._counter += 1
        page_id = f"page-{self._counter:04d}"
        self.store[page_id] = {
            "object": "page",
            "id": page_id,
            "created_time": f"2024-01-01T00:{self._counter:02d}:00.000Z",
            "archived": False,
            "parent": kwargs["parent"],
            "properties": kwargs["properties"],
            "children": [
                dict(child, id=f"{page_id}-block-{i}")
                for i, child in enumerate(kwargs.get("children", []))
            ],
        }
        return {"object": "page", "id": page_id}

    async def _update_page(self, page_id, **kwargs):
        self.calls.append(("pages.update", dict(kwargs, page_id=page_id)))
        if page_id not in self.store:
            raise api_error(404, "object_not_found", f"Could not find page with ID: {page_id}.")
        if "archived" in kwargs:
            self.store[page_id]["archived"] = kwargs["archived"]
        return {"object": "page", "id": page_id}

    def _paginate(self, items, start_cursor):
        start = int(start_cursor) if start_cursor else 0
        end = start + self.page_size
        has_more = end < len(items)
        return {
            "object": "list",
            "results": items[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }

    async def _query(self, database_id, sorts=None, start_cursor=None, **kwargs):
        self.calls.append(("databases.query", {"database_id": database_id, "sorts": sorts}))
        if self.query_error is not None:
            raise self.query_error
        pages = sorted(self.live_pages(), key=lambda page: page["created_time"], reverse=True)
        results = [{k: v for k, v in page.items() if k != "children"} for page in pages]
        return self._paginate(results, start_cursor)

    async def _list_children(self, block_id, start_cursor=None, **kwargs):
        self.calls.append(("blocks.children.list", {"block_id": block_id}))
        if block_id in self.unreadable:
            raise api_error(502, "service_unavailable", "Notion is unavailable")
        if block_id not in self.store:
            raise api_error(404, "object_not_found", f"Could not find block with ID: {block_id}.")
        return self._paginate(self.store[block_id]["children"], start_cursor)


@pytest.fixture
def fake_notion():
    return FakeNotion()


@pytest.fixture
def client(fake_notion):
    app.dependency_overrides[get_notion] = lambda: fake_notion
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
