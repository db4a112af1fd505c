from typing import Optional
from urllib.parse import urlsplit

DEFAULT_BACKEND_URL = "http://localhost:3001"


def resolve_backend_url(override: Optional[str] = None, page_url: Optional[str] = None) -> str:
    """
    Work out where the bridge lives.

    An explicit override wins. When the form is served from a GitHub
    Codespaces forwarded port (``<name>-3000.app.github.dev``) the bridge is
    the sibling forward on port 3001. Anything else falls back to localhost.
    """
    if override:
        return override.rstrip("/")

    if page_url:
        parts = urlsplit(page_url)
        hostname = parts.hostname or ""
        if "github.dev" in hostname:
            scheme = parts.scheme or "https"
            return f"{scheme}://{hostname.replace('-3000.', '-3001.')}"

    return DEFAULT_BACKEND_URL
