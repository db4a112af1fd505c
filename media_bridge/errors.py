from typing import Any, Optional

from fastapi import HTTPException
from notion_client.errors import HTTPResponseError

FILE_TOO_LARGE = "FILE_TOO_LARGE"
PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

PAYLOAD_TOO_LARGE_MESSAGE = (
    "File is too large for Notion API. Please upload your file to an external "
    "service (Imgur, Cloudinary, etc.) and use the \"URL Content\" tab to add "
    "the link instead."
)


class BridgeError(HTTPException):
    """HTTPException rendered as ``{error, code?, details?}``."""

    def __init__(
        self,
        status_code: int,
        error: str,
        code: Optional[str] = None,
        details: Any = None,
    ):
        super().__init__(status_code=status_code, detail=error)
        self.code = code
        self.details = details


def from_notion_error(exc: Exception, fallback: str) -> BridgeError:
    """Map a Notion client failure onto the bridge's error codes."""
    if isinstance(exc, HTTPResponseError):
        if exc.status == 413 or exc.code == "request_entity_too_large":
            return BridgeError(413, PAYLOAD_TOO_LARGE_MESSAGE, code=PAYLOAD_TOO_LARGE)
        return BridgeError(500, str(exc) or fallback, details=exc.body)
    return BridgeError(500, str(exc) or fallback)
