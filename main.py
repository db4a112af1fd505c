import uvicorn

from media_bridge.config import settings
from media_bridge.main import app  # noqa: F401

if __name__ == "__main__":
    uvicorn.run("media_bridge.main:app", host=settings.host, port=settings.port)
