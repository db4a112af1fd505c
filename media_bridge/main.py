import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging_config import setup_logging
from .models import HealthResponse
from .routers import media, pages

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="Notion Media Bridge")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

app.include_router(media.router)
app.include_router(pages.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = {"error": exc.detail}
    code = getattr(exc, "code", None)
    if code:
        body["code"] = code
    details = getattr(exc, "details", None)
    if details is not None:
        body["details"] = details
    return JSONResponse(
        jsonable_encoder(body),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        status_code=400,
    )


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok", message="Server is running")


logger.info(f"Notion database: {settings.notion_database_id or '<unset>'}")
