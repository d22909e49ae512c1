"""FastAPI application with lifespan, CORS, and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notion_cms.config import get_settings
from notion_cms.logging_config import configure_logging
from notion_cms.site.router import router as pages_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and load config on startup."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    yield


def allowed_origins() -> list[str]:
    """SITE_URL in production (when set), any origin otherwise."""
    settings = get_settings()
    if settings.environment == "production" and settings.site_url:
        return [settings.site_url]
    return ["*"]


app = FastAPI(
    title="Notion CMS",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins(),
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)
app.include_router(pages_router)


@app.get("/health")
async def health():
    """Health check endpoint for the hosting platform and local development."""
    return {
        "status": "ok",
        "service": "notion-cms",
        "version": "0.1.0",
    }
