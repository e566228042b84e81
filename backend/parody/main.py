"""Parody backend - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from parody.config import get_settings
from parody.routers import parody, roast
from parody.services.pipeline import get_preview_store

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown."""
    logger.info("Starting parody backend...")

    try:
        store = await get_preview_store()
        removed = await store.cleanup_expired()
        logger.info(f"Preview store ready ({type(store).__name__}, {removed} expired removed)")
    except Exception as e:
        logger.warning(f"Preview store initialization failed (previews may be unavailable): {e}")

    yield

    logger.info("Parody backend shutdown complete")


app = FastAPI(
    title="Parody Backend",
    description="Turns any website into a themed parody, and roasts developer portfolios",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in get_settings().cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(parody.router)
app.include_router(roast.router)


@app.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint for monitoring.

    Reports which optional collaborators are configured:
    - rewriter: Claude text rewriting (required for parodies and roasts)
    - images: OpenAI image restyling
    - narration: ElevenLabs text-to-speech
    - browser: Browserless rendering (otherwise raw HTML fetches only)
    """
    settings = get_settings()
    services = {
        "rewriter": bool(settings.anthropic_api_key),
        "images": bool(settings.openai_api_key),
        "narration": bool(settings.elevenlabs_api_key),
        "browser": bool(settings.browserless_api_key),
    }
    health = {
        "status": "healthy" if services["rewriter"] else "degraded",
        "preview_store": settings.preview_store,
        "services": {
            name: {"status": "configured" if ok else "not configured"}
            for name, ok in services.items()
        },
    }
    return health
