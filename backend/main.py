"""GameScope FastAPI application."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI

from backend.config import settings

# Configure logging so our INFO messages appear in container logs
logging.basicConfig(
    level=logging.getLevelName(settings.log_level.upper()),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Keep noisy libraries at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
from fastapi.middleware.cors import CORSMiddleware

from backend.catalog import close_catalog, init_catalog
from backend.routers import games, youtube

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    await init_catalog(app, settings)
    yield
    await close_catalog(app)


app = FastAPI(
    title="GameScope",
    description="Game discovery backed by the RAWG catalog",
    version=VERSION,
    lifespan=lifespan,
)

# CORS: localhost defaults plus any extra origins from GAMESCOPE_CORS_ORIGINS
_cors_origins = ["http://localhost:3000", "http://localhost:8080"]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
    expose_headers=["X-Search-Query", "X-Search-Strategy", "X-Results-Found"],
)

app.include_router(games.router)
app.include_router(youtube.router)


@app.get("/api/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION,
    }
