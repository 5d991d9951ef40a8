"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.logging_config import setup_logging
from web.deps import get_config, get_identity_backend, get_record_store
from web.routes import auth, export, moods, preferences, views

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(json_mode=config.logging.json_mode, level=config.logging.level)
    # Fail fast on a missing JWT secret or unwritable database
    get_identity_backend()
    get_record_store()
    logger.info("web.startup", db_path=str(config.paths.db_path))
    yield
    logger.info("web.shutdown")


app = FastAPI(
    title="MoodFlow",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS: allow frontend origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_config().web.frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(moods.router)
app.include_router(views.router)
app.include_router(export.router)
app.include_router(preferences.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
