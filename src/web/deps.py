"""Dependency injection for FastAPI routes."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, timedelta
from functools import lru_cache

import structlog

from core.config import load_config_model
from core.config_models import MoodFlowConfig
from mood.adapter import RecordStoreAdapter
from mood.identity import IdentityBackend
from mood.store import RecordStore, SQLiteRecordStore

logger = structlog.get_logger()


@lru_cache
def get_config() -> MoodFlowConfig:
    """Load shared config from config.yaml (or defaults)."""
    return load_config_model()


@lru_cache
def get_record_store() -> RecordStore:
    config = get_config()
    return SQLiteRecordStore(config.paths.db_path)


@lru_cache
def get_identity_backend() -> IdentityBackend:
    config = get_config()
    if not config.auth.jwt_secret:
        logger.critical("auth.jwt_secret not configured")
        raise RuntimeError("MOODFLOW_JWT_SECRET (or auth.jwt_secret) required")
    return IdentityBackend(
        config.paths.db_path,
        config.auth.jwt_secret,
        algorithm=config.auth.algorithm,
        token_ttl=timedelta(minutes=config.auth.token_ttl_minutes),
        min_password_length=config.auth.min_password_length,
    )


def get_today() -> date:
    """Local calendar date used for validation and windows."""
    return date.today()


@contextmanager
def open_journal(store: RecordStore, user_id: str) -> Iterator[RecordStoreAdapter]:
    """Subscribe an adapter to a user's records for the span of one request."""
    adapter = RecordStoreAdapter(store)
    adapter.start(user_id)
    try:
        yield adapter
    finally:
        adapter.stop()
