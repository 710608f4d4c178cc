"""
Database wiring: the ``faqs`` table definition and a pooled engine.

The engine is created lazily and reused across warm Lambda invocations.
When neither DATABASE_URL nor DB_SECRET_ARN is set, ``get_db_engine``
returns None and callers fall back to the in-memory store.
"""

from __future__ import annotations

import json
from typing import Optional

import boto3
from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.engine import Engine

from config.settings import Settings
from utils.logging_config import get_logger

logger = get_logger(__name__)

metadata = MetaData()

# Native text[] on PostgreSQL, JSON elsewhere (SQLite in tests).
TagList = JSON().with_variant(postgresql.ARRAY(Text), "postgresql")

faqs_table = Table(
    "faqs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("question", Text, nullable=False),
    Column("answer", Text, nullable=False),
    Column("tags", TagList, nullable=False, default=list),
    Column("lang", String(2), nullable=False, server_default="en"),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

# Connection pooling for Lambda reuse.
_engine: Optional[Engine] = None


def get_db_engine(settings: Optional[Settings] = None) -> Optional[Engine]:
    """Get or create the SQLAlchemy engine, or None when no DB is configured."""
    global _engine
    if _engine is None:
        settings = settings or Settings.from_environment()
        db_url = settings.database_url
        if not db_url and settings.db_secret_arn:
            db_url = _secret_to_db_url(settings.db_secret_arn)
        if not db_url:
            logger.warning("DATABASE_URL not set; DB calls will be skipped")
            return None
        _engine = create_engine(db_url, **_engine_options(db_url, settings))
    return _engine


def _engine_options(db_url: str, settings: Settings) -> dict:
    options = {"echo": settings.sql_echo, "pool_pre_ping": True}
    if not db_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=300,
        )
    return options


def _secret_to_db_url(secret_arn: str) -> str:
    """Build a SQLAlchemy URL from an RDS secret."""
    sm = boto3.client("secretsmanager")
    try:
        secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    except Exception:
        logger.exception("Failed to load DB secret", extra={"secret_arn": secret_arn})
        raise

    host = secret.get("host")
    username = secret.get("username")
    password = secret.get("password")
    if not (host and username and password):
        raise ValueError(f"DB secret {secret_arn} is missing host/username/password")
    port = secret.get("port", 5432)
    dbname = secret.get("dbname", "postgres")
    return f"postgresql+psycopg2://{username}:{password}@{host}:{port}/{dbname}"


def reset_engine() -> None:
    """Dispose the cached engine (tests and the seed script use this)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None
