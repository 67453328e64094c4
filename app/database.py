import logging
import os
import time
from enum import Enum
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from . import config

logger = logging.getLogger(__name__)

# Get environment-specific pool settings
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "20"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "30"))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))
ENABLE_QUERY_LOGGING = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"
SLOW_QUERY_THRESHOLD = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0"))


class DatabaseProvider(str, Enum):
    """Supported database backends"""

    ORACLE = "oracle"
    SQLSERVER = "sqlserver"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"


def parse_provider(value: Optional[str]) -> Optional[DatabaseProvider]:
    """Case-insensitive provider lookup, None when the value is unknown"""
    if not value:
        return None
    try:
        return DatabaseProvider(value.strip().lower())
    except ValueError:
        return None


DEFAULT_PROVIDER = parse_provider(config.DATABASE_PROVIDER) or DatabaseProvider.ORACLE


def get_connection_string(provider: DatabaseProvider) -> str:
    """Resolve the configured SQLAlchemy URL for a provider"""
    connection_strings = {
        DatabaseProvider.ORACLE: config.ORACLE_CONNECTION_STRING,
        DatabaseProvider.SQLSERVER: config.SQLSERVER_CONNECTION_STRING,
        DatabaseProvider.POSTGRESQL: config.POSTGRESQL_CONNECTION_STRING,
        DatabaseProvider.MYSQL: config.MYSQL_CONNECTION_STRING,
    }
    connection_string = connection_strings.get(provider)
    if not connection_string:
        raise ValueError(f"Connection string for provider '{provider.value}' is not configured")
    return connection_string


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # SQLite is only used for local runs and tests
        new_engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        new_engine = create_engine(
            url,
            pool_pre_ping=True,  # Test connections before using
            pool_recycle=POOL_RECYCLE,
            pool_size=POOL_SIZE,
            max_overflow=MAX_OVERFLOW,
            pool_timeout=POOL_TIMEOUT,
            echo=False,  # Don't log all SQL (use slow query logging instead)
        )

    # Slow query logging for performance monitoring
    if ENABLE_QUERY_LOGGING:

        @event.listens_for(new_engine, "before_cursor_execute")
        def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            conn.info.setdefault("query_start_time", []).append(time.time())

        @event.listens_for(new_engine, "after_cursor_execute")
        def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
            total = time.time() - conn.info["query_start_time"].pop(-1)
            if total > SLOW_QUERY_THRESHOLD:
                logger.warning(f"🐌 Slow query ({total:.2f}s): {statement[:200]}...")

    return new_engine


# Configure the default engine
try:
    engine = _create_engine(config.DATABASE_URL or get_connection_string(DEFAULT_PROVIDER))
    logger.info(f"✅ Database engine created successfully (default provider: {DEFAULT_PROVIDER.value})")
    logger.info(
        f"📊 Connection pool: size={POOL_SIZE}, max_overflow={MAX_OVERFLOW}, timeout={POOL_TIMEOUT}s"
    )
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

_session_factories: dict[DatabaseProvider, sessionmaker] = {}


def get_session_factory(provider: Optional[DatabaseProvider] = None) -> sessionmaker:
    """Session factory for a provider; the default provider reuses SessionLocal"""
    if provider is None or provider == DEFAULT_PROVIDER:
        return SessionLocal

    if provider not in _session_factories:
        provider_engine = _create_engine(get_connection_string(provider))
        _session_factories[provider] = sessionmaker(
            autocommit=False, autoflush=False, bind=provider_engine
        )
        logger.info(f"✅ Database engine created for provider {provider.value}")
    return _session_factories[provider]


def get_db(request: Request):
    provider = getattr(request.state, "database_provider", None)
    db = get_session_factory(provider)()
    try:
        yield db
    finally:
        db.close()
