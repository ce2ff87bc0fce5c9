# inventory_sdk/db/session.py
import contextlib
import contextvars
import logging
from typing import AsyncGenerator, Optional, Dict, Any

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool, NullPool
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

_db_engine: Optional[AsyncEngine] = None
_db_session_maker: Optional[async_sessionmaker[AsyncSession]] = None

# Сессия текущего запроса; устанавливается DBSessionMiddleware
_current_session: contextvars.ContextVar[Optional[AsyncSession]] = (
    contextvars.ContextVar("current_session", default=None)
)


def init_db(
    database_url: str,
    engine_options: Optional[Dict[str, Any]] = None,
    echo: bool = False,
):
    global _db_engine, _db_session_maker
    if _db_engine:
        logger.warning(
            "Database engine and session maker already initialized. Skipping re-initialization."
        )
        return

    logger.info(
        f"Initializing database engine for URL: {database_url[: database_url.find('@') + 1]}********"
    )

    options_to_pass = engine_options.copy() if engine_options else {}

    # SQLite и StaticPool/NullPool не принимают параметры размера пула
    pool_class_in_options = options_to_pass.get("poolclass")
    if database_url.startswith("sqlite") or pool_class_in_options in (StaticPool, NullPool):
        for key in ("pool_size", "max_overflow", "pool_recycle"):
            options_to_pass.pop(key, None)
        logger.debug("Removed pool sizing options incompatible with the selected pool/dialect.")

    try:
        _db_engine = create_async_engine(database_url, echo=echo, **options_to_pass)
        _db_session_maker = async_sessionmaker(
            bind=_db_engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("Database engine and session maker initialized successfully.")
    except Exception as e:
        logger.critical(
            "Failed to initialize database engine or session maker.", exc_info=True
        )
        raise RuntimeError("Failed to initialize database infrastructure") from e


async def close_db():
    global _db_engine, _db_session_maker
    if _db_engine is None:
        logger.info("Database engine was not initialized or already disposed.")
        return
    logger.info("Disposing database engine...")
    try:
        await _db_engine.dispose()
        logger.info("Database engine disposed successfully.")
    finally:
        _db_engine = None
        _db_session_maker = None


@contextlib.asynccontextmanager
async def managed_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Открывает сессию и кладет ее в contextvar.
    Если сессия в контексте уже есть, переиспользует ее.
    """
    if _db_session_maker is None:
        logger.error("Session maker not initialized. Call init_db() first.")
        raise RuntimeError("Session maker not initialized. Call init_db() first.")

    existing_session = _current_session.get()
    if existing_session is not None:
        logger.debug(f"managed_session: Reusing existing session {id(existing_session)}.")
        yield existing_session
        return

    session = _db_session_maker()
    token = _current_session.set(session)
    session_id_for_log = id(session)
    logger.debug(f"managed_session: Opened session {session_id_for_log}.")

    try:
        yield session
    except Exception:
        logger.exception(
            f"managed_session: Exception within session {session_id_for_log}. Rolling back."
        )
        await session.rollback()
        raise
    finally:
        await session.close()
        _current_session.reset(token)
        logger.debug(f"managed_session: Closed session {session_id_for_log}.")


def get_current_session() -> AsyncSession:
    session = _current_session.get()
    if session is None:
        logger.error("Attempted to get current session, but no active session found in context.")
        raise RuntimeError(
            "No active session found in context. Ensure this code is called within "
            "an 'async with managed_session():' block."
        )
    return session


async def create_db_and_tables():
    if _db_engine is None:
        raise RuntimeError("Database engine not initialized. Call init_db() first.")

    logger.info("Creating database tables from SQLModel.metadata...")
    async with _db_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables checked/created successfully.")
