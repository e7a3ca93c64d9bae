"""
Store client: async engine, sessions and connection state tracking.
"""

import asyncio
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncGenerator, Optional

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from translator_server.config.config import DatabaseConfig
from translator_server.utils.exceptions import DatabaseError
from translator_server.utils.logging import database_logger as logger


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


def _is_connection_failure(exc: BaseException) -> bool:
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, (OperationalError, InterfaceError, OSError))


class DatabaseManager:
    """Owns the engine and session factory for one store."""

    def __init__(self, database_config: DatabaseConfig):
        self.database_config = database_config
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._state = ConnectionState.DISCONNECTED
        self._schema_ready = False
        # Created on first use so it belongs to the serving loop.
        self._schema_lock: Optional[asyncio.Lock] = None

    def _create_engine(self) -> AsyncEngine:
        options = {
            "echo": self.database_config.echo,
            "pool_pre_ping": True
        }
        if not self.database_config.is_sqlite:
            options["pool_size"] = self.database_config.pool_size
            options["max_overflow"] = self.database_config.max_overflow
        return create_async_engine(self.database_config.async_url, **options)

    async def connect(self):
        """Build the engine, open a connection and create missing tables.

        Raises DatabaseError on failure. The engine is kept so that later
        sessions can succeed once the store becomes reachable.
        """
        self._state = ConnectionState.CONNECTING
        try:
            if self._engine is None:
                self._engine = self._create_engine()
                self._session_factory = async_sessionmaker(
                    bind=self._engine,
                    class_=AsyncSession,
                    expire_on_commit=False
                )
            await self._create_schema()
        except Exception as e:
            self._state = ConnectionState.DISCONNECTED
            raise DatabaseError.from_exception(e, operation="connect") from e

        self._state = ConnectionState.CONNECTED
        logger.info("Connected to the store", event="store_connected")

    async def _create_schema(self):
        # Importing the models registers their tables on Base.metadata.
        from translator_server.database import models  # noqa: F401

        if self._schema_lock is None:
            self._schema_lock = asyncio.Lock()
        async with self._schema_lock:
            if self._schema_ready:
                return
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._schema_ready = True

    async def close(self):
        """Dispose the engine and every pooled connection."""
        if self._engine is None:
            self._state = ConnectionState.DISCONNECTED
            return

        self._state = ConnectionState.DISCONNECTING
        try:
            await self._engine.dispose()
            logger.info("Store connection closed", event="store_closed")
        except Exception as e:
            logger.error(f"Error closing store connection: {str(e)}", exc_info=True)
        finally:
            self._engine = None
            self._session_factory = None
            self._schema_ready = False
            self._state = ConnectionState.DISCONNECTED

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; store failures surface as DatabaseError."""
        if not self._session_factory:
            raise DatabaseError("Database not initialized", operation="session")

        if not self._schema_ready:
            try:
                await self._create_schema()
            except Exception as e:
                self._note_failure(e)
                raise DatabaseError.from_exception(e, operation="create_schema") from e

        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                self._note_failure(e)
                raise DatabaseError.from_exception(e) from e
            except DatabaseError as e:
                await session.rollback()
                if e.__cause__ is not None:
                    self._note_failure(e.__cause__)
                raise
            else:
                self._state = ConnectionState.CONNECTED

    def _note_failure(self, exc: BaseException):
        if _is_connection_failure(exc):
            self._state = ConnectionState.DISCONNECTED

    @property
    def connection_state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    @property
    def session_factory(self) -> Optional[async_sessionmaker]:
        return self._session_factory


async def init_database(db_manager: DatabaseManager) -> bool:
    """Connect the store without aborting startup on failure."""
    logger.info("Attempting to connect to the store...", event="store_connecting")
    try:
        await db_manager.connect()
        return True
    except DatabaseError as e:
        logger.error(
            "Store connection error",
            event="store_connection_failed",
            metadata={
                "message": e.message,
                "code": e.code,
                "name": e.name
            }
        )
        return False


async def close_database(db_manager: DatabaseManager):
    """Close the store client."""
    await db_manager.close()
