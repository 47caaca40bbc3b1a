"""Engine and session handling for the SQL user store."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from photo_accounts.core.config import Settings, settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseManager:
    """Owns the async engine backing the users table."""

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def init(self, database_url: str, echo: bool = False, pool_size: int = 5) -> None:
        """
        Create the engine and session factory.

        Args:
            database_url: Async SQLAlchemy URL, already carrying its driver
            echo: Log every statement
            pool_size: Pooled connections, 0 opens a connection per checkout
        """
        if self.is_initialized:
            return

        if pool_size == 0:
            pool_options = {"poolclass": NullPool}
        else:
            pool_options = {"pool_size": pool_size, "pool_pre_ping": True}

        self._engine = create_async_engine(database_url, echo=echo, **pool_options)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"User database engine created for {self._engine.url.render_as_string(hide_password=True)}")

    def init_from_settings(self, config: Settings = settings) -> None:
        self.init(
            database_url=config.database_url_computed,
            echo=config.DB_ECHO,
            pool_size=config.DB_POOL_SIZE,
        )

    async def create_schema(self) -> None:
        """Create the users table and its indexes if they are missing."""
        if not self.is_initialized:
            raise RuntimeError("Database not initialized")
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """Yield one session; commit when the block exits cleanly, roll back otherwise."""
        if not self.is_initialized:
            raise RuntimeError("Database not initialized")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        if not self.is_initialized:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"User database is unreachable: {e}")
            return False

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


db_manager = DatabaseManager()
