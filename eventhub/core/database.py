"""
Async database manager for PostgreSQL with SQLAlchemy
- Explicitly constructed handle, owned by the application lifespan
- Table creation on startup
- Session scope with guaranteed commit/rollback
"""
from importlib import import_module
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Iterable, Optional
import logging
from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine
)
from sqlalchemy.pool import StaticPool
from eventhub.models.base import Base

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """Manages async database sessions for one database URL."""

    def __init__(self, database_url: str, models: Iterable[str] = (), echo: bool = False):
        self.database_url = database_url
        self.models = list(models)
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def _engine_kwargs(self) -> dict:
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite":
            # in-memory SQLite must share one connection across sessions
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {
            "pool_size": 15,
            "max_overflow": 5,
            "pool_timeout": 30,
            "pool_recycle": 300,
            "pool_pre_ping": True,
        }

    async def init(self, create_tables: bool = True):
        """Create the engine and session factory, then the schema."""
        try:
            self.engine = create_async_engine(
                self.database_url,
                echo=self.echo,
                **self._engine_kwargs()
            )
            if create_tables:
                async with self.engine.begin() as conn:
                    await self._setup_database(conn)

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False
            )
        except Exception as e:
            logger.error(f"❌ Database initialization failed: {e}")
            raise

    async def _setup_database(self, conn):
        """Initialize database schema"""
        await conn.execute(text("SELECT 1"))
        for model in self.models:
            import_module(model)

        logger.info(f"📝 Models registered: {list(Base.metadata.tables.keys())}")
        await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for safe session handling"""
        if not self.session_factory:
            raise RuntimeError("DatabaseSessionManager not initialized")
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """Return True when the database answers a trivial query."""
        async with self.get_session() as session:
            await session.execute(text("SELECT 1"))
        return True

    async def close(self):
        """Cleanup connection pool"""
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None


async def aget_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions
    Usage:
    @router.get("/")
    async def endpoint(db: AsyncSession = Depends(aget_db)):
        ...
    """
    session_manager: DatabaseSessionManager = request.app.state.session_manager
    async with session_manager.get_session() as session:
        yield session
