"""
Relational tracking store using SQLAlchemy's async engine.

Every mutation runs in a single transaction, so the delete and insert phases
of a reconcile commit or roll back together.
"""

import logging
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy import delete, event, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from pr_reactor.errors import TrackingStoreError
from pr_reactor.models.tracking import Insertion, PullRequestUrl, Retraction, TrackingRecord
from pr_reactor.tracking.base import TrackingStore, has_work
from pr_reactor.tracking.tables import Base, PullRequestRow

logger = logging.getLogger(__name__)


def to_async_url(database_url: str) -> str:
    """Convert sync SQLite URLs to their aiosqlite equivalent."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def create_engine_for(database_url: str) -> AsyncEngine:
    """Create an async engine, preparing SQLite files and pragmas when needed."""
    db_url = to_async_url(database_url)
    if "sqlite" not in db_url:
        return create_async_engine(db_url, echo=False, pool_pre_ping=True)

    if ":memory:" in db_url:
        # One shared connection, otherwise every connection sees an empty database.
        engine = create_async_engine(
            db_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        Path(db_url.split("///")[-1]).parent.mkdir(parents=True, exist_ok=True)
        engine = create_async_engine(
            db_url,
            echo=False,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


class SqlTrackingStore(TrackingStore):
    """Tracking store persisted in a relational database."""

    def __init__(self, database_url: str | None = None, *, engine: AsyncEngine | None = None):
        if engine is None:
            if database_url is None:
                raise ValueError("Either database_url or engine is required")
            engine = create_engine_for(database_url)
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init(self) -> None:
        """Create the tracking table if it does not exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tracking database initialized")

    async def list_all(self) -> list[TrackingRecord]:
        return await self._select(select(PullRequestRow).order_by(PullRequestRow.inserted_at))

    async def find_by_url(self, url: PullRequestUrl) -> list[TrackingRecord]:
        return await self._select(
            select(PullRequestRow)
            .where(PullRequestRow.url == url)
            .order_by(PullRequestRow.inserted_at)
        )

    async def reconcile(
        self,
        retraction: Retraction | None = None,
        insertion: Insertion | None = None,
    ) -> None:
        if not has_work(retraction, insertion):
            return

        try:
            async with self._session_factory() as session, session.begin():
                if retraction is not None and not retraction.is_empty:
                    await session.execute(
                        delete(PullRequestRow).where(
                            PullRequestRow.channel == retraction.location.channel,
                            PullRequestRow.timestamp == retraction.location.timestamp,
                            PullRequestRow.url.in_(set(retraction.urls)),
                        )
                    )
                if insertion is not None and not insertion.is_empty:
                    session.add_all(
                        PullRequestRow.from_record(record) for record in insertion.to_records()
                    )
                    await session.flush()
        except (SQLAlchemyError, ValidationError) as exc:
            logger.error("Tracking store transaction rolled back: %s", exc)
            raise TrackingStoreError("Failed to update tracking records") from exc

    async def health_check(self) -> bool:
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.warning("Tracking database health check failed", exc_info=True)
            return False

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Tracking database connections closed")

    async def _select(self, stmt) -> list[TrackingRecord]:
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [row.to_record() for row in result.scalars().all()]
