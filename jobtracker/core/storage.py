"""Database connection and application storage backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobtracker.core.config import settings
from jobtracker.core.exceptions import StorageError
from jobtracker.schemas.application import JobApplication

logger = logging.getLogger(__name__)

engine: AsyncEngine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


async def init_models(target: AsyncEngine | None = None) -> None:
    """Create tables for all models."""
    import jobtracker.models  # noqa: F401

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class ApplicationRepository(ABC):
    """Persistence collaborator for application aggregates.

    Every method is a single atomic round trip. Failures surface as
    :class:`StorageError`.
    """

    @abstractmethod
    async def load_applications(self, owner_id: str) -> list[JobApplication]:
        """Return all applications owned by ``owner_id``."""
        pass

    @abstractmethod
    async def get_application(self, application_id: str) -> JobApplication | None:
        """Return one application, or None if it does not exist."""
        pass

    @abstractmethod
    async def save_application(self, app: JobApplication) -> JobApplication:
        """Insert or replace ``app`` and return what was stored."""
        pass

    @abstractmethod
    async def delete_application(self, application_id: str) -> bool:
        """Delete an application; True if something was removed."""
        pass


class SQLApplicationRepository(ApplicationRepository):
    """Repository backed by the SQLAlchemy async session."""

    def __init__(self, session_factory: Callable[[], AsyncSession] = async_session):
        self._session_factory = session_factory

    async def load_applications(self, owner_id: str) -> list[JobApplication]:
        from jobtracker.models.application import ApplicationRecord

        try:
            async with self._session_factory() as session:
                query = (
                    select(ApplicationRecord)
                    .where(ApplicationRecord.user_id == owner_id)
                    .order_by(
                        ApplicationRecord.last_updated.desc(), ApplicationRecord.id
                    )
                )
                result = await session.execute(query)
                return [record.to_domain() for record in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load applications for {owner_id}: {e}")
            raise StorageError("load", str(e)) from e

    async def get_application(self, application_id: str) -> JobApplication | None:
        from jobtracker.models.application import ApplicationRecord

        try:
            async with self._session_factory() as session:
                record = await session.get(ApplicationRecord, application_id)
                return record.to_domain() if record else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load application {application_id}: {e}")
            raise StorageError("get", str(e)) from e

    async def save_application(self, app: JobApplication) -> JobApplication:
        from jobtracker.models.application import ApplicationRecord

        try:
            async with self._session_factory() as session:
                record = await session.get(ApplicationRecord, app.id)
                if record is None:
                    session.add(ApplicationRecord.from_domain(app))
                else:
                    record.update_from(app)
                await session.commit()
                return app
        except SQLAlchemyError as e:
            logger.error(f"Failed to save application {app.id}: {e}")
            raise StorageError("save", str(e)) from e

    async def delete_application(self, application_id: str) -> bool:
        from jobtracker.models.application import ApplicationRecord

        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(ApplicationRecord).where(
                        ApplicationRecord.id == application_id
                    )
                )
                await session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete application {application_id}: {e}")
            raise StorageError("delete", str(e)) from e


class InMemoryApplicationRepository(ApplicationRepository):
    """Local snapshot store; keeps deep copies so callers cannot alias state."""

    def __init__(self, applications: list[JobApplication] | None = None):
        self._snapshots: dict[str, JobApplication] = {}
        for app in applications or []:
            self._snapshots[app.id] = app.model_copy(deep=True)

    async def load_applications(self, owner_id: str) -> list[JobApplication]:
        return [
            app.model_copy(deep=True)
            for app in self._snapshots.values()
            if app.user_id == owner_id
        ]

    async def get_application(self, application_id: str) -> JobApplication | None:
        app = self._snapshots.get(application_id)
        return app.model_copy(deep=True) if app else None

    async def save_application(self, app: JobApplication) -> JobApplication:
        self._snapshots[app.id] = app.model_copy(deep=True)
        return app

    async def delete_application(self, application_id: str) -> bool:
        return self._snapshots.pop(application_id, None) is not None


_repository: ApplicationRepository | None = None


def get_repository() -> ApplicationRepository:
    """Get or create the repository selected by ``settings.storage_backend``."""
    global _repository
    if _repository is None:
        if settings.storage_backend == "memory":
            _repository = InMemoryApplicationRepository()
        else:
            _repository = SQLApplicationRepository()
        logger.info(f"Using {settings.storage_backend} application storage")
    return _repository
